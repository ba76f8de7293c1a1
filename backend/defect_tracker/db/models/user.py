from sqlalchemy import String, Boolean
from sqlalchemy.orm import Mapped, mapped_column
from enum import Enum

from defect_tracker.db.base import Base
from defect_tracker.db.models._mixins import TimestampMixin

class Role(str, Enum):
    manager = "MANAGER"
    engineer = "ENGINEER"
    observer = "OBSERVER"

class User(Base, TimestampMixin):
    __tablename__ = "user"

    id: Mapped[int] = mapped_column(primary_key=True)
    email: Mapped[str] = mapped_column(String(255), unique=True, index=True)
    name: Mapped[str | None] = mapped_column(String(256), nullable=True)
    password_hash: Mapped[str] = mapped_column(String(256))
    # free-form: roles outside Role are stored as-is and treated as read-only
    role: Mapped[str] = mapped_column(String(32), default=Role.engineer.value)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True)
