from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from defect_tracker.db.base import Base
from defect_tracker.db.models._mixins import TimestampMixin

class Project(Base, TimestampMixin):
    __tablename__ = "project"

    id: Mapped[int] = mapped_column(primary_key=True)
    name: Mapped[str] = mapped_column(String(256))

    sites = relationship("ConstructionSite", back_populates="project", order_by="ConstructionSite.name")
