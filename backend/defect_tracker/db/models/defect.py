import datetime as dt
from enum import Enum

from sqlalchemy import String, Text, ForeignKey, Date
from sqlalchemy.orm import Mapped, mapped_column, relationship

from defect_tracker.db.base import Base
from defect_tracker.db.models._mixins import TimestampMixin


class DefectStatus(str, Enum):
    new = "NEW"
    in_progress = "IN_PROGRESS"
    under_review = "UNDER_REVIEW"
    closed = "CLOSED"
    cancelled = "CANCELLED"


class DefectPriority(str, Enum):
    low = "LOW"
    medium = "MEDIUM"
    high = "HIGH"
    critical = "CRITICAL"


# statuses that no longer count as open work
RESOLVED_STATUSES = (DefectStatus.closed.value, DefectStatus.cancelled.value)


class Defect(Base, TimestampMixin):
    __tablename__ = "defect"

    id: Mapped[int] = mapped_column(primary_key=True)
    site_id: Mapped[int] = mapped_column(ForeignKey("construction_site.id", ondelete="RESTRICT"), index=True)
    creator_id: Mapped[int] = mapped_column(ForeignKey("user.id"), index=True)
    assignee_id: Mapped[int | None] = mapped_column(ForeignKey("user.id", ondelete="SET NULL"), nullable=True, index=True)

    title: Mapped[str] = mapped_column(String(512))
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    status: Mapped[str] = mapped_column(String(32), default=DefectStatus.new.value, index=True)
    priority: Mapped[str] = mapped_column(String(32), default=DefectPriority.medium.value, index=True)
    deadline: Mapped[dt.date | None] = mapped_column(Date, nullable=True)

    site = relationship("ConstructionSite", back_populates="defects")
    creator = relationship("User", foreign_keys=[creator_id])
    assignee = relationship("User", foreign_keys=[assignee_id])
    comments = relationship(
        "Comment",
        back_populates="defect",
        cascade="all, delete-orphan",
        order_by="Comment.id",
    )
    attachments = relationship(
        "Attachment",
        back_populates="defect",
        cascade="all, delete-orphan",
        order_by="Attachment.id",
    )
