from sqlalchemy import ForeignKey, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from defect_tracker.db.base import Base
from defect_tracker.db.models._mixins import TimestampMixin

class Comment(Base, TimestampMixin):
    __tablename__ = "comment"

    id: Mapped[int] = mapped_column(primary_key=True)
    defect_id: Mapped[int] = mapped_column(ForeignKey("defect.id", ondelete="CASCADE"), index=True)
    author_id: Mapped[int] = mapped_column(ForeignKey("user.id"), index=True)
    content: Mapped[str] = mapped_column(Text)

    defect = relationship("Defect", back_populates="comments")
    author = relationship("User")
