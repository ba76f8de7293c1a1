from sqlalchemy import String, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column, relationship

from defect_tracker.db.base import Base
from defect_tracker.db.models._mixins import TimestampMixin

class ConstructionSite(Base, TimestampMixin):
    __tablename__ = "construction_site"

    id: Mapped[int] = mapped_column(primary_key=True)
    project_id: Mapped[int] = mapped_column(ForeignKey("project.id", ondelete="RESTRICT"), index=True)
    name: Mapped[str] = mapped_column(String(256))

    project = relationship("Project", back_populates="sites")
    defects = relationship("Defect", back_populates="site", order_by="Defect.created_at.desc()")
