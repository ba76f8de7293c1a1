import datetime as dt

from defect_tracker.db.models.defect import RESOLVED_STATUSES
from defect_tracker.schemas._base import CamelModel, NonBlankStr

class SiteCreate(CamelModel):
    name: NonBlankStr

class SiteUpdate(CamelModel):
    name: NonBlankStr

class SiteOut(CamelModel):
    id: int
    name: str
    project_id: int
    created_at: dt.datetime
    defect_count: int = 0
    open_defect_count: int = 0

    @classmethod
    def from_model(cls, s):
        out = cls.model_validate(s)
        open_count = sum(1 for d in s.defects if d.status not in RESOLVED_STATUSES)
        return out.model_copy(update={"defect_count": len(s.defects), "open_defect_count": open_count})
