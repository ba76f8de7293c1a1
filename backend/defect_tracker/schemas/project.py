import datetime as dt

from defect_tracker.schemas._base import CamelModel, NonBlankStr
from defect_tracker.schemas.site import SiteOut

class ProjectCreate(CamelModel):
    name: NonBlankStr


class ProjectUpdate(CamelModel):
    name: NonBlankStr

class ProjectOut(CamelModel):
    id: int
    name: str
    created_at: dt.datetime
    site_count: int = 0

    @classmethod
    def from_model(cls, p):
        return cls.model_validate(p).model_copy(update={"site_count": len(p.sites)})

class ProjectDetailOut(ProjectOut):
    sites: list[SiteOut] = []

    @classmethod
    def from_model(cls, p):
        sites = [SiteOut.from_model(s) for s in p.sites]
        return cls.model_validate(p).model_copy(update={"site_count": len(sites), "sites": sites})
