from defect_tracker.schemas.defect import DefectOut, ProjectRef
from defect_tracker.schemas.site import SiteOut

class SiteDetailOut(SiteOut):
    project: ProjectRef
    defects: list[DefectOut] = []

    @classmethod
    def from_model(cls, s):
        defects = [DefectOut.from_model(d) for d in s.defects]
        return super().from_model(s).model_copy(update={"defects": defects})
