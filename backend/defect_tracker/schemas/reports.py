import datetime as dt

from defect_tracker.db.models.defect import DefectStatus, DefectPriority
from defect_tracker.schemas._base import CamelModel
from defect_tracker.schemas.defect import DefectOut

class StatusStat(CamelModel):
    status: DefectStatus
    count: int

class PriorityStat(CamelModel):
    priority: DefectPriority
    count: int

class SiteStat(CamelModel):
    site_id: int
    site_name: str | None = None
    project_id: int | None = None
    project_name: str | None = None
    count: int
    latest_created_at: dt.datetime | None = None

class DefectReportOut(CamelModel):
    total_defects: int
    defects: list[DefectOut]
    status_stats: list[StatusStat]
    priority_stats: list[PriorityStat]
    site_stats: list[SiteStat]
    generated_at: dt.datetime

class DashboardOut(CamelModel):
    projects_count: int
    sites_count: int
    defects_count: int
    open_defects_count: int
    # keyed by enum value, every value present
    status_counts: dict[str, int]
    priority_counts: dict[str, int]
    recent_defects: list[DefectOut]
