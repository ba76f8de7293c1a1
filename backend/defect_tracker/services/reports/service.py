import datetime as dt

from sqlalchemy import func
from sqlalchemy.orm import Session

from defect_tracker.crud.defects import filter_defects, list_defects, count_defects
from defect_tracker.crud.projects import count_projects
from defect_tracker.crud.sites import count_sites
from defect_tracker.db.models.defect import Defect, DefectStatus, DefectPriority
from defect_tracker.db.models.project import Project
from defect_tracker.db.models.site import ConstructionSite
from defect_tracker.schemas.defect import DefectOut

STATUS_ORDER = [s.value for s in DefectStatus]
PRIORITY_ORDER = [p.value for p in DefectPriority]
RECENT_DEFECTS_LIMIT = 5


def _created_bounds(date_from: dt.date | None, date_to: dt.date | None):
    """Both ends inclusive as calendar days: [date_from 00:00, date_to + 1 day 00:00)."""
    created_from = dt.datetime.combine(date_from, dt.time.min) if date_from else None
    created_to = dt.datetime.combine(date_to + dt.timedelta(days=1), dt.time.min) if date_to else None
    return created_from, created_to


def _ordered(rows, order: list[str]):
    return sorted(rows, key=lambda r: order.index(r[0]) if r[0] in order else len(order))


def _group_counts(db: Session, column, filters: dict):
    qry = db.query(column, func.count(Defect.id))
    qry = filter_defects(qry, **filters).group_by(column)
    return [(key, int(n)) for key, n in qry.all()]


def _site_stats(db: Session, filters: dict):
    qry = (
        db.query(
            ConstructionSite.id.label("site_id"),
            ConstructionSite.name.label("site_name"),
            Project.id.label("project_id"),
            Project.name.label("project_name"),
            func.count(Defect.id).label("count"),
            func.max(Defect.created_at).label("latest_created_at"),
        )
        .select_from(Defect)
        .join(ConstructionSite, Defect.site_id == ConstructionSite.id)
        .join(Project, ConstructionSite.project_id == Project.id)
    )
    qry = filter_defects(qry, **filters).group_by(
        ConstructionSite.id, ConstructionSite.name, Project.id, Project.name
    )
    rows = qry.order_by(func.count(Defect.id).desc(), ConstructionSite.name).all()
    return [
        {
            "site_id": r.site_id,
            "site_name": r.site_name,
            "project_id": r.project_id,
            "project_name": r.project_name,
            "count": int(r.count),
            "latest_created_at": r.latest_created_at,
        }
        for r in rows
    ]


def defect_report(
    db: Session,
    project_id: int | None = None,
    date_from: dt.date | None = None,
    date_to: dt.date | None = None,
) -> dict:
    created_from, created_to = _created_bounds(date_from, date_to)
    filters = {"project_id": project_id, "created_from": created_from, "created_to": created_to}

    defects = list_defects(db, **filters)
    status_rows = _ordered(_group_counts(db, Defect.status, filters), STATUS_ORDER)
    priority_rows = _ordered(_group_counts(db, Defect.priority, filters), PRIORITY_ORDER)

    return {
        "total_defects": len(defects),
        "defects": [DefectOut.from_model(d) for d in defects],
        "status_stats": [{"status": s, "count": n} for s, n in status_rows],
        "priority_stats": [{"priority": p, "count": n} for p, n in priority_rows],
        "site_stats": _site_stats(db, filters),
        "generated_at": dt.datetime.now(dt.timezone.utc),
    }


def dashboard(db: Session) -> dict:
    status_counts = {s: 0 for s in STATUS_ORDER}
    status_counts.update(dict(_group_counts(db, Defect.status, {})))
    priority_counts = {p: 0 for p in PRIORITY_ORDER}
    priority_counts.update(dict(_group_counts(db, Defect.priority, {})))

    recent = list_defects(db, limit=RECENT_DEFECTS_LIMIT)
    return {
        "projects_count": count_projects(db),
        "sites_count": count_sites(db),
        "defects_count": count_defects(db),
        "open_defects_count": count_defects(db, open_only=True),
        "status_counts": status_counts,
        "priority_counts": priority_counts,
        "recent_defects": [DefectOut.from_model(d) for d in recent],
    }
