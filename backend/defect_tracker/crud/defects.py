import datetime as dt
from sqlalchemy import func, or_, select
from sqlalchemy.orm import Session, joinedload, selectinload

from defect_tracker.db.models.defect import Defect, RESOLVED_STATUSES
from defect_tracker.db.models.site import ConstructionSite
from defect_tracker.schemas.defect import DefectCreate, DefectUpdate


def _clean_text(v: str | None) -> str | None:
    if v is None:
        return None
    v = v.strip()
    return v or None


def _with_refs(qry):
    return qry.options(
        joinedload(Defect.site).joinedload(ConstructionSite.project),
        joinedload(Defect.creator),
        joinedload(Defect.assignee),
        selectinload(Defect.comments),
        selectinload(Defect.attachments),
    )


def filter_defects(
    qry,
    site_id: int | None = None,
    project_id: int | None = None,
    status: str | None = None,
    priority: str | None = None,
    assignee_id: int | None = None,
    created_from: dt.datetime | None = None,
    created_to: dt.datetime | None = None,
    q: str | None = None,
):
    if site_id is not None:
        qry = qry.filter(Defect.site_id == site_id)
    if project_id is not None:
        project_sites = select(ConstructionSite.id).where(ConstructionSite.project_id == project_id)
        qry = qry.filter(Defect.site_id.in_(project_sites))
    if status:
        qry = qry.filter(Defect.status == status)
    if priority:
        qry = qry.filter(Defect.priority == priority)
    if assignee_id is not None:
        qry = qry.filter(Defect.assignee_id == assignee_id)
    if created_from is not None:
        qry = qry.filter(Defect.created_at >= created_from)
    if created_to is not None:
        qry = qry.filter(Defect.created_at < created_to)
    if q and q.strip():
        pattern = f"%{q.strip()}%"
        qry = qry.filter(or_(Defect.title.ilike(pattern), Defect.description.ilike(pattern)))
    return qry


def list_defects(db: Session, limit: int | None = None, **filters):
    qry = filter_defects(_with_refs(db.query(Defect)), **filters)
    qry = qry.order_by(Defect.created_at.desc(), Defect.id.desc())
    if limit:
        qry = qry.limit(limit)
    return qry.all()


def get_defect(db: Session, defect_id: int) -> Defect | None:
    return _with_refs(db.query(Defect)).filter(Defect.id == defect_id).one_or_none()


def count_defects(db: Session, open_only: bool = False) -> int:
    qry = db.query(func.count(Defect.id))
    if open_only:
        qry = qry.filter(Defect.status.notin_(RESOLVED_STATUSES))
    return qry.scalar() or 0


def create_defect(db: Session, data: DefectCreate, creator_id: int) -> Defect:
    d = Defect(
        title=data.title,
        description=_clean_text(data.description),
        priority=data.priority.value,
        site_id=data.site_id,
        creator_id=creator_id,
        assignee_id=data.assignee_id,
        deadline=data.deadline,
    )
    db.add(d)
    db.commit()
    return get_defect(db, d.id)


def update_defect(db: Session, d: Defect, data: DefectUpdate) -> Defect:
    sent = data.model_fields_set

    # empty values for these are ignored rather than applied
    if data.title:
        d.title = data.title
    if data.status:
        d.status = data.status.value
    if data.priority:
        d.priority = data.priority.value

    # these may be cleared with an explicit null
    if "description" in sent:
        d.description = _clean_text(data.description)
    if "assignee_id" in sent:
        d.assignee_id = data.assignee_id
    if "deadline" in sent:
        d.deadline = data.deadline

    db.commit()
    return get_defect(db, d.id)


def delete_defect(db: Session, d: Defect) -> None:
    db.delete(d)
    db.commit()
