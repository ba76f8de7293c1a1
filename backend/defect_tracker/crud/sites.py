from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, selectinload

from defect_tracker.db.models.site import ConstructionSite
from defect_tracker.db.models.defect import Defect
from defect_tracker.schemas.site import SiteCreate, SiteUpdate


def list_sites(db: Session, project_id: int):
    return (
        db.query(ConstructionSite)
        .options(selectinload(ConstructionSite.defects))
        .filter(ConstructionSite.project_id == project_id)
        .order_by(ConstructionSite.name, ConstructionSite.id)
        .all()
    )


def get_site(db: Session, site_id: int) -> ConstructionSite | None:
    return db.query(ConstructionSite).filter(ConstructionSite.id == site_id).one_or_none()


def count_sites(db: Session) -> int:
    return db.query(func.count(ConstructionSite.id)).scalar() or 0


def create_site(db: Session, project_id: int, data: SiteCreate) -> ConstructionSite:
    s = ConstructionSite(project_id=project_id, name=data.name)
    db.add(s)
    db.commit()
    db.refresh(s)
    return s


def update_site(db: Session, s: ConstructionSite, data: SiteUpdate) -> ConstructionSite:
    s.name = data.name
    db.commit()
    db.refresh(s)
    return s


def _has_defects(db: Session, site_id: int) -> bool:
    return db.query(Defect.id).filter(Defect.site_id == site_id).first() is not None


def delete_site(db: Session, s: ConstructionSite) -> None:
    if _has_defects(db, s.id):
        raise ValueError("site_has_defects")
    db.delete(s)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise ValueError("site_has_defects")
