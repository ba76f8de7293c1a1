from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, selectinload
from defect_tracker.db.models.project import Project
from defect_tracker.db.models.site import ConstructionSite
from defect_tracker.schemas.project import ProjectCreate, ProjectUpdate

def list_projects(db: Session):
    return (
        db.query(Project)
        .options(selectinload(Project.sites).selectinload(ConstructionSite.defects))
        .order_by(Project.created_at.desc(), Project.id.desc())
        .all()
    )

def get_project(db: Session, project_id: int) -> Project | None:
    return db.query(Project).filter(Project.id == project_id).one_or_none()

def count_projects(db: Session) -> int:
    return db.query(func.count(Project.id)).scalar() or 0

def create_project(db: Session, data: ProjectCreate) -> Project:
    p = Project(name=data.name)
    db.add(p)
    db.commit()
    db.refresh(p)
    return p


def update_project(db: Session, p: Project, data: ProjectUpdate) -> Project:
    p.name = data.name
    db.commit()
    db.refresh(p)
    return p


def _has_sites(db: Session, project_id: int) -> bool:
    return db.query(ConstructionSite.id).filter(ConstructionSite.project_id == project_id).first() is not None


def delete_project(db: Session, p: Project) -> None:
    if _has_sites(db, p.id):
        raise ValueError("project_has_sites")
    db.delete(p)
    try:
        db.commit()
    except IntegrityError:
        # a site was added after the check
        db.rollback()
        raise ValueError("project_has_sites")
