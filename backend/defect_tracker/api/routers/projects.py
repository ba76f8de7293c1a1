from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from defect_tracker.core.deps import get_db, get_current_user, require_roles
from defect_tracker.core.logging import logger
from defect_tracker.core.policy import PROJECT_EDITORS, SITE_EDITORS
from defect_tracker.schemas.project import ProjectCreate, ProjectOut, ProjectUpdate, ProjectDetailOut
from defect_tracker.schemas.site import SiteCreate, SiteOut
from defect_tracker.crud.projects import create_project, list_projects, get_project, update_project, delete_project
from defect_tracker.crud.sites import list_sites, create_site

router = APIRouter()


def _project_or_404(db: Session, project_id: int):
    p = get_project(db, project_id)
    if not p:
        raise HTTPException(status_code=404, detail="Project not found")
    return p


@router.get("", response_model=list[ProjectDetailOut])
def get_projects(db: Session = Depends(get_db), _user=Depends(get_current_user)):
    return [ProjectDetailOut.from_model(p) for p in list_projects(db)]

@router.post("", response_model=ProjectOut)
def post_project(data: ProjectCreate, db: Session = Depends(get_db), user=Depends(require_roles(*PROJECT_EDITORS))):
    p = create_project(db, data)
    logger.info("project_created", project_id=p.id, by=user.id)
    return ProjectOut.from_model(p)


@router.get("/{project_id}", response_model=ProjectDetailOut)
def get_project_detail(project_id: int, db: Session = Depends(get_db), _user=Depends(get_current_user)):
    return ProjectDetailOut.from_model(_project_or_404(db, project_id))


@router.patch("/{project_id}", response_model=ProjectOut)
def patch_project(
    project_id: int,
    data: ProjectUpdate,
    db: Session = Depends(get_db),
    _user=Depends(require_roles(*PROJECT_EDITORS)),
):
    p = _project_or_404(db, project_id)
    return ProjectOut.from_model(update_project(db, p, data))


@router.delete("/{project_id}")
def delete_project_endpoint(
    project_id: int,
    db: Session = Depends(get_db),
    user=Depends(require_roles(*PROJECT_EDITORS)),
):
    p = _project_or_404(db, project_id)
    try:
        delete_project(db, p)
    except ValueError as e:
        if str(e) == "project_has_sites":
            raise HTTPException(status_code=400, detail="Cannot delete a project that still has construction sites")
        raise
    logger.info("project_deleted", project_id=project_id, by=user.id)
    return {"status": "ok"}


@router.get("/{project_id}/sites", response_model=list[SiteOut])
def get_project_sites(project_id: int, db: Session = Depends(get_db), _user=Depends(get_current_user)):
    _project_or_404(db, project_id)
    return [SiteOut.from_model(s) for s in list_sites(db, project_id)]


@router.post("/{project_id}/sites", response_model=SiteOut)
def post_project_site(
    project_id: int,
    data: SiteCreate,
    db: Session = Depends(get_db),
    user=Depends(require_roles(*SITE_EDITORS)),
):
    _project_or_404(db, project_id)
    s = create_site(db, project_id, data)
    logger.info("site_created", site_id=s.id, project_id=project_id, by=user.id)
    return SiteOut.from_model(s)
