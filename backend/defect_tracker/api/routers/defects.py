from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from defect_tracker.core.deps import get_db, get_current_user, require_roles
from defect_tracker.core.logging import logger
from defect_tracker.core.policy import DEFECT_EDITORS, can_update_defect
from defect_tracker.db.models.defect import DefectStatus, DefectPriority
from defect_tracker.schemas.defect import DefectCreate, DefectUpdate, DefectOut, DefectDetailOut
from defect_tracker.schemas.comment import CommentCreate, CommentOut
from defect_tracker.crud.defects import list_defects, get_defect, create_defect, update_defect, delete_defect
from defect_tracker.crud.comments import list_comments, create_comment
from defect_tracker.crud.sites import get_site
from defect_tracker.crud.users import get_user

router = APIRouter()


def _defect_or_404(db: Session, defect_id: int):
    d = get_defect(db, defect_id)
    if not d:
        raise HTTPException(status_code=404, detail="Defect not found")
    return d


def _ensure_assignee_exists(db: Session, assignee_id: int | None):
    if assignee_id is not None and not get_user(db, assignee_id):
        raise HTTPException(status_code=404, detail="Assignee not found")


@router.get("", response_model=list[DefectOut])
def get_defects(
    site_id: int | None = Query(None, alias="siteId"),
    project_id: int | None = Query(None, alias="projectId"),
    status: DefectStatus | None = Query(None),
    priority: DefectPriority | None = Query(None),
    assignee_id: int | None = Query(None, alias="assigneeId"),
    q: str | None = Query(None, max_length=200),
    db: Session = Depends(get_db),
    _user=Depends(get_current_user),
):
    rows = list_defects(
        db,
        site_id=site_id,
        project_id=project_id,
        status=status.value if status else None,
        priority=priority.value if priority else None,
        assignee_id=assignee_id,
        q=q,
    )
    return [DefectOut.from_model(d) for d in rows]


@router.post("", response_model=DefectOut)
def post_defect(
    data: DefectCreate,
    db: Session = Depends(get_db),
    user=Depends(require_roles(*DEFECT_EDITORS)),
):
    if not get_site(db, data.site_id):
        raise HTTPException(status_code=404, detail="Site not found")
    _ensure_assignee_exists(db, data.assignee_id)
    d = create_defect(db, data, creator_id=user.id)
    logger.info("defect_created", defect_id=d.id, site_id=d.site_id, priority=d.priority, by=user.id)
    return DefectOut.from_model(d)


@router.get("/{defect_id}", response_model=DefectDetailOut)
def get_defect_detail(defect_id: int, db: Session = Depends(get_db), _user=Depends(get_current_user)):
    return DefectDetailOut.from_model(_defect_or_404(db, defect_id))


@router.patch("/{defect_id}", response_model=DefectOut)
def patch_defect(
    defect_id: int,
    data: DefectUpdate,
    db: Session = Depends(get_db),
    user=Depends(get_current_user),
):
    d = _defect_or_404(db, defect_id)
    if not can_update_defect(user, d):
        raise HTTPException(status_code=403, detail="Forbidden")
    if "assignee_id" in data.model_fields_set:
        _ensure_assignee_exists(db, data.assignee_id)
    previous_status = d.status
    d = update_defect(db, d, data)
    if d.status != previous_status:
        logger.info("defect_status_changed", defect_id=d.id, old=previous_status, new=d.status, by=user.id)
    return DefectOut.from_model(d)


@router.delete("/{defect_id}")
def delete_defect_endpoint(
    defect_id: int,
    db: Session = Depends(get_db),
    user=Depends(require_roles(*DEFECT_EDITORS)),
):
    d = _defect_or_404(db, defect_id)
    delete_defect(db, d)
    logger.info("defect_deleted", defect_id=defect_id, by=user.id)
    return {"status": "ok"}


@router.get("/{defect_id}/comments", response_model=list[CommentOut])
def get_comments(defect_id: int, db: Session = Depends(get_db), _user=Depends(get_current_user)):
    _defect_or_404(db, defect_id)
    return [CommentOut.model_validate(c) for c in list_comments(db, defect_id)]


@router.post("/{defect_id}/comments", response_model=CommentOut)
def post_comment(
    defect_id: int,
    data: CommentCreate,
    db: Session = Depends(get_db),
    user=Depends(get_current_user),
):
    _defect_or_404(db, defect_id)
    c = create_comment(db, defect_id, author_id=user.id, content=data.content)
    return CommentOut.model_validate(c)
