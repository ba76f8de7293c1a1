from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from defect_tracker.core.deps import get_db, get_current_user, require_roles
from defect_tracker.core.logging import logger
from defect_tracker.core.policy import SITE_EDITORS, SITE_DELETERS
from defect_tracker.schemas.site import SiteUpdate, SiteOut
from defect_tracker.schemas.site_detail import SiteDetailOut
from defect_tracker.crud.sites import get_site, update_site, delete_site

router = APIRouter()


def _site_or_404(db: Session, site_id: int):
    s = get_site(db, site_id)
    if not s:
        raise HTTPException(status_code=404, detail="Site not found")
    return s


@router.get("/{site_id}", response_model=SiteDetailOut)
def get_site_detail(site_id: int, db: Session = Depends(get_db), _user=Depends(get_current_user)):
    return SiteDetailOut.from_model(_site_or_404(db, site_id))


@router.patch("/{site_id}", response_model=SiteOut)
def patch_site(
    site_id: int,
    data: SiteUpdate,
    db: Session = Depends(get_db),
    _user=Depends(require_roles(*SITE_EDITORS)),
):
    s = _site_or_404(db, site_id)
    return SiteOut.from_model(update_site(db, s, data))


@router.delete("/{site_id}")
def delete_site_endpoint(
    site_id: int,
    db: Session = Depends(get_db),
    user=Depends(require_roles(*SITE_DELETERS)),
):
    s = _site_or_404(db, site_id)
    try:
        delete_site(db, s)
    except ValueError as e:
        if str(e) == "site_has_defects":
            raise HTTPException(status_code=400, detail="Cannot delete a site that still has defects")
        raise
    logger.info("site_deleted", site_id=site_id, by=user.id)
    return {"status": "ok"}
