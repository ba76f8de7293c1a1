from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from defect_tracker.core.config import settings
from defect_tracker.core.deps import get_db
from defect_tracker.schemas.admin import SetupOut
from defect_tracker.services.seed import ensure_default_manager

router = APIRouter()

@router.get("", response_model=SetupOut)
def setup(db: Session = Depends(get_db)):
    if ensure_default_manager(db):
        return SetupOut(
            created=True,
            message=f"Default user created: {settings.DEFAULT_MANAGER_EMAIL} / {settings.DEFAULT_MANAGER_PASSWORD}",
        )
    return SetupOut(created=False, message="System is already set up")
