from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from defect_tracker.core.deps import get_db, get_current_user, require_roles
from defect_tracker.core.logging import logger
from defect_tracker.core.policy import USER_ADMINS
from defect_tracker.schemas.admin import UserCreateIn
from defect_tracker.schemas.auth import UserOut
from defect_tracker.crud.users import create_user, list_users

router = APIRouter()

@router.get("", response_model=list[UserOut])
def users(db: Session = Depends(get_db), _user=Depends(get_current_user)):
    return [UserOut.model_validate(u) for u in list_users(db)]

@router.post("", response_model=UserOut)
def create_user_endpoint(data: UserCreateIn, db: Session = Depends(get_db), user=Depends(require_roles(*USER_ADMINS))):
    try:
        u = create_user(db, data)
    except ValueError as e:
        if str(e) == "email_exists":
            raise HTTPException(status_code=400, detail="User with this email already exists")
        raise
    logger.info("user_created", user_id=u.id, role=u.role, by=user.id)
    return UserOut.model_validate(u)
