from fastapi import APIRouter, Depends, HTTPException, Response
from sqlalchemy.orm import Session

from defect_tracker.core.deps import get_db, get_current_user
from defect_tracker.core.logging import logger
from defect_tracker.schemas.auth import LoginIn, TokenOut, UserOut
from defect_tracker.crud.users import get_user_by_email
from defect_tracker.core.security import verify_password, create_access_token, set_session_cookie, clear_session_cookie

router = APIRouter()

@router.post("/login", response_model=TokenOut)
def login(data: LoginIn, response: Response, db: Session = Depends(get_db)):
    user = get_user_by_email(db, data.email)
    if not user or not user.is_active or not verify_password(data.password, user.password_hash):
        logger.info("login_failed", email=data.email)
        raise HTTPException(status_code=401, detail="Invalid credentials")
    token = create_access_token(email=user.email, role=user.role)
    set_session_cookie(response, token)
    return TokenOut(access_token=token)

@router.post("/logout")
def logout(response: Response):
    clear_session_cookie(response)
    return {"status": "ok"}

@router.get("/me", response_model=UserOut)
def me(user=Depends(get_current_user)):
    return UserOut.model_validate(user)
