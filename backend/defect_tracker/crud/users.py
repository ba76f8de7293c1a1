from sqlalchemy import func
from sqlalchemy.orm import Session
from defect_tracker.db.models.user import User
from defect_tracker.core.security import hash_password
from defect_tracker.schemas.admin import UserCreateIn

def get_user_by_email(db: Session, email: str) -> User | None:
    return db.query(User).filter(User.email == email.strip().lower()).one_or_none()

def get_user(db: Session, user_id: int) -> User | None:
    return db.query(User).filter(User.id == user_id).one_or_none()

def list_users(db: Session):
    return db.query(User).filter(User.is_active.is_(True)).order_by(User.name, User.email).all()

def count_users(db: Session) -> int:
    return db.query(func.count(User.id)).scalar() or 0

def create_user(db: Session, data: UserCreateIn) -> User:
    email = data.email.strip().lower()
    if get_user_by_email(db, email):
        raise ValueError("email_exists")
    u = User(email=email, password_hash=hash_password(data.password), role=data.role, name=data.name)
    db.add(u)
    db.commit()
    db.refresh(u)
    return u
