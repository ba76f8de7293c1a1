from sqlalchemy.orm import Session
from defect_tracker.db.session import SessionLocal
from defect_tracker.core.config import settings
from defect_tracker.core.logging import logger
from defect_tracker.crud.users import count_users, create_user
from defect_tracker.schemas.admin import UserCreateIn
from defect_tracker.db.models.user import Role

def ensure_default_manager(db: Session) -> bool:
    """Create the bootstrap manager when the user table is empty. Returns True if one was created."""
    if count_users(db) > 0:
        return False
    create_user(db, UserCreateIn(
        email=settings.DEFAULT_MANAGER_EMAIL,
        password=settings.DEFAULT_MANAGER_PASSWORD,
        role=Role.manager.value,
        name=settings.DEFAULT_MANAGER_NAME,
    ))
    logger.info("default_manager_created", email=settings.DEFAULT_MANAGER_EMAIL)
    return True

def seed_default_manager():
    db: Session = SessionLocal()
    try:
        ensure_default_manager(db)
    finally:
        db.close()
