from fastapi import APIRouter
from defect_tracker.api.routers import auth, setup, users, projects, sites, defects, reports

api_router = APIRouter()
api_router.include_router(setup.router, prefix="/setup", tags=["setup"])
api_router.include_router(auth.router, prefix="/auth", tags=["auth"])
api_router.include_router(users.router, prefix="/users", tags=["users"])
api_router.include_router(projects.router, prefix="/projects", tags=["projects"])
api_router.include_router(sites.router, prefix="/sites", tags=["sites"])
api_router.include_router(defects.router, prefix="/defects", tags=["defects"])
api_router.include_router(reports.router, prefix="/reports", tags=["reports"])
