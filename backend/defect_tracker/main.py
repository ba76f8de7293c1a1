from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from defect_tracker.core.config import settings
from defect_tracker.core.logging import configure_logging, logger, RequestLogMiddleware
from defect_tracker.api.router import api_router
from defect_tracker.db.session import engine
from defect_tracker.db.base import Base
import defect_tracker.db.models  # noqa: F401
from defect_tracker.services.seed import seed_default_manager

def create_app() -> FastAPI:
    configure_logging(settings.ENV)
    app = FastAPI(title="Construction Defect Tracker", version="0.1.0")

    origins = [o.strip() for o in settings.CORS_ORIGINS.split(",") if o.strip()]
    app.add_middleware(RequestLogMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins or ["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(RequestValidationError)
    async def _validation_error(request: Request, exc: RequestValidationError):
        return JSONResponse(status_code=400, content={"detail": jsonable_encoder(exc.errors())})

    @app.exception_handler(Exception)
    async def _unhandled_error(request: Request, exc: Exception):
        logger.exception("unhandled_error", path=request.url.path, error=str(exc))
        return JSONResponse(status_code=500, content={"detail": "Internal server error"})

    @app.get("/healthz")
    def healthz():
        return {"status": "ok"}

    @app.on_event("startup")
    def _startup():
        # Ensure tables exist for dev-only convenience; in prod rely on alembic
        if settings.ENV == "dev":
            Base.metadata.create_all(bind=engine)
            if settings.SEED_DEFAULT_MANAGER:
                seed_default_manager()

    app.include_router(api_router)
    logger.info("app_started", env=settings.ENV)
    return app

app = create_app()


def run():
    import uvicorn

    uvicorn.run("defect_tracker.main:app", host="0.0.0.0", port=8000, reload=settings.ENV == "dev")
