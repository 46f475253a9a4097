import logging
import time
from contextlib import asynccontextmanager
from typing import Any, Dict, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from ehr_api import __version__
from ehr_api.config import Settings, settings
from ehr_api.exceptions import EHRError
from ehr_api.routers import (
    appointments,
    dashboard,
    lab_results,
    medical_records,
    patients,
    prescriptions,
    vitals,
)
from ehr_api.store import EHRStore

# Configure logging
logging.basicConfig(
    level=logging.INFO if not settings.DEBUG else logging.DEBUG,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application startup/shutdown lifecycle."""
    state: Dict[str, Any] = app.state.service_state
    logger.info("=" * 50)
    logger.info(f"{app.title} Starting...")
    logger.info("=" * 50)

    store: EHRStore = app.state.store
    for collection in store.collections:
        logger.info(f"  {collection.name}: {len(collection)} records (in-memory)")

    state["startup_complete"] = True
    logger.info(f"  CORS Origins: {app.state.settings.CORS_ORIGINS}")
    logger.info("=" * 50)

    yield

    logger.info("Shutting down EHR API, in-memory data will be discarded...")
    state["startup_complete"] = False


def create_app(app_settings: Optional[Settings] = None) -> FastAPI:
    """Build an application with its own empty store."""
    app_settings = app_settings or settings

    app = FastAPI(
        title=app_settings.APP_NAME,
        description="In-memory electronic health record API",
        version=__version__,
        lifespan=lifespan,
        docs_url="/docs",
        redoc_url="/redoc",
    )
    app.state.settings = app_settings
    app.state.store = EHRStore()
    app.state.service_state = {"startup_complete": False}

    app.add_middleware(
        CORSMiddleware,
        allow_origins=app_settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        started = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = (time.perf_counter() - started) * 1000
        logger.info(f"{request.method} {request.url.path} {response.status_code} {elapsed_ms:.1f} ms")
        return response

    # Include routers
    app.include_router(patients.router)
    app.include_router(appointments.router)
    app.include_router(prescriptions.router)
    app.include_router(lab_results.router)
    app.include_router(vitals.router)
    app.include_router(medical_records.router)
    app.include_router(dashboard.router)

    @app.get("/status")
    async def status_check():
        return {"ok": True}

    @app.get("/health")
    async def health_check():
        """Basic health check for load balancers."""
        return {"status": "healthy", "service": "ehr"}

    @app.get("/ready")
    async def readiness_check():
        """Readiness check with per-collection record counts."""
        store: EHRStore = app.state.store
        return {
            "status": "ready" if app.state.service_state["startup_complete"] else "starting",
            "collections": {c.name: len(c) for c in store.collections},
            "config": {
                "debug": app_settings.DEBUG,
                "cors_origins": app_settings.CORS_ORIGINS,
            },
        }

    @app.get("/")
    async def root():
        """Root endpoint with API information."""
        return {
            "service": app_settings.APP_NAME,
            "version": __version__,
            "docs": "/docs",
            "health": "/health",
            "ready": "/ready",
        }

    @app.exception_handler(EHRError)
    async def ehr_exception_handler(request: Request, exc: EHRError):
        return JSONResponse(status_code=exc.status_code, content={"error": exc.message})

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": exc.detail},
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        details = [
            {"loc": list(err.get("loc", ())), "msg": err.get("msg"), "type": err.get("type")}
            for err in exc.errors()
        ]
        logger.debug(f"Rejected {request.method} {request.url.path}: {details}")
        return JSONResponse(
            status_code=400,
            content={"error": "Invalid request", "details": details},
        )

    # Global exception handler
    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        logger.error(f"Unhandled exception: {exc}", exc_info=True)
        return JSONResponse(
            status_code=500,
            content={
                "error": "Internal server error",
                "detail": str(exc) if app_settings.DEBUG else None,
            },
        )

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host=settings.HOST, port=settings.PORT)
