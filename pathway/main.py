"""
Pathway Learner Progression

FastAPI application entry point.
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

from fastapi import FastAPI, HTTPException, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from pathway.api.middleware.request_id import REQUEST_ID_HEADER, RequestIdMiddleware
from pathway.api.v1 import router as api_v1_router
from pathway.config import Settings, get_settings
from pathway.engines.progression.engine import ProgressionEngine
from pathway.logging_config import configure_logging, get_logger
from pathway.pedagogy.catalog import DEFAULT_CATALOG, Catalog
from pathway.schemas.common import HealthResponse

logger = get_logger(__name__)

_CORS_ORIGINS = [
    "http://localhost:3000",
    "http://localhost:5173",  # Vite default
    "http://127.0.0.1:3000",
]


def _request_id(request: Request) -> Optional[str]:
    return getattr(request.state, "request_id", None)


def _error_headers(request: Request) -> dict:
    req_id = _request_id(request)
    return {REQUEST_ID_HEADER: req_id} if req_id else {}


def create_app(
    engine: Optional[ProgressionEngine] = None,
    settings: Optional[Settings] = None,
    catalog: Optional[Catalog] = None,
) -> FastAPI:
    """
    Build the application around one progression engine.

    Args:
        engine: Engine to serve; defaults to one built from settings
        settings: Defaults to get_settings()
        catalog: Content catalog; defaults to DEFAULT_CATALOG
    """
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator:
        configure_logging(
            log_level=settings.log_level,
            environment=settings.environment,
            debug=settings.debug,
        )
        record = app.state.engine.get_state()
        logger.info(
            "Starting %s v%s",
            settings.project_name,
            settings.version,
            extra={"learner_id": record.learner_id, "demo_mode": settings.demo_mode},
        )
        yield
        logger.info("Shutting down...")

    app = FastAPI(
        title=settings.project_name,
        description="Learner progression: XP, levels, gates and notifications for one learner.",
        version=settings.version,
        lifespan=lifespan,
        docs_url="/docs" if settings.debug else None,
        redoc_url="/redoc" if settings.debug else None,
    )
    app.state.settings = settings
    app.state.engine = engine or ProgressionEngine.from_settings(settings)
    app.state.catalog = catalog or DEFAULT_CATALOG

    # Last added is outermost; CORS wraps everything
    app.add_middleware(RequestIdMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=_CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(HTTPException)
    async def http_exception_handler(request: Request, exc: HTTPException):
        content = {"detail": exc.detail}
        if exc.status_code >= 500:
            content["request_id"] = _request_id(request)
        return JSONResponse(
            status_code=exc.status_code,
            content=content,
            headers=_error_headers(request),
        )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        errors = []
        for error in exc.errors():
            errors.append({
                "field": ".".join(str(loc) for loc in error["loc"]),
                "message": error["msg"],
                "type": error["type"],
            })
        return JSONResponse(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            content={"detail": "Validation error", "errors": errors},
            headers=_error_headers(request),
        )

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception):
        logger.exception("Unhandled exception: %s", exc)
        req_id = _request_id(request)
        if settings.debug:
            content = {"detail": str(exc), "type": type(exc).__name__, "request_id": req_id}
        else:
            content = {"detail": "Internal server error", "request_id": req_id}
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=content,
            headers=_error_headers(request),
        )

    @app.get("/health", response_model=HealthResponse, tags=["Health"])
    async def health_check():
        """Check application health."""
        return HealthResponse(
            status="ok",
            version=settings.version,
            environment=settings.environment,
        )

    app.include_router(api_v1_router, prefix=settings.api_v1_prefix)
    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "pathway.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.debug,
    )
