import logging
import uuid
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import ValidationError
from sqlalchemy.exc import IntegrityError, NoResultFound
from sqlalchemy.ext.asyncio import AsyncEngine
from starlette.exceptions import HTTPException as StarletteHTTPException

from marketplace import messages
from marketplace.db.connection import dispose_engine
from marketplace.db.connection import (
    get_database_type as _connection_get_database_type,
)
from marketplace.db.connection import (
    get_database_url as _connection_get_database_url,
)
from marketplace.db.connection import (
    get_engine as _connection_get_engine,
)
from marketplace.errors import AppError
from marketplace.settings import AppSettings, get_settings

from .api import comments, images, products
from .schemas.error import ErrorType
from .utils.error_responses import (
    build_error_response,
    build_validation_error_response,
    validation_details_from_errors,
)
from .utils.request_context import get_request_id, set_request_id

settings = get_settings()

logging.basicConfig(
    level=settings.log_level_numeric,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


def _validate_environment(active_settings: AppSettings | None = None) -> list[str]:
    """Log warnings for optional configuration that is missing."""

    warnings = (active_settings or get_settings()).optional_config_warnings()
    if warnings:
        logger.warning("Environment Configuration Warnings:")
        for warning in warnings:
            logger.warning("  - %s", warning)
    return warnings


def _sanitize_database_url(url: str) -> str:
    """Hide the password portion of ``url`` for logging."""
    if "://" not in url:
        return url

    scheme, rest = url.split("://", 1)
    if "@" in rest:
        auth, host_db = rest.split("@", 1)
        if ":" in auth:
            user, _ = auth.split(":", 1)
            return f"{scheme}://{user}:***@{host_db}"
        return f"{scheme}://{auth}@{host_db}"

    return url


def get_database_type() -> str:
    return _connection_get_database_type()


def get_database_url() -> str:
    return _connection_get_database_url()


def get_engine() -> AsyncEngine:
    return _connection_get_engine()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Log the database target, warm connections, and dispose the pool on exit."""
    _validate_environment()

    db_type = get_database_type()
    logger.info("Marketplace API - Database Preflight Check")
    logger.info("Database Type: %s", db_type.upper())
    logger.info("Database URL: %s", _sanitize_database_url(get_database_url()))
    if db_type == "postgresql":
        logger.info("PostgreSQL mode - ensure migrations are up to date (alembic upgrade head)")
    else:
        logger.info("SQLite mode - intended for local development only")

    from marketplace.warmup import warmup_all

    await warmup_all(
        resolve_db_type=get_database_type,
        resolve_engine=get_engine,
    )

    yield

    logger.info("Shutting down Marketplace API")
    await dispose_engine()


app = FastAPI(
    title="Marketplace API",
    version="0.1.0",
    description="REST API for second-hand product listings, likes and comments.",
    lifespan=lifespan,
    redirect_slashes=False,
)


def _default_origins() -> list[str]:
    ports = list(range(3000, 3011)) + [5173]
    origins = []
    for host in ("localhost", "127.0.0.1"):
        origins.extend([f"http://{host}:{port}" for port in ports])
    origins.append("http://localhost")
    origins.append("http://127.0.0.1")
    return origins


def _combine_origins(*origin_groups: list[str]) -> list[str]:
    """Merge origins preserving order and removing duplicates."""
    seen: set[str] = set()
    combined: list[str] = []
    for group in origin_groups:
        for origin in group:
            normalized = origin.rstrip("/")
            if normalized and normalized not in seen:
                seen.add(normalized)
                combined.append(normalized)
    return combined


allow_origins = _combine_origins(_default_origins(), settings.cors_allow_origins)
cors_origin_regex = settings.cors_allow_origin_regex or None

logger.info("Configured CORS allow_origins: %s", ", ".join(allow_origins))
if cors_origin_regex:
    logger.info("Configured CORS allow_origin_regex: %s", cors_origin_regex)

app.add_middleware(
    CORSMiddleware,
    allow_origins=allow_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
    allow_origin_regex=cors_origin_regex,
)


@app.middleware("http")
async def add_request_id(request: Request, call_next):
    """Tag each request with an id exposed in ``X-Request-ID`` and error bodies."""
    request_id = str(uuid.uuid4())
    set_request_id(request_id)
    response = await call_next(request)
    response.headers["X-Request-ID"] = request_id
    return response


def _error_json(
    request: Request,
    *,
    status_code: int,
    message: str,
    detail: str | None = None,
    error_type: ErrorType | None = None,
) -> JSONResponse:
    error_response = build_error_response(
        error_type=error_type or ErrorType.for_status(status_code),
        message=message,
        detail=detail,
        status_code=status_code,
        path=str(request.url.path),
    )
    return JSONResponse(
        status_code=status_code,
        content=error_response.model_dump(mode="json"),
    )


def _validation_json(request: Request, raw_errors: list[dict]) -> JSONResponse:
    errors = validation_details_from_errors(raw_errors)
    message = errors[0].message if errors else messages.INVALID_REQUEST

    logger.warning(
        "Validation error for request %s to %s: %s errors",
        get_request_id(),
        request.url.path,
        len(errors),
    )

    error_response = build_validation_error_response(
        message=message,
        detail=f"{len(errors)} validation error(s)",
        status_code=status.HTTP_400_BAD_REQUEST,
        path=str(request.url.path),
        errors=errors,
    )
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=error_response.model_dump(mode="json"),
    )


@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError):
    """Render expected domain failures with their own status and message."""
    logger.info(
        "%s for request %s to %s: %s",
        type(exc).__name__,
        get_request_id(),
        request.url.path,
        exc.message,
    )
    return _error_json(request, status_code=exc.status_code, message=exc.message)


@app.exception_handler(NoResultFound)
async def no_result_found_handler(request: Request, exc: NoResultFound):
    return _error_json(
        request,
        status_code=status.HTTP_404_NOT_FOUND,
        message=messages.RECORD_NOT_FOUND,
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    return _validation_json(request, list(exc.errors()))


@app.exception_handler(ValidationError)
async def pydantic_validation_exception_handler(request: Request, exc: ValidationError):
    return _validation_json(request, list(exc.errors()))


@app.exception_handler(IntegrityError)
async def database_integrity_exception_handler(request: Request, exc: IntegrityError):
    """Unique and foreign-key violations that slipped past service checks."""
    logger.warning(
        "Database integrity error for request %s to %s: %s",
        get_request_id(),
        request.url.path,
        exc.orig,
    )
    return _error_json(
        request,
        status_code=status.HTTP_409_CONFLICT,
        message=messages.RECORD_CONFLICT,
        error_type=ErrorType.CONFLICT,
    )


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    response = _error_json(
        request,
        status_code=exc.status_code,
        message=str(exc.detail),
    )
    if exc.headers:
        response.headers.update(exc.headers)
    return response


@app.exception_handler(Exception)
async def generic_exception_handler(request: Request, exc: Exception):
    """Last resort: log the traceback and return a body without internals."""
    logger.exception(
        "Unhandled exception for request %s to %s: %s",
        get_request_id(),
        request.url.path,
        type(exc).__name__,
    )
    return _error_json(
        request,
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        message=messages.INTERNAL_SERVER_ERROR,
        error_type=ErrorType.INTERNAL_ERROR,
    )


@app.get("/health", tags=["system"])
async def healthcheck() -> dict[str, str]:
    return {"status": "ok"}


app.include_router(products.router, prefix="/products", tags=["products"])
app.include_router(comments.router, tags=["comments"])
app.include_router(images.router, prefix="/images", tags=["images"])
