import asyncio
import logging
from contextlib import asynccontextmanager
from http import HTTPStatus
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
import alembic.config
import alembic.command
from app.core import errors, schemas
from app.core.config import settings
from app.core.database import engine
from app.core.logging_config import setup_logging
from app.api.router import api_router

setup_logging(settings.LOG_LEVEL, settings.LOG_FILE)
logger = logging.getLogger(__name__)

# Every failure kind of the core and the status it is reported with
ERROR_STATUS = {
    errors.MissingId: 400,
    errors.DuplicateId: 409,
    errors.InvalidField: 400,
    errors.InvalidSortOrder: 400,
    errors.DatasetNotFound: 404,
    errors.StoreUnavailable: 503,
}


def run_migrations():
    """Sync function to run migrations"""
    alembic_cfg = alembic.config.Config("alembic.ini")
    alembic.command.upgrade(alembic_cfg, "head")


# Close the engine once everything is done and close all the sessions
@asynccontextmanager
async def lifespan(app: FastAPI):
    # Apply any pending migrations automatically when the app starts
    try:
        await asyncio.to_thread(run_migrations)
        logger.info("Migrations applied successfully (or already up-to-date)")
    except Exception as e:
        logger.error(f"Migration error during startup: {e}")

    yield
    await engine.dispose()


app = FastAPI(title="Dataset Records API", lifespan=lifespan)

# Include the master router containing all our endpoints
app.include_router(api_router)


# All error bodies share one shape: error, code, status (+ details)
def error_response(status_code: int, error: str, code: str, details=None, headers=None):
    body = schemas.ErrorResponse(
        error=error, code=code, status=status_code, details=details
    )
    return JSONResponse(
        status_code=status_code,
        content=body.model_dump(exclude_none=True),
        headers=headers,
    )


def status_code_tag(status_code: int) -> str:
    try:
        return HTTPStatus(status_code).phrase.lower().replace(" ", "_")
    except ValueError:
        return "http_error"


@app.exception_handler(errors.RecordServiceError)
async def record_service_error_handler(request: Request, exc: errors.RecordServiceError):
    status_code = ERROR_STATUS.get(type(exc), 500)
    logger.error(f"{type(exc).__name__} on {request.url.path}: {exc.message}")
    return error_response(status_code, exc.message, exc.code)


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    details = [
        f"{'.'.join(str(part) for part in error['loc'])} : {error['msg']}"
        for error in exc.errors()
    ]
    logger.error(f"Validation failed on {request.url.path}: {details}")
    return error_response(422, "Validation failed", "validation_error", details)


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    logger.error(f"HTTP {exc.status_code} on {request.url.path}: {exc.detail}")
    return error_response(
        exc.status_code,
        str(exc.detail),
        status_code_tag(exc.status_code),
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    logger.exception(f"Unhandled error on {request.url.path}")
    return error_response(500, "Internal Server Error", "internal_error")


@app.get("/")
async def root():
    return {"message": "Welcome to the Dataset Records API"}
