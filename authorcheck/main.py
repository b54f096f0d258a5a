from __future__ import annotations

from contextlib import asynccontextmanager

import sentry_sdk
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import ORJSONResponse
from prometheus_fastapi_instrumentator import Instrumentator
from starlette.exceptions import HTTPException as StarletteHTTPException

from authorcheck import __version__
from authorcheck.api.routes.router import router as api_router
from authorcheck.core.config import get_settings
from authorcheck.core.errors import GatewayError
from authorcheck.core.logging import configure_logging, get_logger
from authorcheck.core.redis import close_redis
from authorcheck.core.security import SECURITY_HEADERS
from authorcheck.schemas.common import ErrorResponse, HealthResponse
from authorcheck.utils.trace import get_trace_id, trace_context_middleware

settings = get_settings()
configure_logging()
logger = get_logger(__name__)

if settings.sentry_dsn:
    sentry_sdk.init(dsn=settings.sentry_dsn, environment=settings.environment)


@asynccontextmanager
async def lifespan(_: FastAPI):
    logger.info(
        "startup_complete",
        environment=settings.environment,
        model=settings.model,
        ai_key_configured=bool(settings.api_key),
        shared_rate_limit=bool(settings.redis_url),
    )
    yield
    await close_redis()


app = FastAPI(title=settings.app_name, version=__version__, default_response_class=ORJSONResponse, lifespan=lifespan)
app.middleware("http")(trace_context_middleware)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.origins,
    allow_credentials=False,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["*"],
)


@app.middleware("http")
async def security_headers(request: Request, call_next):
    response = await call_next(request)
    for name, value in SECURITY_HEADERS.items():
        response.headers[name] = value
    return response


def _error_response(status_code: int, body: ErrorResponse) -> ORJSONResponse:
    return ORJSONResponse(status_code=status_code, content=body.model_dump(by_alias=True, exclude_none=True))


@app.exception_handler(GatewayError)
async def gateway_error_handler(_: Request, exc: GatewayError):
    response = _error_response(
        exc.status_code,
        ErrorResponse(error=exc.error, details=exc.details, errorId=exc.error_id),
    )
    response.headers.update(exc.headers)
    return response


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(_: Request, exc: StarletteHTTPException):
    response = _error_response(exc.status_code, ErrorResponse(error=str(exc.detail)))
    if exc.headers:
        response.headers.update(exc.headers)
    return response


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(_: Request, exc: RequestValidationError):
    return _error_response(400, ErrorResponse(error="Invalid input", details=str(exc)))


@app.exception_handler(Exception)
async def unhandled_exception_handler(_: Request, exc: Exception):
    error_id = get_trace_id()
    logger.exception("unhandled_exception", error=str(exc), error_id=error_id)
    body = ErrorResponse(
        error="Internal server error",
        details="An unexpected error occurred while processing your request",
        errorId=error_id,
    )
    response = _error_response(500, body)
    response.headers.update(SECURITY_HEADERS)
    return response


@app.get("/", include_in_schema=False)
async def root() -> dict:
    return {"name": settings.app_name, "version": __version__}


@app.get("/healthz", response_model=HealthResponse)
async def healthz() -> HealthResponse:
    return HealthResponse(status="ok")


app.include_router(api_router, prefix=settings.api_prefix)

Instrumentator().instrument(app).expose(app, include_in_schema=False)
