from __future__ import annotations

from contextlib import asynccontextmanager
from datetime import datetime, timezone

import sentry_sdk
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import ORJSONResponse
from prometheus_fastapi_instrumentator import Instrumentator
from sqlalchemy import text

from academicflow.api.v1.router import router as v1_router
from academicflow.core.config import get_settings
from academicflow.core.logging import configure_logging, get_logger
from academicflow.db.base import Base
from academicflow.db.session import engine
from academicflow.schemas.common import ErrorResponse, HealthResponse
from academicflow.services.llm import LLMNotConfiguredError, LLMRequestError
from academicflow.utils.trace import get_trace_id, trace_context_middleware

settings = get_settings()
configure_logging()
logger = get_logger(__name__)

if settings.sentry_dsn:
    sentry_sdk.init(dsn=settings.sentry_dsn, environment=settings.environment)


@asynccontextmanager
async def lifespan(_: FastAPI):
    if settings.environment == "development":
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    logger.info("startup_complete", environment=settings.environment, llm_configured=settings.llm_configured)
    yield
    await engine.dispose()


app = FastAPI(title=settings.app_name, default_response_class=ORJSONResponse, lifespan=lifespan)
app.middleware("http")(trace_context_middleware)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PATCH", "DELETE", "OPTIONS"],
    allow_headers=["*"],
)


@app.middleware("http")
async def security_headers(request: Request, call_next):
    response = await call_next(request)
    response.headers["X-Content-Type-Options"] = "nosniff"
    response.headers["X-Frame-Options"] = "DENY"
    response.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"
    response.headers["Strict-Transport-Security"] = "max-age=31536000; includeSubDomains"
    return response


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(_: Request, exc: RequestValidationError):
    return ORJSONResponse(
        status_code=422,
        content=ErrorResponse(detail=str(exc), trace_id=get_trace_id()).model_dump(),
    )


@app.exception_handler(LLMNotConfiguredError)
async def llm_not_configured_handler(_: Request, exc: LLMNotConfiguredError):
    return ORJSONResponse(
        status_code=503,
        content=ErrorResponse(detail="AI service is not configured", trace_id=get_trace_id()).model_dump(),
    )


@app.exception_handler(LLMRequestError)
async def llm_request_error_handler(_: Request, exc: LLMRequestError):
    logger.warning("llm_request_error", error=str(exc), trace_id=get_trace_id())
    return ORJSONResponse(
        status_code=502,
        content=ErrorResponse(detail="AI service request failed", trace_id=get_trace_id()).model_dump(),
    )


@app.exception_handler(Exception)
async def unhandled_exception_handler(_: Request, exc: Exception):
    logger.exception("unhandled_exception", error=str(exc), trace_id=get_trace_id())
    return ORJSONResponse(
        status_code=500,
        content=ErrorResponse(detail="Internal server error", trace_id=get_trace_id()).model_dump(),
    )


Instrumentator().instrument(app).expose(app)


@app.get("/healthz", response_model=HealthResponse)
async def healthz() -> HealthResponse:
    return HealthResponse(status="ok")


@app.get("/readyz")
async def readyz() -> dict:
    async with engine.connect() as conn:
        await conn.execute(text("SELECT 1"))
    return {"status": "ready", "time": datetime.now(timezone.utc).isoformat()}


app.include_router(v1_router, prefix=settings.api_prefix)
