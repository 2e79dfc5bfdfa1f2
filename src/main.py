"""FastAPI application entry point.

Run with: uvicorn src.main:app --reload --port 8000
"""

# ruff: noqa: E402  -- uvloop.install() must run before other imports

import uvloop

uvloop.install()

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy import text

from config.settings import settings
from src.fpl_common.database import async_session_factory, engine
from src.fpl_common.errors import AppError
from src.fpl_common.logging_config import configure_logging
from src.fpl_common.redis_client import close_redis, get_redis
from src.fpl_common.response import error_response
from src.fpl_gateway.api.router import router as device_router
from src.fpl_gateway.container import build_services
from src.fpl_gateway.graphql.router import graphql_router
from src.fpl_gateway.middleware.request_log import RequestLogMiddleware

configure_logging()
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Startup: verify DB + Redis, wire services. Shutdown: dispose."""
    # Startup
    async with engine.connect() as conn:
        await conn.execute(text("SELECT 1"))
    redis = await get_redis()
    await redis.ping()
    app.state.services = build_services(async_session_factory, redis, settings)
    logger.info(
        "Gateway started: cache_ttl=%ds live_ttl=%ds single_flight=%s",
        settings.CACHE_TTL_SECONDS,
        settings.LIVE_CACHE_TTL_SECONDS,
        settings.CACHE_SINGLE_FLIGHT,
    )
    yield
    # Shutdown
    await engine.dispose()
    await close_redis()


app = FastAPI(
    title=settings.APP_NAME,
    version="0.1.0",
    lifespan=lifespan,
)


app.add_middleware(RequestLogMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=[origin.strip() for origin in settings.CORS_ORIGIN.split(",")],
    allow_credentials=settings.CORS_CREDENTIALS,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["Content-Type", "Authorization"],
)


@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    resp = error_response(exc.code, exc.message, getattr(request.state, "request_id", None))
    return JSONResponse(
        status_code=exc.http_status,
        content=resp.model_dump(),
    )


app.include_router(device_router, prefix="/api")
app.include_router(graphql_router, prefix="/graphql")


@app.get("/health")
async def health() -> dict[str, str]:
    return {"status": "ok", "version": "0.1.0"}
