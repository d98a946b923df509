"""FastAPI application factory and configuration."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import SQLModel

from . import models  # noqa: F401 - ensure models are registered with SQLModel
from .api import register_routes
from .core import (
    ALLOWED_CORS_ORIGINS,
    APP_VERSION,
    DB_RESET,
    FIREFOX_EXTENSION_ORIGIN_REGEX,
    ResultCache,
    engine,
)
from .core.errors import PopaloonError
from .core.logging import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    if DB_RESET:
        SQLModel.metadata.drop_all(engine)
    SQLModel.metadata.create_all(engine)
    logger.info("Database ready at %s", engine.url.render_as_string(hide_password=True))
    yield


async def handle_domain_error(request: Request, exc: PopaloonError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    return JSONResponse({"detail": exc.message}, status_code=exc.status_code)


async def handle_store_error(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    logger.error(
        "Store failure on %s %s", request.method, request.url.path, exc_info=exc
    )
    return JSONResponse({"detail": "Internal server error"}, status_code=500)


def create_app(cache: Optional[ResultCache] = None) -> FastAPI:
    setup_logging()

    app = FastAPI(title="Pop-a-loon API", version=APP_VERSION, lifespan=lifespan)
    app.state.cache = cache if cache is not None else ResultCache()

    app.add_middleware(
        CORSMiddleware,
        allow_origins=ALLOWED_CORS_ORIGINS,
        allow_origin_regex=FIREFOX_EXTENSION_ORIGIN_REGEX,
        allow_credentials=True,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        logger.info("API request: %s %s", request.method, request.url.path)
        return await call_next(request)

    app.add_exception_handler(PopaloonError, handle_domain_error)
    app.add_exception_handler(SQLAlchemyError, handle_store_error)

    register_routes(app)
    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("popaloon.app:app", host="127.0.0.1", port=3000, reload=True)
