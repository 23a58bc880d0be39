# app/main.py
import time
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from app.api import api_router
from app.api.errors import register_error_handlers
from app.api.routers import health
from app.data.database import init_db
from app.data.seed import seed
from app.utils.logging import get_logger, init_logging
from app.utils.settings import CORS_ORIGINS, SEED_ON_STARTUP

init_logging()
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    #tabele + dane startowe przed pierwszym requestem
    logger.info("Initializing database")
    init_db()
    if SEED_ON_STARTUP:
        seed()
    logger.info("Store API started")
    yield
    logger.info("Store API stopped")


def create_app() -> FastAPI:
    app = FastAPI(
        title="Store API",
        version="1.0.0",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=CORS_ORIGINS,
        allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
        allow_headers=["*"],
        #credentials nie ida w parze z "*"
        allow_credentials="*" not in CORS_ORIGINS,
    )

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        start = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = (time.perf_counter() - start) * 1000
        logger.info(f"{request.method} {request.url.path} -> {response.status_code} ({elapsed_ms:.1f} ms)")
        return response

    register_error_handlers(app)

    # Include routers
    app.include_router(health.router)
    app.include_router(api_router)

    return app


app = create_app()

if __name__ == "__main__":
    uvicorn.run(app, host="0.0.0.0", port=8000)
