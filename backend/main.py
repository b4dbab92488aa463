# ---------------------------------------------------------------------------
# Author  : Kyle <kyle@hacking-linux.com>
# Version : 20260206v1
# ---------------------------------------------------------------------------
"""
FastAPI application factory.

Responsibilities
----------------
* Build the in-memory UserDirectory (and its SessionStore) and attach both
  to ``app.state`` so that every app instance owns its own state.
* Register CORS and request-logging middleware.
* Mount the two feature routers (auth, admin).
* Expose a /health endpoint for container liveness checks.

Run with:
    uvicorn main:app --app-dir backend
"""

import time
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from starlette.middleware.base import BaseHTTPMiddleware
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import Response

from auth.router import router as auth_router
from admin.router import router as admin_router
from core.config import settings
from core.logger import logger
from directory.users import UserDirectory


# ---------------------------------------------------------------------------
# Request-logging middleware
# ---------------------------------------------------------------------------
# Logs every inbound request: method, path, client IP, status, latency.
# Bodies (passwords) and headers (tokens) are never echoed.


class _RequestLogMiddleware(BaseHTTPMiddleware):
    """Log method, path, client IP, response status and latency (ms)."""

    async def dispatch(self, request: Request, call_next) -> Response:
        start = time.perf_counter()
        response: Response = await call_next(request)
        elapsed_ms = (time.perf_counter() - start) * 1000

        client_ip = request.client.host if request.client else "unknown"

        logger.info(
            "%s %s | client=%s status=%d latency=%.1fms",
            request.method,
            request.url.path,
            client_ip,
            response.status_code,
            elapsed_ms,
        )
        return response


@asynccontextmanager
async def _lifespan(app: FastAPI):
    logger.info("Users Directory service starting up")
    yield
    logger.info("Users Directory service shutting down")


def create_app(directory: UserDirectory | None = None) -> FastAPI:
    """
    Build an application around *directory*.  A fresh directory with the
    bootstrap admin is created when none is given.
    """
    app = FastAPI(title="Users Directory", version="1.0.0", lifespan=_lifespan)

    app.state.directory = directory if directory is not None else UserDirectory()
    app.state.sessions = app.state.directory.sessions

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PATCH", "DELETE"],
        allow_headers=["Authorization", "Content-Type"],
    )
    app.add_middleware(_RequestLogMiddleware)

    app.include_router(auth_router)
    app.include_router(admin_router)

    @app.get("/health")
    def health():
        return {"status": "ok"}

    return app


app = create_app()
