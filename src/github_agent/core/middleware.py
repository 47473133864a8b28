"""
Middleware configuration module
"""

import time

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from loguru import logger

from github_agent.config import settings


def setup_middleware(app: FastAPI) -> None:
    """set application middleware"""

    # the frontend is served from another origin
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["*"],
    )

    # generated READMEs and diagrams compress well
    app.add_middleware(GZipMiddleware, minimum_size=settings.gzip_minimum_size)

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        start_time = time.time()
        response = await call_next(request)
        elapsed_ms = (time.time() - start_time) * 1000
        logger.info(f"{request.method} {request.url.path} -> {response.status_code} ({elapsed_ms:.0f}ms)")
        response.headers["X-Process-Time-Ms"] = f"{elapsed_ms:.0f}"
        return response
