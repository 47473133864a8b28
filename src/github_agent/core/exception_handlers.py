"""
Exception handler module
"""

from fastapi import FastAPI, HTTPException
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from loguru import logger

from github_agent.config import settings
from github_agent.core.exceptions import AppError


def setup_exception_handlers(app: FastAPI) -> None:
    """set exception handlers"""

    @app.exception_handler(AppError)
    async def app_error_handler(request, exc: AppError):
        if exc.status_code >= 500:
            logger.error(f"{request.url.path} failed: {exc}")
        else:
            logger.warning(f"{request.url.path} rejected: {exc}")
        return JSONResponse(status_code=exc.status_code, content=exc.to_dict())

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request, exc: RequestValidationError):
        logger.warning(f"{request.url.path} invalid request body: {exc.errors()}")
        return JSONResponse(
            status_code=422,
            content={
                "error": "invalid request",
                "code": "invalid_input",
                "details": jsonable_encoder(exc.errors()),
            }
        )

    @app.exception_handler(HTTPException)
    async def http_exception_handler(request, exc):
        logger.warning(f"HTTP exception: {exc.status_code} - {exc.detail}")
        return JSONResponse(
            status_code=exc.status_code,
            content={
                "error": "HTTP error",
                "message": exc.detail
            }
        )

    @app.exception_handler(Exception)
    async def global_exception_handler(request, exc):
        logger.error(f"Global exception: {exc}")
        return JSONResponse(
            status_code=500,
            content={
                "error": "Internal server error",
                "message": str(exc) if settings.debug else "An unexpected error occurred"
            }
        )
