"""
Route configuration module
"""

from fastapi import FastAPI

from github_agent.api.routes import router
from github_agent.api.repo_routes import router as repo_router
from github_agent.api.generation_routes import router as generation_router
from github_agent.api.navigation_routes import router as navigation_router
from github_agent.api.pr_routes import router as pr_router
from github_agent.config import settings


def setup_routes(app: FastAPI) -> None:
    """set application routes"""
    prefix = settings.api_prefix

    app.include_router(router, prefix=prefix, tags=["General"])
    app.include_router(repo_router, prefix=prefix, tags=["Repository"])
    app.include_router(generation_router, prefix=prefix, tags=["Generation"])
    app.include_router(navigation_router, prefix=prefix, tags=["Code Navigation"])
    app.include_router(pr_router, prefix=prefix, tags=["Pull Requests"])
