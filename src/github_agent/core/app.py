"""
FastAPI application configuration module
Responsible for creating and configuring FastAPI application instance
"""

from fastapi import FastAPI

from github_agent import get_features
from github_agent.config import settings
from github_agent.core.exception_handlers import setup_exception_handlers
from github_agent.core.middleware import setup_middleware
from github_agent.core.routes import setup_routes
from github_agent.core.lifespan import lifespan


def create_app() -> FastAPI:
    """create FastAPI application instance"""

    app = FastAPI(
        title=settings.app_name,
        description="AI assistant for GitHub repositories: walkthroughs, architecture diagrams, Q&A, PR summaries and generated files",
        version=settings.app_version,
        lifespan=lifespan,
        docs_url="/docs" if settings.debug else None,
        redoc_url="/redoc" if settings.debug else None
    )

    setup_middleware(app)
    setup_exception_handlers(app)
    setup_routes(app)

    @app.get("/")
    async def root():
        """root path interface"""
        return {
            "message": f"Welcome to {settings.app_name}",
            "version": settings.app_version,
            "docs": "/docs" if settings.debug else "Documentation disabled in production",
            "health": f"{settings.api_prefix}/health",
            "features": get_features()
        }

    return app
