"""
Web server entry point for GitHub Agent.
"""

import uvicorn
from loguru import logger

from github_agent.config import get_current_model_info, settings
from github_agent.core.app import create_app
from github_agent.core.logging import setup_logging

# setup logging
setup_logging()

app = create_app()


def start_server():
    """Start the REST API server"""
    logger.info("=" * 70)
    logger.info(f"{settings.app_name} v{settings.app_version}")
    logger.info(f"REST API: http://{settings.host}:{settings.port}{settings.api_prefix}/")
    logger.info(f"LLM: {get_current_model_info()}")
    logger.info(f"Graph store: {'enabled' if settings.enable_graph_store else 'disabled'}")
    logger.info("=" * 70)

    uvicorn.run(
        "github_agent.server.web:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
        log_level="info" if not settings.debug else "debug",
        access_log=settings.debug
    )


def main():
    """Main entry point for web server"""
    try:
        start_server()
    except KeyboardInterrupt:
        logger.info("Server interrupted by user")
    return 0


if __name__ == "__main__":
    main()
