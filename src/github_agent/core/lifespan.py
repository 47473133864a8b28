"""
Application lifecycle management module
"""

from contextlib import asynccontextmanager
from fastapi import FastAPI
from loguru import logger

from github_agent.config import settings, validate_all_settings
from github_agent.services.github import GitHubClient
from github_agent.services.graph import Neo4jGraphService
from github_agent.services.llm import LLMClient


@asynccontextmanager
async def lifespan(app: FastAPI):
    """application lifecycle management"""
    logger.info(f"Starting {settings.app_name} v{settings.app_version}...")

    try:
        await initialize_services(app)
        yield
    except Exception as e:
        logger.error(f"Service initialization failed: {e}")
        raise
    finally:
        await cleanup_services(app)


async def initialize_services(app: FastAPI):
    """create shared clients and attach them to app.state"""
    report = validate_all_settings()
    logger.info(f"Configuration check: {report}")

    app.state.github = GitHubClient()
    app.state.llm = LLMClient()
    app.state.graph_store = None

    if not settings.enable_graph_store:
        logger.info("Graph store disabled, architecture diagrams use the file-structure fallback")
        return

    logger.info("Connecting to Neo4j graph store...")
    graph_store = Neo4jGraphService()
    if await graph_store.connect():
        app.state.graph_store = graph_store
        logger.info("Neo4j graph store connected")
    else:
        logger.warning("Neo4j is unavailable - application will continue without the graph store")


async def cleanup_services(app: FastAPI):
    """close shared clients"""
    logger.info("Shutting down services...")

    github = getattr(app.state, "github", None)
    if github is not None:
        await github.aclose()

    graph_store = getattr(app.state, "graph_store", None)
    if graph_store is not None:
        await graph_store.close()

    logger.info("Services shut down successfully")
