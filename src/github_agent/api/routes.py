from typing import Optional

from fastapi import APIRouter, Depends, HTTPException
from loguru import logger

from github_agent.config import settings
from github_agent.core.dependencies import get_graph_store
from github_agent.models.requests import HealthResponse
from github_agent.services.graph import Neo4jGraphService

# create router
router = APIRouter()


# health check
@router.get("/health", response_model=HealthResponse)
async def health_check(graph_store: Optional[Neo4jGraphService] = Depends(get_graph_store)):
    """health check interface"""
    try:
        graph_connected = graph_store is not None and graph_store.connected
        services_status = {
            "github_token": bool(settings.github_token),
            "graph_store": graph_connected,
        }

        healthy = graph_connected or not settings.enable_graph_store
        return HealthResponse(
            status="healthy" if healthy else "degraded",
            services=services_status,
            version=settings.app_version
        )
    except Exception as e:
        logger.error(f"Health check failed: {e}")
        raise HTTPException(status_code=500, detail=str(e))
