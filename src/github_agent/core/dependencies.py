"""
Request-scoped dependency providers

Shared clients live on app.state (see lifespan); services are assembled per
request from them so routes never touch process globals.
"""

from typing import Optional

from fastapi import Depends, Request

from github_agent.config import settings
from github_agent.services.github import GitHubClient
from github_agent.services.graph import DiagramMapper, Neo4jGraphService
from github_agent.services.llm import LLMClient
from github_agent.services.navigation import CodeNavigationService, GenerationService, PRSummaryService


def get_github_client(request: Request) -> GitHubClient:
    return request.app.state.github


def get_llm_client(request: Request) -> LLMClient:
    return request.app.state.llm


def get_graph_store(request: Request) -> Optional[Neo4jGraphService]:
    return getattr(request.app.state, "graph_store", None)


def get_diagram_mapper() -> DiagramMapper:
    return DiagramMapper(
        directory_boost=settings.diagram_directory_boost,
        entry_point_boost=settings.diagram_entry_point_boost,
        max_nodes={
            "low": settings.diagram_max_nodes_low,
            "medium": settings.diagram_max_nodes_medium,
        },
    )


def get_navigation_service(
    github: GitHubClient = Depends(get_github_client),
    llm: LLMClient = Depends(get_llm_client),
    graph_store: Optional[Neo4jGraphService] = Depends(get_graph_store),
    mapper: DiagramMapper = Depends(get_diagram_mapper),
) -> CodeNavigationService:
    return CodeNavigationService(github, llm, graph_store, mapper=mapper)


def get_pr_service(
    github: GitHubClient = Depends(get_github_client),
    llm: LLMClient = Depends(get_llm_client),
) -> PRSummaryService:
    return PRSummaryService(github, llm)


def get_generation_service(
    github: GitHubClient = Depends(get_github_client),
    llm: LLMClient = Depends(get_llm_client),
) -> GenerationService:
    return GenerationService(github, llm)
