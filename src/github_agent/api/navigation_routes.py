"""
Code navigation routes
"""

from fastapi import APIRouter, Depends, HTTPException
from loguru import logger

from github_agent.core.dependencies import get_navigation_service
from github_agent.core.exceptions import AppError
from github_agent.models import (
    ArchitectureDiagram,
    BestPracticesResponse,
    CodebaseQAResponse,
    CodeWalkthroughResponse,
    FunctionExplanation,
)
from github_agent.models.requests import (
    ArchitectureGraphResponse,
    ArchitectureVisualizerRequest,
    BestPracticesRequest,
    CodebaseQARequest,
    CodeWalkthroughRequest,
    FunctionExplainerRequest,
    GraphStoreResponse,
    RepositoryRequest,
)
from github_agent.services.github import parse_repo_url
from github_agent.services.navigation import CodeNavigationService

router = APIRouter(prefix="/navigate")


@router.post("/walkthrough", response_model=CodeWalkthroughResponse)
async def code_walkthrough(
    request: CodeWalkthroughRequest,
    service: CodeNavigationService = Depends(get_navigation_service),
):
    """Guided tour of the codebase starting at its entry points"""
    try:
        owner, repo = parse_repo_url(request.url)
        return await service.generate_walkthrough(
            owner, repo, request.branch, request.depth, request.focus_path, request.entry_points
        )
    except AppError:
        raise
    except Exception as e:
        logger.error(f"Walkthrough generation failed: {e}")
        raise HTTPException(status_code=500, detail=str(e))


@router.post("/function", response_model=FunctionExplanation)
async def explain_function(
    request: FunctionExplainerRequest,
    service: CodeNavigationService = Depends(get_navigation_service),
):
    try:
        owner, repo = parse_repo_url(request.url)
        return await service.explain_function(
            owner,
            repo,
            request.branch,
            request.file_path,
            request.function_name,
            request.line_start,
            request.line_end,
        )
    except AppError:
        raise
    except Exception as e:
        logger.error(f"Function explanation failed: {e}")
        raise HTTPException(status_code=500, detail=str(e))


@router.post("/architecture", response_model=ArchitectureDiagram)
async def visualize_architecture(
    request: ArchitectureVisualizerRequest,
    service: CodeNavigationService = Depends(get_navigation_service),
):
    """Architecture diagram from the graph store, or from the file listing when it is unavailable"""
    try:
        owner, repo = parse_repo_url(request.url)
        return await service.visualize_architecture(owner, repo, request.branch, request.detail, request.focus_paths)
    except AppError:
        raise
    except Exception as e:
        logger.error(f"Architecture visualization failed: {e}")
        raise HTTPException(status_code=500, detail=str(e))


@router.post("/architecture-graph", response_model=GraphStoreResponse)
async def architecture_graph(
    request: RepositoryRequest,
    service: CodeNavigationService = Depends(get_navigation_service),
):
    try:
        owner, repo = parse_repo_url(request.url)
        return await service.get_architecture_graph(owner, repo, request.branch)
    except AppError:
        raise
    except Exception as e:
        logger.error(f"Architecture graph failed: {e}")
        raise HTTPException(status_code=500, detail=str(e))


@router.post("/explain-architecture", response_model=ArchitectureGraphResponse)
async def explain_architecture(
    request: RepositoryRequest,
    service: CodeNavigationService = Depends(get_navigation_service),
):
    try:
        owner, repo = parse_repo_url(request.url)
        return await service.explain_architecture_graph(owner, repo, request.branch)
    except AppError:
        raise
    except Exception as e:
        logger.error(f"Architecture explanation failed: {e}")
        raise HTTPException(status_code=500, detail=str(e))


@router.post("/question", response_model=CodebaseQAResponse)
async def answer_question(
    request: CodebaseQARequest,
    service: CodeNavigationService = Depends(get_navigation_service),
):
    try:
        owner, repo = parse_repo_url(request.url)
        return await service.answer_question(owner, repo, request.branch, request.question, request.keywords)
    except AppError:
        raise
    except Exception as e:
        logger.error(f"Codebase question failed: {e}")
        raise HTTPException(status_code=500, detail=str(e))


@router.post("/practices", response_model=BestPracticesResponse)
async def best_practices(
    request: BestPracticesRequest,
    service: CodeNavigationService = Depends(get_navigation_service),
):
    try:
        owner, repo = parse_repo_url(request.url)
        return await service.generate_best_practices(owner, repo, request.branch, request.scope, request.path)
    except AppError:
        raise
    except Exception as e:
        logger.error(f"Best practices generation failed: {e}")
        raise HTTPException(status_code=500, detail=str(e))
