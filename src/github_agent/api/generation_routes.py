"""
Generation routes: README, Dockerfile, comments, refactoring, search and
generic LLM operations
"""

from fastapi import APIRouter, Depends, HTTPException
from loguru import logger

from github_agent.core.dependencies import get_generation_service
from github_agent.core.exceptions import AppError
from github_agent.models.requests import (
    CodeCommentsRequest,
    CodeRefactorRequest,
    CodeSearchRequest,
    CodeSearchResponse,
    GenerateDockerfileRequest,
    GenerateReadmeRequest,
    GenerateResponse,
    LLMOperationRequest,
)
from github_agent.services.github import parse_repo_url
from github_agent.services.navigation import GenerationService

router = APIRouter()


@router.post("/generate/readme", response_model=GenerateResponse)
async def generate_readme(
    request: GenerateReadmeRequest,
    service: GenerationService = Depends(get_generation_service),
):
    try:
        owner, repo = parse_repo_url(request.url)
        return await service.generate_readme(owner, repo, request.branch, request.include_files)
    except AppError:
        raise
    except Exception as e:
        logger.error(f"README generation failed: {e}")
        raise HTTPException(status_code=500, detail=str(e))


@router.post("/generate/dockerfile", response_model=GenerateResponse)
async def generate_dockerfile(
    request: GenerateDockerfileRequest,
    service: GenerationService = Depends(get_generation_service),
):
    try:
        owner, repo = parse_repo_url(request.url)
        return await service.generate_dockerfile(owner, repo, request.branch, request.language)
    except AppError:
        raise
    except Exception as e:
        logger.error(f"Dockerfile generation failed: {e}")
        raise HTTPException(status_code=500, detail=str(e))


@router.post("/generate/comments", response_model=GenerateResponse)
async def generate_comments(
    request: CodeCommentsRequest,
    service: GenerationService = Depends(get_generation_service),
):
    try:
        owner, repo = parse_repo_url(request.url)
        return await service.generate_comments(owner, repo, request.branch, request.file_path)
    except AppError:
        raise
    except Exception as e:
        logger.error(f"Comment generation failed: {e}")
        raise HTTPException(status_code=500, detail=str(e))


@router.post("/generate/refactor", response_model=GenerateResponse)
async def refactor_code(
    request: CodeRefactorRequest,
    service: GenerationService = Depends(get_generation_service),
):
    try:
        owner, repo = parse_repo_url(request.url)
        return await service.refactor_code(owner, repo, request.branch, request.file_path, request.instructions)
    except AppError:
        raise
    except Exception as e:
        logger.error(f"Refactoring failed: {e}")
        raise HTTPException(status_code=500, detail=str(e))


@router.post("/search/code", response_model=CodeSearchResponse)
async def search_code(
    request: CodeSearchRequest,
    service: GenerationService = Depends(get_generation_service),
):
    """GitHub code search with a short LLM analysis of the matches"""
    try:
        owner, repo = parse_repo_url(request.url)
        return await service.search_code(owner, repo, request.query)
    except AppError:
        raise
    except Exception as e:
        logger.error(f"Code search failed: {e}")
        raise HTTPException(status_code=500, detail=str(e))


@router.post("/llm/operation", response_model=GenerateResponse)
async def llm_operation(
    request: LLMOperationRequest,
    service: GenerationService = Depends(get_generation_service),
):
    try:
        return await service.llm_operation(request.operation)
    except AppError:
        raise
    except Exception as e:
        logger.error(f"LLM operation failed: {e}")
        raise HTTPException(status_code=500, detail=str(e))
