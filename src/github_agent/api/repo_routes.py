"""
Repository browsing routes
"""

from typing import List

from fastapi import APIRouter, Depends, HTTPException
from loguru import logger

from github_agent.core.dependencies import get_github_client
from github_agent.core.exceptions import AppError, InvalidInputError
from github_agent.models import FileContent, RepoFile, RepositoryInfo
from github_agent.models.requests import FileRequest, RepositoryRequest
from github_agent.services.github import GitHubClient, parse_repo_url

router = APIRouter()


@router.post("/repo/info", response_model=RepositoryInfo)
async def repository_info(request: RepositoryRequest, github: GitHubClient = Depends(get_github_client)):
    """Repository metadata and language breakdown"""
    try:
        owner, repo = parse_repo_url(request.url)
        return await github.get_repository_info(owner, repo)
    except AppError:
        raise
    except Exception as e:
        logger.error(f"Get repository info failed: {e}")
        raise HTTPException(status_code=500, detail=str(e))


@router.post("/repo/file", response_model=FileContent)
async def file_content(request: FileRequest, github: GitHubClient = Depends(get_github_client)):
    try:
        if not request.path:
            raise InvalidInputError("path is required")
        owner, repo = parse_repo_url(request.url)
        return await github.get_file_content(owner, repo, request.path, request.branch)
    except AppError:
        raise
    except Exception as e:
        logger.error(f"Get file content failed: {e}")
        raise HTTPException(status_code=500, detail=str(e))


@router.post("/repo/files", response_model=List[RepoFile])
async def list_files(request: FileRequest, github: GitHubClient = Depends(get_github_client)):
    """Entries of one directory (repository root by default)"""
    try:
        owner, repo = parse_repo_url(request.url)
        return await github.list_files(owner, repo, request.path, request.branch)
    except AppError:
        raise
    except Exception as e:
        logger.error(f"List files failed: {e}")
        raise HTTPException(status_code=500, detail=str(e))
