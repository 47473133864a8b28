"""
Pull request routes
"""

from fastapi import APIRouter, Depends, HTTPException
from loguru import logger

from github_agent.core.dependencies import get_pr_service
from github_agent.core.exceptions import AppError
from github_agent.models import PRSummary
from github_agent.models.requests import PRSummaryRequest
from github_agent.services.navigation import PRSummaryService

router = APIRouter()


@router.post("/pr/summary", response_model=PRSummary)
async def summarize_pull_request(
    request: PRSummaryRequest,
    service: PRSummaryService = Depends(get_pr_service),
):
    """Summary of a pull request with its changed files grouped"""
    try:
        return await service.summarize(request.url)
    except AppError:
        raise
    except Exception as e:
        logger.error(f"PR summary failed: {e}")
        raise HTTPException(status_code=500, detail=str(e))
