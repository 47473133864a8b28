"""
Application core: exceptions, logging and FastAPI wiring
"""

from github_agent.core.exceptions import (
    AppError,
    InvalidInputError,
    NotFoundError,
    UpstreamError,
    GitHubError,
    LLMError,
    GraphStoreError,
    ServiceUnavailableError,
)

__all__ = [
    "AppError",
    "InvalidInputError",
    "NotFoundError",
    "UpstreamError",
    "GitHubError",
    "LLMError",
    "GraphStoreError",
    "ServiceUnavailableError",
]
