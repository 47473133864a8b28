"""
Application exception hierarchy

Every error that reaches the HTTP layer is an AppError carrying a status code
and a stable machine-readable code. Upstream failures wrap the original
exception so the context message reads like "failed to get repository info: ...".
"""

from typing import Optional


class AppError(Exception):
    """Base application error"""

    status_code = 500
    default_code = "internal_error"

    def __init__(self, message: str, code: Optional[str] = None, cause: Optional[BaseException] = None):
        super().__init__(message)
        self.message = message
        self.code = code or self.default_code
        self.cause = cause

    def __str__(self) -> str:
        if self.cause is not None:
            return f"{self.message}: {self.cause}"
        return self.message

    @classmethod
    def wrap(cls, cause: BaseException, message: str, code: Optional[str] = None) -> "AppError":
        """Wrap a lower-level exception with a context message"""
        return cls(message, code=code, cause=cause)

    def to_dict(self) -> dict:
        return {
            "error": self.message,
            "code": self.code,
            "details": str(self.cause) if self.cause is not None else "",
        }


class InvalidInputError(AppError):
    """Caller supplied invalid input; always surfaced, never corrected"""

    status_code = 400
    default_code = "invalid_input"


class NotFoundError(AppError):
    status_code = 404
    default_code = "not_found"


class UpstreamError(AppError):
    """An external collaborator failed"""

    status_code = 502
    default_code = "upstream_error"


class GitHubError(UpstreamError):
    default_code = "github_error"


class LLMError(UpstreamError):
    default_code = "llm_error"


class GraphStoreError(UpstreamError):
    default_code = "graph_store_error"


class ServiceUnavailableError(AppError):
    status_code = 503
    default_code = "service_unavailable"
