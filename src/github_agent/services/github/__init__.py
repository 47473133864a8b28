"""
GitHub access
"""

from github_agent.services.github.client import GitHubClient
from github_agent.services.github.utils import (
    parse_repo_url,
    parse_pull_request_url,
    is_source_file,
    language_from_path,
    extract_function_code,
)

__all__ = [
    "GitHubClient",
    "parse_repo_url",
    "parse_pull_request_url",
    "is_source_file",
    "language_from_path",
    "extract_function_code",
]
