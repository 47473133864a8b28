"""
Data models for GitHub Agent
"""

from github_agent.models.navigation import (
    WalkthroughStep,
    CodeWalkthroughResponse,
    Param,
    FunctionExplanation,
    DiagramNode,
    DiagramEdge,
    DiagramData,
    ArchitectureDiagram,
    RelevantFile,
    CodebaseQAResponse,
    Practice,
    Issue,
    BestPracticesResponse,
)
from github_agent.models.pr_summary import FileGroup, PRSummary
from github_agent.models.github import (
    RepositoryInfo,
    RepoFile,
    FileContent,
    CodeSearchResult,
    PullRequestFile,
    PullRequest,
)

__all__ = [
    "WalkthroughStep",
    "CodeWalkthroughResponse",
    "Param",
    "FunctionExplanation",
    "DiagramNode",
    "DiagramEdge",
    "DiagramData",
    "ArchitectureDiagram",
    "RelevantFile",
    "CodebaseQAResponse",
    "Practice",
    "Issue",
    "BestPracticesResponse",
    "FileGroup",
    "PRSummary",
    "RepositoryInfo",
    "RepoFile",
    "FileContent",
    "CodeSearchResult",
    "PullRequestFile",
    "PullRequest",
]
