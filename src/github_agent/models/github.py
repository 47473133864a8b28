"""
Models for data fetched from the GitHub API
"""

from typing import Dict, List, Literal, Optional

from pydantic import BaseModel, Field


class RepositoryInfo(BaseModel):
    owner: str
    name: str
    full_name: str = ""
    description: str = ""
    default_branch: str = "main"
    language: str = ""
    languages: Dict[str, int] = Field(default_factory=dict)
    stars: int = 0
    forks: int = 0
    topics: List[str] = Field(default_factory=list)
    html_url: str = ""


class RepoFile(BaseModel):
    """Entry of a directory listing or recursive tree"""
    name: str
    path: str
    type: Literal["file", "dir"] = "file"
    size: int = 0


class FileContent(BaseModel):
    path: str
    content: str
    size: int = 0
    sha: str = ""


class CodeSearchResult(BaseModel):
    path: str
    name: str = ""
    html_url: str = ""


class PullRequestFile(BaseModel):
    filename: str
    status: str = "modified"
    additions: int = 0
    deletions: int = 0
    changes: int = 0
    patch: Optional[str] = None


class PullRequest(BaseModel):
    number: int
    title: str = ""
    body: str = ""
    author: str = ""
    html_url: str = ""
    state: str = ""
    base_branch: str = ""
    head_branch: str = ""
    additions: int = 0
    deletions: int = 0
    changed_files: int = 0
    files: List[PullRequestFile] = Field(default_factory=list)
