"""
Pull request summary models
"""

from typing import List

from pydantic import Field, field_validator

from github_agent.models.common import LLMResultModel, clamp, coerce_int


class FileGroup(LLMResultModel):
    """Changed files that belong together"""
    name: str = ""
    description: str = ""
    files: List[str] = Field(default_factory=list)
    importance: int = 5  # 1-10

    @field_validator("importance", mode="before")
    @classmethod
    def _normalize_importance(cls, value):
        return clamp(coerce_int(value, 5), 1, 10)


class PRSummary(LLMResultModel):
    title: str = ""
    description: str = ""
    main_points: List[str] = Field(default_factory=list)
    key_changes: List[str] = Field(default_factory=list)
    file_groups: List[FileGroup] = Field(default_factory=list)
    potential_impact: str = ""
    suggested_reviewers: List[str] = Field(default_factory=list)
    technical_details: str = ""

    # PR metadata, filled from GitHub rather than the LLM
    pr_number: int = 0
    pr_url: str = ""
    repository: str = ""
    author: str = ""
    changed_files: int = 0
    additions: int = 0
    deletions: int = 0
