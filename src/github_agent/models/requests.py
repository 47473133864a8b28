"""
Request and response bodies of the REST API
"""

from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, Field


class RepositoryRequest(BaseModel):
    """Every request names a repository by URL"""
    url: str = Field(..., min_length=1)
    branch: str = ""


class FileRequest(RepositoryRequest):
    path: str = ""


class CodeWalkthroughRequest(RepositoryRequest):
    depth: int = Field(default=0, ge=0)
    focus_path: str = ""
    entry_points: List[str] = Field(default_factory=list)


class FunctionExplainerRequest(RepositoryRequest):
    file_path: str = Field(..., min_length=1)
    function_name: str = ""
    line_start: int = Field(default=0, ge=0)
    line_end: int = Field(default=0, ge=0)


class ArchitectureVisualizerRequest(RepositoryRequest):
    detail: Literal["low", "medium", "high"] = "medium"
    focus_paths: List[str] = Field(default_factory=list)


class CodebaseQARequest(RepositoryRequest):
    question: str = Field(..., min_length=1)
    keywords: List[str] = Field(default_factory=list)


class BestPracticesRequest(RepositoryRequest):
    scope: Literal["full", "directory", "file"] = "full"
    path: str = ""


class GenerateReadmeRequest(RepositoryRequest):
    include_files: List[str] = Field(default_factory=list)


class GenerateDockerfileRequest(RepositoryRequest):
    language: str = ""


class CodeCommentsRequest(RepositoryRequest):
    file_path: str = Field(..., min_length=1)


class CodeRefactorRequest(RepositoryRequest):
    file_path: str = Field(..., min_length=1)
    instructions: str = ""


class CodeSearchRequest(RepositoryRequest):
    query: str = Field(..., min_length=1)


class PRSummaryRequest(BaseModel):
    url: str = Field(..., min_length=1)


class LLMOperation(BaseModel):
    type: Literal["summarize", "explain", "review", "document"]
    content: str = Field(..., min_length=1)
    options: Dict[str, Any] = Field(default_factory=dict)


class LLMOperationRequest(BaseModel):
    operation: LLMOperation


class GenerateResponse(BaseModel):
    content: str


class CodeSearchResponse(BaseModel):
    query: str
    results: List[Dict[str, str]] = Field(default_factory=list)
    analysis: str = ""


class ArchitectureGraphResponse(BaseModel):
    graph: Dict[str, Any]
    explanation: str = ""


class GraphStoreResponse(BaseModel):
    success: bool
    message: str = ""
    files: int = 0
    imports: int = 0
    graph: Optional[Dict[str, Any]] = None


class HealthResponse(BaseModel):
    status: str
    services: Dict[str, bool]
    version: str
