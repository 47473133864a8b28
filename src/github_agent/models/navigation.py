"""
Result models for code navigation features
"""

from typing import Dict, List, Literal

from pydantic import Field, field_validator

from github_agent.models.common import LLMResultModel, clamp, coerce_int


class WalkthroughStep(LLMResultModel):
    """One stop in a guided code walkthrough"""
    name: str = ""
    path: str = ""
    description: str = ""
    importance: int = 5  # 1-10

    @field_validator("importance", mode="before")
    @classmethod
    def _normalize_importance(cls, value):
        return clamp(coerce_int(value, 5), 1, 10)


class CodeWalkthroughResponse(LLMResultModel):
    overview: str = ""
    entry_points: List[str] = Field(default_factory=list)
    steps: List[WalkthroughStep] = Field(default_factory=list, alias="walkthrough")
    dependencies: Dict[str, List[str]] = Field(default_factory=dict)


class Param(LLMResultModel):
    """A function parameter or return value"""
    name: str = ""
    type: str = ""
    description: str = ""


class FunctionExplanation(LLMResultModel):
    function_name: str = ""
    description: str = ""
    parameters: List[Param] = Field(default_factory=list)
    return_values: List[Param] = Field(default_factory=list)
    usage_examples: List[str] = Field(default_factory=list)
    complexity: str = ""
    related_functions: List[str] = Field(default_factory=list)


class DiagramNode(LLMResultModel):
    id: str
    label: str = ""
    type: Literal["file", "directory", "component"] = "file"
    size: int = 5
    category: str = "other"
    layer: str = "unknown"
    technology: str = "unknown"
    metadata: Dict[str, str] = Field(default_factory=dict)


class DiagramEdge(LLMResultModel):
    source: str
    target: str
    type: str = "related_to"
    weight: int = 1
    label: str = ""
    bidirectional: bool = False
    metadata: Dict[str, str] = Field(default_factory=dict)


class DiagramData(LLMResultModel):
    nodes: List[DiagramNode] = Field(default_factory=list)
    edges: List[DiagramEdge] = Field(default_factory=list)


class ArchitectureDiagram(LLMResultModel):
    overview: str = ""
    diagram_data: DiagramData = Field(default_factory=DiagramData)
    component_descriptions: Dict[str, str] = Field(default_factory=dict)


class RelevantFile(LLMResultModel):
    path: str = ""
    snippet: str = ""
    relevance: int = 1  # 1-100
    start_line: int = 0
    end_line: int = 0

    @field_validator("relevance", mode="before")
    @classmethod
    def _normalize_relevance(cls, value):
        return clamp(coerce_int(value, 1), 1, 100)

    @field_validator("start_line", "end_line", mode="before")
    @classmethod
    def _normalize_line(cls, value):
        return max(0, coerce_int(value, 0))


class CodebaseQAResponse(LLMResultModel):
    answer: str = ""
    relevant_files: List[RelevantFile] = Field(default_factory=list)
    followup_questions: List[str] = Field(default_factory=list)


class Practice(LLMResultModel):
    title: str = ""
    description: str = ""
    examples: List[str] = Field(default_factory=list)


class Issue(LLMResultModel):
    path: str = ""
    line: int = 0
    description: str = ""
    severity: Literal["low", "medium", "high"] = "medium"
    suggestion: str = ""

    @field_validator("line", mode="before")
    @classmethod
    def _normalize_line(cls, value):
        return max(0, coerce_int(value, 0))

    @field_validator("severity", mode="before")
    @classmethod
    def _normalize_severity(cls, value):
        severity = str(value).strip().lower()
        return severity if severity in ("low", "medium", "high") else "medium"


class BestPracticesResponse(LLMResultModel):
    style_guide: str = ""
    practices: List[Practice] = Field(default_factory=list)
    issues: List[Issue] = Field(default_factory=list)
