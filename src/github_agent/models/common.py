"""
Base model for structures decoded from LLM output
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, model_validator


class LLMResultModel(BaseModel):
    """Result model tolerant of JSON nulls.

    LLMs frequently emit ``null`` for fields they had nothing to say about.
    Null keys are dropped before validation so the field keeps its zero value.
    """

    model_config = ConfigDict(populate_by_name=True)

    @model_validator(mode="before")
    @classmethod
    def _drop_nulls(cls, data: Any) -> Any:
        if isinstance(data, dict):
            return {key: value for key, value in data.items() if value is not None}
        return data


def coerce_int(value: Any, default: int) -> int:
    """Best-effort integer conversion used by field validators"""
    if isinstance(value, bool):
        return default
    try:
        return int(round(float(value)))
    except (TypeError, ValueError):
        return default


def clamp(value: int, lower: int, upper: int) -> int:
    return max(lower, min(upper, value))
