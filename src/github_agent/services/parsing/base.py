"""
Shared helpers for turning LLM output into typed results.

Every task parser follows the same two-step contract: slice the text from the
first ``{`` to the last ``}`` and decode it into the result model; when that
fails, hand the raw text to a task-specific heuristic extractor. The pair is
total: callers always receive a result object, never an exception.
"""

import json
import re
from typing import Callable, Optional, Tuple, Type, TypeVar

from loguru import logger
from pydantic import BaseModel, ValidationError

T = TypeVar("T", bound=BaseModel)

_BULLET_PATTERN = re.compile(r"^\s*(?:[-*+•]|\d+[.)])\s+")
_HEADER_PATTERN = re.compile(r"^\s*(#{1,6})\s*(.*?)\s*#*\s*$")
_DECORATION = " \t*_`"


def extract_json_object(raw: str) -> Optional[str]:
    """Return the text between the first '{' and the last '}' inclusive"""
    if not raw:
        return None
    start = raw.find("{")
    end = raw.rfind("}")
    if start == -1 or end == -1 or start >= end:
        return None
    return raw[start:end + 1]


def decode_model(raw: str, model_cls: Type[T]) -> Optional[T]:
    """Strict path: decode the embedded JSON object into model_cls"""
    candidate = extract_json_object(raw)
    if candidate is None:
        return None
    try:
        data = json.loads(candidate)
        return model_cls.model_validate(data)
    except (ValueError, ValidationError, TypeError, RecursionError) as e:
        logger.debug(f"Strict decode into {model_cls.__name__} failed: {e}")
        return None


def parse_with_fallback(
    raw: str,
    model_cls: Type[T],
    fallback: Callable[[str], T],
    label: str,
) -> T:
    """Decode raw strictly, otherwise run the heuristic extractor"""
    text = raw if isinstance(raw, str) else ""

    result = decode_model(text, model_cls)
    if result is not None:
        logger.debug(f"Decoded {label} response as JSON")
        return result

    logger.debug(f"{label} response is not valid JSON, using heuristic extraction")
    try:
        return fallback(text)
    except Exception as e:
        logger.error(f"Heuristic {label} extraction failed: {e}")
        return model_cls()


def header_of(line: str) -> Optional[Tuple[int, str]]:
    """Return (level, title) when line is a markdown header"""
    if not line.lstrip().startswith("#"):
        return None
    match = _HEADER_PATTERN.match(line)
    if not match:
        return None
    return len(match.group(1)), match.group(2)


def is_bullet(line: str) -> bool:
    return bool(_BULLET_PATTERN.match(line))


def strip_bullet(line: str) -> str:
    return _BULLET_PATTERN.sub("", line, count=1).strip()


def clean_text(text: str) -> str:
    """Strip surrounding markdown emphasis, backticks and whitespace"""
    return text.strip(_DECORATION)


def split_type_annotation(text: str) -> Tuple[str, str]:
    """Pull an inline '(type)' out of text.

    Returns the text without the parenthetical and the type, or the
    unchanged text and an empty type when no '(' is followed by a ')'.
    """
    open_index = text.find("(")
    if open_index == -1:
        return text.strip(), ""
    close_index = text.find(")", open_index + 1)
    if close_index == -1:
        return text.strip(), ""

    type_name = clean_text(text[open_index + 1:close_index])
    remainder = text[:open_index] + text[close_index + 1:]
    return " ".join(remainder.split()), type_name


def split_name_description(text: str) -> Optional[Tuple[str, str]]:
    """Split 'name: description' or 'name - description'"""
    for separator in (":", " - ", " – ", " — ", "-"):
        if separator in text:
            name, description = text.split(separator, 1)
            if name.strip():
                return name.strip(), description.strip()
    return None


def join_lines(lines) -> str:
    return "\n".join(lines).strip()
