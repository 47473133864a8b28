"""
Function explanation response parser
"""

import re
from enum import Enum
from typing import List, Optional, Tuple

from github_agent.models import FunctionExplanation, Param
from github_agent.services.parsing.base import (
    clean_text,
    header_of,
    is_bullet,
    join_lines,
    parse_with_fallback,
    split_name_description,
    split_type_annotation,
    strip_bullet,
)


class Section(Enum):
    DESCRIPTION = "description"
    PARAMETERS = "parameters"
    RETURNS = "returns"
    USAGE = "usage"
    COMPLEXITY = "complexity"
    RELATED = "related"


# checked in order: "Parameters and return values" is a parameters section
_SECTION_KEYWORDS = (
    (("parameter", "argument", "param"), Section.PARAMETERS),
    (("return",), Section.RETURNS),
    (("usage", "example"), Section.USAGE),
    (("complexity",), Section.COMPLEXITY),
    (("related",), Section.RELATED),
    (("overview", "description", "summary", "purpose"), Section.DESCRIPTION),
)
_MAX_MARKER_WORDS = 4
_IDENTIFIER_CHARS = re.compile(r"[_`()\[\]]")


def parse_function_explanation(raw: str, function_name: str = "") -> FunctionExplanation:
    """Parse an LLM function explanation.

    Falls back to a line-based state machine keyed on section markers
    (markdown headers, "Label:" lines, bold labels).
    """
    return parse_with_fallback(
        raw,
        FunctionExplanation,
        lambda text: _extract_explanation(text, function_name),
        "function explanation",
    )


def _extract_explanation(text: str, function_name: str) -> FunctionExplanation:
    result = FunctionExplanation(function_name=function_name)
    section = Section.DESCRIPTION
    description: List[str] = []
    complexity: List[str] = []
    usage_block: List[str] = []
    in_fence = False

    def flush_usage():
        block = "\n".join(usage_block).strip("\n")
        if block.strip():
            result.usage_examples.append(block)
        usage_block.clear()

    def consume(line: str):
        stripped = line.strip()
        if section is Section.DESCRIPTION:
            description.append(stripped)
        elif section is Section.USAGE:
            usage_block.append(line.rstrip())
        elif section is Section.COMPLEXITY:
            complexity.append(stripped)
        elif not stripped:
            return
        elif section is Section.PARAMETERS:
            param = _parse_param(stripped)
            if param is not None:
                result.parameters.append(param)
        elif section is Section.RETURNS:
            param = _parse_param(stripped)
            if param is not None:
                result.return_values.append(param)
        elif section is Section.RELATED:
            result.related_functions.extend(_parse_related(stripped))

    for line in text.splitlines():
        if line.strip().startswith("```"):
            if section is Section.USAGE:
                # every fenced block is its own example
                flush_usage()
            in_fence = not in_fence
            continue

        if in_fence:
            consume(line)
            continue

        marker = _section_marker(line)
        if marker is not None:
            if section is Section.USAGE:
                flush_usage()
            section, remainder = marker
            if remainder:
                consume(remainder)
            continue

        consume(line)

    if section is Section.USAGE:
        flush_usage()

    result.description = join_lines(description)
    result.complexity = join_lines(complexity)
    return result


def _section_marker(line: str) -> Optional[Tuple[Section, str]]:
    """Return (section, trailing text) when line opens a section"""
    stripped = line.strip()
    if not stripped:
        return None

    header = header_of(stripped)
    if header is not None:
        key, remainder = clean_text(header[1]), ""
    else:
        if is_bullet(stripped):
            return None
        text = clean_text(stripped)
        bold = stripped.startswith(("**", "__"))
        if ":" in text:
            key, remainder = text.split(":", 1)
        elif bold:
            key, remainder = text, ""
        else:
            return None
        remainder = clean_text(remainder)
        if len(key.split()) > _MAX_MARKER_WORDS or _IDENTIFIER_CHARS.search(key):
            return None

    key = key.lower()
    for keywords, section in _SECTION_KEYWORDS:
        if any(keyword in key for keyword in keywords):
            return section, remainder
    return None


def _parse_param(line: str, returns: bool = False) -> Optional[Param]:
    """Parse 'name - description (type)' style lines

    In a returns section a lone word with no (type), as in 'int - the sum',
    is the type of an unnamed value.
    """
    split = split_name_description(strip_bullet(line))
    if split is None:
        return None
    name, description = split

    description, type_name = split_type_annotation(description)
    if not type_name:
        name, type_name = split_type_annotation(name)

    name = clean_text(name)
    if not name:
        return None
    if returns and not type_name and len(name.split()) == 1:
        name, type_name = "", name
    return Param(name=name, type=type_name, description=clean_text(description))


def _parse_related(line: str) -> List[str]:
    text = strip_bullet(line)
    for separator in (" - ", ": "):
        if separator in text:
            text = text.split(separator, 1)[0]
            break

    names = []
    for part in text.split(","):
        name = clean_text(part)
        if name.endswith("()"):
            name = name[:-2]
        if name:
            names.append(name)
    return names
