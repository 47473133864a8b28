"""
Walkthrough response parser
"""

import re
from typing import Dict, List, Optional, Sequence

from github_agent.models import CodeWalkthroughResponse, WalkthroughStep
from github_agent.services.parsing.base import (
    clean_text,
    header_of,
    join_lines,
    parse_with_fallback,
    strip_bullet,
)

_OVERVIEW_WORDS = ("overview", "summary", "introduction")
_STEPS_WORDS = ("walkthrough", "steps")
_SOURCE_SUFFIXES = (".go", ".py", ".js", ".jsx", ".ts", ".tsx", ".java", ".rb", ".rs", ".php", ".cs")

_STEP_PREFIX_PATTERN = re.compile(r"^step\s*\d*\s*[:.)\-]", re.IGNORECASE)
_IMPORTANCE_PATTERN = re.compile(r"importance\W{0,3}(\d{1,2})", re.IGNORECASE)
_PATH_TOKEN_PATTERN = re.compile(r"[\w./-]+")
_DEPENDENCY_PATTERN = re.compile(r"^(?P<source>[^\s:]+)\s*(?:->|→|:|depends on)\s*(?P<targets>.+)$")


def parse_walkthrough(raw: str, entry_points: Optional[Sequence[str]] = None) -> CodeWalkthroughResponse:
    """Parse an LLM walkthrough answer.

    The heuristic extractor treats text before the first walkthrough/step
    marker as the overview, and every step header ("Step 2: ...",
    "main.go - ..." or a markdown header once steps began) as the start of a
    new step whose following lines form its description.
    """
    entry_points = list(entry_points or [])
    return parse_with_fallback(
        raw,
        CodeWalkthroughResponse,
        lambda text: _extract_walkthrough(text, entry_points),
        "walkthrough",
    )


def _extract_walkthrough(text: str, entry_points: List[str]) -> CodeWalkthroughResponse:
    overview_lines: List[str] = []
    steps: List[WalkthroughStep] = []
    dependencies: Dict[str, List[str]] = {}

    current: Optional[WalkthroughStep] = None
    description: List[str] = []
    in_steps = False
    in_dependencies = False

    def flush():
        nonlocal current, description
        if current is not None:
            current.description = join_lines(description)
            steps.append(current)
        current, description = None, []

    def start_step(title: str):
        nonlocal current, in_steps, in_dependencies
        flush()
        in_steps, in_dependencies = True, False
        current = WalkthroughStep(name=title, path=_find_path(title, entry_points))
        importance = _IMPORTANCE_PATTERN.search(title)
        if importance:
            current.importance = max(1, min(10, int(importance.group(1))))

    for raw_line in text.splitlines():
        line = raw_line.strip()
        lower = line.lower()
        header = header_of(line)

        if header is not None:
            title = clean_text(header[1])
            title_lower = title.lower()
            if any(word in title_lower for word in _OVERVIEW_WORDS):
                flush()
                in_steps = in_dependencies = False
            elif "dependenc" in title_lower:
                flush()
                in_steps, in_dependencies = False, True
            elif _is_step_title(title):
                start_step(title)
            elif any(word in title_lower for word in _STEPS_WORDS):
                flush()
                # a leading title header is not the end of the overview
                in_steps = in_steps or _has_text(overview_lines)
            elif in_steps or _has_text(overview_lines):
                start_step(title)
            continue

        if in_dependencies:
            _add_dependency(line, dependencies)
            continue

        if not in_steps:
            if _is_step_title(strip_bullet(line)):
                start_step(clean_text(strip_bullet(line)))
            elif "walkthrough" in lower or "step" in lower:
                in_steps = True
            else:
                overview_lines.append(line)
            continue

        if _is_step_title(strip_bullet(line)):
            start_step(clean_text(strip_bullet(line)))
        elif current is not None:
            importance = _IMPORTANCE_PATTERN.search(line)
            if importance and lower.lstrip("*_- ").startswith("importance"):
                current.importance = max(1, min(10, int(importance.group(1))))
                continue
            if not current.path:
                current.path = _find_path(line, entry_points)
            description.append(line)

    flush()

    overview = join_lines(overview_lines)
    if not overview and not steps:
        overview = text.strip()

    return CodeWalkthroughResponse(
        overview=overview,
        entry_points=entry_points,
        steps=steps,
        dependencies=dependencies,
    )


def _is_step_title(text: str) -> bool:
    text = clean_text(text)
    if not text:
        return False
    if _STEP_PREFIX_PATTERN.match(text):
        return True
    first_token = clean_text(text.split()[0]).rstrip(":")
    has_separator = ":" in text or " - " in text
    return has_separator and first_token.lower().endswith(_SOURCE_SUFFIXES)


def _has_text(lines: List[str]) -> bool:
    return any(line.strip() for line in lines)


def _find_path(text: str, entry_points: List[str]) -> str:
    for entry_point in entry_points:
        if entry_point and entry_point in text:
            return entry_point
    for token in _PATH_TOKEN_PATTERN.findall(text):
        if token.lower().endswith(_SOURCE_SUFFIXES):
            return token
    return ""


def _add_dependency(line: str, dependencies: Dict[str, List[str]]):
    text = strip_bullet(line).replace("`", "")
    match = _DEPENDENCY_PATTERN.match(text)
    if not match:
        return
    source = match.group("source")
    if "." not in source and "/" not in source:
        return
    targets = [
        clean_text(target)
        for target in re.split(r",|->|→", match.group("targets"))
        if clean_text(target)
    ]
    if targets:
        dependencies.setdefault(source, []).extend(targets)
