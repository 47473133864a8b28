"""
Best-practices guide response parser
"""

import re
from enum import Enum
from typing import List, Optional

from github_agent.models import BestPracticesResponse, Issue, Practice
from github_agent.services.parsing.base import (
    clean_text,
    header_of,
    is_bullet,
    join_lines,
    parse_with_fallback,
    split_name_description,
    strip_bullet,
)


class SectionKind(Enum):
    NONE = "none"
    STYLE = "style"
    PRACTICES = "practices"
    ISSUES = "issues"


_LOCATION_PATTERN = re.compile(
    r"(?P<path>[\w./\\-]+\.\w+)(?:\s*:\s*(?:line\s*)?|\s*\(\s*line\s+|\s*,\s*line\s+|\s+line\s+)(?P<line>\d+)\)?",
    re.IGNORECASE,
)
_SUGGESTION_PATTERN = re.compile(r"\b(?:suggestion|suggested fix|fix|recommendation|solution)\s*:", re.IGNORECASE)
_HIGH_PATTERN = re.compile(r"\b(?:critical|severe|high|major)\b", re.IGNORECASE)
_LOW_PATTERN = re.compile(r"\b(?:minor|trivial|low)\b", re.IGNORECASE)


def parse_best_practices(raw: str) -> BestPracticesResponse:
    """Parse an LLM best-practices guide.

    Heuristic sections: a header mentioning "style" feeds the style guide,
    "practice"/"convention" headers produce practices and "issue"/"concern"
    headers produce issues from their bullet items.
    """
    return parse_with_fallback(raw, BestPracticesResponse, _extract_guide, "best practices")


def _section_kind(title: str) -> SectionKind:
    title = title.lower()
    if "style" in title:
        return SectionKind.STYLE
    if any(word in title for word in ("issue", "concern", "problem", "inconsisten")):
        return SectionKind.ISSUES
    if any(word in title for word in ("practice", "convention", "pattern", "recommend")):
        return SectionKind.PRACTICES
    return SectionKind.NONE


class _GuideBuilder:
    """Accumulates one guide while scanning lines"""

    def __init__(self):
        self.result = BestPracticesResponse()
        self.style_lines: List[str] = []
        self.practice: Optional[Practice] = None
        self.practice_is_container = False
        self.split_on_bullets = False
        self.description_lines: List[str] = []
        self.example_lines: List[str] = []
        self.in_examples = False
        self.issue: Optional[Issue] = None

    def start_practice(self, title: str, description: str = "", container: bool = False, split_on_bullets: bool = False):
        self.finish_practice()
        self.practice = Practice(title=title)
        self.practice_is_container = container
        self.split_on_bullets = container or split_on_bullets
        if description:
            self.description_lines.append(description)

    def finish_practice(self):
        practice = self.practice
        if practice is not None:
            practice.description = join_lines(self.description_lines)
            practice.examples = _split_examples(self.example_lines)
            if not self.practice_is_container or practice.description or practice.examples:
                self.result.practices.append(practice)
        self.practice = None
        self.practice_is_container = False
        self.description_lines, self.example_lines = [], []
        self.in_examples = False

    def practice_line(self, line: str, in_fence: bool):
        stripped = line.strip()
        if in_fence or stripped.startswith("```"):
            self.in_examples = True
            self.example_lines.append(line.rstrip())
            return

        if self.practice is not None and clean_text(strip_bullet(stripped)).lower().startswith("example"):
            self.in_examples = True
            return

        if self.practice is None or (self.split_on_bullets and is_bullet(line) and line == line.lstrip()):
            text = clean_text(strip_bullet(stripped))
            if not text:
                return
            split = split_name_description(text)
            if split is not None and is_bullet(stripped):
                self.start_practice(clean_text(split[0]), clean_text(split[1]), split_on_bullets=True)
            else:
                self.start_practice(text, split_on_bullets=True)
            return

        if self.in_examples:
            self.example_lines.append(line.rstrip())
        else:
            self.description_lines.append(stripped)

    def issue_line(self, line: str):
        stripped = line.strip()
        if not stripped:
            return
        continuation = self.issue is not None and (line != line.lstrip() or not is_bullet(stripped))
        if not continuation:
            if is_bullet(stripped):
                self.finish_issue()
                self.issue = _parse_issue(strip_bullet(stripped))
            return

        text = clean_text(strip_bullet(stripped))
        suggestion = _SUGGESTION_PATTERN.match(text)
        if suggestion:
            self.issue.suggestion = clean_text(text[suggestion.end():])
        elif text.lower().startswith("severity"):
            self.issue.severity = _severity_of(text)
        else:
            self.issue.description = f"{self.issue.description} {text}".strip()

    def finish_issue(self):
        if self.issue is not None and self.issue.description:
            self.result.issues.append(self.issue)
        self.issue = None

    def build(self, text: str) -> BestPracticesResponse:
        self.finish_practice()
        self.finish_issue()
        self.result.style_guide = join_lines(self.style_lines)
        result = self.result
        if not (result.style_guide or result.practices or result.issues):
            result.style_guide = text.strip()
        return result


def _extract_guide(text: str) -> BestPracticesResponse:
    builder = _GuideBuilder()
    kind = SectionKind.NONE
    section_level = 0
    in_fence = False

    for line in text.splitlines():
        stripped = line.strip()
        header = None if in_fence else header_of(stripped)

        if header is not None:
            level, title = header[0], clean_text(header[1])
            if kind is not SectionKind.NONE and level > section_level:
                if kind is SectionKind.PRACTICES:
                    builder.start_practice(title)
                elif kind is SectionKind.STYLE:
                    builder.style_lines.append(title)
                continue

            builder.finish_practice()
            builder.finish_issue()
            kind, section_level = _section_kind(title), level
            if kind is SectionKind.PRACTICES:
                builder.start_practice(title, container=True)
            continue

        if stripped.startswith("```"):
            in_fence = not in_fence

        if kind is SectionKind.STYLE:
            builder.style_lines.append(line.rstrip())
        elif kind is SectionKind.PRACTICES:
            builder.practice_line(line, in_fence and not stripped.startswith("```"))
        elif kind is SectionKind.ISSUES and not in_fence:
            builder.issue_line(line)

    return builder.build(text)


def _parse_issue(text: str) -> Issue:
    issue = Issue(severity=_severity_of(text))

    suggestion = _SUGGESTION_PATTERN.search(text)
    if suggestion:
        issue.suggestion = clean_text(text[suggestion.end():])
        text = text[:suggestion.start()]

    location = _LOCATION_PATTERN.search(text)
    if location:
        issue.path = location.group("path").strip("`")
        issue.line = int(location.group("line"))
        text = text[:location.start()] + text[location.end():]

    issue.description = clean_text(text).strip(" -:–—*").strip()
    return issue


def _severity_of(text: str) -> str:
    if _HIGH_PATTERN.search(text):
        return "high"
    if _LOW_PATTERN.search(text):
        return "low"
    return "medium"


def _split_examples(lines: List[str]) -> List[str]:
    """Each fenced block is an example; loose text forms one more"""
    examples: List[str] = []
    loose: List[str] = []
    block: List[str] = []
    in_fence = False
    for line in lines:
        if line.strip().startswith("```"):
            if in_fence and "\n".join(block).strip():
                examples.append("\n".join(block).strip("\n"))
            block = []
            in_fence = not in_fence
        elif in_fence:
            block.append(line)
        else:
            loose.append(line)
    if in_fence and "\n".join(block).strip():
        examples.append("\n".join(block).strip("\n"))
    if join_lines(loose):
        examples.append(join_lines(loose))
    return examples
