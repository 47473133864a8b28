"""
Pull request summary response parser
"""

from typing import List, Optional

from github_agent.models import PRSummary
from github_agent.services.parsing.base import (
    clean_text,
    header_of,
    is_bullet,
    join_lines,
    parse_with_fallback,
    strip_bullet,
)

# header keyword -> PRSummary field, checked in order
_SECTION_FIELDS = (
    (("main point", "highlight"), "main_points"),
    (("key change", "changes"), "key_changes"),
    (("impact", "risk"), "potential_impact"),
    (("reviewer",), "suggested_reviewers"),
    (("technical",), "technical_details"),
    (("description", "summary", "overview"), "description"),
)
_LIST_FIELDS = {"main_points", "key_changes", "suggested_reviewers"}


def parse_pr_summary(raw: str) -> PRSummary:
    """Parse the LLM part of a PR summary; metadata stays empty"""
    return parse_with_fallback(raw, PRSummary, _extract_summary, "PR summary")


def _field_for(title: str) -> Optional[str]:
    title = title.lower()
    for keywords, field in _SECTION_FIELDS:
        if any(keyword in title for keyword in keywords):
            return field
    return None


def _extract_summary(text: str) -> PRSummary:
    summary = PRSummary()
    field: Optional[str] = "description"
    buffers = {name: [] for _, name in _SECTION_FIELDS}
    saw_header = False

    for line in text.splitlines():
        stripped = line.strip()
        header = header_of(stripped)
        if header is not None:
            title = clean_text(header[1])
            field = _field_for(title)
            if field is None and not saw_header and not any(buffers["description"]):
                # a leading unnamed header is the PR title
                summary.title = title
                field = "description"
            saw_header = True
            continue
        if field is None:
            continue

        if field in _LIST_FIELDS:
            if is_bullet(stripped):
                item = clean_text(strip_bullet(stripped))
                if item:
                    buffers[field].append(item)
        else:
            buffers[field].append(stripped)

    for _, name in _SECTION_FIELDS:
        lines: List[str] = buffers[name]
        if name in _LIST_FIELDS:
            setattr(summary, name, lines)
        else:
            setattr(summary, name, join_lines(lines))

    if not saw_header:
        summary.description = text.strip()
    return summary
