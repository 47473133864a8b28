"""
Codebase Q&A response parser
"""

from typing import Dict, List, Optional, Sequence

from github_agent.models import CodebaseQAResponse, RelevantFile
from github_agent.services.code.snippet_locator import SnippetLocator, parse_snippet_range
from github_agent.services.parsing.base import (
    clean_text,
    header_of,
    is_bullet,
    parse_with_fallback,
    strip_bullet,
)
from github_agent.services.utils.ranker import Ranker, ranker as default_ranker

MAX_FOLLOWUP_QUESTIONS = 5


def parse_codebase_answer(
    raw: str,
    relevant_code: Optional[Dict[str, str]] = None,
    keywords: Optional[Sequence[str]] = None,
    locator: Optional[SnippetLocator] = None,
    ranker: Optional[Ranker] = None,
) -> CodebaseQAResponse:
    """Parse an LLM answer to a codebase question.

    relevant_code maps the paths that were shown to the LLM to their content;
    the heuristic extractor attaches located, scored snippets of the files the
    answer mentions.
    """
    relevant_code = relevant_code or {}
    keywords = list(keywords or [])
    locator = locator or SnippetLocator()
    ranker = ranker or default_ranker

    return parse_with_fallback(
        raw,
        CodebaseQAResponse,
        lambda text: _extract_answer(text, relevant_code, keywords, locator, ranker),
        "codebase answer",
    )


def _extract_answer(
    text: str,
    relevant_code: Dict[str, str],
    keywords: List[str],
    locator: SnippetLocator,
    ranker: Ranker,
) -> CodebaseQAResponse:
    lines = text.splitlines()

    def relevant_file(path: str, hint: str) -> RelevantFile:
        snippet = locator.locate(relevant_code[path], path, hint)
        start_line, end_line = parse_snippet_range(snippet)
        return RelevantFile(
            path=path,
            snippet=snippet,
            relevance=ranker.score_snippet(snippet, keywords),
            start_line=start_line,
            end_line=end_line,
        )

    files: List[RelevantFile] = []
    used = set()
    for line in lines:
        for path in relevant_code:
            if path not in used and path in line:
                used.add(path)
                files.append(relevant_file(path, line))
                break

    if not files:
        files = [relevant_file(path, "") for path in relevant_code]

    return CodebaseQAResponse(
        answer=text.strip(),
        relevant_files=ranker.rank_relevant_files(files),
        followup_questions=_extract_followups(lines),
    )


def _extract_followups(lines: List[str]) -> List[str]:
    start = None
    for index, line in enumerate(lines):
        lower = line.lower()
        if "follow" in lower and "question" in lower:
            start = index
            break
    if start is None:
        return []

    questions: List[str] = []
    for line in lines[start + 1:]:
        stripped = line.strip()
        if not stripped:
            continue
        if header_of(stripped) is not None:
            break
        if is_bullet(stripped) or "?" in stripped:
            question = clean_text(strip_bullet(stripped))
            if question:
                questions.append(question)
            if len(questions) >= MAX_FOLLOWUP_QUESTIONS:
                break
        elif questions:
            break
    return questions
