"""
Pure helpers for GitHub URLs, languages and source text
"""

import os
import re
from typing import Optional, Tuple

from github_agent.core.exceptions import InvalidInputError, NotFoundError

LANGUAGE_BY_EXTENSION = {
    ".go": "Go",
    ".java": "Java",
    ".js": "JavaScript",
    ".jsx": "JavaScript",
    ".ts": "TypeScript",
    ".tsx": "TypeScript",
    ".py": "Python",
    ".rb": "Ruby",
    ".php": "PHP",
    ".c": "C",
    ".h": "C",
    ".cpp": "C++",
    ".hpp": "C++",
    ".cs": "C#",
    ".swift": "Swift",
    ".kt": "Kotlin",
    ".kts": "Kotlin",
    ".rs": "Rust",
}
SOURCE_EXTENSIONS = frozenset(LANGUAGE_BY_EXTENSION)

_SSH_PREFIX = "git@github.com:"


def parse_repo_url(url: str) -> Tuple[str, str]:
    """Return (owner, repo) for 'owner/repo', HTTPS or SSH GitHub URLs"""
    value = (url or "").strip().rstrip("/")

    if value.startswith(_SSH_PREFIX):
        path = value[len(_SSH_PREFIX):]
    elif "github.com/" in value:
        path = value.split("github.com/", 1)[1]
    elif value.count("/") == 1 and "://" not in value:
        path = value
    else:
        raise InvalidInputError(f"invalid GitHub URL: {url}")

    parts = [part for part in path.split("/") if part]
    if len(parts) < 2:
        raise InvalidInputError(f"invalid GitHub URL: {url}")

    owner, repo = parts[0], parts[1]
    if repo.endswith(".git"):
        repo = repo[:-len(".git")]
    if not owner or not repo:
        raise InvalidInputError(f"invalid GitHub URL: {url}")
    return owner, repo


def parse_pull_request_url(url: str) -> Tuple[str, str, int]:
    """Return (owner, repo, number) for https://github.com/owner/repo/pull/N"""
    parts = (url or "").strip().split("/")
    if len(parts) < 7 or "github.com" not in parts[2]:
        raise InvalidInputError("URL must be a GitHub pull request URL")
    if parts[5] not in ("pull", "pulls"):
        raise InvalidInputError("URL must be a GitHub pull request URL")

    match = re.match(r"\d+", parts[6])
    if not match:
        raise InvalidInputError(f"invalid pull request number: {parts[6]}")
    return parts[3], parts[4], int(match.group(0))


def is_source_file(path: str) -> bool:
    return os.path.splitext(path)[1].lower() in SOURCE_EXTENSIONS


def language_from_path(path: str) -> str:
    return LANGUAGE_BY_EXTENSION.get(os.path.splitext(path)[1].lower(), "Unknown")


def _declaration_pattern(name: str) -> re.Pattern:
    escaped = re.escape(name)
    return re.compile(
        rf"(?:\bfunc\s+(?:\([^)]*\)\s*)?{escaped}\s*[(\[]"
        rf"|\bfunction\s+{escaped}\s*\("
        rf"|\b{escaped}\s*=\s*(?:async\s+)?function\s*\("
        rf"|\bdef\s+{escaped}\s*\()"
    )


def extract_function_code(content: str, function_name: str) -> Tuple[str, int, int]:
    """Locate a function definition.

    Returns (code, start_line, end_line) with 1-based inclusive lines. Brace
    languages end where braces balance; indentation languages end before the
    first non-blank line indented no deeper than the declaration.
    """
    lines = (content or "").split("\n")
    pattern = _declaration_pattern(function_name)

    start = next((i for i, line in enumerate(lines) if pattern.search(line)), None)
    if start is None:
        raise NotFoundError(f"function not found: {function_name}")

    end = _brace_end(lines, start)
    if end is None:
        end = _indentation_end(lines, start)
    return "\n".join(lines[start:end + 1]), start + 1, end + 1


def _brace_end(lines, start: int) -> Optional[int]:
    if lines[start].rstrip().endswith(":"):
        return None
    depth = 0
    opened = False
    for index in range(start, len(lines)):
        line = lines[index]
        if not opened and index > start and line.strip().endswith(":"):
            return None
        depth += line.count("{") - line.count("}")
        if "{" in line:
            opened = True
        if opened and depth <= 0:
            return index
        if not opened and index - start > 2:
            return None
    return len(lines) - 1 if opened else None


def _indentation_end(lines, start: int) -> int:
    indent = len(lines[start]) - len(lines[start].lstrip())
    end = start
    for index in range(start + 1, len(lines)):
        line = lines[index]
        if not line.strip():
            continue
        if len(line) - len(line.lstrip()) <= indent:
            break
        end = index
    return end
