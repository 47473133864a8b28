"""
Snippet locator

Given a file and a weak hint taken from LLM prose ("see lines 10-15",
"`parse_config`", "the def load function"), extract a bounded excerpt with a
header line describing where it came from:

    // path/to/file.py (lines 7-18 of 200)

The header always carries a 1-based line range so callers can recover it with
parse_snippet_range().
"""

import os
import re
from dataclasses import dataclass
from typing import List, Optional, Tuple

from loguru import logger

_LINE_LIST_PATTERN = re.compile(
    r"(?:\blines?\s+)?\b(\d+)((?:\s*,\s*\d+)+(?:\s*,?\s*(?:and|&)\s*\d+)?|\s*(?:and|&)\s*\d+)",
    re.IGNORECASE,
)
# a "lines N" that starts a list such as "lines 10, 12 and 15" is left to _LINE_LIST_PATTERN
_LINE_RANGE_PATTERN = re.compile(
    r"\blines?\s+(\d+)(?!\d)(?:\s*-\s*(\d+)(?!\d)|(?!\s*-))(?!\s*(?:,|and\b|&)\s*\d)",
    re.IGNORECASE,
)
_BACKTICK_PATTERN = re.compile(r"`([^`]+)`")
_DECLARATION_PATTERN = re.compile(r"\b(class|def|function)\s+(\w+)")
_HEADER_RANGE_PATTERN = re.compile(r"^// .+ \(lines (\d+)-(\d+) of \d+")

_DECLARATION_PREFIXES = ("class ", "def ", "function ", "interface ", "struct ")
_GENERIC_BASE_NAMES = {"env", "init", "config"}


@dataclass
class _Window:
    """0-based inclusive line window with a header note"""
    start: int
    end: int
    note: str = ""


class SnippetLocator:
    """Extracts context-padded excerpts from file content"""

    SHORT_FILE_LINES = 50
    CONTEXT_LINES = 3
    SINGLE_LINE_WINDOW = 20
    MIN_LIST_SPAN = 10
    FRAGMENT_BEFORE = 5
    FRAGMENT_AFTER = 15
    DECLARATION_BEFORE = 2
    DECLARATION_AFTER = 20
    PREVIEW_LINES = 30

    def locate(self, content: str, path: str, hint: str) -> str:
        """Return a self-describing excerpt of content for hint"""
        content = content or ""
        hint = hint or ""
        lines = content.split("\n")
        total = len(lines)

        if total <= self.SHORT_FILE_LINES:
            return f"// {path} (lines 1-{total} of {total}, complete file)\n\n{content}"

        window = self._find_window(lines, path, hint)
        if window is None:
            logger.debug(f"No reference found for {path}, returning file preview")
            return self._preview(lines, path)

        start = max(0, window.start)
        end = min(total - 1, max(start, window.end))
        header = f"// {path} (lines {start + 1}-{end + 1} of {total}{window.note})\n\n"
        return header + "".join(line + "\n" for line in lines[start:end + 1])

    def _find_window(self, lines: List[str], path: str, hint: str) -> Optional[_Window]:
        return (
            self._from_line_range(lines, hint)
            or self._from_line_list(lines, hint)
            or self._from_code_fragment(lines, hint)
            or self._from_declaration(lines, hint)
            or self._from_file_name(lines, path)
            or self._from_first_declaration(lines)
        )

    def _from_line_list(self, lines: List[str], hint: str) -> Optional[_Window]:
        """'10, 12 and 15' or 'lines 10, 12 and 15' -> span of the listed lines"""
        match = _LINE_LIST_PATTERN.search(hint)
        if not match:
            return None

        total = len(lines)
        numbers = sorted(
            n for n in (int(token) for token in re.findall(r"\d+", match.group(0)))
            if 1 <= n <= total
        )
        if not numbers:
            return None

        start = numbers[0] - 1
        end = numbers[-1] - 1
        if end - start < self.MIN_LIST_SPAN:
            end = min(total - 1, start + self.MIN_LIST_SPAN)
        return self._pad(start, end, total)

    def _from_line_range(self, lines: List[str], hint: str) -> Optional[_Window]:
        """'line 42' or 'lines 10-15'"""
        match = _LINE_RANGE_PATTERN.search(hint)
        if not match:
            return None

        total = len(lines)
        first = int(match.group(1))
        start = min(max(first - 1, 0), total - 1)
        if match.group(2):
            end = int(match.group(2)) - 1
            if end < start:
                start, end = max(end, 0), start
        else:
            end = start + self.SINGLE_LINE_WINDOW
        return self._pad(start, end, total)

    def _from_code_fragment(self, lines: List[str], hint: str) -> Optional[_Window]:
        for fragment in _BACKTICK_PATTERN.findall(hint):
            if not fragment.strip():
                continue
            index = _first_line_containing(lines, fragment)
            if index is not None:
                return _Window(
                    index - self.FRAGMENT_BEFORE,
                    index + self.FRAGMENT_AFTER,
                    f", around '{fragment}'",
                )
        return None

    def _from_declaration(self, lines: List[str], hint: str) -> Optional[_Window]:
        match = _DECLARATION_PATTERN.search(hint)
        if not match:
            return None
        kind, name = match.group(1), match.group(2)
        index = _first_line_containing(lines, f"{kind} {name}")
        if index is None:
            return None
        return _Window(
            index - self.DECLARATION_BEFORE,
            index + self.DECLARATION_AFTER,
            f", definition of {kind} {name}",
        )

    def _from_file_name(self, lines: List[str], path: str) -> Optional[_Window]:
        base_name = os.path.splitext(os.path.basename(path))[0]
        if len(base_name) <= 3 or base_name.lower() in _GENERIC_BASE_NAMES:
            return None
        for index, line in enumerate(lines):
            if any(f"{prefix}{base_name}" in line for prefix in _DECLARATION_PREFIXES):
                return _Window(
                    index - self.DECLARATION_BEFORE,
                    index + self.DECLARATION_AFTER,
                    ", key definition",
                )
        return None

    def _from_first_declaration(self, lines: List[str]) -> Optional[_Window]:
        for index, line in enumerate(lines):
            if line.strip().startswith(_DECLARATION_PREFIXES):
                return _Window(
                    index - self.DECLARATION_BEFORE,
                    index + self.DECLARATION_AFTER,
                    ", key section",
                )
        return None

    def _pad(self, start: int, end: int, total: int) -> _Window:
        return _Window(
            max(0, start - self.CONTEXT_LINES),
            min(total - 1, end + self.CONTEXT_LINES),
        )

    def _preview(self, lines: List[str], path: str) -> str:
        total = len(lines)
        shown = min(self.PREVIEW_LINES, total)
        header = f"// {path} (lines 1-{shown} of {total}, no specific reference found)\n\n"
        body = "".join(line + "\n" for line in lines[:shown])
        if total > shown:
            body += f"\n// ... {total - shown} more lines not shown ...\n"
        return header + body


def _first_line_containing(lines: List[str], needle: str) -> Optional[int]:
    for index, line in enumerate(lines):
        if needle in line:
            return index
    return None


def parse_snippet_range(snippet: str) -> Tuple[int, int]:
    """Read the 1-based (start, end) range from a snippet header, (0, 0) if absent"""
    match = _HEADER_RANGE_PATTERN.match(snippet or "")
    if not match:
        return 0, 0
    return int(match.group(1)), int(match.group(2))
