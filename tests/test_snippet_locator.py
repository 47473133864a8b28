"""
Tests for the snippet locator
"""
import pytest

from github_agent.services.code import SnippetLocator, parse_snippet_range


def numbered_lines(count):
    return ["// filler {}".format(i) for i in range(1, count + 1)]


def with_line(lines, number, text):
    """Replace 1-based line `number` and join"""
    lines = list(lines)
    lines[number - 1] = text
    return "\n".join(lines)


@pytest.fixture
def locator():
    return SnippetLocator()


class TestLocate:
    """Test resolution order of the locator"""

    @pytest.mark.unit
    def test_short_file_returned_whole(self, locator):
        content = "package main\n\nfunc main() {}"
        snippet = locator.locate(content, "main.go", "lines 2-3")
        assert snippet == "// main.go (lines 1-3 of 3, complete file)\n\n" + content

    @pytest.mark.unit
    def test_line_range_padded(self, locator, long_file):
        snippet = locator.locate(long_file, "foo.go", "see lines 10-15")
        assert snippet.startswith("// foo.go (lines 7-18 of 200)\n\n")
        assert "// filler 7\n" in snippet
        assert "// filler 18\n" in snippet
        assert "// filler 19\n" not in snippet

    @pytest.mark.unit
    def test_single_line_window(self, locator, long_file):
        snippet = locator.locate(long_file, "foo.go", "the bug is on line 42")
        assert parse_snippet_range(snippet) == (39, 65)

    @pytest.mark.unit
    def test_line_list_widened(self, locator, long_file):
        snippet = locator.locate(long_file, "foo.go", "check lines 10, 12 and 15")
        assert parse_snippet_range(snippet) == (7, 23)

    @pytest.mark.unit
    def test_bare_line_list(self, locator, long_file):
        snippet = locator.locate(long_file, "foo.go", "see 10, 12 and 15")
        assert parse_snippet_range(snippet) == (7, 23)

    @pytest.mark.unit
    def test_line_range_checked_before_list(self, locator, long_file):
        snippet = locator.locate(long_file, "foo.go", "line 42 calls the helpers from 10, 12 and 15")
        assert parse_snippet_range(snippet) == (39, 65)

    @pytest.mark.unit
    def test_reversed_range(self, locator, long_file):
        snippet = locator.locate(long_file, "foo.go", "lines 15-5")
        assert parse_snippet_range(snippet) == (2, 18)

    @pytest.mark.unit
    def test_backtick_fragment(self, locator):
        content = with_line(numbered_lines(200), 100, "func handleLogin(w http.ResponseWriter) {")
        snippet = locator.locate(content, "auth.go", "see `handleLogin` for details")
        assert snippet.startswith("// auth.go (lines 95-115 of 200, around 'handleLogin')")

    @pytest.mark.unit
    def test_declaration_hint(self, locator):
        content = with_line(numbered_lines(200), 150, "def load_config(path):")
        snippet = locator.locate(content, "settings.py", "the def load_config function")
        assert snippet.startswith("// settings.py (lines 148-170 of 200, definition of def load_config)")

    @pytest.mark.unit
    def test_file_name_declaration(self, locator):
        content = with_line(numbered_lines(200), 60, "def session_store_factory():")
        snippet = locator.locate(content, "handlers/session_store.py", "")
        assert snippet.startswith("// handlers/session_store.py (lines 58-80 of 200, key definition)")

    @pytest.mark.unit
    def test_first_declaration(self, locator):
        content = with_line(numbered_lines(200), 120, "    def helper(self):")
        snippet = locator.locate(content, "pkg/env.py", "")
        assert snippet.startswith("// pkg/env.py (lines 118-140 of 200, key section)")

    @pytest.mark.unit
    def test_preview_when_nothing_matches(self, locator, long_file):
        snippet = locator.locate(long_file, "notes.txt", "no hints here")
        assert snippet.startswith("// notes.txt (lines 1-30 of 200, no specific reference found)")
        assert "// ... 170 more lines not shown ..." in snippet

    @pytest.mark.unit
    def test_line_one_is_not_no_match(self, locator, long_file):
        snippet = locator.locate(long_file, "foo.go", "line 1")
        assert "no specific reference found" not in snippet
        assert parse_snippet_range(snippet)[0] == 1


class TestSnippetBoundedness:
    """The header range always lies within the file"""

    @pytest.mark.unit
    @pytest.mark.parametrize("hint", [
        "",
        "line 0",
        "line 1",
        "line 200",
        "lines 500-600",
        "lines 190-210",
        "lines 1, 2 and 3",
        "lines 199, 250",
        "`filler 199`",
        "`missing`",
        "class Missing",
    ])
    def test_header_range_within_file(self, locator, long_file, hint):
        snippet = locator.locate(long_file, "foo.go", hint)
        start, end = parse_snippet_range(snippet)
        assert snippet
        assert 1 <= start <= end <= 200

    @pytest.mark.unit
    def test_empty_content(self, locator):
        snippet = locator.locate("", "empty.go", "line 3")
        assert parse_snippet_range(snippet) == (1, 1)


class TestParseSnippetRange:
    """Test reading snippet headers"""

    @pytest.mark.unit
    def test_missing_header(self):
        assert parse_snippet_range("just code") == (0, 0)
        assert parse_snippet_range("") == (0, 0)

    @pytest.mark.unit
    def test_header_with_note(self):
        assert parse_snippet_range("// a/b.go (lines 3-9 of 40, key section)\n\nx") == (3, 9)
