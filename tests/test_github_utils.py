"""
Tests for GitHub URL, language and source helpers
"""
import base64

import httpx
import pytest

from github_agent.core.exceptions import GitHubError, InvalidInputError, NotFoundError
from github_agent.services.github import (
    GitHubClient,
    extract_function_code,
    is_source_file,
    language_from_path,
    parse_pull_request_url,
    parse_repo_url,
)

GO_SOURCE = """package main

func add(a, b int) int {
\treturn a + b
}

func main() {}
"""

PY_SOURCE = """import os


def load(path):
    with open(path) as f:
        return f.read()


def other():
    pass
"""


class TestParseRepoUrl:
    """Test repository URL parsing"""

    @pytest.mark.unit
    @pytest.mark.parametrize("url", [
        "octo/demo",
        "https://github.com/octo/demo",
        "https://github.com/octo/demo.git",
        "https://github.com/octo/demo/tree/main/src",
        "git@github.com:octo/demo.git",
        "  https://github.com/octo/demo/  ",
    ])
    def test_valid_urls(self, url):
        assert parse_repo_url(url) == ("octo", "demo")

    @pytest.mark.unit
    @pytest.mark.parametrize("url", ["", "demo", "https://gitlab.com/octo/demo", "https://github.com/octo"])
    def test_invalid_urls(self, url):
        with pytest.raises(InvalidInputError):
            parse_repo_url(url)

    @pytest.mark.unit
    def test_pull_request_url(self):
        assert parse_pull_request_url("https://github.com/octo/demo/pull/42") == ("octo", "demo", 42)
        assert parse_pull_request_url("https://github.com/octo/demo/pull/7/files") == ("octo", "demo", 7)

    @pytest.mark.unit
    @pytest.mark.parametrize("url", ["https://github.com/octo/demo", "https://github.com/octo/demo/issues/3"])
    def test_invalid_pull_request_url(self, url):
        with pytest.raises(InvalidInputError):
            parse_pull_request_url(url)


class TestLanguages:
    """Test extension tables"""

    @pytest.mark.unit
    def test_language_from_path(self):
        assert language_from_path("web/App.tsx") == "TypeScript"
        assert language_from_path("main.go") == "Go"
        assert language_from_path("Makefile") == "Unknown"

    @pytest.mark.unit
    def test_is_source_file(self):
        assert is_source_file("pkg/cli.py")
        assert not is_source_file("README.md")


class TestExtractFunctionCode:
    """Test locating function bodies"""

    @pytest.mark.unit
    def test_brace_language(self):
        code, start, end = extract_function_code(GO_SOURCE, "add")
        assert (start, end) == (3, 5)
        assert code.startswith("func add(a, b int) int {")
        assert code.endswith("}")

    @pytest.mark.unit
    def test_indentation_language(self):
        code, start, end = extract_function_code(PY_SOURCE, "load")
        assert (start, end) == (4, 6)
        assert "return f.read()" in code
        assert "def other" not in code

    @pytest.mark.unit
    def test_missing_function(self):
        with pytest.raises(NotFoundError):
            extract_function_code(GO_SOURCE, "subtract")


class TestGitHubClient:
    """Test the REST client against a mock transport"""

    @staticmethod
    def client(handler):
        return GitHubClient(
            token="test-token",
            base_url="https://api.github.test",
            transport=httpx.MockTransport(handler),
        )

    @pytest.mark.asyncio
    async def test_get_file_content_decodes_base64(self):
        def handler(request):
            assert request.headers["Authorization"] == "token test-token"
            assert request.url.path == "/repos/octo/demo/contents/README.md"
            return httpx.Response(200, json={
                "type": "file",
                "encoding": "base64",
                "content": base64.b64encode(b"# Demo\n").decode(),
                "size": 7,
                "sha": "abc",
            })

        github = self.client(handler)
        content = await github.get_file_content("octo", "demo", "README.md")
        await github.aclose()

        assert content.content == "# Demo\n"
        assert content.sha == "abc"

    @pytest.mark.asyncio
    async def test_not_found(self):
        github = self.client(lambda request: httpx.Response(404, json={"message": "Not Found"}))
        with pytest.raises(NotFoundError) as exc_info:
            await github.get_file_content("octo", "demo", "missing.go")
        await github.aclose()
        assert "failed to get file content" in str(exc_info.value)

    @pytest.mark.asyncio
    async def test_server_error(self):
        github = self.client(lambda request: httpx.Response(500, json={}))
        with pytest.raises(GitHubError):
            await github.get_repository_info("octo", "demo")
        await github.aclose()

    @pytest.mark.asyncio
    async def test_get_all_files_normalizes_types(self):
        def handler(request):
            return httpx.Response(200, json={"tree": [
                {"path": "src", "type": "tree"},
                {"path": "src/app.py", "type": "blob", "size": 10},
                {"path": "vendor/lib", "type": "commit"},
            ]})

        github = self.client(handler)
        files = await github.get_all_files("octo", "demo", "main")
        await github.aclose()

        assert [(f.path, f.type) for f in files] == [("src", "dir"), ("src/app.py", "file")]
        assert files[1].name == "app.py"
