"""
Pytest configuration and fixtures for github-agent tests
"""
import pytest
import sys
from pathlib import Path
from unittest.mock import AsyncMock

# Ensure the `src/` directory is available for imports.
ROOT_DIR = Path(__file__).parent.parent
SRC_DIR = ROOT_DIR / "src"

for path in (ROOT_DIR, SRC_DIR):
    path_str = str(path)
    if path_str not in sys.path:
        sys.path.insert(0, path_str)

from fastapi.testclient import TestClient

from github_agent.models import FileContent, RepoFile, RepositoryInfo


def numbered_lines(count, prefix="// filler"):
    """File content of `count` lines without declarations"""
    return "\n".join(f"{prefix} {i}" for i in range(1, count + 1))


@pytest.fixture
def long_file():
    """200 line file without declarations"""
    return numbered_lines(200)


@pytest.fixture
def repo_info():
    return RepositoryInfo(
        owner="octo",
        name="demo",
        full_name="octo/demo",
        description="Demo service",
        default_branch="main",
        language="Go",
        languages={"Go": 1200, "Shell": 40},
    )


@pytest.fixture
def repo_files():
    """Small Go repository listing"""
    return [
        RepoFile(name="main.go", path="main.go", type="file", size=120),
        RepoFile(name="go.mod", path="go.mod", type="file", size=30),
        RepoFile(name="auth", path="auth", type="dir"),
        RepoFile(name="service.go", path="auth/service.go", type="file", size=900),
        RepoFile(name="service_test.go", path="auth/service_test.go", type="file", size=400),
        RepoFile(name="README.md", path="README.md", type="file", size=80),
    ]


@pytest.fixture
def file_contents(long_file):
    return {
        "main.go": 'package main\n\nimport "github.com/octo/demo/auth"\n\nfunc main() {\n\tauth.Start()\n}\n',
        "go.mod": "module github.com/octo/demo\n\ngo 1.22\n",
        "auth/service.go": long_file,
        "auth/service_test.go": "package auth\n",
        "README.md": "# Demo\n",
    }


@pytest.fixture
def mock_github(repo_info, repo_files, file_contents):
    """Mock GitHubClient serving the small Go repository"""
    github = AsyncMock()

    async def get_file_content(owner, repo, path, ref=""):
        return FileContent(path=path, content=file_contents[path], size=len(file_contents[path]))

    github.get_repository_info = AsyncMock(return_value=repo_info)
    github.get_all_files = AsyncMock(return_value=repo_files)
    github.get_file_content = AsyncMock(side_effect=get_file_content)
    github.get_repository_structure = AsyncMock(return_value="main.go\nauth/\n  service.go")
    github.search_code = AsyncMock(return_value=[])
    return github


@pytest.fixture
def mock_llm():
    """Mock LLMClient"""
    llm = AsyncMock()
    llm.generate = AsyncMock(return_value="Generated text")
    return llm


@pytest.fixture
def test_client(mock_github, mock_llm):
    """FastAPI test client with mocked collaborators"""
    from github_agent.core.app import create_app
    from github_agent.core.dependencies import get_github_client, get_graph_store, get_llm_client

    app = create_app()
    app.dependency_overrides[get_github_client] = lambda: mock_github
    app.dependency_overrides[get_llm_client] = lambda: mock_llm
    app.dependency_overrides[get_graph_store] = lambda: None
    return TestClient(app)
