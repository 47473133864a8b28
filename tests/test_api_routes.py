"""
Tests for the HTTP API
"""
from unittest.mock import AsyncMock, patch

import pytest

from github_agent.config import settings
from github_agent.core.exceptions import GitHubError
from github_agent.models import PullRequest, PullRequestFile

API = settings.api_prefix


class TestGeneralRoutes:
    """Test root and health endpoints"""

    @pytest.mark.integration
    def test_root(self, test_client):
        response = test_client.get("/")
        assert response.status_code == 200
        assert response.json()["health"] == f"{API}/health"
        assert response.json()["features"]["pr_summary"] is True
        assert "X-Process-Time-Ms" in response.headers

    @pytest.mark.integration
    def test_health_without_graph_store(self, test_client):
        with patch.object(settings, "enable_graph_store", False):
            response = test_client.get(f"{API}/health")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert data["services"]["graph_store"] is False
        assert data["version"] == settings.app_version

    @pytest.mark.integration
    def test_health_degraded_when_store_missing(self, test_client):
        with patch.object(settings, "enable_graph_store", True):
            response = test_client.get(f"{API}/health")
        assert response.json()["status"] == "degraded"


class TestRepositoryRoutes:
    """Test repository browsing endpoints"""

    @pytest.mark.integration
    def test_repository_info(self, test_client, mock_github):
        response = test_client.post(f"{API}/repo/info", json={"url": "https://github.com/octo/demo"})

        assert response.status_code == 200
        assert response.json()["full_name"] == "octo/demo"
        mock_github.get_repository_info.assert_awaited_once_with("octo", "demo")

    @pytest.mark.integration
    def test_invalid_url(self, test_client):
        response = test_client.post(f"{API}/repo/info", json={"url": "not a repository"})

        assert response.status_code == 400
        assert response.json()["code"] == "invalid_input"

    @pytest.mark.integration
    def test_upstream_failure(self, test_client, mock_github):
        mock_github.get_repository_info.side_effect = GitHubError("failed to get repository info")
        response = test_client.post(f"{API}/repo/info", json={"url": "octo/demo"})

        assert response.status_code == 502
        assert response.json() == {"error": "failed to get repository info", "code": "github_error", "details": ""}

    @pytest.mark.integration
    def test_file_requires_path(self, test_client):
        response = test_client.post(f"{API}/repo/file", json={"url": "octo/demo"})
        assert response.status_code == 400

    @pytest.mark.integration
    def test_missing_field(self, test_client):
        response = test_client.post(f"{API}/repo/info", json={})
        assert response.status_code == 422
        assert response.json()["code"] == "invalid_input"


class TestNavigationRoutes:
    """Test code navigation endpoints"""

    @pytest.mark.integration
    def test_function_invalid_lines(self, test_client, mock_llm):
        response = test_client.post(f"{API}/navigate/function", json={
            "url": "octo/demo",
            "file_path": "main.go",
            "line_start": 5,
            "line_end": 3,
        })

        assert response.status_code == 400
        assert response.json()["error"] == "invalid line numbers"
        mock_llm.generate.assert_not_called()

    @pytest.mark.integration
    def test_architecture_fallback(self, test_client):
        response = test_client.post(f"{API}/navigate/architecture", json={"url": "octo/demo", "detail": "low"})

        assert response.status_code == 200
        diagram = response.json()["diagram_data"]
        ids = {node["id"] for node in diagram["nodes"]}
        assert "main.go" in ids
        for edge in diagram["edges"]:
            assert edge["source"] in ids and edge["target"] in ids

    @pytest.mark.integration
    def test_architecture_rejects_unknown_detail(self, test_client):
        response = test_client.post(f"{API}/navigate/architecture", json={"url": "octo/demo", "detail": "extreme"})
        assert response.status_code == 422

    @pytest.mark.integration
    def test_architecture_graph_needs_store(self, test_client):
        response = test_client.post(f"{API}/navigate/architecture-graph", json={"url": "octo/demo"})

        assert response.status_code == 503
        assert response.json()["code"] == "service_unavailable"

    @pytest.mark.integration
    def test_question(self, test_client, mock_llm):
        mock_llm.generate.side_effect = ['{"keywords": ["main"]}', "Execution starts in main.go"]
        response = test_client.post(f"{API}/navigate/question", json={"url": "octo/demo", "question": "Where does it start?"})

        assert response.status_code == 200
        data = response.json()
        assert data["answer"] == "Execution starts in main.go"
        assert data["relevant_files"][0]["path"] == "main.go"

    @pytest.mark.integration
    def test_question_required(self, test_client):
        response = test_client.post(f"{API}/navigate/question", json={"url": "octo/demo"})
        assert response.status_code == 422

    @pytest.mark.integration
    def test_walkthrough_uses_alias(self, test_client):
        response = test_client.post(f"{API}/navigate/walkthrough", json={"url": "octo/demo"})

        assert response.status_code == 200
        data = response.json()
        assert "walkthrough" in data
        assert data["entry_points"] == ["main.go"]


class TestPullRequestRoutes:
    """Test PR summaries"""

    @pytest.mark.integration
    def test_summary(self, test_client, mock_github):
        mock_github.get_pull_request = AsyncMock(return_value=PullRequest(
            number=9,
            title="Refactor auth",
            files=[PullRequestFile(filename="auth/service.go"), PullRequestFile(filename="main.go")],
        ))

        response = test_client.post(f"{API}/pr/summary", json={"url": "https://github.com/octo/demo/pull/9"})

        assert response.status_code == 200
        data = response.json()
        assert data["title"] == "Refactor auth"
        assert data["pr_number"] == 9
        groups = {group["name"]: group["files"] for group in data["file_groups"]}
        assert groups == {"auth": ["auth/service.go"], "root": ["main.go"]}

    @pytest.mark.integration
    def test_summary_rejects_repository_url(self, test_client):
        response = test_client.post(f"{API}/pr/summary", json={"url": "https://github.com/octo/demo"})
        assert response.status_code == 400


class TestGenerationRoutes:
    """Test generation endpoints"""

    @pytest.mark.integration
    def test_llm_operation(self, test_client, mock_llm):
        response = test_client.post(f"{API}/llm/operation", json={
            "operation": {"type": "summarize", "content": "A long document"},
        })

        assert response.status_code == 200
        assert response.json() == {"content": "Generated text"}
        assert "A long document" in mock_llm.generate.call_args[0][0]

    @pytest.mark.integration
    def test_llm_operation_unknown_type(self, test_client):
        response = test_client.post(f"{API}/llm/operation", json={
            "operation": {"type": "translate", "content": "text"},
        })
        assert response.status_code == 422

    @pytest.mark.integration
    def test_dockerfile_strips_fence(self, test_client, mock_llm):
        mock_llm.generate.return_value = "```dockerfile\nFROM golang:1.22\n```"
        response = test_client.post(f"{API}/generate/dockerfile", json={"url": "octo/demo"})

        assert response.status_code == 200
        assert response.json()["content"] == "FROM golang:1.22"
