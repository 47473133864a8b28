"""
Tests for the code navigation service
"""
import json
from unittest.mock import AsyncMock, Mock

import pytest

from github_agent.core.exceptions import (
    GraphStoreError,
    InvalidInputError,
    LLMError,
    NotFoundError,
    ServiceUnavailableError,
)
from github_agent.models import CodeSearchResult, RepoFile
from github_agent.services.navigation import CodeNavigationService, detect_entry_points


def repo_file(path):
    return RepoFile(name=path.rsplit("/", 1)[-1], path=path, type="file")


def graph_store(graph=None, error=None, connected=True):
    store = Mock()
    store.connected = connected
    store.get_codebase_graph = AsyncMock(return_value=graph, side_effect=error)
    store.store_codebase_structure = AsyncMock(return_value={"files": 6, "imports": 2})
    return store


def prompt_of(llm, call=0):
    return llm.generate.call_args_list[call][0][0]


class TestDetectEntryPoints:
    """Test entry point detection"""

    @pytest.mark.unit
    def test_go_entry_points_shallow_first(self):
        files = [repo_file("vendor/x/y/main.go"), repo_file("cmd/tool/main.go"), repo_file("main.go"), repo_file("app.py")]
        assert detect_entry_points(files, "Go") == ["main.go", "cmd/tool/main.go", "vendor/x/y/main.go"]

    @pytest.mark.unit
    def test_unknown_language_checks_all_conventions(self):
        files = [repo_file("src/index.ts"), repo_file("manage.py"), repo_file("lib/util.py")]
        assert detect_entry_points(files, "") == ["manage.py", "src/index.ts"]

    @pytest.mark.unit
    def test_directories_ignored(self):
        assert detect_entry_points([RepoFile(name="main.go", path="main.go", type="dir")], "Go") == []


class TestWalkthrough:
    """Test walkthrough generation"""

    @pytest.mark.asyncio
    async def test_entry_points_and_samples(self, mock_github, mock_llm):
        service = CodeNavigationService(mock_github, mock_llm)
        result = await service.generate_walkthrough("octo", "demo")

        fetched = [c[0][2] for c in mock_github.get_file_content.call_args_list]
        assert fetched == ["main.go", "auth/service.go", "auth/service_test.go"]
        assert result.entry_points == ["main.go"]
        assert "Entry points: main.go" in prompt_of(mock_llm)


class TestExplainFunction:
    """Test function explanation"""

    @pytest.mark.asyncio
    @pytest.mark.parametrize("start,end", [(5, 3), (1, 100)])
    async def test_invalid_line_numbers(self, mock_github, mock_llm, start, end):
        service = CodeNavigationService(mock_github, mock_llm)
        with pytest.raises(InvalidInputError, match="invalid line numbers"):
            await service.explain_function("octo", "demo", "", "main.go", line_start=start, line_end=end)
        mock_llm.generate.assert_not_called()

    @pytest.mark.asyncio
    @pytest.mark.parametrize("start,end", [(0, 4), (3, 0)])
    async def test_half_range_uses_function_name(self, mock_github, mock_llm, start, end):
        service = CodeNavigationService(mock_github, mock_llm)

        await service.explain_function(
            "octo", "demo", "", "main.go", function_name="main", line_start=start, line_end=end
        )

        assert "auth.Start()" in prompt_of(mock_llm)

    @pytest.mark.asyncio
    async def test_half_range_without_name(self, mock_github, mock_llm):
        service = CodeNavigationService(mock_github, mock_llm)
        with pytest.raises(InvalidInputError, match="function name or line range is required"):
            await service.explain_function("octo", "demo", "", "main.go", line_start=0, line_end=4)
        mock_llm.generate.assert_not_called()

    @pytest.mark.asyncio
    async def test_by_function_name(self, mock_github, mock_llm):
        mock_llm.generate.return_value = json.dumps({"description": "Starts the service", "complexity": "O(1)"})
        service = CodeNavigationService(mock_github, mock_llm)

        result = await service.explain_function("octo", "demo", "", "main.go", function_name="main")

        assert result.function_name == "main"
        assert result.description == "Starts the service"
        prompt = prompt_of(mock_llm)
        assert "auth.Start()" in prompt
        assert "github.com/octo/demo/auth" not in prompt
        mock_github.get_file_content.assert_awaited_with("octo", "demo", "main.go", "main")

    @pytest.mark.asyncio
    async def test_by_line_range(self, mock_github, mock_llm):
        service = CodeNavigationService(mock_github, mock_llm)
        await service.explain_function("octo", "demo", "dev", "auth/service.go", line_start=10, line_end=12)

        prompt = prompt_of(mock_llm)
        assert "// filler 11" in prompt
        assert "// filler 13" not in prompt

    @pytest.mark.asyncio
    async def test_missing_function(self, mock_github, mock_llm):
        service = CodeNavigationService(mock_github, mock_llm)
        with pytest.raises(NotFoundError):
            await service.explain_function("octo", "demo", "", "main.go", function_name="shutdown")

    @pytest.mark.asyncio
    async def test_name_or_range_required(self, mock_github, mock_llm):
        service = CodeNavigationService(mock_github, mock_llm)
        with pytest.raises(InvalidInputError):
            await service.explain_function("octo", "demo", "", "main.go")


class TestVisualizeArchitecture:
    """Test diagram sources and fallbacks"""

    @pytest.mark.asyncio
    async def test_graph_store_diagram(self, mock_github, mock_llm):
        graph = {
            "nodes": [{"path": p, "type": "File"} for p in ("main.go", "auth/service.go", "go.mod", "README.md")],
            "relationships": [{"source": "main.go", "targets": [
                {"target": "auth/service.go", "type": "IMPORTS"},
                {"target": "go.mod", "type": "IMPORTS"},
                {"target": "README.md", "type": "IMPORTS"},
            ]}],
        }
        store = graph_store(graph)
        service = CodeNavigationService(mock_github, mock_llm, graph_store=store)

        result = await service.visualize_architecture("octo", "demo", detail="high")

        store.get_codebase_graph.assert_awaited_once_with("octo", "demo", "main")
        mock_github.get_all_files.assert_not_called()
        assert {node.id for node in result.diagram_data.nodes} == {"main.go", "auth/service.go", "go.mod", "README.md"}
        assert len(result.diagram_data.edges) == 3
        assert result.component_descriptions == {"main.go": "Generated text"}
        assert result.overview == "Generated text"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("store", [
        graph_store(error=GraphStoreError("query failed")),
        graph_store({"nodes": [], "relationships": []}),
        graph_store(connected=False),
        None,
    ])
    async def test_file_structure_fallback(self, mock_github, mock_llm, store):
        service = CodeNavigationService(mock_github, mock_llm, graph_store=store)

        result = await service.visualize_architecture("octo", "demo")

        mock_github.get_all_files.assert_awaited_once_with("octo", "demo", "main")
        ids = {node.id for node in result.diagram_data.nodes}
        assert {"main.go", "auth", "auth/service.go"} <= ids
        for edge in result.diagram_data.edges:
            assert edge.source in ids and edge.target in ids

    @pytest.mark.asyncio
    async def test_default_overview_when_llm_fails(self, mock_github, mock_llm):
        mock_llm.generate.side_effect = LLMError("provider down")
        service = CodeNavigationService(mock_github, mock_llm)

        result = await service.visualize_architecture("octo", "demo")

        assert result.overview.startswith("This is a basic visualization of the file structure for octo/demo.")
        assert result.diagram_data.nodes


class TestGraphStore:
    """Test persisting and reading the repository graph"""

    @pytest.mark.asyncio
    @pytest.mark.parametrize("store", [None, graph_store(connected=False)])
    async def test_store_unavailable(self, mock_github, mock_llm, store):
        service = CodeNavigationService(mock_github, mock_llm, graph_store=store)
        with pytest.raises(ServiceUnavailableError):
            await service.store_codebase_graph("octo", "demo")

    @pytest.mark.asyncio
    async def test_store_codebase_graph(self, mock_github, mock_llm, repo_files):
        store = graph_store()
        service = CodeNavigationService(mock_github, mock_llm, graph_store=store)

        result = await service.store_codebase_graph("octo", "demo")

        assert result.success
        assert (result.files, result.imports) == (6, 2)
        owner, repo, ref, files, import_map = store.store_codebase_structure.call_args[0]
        assert (owner, repo, ref, files) == ("octo", "demo", "main", repo_files)
        assert import_map["main.go"] == ["auth/service.go"]
        assert import_map["auth/service_test.go"] == ["auth/service.go"]

    @pytest.mark.asyncio
    async def test_architecture_graph_reads_back(self, mock_github, mock_llm):
        graph = {"nodes": [{"path": "main.go"}], "relationships": []}
        service = CodeNavigationService(mock_github, mock_llm, graph_store=graph_store(graph))

        result = await service.explain_architecture_graph("octo", "demo")

        assert result.graph == graph
        assert result.explanation == "Generated text"


class TestAnswerQuestion:
    """Test codebase Q&A"""

    @pytest.mark.asyncio
    async def test_keywords_search_and_answer(self, mock_github, mock_llm):
        async def search(owner, repo, keyword, limit=5):
            if keyword == "auth":
                return [CodeSearchResult(path="auth/service.go", name="service.go", html_url="")]
            return []

        mock_github.search_code.side_effect = search
        mock_llm.generate.side_effect = [
            json.dumps({"keywords": ["auth", "session"]}),
            json.dumps({
                "answer": "Authentication lives in auth/service.go",
                "relevant_files": [{"path": "auth/service.go", "relevance": 80}],
            }),
        ]
        service = CodeNavigationService(mock_github, mock_llm)

        result = await service.answer_question("octo", "demo", "", "How does authentication work?")

        assert result.answer == "Authentication lives in auth/service.go"
        assert result.relevant_files[0].path == "auth/service.go"
        searched = [c[0][2] for c in mock_github.search_code.call_args_list]
        assert searched == ["auth", "session"]
        # one search hit, so entry points top up the context
        answer_prompt = prompt_of(mock_llm, 1)
        assert "File: auth/service.go" in answer_prompt
        assert "File: main.go" in answer_prompt

    @pytest.mark.asyncio
    async def test_keyword_failure_uses_question(self, mock_github, mock_llm):
        question = "Where is the config loaded?"
        mock_llm.generate.side_effect = [LLMError("timeout"), "The config is loaded in main.go"]
        service = CodeNavigationService(mock_github, mock_llm)

        result = await service.answer_question("octo", "demo", "", question)

        mock_github.search_code.assert_awaited_once_with("octo", "demo", question)
        assert "main.go" in result.answer

    @pytest.mark.asyncio
    async def test_given_keywords_skip_extraction(self, mock_github, mock_llm):
        service = CodeNavigationService(mock_github, mock_llm)
        await service.answer_question("octo", "demo", "", "What is main?", keywords=["main"])

        assert mock_llm.generate.await_count == 1
        mock_github.search_code.assert_awaited_once_with("octo", "demo", "main")

    @pytest.mark.asyncio
    async def test_empty_question(self, mock_github, mock_llm):
        service = CodeNavigationService(mock_github, mock_llm)
        with pytest.raises(InvalidInputError):
            await service.answer_question("octo", "demo", "", "   ")
        mock_github.get_repository_info.assert_not_called()


class TestBestPractices:
    """Test best-practice scopes"""

    @pytest.mark.asyncio
    async def test_file_scope_requires_path(self, mock_github, mock_llm):
        service = CodeNavigationService(mock_github, mock_llm)
        with pytest.raises(InvalidInputError):
            await service.generate_best_practices("octo", "demo", scope="file")

    @pytest.mark.asyncio
    async def test_directory_scope(self, mock_github, mock_llm):
        service = CodeNavigationService(mock_github, mock_llm)

        result = await service.generate_best_practices("octo", "demo", scope="directory", path="auth")

        fetched = [c[0][2] for c in mock_github.get_file_content.call_args_list]
        assert fetched == ["auth/service.go", "auth/service_test.go"]
        assert result.style_guide == "Generated text"

    @pytest.mark.asyncio
    async def test_full_scope_starts_with_entry_points(self, mock_github, mock_llm):
        service = CodeNavigationService(mock_github, mock_llm)
        await service.generate_best_practices("octo", "demo")

        fetched = [c[0][2] for c in mock_github.get_file_content.call_args_list]
        assert fetched[0] == "main.go"
        assert "go.mod" not in fetched

    @pytest.mark.asyncio
    async def test_no_files_in_scope(self, mock_github, mock_llm):
        service = CodeNavigationService(mock_github, mock_llm)
        with pytest.raises(InvalidInputError):
            await service.generate_best_practices("octo", "demo", scope="directory", path="missing")
