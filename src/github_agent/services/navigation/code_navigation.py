"""
Code navigation service

Walkthroughs, function explanations, architecture diagrams, codebase Q&A and
best-practice guides. Each operation fetches its inputs from GitHub, builds a
prompt, calls the LLM and hands the raw text to the matching parser.
"""

import os
from typing import Dict, List, Optional, Sequence

from loguru import logger

from github_agent.config import settings
from github_agent.core.exceptions import AppError, InvalidInputError, ServiceUnavailableError
from github_agent.models import (
    ArchitectureDiagram,
    BestPracticesResponse,
    CodebaseQAResponse,
    CodeWalkthroughResponse,
    FunctionExplanation,
    RepoFile,
    RepositoryInfo,
)
from github_agent.models.requests import ArchitectureGraphResponse, GraphStoreResponse
from github_agent.services.code import SnippetLocator
from github_agent.services.github import GitHubClient, extract_function_code, is_source_file, language_from_path
from github_agent.services.graph import DiagramMapper, build_import_map, find_important_nodes
from github_agent.services.llm import LLMClient
from github_agent.services.llm import prompts
from github_agent.services.parsing import (
    parse_best_practices,
    parse_codebase_answer,
    parse_function_explanation,
    parse_search_keywords,
    parse_walkthrough,
)
from github_agent.services.utils import Ranker

DEFAULT_WALKTHROUGH_DEPTH = 3
MIN_QA_FILES = 2

GO_ENTRY_POINTS = ("main.go",)
JS_ENTRY_POINTS = tuple(
    f"{name}{ext}" for name in ("index", "app", "server", "main") for ext in (".js", ".ts")
)
PYTHON_ENTRY_POINTS = ("__main__.py", "app.py", "main.py", "run.py", "manage.py")


def detect_entry_points(files: Sequence[RepoFile], language: str = "") -> List[str]:
    """Paths of files whose name is a conventional entry point for the language"""
    language = (language or "").lower()
    if language == "go":
        names = GO_ENTRY_POINTS
    elif language in ("javascript", "typescript"):
        names = JS_ENTRY_POINTS
    elif language == "python":
        names = PYTHON_ENTRY_POINTS
    else:
        names = GO_ENTRY_POINTS + JS_ENTRY_POINTS + PYTHON_ENTRY_POINTS

    entry_points = [f.path for f in files if f.type == "file" and os.path.basename(f.path) in names]
    # shallow paths first: cmd/tool/main.go before vendor/x/y/main.go
    return sorted(entry_points, key=lambda path: path.count("/"))


def _default_overview(owner: str, repo: str) -> str:
    return (
        f"This is a basic visualization of the file structure for {owner}/{repo}. "
        "Nodes are files and directories; edges show containment, tests and usage."
    )


class CodeNavigationService:
    """Code understanding features over a GitHub repository"""

    def __init__(
        self,
        github: GitHubClient,
        llm: LLMClient,
        graph_store=None,
        locator: Optional[SnippetLocator] = None,
        ranker: Optional[Ranker] = None,
        mapper: Optional[DiagramMapper] = None,
    ):
        self.github = github
        self.llm = llm
        self.graph_store = graph_store
        self.locator = locator or SnippetLocator()
        self.ranker = ranker or Ranker()
        self.mapper = mapper or DiagramMapper()

    async def _repository(self, owner: str, repo: str, branch: str):
        info = await self.github.get_repository_info(owner, repo)
        return info, branch or info.default_branch

    async def _fetch_contents(self, owner: str, repo: str, paths: Sequence[str], ref: str) -> Dict[str, str]:
        """Fetch file texts, skipping files that cannot be read"""
        contents: Dict[str, str] = {}
        for path in paths:
            if path in contents:
                continue
            try:
                contents[path] = (await self.github.get_file_content(owner, repo, path, ref)).content
            except AppError as e:
                logger.warning(f"Skipping {path}: {e}")
        return contents

    # walkthrough

    async def generate_walkthrough(
        self,
        owner: str,
        repo: str,
        branch: str = "",
        depth: int = 0,
        focus_path: str = "",
        entry_points: Optional[Sequence[str]] = None,
    ) -> CodeWalkthroughResponse:
        info, ref = await self._repository(owner, repo, branch)
        files = await self.github.get_all_files(owner, repo, ref)

        entry_points = list(entry_points or []) or detect_entry_points(files, info.language)
        depth = depth or DEFAULT_WALKTHROUGH_DEPTH
        samples = [
            f.path for f in files
            if f.type == "file" and is_source_file(f.path) and f.path.startswith(focus_path or "")
            and f.path not in entry_points
        ][:depth]

        contents = await self._fetch_contents(owner, repo, entry_points[:depth] + samples, ref)
        logger.info(f"Generating walkthrough of {owner}/{repo}@{ref} from {len(contents)} files")

        prompt = prompts.build_walkthrough_prompt(
            info, contents, entry_points, focus_path, settings.max_prompt_file_chars
        )
        raw = await self.llm.generate(prompt)
        result = parse_walkthrough(raw, entry_points)
        if not result.entry_points:
            result.entry_points = entry_points
        return result

    # function explanation

    async def explain_function(
        self,
        owner: str,
        repo: str,
        branch: str,
        file_path: str,
        function_name: str = "",
        line_start: int = 0,
        line_end: int = 0,
    ) -> FunctionExplanation:
        _, ref = await self._repository(owner, repo, branch)
        content = (await self.github.get_file_content(owner, repo, file_path, ref)).content

        if line_start > 0 and line_end > 0:
            lines = content.split("\n")
            if not 1 <= line_start <= line_end <= len(lines):
                raise InvalidInputError("invalid line numbers")
            code = "\n".join(lines[line_start - 1:line_end])
        elif function_name:
            code, line_start, line_end = extract_function_code(content, function_name)
        else:
            raise InvalidInputError("function name or line range is required")

        logger.info(f"Explaining {file_path}:{line_start}-{line_end} of {owner}/{repo}")
        prompt = prompts.build_function_explainer_prompt(
            code, language_from_path(file_path), file_path, function_name
        )
        raw = await self.llm.generate(prompt)
        result = parse_function_explanation(raw, function_name)
        if not result.function_name:
            result.function_name = function_name
        return result

    # architecture

    async def visualize_architecture(
        self,
        owner: str,
        repo: str,
        branch: str = "",
        detail: str = "medium",
        focus_paths: Optional[Sequence[str]] = None,
    ) -> ArchitectureDiagram:
        _, ref = await self._repository(owner, repo, branch)
        focus_paths = list(focus_paths or [])

        diagram = None
        if self.graph_store is not None and self.graph_store.connected:
            try:
                graph = await self.graph_store.get_codebase_graph(owner, repo, ref)
                if graph.get("nodes"):
                    diagram = self.mapper.map_graph(graph, detail, focus_paths)
            except AppError as e:
                logger.warning(f"Graph store query failed: {e}")

        files: List[RepoFile] = []
        if diagram is None:
            logger.warning(f"Using file-structure fallback diagram for {owner}/{repo}@{ref}")
            files = await self.github.get_all_files(owner, repo, ref)
            diagram = self.mapper.map_files(files, detail, focus_paths)

        result = ArchitectureDiagram(diagram_data=diagram)
        result.component_descriptions = await self._describe_components(owner, repo, ref, result)

        try:
            result.overview = (await self.llm.generate(
                prompts.build_architecture_overview_prompt(owner, repo, diagram)
            )).strip()
        except AppError as e:
            logger.warning(f"Architecture overview generation failed: {e}")
            result.overview = _default_overview(owner, repo)
        return result

    async def _describe_components(self, owner: str, repo: str, ref: str, diagram: ArchitectureDiagram) -> Dict[str, str]:
        important = [node for node in find_important_nodes(diagram.diagram_data) if node.type == "file"]
        descriptions: Dict[str, str] = {}
        for node in important[:settings.max_component_descriptions]:
            try:
                content = (await self.github.get_file_content(owner, repo, node.id, ref)).content
                text = await self.llm.generate(prompts.build_component_description_prompt(node.id, content))
            except AppError as e:
                logger.warning(f"Skipping description of {node.id}: {e}")
                continue
            descriptions[node.id] = text.strip()
        return descriptions

    async def store_codebase_graph(self, owner: str, repo: str, branch: str = "") -> GraphStoreResponse:
        """Scan imports and persist the repository structure in the graph store"""
        if self.graph_store is None or not self.graph_store.connected:
            raise ServiceUnavailableError("graph store is not enabled")

        _, ref = await self._repository(owner, repo, branch)
        files = await self.github.get_all_files(owner, repo, ref)
        scan = [
            f.path for f in files
            if f.type == "file" and (is_source_file(f.path) or f.path == "go.mod")
        ][:settings.max_import_scan_files]
        contents = await self._fetch_contents(owner, repo, scan, ref)

        import_map = build_import_map(files, contents)
        stats = await self.graph_store.store_codebase_structure(owner, repo, ref, files, import_map)
        return GraphStoreResponse(
            success=True,
            message=f"stored {owner}/{repo}@{ref}",
            files=stats["files"],
            imports=stats["imports"],
        )

    async def get_architecture_graph(self, owner: str, repo: str, branch: str = "") -> GraphStoreResponse:
        """Store the current structure, then read it back as a raw graph"""
        stored = await self.store_codebase_graph(owner, repo, branch)
        _, ref = await self._repository(owner, repo, branch)
        stored.graph = await self.graph_store.get_codebase_graph(owner, repo, ref)
        return stored

    async def explain_architecture_graph(self, owner: str, repo: str, branch: str = "") -> ArchitectureGraphResponse:
        graph = (await self.get_architecture_graph(owner, repo, branch)).graph or {}
        explanation = await self.llm.generate(prompts.build_graph_explanation_prompt(graph))
        return ArchitectureGraphResponse(graph=graph, explanation=explanation.strip())

    # Q&A

    async def _extract_keywords(self, question: str, language: str) -> List[str]:
        try:
            raw = await self.llm.generate(prompts.build_keyword_extraction_prompt(question, language))
            keywords = parse_search_keywords(raw)
        except AppError as e:
            logger.warning(f"Keyword extraction failed: {e}")
            keywords = []
        return keywords or [question]

    async def answer_question(
        self,
        owner: str,
        repo: str,
        branch: str,
        question: str,
        keywords: Optional[Sequence[str]] = None,
    ) -> CodebaseQAResponse:
        if not question or not question.strip():
            raise InvalidInputError("question cannot be empty")

        info, ref = await self._repository(owner, repo, branch)
        keywords = [k for k in (keywords or []) if k.strip()] or await self._extract_keywords(question, info.language)
        logger.info(f"Answering question about {owner}/{repo} with keywords {keywords}")

        paths: List[str] = []
        for keyword in keywords:
            try:
                results = await self.github.search_code(owner, repo, keyword)
            except AppError as e:
                logger.warning(f"Code search for '{keyword}' failed: {e}")
                continue
            for result in results:
                if result.path not in paths and len(paths) < settings.max_qa_files:
                    paths.append(result.path)

        if len(paths) < MIN_QA_FILES:
            files = await self.github.get_all_files(owner, repo, ref)
            for path in detect_entry_points(files, info.language):
                if path not in paths and len(paths) < settings.max_qa_files:
                    paths.append(path)

        relevant_code = await self._fetch_contents(owner, repo, paths, ref)
        prompt = prompts.build_codebase_qa_prompt(info, question, relevant_code, settings.max_prompt_file_chars)
        raw = await self.llm.generate(prompt)
        return parse_codebase_answer(raw, relevant_code, keywords, self.locator, self.ranker)

    # best practices

    async def generate_best_practices(
        self,
        owner: str,
        repo: str,
        branch: str = "",
        scope: str = "full",
        path: str = "",
    ) -> BestPracticesResponse:
        info, ref = await self._repository(owner, repo, branch)
        limit = settings.max_sample_files

        if scope == "file":
            if not path:
                raise InvalidInputError("path is required for file scope")
            paths = [path]
        else:
            files = await self.github.get_all_files(owner, repo, ref)
            sources = [f.path for f in files if f.type == "file" and is_source_file(f.path)]
            if scope == "directory":
                prefix = path.rstrip("/") + "/" if path else ""
                paths = [p for p in sources if p.startswith(prefix)][:limit]
            else:
                entry_points = detect_entry_points(files, info.language)
                paths = (entry_points + [p for p in sources if p not in entry_points])[:limit]

        contents = await self._fetch_contents(owner, repo, paths, ref)
        if not contents:
            raise InvalidInputError(f"no source files found for scope '{scope}'")

        logger.info(f"Reviewing {len(contents)} files of {owner}/{repo} ({scope} scope)")
        prompt = prompts.build_best_practices_prompt(info, contents, scope, settings.max_prompt_file_chars)
        raw = await self.llm.generate(prompt)
        return parse_best_practices(raw)
