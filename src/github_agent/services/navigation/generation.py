"""
Content generation service: READMEs, Dockerfiles, comments, refactors
"""

from typing import Dict, List, Optional, Sequence

from loguru import logger

from github_agent.config import settings
from github_agent.core.exceptions import AppError
from github_agent.models.requests import CodeSearchResponse, GenerateResponse, LLMOperation
from github_agent.services.github import GitHubClient, language_from_path
from github_agent.services.llm import LLMClient
from github_agent.services.llm import prompts
from github_agent.services.navigation.code_navigation import detect_entry_points

BUILD_FILES = (
    "package.json",
    "go.mod",
    "requirements.txt",
    "pyproject.toml",
    "setup.py",
    "Cargo.toml",
    "pom.xml",
    "build.gradle",
    "Gemfile",
    "composer.json",
    "Makefile",
)


def _strip_fence(text: str) -> str:
    """Drop a single surrounding ``` fence from generated file content"""
    lines = text.strip().split("\n")
    if len(lines) >= 2 and lines[0].startswith("```") and lines[-1].strip() == "```":
        lines = lines[1:-1]
    return "\n".join(lines)


class GenerationService:
    """Generates repository files and code rewrites"""

    def __init__(self, github: GitHubClient, llm: LLMClient):
        self.github = github
        self.llm = llm

    async def _fetch(self, owner: str, repo: str, paths: Sequence[str], ref: str) -> Dict[str, str]:
        contents: Dict[str, str] = {}
        for path in paths:
            try:
                contents[path] = (await self.github.get_file_content(owner, repo, path, ref)).content
            except AppError as e:
                logger.warning(f"Skipping {path}: {e}")
        return contents

    async def generate_readme(
        self,
        owner: str,
        repo: str,
        branch: str = "",
        include_files: Optional[Sequence[str]] = None,
    ) -> GenerateResponse:
        info = await self.github.get_repository_info(owner, repo)
        ref = branch or info.default_branch
        files = await self.github.get_all_files(owner, repo, ref)
        structure = await self.github.get_repository_structure(owner, repo, ref)

        paths = list(include_files or [])
        if not paths:
            paths = [f.path for f in files if f.path in BUILD_FILES]
            paths += detect_entry_points(files, info.language)
        contents = await self._fetch(owner, repo, paths[:settings.max_sample_files], ref)

        logger.info(f"Generating README for {owner}/{repo} from {len(contents)} files")
        raw = await self.llm.generate(
            prompts.build_readme_prompt(info, structure, contents, settings.max_prompt_file_chars)
        )
        return GenerateResponse(content=raw.strip())

    async def generate_dockerfile(self, owner: str, repo: str, branch: str = "", language: str = "") -> GenerateResponse:
        info = await self.github.get_repository_info(owner, repo)
        ref = branch or info.default_branch
        language = language or info.language or "Unknown"
        files = await self.github.get_all_files(owner, repo, ref)
        structure = await self.github.get_repository_structure(owner, repo, ref)
        contents = await self._fetch(owner, repo, [f.path for f in files if f.path in BUILD_FILES], ref)

        logger.info(f"Generating Dockerfile for {owner}/{repo} ({language})")
        raw = await self.llm.generate(prompts.build_dockerfile_prompt(info, language, structure, contents))
        return GenerateResponse(content=_strip_fence(raw))

    async def generate_comments(self, owner: str, repo: str, branch: str, file_path: str) -> GenerateResponse:
        content = await self.github.get_file_content(owner, repo, file_path, branch)
        raw = await self.llm.generate(
            prompts.build_code_comments_prompt(content.content, language_from_path(file_path), file_path)
        )
        return GenerateResponse(content=_strip_fence(raw))

    async def refactor_code(
        self,
        owner: str,
        repo: str,
        branch: str,
        file_path: str,
        instructions: str = "",
    ) -> GenerateResponse:
        content = await self.github.get_file_content(owner, repo, file_path, branch)
        raw = await self.llm.generate(
            prompts.build_code_refactor_prompt(content.content, language_from_path(file_path), file_path, instructions)
        )
        return GenerateResponse(content=_strip_fence(raw))

    async def search_code(self, owner: str, repo: str, query: str) -> CodeSearchResponse:
        results = await self.github.search_code(owner, repo, query)
        listing: List[Dict[str, str]] = [
            {"path": r.path, "name": r.name, "html_url": r.html_url} for r in results
        ]
        response = CodeSearchResponse(query=query, results=listing)
        if not listing:
            return response
        try:
            response.analysis = (await self.llm.generate(prompts.build_code_search_prompt(query, listing))).strip()
        except AppError as e:
            logger.warning(f"Code search analysis failed: {e}")
        return response

    async def llm_operation(self, operation: LLMOperation) -> GenerateResponse:
        """Run a generic summarize/explain/review/document request"""
        prompt = prompts.build_llm_operation_prompt(operation.type, operation.content, operation.options)
        raw = await self.llm.generate(prompt)
        return GenerateResponse(content=raw.strip())
