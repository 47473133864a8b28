"""
Async GitHub REST API client
"""

import base64
import posixpath
from typing import Any, Dict, List, Optional

import httpx
from loguru import logger

from github_agent.config import settings
from github_agent.core.exceptions import GitHubError, InvalidInputError, NotFoundError
from github_agent.models import (
    CodeSearchResult,
    FileContent,
    PullRequest,
    PullRequestFile,
    RepoFile,
    RepositoryInfo,
)

PER_PAGE = 100
MAX_PR_FILE_PAGES = 30


class GitHubClient:
    """Async client for the GitHub API"""

    def __init__(
        self,
        token: Optional[str] = None,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.token = token if token is not None else settings.github_token
        self.base_url = base_url or settings.github_api_url
        self.timeout = timeout or settings.github_timeout
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            headers = {
                "Accept": "application/vnd.github.v3+json",
                "User-Agent": "github-agent",
            }
            if self.token:
                headers["Authorization"] = f"token {self.token}"
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                headers=headers,
                timeout=httpx.Timeout(self.timeout),
                transport=self._transport,
            )
        return self._client

    async def aclose(self):
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def _get(self, path: str, context: str, params: Optional[Dict[str, Any]] = None) -> Any:
        client = self._get_client()
        try:
            response = await client.get(path, params=params)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            logger.error(f"{context}: {e}")
            if e.response.status_code == 404:
                raise NotFoundError.wrap(e, context)
            raise GitHubError.wrap(e, context)
        except httpx.HTTPError as e:
            logger.error(f"{context}: {e}")
            raise GitHubError.wrap(e, context)
        return response.json()

    async def get_repository_info(self, owner: str, repo: str) -> RepositoryInfo:
        context = "failed to get repository info"
        data = await self._get(f"/repos/{owner}/{repo}", context)
        languages = await self._get(f"/repos/{owner}/{repo}/languages", context)
        return RepositoryInfo(
            owner=owner,
            name=repo,
            full_name=data.get("full_name") or f"{owner}/{repo}",
            description=data.get("description") or "",
            default_branch=data.get("default_branch") or "main",
            language=data.get("language") or "",
            languages=languages or {},
            stars=data.get("stargazers_count") or 0,
            forks=data.get("forks_count") or 0,
            topics=data.get("topics") or [],
            html_url=data.get("html_url") or "",
        )

    async def get_file_content(self, owner: str, repo: str, path: str, ref: str = "") -> FileContent:
        params = {"ref": ref} if ref else None
        data = await self._get(f"/repos/{owner}/{repo}/contents/{path}", "failed to get file content", params)
        if isinstance(data, list) or data.get("type") != "file":
            raise InvalidInputError(f"path is not a file: {path}")

        raw = data.get("content") or ""
        if data.get("encoding") == "base64":
            content = base64.b64decode(raw).decode("utf-8", errors="replace")
        else:
            content = raw
        return FileContent(path=path, content=content, size=data.get("size") or 0, sha=data.get("sha") or "")

    async def list_files(self, owner: str, repo: str, path: str = "", ref: str = "") -> List[RepoFile]:
        params = {"ref": ref} if ref else None
        data = await self._get(f"/repos/{owner}/{repo}/contents/{path}", "failed to list files", params)
        entries = data if isinstance(data, list) else [data]
        return [
            RepoFile(
                name=entry.get("name") or posixpath.basename(entry.get("path", "")),
                path=entry.get("path", ""),
                type="dir" if entry.get("type") == "dir" else "file",
                size=entry.get("size") or 0,
            )
            for entry in entries
        ]

    async def get_all_files(self, owner: str, repo: str, ref: str = "") -> List[RepoFile]:
        """Recursive listing of the whole tree at ref"""
        if not ref:
            ref = (await self.get_repository_info(owner, repo)).default_branch
        data = await self._get(
            f"/repos/{owner}/{repo}/git/trees/{ref}",
            "failed to get all files",
            {"recursive": "1"},
        )
        if data.get("truncated"):
            logger.warning(f"Tree listing of {owner}/{repo}@{ref} was truncated by GitHub")

        files = []
        for entry in data.get("tree") or []:
            entry_type = entry.get("type")
            if entry_type not in ("blob", "tree"):
                continue
            path = entry.get("path", "")
            files.append(RepoFile(
                name=posixpath.basename(path),
                path=path,
                type="dir" if entry_type == "tree" else "file",
                size=entry.get("size") or 0,
            ))
        return files

    async def get_repository_structure(self, owner: str, repo: str, ref: str = "", max_entries: int = 300) -> str:
        """Indented text rendering of the repository tree"""
        files = await self.get_all_files(owner, repo, ref)
        lines = []
        for entry in sorted(files, key=lambda f: f.path)[:max_entries]:
            depth = entry.path.count("/")
            suffix = "/" if entry.type == "dir" else ""
            lines.append(f"{'  ' * depth}{entry.name}{suffix}")
        if len(files) > max_entries:
            lines.append(f"... {len(files) - max_entries} more entries")
        return "\n".join(lines)

    async def search_code(self, owner: str, repo: str, query: str, limit: int = 5) -> List[CodeSearchResult]:
        data = await self._get(
            "/search/code",
            "failed to search code",
            {"q": f"{query} repo:{owner}/{repo}", "per_page": limit},
        )
        return [
            CodeSearchResult(
                path=item.get("path", ""),
                name=item.get("name", ""),
                html_url=item.get("html_url", ""),
            )
            for item in (data.get("items") or [])[:limit]
        ]

    async def get_pull_request(self, owner: str, repo: str, number: int) -> PullRequest:
        context = "failed to get pull request"
        data = await self._get(f"/repos/{owner}/{repo}/pulls/{number}", context)

        files: List[PullRequestFile] = []
        for page in range(1, MAX_PR_FILE_PAGES + 1):
            batch = await self._get(
                f"/repos/{owner}/{repo}/pulls/{number}/files",
                context,
                {"per_page": PER_PAGE, "page": page},
            )
            files.extend(
                PullRequestFile(
                    filename=item.get("filename", ""),
                    status=item.get("status") or "modified",
                    additions=item.get("additions") or 0,
                    deletions=item.get("deletions") or 0,
                    changes=item.get("changes") or 0,
                    patch=item.get("patch"),
                )
                for item in batch
            )
            if len(batch) < PER_PAGE:
                break

        return PullRequest(
            number=number,
            title=data.get("title") or "",
            body=data.get("body") or "",
            author=(data.get("user") or {}).get("login", ""),
            html_url=data.get("html_url") or "",
            state=data.get("state") or "",
            base_branch=(data.get("base") or {}).get("ref", ""),
            head_branch=(data.get("head") or {}).get("ref", ""),
            additions=data.get("additions") or 0,
            deletions=data.get("deletions") or 0,
            changed_files=data.get("changed_files") or len(files),
            files=files,
        )
