"""
Pull request summary service
"""

import posixpath
from typing import Dict, List, Optional, Sequence

from loguru import logger

from github_agent.config import settings
from github_agent.models import FileGroup, PRSummary
from github_agent.services.github import GitHubClient, parse_pull_request_url
from github_agent.services.llm import LLMClient
from github_agent.services.llm.prompts import build_pr_summary_prompt
from github_agent.services.parsing import parse_pr_summary

ROOT_GROUP = "root"
NAME_MATCH_SCORE = 3
PATH_MATCH_SCORE = 2


def group_files(files: Sequence[str]) -> List[FileGroup]:
    """Group changed files by top-level directory"""
    groups: Dict[str, FileGroup] = {}
    for path in files:
        name = path.split("/", 1)[0] if "/" in path else ROOT_GROUP
        if name not in groups:
            groups[name] = FileGroup(name=name, description=f"Changes in {name}")
        if path not in groups[name].files:
            groups[name].files.append(path)
    return list(groups.values())


def _match_score(path: str, group_name: str) -> int:
    name = group_name.strip().lower()
    if not name:
        return 0
    score = 0
    if name in posixpath.basename(path).lower():
        score += NAME_MATCH_SCORE
    directories = [part.lower() for part in path.split("/")[:-1] if part]
    if any(name in part or part in name for part in directories):
        score += PATH_MATCH_SCORE
    return score


def assign_files_to_groups(groups: Sequence[FileGroup], files: Sequence[str]) -> List[FileGroup]:
    """Make every changed file appear in exactly one group.

    Duplicates and files that are not part of the change are dropped from the
    groups the LLM proposed; each remaining file goes to the group whose name
    matches it best, or to the first group.
    """
    if not groups:
        return group_files(files)

    changed = list(dict.fromkeys(files))
    known = set(changed)
    assigned = set()
    result: List[FileGroup] = []
    for group in groups:
        kept = []
        for path in group.files:
            if path in known and path not in assigned:
                kept.append(path)
                assigned.add(path)
        result.append(group.model_copy(update={"files": kept}))

    for path in changed:
        if path in assigned:
            continue
        best, best_score = result[0], 0
        for group in result:
            score = _match_score(path, group.name)
            if score > best_score:
                best, best_score = group, score
        best.files.append(path)
        assigned.add(path)

    return result


class PRSummaryService:
    """Summarizes GitHub pull requests"""

    def __init__(self, github: GitHubClient, llm: LLMClient, max_prompt_files: Optional[int] = None):
        self.github = github
        self.llm = llm
        self.max_prompt_files = max_prompt_files or settings.max_pr_prompt_files

    async def summarize(self, url: str) -> PRSummary:
        owner, repo, number = parse_pull_request_url(url)
        pr = await self.github.get_pull_request(owner, repo, number)
        logger.info(f"Summarizing {owner}/{repo}#{number} ({len(pr.files)} files)")

        raw = await self.llm.generate(build_pr_summary_prompt(pr, self.max_prompt_files))
        summary = parse_pr_summary(raw)

        summary.file_groups = assign_files_to_groups(summary.file_groups, [f.filename for f in pr.files])
        summary.title = summary.title or pr.title
        summary.pr_number = pr.number
        summary.pr_url = pr.html_url or url
        summary.repository = f"{owner}/{repo}"
        summary.author = pr.author
        summary.changed_files = pr.changed_files
        summary.additions = pr.additions
        summary.deletions = pr.deletions
        return summary
