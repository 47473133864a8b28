"""
Tests for pull request file grouping and summaries
"""
import json
from unittest.mock import AsyncMock

import pytest

from github_agent.core.exceptions import InvalidInputError
from github_agent.models import FileGroup, PullRequest, PullRequestFile
from github_agent.services.navigation import PRSummaryService, assign_files_to_groups, group_files


def groups(*names):
    return [FileGroup(name=name) for name in names]


def files_of(result):
    return {group.name: group.files for group in result}


class TestAssignFilesToGroups:
    """Test that every changed file lands in exactly one group"""

    @pytest.mark.unit
    def test_unmatched_files_go_to_first_group(self):
        result = assign_files_to_groups(groups("core", "utils"), ["a.go", "b.go", "c.go"])
        assert files_of(result) == {"core": ["a.go", "b.go", "c.go"], "utils": []}

    @pytest.mark.unit
    def test_files_routed_by_name(self):
        changed = ["core/engine.go", "pkg/utils_test.go", "docs/readme.md"]
        result = assign_files_to_groups(groups("core", "utils"), changed)
        assert files_of(result) == {
            "core": ["core/engine.go", "docs/readme.md"],
            "utils": ["pkg/utils_test.go"],
        }

    @pytest.mark.unit
    def test_duplicates_and_unknown_files_dropped(self):
        proposed = [
            FileGroup(name="core", files=["a.go", "a.go", "ghost.go"]),
            FileGroup(name="tests", files=["a.go", "a_test.go"]),
        ]
        result = assign_files_to_groups(proposed, ["a.go", "a_test.go"])

        assert files_of(result) == {"core": ["a.go"], "tests": ["a_test.go"]}
        assert proposed[0].files == ["a.go", "a.go", "ghost.go"]

    @pytest.mark.unit
    def test_every_file_once(self):
        changed = [f"dir{i % 3}/file{i}.py" for i in range(12)]
        result = assign_files_to_groups(groups("dir1", "misc"), changed)
        flattened = [path for group in result for path in group.files]
        assert sorted(flattened) == sorted(changed)

    @pytest.mark.unit
    def test_no_groups_falls_back_to_directories(self):
        result = assign_files_to_groups([], ["api/routes.py", "api/models.py", "setup.py"])
        assert files_of(result) == {"api": ["api/routes.py", "api/models.py"], "root": ["setup.py"]}
        assert result[0].description == "Changes in api"

    @pytest.mark.unit
    def test_group_files_dedupes(self):
        assert group_files(["a.py", "a.py"])[0].files == ["a.py"]


class TestPRSummaryService:
    """Test the summary pipeline with mocked collaborators"""

    @pytest.fixture
    def pull_request(self):
        return PullRequest(
            number=5,
            title="Add response cache",
            author="octocat",
            additions=40,
            deletions=2,
            changed_files=2,
            files=[
                PullRequestFile(filename="core/cache.go", additions=38, deletions=2),
                PullRequestFile(filename="docs/cache.md", additions=2),
            ],
        )

    @pytest.mark.asyncio
    async def test_summarize(self, pull_request):
        github = AsyncMock()
        github.get_pull_request.return_value = pull_request
        llm = AsyncMock()
        llm.generate.return_value = json.dumps({
            "title": "",
            "description": "Adds an in-memory response cache",
            "main_points": ["Cache responses"],
            "file_groups": [{"name": "core", "files": ["core/cache.go"], "importance": 14}],
        })

        service = PRSummaryService(github, llm, max_prompt_files=5)
        summary = await service.summarize("https://github.com/octo/demo/pull/5")

        github.get_pull_request.assert_awaited_once_with("octo", "demo", 5)
        assert summary.title == "Add response cache"
        assert summary.description == "Adds an in-memory response cache"
        assert summary.file_groups[0].files == ["core/cache.go", "docs/cache.md"]
        assert summary.file_groups[0].importance == 10
        assert summary.repository == "octo/demo"
        assert summary.pr_url == "https://github.com/octo/demo/pull/5"
        assert (summary.author, summary.additions, summary.deletions) == ("octocat", 40, 2)

    @pytest.mark.asyncio
    async def test_unstructured_answer_still_groups_files(self, pull_request):
        github = AsyncMock()
        github.get_pull_request.return_value = pull_request
        llm = AsyncMock()
        llm.generate.return_value = "This change adds a cache to the core package."

        summary = await PRSummaryService(github, llm).summarize("https://github.com/octo/demo/pull/5")

        grouped = [path for group in summary.file_groups for path in group.files]
        assert sorted(grouped) == ["core/cache.go", "docs/cache.md"]
        assert summary.title == "Add response cache"

    @pytest.mark.asyncio
    async def test_invalid_url(self):
        github = AsyncMock()
        with pytest.raises(InvalidInputError):
            await PRSummaryService(github, AsyncMock()).summarize("https://github.com/octo/demo")
        github.get_pull_request.assert_not_called()
