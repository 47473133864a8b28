"""
Orchestration services
"""

from github_agent.services.navigation.code_navigation import CodeNavigationService, detect_entry_points
from github_agent.services.navigation.pr_summary import PRSummaryService, assign_files_to_groups, group_files
from github_agent.services.navigation.generation import GenerationService

__all__ = [
    "CodeNavigationService",
    "detect_entry_points",
    "PRSummaryService",
    "assign_files_to_groups",
    "group_files",
    "GenerationService",
]
