"""
Code excerpt utilities
"""

from github_agent.services.code.snippet_locator import SnippetLocator, parse_snippet_range

__all__ = ["SnippetLocator", "parse_snippet_range"]
