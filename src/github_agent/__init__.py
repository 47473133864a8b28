"""
GitHub Agent - AI-generated artifacts for GitHub repositories.

Walkthroughs, function explanations, architecture diagrams, codebase Q&A,
best-practice guides and pull request summaries built from GitHub data and
LLM output.
"""

from github_agent.__version__ import __version__, get_version, get_features

__all__ = ["__version__", "get_version", "get_features"]
