"""
Utility services
"""

from github_agent.services.utils.ranker import Ranker, ranker

__all__ = ["Ranker", "ranker"]
