"""
LLM access and prompt construction
"""

from github_agent.services.llm.client import LLMClient, create_llm

__all__ = ["LLMClient", "create_llm"]
