"""
Structured-response parsers: LLM output to typed results
"""

from github_agent.services.parsing.base import (
    extract_json_object,
    decode_model,
    parse_with_fallback,
)
from github_agent.services.parsing.walkthrough import parse_walkthrough
from github_agent.services.parsing.function_explanation import parse_function_explanation
from github_agent.services.parsing.qa import parse_codebase_answer
from github_agent.services.parsing.best_practices import parse_best_practices
from github_agent.services.parsing.keywords import parse_search_keywords
from github_agent.services.parsing.pr_summary import parse_pr_summary

__all__ = [
    "extract_json_object",
    "decode_model",
    "parse_with_fallback",
    "parse_walkthrough",
    "parse_function_explanation",
    "parse_codebase_answer",
    "parse_best_practices",
    "parse_search_keywords",
    "parse_pr_summary",
]
