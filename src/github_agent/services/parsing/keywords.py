"""
Search keyword response parser
"""

import re
from typing import List

from loguru import logger
from pydantic import Field

from github_agent.models.common import LLMResultModel
from github_agent.services.parsing.base import clean_text, decode_model, strip_bullet

MAX_KEYWORDS = 5
_MAX_QUOTED_LENGTH = 50
_QUOTED_PATTERN = re.compile(r'"([^"\n]+)"')


class SearchKeywords(LLMResultModel):
    keywords: List[str] = Field(default_factory=list)


def parse_search_keywords(raw: str) -> List[str]:
    """Extract up to five lowercase search keywords from an LLM answer"""
    text = raw if isinstance(raw, str) else ""

    decoded = decode_model(text, SearchKeywords)
    if decoded is not None and decoded.keywords:
        return _normalize(decoded.keywords)

    logger.debug("Keyword response is not valid JSON, using heuristic extraction")
    quoted = [match for match in _QUOTED_PATTERN.findall(text) if len(match) < _MAX_QUOTED_LENGTH]
    # the JSON key itself shows up when the object was malformed
    quoted = [match for match in quoted if match.strip().lower() != "keywords"]
    if quoted:
        return _normalize(quoted)

    return _normalize(strip_bullet(part) for part in re.split(r"[,;\n]", text))


def _normalize(candidates) -> List[str]:
    keywords: List[str] = []
    for candidate in candidates:
        keyword = clean_text(str(candidate)).strip("'\"[]{}").lower()
        if keyword and keyword not in keywords:
            keywords.append(keyword)
        if len(keywords) >= MAX_KEYWORDS:
            break
    return keywords
