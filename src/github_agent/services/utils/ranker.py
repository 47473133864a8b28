"""
Ranking service for located snippets
Simple keyword presence scoring for relevance annotations
"""
import math
from typing import List, Sequence

from github_agent.models import RelevantFile


class Ranker:
    """Snippet relevance ranker"""

    MIN_SCORE = 1
    MAX_SCORE = 100

    @staticmethod
    def score_snippet(snippet: str, keywords: Sequence[str]) -> int:
        """Score snippet by the share of keywords it mentions.

        Case-insensitive substring presence only. The result is always within
        [1, 100]; an empty keyword set scores 1.
        """
        terms = [keyword.lower() for keyword in keywords or [] if keyword and keyword.strip()]
        if not terms:
            return Ranker.MIN_SCORE

        text = (snippet or "").lower()
        matched = sum(1 for term in terms if term in text)
        score = int(math.floor(100.0 * matched / len(terms) + 0.5))
        return max(Ranker.MIN_SCORE, min(Ranker.MAX_SCORE, score))

    @staticmethod
    def rank_relevant_files(files: List[RelevantFile]) -> List[RelevantFile]:
        """Sort by descending relevance, keeping input order for ties"""
        return sorted(files, key=lambda f: f.relevance, reverse=True)


ranker = Ranker()
