"""相关性模块 — 意图识别、规则评分、排序截断。"""

from relevance.intent import classify_intent
from relevance.models import QueryIntent, ScoredCandidate
from relevance.ranker import rank_candidates, score_candidates
from relevance.scorer import ScoreDelta, ScoringContext, score_document

__all__ = [
    "QueryIntent",
    "ScoreDelta",
    "ScoredCandidate",
    "ScoringContext",
    "classify_intent",
    "rank_candidates",
    "score_candidates",
    "score_document",
]
