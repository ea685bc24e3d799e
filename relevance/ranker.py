"""S01 排序与截断 — 相关性下限、意图类型优先、自适应截断"""

from __future__ import annotations

from functools import cmp_to_key
from typing import Iterable

from keyword_extraction.models import KeywordSet, Query
from knowledge_retriever.schema import Document
from relevance.config import MIN_KEEP, RELEVANCE_FLOOR, TIE_WINDOW, TRUNCATION_RATIO
from relevance.models import QueryIntent, ScoredCandidate
from relevance.scorer import ScoringContext, score_with_context
from utils.logger_system import log_msg


def score_candidates(
    documents: Iterable[Document],
    query: Query,
    intent: QueryIntent,
    keywords: KeywordSet | Iterable[str],
) -> list[ScoredCandidate]:
    """为每篇候选文档评分（保持输入顺序，文档对象原样传递）。"""
    ctx = ScoringContext.build(query, intent, keywords)
    return [ScoredCandidate(document=doc, score=score_with_context(doc, ctx)) for doc in documents]


def _preferred_kind(intent: QueryIntent) -> str | None:
    if intent.is_compatibility:
        return "structured"
    if intent.is_installation:
        return "video"
    return None


def _make_comparator(intent: QueryIntent, tie_window: int):
    preferred = _preferred_kind(intent)

    def compare(a: ScoredCandidate, b: ScoredCandidate) -> int:
        if preferred and abs(a.score - b.score) < tie_window:
            a_pref = a.document.kind == preferred
            b_pref = b.document.kind == preferred
            if a_pref != b_pref:
                return -1 if a_pref else 1
        if a.score != b.score:
            return b.score - a.score
        if a.document.title != b.document.title:
            return -1 if a.document.title < b.document.title else 1
        if a.document.id != b.document.id:
            return -1 if a.document.id < b.document.id else 1
        return 0

    return compare


def rank_candidates(
    candidates: Iterable[ScoredCandidate],
    intent: QueryIntent,
    floor: int = RELEVANCE_FLOOR,
    ratio: float = TRUNCATION_RATIO,
    min_keep: int = MIN_KEEP,
    tie_window: int = TIE_WINDOW,
) -> list[ScoredCandidate]:
    """过滤、排序并自适应截断候选。

    流程：
    1. 去掉负分（已排除）
    2. 去掉低于相关性下限的候选
    3. 降序排序；分差小于 tie_window 时按意图偏好类型优先，
       同分再按标题、id 排序，保证结果可复现
    4. 多于 1 个时只保留 ≥ 最高分 × ratio 的候选；
       剩余不足 min_keep 且排序后至少有 min_keep 个时，保留前 min_keep 个

    Args:
        candidates: 已评分候选
        intent: 查询意图
        floor: 相关性下限
        ratio: 截断比例
        min_keep: 截断后最少保留数
        tie_window: 视为同分的分差

    Returns:
        最终排序结果
    """
    candidates = list(candidates)
    kept = [c for c in candidates if not c.excluded]
    relevant = [c for c in kept if c.score >= floor]
    ranked = sorted(relevant, key=cmp_to_key(_make_comparator(intent, tie_window)))

    final = ranked
    if len(ranked) > 1:
        threshold = ranked[0].score * ratio
        final = [c for c in ranked if c.score >= threshold]
        if len(final) < min_keep and len(ranked) >= min_keep:
            final = ranked[:min_keep]

    log_msg(
        "INFO",
        f"排序: 候选 {len(candidates)} → 排除后 {len(kept)} → 下限过滤后 {len(relevant)} "
        f"→ 截断后 {len(final)}",
    )
    for index, candidate in enumerate(final, 1):
        log_msg(
            "INFO",
            f"  {index}. [{candidate.document.kind}] {candidate.document.title} "
            f"(得分 {candidate.score})",
        )
    return final
