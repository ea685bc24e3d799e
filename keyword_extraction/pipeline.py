"""Q01 关键词抽取管道 — 合并四路结果为 KeywordSet

四步流程（各步独立容错，任一步失败只让结果变弱，不会中断）：
1. 保留信息（年份/尺寸/车型/缩写）
2. LLM 抽取（可选，限时）
3. 领域词翻译表
4. 分词兜底
合并顺序 1 → 2 → 3 → 4，大小写无关去重，截断后追加原始查询。
"""

from __future__ import annotations

from typing import Callable

from keyword_extraction.config import MAX_KEYWORDS
from keyword_extraction.llm_extractor import LLMKeywordExtractor
from keyword_extraction.models import KeywordSet, Query
from keyword_extraction.rule_extractor import (
    dedupe_terms,
    extract_preserved_info,
    tokenize,
    translate_with_table,
)
from utils.logger_system import log_msg


def extract_keywords(
    query: Query,
    llm: LLMKeywordExtractor | None = None,
    max_keywords: int = MAX_KEYWORDS,
) -> KeywordSet:
    """从查询生成有序检索词集合。

    Args:
        query: 用户查询
        llm: 可选 LLM 抽取器，为 None 时只走规则路径
        max_keywords: 检索词上限（含原始查询）

    Returns:
        KeywordSet，至少包含原始查询文本
    """
    preserved = _safe_step("保留信息", lambda: extract_preserved_info(query.text))
    llm_terms: list[str] = []
    if llm is not None:
        llm_terms = _safe_step("LLM 抽取", lambda: llm.extract(query.text, query.language))
    table_terms = _safe_step(
        "领域词翻译", lambda: translate_with_table(query.text, query.language)
    )
    tokens = _safe_step("分词", lambda: tokenize(query.text, preserved))

    raw_query = query.text.strip()
    merged = [
        term
        for term in dedupe_terms(preserved + llm_terms + table_terms + tokens)
        if term.lower() != raw_query.lower()
    ]
    terms = merged[: max(max_keywords - 1, 0)]
    if raw_query:
        terms.append(raw_query)
    if not terms:
        terms = [query.text]

    log_msg(
        "INFO",
        f"关键词抽取 ({query.language}): 保留 {len(preserved)}, LLM {len(llm_terms)}, "
        f"规则 {len(table_terms)}, 分词 {len(tokens)} → [{', '.join(terms)}]",
    )
    return KeywordSet(terms=tuple(terms))


def _safe_step(name: str, step: Callable[[], list[str]]) -> list[str]:
    """执行单个抽取步骤，异常时记录警告并返回空列表。"""
    try:
        return list(step())
    except Exception as exc:
        log_msg("WARNING", f"关键词抽取步骤「{name}」失败，已跳过: {exc}")
        return []
