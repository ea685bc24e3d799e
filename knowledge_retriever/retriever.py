"""R01 候选检索 — 由 KeywordSet 构造文本模式查询并调用文档库

流程：
1. build_search_query → 每个检索词 × 每个检索字段 的析取条件；
   车型、年份作为优先词，文档必须在标题/正文/摘要/描述中至少命中一个
2. 限时调用 DocumentStore.search，失败或超时 → 空候选
3. 按文档类型复核命中位置（视频/图文/结构化各自的主体字段）
"""

from __future__ import annotations

import re
from typing import Iterable

from keyword_extraction.models import KeywordSet
from keyword_extraction.rule_extractor import split_vehicle_terms
from knowledge_retriever.config import (
    PRIORITY_FIELDS,
    PUBLISHED_STATUS,
    SEARCH_FIELDS,
    STORE_TIMEOUT,
)
from knowledge_retriever.models import FieldMatch, SearchQuery
from knowledge_retriever.schema import Document
from knowledge_retriever.store import DocumentStore
from utils.logger_system import log_msg
from utils.timeout import run_with_timeout

_FOUR_DIGIT_YEAR = re.compile(r"^\d{4}$")


def priority_terms(keywords: Iterable[str], sentence: str = "") -> list[str]:
    """优先词：具体车型 + 4 位年份。sentence 为原始问题，用于排除句首大写词。"""
    keywords = list(keywords)
    models, _ = split_vehicle_terms(keywords, sentence)
    years = [k for k in keywords if _FOUR_DIGIT_YEAR.match(k)]
    return models + years


def build_search_query(keywords: KeywordSet | Iterable[str]) -> SearchQuery:
    """构造文档库检索条件。

    Args:
        keywords: 有序检索词

    Returns:
        SearchQuery（只检索已发布文档）
    """
    sentence = keywords.query_text if isinstance(keywords, KeywordSet) else ""
    terms = [k for k in keywords if k.strip()]
    any_of = [
        FieldMatch(field=f, pattern=re.escape(term))
        for term in terms
        for f in SEARCH_FIELDS
    ]
    must = [
        FieldMatch(field=f, pattern=re.escape(term))
        for term in priority_terms(terms, sentence)
        for f in PRIORITY_FIELDS
    ]
    return SearchQuery(
        any_of=any_of,
        must_match_one_of=must,
        status=PUBLISHED_STATUS,
        keywords=terms,
    )


class CandidateRetriever:
    """候选文档检索器。

    只负责"找出可能相关的文档"，不排序；排序由 relevance 模块完成。

    Args:
        store: 文档库
        timeout: 文档库调用超时秒数
    """

    def __init__(self, store: DocumentStore, timeout: float = STORE_TIMEOUT) -> None:
        self._store = store
        self._timeout = timeout

    def retrieve(self, keywords: KeywordSet | Iterable[str]) -> list[Document]:
        """检索候选文档。文档库异常或超时时返回空列表。

        Args:
            keywords: 有序检索词

        Returns:
            通过类型复核的候选文档（保持文档库返回顺序）
        """
        query = build_search_query(keywords)
        if not query.keywords:
            return []

        try:
            documents = run_with_timeout(
                self._store.search, self._timeout, query, label="document-store"
            )
        except Exception as exc:
            log_msg("WARNING", f"文档库检索失败，按无候选处理: {exc}")
            return []

        lowered = [k.lower() for k in query.keywords]
        candidates = [doc for doc in documents if _kind_fields_match(doc, lowered)]
        log_msg(
            "INFO",
            f"候选检索: 文档库返回 {len(documents)} 篇，类型复核后 {len(candidates)} 篇",
        )
        return candidates


def _kind_fields_match(doc: Document, keywords: list[str]) -> bool:
    """检索词是否命中该类型文档的主体字段。

    视频：标题、描述/正文、视频列表；图文：标题、正文/摘要、章节；
    结构化：标题、正文/摘要。
    """
    texts: list[str] = [doc.title]
    if doc.kind == "video":
        texts.extend([doc.description or "", doc.content or ""])
        texts.extend(f"{v.title} {v.description}" for v in doc.videos)
    elif doc.kind == "general":
        texts.extend([doc.content or "", doc.summary or ""])
        texts.extend(f"{s.heading} {s.content}" for s in doc.sections)
    else:
        texts.extend([doc.content or "", doc.summary or ""])

    haystack = "\n".join(t for t in texts if t).lower()
    return any(k in haystack for k in keywords)
