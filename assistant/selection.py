"""A01 多结果选择 — 选择列表、数字回复识别、章节精炼

两轮协议：
1. 排序后多于 1 个结果 → 返回编号列表（SelectionList 交给调用方保存）
2. 调用方带回数字与同一 SelectionList → 校验编号，按原查询精炼章节后作答

引擎不持有会话状态，SelectionList 可序列化（to_dict / from_dict）。
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any, Iterable

from assistant.config import (
    MAX_MATCHED_SECTIONS,
    SECTION_CONTENT_WEIGHT,
    SECTION_HEADING_WEIGHT,
    SECTION_TEXT_WEIGHT,
    SELECTION_TEXTS,
)
from keyword_extraction.language import Language
from knowledge_retriever.schema import Document, Section
from utils.logger_system import log_msg

_NUMBER_SELECTION_PATTERN = re.compile(
    r"^(?:选择|我选择|choice|select|number|no\.?|#)?\s*(\d+)\s*(?:号|th|st|nd|rd)?$",
    re.IGNORECASE,
)


# ═══════════════════════════════════════════════════════════════
# 选择列表
# ═══════════════════════════════════════════════════════════════


@dataclass(frozen=True)
class SelectionItem:
    index: int
    document: Document

    def to_dict(self) -> dict[str, Any]:
        return {"index": self.index, "document": self.document.to_dict()}


@dataclass(frozen=True)
class SelectionList:
    """待用户选择的候选列表，编号从 1 开始，与展示顺序一致。

    Attributes:
        items: 编号项
        language: 原查询语言
        query: 原查询文本
        keywords: 原查询的检索词（用于选中后精炼章节）
    """

    items: tuple[SelectionItem, ...]
    language: Language = "en"
    query: str = ""
    keywords: tuple[str, ...] = field(default_factory=tuple)

    @classmethod
    def from_documents(
        cls,
        documents: Iterable[Document],
        language: Language,
        query: str,
        keywords: Iterable[str] = (),
    ) -> "SelectionList":
        items = tuple(
            SelectionItem(index=i, document=doc) for i, doc in enumerate(documents, 1)
        )
        return cls(items=items, language=language, query=query, keywords=tuple(keywords))

    def __len__(self) -> int:
        return len(self.items)

    @property
    def documents(self) -> list[Document]:
        return [item.document for item in self.items]

    def resolve(self, number: int) -> Document | None:
        """按展示编号取文档，越界返回 None。"""
        if 1 <= number <= len(self.items):
            return self.items[number - 1].document
        return None

    def to_dict(self) -> dict[str, Any]:
        return {
            "items": [item.to_dict() for item in self.items],
            "language": self.language,
            "query": self.query,
            "keywords": list(self.keywords),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "SelectionList":
        """从 to_dict 的结果还原；编号按列表顺序重新生成。"""
        documents = [Document.model_validate(item["document"]) for item in data.get("items", [])]
        return cls.from_documents(
            documents,
            language=data.get("language", "en"),
            query=data.get("query", ""),
            keywords=data.get("keywords", []),
        )


def _describe(doc: Document, texts: dict[str, str]) -> str:
    """选择列表中每项的简短说明。"""
    if doc.kind == "video":
        duration = f" ({doc.duration})" if doc.duration else ""
        return texts["video"].format(
            duration=duration, description=doc.description or texts["video_fallback"]
        )
    if doc.kind == "general":
        return texts["general"].format(summary=doc.summary or texts["general_fallback"])
    return doc.summary or doc.description or texts["other_fallback"]


def build_selection_message(selection: SelectionList) -> str:
    """渲染编号选择列表。

    Args:
        selection: 候选列表

    Returns:
        面向用户的列表文本（语言与原查询一致）
    """
    texts = SELECTION_TEXTS[selection.language]
    count = len(selection)
    message = texts["header"].format(count=count)
    for item in selection.items:
        title = item.document.title or texts["untitled"]
        message += f"{item.index}. {title}\n   {_describe(item.document, texts)}\n\n"
    message += texts["footer"].format(count=count)
    return message


def build_invalid_selection_message(selection: SelectionList) -> str:
    """编号越界时的提示，后接同一份列表。"""
    texts = SELECTION_TEXTS[selection.language]
    return texts["invalid"].format(count=len(selection)) + "\n\n" + build_selection_message(selection)


def detect_number_selection(text: str) -> int | None:
    """识别数字选择回复，如 "2"、"选择3"、"我选择 2"、"#2"、"no. 4"、"3号"、"2nd"。"""
    match = _NUMBER_SELECTION_PATTERN.match(text.strip())
    if match:
        return int(match.group(1))
    return None


# ═══════════════════════════════════════════════════════════════
# 章节精炼
# ═══════════════════════════════════════════════════════════════


@dataclass(frozen=True)
class ScoredSection:
    section: Section
    score: int


@dataclass(frozen=True)
class SelectedDocument:
    """选中的文档及其最相关章节。

    Attributes:
        document: 原文档（全部章节保留作兜底）
        matched_sections: 按相关性排序的前若干章节，可能为空
    """

    document: Document
    matched_sections: tuple[Section, ...] = ()


def score_section(section: Section, keywords: Iterable[str]) -> int:
    """章节相关性：标题命中 10，正文命中 5，合并文本命中 2。"""
    heading = section.heading.lower()
    content = section.content.lower()
    combined = f"{heading} {content}"
    score = 0
    for keyword in keywords:
        kw = keyword.lower()
        if not kw:
            continue
        if kw in heading:
            score += SECTION_HEADING_WEIGHT
        if kw in content:
            score += SECTION_CONTENT_WEIGHT
        if kw in combined:
            score += SECTION_TEXT_WEIGHT
    return score


def refine_sections(
    document: Document,
    keywords: Iterable[str],
    limit: int = MAX_MATCHED_SECTIONS,
) -> SelectedDocument:
    """按原查询检索词为章节打分，保留得分最高的 limit 个。

    Args:
        document: 选中的文档
        keywords: 原查询检索词
        limit: 保留章节数

    Returns:
        SelectedDocument；无章节或无命中时 matched_sections 为空
    """
    if not document.sections:
        return SelectedDocument(document=document)

    keywords = list(keywords)
    scored = [ScoredSection(s, score_section(s, keywords)) for s in document.sections]
    relevant = sorted((s for s in scored if s.score > 0), key=lambda s: -s.score)
    matched = tuple(s.section for s in relevant[:limit])

    log_msg(
        "INFO",
        f"章节精炼: {document.title} 共 {len(document.sections)} 节，"
        f"命中 {len(relevant)} 节，保留 {len(matched)} 节",
    )
    return SelectedDocument(document=document, matched_sections=matched)
