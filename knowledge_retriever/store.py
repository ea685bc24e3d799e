"""R01 文档库 — 文本模式检索协议与内存实现

DocumentStore 是外部存储的最小接口：接受 SearchQuery，返回完整文档记录，
不做任何排序。InMemoryDocumentStore 从 JSONL 语料加载，供命令行与测试使用。
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Iterable, Protocol

from knowledge_retriever.models import FieldMatch, SearchQuery
from knowledge_retriever.schema import Document
from utils.logger_system import log_msg


class DocumentStore(Protocol):
    """外部文档库协议。"""

    def search(self, query: SearchQuery) -> list[Document]:
        """返回满足检索条件的全部文档（无排序要求）。"""
        ...


class InMemoryDocumentStore:
    """内存文档库，按 SearchQuery 逐条过滤。

    Args:
        documents: 文档列表
    """

    def __init__(self, documents: Iterable[Document] | None = None) -> None:
        self._documents: list[Document] = list(documents or [])

    @classmethod
    def from_jsonl(cls, path: Path | str) -> "InMemoryDocumentStore":
        """从 JSONL 语料加载，每行一个文档。

        Args:
            path: JSONL 文件路径

        Returns:
            InMemoryDocumentStore 实例
        """
        path = Path(path)
        documents: list[Document] = []
        with path.open("r", encoding="utf-8") as f:
            for line in f:
                line = line.strip()
                if not line:
                    continue
                documents.append(Document.model_validate(json.loads(line)))
        log_msg("INFO", f"语料加载完成: {path} ({len(documents)} 篇文档)")
        return cls(documents)

    def __len__(self) -> int:
        return len(self._documents)

    def search(self, query: SearchQuery) -> list[Document]:
        """按状态、优先词、检索词三重条件过滤。

        Args:
            query: 检索条件

        Returns:
            命中的文档（保持存储顺序）
        """
        results: list[Document] = []
        for doc in self._documents:
            if query.status is not None and doc.status != query.status:
                continue
            if query.must_match_one_of and not _any_match(doc, query.must_match_one_of):
                continue
            if not _any_match(doc, query.any_of):
                continue
            results.append(doc)
        return results


def _any_match(doc: Document, conditions: list[FieldMatch]) -> bool:
    """文档是否命中任一条件。"""
    for condition in conditions:
        for text in doc.field_values(condition.field):
            if condition.matches(text):
                return True
    return False
