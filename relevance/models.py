"""S01 数据模型 — QueryIntent 与 ScoredCandidate"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from knowledge_retriever.schema import Document


@dataclass(frozen=True)
class QueryIntent:
    """查询意图。各标志可同时成立，兼容性优先于安装与功能。

    Attributes:
        is_compatibility: 兼容性 / 配置确认类问题
        is_installation: 安装 / 接线类问题（非兼容性）
        is_troubleshooting: 故障排除类问题
        is_feature: 功能使用类问题（非兼容性、非故障）
        problem_type: bluetooth / audio / display / compatibility / None
    """

    is_compatibility: bool = False
    is_installation: bool = False
    is_troubleshooting: bool = False
    is_feature: bool = False
    problem_type: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "is_compatibility": self.is_compatibility,
            "is_installation": self.is_installation,
            "is_troubleshooting": self.is_troubleshooting,
            "is_feature": self.is_feature,
            "problem_type": self.problem_type,
        }


@dataclass(frozen=True)
class ScoredCandidate:
    """带分数的候选文档。分数为负表示已被硬过滤排除。"""

    document: Document
    score: int

    @property
    def excluded(self) -> bool:
        return self.score < 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.document.id,
            "title": self.document.title,
            "kind": self.document.kind,
            "score": self.score,
        }
