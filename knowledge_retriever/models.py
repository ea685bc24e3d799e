"""R01 检索条件模型 — FieldMatch 与 SearchQuery"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class FieldMatch:
    """单个字段的文本模式匹配条件（大小写无关）。

    Attributes:
        field: 点分字段路径，如 "title"、"sections.heading"
        pattern: 已转义的正则模式
    """

    field: str
    pattern: str

    def matches(self, text: str) -> bool:
        """判断文本是否命中该模式。"""
        return re.search(self.pattern, text, re.IGNORECASE) is not None

    def to_dict(self) -> dict[str, str]:
        """转换为字典。"""
        return {"field": self.field, "pattern": self.pattern}


@dataclass
class SearchQuery:
    """文档库文本模式检索条件。

    文档需同时满足：状态过滤、any_of 中至少一条、
    must_match_one_of 非空时其中至少一条。

    Attributes:
        any_of: 检索词 × 检索字段 的析取条件
        must_match_one_of: 优先词（车型、年份）的析取条件
        status: 发布状态过滤，None 表示不过滤
        keywords: 生成条件的检索词（便于日志与调试）
    """

    any_of: list[FieldMatch] = field(default_factory=list)
    must_match_one_of: list[FieldMatch] = field(default_factory=list)
    status: str | None = "published"
    keywords: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        """转换为字典。"""
        return {
            "any_of": [m.to_dict() for m in self.any_of],
            "must_match_one_of": [m.to_dict() for m in self.must_match_one_of],
            "status": self.status,
            "keywords": self.keywords,
        }
