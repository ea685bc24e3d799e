"""Q01 数据模型 — Query 与 KeywordSet"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator

from keyword_extraction.language import Language, detect_language


@dataclass(frozen=True)
class Query:
    """一次请求的用户问题，创建后不可变。

    Attributes:
        text: 原始问题文本
        language: 检测到的语言 ("zh" | "en")
    """

    text: str
    language: Language

    @classmethod
    def from_text(cls, text: str) -> "Query":
        """由原始文本构建，自动检测语言。"""
        return cls(text=text, language=detect_language(text))

    @property
    def is_chinese(self) -> bool:
        return self.language == "zh"


@dataclass(frozen=True)
class KeywordSet:
    """有序、去重的检索词集合。

    顺序即优先级：保留信息 > LLM 短语 > 规则翻译 > 分词结果，
    原始查询文本始终为最后一个成员，因此集合永不为空。

    Attributes:
        terms: 检索词元组
    """

    terms: tuple[str, ...]

    def __iter__(self) -> Iterator[str]:
        return iter(self.terms)

    def __len__(self) -> int:
        return len(self.terms)

    def __contains__(self, item: object) -> bool:
        return item in self.terms

    @property
    def query_text(self) -> str:
        """原始查询文本（始终是最后一个成员）。"""
        return self.terms[-1] if self.terms else ""

    def lowered(self) -> list[str]:
        """小写形式，供大小写无关的匹配使用。"""
        return [t.lower() for t in self.terms]

    def to_list(self) -> list[str]:
        return list(self.terms)
