"""关键词抽取模块 — 语言检测、规则/LLM 抽取、KeywordSet。"""

from keyword_extraction.language import detect_language
from keyword_extraction.llm_extractor import LLMKeywordExtractor
from keyword_extraction.models import KeywordSet, Query
from keyword_extraction.pipeline import extract_keywords
from keyword_extraction.rule_extractor import split_vehicle_terms

__all__ = [
    "KeywordSet",
    "LLMKeywordExtractor",
    "Query",
    "detect_language",
    "extract_keywords",
    "split_vehicle_terms",
]
