"""S01 查询意图识别 — 纯模式匹配，不依赖语料"""

from __future__ import annotations

import re
from typing import Iterable

from relevance.config import (
    COMPATIBILITY_PATTERNS,
    COMPATIBILITY_PHRASES,
    COMPATIBILITY_ZH,
    FEATURE_PATTERNS,
    FEATURE_ZH,
    INSTALLATION_PATTERNS,
    INSTALLATION_ZH,
    PROBLEM_TYPES,
    TROUBLESHOOTING_PATTERNS,
    TROUBLESHOOTING_ZH,
)
from relevance.models import QueryIntent


def _word_pattern(alternatives: Iterable[str]) -> re.Pattern[str]:
    """英文词表按单词边界编译；不用 \\b，因为汉字在 Python 中也算单词字符。"""
    joined = "|".join(alternatives)
    return re.compile(rf"(?<![a-z0-9])(?:{joined})(?![a-z0-9])")


_COMPATIBILITY_RE = _word_pattern(COMPATIBILITY_PATTERNS)
_INSTALLATION_RE = _word_pattern(INSTALLATION_PATTERNS)
_TROUBLESHOOTING_RE = _word_pattern(TROUBLESHOOTING_PATTERNS)
_FEATURE_RE = _word_pattern(FEATURE_PATTERNS)


def _matches(text: str, pattern: re.Pattern[str], zh_terms: Iterable[str]) -> bool:
    return pattern.search(text) is not None or any(t in text for t in zh_terms)


def classify_intent(text: str) -> QueryIntent:
    """识别查询意图。

    Args:
        text: 原始查询

    Returns:
        QueryIntent
    """
    lowered = text.lower()

    is_compatibility = _matches(lowered, _COMPATIBILITY_RE, COMPATIBILITY_ZH) or any(
        phrase in lowered for phrase in COMPATIBILITY_PHRASES
    )
    is_installation = (
        _matches(lowered, _INSTALLATION_RE, INSTALLATION_ZH) and not is_compatibility
    )
    is_troubleshooting = _matches(lowered, _TROUBLESHOOTING_RE, TROUBLESHOOTING_ZH)
    is_feature = (
        _matches(lowered, _FEATURE_RE, FEATURE_ZH)
        and not is_compatibility
        and not is_troubleshooting
    )

    problem_type: str | None = None
    for name, terms in PROBLEM_TYPES:
        if any(term in lowered for term in terms):
            problem_type = name
            break
    if problem_type is None and is_compatibility:
        problem_type = "compatibility"

    return QueryIntent(
        is_compatibility=is_compatibility,
        is_installation=is_installation,
        is_troubleshooting=is_troubleshooting,
        is_feature=is_feature,
        problem_type=problem_type,
    )
