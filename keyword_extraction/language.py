"""Q01 语言检测 — 判断查询是否包含中文字符"""

from __future__ import annotations

import re
from typing import Literal

Language = Literal["zh", "en"]

# 汉字、中文标点、全角字符
_CHINESE_PATTERN = re.compile(r"[\u4e00-\u9fa5\u3000-\u303f\uff00-\uffef]")


def detect_language(text: str) -> Language:
    """含任一中文字符即判为 "zh"，否则 "en"。"""
    return "zh" if _CHINESE_PATTERN.search(text or "") else "en"
