"""A01 响应后处理 — 去除 Markdown 粗体/斜体/标题标记，不改动文字内容"""

from __future__ import annotations

import re
from typing import List, Tuple

from assistant.config import RESPONSE_CLEANING_PATTERNS
from utils.logger_system import log_msg

_TRAILING_SPACES = re.compile(r"[ \t]+$", re.MULTILINE)
_EXCESS_BLANK_LINES = re.compile(r"\n(?:[ \t]*\n){2,}")


class ResponseCleaner:
    """补全结果的纯文本清洗器。

    按顺序执行 (pattern, replacement) 规则，规则只去掉标记符号；
    随后去除行尾空白，并把连续空行压缩为一个。

    Args:
        patterns: 清洗规则，默认 RESPONSE_CLEANING_PATTERNS
    """

    def __init__(self, patterns: List[Tuple[str, str]] | None = None):
        rules = patterns if patterns is not None else RESPONSE_CLEANING_PATTERNS
        self._rules = [(re.compile(p, re.MULTILINE), r) for p, r in rules]

    def clean(self, content: str) -> str:
        if not content:
            return ""
        for pattern, replacement in self._rules:
            content = pattern.sub(replacement, content)

        content = _TRAILING_SPACES.sub("", content)
        content = _EXCESS_BLANK_LINES.sub("\n\n", content)
        log_msg("DEBUG", f"响应清洗完成: {len(content)} 字符")
        return content.strip()
