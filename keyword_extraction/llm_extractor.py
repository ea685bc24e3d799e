"""Q01 LLM 关键词抽取器 — 可选增强路径

通过补全服务抽取并翻译关键词（保留年份、车型、技术短语）。
限时 20 秒，超时或任何异常都返回空列表，由规则抽取兜底。
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

from keyword_extraction.config import (
    LLM_KEYWORD_MAX_TOKENS,
    LLM_KEYWORD_TEMPERATURE,
    LLM_KEYWORD_TIMEOUT,
)
from keyword_extraction.language import Language
from utils.logger_system import log_msg
from utils.timeout import run_with_timeout

if TYPE_CHECKING:
    from assistant.completion import CompletionService


# ---------------------------------------------------------------------------
# Prompt 模板
# ---------------------------------------------------------------------------

ZH_KEYWORD_SYSTEM_PROMPT = """You are a keyword extraction expert for automotive technical queries.
Extract and translate key technical terms to English.

IMPORTANT RULES:
1. PRESERVE all years (2008, 2013, etc.) - output as-is
2. PRESERVE all car models (Highlander, Camry, etc.) - output as-is
3. PRESERVE specific technical terms (steering wheel control, SWC, backup camera, etc.)
4. Translate Chinese technical terms to standard English equivalents
5. Keep problem descriptions (not working, no sound, blank screen, etc.)
6. Output format: comma-separated keywords only, keep multi-word phrases intact

Examples:
Input: "汉兰达2008-2013安装视频"
Output: Highlander, 2008, 2013, installation, video

Input: "方向盘控制不工作"
Output: steering wheel control, SWC, not working, issue

Input: "倒车影像黑屏"
Output: backup camera, reversing camera, blank screen, issue"""

EN_KEYWORD_SYSTEM_PROMPT = """Extract important keywords and technical phrases from automotive queries.
Focus on:
- Car brands and models (Toyota, Highlander, Camry, Ford, F150, etc.)
- Years and year ranges
- Technical terms (steering wheel control, backup camera, settings, functions, etc.)
- Problem descriptions (not working, blank screen, no sound, etc.)
- Operations (install, installation, setup, configure, connect, retain, video, tutorial, etc.)
- Features (compatibility, original functions, factory settings, etc.)

Output: comma-separated keywords only, keep important multi-word phrases intact.

Examples:
"Toyota Highlander installation video" -> Toyota, Highlander, installation video, tutorial, install
"steering wheel control not working" -> steering wheel control, SWC, not working, issue
"how to configure radio settings" -> configure, radio settings, setup
"2014-2019 Camry installation" -> 2014, 2015, 2016, 2017, 2018, 2019, Camry, installation, install"""

ZH_KEYWORD_USER_TEMPLATE = 'Extract keywords from: "{query}"'


# ---------------------------------------------------------------------------
# LLM 关键词抽取器
# ---------------------------------------------------------------------------


class LLMKeywordExtractor:
    """通过补全服务抽取检索关键词。

    Args:
        completion: 补全服务
        timeout: 单次调用超时秒数
    """

    def __init__(
        self,
        completion: CompletionService,
        timeout: float = LLM_KEYWORD_TIMEOUT,
    ) -> None:
        self._completion = completion
        self._timeout = timeout

    def extract(self, query: str, language: Language) -> list[str]:
        """抽取关键词；失败或超时返回空列表，不抛异常。

        Args:
            query: 原始查询
            language: 查询语言

        Returns:
            LLM 给出的关键词（短语保持完整）
        """
        if language == "zh":
            system_prompt = ZH_KEYWORD_SYSTEM_PROMPT
            user_msg = ZH_KEYWORD_USER_TEMPLATE.format(query=query)
        else:
            system_prompt = EN_KEYWORD_SYSTEM_PROMPT
            user_msg = query

        try:
            result = run_with_timeout(
                self._completion.complete,
                self._timeout,
                system_prompt,
                [{"role": "user", "content": user_msg}],
                temperature=LLM_KEYWORD_TEMPERATURE,
                max_tokens=LLM_KEYWORD_MAX_TOKENS[language],
                label="keyword-llm",
            )
        except Exception as exc:
            log_msg("WARNING", f"LLM 关键词抽取失败/超时，使用规则抽取: {exc}")
            return []

        keywords = self._parse_response(result.text)
        log_msg("INFO", f"LLM 关键词: [{', '.join(keywords)}]")
        return keywords

    @staticmethod
    def _parse_response(text: str) -> list[str]:
        """解析 LLM 输出。

        优先按逗号/换行切分以保留短语；模型未按格式输出逗号时退回空白切分。

        Args:
            text: LLM 原始响应

        Returns:
            关键词列表
        """
        text = text.strip().strip('"').strip()
        if text.lower().startswith("output:"):
            text = text[len("output:"):]
        if re.search(r"[,，、\n]", text):
            parts = re.split(r"[,，、\n]+", text)
        else:
            parts = text.split()
        return [p.strip().strip('"').strip() for p in parts if p.strip().strip('"').strip()]
