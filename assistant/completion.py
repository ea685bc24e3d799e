"""A01 补全服务 — OpenAI 兼容接口的薄封装

complete(system_prompt, messages, ...) → Completion(text, usage)。
客户端不自动重试；整体等待上限由调用方用 run_with_timeout 控制。
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from openai import OpenAI

import config as app_config
from assistant.config import CLIENT_MAX_RETRIES, COMPLETION_TIMEOUT
from utils.logger_system import log_msg


class CompletionError(RuntimeError):
    """补全服务调用失败（网络、鉴权、限流等 SDK 异常的统一包装）。"""


def create_client(api_key: str, base_url: str, timeout: float = COMPLETION_TIMEOUT) -> OpenAI:
    """创建 OpenAI 兼容客户端。

    关闭 SDK 自动重试，单次请求超时与补全超时一致，
    避免超时后被放弃的工作线程继续重发请求。
    """
    return OpenAI(
        api_key=api_key,
        base_url=base_url,
        max_retries=CLIENT_MAX_RETRIES,
        timeout=timeout,
    )


@dataclass(frozen=True)
class Usage:
    prompt_tokens: int = 0
    completion_tokens: int = 0
    total_tokens: int = 0

    def to_dict(self) -> dict[str, int]:
        return {
            "prompt_tokens": self.prompt_tokens,
            "completion_tokens": self.completion_tokens,
            "total_tokens": self.total_tokens,
        }


@dataclass(frozen=True)
class Completion:
    text: str
    usage: Usage = field(default_factory=Usage)


class CompletionService:
    """OpenAI 兼容补全服务（OpenAI / DeepSeek）。

    Args:
        client: OpenAI 兼容客户端（不传则从 config.LLM_CONFIG 懒加载）
        model: 模型名
        temperature: 默认温度
        max_tokens: 默认最大 token 数
    """

    def __init__(
        self,
        client: OpenAI | None = None,
        model: str | None = None,
        temperature: float | None = None,
        max_tokens: int | None = None,
    ) -> None:
        self._client = client
        self.model = model or app_config.LLM_CONFIG["model"]
        self.temperature = (
            temperature if temperature is not None else app_config.LLM_CONFIG["temperature"]
        )
        self.max_tokens = (
            max_tokens if max_tokens is not None else app_config.LLM_CONFIG["max_tokens"]
        )

    @classmethod
    def from_config(cls) -> "CompletionService | None":
        """按 config.LLM_CONFIG 创建；未配置 API Key 时返回 None。"""
        if not app_config.LLM_CONFIG.get("api_key"):
            log_msg("WARNING", "未配置 KB_LLM_API_KEY，补全服务不可用")
            return None
        return cls()

    def _get_client(self) -> OpenAI:
        """懒加载 LLM 客户端。"""
        if self._client is None:
            self._client = create_client(
                app_config.LLM_CONFIG["api_key"], app_config.LLM_CONFIG["base_url"]
            )
        return self._client

    def complete(
        self,
        system_prompt: str,
        messages: list[dict[str, str]],
        model: str | None = None,
        temperature: float | None = None,
        max_tokens: int | None = None,
    ) -> Completion:
        """调用补全接口。

        Args:
            system_prompt: 系统指令
            messages: 对话历史（role / content）
            model: 覆盖默认模型
            temperature: 覆盖默认温度
            max_tokens: 覆盖默认最大 token 数

        Returns:
            Completion

        Raises:
            CompletionError: SDK 调用失败
        """
        client = self._get_client()
        payload: list[dict[str, Any]] = [{"role": "system", "content": system_prompt}]
        payload.extend(messages)

        try:
            response = client.chat.completions.create(
                model=model or self.model,
                messages=payload,
                temperature=self.temperature if temperature is None else temperature,
                max_tokens=self.max_tokens if max_tokens is None else max_tokens,
            )
        except Exception as exc:
            raise CompletionError(str(exc)) from exc

        text = response.choices[0].message.content or ""
        if not text.strip():
            log_msg("WARNING", "补全服务返回空内容")

        usage = Usage()
        if response.usage is not None:
            usage = Usage(
                prompt_tokens=response.usage.prompt_tokens or 0,
                completion_tokens=response.usage.completion_tokens or 0,
                total_tokens=response.usage.total_tokens or 0,
            )
        return Completion(text=text, usage=usage)
