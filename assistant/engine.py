"""A01 问答引擎 — 串联检索、排序、选择、上下文与补全

流程：
  查询 → 语言检测 → 关键词抽取 → 候选检索 → 评分 → 排序截断
       → 多个结果：返回选择列表（不调用补全）
       → 单个结果：参考资料模式
       → 无结果：通用知识模式
       → 限时补全 → 响应清洗

引擎只持有协作对象与不可变设置，不保存会话状态；
待选择列表由调用方保存并在下一轮带回。
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

import config as app_config
from assistant.completion import Completion, CompletionService, Usage
from assistant.config import (
    COMPLETION_TIMEOUT,
    ERROR_COMPLETION_FAILED,
    ERROR_NOT_INITIALIZED,
    ERROR_SELECTION_FAILED,
    ERROR_TIMEOUT,
    SELECTION_FOLLOW_UP,
)
from assistant.context import build_context, build_system_prompt
from assistant.postprocess import ResponseCleaner
from assistant.selection import (
    SelectionList,
    build_invalid_selection_message,
    build_selection_message,
    detect_number_selection,
    refine_sections,
)
from keyword_extraction import LLMKeywordExtractor, Query, extract_keywords
from keyword_extraction.models import KeywordSet
from knowledge_retriever import CandidateRetriever, DocumentStore
from knowledge_retriever.config import STORE_TIMEOUT
from knowledge_retriever.schema import Document
from relevance import QueryIntent, ScoredCandidate, classify_intent, rank_candidates, score_candidates
from relevance.config import MIN_KEEP, RELEVANCE_FLOOR, TIE_WINDOW, TRUNCATION_RATIO
from utils.logger_system import log_msg
from utils.timeout import CallTimeoutError, run_with_timeout


@dataclass(frozen=True)
class EngineSettings:
    """引擎可调参数，默认值取各模块配置。"""

    relevance_floor: int = RELEVANCE_FLOOR
    truncation_ratio: float = TRUNCATION_RATIO
    min_keep: int = MIN_KEEP
    tie_window: int = TIE_WINDOW
    store_timeout: float = STORE_TIMEOUT
    completion_timeout: float = COMPLETION_TIMEOUT
    base_prompt: str = app_config.LLM_CONFIG["system_prompt"]
    model: str | None = None
    temperature: float | None = None
    max_tokens: int | None = None


@dataclass(frozen=True)
class SearchOutcome:
    """一次检索的中间结果，便于调试与日志。"""

    query: Query
    keywords: KeywordSet
    intent: QueryIntent
    candidates: tuple[ScoredCandidate, ...] = ()

    @property
    def documents(self) -> list[Document]:
        return [c.document for c in self.candidates]

    def to_dict(self) -> dict[str, Any]:
        return {
            "query": self.query.text,
            "language": self.query.language,
            "keywords": self.keywords.to_list(),
            "intent": self.intent.to_dict(),
            "candidates": [c.to_dict() for c in self.candidates],
        }


@dataclass
class AssistantResult:
    """返回给调用方的结果。

    Attributes:
        success: 是否成功
        message: 回复文本或选择列表
        sources: 参考文档（需要选择时为展示顺序的候选列表）
        requires_selection: 是否等待用户选择
        selection: 需要选择时的候选列表，调用方下一轮原样带回
        usage: token 用量
        error: 失败原因
    """

    success: bool
    message: str | None = None
    sources: list[Document] = field(default_factory=list)
    requires_selection: bool = False
    selection: SelectionList | None = None
    usage: Usage | None = None
    error: str | None = None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "success": self.success,
            "sources": [doc.to_dict() for doc in self.sources],
            "requires_selection": self.requires_selection,
        }
        if self.message is not None:
            data["message"] = self.message
        if self.selection is not None:
            data["selection"] = self.selection.to_dict()
        if self.usage is not None:
            data["usage"] = self.usage.to_dict()
        if self.error is not None:
            data["error"] = self.error
        return data


class KnowledgeAssistant:
    """知识库问答引擎。

    Args:
        store: 文档库
        completion: 补全服务；为 None 时 send_message / select 返回未初始化错误
        keyword_llm: 可选 LLM 关键词抽取器
        settings: 可调参数
    """

    def __init__(
        self,
        store: DocumentStore,
        completion: CompletionService | None = None,
        keyword_llm: LLMKeywordExtractor | None = None,
        settings: EngineSettings | None = None,
    ) -> None:
        self._settings = settings or EngineSettings()
        self._retriever = CandidateRetriever(store, timeout=self._settings.store_timeout)
        self._completion = completion
        self._keyword_llm = keyword_llm
        self._cleaner = ResponseCleaner()

    @property
    def settings(self) -> EngineSettings:
        return self._settings

    # ---------------------------------------------------------------
    # 检索
    # ---------------------------------------------------------------

    def search(self, text: str) -> SearchOutcome:
        """检索并排序与问题相关的文档。

        Args:
            text: 用户问题

        Returns:
            SearchOutcome，candidates 为最终排序结果
        """
        query = Query.from_text(text)
        keywords = extract_keywords(query, llm=self._keyword_llm)
        intent = classify_intent(query.text)
        log_msg("INFO", f"查询意图 ({query.language}): {intent.to_dict()}")

        documents = self._retriever.retrieve(keywords)
        scored = score_candidates(documents, query, intent, keywords)
        ranked = rank_candidates(
            scored,
            intent,
            floor=self._settings.relevance_floor,
            ratio=self._settings.truncation_ratio,
            min_keep=self._settings.min_keep,
            tie_window=self._settings.tie_window,
        )
        return SearchOutcome(
            query=query, keywords=keywords, intent=intent, candidates=tuple(ranked)
        )

    # ---------------------------------------------------------------
    # 对话
    # ---------------------------------------------------------------

    def send_message(
        self,
        messages: list[dict[str, str]],
        pending: SelectionList | None = None,
    ) -> AssistantResult:
        """处理一轮对话。

        Args:
            messages: 对话历史（role / content），最后一条用户消息为当前问题
            pending: 上一轮返回的待选择列表；当前消息是数字时按选择处理

        Returns:
            AssistantResult
        """
        if self._completion is None:
            return AssistantResult(success=False, error=ERROR_NOT_INITIALIZED)

        latest = next(
            (m["content"] for m in reversed(messages) if m.get("role") == "user"), ""
        )

        if pending is not None and latest:
            number = detect_number_selection(latest)
            if number is not None:
                return self.select(number, pending)

        query = Query.from_text(latest)
        candidates: list[Document] = []
        context = ""
        if latest.strip():
            outcome = self.search(latest)
            candidates = outcome.documents

            if len(candidates) > 1:
                selection = SelectionList.from_documents(
                    candidates,
                    language=query.language,
                    query=latest,
                    keywords=outcome.keywords,
                )
                return AssistantResult(
                    success=True,
                    message=build_selection_message(selection),
                    sources=selection.documents,
                    requires_selection=True,
                    selection=selection,
                    usage=Usage(),
                )
            if candidates:
                selected = refine_sections(candidates[0], outcome.keywords)
                context = build_context([selected], query.language)

        if not context:
            log_msg("INFO", "无相关文档，使用通用知识模式")
        system_prompt = build_system_prompt(
            self._settings.base_prompt, query.language, context
        )
        return self._answer(system_prompt, messages, candidates, ERROR_COMPLETION_FAILED)

    def select(self, number: int, selection: SelectionList) -> AssistantResult:
        """处理用户对选择列表的数字回复。

        编号越界时重新展示同一列表；有效时按原问题精炼章节后作答。

        Args:
            number: 用户回复的编号（从 1 开始）
            selection: 上一轮返回的选择列表

        Returns:
            AssistantResult
        """
        if self._completion is None:
            return AssistantResult(success=False, error=ERROR_NOT_INITIALIZED)

        document = selection.resolve(number)
        if document is None:
            log_msg("WARNING", f"无效选择: {number}（共 {len(selection)} 项）")
            return AssistantResult(
                success=True,
                message=build_invalid_selection_message(selection),
                sources=selection.documents,
                requires_selection=True,
                selection=selection,
                usage=Usage(),
            )

        keywords = list(selection.keywords)
        if not keywords:
            keywords = extract_keywords(
                Query.from_text(selection.query), llm=self._keyword_llm
            ).to_list()

        log_msg("INFO", f"用户选择第 {number} 项: {document.title}")
        selected = refine_sections(document, keywords)
        context = build_context([selected], selection.language)
        system_prompt = build_system_prompt(
            self._settings.base_prompt,
            selection.language,
            context,
            question=selection.query,
        )
        messages = [
            {"role": "user", "content": SELECTION_FOLLOW_UP.format(title=document.title)}
        ]
        return self._answer(system_prompt, messages, [document], ERROR_SELECTION_FAILED)

    # ---------------------------------------------------------------
    # 内部方法
    # ---------------------------------------------------------------

    def _answer(
        self,
        system_prompt: str,
        messages: list[dict[str, str]],
        sources: list[Document],
        error_template: str,
    ) -> AssistantResult:
        """限时调用补全服务并清洗响应；失败不重试。"""
        try:
            completion: Completion = run_with_timeout(
                self._completion.complete,
                self._settings.completion_timeout,
                system_prompt,
                messages,
                model=self._settings.model,
                temperature=self._settings.temperature,
                max_tokens=self._settings.max_tokens,
                label="completion",
            )
        except CallTimeoutError as exc:
            log_msg("WARNING", f"补全服务超时: {exc}")
            return AssistantResult(success=False, error=ERROR_TIMEOUT)
        except Exception as exc:
            log_msg("WARNING", f"补全服务调用失败: {exc}")
            return AssistantResult(
                success=False, error=error_template.format(reason=exc)
            )

        return AssistantResult(
            success=True,
            message=self._cleaner.clean(completion.text),
            sources=sources,
            usage=completion.usage,
        )
