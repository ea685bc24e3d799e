"""问答模块 — 补全服务、多结果选择、上下文构建、响应清洗、引擎入口。"""

from assistant.completion import Completion, CompletionError, CompletionService, Usage
from assistant.engine import AssistantResult, EngineSettings, KnowledgeAssistant, SearchOutcome
from assistant.selection import (
    SelectedDocument,
    SelectionList,
    build_selection_message,
    detect_number_selection,
    refine_sections,
)

__all__ = [
    "AssistantResult",
    "Completion",
    "CompletionError",
    "CompletionService",
    "EngineSettings",
    "KnowledgeAssistant",
    "SearchOutcome",
    "SelectedDocument",
    "SelectionList",
    "Usage",
    "build_selection_message",
    "detect_number_selection",
    "refine_sections",
]
