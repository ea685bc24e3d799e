"""A01 上下文构建 — 选中文档渲染与系统指令组装

模板位于 prompts/assistant/：
- context.j2：按语言标签渲染选中文档（优先匹配章节 > 全部章节 > 正文）
- system.j2：基础提示 + 语言指示 + 参考资料模式 / 通用知识模式
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Iterable

from jinja2 import Environment, FileSystemLoader, StrictUndefined

from assistant.config import CONTEXT_LABELS
from assistant.selection import SelectedDocument
from keyword_extraction.language import Language
from knowledge_retriever.schema import Document
from utils.logger_system import log_msg

_PROMPTS_DIR = Path(__file__).parent.parent / "prompts"
_TEMPLATE_ENV = Environment(
    loader=FileSystemLoader(str(_PROMPTS_DIR)),
    undefined=StrictUndefined,
    keep_trailing_newline=True,
    trim_blocks=True,
    lstrip_blocks=True,
)


def _document_view(selected: SelectedDocument) -> dict[str, Any]:
    """整理模板变量。章节优先取匹配章节，其次全部章节。"""
    doc = selected.document
    matched = bool(selected.matched_sections)
    sections = selected.matched_sections if matched else tuple(doc.sections)
    return {
        "kind": doc.kind,
        "title": doc.title,
        "summary": doc.summary_text,
        "category": doc.category,
        "content": doc.content or "",
        "platform": doc.platform or "",
        "duration": doc.duration or "",
        "sections_matched": matched,
        "sections": [s.model_dump() for s in sections],
        "compatible_models": [m.model_dump() for m in doc.compatible_models],
        "incompatible_models": [m.model_dump() for m in doc.incompatible_models],
        "faqs": [f.model_dump() for f in doc.faqs],
        "image_count": len(doc.images) if doc.kind == "general" else 0,
    }


def build_context(
    selected_documents: Iterable[SelectedDocument | Document],
    language: Language,
) -> str:
    """将选中文档渲染为参考资料文本。

    Args:
        selected_documents: 选中的文档（未精炼的 Document 视为无匹配章节）
        language: 用户语言，决定标签文字

    Returns:
        上下文字符串
    """
    views = [
        _document_view(
            item if isinstance(item, SelectedDocument) else SelectedDocument(document=item)
        )
        for item in selected_documents
    ]
    template = _TEMPLATE_ENV.get_template("assistant/context.j2")
    context = template.render(documents=views, labels=CONTEXT_LABELS[language])
    log_msg("INFO", f"上下文构建完成: {len(views)} 篇文档，{len(context)} 字符")
    return context


def build_system_prompt(
    base_prompt: str,
    language: Language,
    context: str = "",
    question: str | None = None,
) -> str:
    """组装系统指令。

    Args:
        base_prompt: 基础系统提示
        language: 用户语言（zh 双语回答，en 仅英文）
        context: 参考资料；为空时进入通用知识模式
        question: 选择后的原始问题，给出时要求只回答该问题

    Returns:
        系统指令字符串
    """
    template = _TEMPLATE_ENV.get_template("assistant/system.j2")
    return template.render(
        base_prompt=base_prompt,
        language=language,
        context=context.strip(),
        question=question or "",
    )
