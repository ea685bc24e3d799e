"""A01 配置 — 上下文标签、选择列表文案、清洗规则、超时与错误信息"""

from __future__ import annotations

# ---------------------------------------------------------------------------
# 超时
# ---------------------------------------------------------------------------
COMPLETION_TIMEOUT: float = 60.0
# 失败直接上报，不由 SDK 自动重发
CLIENT_MAX_RETRIES: int = 0

# ---------------------------------------------------------------------------
# 章节精炼
# ---------------------------------------------------------------------------
SECTION_HEADING_WEIGHT: int = 10
SECTION_CONTENT_WEIGHT: int = 5
SECTION_TEXT_WEIGHT: int = 2
MAX_MATCHED_SECTIONS: int = 3

# ---------------------------------------------------------------------------
# 错误信息（面向调用方）
# ---------------------------------------------------------------------------
ERROR_NOT_INITIALIZED = "AI服务未正确初始化，请检查配置。"
ERROR_TIMEOUT = "AI响应超时，请稍后重试。如果问题持续，请联系技术支持。"
ERROR_COMPLETION_FAILED = "AI调用失败: {reason}"
ERROR_SELECTION_FAILED = "处理选择失败: {reason}"

# ---------------------------------------------------------------------------
# 选择列表文案
# ---------------------------------------------------------------------------
SELECTION_TEXTS: dict[str, dict[str, str]] = {
    "zh": {
        "header": "找到了 {count} 条相关资料，请选择您想了解的内容：\n\n",
        "video": "视频教程{duration} - {description}",
        "video_fallback": "关于此主题的视频内容",
        "general": "文档资料 - {summary}",
        "general_fallback": "关于此主题的详细信息",
        "other_fallback": "关于此主题的信息",
        "untitled": "未命名",
        "footer": "请回复数字 (1-{count}) 选择您想要详细了解的资料。",
        "invalid": "无效的选择，请选择 1 到 {count} 之间的数字。",
    },
    "en": {
        "header": (
            "I found {count} relevant resources. "
            "Please select which one you'd like me to explain:\n\n"
        ),
        "video": "Video Tutorial{duration} - {description}",
        "video_fallback": "Video content about this topic",
        "general": "Document - {summary}",
        "general_fallback": "Detailed information about this topic",
        "other_fallback": "Information about this topic",
        "untitled": "Untitled",
        "footer": (
            "Please reply with the number (1-{count}) of the resource "
            "you'd like me to explain in detail."
        ),
        "invalid": "Invalid selection. Please choose a number between 1 and {count}.",
    },
}

SELECTION_FOLLOW_UP = 'Please provide detailed information about the selected resource: "{title}"'

# ---------------------------------------------------------------------------
# 上下文标签
# ---------------------------------------------------------------------------
CONTEXT_LABELS: dict[str, dict[str, str]] = {
    "zh": {
        "document": "知识库文档",
        "type": "类型",
        "title": "标题",
        "summary": "摘要",
        "category": "分类",
        "matched_sections": "匹配的相关章节",
        "all_sections": "文档章节",
        "total": "共",
        "sections_unit": "个",
        "content": "内容",
        "description": "描述",
        "platform": "视频平台",
        "duration": "时长",
        "detailed_description": "详细说明",
        "general": "图文教程",
        "video": "视频教程",
        "structured": "结构化文章",
        "section": "章节",
        "contains_image": "包含配图",
        "document_contains": "文档包含",
        "images": "张图片",
        "compatible_models": "兼容车型",
        "incompatible_models": "不兼容车型",
        "faqs": "常见问题",
    },
    "en": {
        "document": "Knowledge Base Document",
        "type": "Type",
        "title": "Title",
        "summary": "Summary",
        "category": "Category",
        "matched_sections": "Matched Relevant Sections",
        "all_sections": "Document Sections",
        "total": "Total",
        "sections_unit": "sections",
        "content": "Content",
        "description": "Description",
        "platform": "Video Platform",
        "duration": "Duration",
        "detailed_description": "Detailed Description",
        "general": "Image/Text Tutorial",
        "video": "Video Tutorial",
        "structured": "Structured Article",
        "section": "Section",
        "contains_image": "Contains Image",
        "document_contains": "Document contains",
        "images": "images",
        "compatible_models": "Compatible Models",
        "incompatible_models": "Incompatible Models",
        "faqs": "FAQs",
    },
}

# ---------------------------------------------------------------------------
# 响应清洗规则 (pattern, replacement)，按顺序执行
# ---------------------------------------------------------------------------
RESPONSE_CLEANING_PATTERNS: list[tuple[str, str]] = [
    (r"\*\*(.*?)\*\*", r"\1"),  # 粗体 **x**
    (r"__(.*?)__", r"\1"),  # 粗体 __x__
    (r"^#{1,6}\s+", ""),  # 标题标记
    (r"\*([^*\n]+)\*", r"\1"),  # 斜体 *x*
    (r"(?<![A-Za-z0-9])_([^_\n]+)_(?![A-Za-z0-9])", r"\1"),  # 斜体 _x_，不动标识符
]
