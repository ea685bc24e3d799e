"""R01 配置 — 文档库检索字段与超时"""

from __future__ import annotations

# ---------------------------------------------------------------------------
# 检索字段
# ---------------------------------------------------------------------------

# 每个检索词在以下任一字段命中即可（析取）
SEARCH_FIELDS: tuple[str, ...] = (
    "title",
    "content",
    "summary",
    "description",
    "category",
    "faqs.title",
    "faqs.description",
    "compatible_models.name",
    "compatible_models.description",
    "incompatible_models.name",
    "incompatible_models.reason",
    "sections.heading",
    "sections.content",
    "videos.title",
    "videos.description",
)

# 优先词（车型、年份）必须在以下字段之一命中
PRIORITY_FIELDS: tuple[str, ...] = (
    "title",
    "content",
    "summary",
    "description",
)

# ---------------------------------------------------------------------------
# 过滤与超时
# ---------------------------------------------------------------------------
PUBLISHED_STATUS: str = "published"
STORE_TIMEOUT: float = 10.0
