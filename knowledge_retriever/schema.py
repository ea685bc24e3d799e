"""R01 文档模型 — 知识库文档及其子结构

文档由外部存储持有，检索引擎只读取快照，因此模型均为 frozen。
兼容原始存储的 camelCase 字段名（documentType、compatibleModels、imageUrl、_id 等）。
"""

from __future__ import annotations

from typing import Any, Literal

from pydantic import AliasChoices, BaseModel, ConfigDict, Field


# ---------------------------------------------------------------------------
# 文档类型常量
# ---------------------------------------------------------------------------
DocumentKind = Literal[
    "general",  # 图文教程（sections）
    "video",  # 视频教程（videos）
    "structured",  # 结构化文章（兼容车型、FAQ）
]

_FROZEN = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")


class Section(BaseModel):
    """图文教程章节。

    Args:
        id: 章节标识
        heading: 章节标题
        content: 章节正文
        image_url: 章节配图
    """

    model_config = _FROZEN

    id: str = Field(default="", validation_alias=AliasChoices("id", "_id"))
    heading: str = ""
    content: str = ""
    image_url: str | None = Field(
        default=None, validation_alias=AliasChoices("image_url", "imageUrl")
    )


class Video(BaseModel):
    """视频教程中的单个视频链接。"""

    model_config = _FROZEN

    title: str = ""
    description: str = ""
    url: str | None = None
    platform: str | None = None
    duration: str | None = None


class FAQ(BaseModel):
    """结构化文章中的常见问题。"""

    model_config = _FROZEN

    id: str = Field(default="", validation_alias=AliasChoices("id", "_id"))
    title: str = ""
    description: str = ""


class CompatibleModel(BaseModel):
    """兼容车型。"""

    model_config = _FROZEN

    id: str = Field(default="", validation_alias=AliasChoices("id", "_id"))
    name: str = ""
    description: str = ""


class IncompatibleModel(BaseModel):
    """不兼容车型及原因。"""

    model_config = _FROZEN

    id: str = Field(default="", validation_alias=AliasChoices("id", "_id"))
    name: str = ""
    reason: str = Field(
        default="", validation_alias=AliasChoices("reason", "description")
    )


class Document(BaseModel):
    """知识库文档。

    Args:
        id: 文档唯一标识
        kind: 文档类型 general / video / structured
        title: 标题
        category: 分类
        summary: 摘要（图文/结构化）
        description: 描述（视频）
        content: 正文
        status: 发布状态，检索只返回 "published"
        sections: 图文章节
        videos: 视频链接
        faqs: 常见问题
        compatible_models: 兼容车型
        incompatible_models: 不兼容车型
        video_url: 主视频链接
        platform: 视频平台（youtube / bilibili / custom）
        duration: 视频时长
        images: 文档图片
    """

    model_config = _FROZEN

    id: str = Field(default="", validation_alias=AliasChoices("id", "_id"))
    kind: DocumentKind = Field(
        default="general",
        validation_alias=AliasChoices("kind", "documentType", "type"),
    )
    title: str = ""
    category: str = ""
    summary: str | None = None
    description: str | None = None
    content: str | None = None
    status: str = "published"
    sections: list[Section] = Field(default_factory=list)
    videos: list[Video] = Field(default_factory=list)
    faqs: list[FAQ] = Field(default_factory=list)
    compatible_models: list[CompatibleModel] = Field(
        default_factory=list,
        validation_alias=AliasChoices("compatible_models", "compatibleModels"),
    )
    incompatible_models: list[IncompatibleModel] = Field(
        default_factory=list,
        validation_alias=AliasChoices("incompatible_models", "incompatibleModels"),
    )
    video_url: str | None = Field(
        default=None, validation_alias=AliasChoices("video_url", "videoUrl")
    )
    platform: str | None = None
    duration: str | None = None
    images: list[str] = Field(default_factory=list)

    # -------------------------------------------------------------------
    # 派生视图
    # -------------------------------------------------------------------

    @property
    def summary_text(self) -> str:
        """摘要。视频取描述（缺失时取正文），其余取摘要（缺失时取描述）。"""
        if self.kind == "video":
            return self.description or self.content or ""
        return self.summary or self.description or ""

    def searchable_content(self) -> str:
        """评分使用的正文：正文 + 章节标题/内容 + 视频标题/描述。"""
        parts: list[str] = [self.content or ""]
        parts.extend(f"{s.heading}: {s.content}" for s in self.sections)
        parts.extend(f"{v.title}: {v.description}" for v in self.videos)
        return " ".join(p for p in parts if p)

    def field_values(self, path: str) -> list[str]:
        """按点分路径取字段文本，如 "sections.heading"。

        Args:
            path: 字段路径

        Returns:
            该路径下的全部非空文本
        """
        head, _, rest = path.partition(".")
        value: Any = getattr(self, head, None)
        if value is None:
            return []
        if not rest:
            return [value] if isinstance(value, str) and value else []
        values: list[str] = []
        for item in value:
            text = getattr(item, rest, None)
            if isinstance(text, str) and text:
                values.append(text)
        return values

    def to_dict(self) -> dict[str, Any]:
        """转换为字典（字段名即 snake_case 属性名，可被 model_validate 读回）。"""
        return self.model_dump()
