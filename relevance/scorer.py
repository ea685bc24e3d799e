"""S01 相关性评分 — 十一道有序评分规则，硬过滤短路

每道规则是纯函数 (Document, ScoringContext) → ScoreDelta，按顺序累加；
任一规则给出 exclusion 即立即返回该哨兵值，后续规则不再执行。

规则顺序：
1. 兼容性加权        2. 负样本过滤        3. 完整短语
4. 年份硬过滤        5. 车型硬过滤        6. 技术短语
7. 多关键词密度      8. 单关键词          9. 类别与意图对齐
10. 内容深度         11. 兼容车型直接匹配
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Iterable

from keyword_extraction.models import KeywordSet, Query
from keyword_extraction.rule_extractor import YEAR_PATTERN, dedupe_terms, split_vehicle_terms
from knowledge_retriever.schema import Document
from relevance import config as cfg
from relevance.models import QueryIntent
from utils.logger_system import log_msg


@dataclass(frozen=True)
class ScoreDelta:
    """单条规则的评分结果。

    Attributes:
        points: 加减分
        exclusion: 非 None 时表示硬排除，取值即最终分数
        reason: 日志说明
    """

    points: int = 0
    exclusion: int | None = None
    reason: str = ""


_NO_CHANGE = ScoreDelta()


@dataclass(frozen=True)
class ScoringContext:
    """一次查询内所有文档共用的评分输入（预先小写化）。

    Attributes:
        query_lower: 小写查询
        match_text: 技术短语匹配文本（英文为查询本身，中文为检索词拼接）
        keywords: 有序检索词（小写）
        intent: 查询意图
        years: 检索词中的年份
        models: 具体车型（不含品牌）
        brands: 品牌
    """

    query_lower: str
    match_text: str
    keywords: tuple[str, ...]
    intent: QueryIntent
    years: tuple[str, ...]
    models: tuple[str, ...]
    brands: tuple[str, ...]

    @classmethod
    def build(
        cls, query: Query, intent: QueryIntent, keywords: KeywordSet | Iterable[str]
    ) -> "ScoringContext":
        terms = list(keywords)
        match_text = " ".join(terms) if query.is_chinese else query.text
        models, brands = split_vehicle_terms(terms, query.text)
        return cls(
            query_lower=query.text.lower(),
            match_text=match_text.lower(),
            keywords=tuple(t.lower() for t in terms),
            intent=intent,
            years=tuple(dedupe_terms(YEAR_PATTERN.findall(" ".join(terms)))),
            models=tuple(m.lower() for m in models),
            brands=tuple(b.lower() for b in brands),
        )


@dataclass(frozen=True)
class _DocView:
    """文档的小写字段视图，每篇文档只构造一次。"""

    title: str
    summary: str
    category: str
    content: str
    sections: str
    videos: str
    faqs: str
    compatible: str

    @classmethod
    def of(cls, doc: Document) -> "_DocView":
        return cls(
            title=doc.title.lower(),
            summary=doc.summary_text.lower(),
            category=doc.category.lower(),
            content=doc.searchable_content().lower(),
            sections=" ".join(f"{s.heading} {s.content}" for s in doc.sections).lower(),
            videos=" ".join(f"{v.title} {v.description}" for v in doc.videos).lower(),
            faqs=" ".join(f"{f.title} {f.description}" for f in doc.faqs).lower(),
            compatible=" ".join(
                f"{m.name} {m.description}" for m in doc.compatible_models
            ).lower(),
        )


Rule = Callable[[Document, _DocView, ScoringContext], ScoreDelta]


# ---------------------------------------------------------------------------
# 评分规则
# ---------------------------------------------------------------------------


def compatibility_boost(doc: Document, view: _DocView, ctx: ScoringContext) -> ScoreDelta:
    """兼容性查询：结构化文章、兼容车型列表、兼容性标题加分，安装视频减分。"""
    if not ctx.intent.is_compatibility:
        return _NO_CHANGE
    points = 0
    if doc.kind == "structured":
        points += cfg.COMPAT_STRUCTURED_BONUS
    if doc.compatible_models:
        points += cfg.COMPAT_MODELS_LIST_BONUS
    if "compatib" in view.title or "compatib" in view.summary:
        points += cfg.COMPAT_TITLE_BONUS
    if (
        any(w in view.title for w in ("confirm", "configuration", "check"))
        or "factory radio" in view.content
    ):
        points += cfg.COMPAT_CONFIRM_BONUS
    if "installation video" in view.title or "install" in view.title:
        points += cfg.COMPAT_INSTALL_PENALTY
    return ScoreDelta(points, reason="兼容性加权")


def negative_filter(doc: Document, view: _DocView, ctx: ScoringContext) -> ScoreDelta:
    """故障查询遇到纯安装文档直接排除；安装查询遇到故障文档小幅减分。"""
    intent = ctx.intent
    if intent.is_troubleshooting and any(
        w in view.title for w in ("installation", "install", "安装")
    ):
        has_problem_keyword = any(
            kw in view.title and kw not in cfg.PROBLEM_KEYWORD_EXEMPT
            for kw in ctx.keywords
        )
        if not has_problem_keyword:
            return ScoreDelta(exclusion=cfg.EXCLUDE_IRRELEVANT, reason="故障查询命中安装文档")

    if intent.is_installation and (
        "troubleshooting" in view.category
        or "problem" in view.title
        or "issue" in view.title
    ):
        return ScoreDelta(cfg.INSTALL_VS_TROUBLESHOOT_PENALTY, reason="安装查询命中故障文档")
    return _NO_CHANGE


def exact_phrase(doc: Document, view: _DocView, ctx: ScoringContext) -> ScoreDelta:
    """完整查询（不短于 10 字符）原样出现在标题或摘要中。"""
    if len(ctx.query_lower) < cfg.EXACT_PHRASE_MIN_LENGTH:
        return _NO_CHANGE
    points = 0
    if ctx.query_lower in view.title:
        points += cfg.EXACT_PHRASE_TITLE_BONUS
    if ctx.query_lower in view.summary:
        points += cfg.EXACT_PHRASE_SUMMARY_BONUS
    return ScoreDelta(points, reason="完整短语")


def year_filter(doc: Document, view: _DocView, ctx: ScoringContext) -> ScoreDelta:
    """指定年份时，文档标题/摘要/正文必须包含其中之一。"""
    if not ctx.years:
        return _NO_CHANGE
    doc_years = set(YEAR_PATTERN.findall(f"{view.title} {view.summary} {view.content}"))
    matched = [y for y in ctx.years if y in doc_years]
    if not matched:
        return ScoreDelta(exclusion=cfg.EXCLUDE_MISMATCH, reason="年份不匹配")
    return ScoreDelta(
        len(matched) * cfg.YEAR_MATCH_BONUS, reason=f"年份匹配 {', '.join(matched)}"
    )


def model_filter(doc: Document, view: _DocView, ctx: ScoringContext) -> ScoreDelta:
    """指定具体车型时，文档标题必须包含其中之一；只有品牌时小幅加分。"""
    if ctx.models:
        matched = [m for m in ctx.models if m in view.title]
        if not matched:
            return ScoreDelta(exclusion=cfg.EXCLUDE_MISMATCH, reason="车型不匹配")
        return ScoreDelta(
            len(matched) * cfg.MODEL_MATCH_BONUS, reason=f"车型匹配 {', '.join(matched)}"
        )
    if ctx.brands:
        return ScoreDelta(cfg.BRAND_ONLY_BONUS, reason="仅品牌")
    return _NO_CHANGE


def technical_phrases(doc: Document, view: _DocView, ctx: ScoringContext) -> ScoreDelta:
    points = 0
    for phrase in cfg.TECHNICAL_PHRASES:
        if phrase not in ctx.match_text:
            continue
        if phrase in view.title:
            points += cfg.PHRASE_TITLE_BONUS
        if phrase in view.summary or phrase in view.content:
            points += cfg.PHRASE_BODY_BONUS
    return ScoreDelta(points, reason="技术短语")


def keyword_density(doc: Document, view: _DocView, ctx: ScoringContext) -> ScoreDelta:
    """多个检索词同时命中标题或摘要。"""
    if len(ctx.keywords) < 2:
        return _NO_CHANGE
    title_hits = sum(1 for kw in ctx.keywords if kw in view.title)
    summary_hits = sum(1 for kw in ctx.keywords if kw in view.summary)

    points = 0
    if title_hits >= cfg.DENSITY_TITLE_HIGH_HITS:
        points += title_hits * cfg.DENSITY_TITLE_HIGH_WEIGHT
    elif title_hits >= 2:
        points += title_hits * cfg.DENSITY_TITLE_LOW_WEIGHT
    if summary_hits >= cfg.DENSITY_SUMMARY_MIN_HITS:
        points += summary_hits * cfg.DENSITY_SUMMARY_WEIGHT
    return ScoreDelta(points, reason=f"密度 标题 {title_hits} / 摘要 {summary_hits}")


def keyword_linear(doc: Document, view: _DocView, ctx: ScoringContext) -> ScoreDelta:
    points = 0
    for kw in ctx.keywords:
        if kw in view.title:
            points += cfg.KEYWORD_TITLE_WEIGHT
        if kw in view.summary:
            points += cfg.KEYWORD_SUMMARY_WEIGHT
        if kw in view.category:
            points += cfg.KEYWORD_CATEGORY_WEIGHT
    return ScoreDelta(points, reason="单关键词")


def intent_alignment(doc: Document, view: _DocView, ctx: ScoringContext) -> ScoreDelta:
    """文档类型/类别与查询意图是否一致。"""
    intent = ctx.intent
    points = 0
    if intent.is_compatibility:
        if doc.kind == "structured":
            points += cfg.ALIGN_COMPAT_STRUCTURED
        if "compatibility" in view.category or "faq" in view.category:
            points += cfg.ALIGN_COMPAT_CATEGORY
    if intent.is_troubleshooting:
        if "troubleshooting" in view.category or "issue" in view.category:
            points += cfg.ALIGN_TROUBLESHOOT_CATEGORY
        if doc.kind == "video" and "installation" in view.title:
            points += cfg.ALIGN_TROUBLESHOOT_INSTALL_VIDEO
    if intent.is_installation:
        if doc.kind == "video":
            points += cfg.ALIGN_INSTALL_VIDEO
        if "installation" in view.category or "installation" in view.title:
            points += cfg.ALIGN_INSTALL_CATEGORY
    if intent.problem_type and (
        intent.problem_type in view.category or intent.problem_type in view.title
    ):
        points += cfg.ALIGN_PROBLEM_TYPE
    return ScoreDelta(points, reason="意图对齐")


def content_depth(doc: Document, view: _DocView, ctx: ScoringContext) -> ScoreDelta:
    """章节、视频、FAQ 中的检索词命中。"""
    points = 0
    if doc.sections:
        hits = sum(1 for kw in ctx.keywords if kw in view.sections)
        points += hits * cfg.DEPTH_SECTION_WEIGHT
        if hits >= cfg.DEPTH_SECTION_MULTI_HITS:
            points += cfg.DEPTH_SECTION_MULTI_BONUS
    if doc.videos:
        points += sum(cfg.DEPTH_VIDEO_WEIGHT for kw in ctx.keywords if kw in view.videos)
    if doc.faqs:
        points += sum(cfg.DEPTH_FAQ_WEIGHT for kw in ctx.keywords if kw in view.faqs)
        if ctx.intent.is_compatibility or ctx.intent.is_troubleshooting:
            points += cfg.DEPTH_FAQ_INTENT_BONUS
    return ScoreDelta(points, reason="内容深度")


def compatible_models(doc: Document, view: _DocView, ctx: ScoringContext) -> ScoreDelta:
    if not doc.compatible_models or not ctx.models:
        return _NO_CHANGE
    matched = [m for m in ctx.models if m in view.compatible]
    return ScoreDelta(len(matched) * cfg.COMPATIBLE_MODEL_BONUS, reason="兼容车型")


RULES: tuple[Rule, ...] = (
    compatibility_boost,
    negative_filter,
    exact_phrase,
    year_filter,
    model_filter,
    technical_phrases,
    keyword_density,
    keyword_linear,
    intent_alignment,
    content_depth,
    compatible_models,
)


# ---------------------------------------------------------------------------
# 入口
# ---------------------------------------------------------------------------


def score_with_context(doc: Document, ctx: ScoringContext) -> int:
    """按顺序执行评分规则，遇到硬排除立即返回哨兵值。

    Args:
        doc: 候选文档
        ctx: 查询级评分上下文

    Returns:
        分数（负数表示已排除）
    """
    view = _DocView.of(doc)
    score = 0
    for rule in RULES:
        delta = rule(doc, view, ctx)
        if delta.exclusion is not None:
            log_msg("DEBUG", f"[排除] {doc.title}: {delta.reason} ({delta.exclusion})")
            return delta.exclusion
        if delta.points:
            log_msg("DEBUG", f"  {doc.title}: {delta.reason} {delta.points:+d}")
        score += delta.points
    log_msg("DEBUG", f"[得分] {doc.title}: {score}")
    return score


def score_document(
    document: Document,
    query: Query,
    intent: QueryIntent,
    keywords: KeywordSet | Iterable[str],
) -> int:
    """计算单篇文档的相关性分数。相同输入总是得到相同分数。

    Args:
        document: 候选文档
        query: 用户查询
        intent: 查询意图
        keywords: 有序检索词

    Returns:
        分数（负数表示已排除）
    """
    return score_with_context(document, ScoringContext.build(query, intent, keywords))
