"""S01 配置 — 意图词表、评分权重、硬过滤哨兵值与截断参数"""

from __future__ import annotations

# ---------------------------------------------------------------------------
# 意图词表（英文按单词边界匹配，中文按子串匹配）
# ---------------------------------------------------------------------------
COMPATIBILITY_PATTERNS: tuple[str, ...] = (
    r"compatib\w*",
    r"confirm\b.*\bconfig\w*",
    r"check\b.*\bcompat\w*",
    r"work with",
    r"fit",
    r"support",
    r"retain",
    r"keep\b.*\bfunction\w*",
    r"original\b.*\bfunction\w*",
    r"factory",
)
COMPATIBILITY_ZH: tuple[str, ...] = ("兼容", "配置", "支持", "保留", "原车")
COMPATIBILITY_PHRASES: tuple[str, ...] = ("can i", "can it", "is it compatible")

INSTALLATION_PATTERNS: tuple[str, ...] = (
    r"install", r"installation", r"setup", r"mount", r"connect", r"wire", r"wiring",
)
INSTALLATION_ZH: tuple[str, ...] = ("安装", "接线")

TROUBLESHOOTING_PATTERNS: tuple[str, ...] = (
    r"not working", r"no sound", r"no audio", r"blank", r"issue", r"problem",
    r"error", r"fix", r"can't", r"cannot", r"doesn't work", r"won't", r"failed",
)
TROUBLESHOOTING_ZH: tuple[str, ...] = (
    "故障", "不工作", "没有声音", "没声音", "黑屏", "无法", "不能",
)

FEATURE_PATTERNS: tuple[str, ...] = (
    r"how to", r"how do", r"how can", r"what is", r"change", r"set", r"setting",
    r"configure", r"use",
)
FEATURE_ZH: tuple[str, ...] = ("如何", "怎么", "设置")

# 按顺序判断，首个命中即为问题类型
PROBLEM_TYPES: tuple[tuple[str, tuple[str, ...]], ...] = (
    ("bluetooth", ("bluetooth", "蓝牙")),
    ("audio", ("sound", "audio", "music", "声音", "音频")),
    ("display", ("screen", "display", "屏幕")),
)

# ---------------------------------------------------------------------------
# 硬过滤哨兵值
# ---------------------------------------------------------------------------
EXCLUDE_MISMATCH: int = -1000  # 年份 / 车型不匹配
EXCLUDE_IRRELEVANT: int = -100  # 故障查询命中纯安装文档

# ---------------------------------------------------------------------------
# 评分权重
# ---------------------------------------------------------------------------

# 1. 兼容性加权
COMPAT_STRUCTURED_BONUS: int = 50
COMPAT_MODELS_LIST_BONUS: int = 40
COMPAT_TITLE_BONUS: int = 60
COMPAT_CONFIRM_BONUS: int = 30
COMPAT_INSTALL_PENALTY: int = -80

# 2. 负样本
INSTALL_VS_TROUBLESHOOT_PENALTY: int = -20
PROBLEM_KEYWORD_EXEMPT: frozenset[str] = frozenset({"sound", "audio", "case"})

# 3. 完整短语
EXACT_PHRASE_MIN_LENGTH: int = 10
EXACT_PHRASE_TITLE_BONUS: int = 100
EXACT_PHRASE_SUMMARY_BONUS: int = 50

# 4-5. 年份 / 车型
YEAR_MATCH_BONUS: int = 100
MODEL_MATCH_BONUS: int = 100
BRAND_ONLY_BONUS: int = 10

# 6. 技术短语
TECHNICAL_PHRASES: tuple[str, ...] = (
    "steering wheel control",
    "backup camera",
    "reverse camera",
    "blank screen",
    "black screen",
    "no sound",
    "no audio",
    "factory radio",
    "installation video",
    "compatibility",
)
PHRASE_TITLE_BONUS: int = 50
PHRASE_BODY_BONUS: int = 25

# 7. 多关键词密度
DENSITY_TITLE_HIGH_HITS: int = 3
DENSITY_TITLE_HIGH_WEIGHT: int = 25
DENSITY_TITLE_LOW_WEIGHT: int = 20
DENSITY_SUMMARY_MIN_HITS: int = 2
DENSITY_SUMMARY_WEIGHT: int = 10

# 8. 单关键词
KEYWORD_TITLE_WEIGHT: int = 15
KEYWORD_SUMMARY_WEIGHT: int = 8
KEYWORD_CATEGORY_WEIGHT: int = 5

# 9. 类别与意图对齐
ALIGN_COMPAT_STRUCTURED: int = 30
ALIGN_COMPAT_CATEGORY: int = 25
ALIGN_TROUBLESHOOT_CATEGORY: int = 25
ALIGN_TROUBLESHOOT_INSTALL_VIDEO: int = -40
ALIGN_INSTALL_VIDEO: int = 30
ALIGN_INSTALL_CATEGORY: int = 25
ALIGN_PROBLEM_TYPE: int = 20

# 10. 内容深度
DEPTH_SECTION_WEIGHT: int = 3
DEPTH_SECTION_MULTI_HITS: int = 3
DEPTH_SECTION_MULTI_BONUS: int = 10
DEPTH_VIDEO_WEIGHT: int = 5
DEPTH_FAQ_WEIGHT: int = 8
DEPTH_FAQ_INTENT_BONUS: int = 15

# 11. 兼容车型直接匹配
COMPATIBLE_MODEL_BONUS: int = 70

# ---------------------------------------------------------------------------
# 排序与截断
# ---------------------------------------------------------------------------
RELEVANCE_FLOOR: int = 50
TRUNCATION_RATIO: float = 0.5
TIE_WINDOW: int = 10
MIN_KEEP: int = 3
