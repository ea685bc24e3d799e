"""Q01 配置 — 关键词抽取规则表、停用词与抽取上限"""

from __future__ import annotations

# ---------------------------------------------------------------------------
# 抽取上限与超时
# ---------------------------------------------------------------------------
MAX_KEYWORDS: int = 20
MAX_YEAR_RANGE_SPAN: int = 50
LLM_KEYWORD_TIMEOUT: float = 20.0
LLM_KEYWORD_TEMPERATURE: float = 0.1
LLM_KEYWORD_MAX_TOKENS: dict[str, int] = {"zh": 60, "en": 100}
MIN_TOKEN_LENGTH: int = 3

# ---------------------------------------------------------------------------
# 中文领域翻译表（语料库全英文，中文查询需转成英文检索词）
# ---------------------------------------------------------------------------
ZH_TRANSLATIONS: dict[str, list[str]] = {
    # 操作类
    "安装": ["installation", "install", "setup"],
    "视频": ["video", "tutorial"],
    "教程": ["tutorial", "guide", "video"],
    "设置": ["settings", "setup", "configure"],
    "配置": ["configuration", "setup"],
    "连接": ["connect", "connection"],
    "更新": ["update", "upgrade"],
    "接线": ["wiring", "wire"],
    # 品牌
    "丰田": ["Toyota"],
    "雷克萨斯": ["Lexus"],
    "福特": ["Ford"],
    "雪佛兰": ["Chevrolet"],
    "本田": ["Honda"],
    "日产": ["Nissan"],
    "马自达": ["Mazda"],
    # 车型（丰田）
    "汉兰达": ["Highlander"],
    "凯美瑞": ["Camry"],
    "卡罗拉": ["Corolla"],
    "普锐斯": ["Prius"],
    "塞纳": ["Sienna"],
    "RAV4": ["RAV4"],
    "坦途": ["Tundra"],
    "塔科马": ["Tacoma"],
    "红杉": ["Sequoia"],
    # 车型（其他品牌）
    "F150": ["F150", "F-150"],
    "全顺": ["Transit"],
    "探险者": ["Explorer"],
    "科鲁兹": ["Cruze"],
    "思域": ["Civic"],
    "CRV": ["CRV", "CR-V"],
    "雅阁": ["Accord"],
    # 功能类
    "功能": ["function", "feature"],
    "原车": ["original", "factory", "OEM"],
    "保留": ["retain", "keep"],
    "兼容": ["compatible", "compatibility"],
    "方向盘": ["steering wheel"],
    "方向盘控制": ["steering wheel control", "SWC"],
    "倒车影像": ["backup camera", "reversing camera"],
    "倒车": ["backup", "reversing", "reverse"],
    "导航": ["navigation", "GPS"],
    "蓝牙": ["bluetooth"],
    "音响": ["audio", "radio", "stereo"],
    "主机": ["head unit", "radio"],
    "屏幕": ["screen", "display"],
    # 问题类
    "不工作": ["not working", "issue", "problem"],
    "黑屏": ["blank screen", "black screen"],
    "没有声音": ["no sound", "no audio"],
    "没声音": ["no sound", "no audio"],
    "不能": ["cannot", "not working"],
    "无法": ["cannot", "unable"],
    "故障": ["issue", "problem", "troubleshooting"],
    "问题": ["issue", "problem"],
}

# ---------------------------------------------------------------------------
# 英文领域词表（英文查询的规则兜底，键为小写匹配词）
# ---------------------------------------------------------------------------
EN_BRANDS: list[str] = [
    "Toyota", "Ford", "Chevrolet", "Honda", "Nissan", "Mazda", "Lexus",
    "BMW", "Mercedes", "Audi",
]

EN_MODELS: list[str] = [
    "Highlander", "Camry", "Corolla", "RAV4", "Sienna", "Prius", "Tundra",
    "Tacoma", "Sequoia", "F150", "F-150", "Transit", "Explorer", "Escape",
    "Focus", "Fusion", "Cruze", "Malibu", "Equinox", "Silverado", "Tahoe",
    "Civic", "Accord", "CRV", "CR-V", "Pilot", "Altima", "Sentra", "Rogue",
    "Pathfinder", "CX-5", "CX-9", "Mazda3", "Mazda6",
]

EN_OPERATIONS: list[str] = [
    "install", "installation", "setup", "configure", "connect", "update",
    "upgrade", "video", "tutorial", "guide", "how to", "instruction",
]

EN_FEATURES: list[str] = [
    "steering wheel control", "SWC", "backup camera", "reverse camera",
    "reversing camera", "navigation", "GPS", "bluetooth", "audio", "radio",
    "stereo", "head unit", "screen", "display", "compatibility", "compatible",
    "retain", "keep", "original", "factory", "OEM",
]

EN_ISSUES: list[str] = [
    "not working", "no sound", "no audio", "blank screen", "black screen",
    "issue", "problem", "troubleshoot", "fix", "repair",
]

EN_DOMAIN_TERMS: dict[str, list[str]] = {
    term.lower(): [term]
    for term in EN_BRANDS + EN_MODELS + EN_OPERATIONS + EN_FEATURES + EN_ISSUES
}

# ---------------------------------------------------------------------------
# 车型识别：品牌（不强制过滤）与非车型大写词
# ---------------------------------------------------------------------------
BRAND_NAMES: frozenset[str] = frozenset({
    "toyota", "lexus", "ford", "chevrolet", "honda", "nissan", "mazda",
    "bmw", "audi", "mercedes", "volkswagen", "hyundai", "kia",
})

# 句首大写的常用词和领域词汇，不视为车型
NON_MODEL_WORDS: frozenset[str] = frozenset({
    "what", "when", "where", "which", "does", "will", "would", "could",
    "should", "have", "need", "please", "there", "this", "that", "with",
    "from", "after", "before", "about", "help", "want", "also", "just",
    "installation", "install", "video", "tutorial", "guide", "setup",
    "steering", "wheel", "control", "backup", "camera", "reverse",
    "reversing", "bluetooth", "audio", "radio", "stereo", "screen",
    "display", "navigation", "compatibility", "compatible", "factory",
    "original", "retain", "sound", "blank", "black", "problem", "issue",
    "wiring", "connect", "update", "upgrade", "settings", "configure",
    "configuration", "function", "feature", "features", "unit", "head",
    "support", "working",
})

# ---------------------------------------------------------------------------
# 英文停用词
# ---------------------------------------------------------------------------
STOP_WORDS: frozenset[str] = frozenset({
    "a", "an", "and", "are", "as", "at", "be", "by", "for", "from", "has",
    "he", "in", "is", "it", "its", "of", "on", "that", "the", "to", "was",
    "will", "with", "can", "could", "should", "would", "this", "these",
    "those", "they", "them", "their", "there", "where", "when", "why",
    "i", "you", "we", "us", "me", "my", "your", "how", "what", "does",
})
