"""Q01 规则抽取器 — 年份/尺寸/车型/缩写保留、领域词翻译表、分词兜底

四类规则：
1. extract_preserved_info → 年份（含范围展开）、尺寸、首字母大写短语、全大写缩写
2. translate_with_table → 中文领域词 → 英文检索词；英文领域词原样保留
3. tokenize → 小写分词 + 停用词过滤
4. split_vehicle_terms → 从检索词中区分具体车型与品牌
"""

from __future__ import annotations

import re
from typing import Iterable

from keyword_extraction.config import (
    BRAND_NAMES,
    EN_DOMAIN_TERMS,
    EN_MODELS,
    MAX_YEAR_RANGE_SPAN,
    MIN_TOKEN_LENGTH,
    NON_MODEL_WORDS,
    STOP_WORDS,
    ZH_TRANSLATIONS,
)
from keyword_extraction.language import Language


# ---------------------------------------------------------------------------
# 正则
# ---------------------------------------------------------------------------

# 以数字边界代替 \b：Python 的 \b 把汉字视为单词字符，"汉兰达2008" 中无边界
YEAR_PATTERN = re.compile(r"(?<!\d)(19\d{2}|20[0-2]\d)(?!\d)")
_YEAR_RANGE_PATTERN = re.compile(r"(?<!\d)(\d{4})\s*[-~～至到–]\s*(\d{4}|\d{2})(?!\d)")
_SIZE_PATTERN = re.compile(r"(\d+(?:\.\d+)?)\s*(?:英寸|寸|inch)", re.IGNORECASE)
_CAPITALIZED_PHRASE_PATTERN = re.compile(r"[A-Z][a-z]+(?:\s+[A-Z][a-z]+)*")
_ABBREVIATION_PATTERN = re.compile(r"(?<![A-Za-z0-9])[A-Z]{2,}(?![A-Za-z0-9])")
_MODEL_CANDIDATE_PATTERN = re.compile(r"^[A-Z][a-z]{3,}")
_PUNCTUATION_PATTERN = re.compile(r"[^\w\s-]")
_DIGITS_PATTERN = re.compile(r"^\d+$")

_KNOWN_MODELS = frozenset(model.lower() for model in EN_MODELS)


# ---------------------------------------------------------------------------
# 通用工具
# ---------------------------------------------------------------------------


def dedupe_terms(terms: Iterable[str]) -> list[str]:
    """大小写无关去重，保留首次出现的写法和顺序。

    Args:
        terms: 候选检索词

    Returns:
        去重后的列表（空白项被丢弃）
    """
    seen: set[str] = set()
    result: list[str] = []
    for term in terms:
        term = term.strip()
        key = term.lower()
        if not term or key in seen:
            continue
        seen.add(key)
        result.append(term)
    return result


def contains_term(text: str, term: str) -> bool:
    """判断 text 是否包含 term（大小写无关）。

    纯 ASCII 的词要求两侧不是字母数字，避免 "audi" 命中 "audio"；
    含中文的词按子串匹配。
    """
    text_lower = text.lower()
    term_lower = term.lower()
    if term_lower.isascii():
        pattern = rf"(?<![a-z0-9]){re.escape(term_lower)}(?![a-z0-9])"
        return re.search(pattern, text_lower) is not None
    return term_lower in text_lower


def find_years(text: str) -> list[str]:
    """提取文本中的 4 位年份（1900-2029），按出现顺序去重。"""
    return dedupe_terms(YEAR_PATTERN.findall(text))


# ---------------------------------------------------------------------------
# 1. 保留信息
# ---------------------------------------------------------------------------


def expand_year_ranges(query: str) -> list[str]:
    """展开年份范围：2008-2013 → 2008, 2009, ..., 2013。

    两位数的结束年份沿用起始年份的世纪（2014-19 → 2014 ... 2019）。
    支持 - ~ ～ 至 到 – 分隔符；起止倒置或跨度超过上限的范围不展开。

    Args:
        query: 原始查询

    Returns:
        展开后的年份列表
    """
    years: list[str] = []
    for start_text, end_text in _YEAR_RANGE_PATTERN.findall(query):
        if len(end_text) == 2:
            end_text = start_text[:2] + end_text
        start, end = int(start_text), int(end_text)
        if start > end or end - start > MAX_YEAR_RANGE_SPAN:
            continue
        years.extend(str(year) for year in range(start, end + 1))
    return years


def extract_preserved_info(query: str) -> list[str]:
    """规则提取必须原样保留的信息（与语言无关）。

    依次提取：年份范围（展开）、单个年份、尺寸、首字母大写短语（候选车型）、
    全大写缩写（SWC / GPS 等）。

    Args:
        query: 原始查询

    Returns:
        去重后的保留信息列表
    """
    preserved: list[str] = []
    preserved.extend(expand_year_ranges(query))
    preserved.extend(YEAR_PATTERN.findall(query))

    for number in _SIZE_PATTERN.findall(query):
        preserved.extend([number, "inch"])

    preserved.extend(_CAPITALIZED_PHRASE_PATTERN.findall(query))
    preserved.extend(_ABBREVIATION_PATTERN.findall(query))
    return dedupe_terms(preserved)


# ---------------------------------------------------------------------------
# 2. 领域词翻译表
# ---------------------------------------------------------------------------


def translate_with_table(query: str, language: Language) -> list[str]:
    """按静态领域词表生成检索词。

    中文查询同时查中文表和英文表（中文问题里常夹带英文车型、缩写），
    英文查询只查英文表。表键以子串命中，命中即贡献全部译词。

    Args:
        query: 原始查询
        language: 查询语言

    Returns:
        译词列表（未去重）
    """
    tables = [ZH_TRANSLATIONS, EN_DOMAIN_TERMS] if language == "zh" else [EN_DOMAIN_TERMS]
    terms: list[str] = []
    for table in tables:
        for key, translations in table.items():
            if contains_term(query, key):
                terms.extend(translations)
    return terms


# ---------------------------------------------------------------------------
# 3. 分词兜底
# ---------------------------------------------------------------------------


def tokenize(query: str, preserved: Iterable[str] = ()) -> list[str]:
    """小写分词：去标点（保留连字符）、去停用词、去短词。

    纯数字仅在属于保留信息（年份）时保留。

    Args:
        query: 原始查询
        preserved: 保留信息列表

    Returns:
        分词结果
    """
    preserved_set = set(preserved)
    words = _PUNCTUATION_PATTERN.sub(" ", query.lower()).split()
    tokens: list[str] = []
    for word in words:
        if len(word) < MIN_TOKEN_LENGTH or word in STOP_WORDS:
            continue
        if _DIGITS_PATTERN.match(word) and word not in preserved_set:
            continue
        tokens.append(word)
    return tokens


# ---------------------------------------------------------------------------
# 4. 车型 / 品牌区分
# ---------------------------------------------------------------------------


def sentence_initial_word(sentence: str) -> str | None:
    """句首因大写规则而首字母大写、但不能确认是车型的词（小写形式）。

    句首词是已知车型，或在句中其他位置同样以大写形式出现时，视为车型，返回 None。
    """
    words = sentence.split()
    if not words:
        return None
    first = words[0].strip(".,!?;:()\"'")
    if not _MODEL_CANDIDATE_PATTERN.match(first) or first.lower() in _KNOWN_MODELS:
        return None
    pattern = rf"(?<![A-Za-z0-9]){re.escape(first)}(?![A-Za-z0-9])"
    if len(re.findall(pattern, sentence)) > 1:
        return None
    return first.lower()


def split_vehicle_terms(
    keywords: Iterable[str], sentence: str = ""
) -> tuple[list[str], list[str]]:
    """从检索词中区分具体车型与品牌。

    首字母大写、后接至少 3 个小写字母的检索词视为候选；逐个拆词，
    品牌名进入 brands，常用句首词和领域词汇被忽略，其余进入 models。
    给出原始问题时，句首的非车型大写词（"Phone won't pair" 中的 Phone）同样忽略。

    Args:
        keywords: 检索词
        sentence: 原始问题文本

    Returns:
        (车型列表, 品牌列表)
    """
    ignored = sentence_initial_word(sentence)
    models: list[str] = []
    brands: list[str] = []
    for keyword in keywords:
        if not _MODEL_CANDIDATE_PATTERN.match(keyword):
            continue
        for part in keyword.split():
            part = part.strip(".,!?;:()\"'")
            if not _MODEL_CANDIDATE_PATTERN.match(part):
                continue
            lowered = part.lower()
            if lowered in BRAND_NAMES:
                brands.append(part)
            elif lowered not in NON_MODEL_WORDS and lowered != ignored:
                models.append(part)
    return dedupe_terms(models), dedupe_terms(brands)
