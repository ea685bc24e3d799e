"""Q01 关键词抽取单元测试。

覆盖 language.py、rule_extractor.py、llm_extractor.py、pipeline.py。
LLM 路径使用 Mock 补全服务，不发起网络请求。
"""

from __future__ import annotations

import time
from unittest.mock import MagicMock

import pytest

from assistant.completion import Completion, CompletionService
from keyword_extraction.config import MAX_KEYWORDS
from keyword_extraction.language import detect_language
from keyword_extraction.llm_extractor import LLMKeywordExtractor
from keyword_extraction.models import KeywordSet, Query
from keyword_extraction.pipeline import extract_keywords
from keyword_extraction.rule_extractor import (
    contains_term,
    dedupe_terms,
    expand_year_ranges,
    extract_preserved_info,
    find_years,
    split_vehicle_terms,
    tokenize,
    translate_with_table,
)


# ═══════════════════════════════════════════════════════════════
# language.py 测试
# ═══════════════════════════════════════════════════════════════


class TestDetectLanguage:
    """测试语言检测。"""

    def test_chinese(self) -> None:
        assert detect_language("蓝牙没有声音") == "zh"

    def test_english(self) -> None:
        assert detect_language("Highlander installation video") == "en"

    def test_mixed_counts_as_chinese(self) -> None:
        """夹带英文车型的中文问题按中文处理。"""
        assert detect_language("Camry 兼容吗") == "zh"

    def test_fullwidth_punctuation(self) -> None:
        """全角符号也视为中文输入。"""
        assert detect_language("radio？") == "zh"

    def test_empty(self) -> None:
        assert detect_language("") == "en"


# ═══════════════════════════════════════════════════════════════
# rule_extractor.py 测试
# ═══════════════════════════════════════════════════════════════


class TestHelpers:
    """测试去重与词匹配工具。"""

    def test_dedupe_keeps_first_spelling(self) -> None:
        assert dedupe_terms(["Highlander", "highlander", " ", "video"]) == [
            "Highlander",
            "video",
        ]

    def test_contains_term_ascii_boundary(self) -> None:
        """"audi" 不应命中 "audio"。"""
        assert not contains_term("no audio output", "audi")
        assert contains_term("Audi A4 radio", "audi")

    def test_contains_term_chinese_substring(self) -> None:
        assert contains_term("汉兰达安装视频", "安装")

    def test_find_years_next_to_chinese(self) -> None:
        """年份紧贴汉字时也能识别。"""
        assert find_years("汉兰达2008款") == ["2008"]

    def test_find_years_ignores_longer_numbers(self) -> None:
        assert find_years("part 120081") == []


class TestPreservedInfo:
    """测试保留信息抽取。"""

    def test_year_range_expanded(self) -> None:
        years = expand_year_ranges("Highlander 2008-2013")
        assert years == ["2008", "2009", "2010", "2011", "2012", "2013"]

    def test_localized_range_separator(self) -> None:
        assert expand_year_ranges("2014至2016款") == ["2014", "2015", "2016"]

    def test_two_digit_end_year(self) -> None:
        """结束年份只写两位时沿用起始年份的世纪。"""
        assert expand_year_ranges("2014-19 Camry") == [
            "2014", "2015", "2016", "2017", "2018", "2019",
        ]
        assert expand_year_ranges("1998~02") == []
        assert expand_year_ranges("2014-195") == []

    def test_reversed_range_not_expanded(self) -> None:
        assert expand_year_ranges("2013-2008") == []

    def test_overlong_range_not_expanded(self) -> None:
        assert expand_year_ranges("1900-2000") == []

    def test_highlander_query(self) -> None:
        preserved = extract_preserved_info("Highlander 2008-2013 installation video")
        for term in ["Highlander", "2008", "2009", "2010", "2011", "2012", "2013"]:
            assert term in preserved

    def test_size_token(self) -> None:
        preserved = extract_preserved_info("10.1寸屏幕")
        assert "10.1" in preserved
        assert "inch" in preserved

    def test_abbreviation(self) -> None:
        preserved = extract_preserved_info("SWC not working")
        assert "SWC" in preserved

    def test_capitalized_phrase_kept_whole(self) -> None:
        preserved = extract_preserved_info("radio for Grand Cherokee")
        assert "Grand Cherokee" in preserved


class TestTranslateWithTable:
    """测试领域词翻译表。"""

    def test_chinese_model_and_operation(self) -> None:
        terms = translate_with_table("汉兰达安装", "zh")
        assert "Highlander" in terms
        assert "installation" in terms

    def test_chinese_phrase_kept_intact(self) -> None:
        terms = translate_with_table("方向盘控制不工作", "zh")
        assert "steering wheel control" in terms
        assert "not working" in terms

    def test_english_terms(self) -> None:
        terms = translate_with_table("backup camera not working on Camry", "en")
        assert "backup camera" in terms
        assert "not working" in terms
        assert "Camry" in terms

    def test_english_does_not_match_inside_words(self) -> None:
        terms = translate_with_table("audio problem", "en")
        assert "Audi" not in terms
        assert "audio" in terms

    def test_english_query_skips_chinese_table(self) -> None:
        assert translate_with_table("安装", "en") == []


class TestTokenize:
    """测试分词兜底。"""

    def test_stop_words_and_short_tokens(self) -> None:
        assert tokenize("How do I fix the radio?") == ["fix", "radio"]

    def test_digits_only_when_preserved(self) -> None:
        assert tokenize("radio 2010 123", preserved=["2010"]) == ["radio", "2010"]

    def test_hyphen_kept(self) -> None:
        assert "cr-v" in tokenize("CR-V head unit")


class TestSplitVehicleTerms:
    """测试车型与品牌区分。"""

    def test_models_and_brands(self) -> None:
        models, brands = split_vehicle_terms(
            ["Toyota Highlander", "Installation", "2008", "Camry"]
        )
        assert models == ["Highlander", "Camry"]
        assert brands == ["Toyota"]

    def test_sentence_words_ignored(self) -> None:
        models, brands = split_vehicle_terms(["What radio fits Camry"])
        assert models == ["Camry"]
        assert brands == []

    def test_brand_only(self) -> None:
        models, brands = split_vehicle_terms(["Toyota"])
        assert models == []
        assert brands == ["Toyota"]

    def test_sentence_initial_word_ignored(self) -> None:
        """句首大写的普通词不当作车型。"""
        sentence = "Phone won't pair over bluetooth"
        assert split_vehicle_terms(["Phone", sentence], sentence) == ([], [])
        assert split_vehicle_terms(["Phone"]) == (["Phone"], [])

    def test_sentence_initial_known_model_kept(self) -> None:
        assert split_vehicle_terms(["Camry", "Camry radio"], "Camry radio") == (["Camry"], [])

    def test_sentence_initial_word_repeated_kept(self) -> None:
        sentence = "Sorento radio for my Sorento"
        assert split_vehicle_terms(["Sorento", sentence], sentence) == (["Sorento"], [])


# ═══════════════════════════════════════════════════════════════
# llm_extractor.py 测试
# ═══════════════════════════════════════════════════════════════


@pytest.fixture
def completion() -> MagicMock:
    mock = MagicMock(spec=CompletionService)
    mock.complete.return_value = Completion(text="Highlander, 2008, installation video")
    return mock


class TestLLMKeywordExtractor:
    """测试 LLM 关键词抽取。"""

    def test_comma_separated_output(self, completion: MagicMock) -> None:
        extractor = LLMKeywordExtractor(completion)
        assert extractor.extract("汉兰达2008安装视频", "zh") == [
            "Highlander",
            "2008",
            "installation video",
        ]

    def test_language_specific_parameters(self, completion: MagicMock) -> None:
        """中文 60 token，英文 100 token，温度 0.1。"""
        extractor = LLMKeywordExtractor(completion)
        extractor.extract("汉兰达", "zh")
        assert completion.complete.call_args.kwargs["max_tokens"] == 60
        assert completion.complete.call_args.kwargs["temperature"] == 0.1

        extractor.extract("Highlander", "en")
        assert completion.complete.call_args.kwargs["max_tokens"] == 100

    def test_chinese_separators(self, completion: MagicMock) -> None:
        completion.complete.return_value = Completion(text="Output: bluetooth，no sound、issue")
        extractor = LLMKeywordExtractor(completion)
        assert extractor.extract("蓝牙没有声音", "zh") == ["bluetooth", "no sound", "issue"]

    def test_whitespace_fallback(self, completion: MagicMock) -> None:
        completion.complete.return_value = Completion(text="Highlander install")
        extractor = LLMKeywordExtractor(completion)
        assert extractor.extract("Highlander install", "en") == ["Highlander", "install"]

    def test_error_returns_empty(self, completion: MagicMock) -> None:
        completion.complete.side_effect = RuntimeError("rate limited")
        extractor = LLMKeywordExtractor(completion)
        assert extractor.extract("蓝牙", "zh") == []

    def test_timeout_returns_empty(self, completion: MagicMock) -> None:
        completion.complete.side_effect = lambda *args, **kwargs: time.sleep(1)
        extractor = LLMKeywordExtractor(completion, timeout=0.05)
        assert extractor.extract("蓝牙", "zh") == []


# ═══════════════════════════════════════════════════════════════
# pipeline.py 测试
# ═══════════════════════════════════════════════════════════════


class TestExtractKeywords:
    """测试关键词抽取管道。"""

    def test_highlander_scenario(self) -> None:
        keywords = extract_keywords(Query.from_text("Highlander 2008-2013 installation video"))
        for term in [
            "Highlander", "2008", "2009", "2010", "2011", "2012", "2013",
            "installation", "video",
        ]:
            assert term in keywords

    def test_chinese_query_contains_original(self) -> None:
        query = Query.from_text("汉兰达2008-2013安装视频")
        keywords = extract_keywords(query)
        assert len(keywords) > 0
        assert query.text in keywords
        assert keywords.terms[-1] == query.text
        assert "Highlander" in keywords
        assert "2010" in keywords

    def test_unknown_chinese_query_never_empty(self) -> None:
        keywords = extract_keywords(Query.from_text("你好"))
        assert keywords.to_list() == ["你好"]

    def test_short_year_range_scenario(self) -> None:
        keywords = extract_keywords(Query.from_text("2014-19 Camry installation"))
        for term in ["2014", "2015", "2016", "2017", "2018", "2019", "Camry"]:
            assert term in keywords
        assert keywords.query_text == "2014-19 Camry installation"

    def test_cap_includes_original_query(self) -> None:
        text = " ".join(f"term{i}abc" for i in range(40))
        keywords = extract_keywords(Query.from_text(text))
        assert len(keywords) == MAX_KEYWORDS
        assert keywords.terms[-1] == text

    def test_llm_terms_follow_preserved(self) -> None:
        llm = MagicMock(spec=LLMKeywordExtractor)
        llm.extract.return_value = ["steering wheel control", "Highlander"]
        keywords = extract_keywords(Query.from_text("Highlander 方向盘控制"), llm=llm)
        terms = keywords.to_list()
        assert terms.index("Highlander") < terms.index("steering wheel control")
        assert terms.count("Highlander") == 1
        assert "SWC" in terms

    def test_failing_llm_degrades(self) -> None:
        llm = MagicMock(spec=LLMKeywordExtractor)
        llm.extract.side_effect = RuntimeError("boom")
        keywords = extract_keywords(Query.from_text("蓝牙没有声音"), llm=llm)
        assert "bluetooth" in keywords
        assert "no sound" in keywords
        assert keywords.terms[-1] == "蓝牙没有声音"

    def test_keyword_set_helpers(self) -> None:
        keywords = KeywordSet(terms=("Highlander", "Video"))
        assert keywords.lowered() == ["highlander", "video"]
        assert list(keywords) == ["Highlander", "Video"]
