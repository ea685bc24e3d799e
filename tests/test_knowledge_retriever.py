"""R01 候选检索单元测试。

覆盖 schema.py、models.py、store.py、retriever.py 的核心逻辑。
文档库使用内存实现或 Mock，不依赖真实数据库。
"""

from __future__ import annotations

import json
import time
from pathlib import Path
from unittest.mock import MagicMock

import pytest
from pydantic import ValidationError

from keyword_extraction.models import KeywordSet, Query
from keyword_extraction.pipeline import extract_keywords
from knowledge_retriever.config import PRIORITY_FIELDS, SEARCH_FIELDS
from knowledge_retriever.models import FieldMatch, SearchQuery
from knowledge_retriever.retriever import (
    CandidateRetriever,
    build_search_query,
    priority_terms,
)
from knowledge_retriever.schema import Document
from knowledge_retriever.store import DocumentStore, InMemoryDocumentStore


# ═══════════════════════════════════════════════════════════════
# schema.py 测试
# ═══════════════════════════════════════════════════════════════


class TestDocument:
    """测试文档模型。"""

    def test_camel_case_aliases(self, camry_compat: Document) -> None:
        assert camry_compat.id == "s-camry"
        assert camry_compat.kind == "structured"
        assert camry_compat.compatible_models[0].name == "Camry 2012-2014"
        assert camry_compat.incompatible_models[0].reason == "Amplifier not supported"

    def test_unknown_kind_rejected(self) -> None:
        with pytest.raises(ValidationError):
            Document.model_validate({"id": "x", "kind": "podcast", "title": "x"})

    def test_frozen(self, highlander_video: Document) -> None:
        with pytest.raises(ValidationError):
            highlander_video.title = "changed"

    def test_summary_text_video_uses_description(self, highlander_video: Document) -> None:
        assert highlander_video.summary_text.startswith("Step by step")

    def test_summary_text_general(self, highlander_guide: Document) -> None:
        assert highlander_guide.summary_text.startswith("Installation guide")

    def test_searchable_content_includes_sections(self, highlander_guide: Document) -> None:
        content = highlander_guide.searchable_content()
        assert "Connect the harness" in content
        assert "four screws" in content

    def test_field_values_nested(self, bluetooth_troubleshooting: Document) -> None:
        headings = bluetooth_troubleshooting.field_values("sections.heading")
        assert headings == ["Check bluetooth pairing", "Audio output settings", "Factory reset"]

    def test_field_values_missing(self, highlander_video: Document) -> None:
        assert highlander_video.field_values("summary") == []
        assert highlander_video.field_values("faqs.title") == []

    def test_to_dict_round_trip(self, camry_compat: Document) -> None:
        assert Document.model_validate(camry_compat.to_dict()) == camry_compat


# ═══════════════════════════════════════════════════════════════
# models.py / build_search_query 测试
# ═══════════════════════════════════════════════════════════════


class TestBuildSearchQuery:
    """测试检索条件构造。"""

    def test_disjunction_over_all_fields(self) -> None:
        query = build_search_query(["bluetooth", "no sound"])
        assert len(query.any_of) == 2 * len(SEARCH_FIELDS)
        assert FieldMatch("sections.heading", "no\\ sound") in query.any_of
        assert query.must_match_one_of == []
        assert query.status == "published"

    def test_priority_terms(self) -> None:
        assert priority_terms(["Toyota", "Highlander", "2008", "2008-2013", "video"]) == [
            "Highlander",
            "2008",
        ]

    def test_must_match_over_priority_fields(self) -> None:
        query = build_search_query(["Highlander", "2008", "video"])
        assert len(query.must_match_one_of) == 2 * len(PRIORITY_FIELDS)
        assert {m.field for m in query.must_match_one_of} == set(PRIORITY_FIELDS)

    def test_sentence_initial_word_not_required(self) -> None:
        keywords = KeywordSet(terms=("Phone", "bluetooth", "Phone won't pair over bluetooth"))
        assert build_search_query(keywords).must_match_one_of == []
        assert priority_terms(["Phone"]) == ["Phone"]

    def test_patterns_escaped(self) -> None:
        query = build_search_query(["CR-V (2017)"])
        assert all(m.pattern == "CR\\-V\\ \\(2017\\)" for m in query.any_of)

    def test_field_match_case_insensitive(self) -> None:
        assert FieldMatch("title", "highlander").matches("Toyota HIGHLANDER")

    def test_to_dict(self) -> None:
        data = build_search_query(["Camry"]).to_dict()
        assert data["keywords"] == ["Camry"]
        assert data["must_match_one_of"][0] == {"field": "title", "pattern": "Camry"}


# ═══════════════════════════════════════════════════════════════
# store.py 测试
# ═══════════════════════════════════════════════════════════════


class TestInMemoryDocumentStore:
    """测试内存文档库。"""

    def test_status_filter(self, memory_store: InMemoryDocumentStore) -> None:
        results = memory_store.search(build_search_query(["Draft Notes"]))
        assert results == []

    def test_nested_field_match(self, memory_store: InMemoryDocumentStore) -> None:
        results = memory_store.search(build_search_query(["pair again"]))
        assert [d.id for d in results] == ["g-bluetooth"]

    def test_priority_terms_required(self, memory_store: InMemoryDocumentStore) -> None:
        results = memory_store.search(build_search_query(["Highlander", "installation"]))
        ids = {d.id for d in results}
        assert ids == {"v-highlander", "g-highlander-guide", "g-highlander-2014"}

    def test_from_jsonl(self, tmp_path: Path, camry_compat: Document) -> None:
        path = tmp_path / "kb.jsonl"
        lines = [
            json.dumps({"_id": "a", "documentType": "video", "title": "Camry Video"}),
            "",
            json.dumps(camry_compat.to_dict()),
        ]
        path.write_text("\n".join(lines), encoding="utf-8")

        store = InMemoryDocumentStore.from_jsonl(path)
        assert len(store) == 2
        assert {d.id for d in store.search(build_search_query(["Camry"]))} == {"a", "s-camry"}

    def test_from_jsonl_invalid_line(self, tmp_path: Path) -> None:
        path = tmp_path / "kb.jsonl"
        path.write_text(json.dumps({"_id": "a", "documentType": "podcast"}), encoding="utf-8")
        with pytest.raises(ValidationError):
            InMemoryDocumentStore.from_jsonl(path)


# ═══════════════════════════════════════════════════════════════
# retriever.py 测试
# ═══════════════════════════════════════════════════════════════


class TestCandidateRetriever:
    """测试候选检索器。"""

    def test_retrieve(self, memory_store: InMemoryDocumentStore) -> None:
        retriever = CandidateRetriever(memory_store)
        results = retriever.retrieve(["bluetooth", "no sound"])
        assert [d.id for d in results] == ["g-bluetooth"]

    def test_retrieve_with_sentence_initial_word(self, memory_store: InMemoryDocumentStore) -> None:
        keywords = extract_keywords(Query.from_text("Phone won't pair over bluetooth"))
        ids = [d.id for d in CandidateRetriever(memory_store).retrieve(keywords)]
        assert "g-bluetooth" in ids

    def test_store_error_returns_empty(self) -> None:
        store = MagicMock(spec=DocumentStore)
        store.search.side_effect = ConnectionError("db down")
        assert CandidateRetriever(store).retrieve(["Camry"]) == []

    def test_store_timeout_returns_empty(self) -> None:
        store = MagicMock(spec=DocumentStore)
        store.search.side_effect = lambda query: time.sleep(1)
        assert CandidateRetriever(store, timeout=0.05).retrieve(["Camry"]) == []

    def test_store_receives_search_query(self) -> None:
        store = MagicMock(spec=DocumentStore)
        store.search.return_value = []
        CandidateRetriever(store).retrieve(["Camry", "2014"])
        query = store.search.call_args.args[0]
        assert isinstance(query, SearchQuery)
        assert query.keywords == ["Camry", "2014"]

    def test_empty_keywords_skip_store(self) -> None:
        store = MagicMock(spec=DocumentStore)
        assert CandidateRetriever(store).retrieve(["  "]) == []
        store.search.assert_not_called()

    def test_kind_post_filter(self, camry_compat: Document) -> None:
        """结构化文档只在 FAQ 中命中时被复核过滤。"""
        store = MagicMock(spec=DocumentStore)
        store.search.return_value = [camry_compat]
        assert CandidateRetriever(store).retrieve(["SWC module"]) == []
        assert CandidateRetriever(store).retrieve(["factory radio"]) == [camry_compat]

    def test_identity_preserved(self, memory_store: InMemoryDocumentStore, bluetooth_troubleshooting: Document) -> None:
        results = CandidateRetriever(memory_store).retrieve(["bluetooth"])
        assert bluetooth_troubleshooting in results
        assert any(d is bluetooth_troubleshooting for d in results)
