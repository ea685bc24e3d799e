"""命令行入口与公共工具测试。

覆盖 utils/timeout.py、utils/logger_system.py、main.py。
命令行测试使用临时语料文件，不发起网络请求。
"""

from __future__ import annotations

import json
import logging
import time
from pathlib import Path

import pytest

import config
import main
from assistant.selection import SelectionList
from knowledge_retriever.schema import Document
from utils.logger_system import FatalInputError, log_json, log_msg, logger, set_log_level
from utils.timeout import CallTimeoutError, run_with_timeout


# ═══════════════════════════════════════════════════════════════
# utils 测试
# ═══════════════════════════════════════════════════════════════


class TestRunWithTimeout:
    """测试限时调用。"""

    def test_returns_value(self) -> None:
        assert run_with_timeout(lambda a, b=0: a + b, 1.0, 2, b=3) == 5

    def test_timeout(self) -> None:
        with pytest.raises(CallTimeoutError) as info:
            run_with_timeout(time.sleep, 0.05, 1, label="document-store")
        assert info.value.label == "document-store"
        assert isinstance(info.value, TimeoutError)

    def test_exception_propagates(self) -> None:
        def boom() -> None:
            raise ValueError("bad")

        with pytest.raises(ValueError, match="bad"):
            run_with_timeout(boom, 1.0)


class TestLogger:
    """测试日志工具。"""

    def test_error_raises(self) -> None:
        with pytest.raises(FatalInputError, match="missing"):
            log_msg("ERROR", "missing corpus")

    def test_warning_does_not_raise(self) -> None:
        log_msg("WARNING", "degraded")

    def test_set_log_level(self) -> None:
        set_log_level("DEBUG")
        try:
            assert logger.level == logging.DEBUG
        finally:
            set_log_level("INFO")

    def test_log_json_appends_lines(self, tmp_path: Path) -> None:
        path = tmp_path / "logs" / "query_log.json"
        log_json({"query": "蓝牙没有声音"}, str(path))
        log_json({"query": "Camry"}, str(path))
        lines = path.read_text(encoding="utf-8").splitlines()
        assert len(lines) == 2
        first = json.loads(lines[0])
        assert first["query"] == "蓝牙没有声音"
        assert "timestamp" in first


# ═══════════════════════════════════════════════════════════════
# main.py 测试
# ═══════════════════════════════════════════════════════════════


@pytest.fixture
def corpus(tmp_path: Path, sample_documents: list[Document]) -> Path:
    path = tmp_path / "kb.jsonl"
    path.write_text(
        "\n".join(json.dumps(doc.to_dict(), ensure_ascii=False) for doc in sample_documents),
        encoding="utf-8",
    )
    return path


@pytest.fixture
def log_file(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    path = tmp_path / "logs" / "query_log.json"
    monkeypatch.setitem(config.PATHS, "log_file", str(path))
    return path


class TestMain:
    """测试命令行流程。"""

    def test_search_only(self, corpus: Path, log_file: Path, capsys: pytest.CaptureFixture) -> None:
        main.main(
            [
                "--corpus", str(corpus),
                "--api_key", "",
                "--query", "Highlander 2008-2013 installation video",
                "--search-only",
            ]
        )
        output = json.loads(capsys.readouterr().out)
        assert [c["id"] for c in output["candidates"]] == ["v-highlander", "g-highlander-guide"]
        assert output["language"] == "en"

        record = json.loads(log_file.read_text(encoding="utf-8").splitlines()[-1])
        assert record["mode"] == "search"

    def test_missing_corpus(self, tmp_path: Path) -> None:
        with pytest.raises(FatalInputError):
            main.main(["--corpus", str(tmp_path / "none.jsonl"), "--query", "Camry"])

    def test_invalid_selection_reprints_list(
        self,
        corpus: Path,
        log_file: Path,
        tmp_path: Path,
        highlander_video: Document,
        highlander_guide: Document,
        capsys: pytest.CaptureFixture,
    ) -> None:
        selection_file = tmp_path / "pending.json"
        selection = SelectionList.from_documents(
            [highlander_video, highlander_guide], language="en", query="Highlander install"
        )
        selection_file.write_text(json.dumps(selection.to_dict()), encoding="utf-8")

        main.main(
            [
                "--corpus", str(corpus),
                "--api_key", "test-key",
                "--select", "7",
                "--selection", str(selection_file),
            ]
        )

        out = capsys.readouterr().out
        assert out.startswith("Invalid selection. Please choose a number between 1 and 2.")
        saved = SelectionList.from_dict(json.loads(selection_file.read_text(encoding="utf-8")))
        assert saved.documents == selection.documents

        record = json.loads(log_file.read_text(encoding="utf-8").splitlines()[-1])
        assert record["mode"] == "select"
        assert record["requires_selection"] is True
