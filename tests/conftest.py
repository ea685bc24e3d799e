"""pytest 共享 fixture — 样本文档、内存文档库、Mock 补全服务。"""

from __future__ import annotations

from unittest.mock import MagicMock

import pytest

from assistant.completion import Completion, CompletionService, Usage
from knowledge_retriever.schema import Document
from knowledge_retriever.store import InMemoryDocumentStore


# ── 样本文档 fixture ──────────────────────────────────────────


@pytest.fixture
def highlander_video() -> Document:
    """汉兰达 2008-2013 安装视频。"""
    return Document.model_validate(
        {
            "_id": "v-highlander",
            "documentType": "video",
            "title": "Toyota Highlander 2008-2013 Installation Video",
            "category": "Installation",
            "description": "Step by step head unit installation for Highlander 2008-2013.",
            "content": "Remove the dash trim, unplug the factory radio, connect the harness.",
            "videoUrl": "https://example.com/highlander",
            "platform": "youtube",
            "duration": "12:30",
            "videos": [
                {"title": "Highlander install part 1", "description": "Dash removal"},
            ],
        }
    )


@pytest.fixture
def highlander_guide() -> Document:
    """汉兰达 2008-2013 图文安装指南。"""
    return Document.model_validate(
        {
            "_id": "g-highlander-guide",
            "documentType": "general",
            "title": "Highlander 2008-2013 Installation Guide",
            "category": "Installation",
            "summary": "Installation guide for the Highlander 2008-2013 head unit.",
            "sections": [
                {"id": "s1", "heading": "Remove the dash trim", "content": "Use a plastic pry tool."},
                {"id": "s2", "heading": "Connect the harness", "content": "Plug the Highlander harness into the unit."},
                {"id": "s3", "heading": "Mount the unit", "content": "Fix the brackets with four screws."},
            ],
            "images": ["a.jpg", "b.jpg"],
        }
    )


@pytest.fixture
def highlander_2014() -> Document:
    """汉兰达 2014-2019 接线指南（年份不同）。"""
    return Document.model_validate(
        {
            "_id": "g-highlander-2014",
            "documentType": "general",
            "title": "Toyota Highlander 2014-2019 Wiring Guide",
            "category": "Installation",
            "summary": "Wiring guide for Highlander 2014-2019 models.",
            "sections": [
                {"id": "s1", "heading": "Power wires", "content": "Red is ACC, yellow is battery."},
            ],
        }
    )


@pytest.fixture
def camry_compat() -> Document:
    """凯美瑞兼容性确认结构化文章。"""
    return Document.model_validate(
        {
            "_id": "s-camry",
            "documentType": "structured",
            "title": "Camry 2012-2017 Compatibility Check",
            "category": "Compatibility",
            "summary": "Confirm the factory radio configuration before ordering.",
            "compatibleModels": [
                {"id": "m1", "name": "Camry 2012-2014", "description": "Non-JBL audio"},
            ],
            "incompatibleModels": [
                {"id": "m2", "name": "Camry Hybrid JBL", "description": "Amplifier not supported"},
            ],
            "faqs": [
                {"id": "f1", "title": "Will steering wheel controls work?", "description": "Yes, with the SWC module."},
            ],
        }
    )


@pytest.fixture
def bluetooth_troubleshooting() -> Document:
    """蓝牙无声故障排除文档。"""
    return Document.model_validate(
        {
            "_id": "g-bluetooth",
            "documentType": "general",
            "title": "Bluetooth No Sound Troubleshooting",
            "category": "Troubleshooting",
            "summary": "Fix bluetooth audio when calls or music have no sound.",
            "sections": [
                {"id": "b1", "heading": "Check bluetooth pairing", "content": "Remove the phone and pair again."},
                {"id": "b2", "heading": "Audio output settings", "content": "Select bluetooth as the audio source."},
                {"id": "b3", "heading": "Factory reset", "content": "Reset the unit from the settings menu."},
            ],
        }
    )


@pytest.fixture
def universal_install_video() -> Document:
    """通用安装视频（不含任何问题关键词）。"""
    return Document.model_validate(
        {
            "_id": "v-universal",
            "documentType": "video",
            "title": "Universal Installation Video",
            "category": "Installation",
            "description": "General head unit installation walkthrough.",
            "duration": "08:00",
        }
    )


@pytest.fixture
def draft_document() -> Document:
    """未发布的草稿。"""
    return Document.model_validate(
        {
            "_id": "g-draft",
            "documentType": "general",
            "title": "Highlander 2008-2013 Draft Notes",
            "category": "Installation",
            "summary": "Unpublished notes.",
            "status": "draft",
        }
    )


@pytest.fixture
def sample_documents(
    highlander_video: Document,
    highlander_guide: Document,
    highlander_2014: Document,
    camry_compat: Document,
    bluetooth_troubleshooting: Document,
    universal_install_video: Document,
    draft_document: Document,
) -> list[Document]:
    return [
        highlander_video,
        highlander_guide,
        highlander_2014,
        camry_compat,
        bluetooth_troubleshooting,
        universal_install_video,
        draft_document,
    ]


# ── 协作对象 fixture ──────────────────────────────────────────


@pytest.fixture
def memory_store(sample_documents: list[Document]) -> InMemoryDocumentStore:
    """装载全部样本文档的内存文档库。"""
    return InMemoryDocumentStore(sample_documents)


@pytest.fixture
def mock_completion() -> MagicMock:
    """Mock 补全服务，返回带 Markdown 标记的固定回答。"""
    mock = MagicMock(spec=CompletionService)
    mock.complete.return_value = Completion(
        text="**Step 1:** Remove the trim.\n\n\n\n## Done",
        usage=Usage(prompt_tokens=120, completion_tokens=30, total_tokens=150),
    )
    return mock
