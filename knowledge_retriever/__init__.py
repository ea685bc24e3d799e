"""候选检索模块 — 文档模型、文档库协议、CandidateRetriever。"""

from knowledge_retriever.models import FieldMatch, SearchQuery
from knowledge_retriever.retriever import CandidateRetriever, build_search_query
from knowledge_retriever.schema import Document
from knowledge_retriever.store import DocumentStore, InMemoryDocumentStore

__all__ = [
    "CandidateRetriever",
    "Document",
    "DocumentStore",
    "FieldMatch",
    "InMemoryDocumentStore",
    "SearchQuery",
    "build_search_query",
]
