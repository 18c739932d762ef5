"""
In-memory vector similarity store: cosine similarity, top-k ranking and the
embedding providers that feed it.
"""

from rag.errors import (
    ConfigError,
    DimensionMismatch,
    InvalidVector,
    NotFound,
    ProviderError,
    VectorStoreError,
)
from rag.ranker import top_k
from rag.similarity import cosine_similarity
from rag.types import BatchResult, Document, DocumentMetadata, ScoredResult
from rag.vector_store import VectorStore

__all__ = [
    "BatchResult",
    "ConfigError",
    "DimensionMismatch",
    "Document",
    "DocumentMetadata",
    "InvalidVector",
    "NotFound",
    "ProviderError",
    "ScoredResult",
    "VectorStore",
    "VectorStoreError",
    "cosine_similarity",
    "top_k",
]
