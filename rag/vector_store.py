import threading
from datetime import datetime, timezone
from math import isfinite
from typing import Iterable, Iterator, List, Optional, Sequence, Tuple

from rag.errors import DimensionMismatch, InvalidVector, NotFound
from rag.ranker import top_k
from rag.similarity import cosine_similarity
from rag.types import BatchResult, Document, DocumentMetadata, ScoredResult


class VectorStore:
    """
    Small exact in-memory vector store backed by cosine similarity.

    Append-only: ids are 0-based and follow insertion order. The first
    successful add fixes the dimension; every later vector must match it.
    Writers are serialized by a lock. Readers work on a snapshot of the
    document list and never see a half-built document.
    """

    def __init__(self) -> None:
        self._documents: List[Document] = []
        self._write_lock = threading.Lock()

    # --- Mutation ---
    def add(
        self,
        text: str,
        vector: Sequence[float],
        metadata: Optional[DocumentMetadata] = None,
    ) -> int:
        with self._write_lock:
            return self._add_locked(text, vector, metadata)

    def add_batch(self, entries: Iterable[tuple]) -> BatchResult:
        """
        Add (text, vector) or (text, vector, metadata) entries in order.

        Stops at the first entry that fails validation. Entries before it stay
        committed; the returned BatchResult carries their ids plus the failing
        index and error.
        """
        ids: List[int] = []
        with self._write_lock:
            for position, entry in enumerate(entries):
                try:
                    text, vector, *rest = entry
                    if len(rest) > 1:
                        raise ValueError(f"Batch entry {position} has {len(entry)} fields, expected 2 or 3")
                    metadata = rest[0] if rest else None
                    ids.append(self._add_locked(text, vector, metadata))
                except (TypeError, ValueError) as exc:
                    return BatchResult(ids=tuple(ids), failed_index=position, error=exc)
        return BatchResult(ids=tuple(ids))

    # --- Reads ---
    def get(self, doc_id: int) -> Document:
        documents = self._snapshot()
        if isinstance(doc_id, bool) or not isinstance(doc_id, int):
            raise NotFound(doc_id)
        if doc_id < 0 or doc_id >= len(documents):
            raise NotFound(doc_id)
        return documents[doc_id]

    def get_vector(self, doc_id: int) -> Tuple[float, ...]:
        return self.get(doc_id).vector

    def search(self, query_vector: Sequence[float], k: int = 3) -> List[ScoredResult]:
        documents = self._snapshot()
        if not documents:
            return []
        dimension = documents[0].dimension
        if len(query_vector) != dimension:
            raise DimensionMismatch(dimension, len(query_vector))
        query = self._coerce_vector(query_vector)
        scored = [
            ScoredResult(document=doc, score=cosine_similarity(query, doc.vector))
            for doc in documents
        ]
        return top_k(scored, k)

    def size(self) -> int:
        return len(self._documents)

    @property
    def dimension(self) -> Optional[int]:
        documents = self._snapshot()
        return documents[0].dimension if documents else None

    def __len__(self) -> int:
        return self.size()

    def __iter__(self) -> Iterator[Document]:
        return iter(self._snapshot())

    # --- Internal helpers ---
    def _snapshot(self) -> Tuple[Document, ...]:
        return tuple(self._documents)

    def _add_locked(
        self,
        text: str,
        vector: Sequence[float],
        metadata: Optional[DocumentMetadata],
    ) -> int:
        if not isinstance(text, str):
            raise TypeError(f"text must be a string, got {type(text).__name__}")
        if metadata is not None and not isinstance(metadata, DocumentMetadata):
            raise TypeError(f"metadata must be DocumentMetadata, got {type(metadata).__name__}")
        values = self._coerce_vector(vector)
        if self._documents:
            expected = self._documents[0].dimension
            if len(values) != expected:
                raise DimensionMismatch(expected, len(values))

        doc_id = len(self._documents)
        document = Document(
            id=doc_id,
            text=text,
            metadata=self._complete_metadata(metadata, doc_id),
            vector=values,
        )
        self._documents.append(document)
        return doc_id

    @staticmethod
    def _coerce_vector(vector: Sequence[float]) -> Tuple[float, ...]:
        try:
            values = tuple(float(x) for x in vector)
        except (TypeError, ValueError) as exc:
            raise InvalidVector(f"Vector must be a sequence of numbers: {exc}") from exc
        if not values:
            raise DimensionMismatch(1, 0, "Vector must not be empty")
        if not all(isfinite(x) for x in values):
            raise InvalidVector("Vector contains NaN or infinite values")
        return values

    @staticmethod
    def _complete_metadata(metadata: Optional[DocumentMetadata], doc_id: int) -> DocumentMetadata:
        metadata = metadata or DocumentMetadata()
        return DocumentMetadata(
            created_at=metadata.created_at or datetime.now(timezone.utc),
            index=doc_id if metadata.index is None else metadata.index,
            source=metadata.source,
        )
