from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional, Tuple


@dataclass(frozen=True)
class DocumentMetadata:
    """
    Fixed metadata record attached to every stored document.
    All fields are optional; the store fills created_at and index on insert.
    """
    created_at: Optional[datetime] = None
    index: Optional[int] = None
    source: Optional[str] = None

    def __post_init__(self) -> None:
        if self.created_at is not None and not isinstance(self.created_at, datetime):
            raise ValueError(f"created_at must be a datetime, got {type(self.created_at).__name__}")
        if self.index is not None:
            if isinstance(self.index, bool) or not isinstance(self.index, int):
                raise ValueError(f"index must be an int, got {type(self.index).__name__}")
            if self.index < 0:
                raise ValueError(f"index must be non-negative, got {self.index}")
        if self.source is not None and not isinstance(self.source, str):
            raise ValueError(f"source must be a string, got {type(self.source).__name__}")


@dataclass(frozen=True)
class Document:
    id: int
    text: str
    metadata: DocumentMetadata
    vector: Tuple[float, ...] = field(repr=False)

    @property
    def dimension(self) -> int:
        return len(self.vector)


@dataclass(frozen=True)
class ScoredResult:
    """A document paired with its similarity to a query. Only produced by search."""
    document: Document
    score: float


@dataclass(frozen=True)
class BatchResult:
    """
    Outcome of VectorStore.add_batch.
    ids holds the committed prefix; failed_index/error describe the entry that
    stopped the batch, if any.
    """
    ids: Tuple[int, ...]
    failed_index: Optional[int] = None
    error: Optional[Exception] = None

    @property
    def ok(self) -> bool:
        return self.failed_index is None

    @property
    def committed(self) -> int:
        return len(self.ids)
