from typing import Optional


class VectorStoreError(Exception):
    """Base class for errors raised by the in-memory vector store."""


class DimensionMismatch(VectorStoreError, ValueError):
    """
    A vector's length disagrees with the one it is compared or stored against.
    The failing call leaves the store unchanged.
    """

    def __init__(self, expected: int, actual: int, message: Optional[str] = None) -> None:
        self.expected = expected
        self.actual = actual
        super().__init__(message or f"Vector dimension mismatch: expected {expected}, got {actual}")


class InvalidVector(VectorStoreError, ValueError):
    """A vector contains NaN or infinite components."""


class NotFound(VectorStoreError, LookupError):
    def __init__(self, doc_id: object) -> None:
        self.doc_id = doc_id
        super().__init__(f"No document with id {doc_id!r}")


class ProviderError(Exception):
    """
    Raised by an embedding provider (auth failure, rate limit, network error,
    malformed response). Never a store invariant violation.
    """

    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        self.status_code = status_code
        super().__init__(message)


class ConfigError(RuntimeError):
    """Fatal program configuration error, e.g. a missing credential."""
