from abc import ABC, abstractmethod
from math import isfinite
from typing import Any, Dict, List, Optional

import requests

from rag.errors import ConfigError, ProviderError


class EmbeddingProvider(ABC):
    """
    Turns text into a fixed-length vector. Every call used to populate one
    VectorStore must come from the same provider/model so lengths agree.
    """

    model: str

    @abstractmethod
    def embed(self, text: str) -> List[float]:
        """Return the embedding of text; raise ProviderError on failure."""


class _HTTPEmbeddingProvider(EmbeddingProvider):
    def __init__(self, model: str, base_url: str, timeout: float = 60) -> None:
        if not model:
            raise ConfigError("Embedding model must be set")
        if not base_url:
            raise ConfigError("Embedding base_url must be set")
        self.model = model
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout

    def _post(self, endpoint: str, headers: Dict[str, str], payload: Dict[str, Any]) -> Any:
        try:
            response = requests.post(endpoint, headers=headers, json=payload, timeout=self.timeout)
        except requests.Timeout as exc:
            raise ProviderError(f"Embedding request timed out after {self.timeout}s") from exc
        except requests.RequestException as exc:
            raise ProviderError(f"Embedding request failed: {exc}") from exc

        status = response.status_code
        if status in (401, 403):
            raise ProviderError("Embedding service rejected the credential (authentication failed)", status)
        if status == 429:
            raise ProviderError("Embedding service rate limit exceeded", status)
        if status >= 400:
            raise ProviderError(f"Embedding service returned HTTP {status}: {response.text[:200]}", status)
        try:
            return response.json()
        except ValueError as exc:
            raise ProviderError("Embedding service returned invalid JSON", status) from exc

    @staticmethod
    def _validate(embedding: Any) -> List[float]:
        if not isinstance(embedding, list) or not embedding:
            raise ProviderError("Embedding service returned an empty or malformed vector")
        try:
            values = [float(x) for x in embedding]
        except (TypeError, ValueError) as exc:
            raise ProviderError("Embedding service returned non-numeric values") from exc
        if not all(isfinite(x) for x in values):
            raise ProviderError("Embedding service returned NaN or infinite values")
        return values


class OpenAIEmbeddingProvider(_HTTPEmbeddingProvider):
    """OpenAI 兼容 API（OpenAI 官方、GitHub Models 等）"""

    def __init__(self, model: str, base_url: str, api_key: str, timeout: float = 60) -> None:
        super().__init__(model, base_url, timeout)
        if not api_key:
            raise ConfigError("An API key is required for the OpenAI-compatible embedding backend")
        self.api_key = api_key
        self._endpoint = f"{self.base_url}/embeddings"

    def embed(self, text: str) -> List[float]:
        headers = {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {self.api_key}",
        }
        data = self._post(
            self._endpoint,
            headers,
            {
                "model": self.model,
                "input": text,
                "encoding_format": "float",
            },
        )
        try:
            embedding = data["data"][0]["embedding"]
        except (KeyError, IndexError, TypeError) as exc:
            raise ProviderError("Embedding response is missing data[0].embedding") from exc
        return self._validate(embedding)


class OllamaEmbeddingProvider(_HTTPEmbeddingProvider):
    """Ollama 原生 API"""

    def __init__(self, model: str, base_url: str, timeout: float = 60) -> None:
        super().__init__(model, base_url, timeout)
        self._endpoint = f"{self.base_url}/api/embeddings"

    def embed(self, text: str) -> List[float]:
        data = self._post(
            self._endpoint,
            {"Content-Type": "application/json"},
            {
                "model": self.model,
                "prompt": text,
            },
        )
        try:
            embedding = data["embedding"]
        except (KeyError, TypeError) as exc:
            raise ProviderError("Embedding response is missing 'embedding'") from exc
        return self._validate(embedding)


def create_embedding_provider(
    backend: str,
    model: str,
    base_url: str,
    api_key: Optional[str] = None,
    timeout: float = 60,
) -> EmbeddingProvider:
    backend = (backend or "openai").lower()
    if backend == "ollama":
        return OllamaEmbeddingProvider(model=model, base_url=base_url, timeout=timeout)
    if backend == "openai":
        return OpenAIEmbeddingProvider(model=model, base_url=base_url, api_key=api_key or "", timeout=timeout)
    raise ConfigError(f"Unknown embedding backend: {backend!r} (expected 'openai' or 'ollama')")
