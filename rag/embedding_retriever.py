from typing import List, Optional, Sequence

from rag.embeddings import EmbeddingProvider
from rag.types import BatchResult, DocumentMetadata, ScoredResult
from rag.vector_store import VectorStore
from utils.tracer import RunTracer


class EmbeddingRetriever:
    """
    Ingestion and query flow on top of a VectorStore.

    The store and the provider are passed in; the retriever owns neither.
    ProviderError from the provider propagates unchanged, and a vector is only
    committed once the provider call has returned.
    """

    def __init__(
        self,
        provider: EmbeddingProvider,
        vector_store: VectorStore,
        tracer: Optional[RunTracer] = None,
    ) -> None:
        self.provider = provider
        self.vector_store = vector_store
        self.tracer = tracer

    def embed_document(self, document: str, metadata: Optional[DocumentMetadata] = None) -> int:
        embedding = self.provider.embed(document)
        doc_id = self.vector_store.add(document, embedding, metadata)
        self._trace({"type": "embed_document", "id": doc_id, "dimension": len(embedding)})
        return doc_id

    def embed_documents(self, documents: Sequence[str], source: Optional[str] = None) -> BatchResult:
        """
        Embed every document, then add them as one batch.
        A provider failure raises before anything is added to the store.
        """
        embeddings = [self.provider.embed(document) for document in documents]
        result = self.vector_store.add_batch(
            (document, embedding, DocumentMetadata(source=source))
            for document, embedding in zip(documents, embeddings)
        )
        self._trace(
            {
                "type": "embed_batch",
                "requested": len(documents),
                "committed": result.committed,
                "failed_index": result.failed_index,
            }
        )
        return result

    def embed_query(self, query: str) -> List[float]:
        return self.provider.embed(query)

    def retrieve(self, query: str, top_k: int = 3) -> List[ScoredResult]:
        # 如果还没有文档被添加，返回空
        if self.vector_store.size() == 0:
            return []
        query_embedding = self.embed_query(query)
        results = self.vector_store.search(query_embedding, top_k)
        self._trace(
            {
                "type": "retrieve",
                "query": query,
                "top_k": top_k,
                "results": [{"id": r.document.id, "score": r.score} for r in results],
            }
        )
        return results

    def _trace(self, event: dict) -> None:
        if self.tracer:
            self.tracer.log_event(event)
