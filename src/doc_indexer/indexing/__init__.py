"""
Indexing — compose, embed, identify and upsert documents and sections.

Public surface
--------------
- :class:`IndexingCoordinator` — fan-out / fan-in indexing of one Document.
- :class:`VectorStoreBase` — abstract backend (subclass for Qdrant, etc.).
- :class:`ChromaVectorStore` — default Chroma backend.
- :func:`compose_document_text`, :func:`compose_section_text` — embedding text.
- :func:`document_id`, :func:`section_id` — deterministic point IDs.
- :func:`get_embedding_function` — configured embedding provider.
"""

from doc_indexer.indexing.base import VectorStoreBase
from doc_indexer.indexing.composer import compose_document_text, compose_section_text
from doc_indexer.indexing.coordinator import IndexingCoordinator
from doc_indexer.indexing.identity import document_id, section_id

__all__ = [
    "ChromaVectorStore",
    "IndexingCoordinator",
    "VectorStoreBase",
    "compose_document_text",
    "compose_section_text",
    "document_id",
    "get_embedding_function",
    "section_id",
]


def __getattr__(name: str):  # noqa: ANN001
    """Lazy-import heavy backends to avoid pulling in chromadb / langchain at import time."""
    if name == "ChromaVectorStore":
        from doc_indexer.indexing.chroma_store import ChromaVectorStore

        return ChromaVectorStore
    if name == "get_embedding_function":
        from doc_indexer.indexing.embedder import get_embedding_function

        return get_embedding_function
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
