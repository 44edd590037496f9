"""Chroma implementation of the vector-store abstraction."""

from __future__ import annotations

import logging
from typing import Any, Sequence

import chromadb

from doc_indexer.config import settings
from doc_indexer.exceptions import StoreError
from doc_indexer.indexing.base import VectorStoreBase
from doc_indexer.models import IndexPoint

logger = logging.getLogger(__name__)


def _to_chroma_metadata(payload: dict[str, Any]) -> dict[str, Any]:
    """Everything but ``content``; Chroma metadata values must be flat scalars."""
    meta = {}
    for key, value in payload.items():
        if key == "content":
            continue
        if isinstance(value, (str, int, float, bool)):
            meta[key] = value
    return meta


class ChromaVectorStore(VectorStoreBase):
    """Chroma-backed vector store.

    The point payload's ``content`` is stored as the Chroma document text;
    the other payload keys become metadata.

    Parameters
    ----------
    host:
        Chroma server hostname.
    port:
        Chroma server port.
    client:
        Pre-built Chroma client; overrides *host* / *port*.
    """

    def __init__(
        self,
        *,
        host: str = settings.chroma_host,
        port: int = settings.chroma_port,
        client: Any = None,
    ) -> None:
        self._client = client if client is not None else chromadb.HttpClient(host=host, port=port)

    # -- VectorStoreBase overrides --------------------------------------------

    def collection_exists(self, name: str) -> bool:
        try:
            collections = self._client.list_collections()
        except Exception as exc:
            raise StoreError(f"failed to list collections: {exc}") from exc
        # chromadb >= 0.6 returns names, older versions return Collection objects.
        names = {c if isinstance(c, str) else c.name for c in collections}
        return name in names

    def create_collection(self, name: str, *, dimension: int, distance: str) -> None:
        try:
            self._client.create_collection(
                name=name,
                metadata={"hnsw:space": distance, "dimension": dimension},
            )
        except Exception as exc:
            raise StoreError(f"failed to create collection {name!r}: {exc}") from exc
        logger.info("Created collection %r (dim=%d, distance=%s)", name, dimension, distance)

    def upsert(self, name: str, points: Sequence[IndexPoint]) -> None:
        if not points:
            return
        try:
            collection = self._client.get_collection(name)
            collection.upsert(
                ids=[p.id for p in points],
                embeddings=[p.vector for p in points],
                documents=[p.payload.get("content", "") for p in points],
                metadatas=[_to_chroma_metadata(p.payload) for p in points],
            )
        except Exception as exc:
            raise StoreError(f"failed to upsert {len(points)} point(s) into {name!r}: {exc}") from exc

    def health_check(self) -> bool:
        try:
            self._client.heartbeat()
            return True
        except Exception:
            logger.warning("Chroma health-check failed", exc_info=True)
            return False
