"""Indexing coordinator — embed and upsert a Document and all its sections.

Protocol for one :meth:`IndexingCoordinator.aindex` call:

1. make sure the destination collection exists (an existing one is left
   untouched);
2. compose, embed and identify the whole document — the point is held,
   not written;
3. fan out one task per section; each composes, embeds, identifies and
   immediately upserts its own point;
4. join all tasks; any failure raises a single
   :class:`~doc_indexer.exceptions.AggregateIndexingError` and the held
   document point is discarded;
5. otherwise upsert the document point.

Nothing is retried and no deadline is imposed here; timeouts belong to
the embedding and store clients.

Usage::

    coordinator = IndexingCoordinator(ChromaVectorStore(), get_embedding_function())
    result = coordinator.index(document)
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any

from langchain_core.embeddings import Embeddings

from doc_indexer.config import settings
from doc_indexer.exceptions import AggregateIndexingError, EmbeddingError, StoreError
from doc_indexer.indexing.base import VectorStoreBase
from doc_indexer.indexing.composer import compose_document_text, compose_section_text
from doc_indexer.indexing.identity import document_id, section_id
from doc_indexer.models import Document, IndexPoint, IndexResult, Section

logger = logging.getLogger(__name__)


def build_document_payload(document: Document) -> dict[str, Any]:
    return {
        "content": document.content_markdown,
        "source_title": document.source_title,
        "source_url": document.source_url,
    }


def build_section_payload(section: Section) -> dict[str, Any]:
    return {
        "content": section.content_markdown,
        "source_title": f"{section.source_title}/{section.section_title}",
        "source_url": section.url,
        "source_order": section.order,
    }


class IndexingCoordinator:
    """Fan-out / fan-in indexing of a document and its sections.

    Parameters
    ----------
    store:
        Vector-store backend, shared by all section tasks.
    embeddings:
        LangChain embedding function, shared by all section tasks.
    collection_name:
        Destination collection.
    dimension:
        Fixed vector width of the collection; vectors of any other width
        are rejected before they reach the store.
    distance:
        Distance metric used when the collection has to be created.
    """

    def __init__(
        self,
        store: VectorStoreBase,
        embeddings: Embeddings,
        *,
        collection_name: str = settings.chroma_collection,
        dimension: int = settings.embedding_dimension,
        distance: str = settings.distance_metric,
    ) -> None:
        self._store = store
        self._embeddings = embeddings
        self.collection_name = collection_name
        self.dimension = dimension
        self.distance = distance

    # -- public API -----------------------------------------------------------

    def index(self, document: Document) -> IndexResult:
        """Blocking wrapper around :meth:`aindex`."""
        return asyncio.run(self.aindex(document))

    async def aindex(self, document: Document) -> IndexResult:
        """Index *document* and all of its sections.

        Raises
        ------
        AggregateIndexingError
            One or more sections failed; the document point was not written.
        EmbeddingError, StoreError
            The collection check, the document embedding or the final
            document upsert failed.
        """
        await asyncio.to_thread(self.ensure_collection)

        doc_vector = await self._embed(
            compose_document_text(document), f"document {document.source_url}"
        )
        doc_point = IndexPoint(
            id=document_id(document.source_url),
            vector=doc_vector,
            payload=build_document_payload(document),
        )

        outcomes = await asyncio.gather(
            *(self._index_section(section) for section in document.sections),
            return_exceptions=True,
        )

        errors: list[Exception] = []
        for section, outcome in zip(document.sections, outcomes):
            if isinstance(outcome, Exception):
                logger.error(
                    "Section %d (%s) of %s failed: %s",
                    section.order, section.section_anchor, document.source_url, outcome,
                )
                errors.append(outcome)
            elif isinstance(outcome, BaseException):
                raise outcome
        if errors:
            raise AggregateIndexingError(errors)

        await self._upsert(doc_point, f"document {document.source_url}")
        logger.info(
            "Indexed %s with %d sections into %r",
            document.source_url, len(document.sections), self.collection_name,
        )
        return IndexResult(
            document_id=doc_point.id,
            section_ids=list(outcomes),
        )

    def ensure_collection(self) -> None:
        """Create the destination collection unless it already exists."""
        try:
            if self._store.collection_exists(self.collection_name):
                return
            self._store.create_collection(
                self.collection_name, dimension=self.dimension, distance=self.distance
            )
        except StoreError:
            raise
        except Exception as exc:
            raise StoreError(
                f"collection {self.collection_name!r}: failed to ensure collection: {exc}"
            ) from exc

    def health_check(self) -> bool:
        """Return ``True`` when the vector store is reachable."""
        return self._store.health_check()

    # -- internals ------------------------------------------------------------

    async def _index_section(self, section: Section) -> str:
        label = f"section {section.order} ({section.url})"
        vector = await self._embed(compose_section_text(section), label)
        point = IndexPoint(
            id=section_id(section.source_url, section.section_anchor),
            vector=vector,
            payload=build_section_payload(section),
        )
        await self._upsert(point, label)
        logger.debug("Upserted %s as %s", label, point.id)
        return point.id

    async def _embed(self, text: str, label: str) -> list[float]:
        try:
            vector = await self._embeddings.aembed_query(text)
        except Exception as exc:
            raise EmbeddingError(f"{label}: failed to embed content: {exc}") from exc
        if len(vector) != self.dimension:
            raise EmbeddingError(
                f"{label}: embedding has {len(vector)} dimensions, "
                f"collection {self.collection_name!r} expects {self.dimension}"
            )
        return list(vector)

    async def _upsert(self, point: IndexPoint, label: str) -> None:
        try:
            await asyncio.to_thread(self._store.upsert, self.collection_name, [point])
        except StoreError as exc:
            raise StoreError(f"{label}: {exc}") from exc
        except Exception as exc:
            raise StoreError(f"{label}: failed to upsert point: {exc}") from exc
