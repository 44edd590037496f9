"""FastAPI application exposing the extractor and indexer as a REST API."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import Depends, FastAPI, HTTPException, Request, Response
from pydantic import BaseModel

from doc_indexer import __version__
from doc_indexer.config import settings
from doc_indexer.exceptions import (
    AggregateIndexingError,
    EmbeddingError,
    ExtractionError,
    FetchError,
    ParseError,
    StoreError,
)
from doc_indexer.extraction.fetcher import fetch_page
from doc_indexer.extraction.segmenter import HtmlSegmenter
from doc_indexer.indexing.coordinator import IndexingCoordinator
from doc_indexer.models import Document

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Build the shared clients once for the lifetime of the process."""
    from doc_indexer.indexing.chroma_store import ChromaVectorStore
    from doc_indexer.indexing.embedder import get_embedding_function

    app.state.segmenter = HtmlSegmenter()
    app.state.coordinator = IndexingCoordinator(ChromaVectorStore(), get_embedding_function())
    yield


app = FastAPI(
    title="Doc Indexer API",
    version=__version__,
    description="Segment documentation pages and index them into a vector store.",
    lifespan=lifespan,
)


# ── Request / Response schemas ────────────────────────────────────────
class ExtractRequest(BaseModel):
    """Page to fetch and segment."""

    url: str


class IndexResponse(BaseModel):
    """Outcome of an indexing call."""

    success: bool
    document_id: str
    section_ids: list[str] = []


# ── Dependencies ──────────────────────────────────────────────────────
def get_segmenter(request: Request) -> HtmlSegmenter:
    return request.app.state.segmenter


def get_coordinator(request: Request) -> IndexingCoordinator:
    return request.app.state.coordinator


# ── Routes ────────────────────────────────────────────────────────────
@app.get("/health")
def health(
    response: Response,
    coordinator: IndexingCoordinator = Depends(get_coordinator),
) -> dict[str, str]:
    """Health probe; reports 503 while the vector store is unreachable."""
    if not coordinator.health_check():
        response.status_code = 503
        return {"status": "unavailable"}
    return {"status": "ok"}


@app.post("/extract", response_model=Document)
def extract(
    request: ExtractRequest,
    segmenter: HtmlSegmenter = Depends(get_segmenter),
) -> Document:
    """Fetch a page and return its segmented Document."""
    try:
        html = fetch_page(request.url)
    except FetchError as exc:
        raise HTTPException(status_code=502, detail=str(exc)) from exc

    try:
        return segmenter.segment(html, request.url)
    except (ParseError, ExtractionError) as exc:
        logger.warning("Extraction failed for %s: %s", request.url, exc)
        raise HTTPException(status_code=422, detail=str(exc)) from exc


@app.post("/index", response_model=IndexResponse)
async def index(
    document: Document,
    coordinator: IndexingCoordinator = Depends(get_coordinator),
) -> IndexResponse:
    """Embed and upsert a Document and all of its sections."""
    try:
        result = await coordinator.aindex(document)
    except (AggregateIndexingError, EmbeddingError, StoreError) as exc:
        logger.error("Indexing failed for %s: %s", document.source_url, exc)
        raise HTTPException(status_code=500, detail=str(exc)) from exc

    return IndexResponse(
        success=True,
        document_id=result.document_id,
        section_ids=result.section_ids,
    )


def main() -> None:
    """Run the API with uvicorn."""
    import uvicorn

    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    uvicorn.run(app, host=settings.host, port=settings.port)


if __name__ == "__main__":
    main()
