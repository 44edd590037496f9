"""Shared pytest configuration and fixtures."""

from __future__ import annotations

from pathlib import Path
from typing import Sequence

import pytest
from langchain_core.embeddings import Embeddings

from doc_indexer.indexing.base import VectorStoreBase
from doc_indexer.models import Document, IndexPoint, Section

FIXTURES = Path(__file__).parent / "fixtures"

DIMENSION = 4


def pytest_configure(config: pytest.Config) -> None:
    """Register custom markers."""
    config.addinivalue_line("markers", "integration: marks tests requiring external services")


# ── Fakes ───────────────────────────────────────────────────────────────


class FakeEmbeddings(Embeddings):
    """Deterministic embeddings; texts containing a marker in *fail_on* raise."""

    def __init__(self, dimension: int = DIMENSION, fail_on: Sequence[str] = ()) -> None:
        self.dimension = dimension
        self.fail_on = tuple(fail_on)
        self.calls: list[str] = []

    def embed_query(self, text: str) -> list[float]:
        self.calls.append(text)
        for marker in self.fail_on:
            if marker in text:
                raise RuntimeError(f"rate limited while embedding {marker!r}")
        return [float(len(text) % 7)] + [1.0] * (self.dimension - 1)

    def embed_documents(self, texts: list[str]) -> list[list[float]]:
        return [self.embed_query(t) for t in texts]


class InMemoryVectorStore(VectorStoreBase):
    """Dict-backed store that records every upsert call."""

    def __init__(self, fail_on_ids: Sequence[str] = ()) -> None:
        self.collections: dict[str, dict] = {}
        self.points: dict[str, dict[str, IndexPoint]] = {}
        self.upsert_calls: list[list[str]] = []
        self.fail_on_ids = set(fail_on_ids)
        self.healthy = True

    def collection_exists(self, name: str) -> bool:
        return name in self.collections

    def health_check(self) -> bool:
        return self.healthy

    def create_collection(self, name: str, *, dimension: int, distance: str) -> None:
        self.collections[name] = {"dimension": dimension, "distance": distance}
        self.points[name] = {}

    def upsert(self, name: str, points: Sequence[IndexPoint]) -> None:
        ids = [p.id for p in points]
        if self.fail_on_ids.intersection(ids):
            raise RuntimeError("connection reset by peer")
        self.upsert_calls.append(ids)
        for point in points:
            self.points[name][point.id] = point


# ── Fixtures ────────────────────────────────────────────────────────────


@pytest.fixture()
def discount_html() -> str:
    return (FIXTURES / "discount.html").read_text(encoding="utf-8")


@pytest.fixture()
def fake_embeddings() -> FakeEmbeddings:
    return FakeEmbeddings()


@pytest.fixture()
def memory_store() -> InMemoryVectorStore:
    return InMemoryVectorStore()


def make_document(titles: Sequence[str] = ("Install", "Configure", "Deploy")) -> Document:
    """Build a small document with one section per title."""
    sections = tuple(
        Section(
            order=i,
            section_title=title,
            source_title="Guide",
            source_url="/docs/guide",
            section_anchor=f"#{title.lower()}",
            content_markdown=f"## {title}\n\nHow to {title.lower()}.\n",
        )
        for i, title in enumerate(titles)
    )
    return Document(
        source_title="Guide",
        source_url="/docs/guide",
        content_markdown="# Guide\n\nIntro.",
        sections=sections,
    )


@pytest.fixture()
def sample_document() -> Document:
    return make_document()


@pytest.fixture()
def document_factory():
    return make_document
