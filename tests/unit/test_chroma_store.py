"""Unit tests for the Chroma backend (client mocked)."""

from __future__ import annotations

from types import SimpleNamespace
from unittest.mock import MagicMock

import pytest

from doc_indexer.exceptions import StoreError
from doc_indexer.indexing.chroma_store import ChromaVectorStore
from doc_indexer.models import IndexPoint


@pytest.fixture()
def client() -> MagicMock:
    return MagicMock()


@pytest.fixture()
def store(client: MagicMock) -> ChromaVectorStore:
    return ChromaVectorStore(client=client)


class TestCollectionLifecycle:
    def test_exists_with_name_listing(self, store, client) -> None:
        client.list_collections.return_value = ["doc-index", "other"]
        assert store.collection_exists("doc-index")
        assert not store.collection_exists("missing")

    def test_exists_with_collection_objects(self, store, client) -> None:
        client.list_collections.return_value = [SimpleNamespace(name="doc-index")]
        assert store.collection_exists("doc-index")

    def test_create_records_distance_and_dimension(self, store, client) -> None:
        store.create_collection("doc-index", dimension=384, distance="l2")
        client.create_collection.assert_called_once_with(
            name="doc-index", metadata={"hnsw:space": "l2", "dimension": 384}
        )

    def test_list_failure_raises_store_error(self, store, client) -> None:
        client.list_collections.side_effect = ConnectionError("refused")
        with pytest.raises(StoreError, match="refused"):
            store.collection_exists("doc-index")


class TestUpsert:
    def test_content_becomes_document_text(self, store, client) -> None:
        collection = client.get_collection.return_value
        point = IndexPoint(
            id="id-1",
            vector=[0.1, 0.2],
            payload={
                "content": "## Body",
                "source_title": "Guide/Install",
                "source_url": "/docs/guide#install",
                "source_order": 0,
            },
        )

        store.upsert("doc-index", [point])

        client.get_collection.assert_called_once_with("doc-index")
        collection.upsert.assert_called_once_with(
            ids=["id-1"],
            embeddings=[[0.1, 0.2]],
            documents=["## Body"],
            metadatas=[{"source_title": "Guide/Install", "source_url": "/docs/guide#install", "source_order": 0}],
        )

    def test_empty_upsert_is_a_no_op(self, store, client) -> None:
        store.upsert("doc-index", [])
        client.get_collection.assert_not_called()

    def test_upsert_failure_raises_store_error(self, store, client) -> None:
        client.get_collection.return_value.upsert.side_effect = ValueError("dimension mismatch")
        with pytest.raises(StoreError, match="dimension mismatch"):
            store.upsert("doc-index", [IndexPoint(id="x", vector=[1.0], payload={"content": ""})])


def test_health_check(store, client) -> None:
    assert store.health_check() is True
    client.heartbeat.side_effect = ConnectionError("down")
    assert store.health_check() is False
