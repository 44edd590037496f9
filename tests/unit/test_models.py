"""Unit tests for the domain models."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from doc_indexer.models import Document, IndexPoint, Section


def _section(order: int, **overrides) -> Section:
    fields = {
        "order": order,
        "section_title": f"Part {order}",
        "source_title": "Guide",
        "source_url": "/docs/guide",
        "section_anchor": f"#part-{order}",
        "content_markdown": "text",
    }
    fields.update(overrides)
    return Section(**fields)


class TestDocument:
    def test_accepts_contiguous_orders(self) -> None:
        doc = Document(source_title="Guide", source_url="/docs/guide", sections=(_section(0), _section(1)))
        assert [s.order for s in doc.sections] == [0, 1]

    def test_rejects_gap_in_orders(self) -> None:
        with pytest.raises(ValidationError, match="in sequence"):
            Document(source_title="Guide", source_url="/docs/guide", sections=(_section(0), _section(2)))

    def test_rejects_mismatched_parent_fields(self) -> None:
        with pytest.raises(ValidationError, match="do not match"):
            Document(
                source_title="Guide",
                source_url="/docs/guide",
                sections=(_section(0, source_url="/docs/other"),),
            )

    def test_is_immutable(self, sample_document: Document) -> None:
        with pytest.raises(ValidationError):
            sample_document.source_title = "changed"

    def test_accepts_wire_alias_for_sections(self) -> None:
        doc = Document.model_validate(
            {"source_url": "/docs/guide", "source_title": "Guide", "doc_sections": [_section(0).model_dump()]}
        )
        assert len(doc.sections) == 1

    def test_section_links(self, sample_document: Document) -> None:
        assert list(sample_document.section_links())[0] == ("Install", "/docs/guide#install")


def test_section_url_appends_anchor() -> None:
    assert _section(0).url == "/docs/guide#part-0"
    assert _section(0, section_anchor="").url == "/docs/guide"


def test_index_point_payload_defaults_empty() -> None:
    point = IndexPoint(id="abc", vector=[0.1, 0.2])
    assert point.payload == {}
