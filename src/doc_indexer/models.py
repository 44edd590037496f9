"""Domain models for segmented pages and vector-store points.

``Document`` and ``Section`` are produced by the segmenter and are
immutable once constructed.  ``IndexPoint`` is the value handed to the
vector store; persistence lives entirely in the store.
"""

from __future__ import annotations

from typing import Any, Iterator

from pydantic import BaseModel, ConfigDict, Field, model_validator


class Section(BaseModel):
    """One logical sub-section of a documentation page.

    Attributes
    ----------
    order:
        0-based position of the section within its document.
    section_title:
        Heading text (may be empty).
    source_title / source_url:
        Copies of the parent document's title and URL.
    section_anchor:
        Fragment identifier such as ``"#build-with-functions"`` (may be empty).
    content_markdown:
        Markdown of just this section.
    """

    model_config = ConfigDict(frozen=True)

    order: int = Field(ge=0)
    section_title: str = ""
    source_title: str = ""
    source_url: str = ""
    section_anchor: str = ""
    content_markdown: str = ""

    @property
    def url(self) -> str:
        """Source URL with the section anchor appended."""
        return f"{self.source_url}{self.section_anchor}"


class Document(BaseModel):
    """A segmented documentation page and its ordered sections."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    source_title: str = ""
    source_url: str
    content_markdown: str = ""
    sections: tuple[Section, ...] = Field(default=(), alias="doc_sections")

    @model_validator(mode="after")
    def check_sections(self) -> Document:
        for position, section in enumerate(self.sections):
            if section.order != position:
                raise ValueError(
                    f"section orders must be 0..{len(self.sections) - 1} in sequence; "
                    f"got {section.order} at position {position}"
                )
            if section.source_title != self.source_title or section.source_url != self.source_url:
                raise ValueError(
                    f"section {position} source fields do not match the parent document"
                )
        return self

    def section_links(self) -> Iterator[tuple[str, str]]:
        """Yield ``(section_title, url)`` pairs in section order."""
        for section in self.sections:
            yield section.section_title, section.url


class IndexPoint(BaseModel):
    """A single vector-store point: deterministic ID, vector, and payload."""

    model_config = ConfigDict(frozen=True)

    id: str
    vector: list[float]
    payload: dict[str, Any] = Field(default_factory=dict)


class IndexResult(BaseModel):
    """Outcome of a successful indexing call."""

    document_id: str
    section_ids: list[str] = Field(default_factory=list)
