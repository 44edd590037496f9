"""Embedding text composition — Markdown body plus front matter."""

from __future__ import annotations

from doc_indexer.models import Document, Section


def compose_document_text(document: Document) -> str:
    """Return the embedding text for a whole document.

    The front matter lists every section link; a missing field renders
    as an empty value on its line.
    """
    links = "".join(f"\n  - [{title}]({url})\n" for title, url in document.section_links())
    return (
        "---\n"
        f"Source title: {document.source_title}\n"
        f"Source URL: {document.source_url}\n"
        "Sections:\n"
        f"{links}"
        "\n"
        "---\n"
        "\n"
        f"{document.content_markdown}"
    )


def compose_section_text(section: Section) -> str:
    """Return the embedding text for a single section."""
    return (
        "---\n"
        f"Source Title: {section.source_title} / {section.section_title}\n"
        f"Source URL: {section.url}\n"
        "---\n"
        "\n"
        f"{section.content_markdown}\n"
    )
