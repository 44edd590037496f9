"""HTML → Markdown conversion."""

from __future__ import annotations

from markdownify import ATX, markdownify

from doc_indexer.exceptions import ConversionError


def html_to_markdown(html: str) -> str:
    """Convert an HTML fragment to Markdown.

    Raises
    ------
    ConversionError
        When the converter cannot process *html*.
    """
    try:
        return markdownify(html, heading_style=ATX, bullets="-")
    except Exception as exc:
        raise ConversionError(f"failed to convert HTML to Markdown: {exc}") from exc
