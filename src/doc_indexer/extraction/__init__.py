"""
Extraction — fetch a documentation page and segment it into a Document.

Public surface
--------------
- :class:`HtmlSegmenter` — HTML page → :class:`~doc_indexer.models.Document`.
- :func:`segment_page` — segment with the default layout and converter.
- :func:`extract_document` — fetch + segment in one call.
- :func:`fetch_page` — download raw HTML.
- :func:`html_to_markdown` — the default Markdown converter.
"""

from doc_indexer.extraction.fetcher import fetch_page
from doc_indexer.extraction.markdown import html_to_markdown
from doc_indexer.extraction.segmenter import (
    HtmlSegmenter,
    PageLayout,
    extract_document,
    render_code_block,
    segment_page,
)

__all__ = [
    "HtmlSegmenter",
    "PageLayout",
    "extract_document",
    "fetch_page",
    "html_to_markdown",
    "render_code_block",
    "segment_page",
]
