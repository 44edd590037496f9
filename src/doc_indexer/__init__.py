"""
doc-indexer — segment documentation pages and index them into a vector store.

Two stages:

- :mod:`doc_indexer.extraction` turns a raw HTML page into a
  :class:`~doc_indexer.models.Document` with ordered sections.
- :mod:`doc_indexer.indexing` embeds the document and its sections and
  upserts them under deterministic IDs.
"""

__version__ = "0.1.0"
