"""Deterministic point IDs.

IDs are name-based UUIDs (v5, URL namespace), so re-indexing a page
overwrites its points instead of duplicating them.  A document is keyed
by its URL and a section by URL + anchor; sections without an anchor
share their document's ID.
"""

from __future__ import annotations

import uuid


def document_id(url: str) -> str:
    return str(uuid.uuid5(uuid.NAMESPACE_URL, url))


def section_id(url: str, anchor: str) -> str:
    return str(uuid.uuid5(uuid.NAMESPACE_URL, url + anchor))
