"""Error taxonomy for extraction and indexing."""

from __future__ import annotations


class DocIndexerError(Exception):
    """Base exception for doc-indexer errors."""


class FetchError(DocIndexerError):
    """The page could not be downloaded."""


class ParseError(DocIndexerError):
    """Raw HTML could not be parsed into a tree."""


class ExtractionError(DocIndexerError):
    """A required structural element is missing from the page."""


class ConversionError(ExtractionError):
    """HTML could not be converted to Markdown."""


class EmbeddingError(DocIndexerError):
    """The embedding provider failed or returned an unusable vector."""


class StoreError(DocIndexerError):
    """The vector store rejected a collection or upsert call."""


class AggregateIndexingError(DocIndexerError):
    """One or more section units failed during an indexing fan-out.

    Attributes
    ----------
    errors:
        The underlying per-section errors, in section order.
    """

    def __init__(self, errors: list[Exception]) -> None:
        self.errors = list(errors)
        message = "failed to process sections:"
        for err in self.errors:
            message += f"\n{err}"
        super().__init__(message)
