"""Abstract base class for vector-store backends.

The indexing coordinator only needs collection lifecycle and point
upsert.  Adding a backend (Qdrant, Pinecone …) means subclassing
:class:`VectorStoreBase` and implementing the three abstract methods.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Sequence

from doc_indexer.models import IndexPoint


class VectorStoreBase(ABC):
    """Backend-agnostic vector-store interface.

    Implementations are shared across concurrent indexing tasks and must
    be safe to call from several threads at once.  Failures are reported
    as :class:`~doc_indexer.exceptions.StoreError`.
    """

    # -- required overrides ---------------------------------------------------

    @abstractmethod
    def collection_exists(self, name: str) -> bool:
        """Return ``True`` when collection *name* already exists."""
        ...

    @abstractmethod
    def create_collection(self, name: str, *, dimension: int, distance: str) -> None:
        """Create collection *name* for vectors of width *dimension*.

        Parameters
        ----------
        name:
            Collection name.
        dimension:
            Fixed vector width.
        distance:
            Distance metric (backend-specific name, e.g. ``"l2"``).
        """
        ...

    @abstractmethod
    def upsert(self, name: str, points: Sequence[IndexPoint]) -> None:
        """Insert or overwrite *points* in collection *name*, keyed by ID."""
        ...

    # -- optional overrides ---------------------------------------------------

    def health_check(self) -> bool:
        """Return ``True`` when the backend is reachable and ready."""
        return True
