"""Base media store interface.

A store is the external owner of asset metadata. The bridge reaches it only
through a narrow handle-and-callback interface:
- `find_asset(asset_id) -> Asset | None`
- `commit(change, completion)` where completion receives `(success, error)`

Stores must NOT know about the bridge reply vocabulary.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Callable

from redate.models.domain import Asset, CreationDateChange


class StoreError(Exception):
    """Failure reported by a media store for a change transaction."""

    def __init__(self, message: str | None = None, code: str | None = None):
        super().__init__(message or "")
        self.message = message
        self.code = code


CommitCompletion = Callable[[bool, "StoreError | None"], None]


class AssetStore(ABC):
    """Abstract base class for media stores."""

    @abstractmethod
    def find_asset(self, asset_id: str) -> Asset | None:
        """Resolve an identifier to an asset handle.

        Args:
            asset_id: Opaque asset identifier.

        Returns:
            The first matching asset, or None if nothing matches.
        """
        pass

    @abstractmethod
    def commit(self, change: CreationDateChange, completion: CommitCompletion) -> None:
        """Apply a change transaction and report the outcome.

        The write may happen on a store-owned worker; `completion` is called
        once with `(True, None)` on success or `(False, error)` on failure.

        Args:
            change: The change transaction to apply atomically.
            completion: Callback receiving the success flag and optional error.
        """
        pass
