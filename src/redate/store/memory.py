"""In-memory media store for demos and tests.

Holds assets in a dict and applies changes synchronously, calling the
completion before `commit` returns. Behavior that differs between real
stores is configurable:
- `vacuous_success`: whether a change that resolved no asset succeeds
- `fail_with`: a StoreError reported for every commit
"""

from __future__ import annotations

import logging
from dataclasses import replace
from datetime import datetime, timezone

from redate.models.domain import Asset, CreationDateChange
from redate.store.base import AssetStore, CommitCompletion, StoreError

logger = logging.getLogger(__name__)


class InMemoryAssetStore(AssetStore):
    """Dict-backed store that completes changes on the calling thread."""

    def __init__(
        self,
        assets: list[Asset] | None = None,
        vacuous_success: bool = False,
        fail_with: StoreError | None = None,
    ):
        """Initialize store.

        Args:
            assets: Assets to preload.
            vacuous_success: Report success for changes that touch no asset.
            fail_with: Error to report for every commit, if set.
        """
        self._assets: dict[str, Asset] = {}
        for asset in assets or []:
            # First asset wins for duplicate identifiers
            self._assets.setdefault(asset.asset_id, asset)
        self.vacuous_success = vacuous_success
        self.fail_with = fail_with
        self.commit_count = 0
        self.lookup_count = 0

    def add(self, asset: Asset) -> None:
        """Add or replace an asset."""
        self._assets[asset.asset_id] = asset

    def find_asset(self, asset_id: str) -> Asset | None:
        self.lookup_count += 1
        return self._assets.get(asset_id)

    def commit(self, change: CreationDateChange, completion: CommitCompletion) -> None:
        self.commit_count += 1

        if self.fail_with is not None:
            completion(False, self.fail_with)
            return

        current = self._assets.get(change.asset_id) if change.asset else None
        if current is None:
            if self.vacuous_success:
                completion(True, None)
            else:
                completion(False, StoreError(f"Asset not found: {change.asset_id}"))
            return

        self._assets[change.asset_id] = replace(
            current,
            creation_date=change.creation_date,
            modification_date=datetime.now(timezone.utc),
        )
        logger.debug(f"Set creation date of {change.asset_id} to {change.creation_date}")
        completion(True, None)
