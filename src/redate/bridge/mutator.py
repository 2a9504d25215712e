"""Asset mutator: resolve an asset and rewrite its creation date.

Per call the mutator moves through
    received -> resolving -> mutating -> completed
issuing exactly one change transaction and delivering exactly one
MutationResult. It holds no state between calls and never retries.
"""

from __future__ import annotations

import logging
import threading
from datetime import datetime
from typing import Callable

from redate.models.domain import (
    SET_DATE_FAILED,
    UNKNOWN_ERROR_MESSAGE,
    CreationDateChange,
    MutationFailure,
    MutationResult,
    MutationState,
    MutationSuccess,
)
from redate.store.base import AssetStore, StoreError

logger = logging.getLogger(__name__)

MutationCompletion = Callable[[MutationResult], None]


def map_commit_outcome(success: bool, error: BaseException | None) -> MutationResult:
    """Map a store completion `(success, error)` to a MutationResult.

    A failure always carries a non-empty message: the store's description
    when it supplies one, otherwise a generic fallback.
    """
    if success:
        return MutationSuccess()

    message = None
    if isinstance(error, StoreError):
        message = error.message
    elif error is not None:
        message = str(error)

    return MutationFailure(code=SET_DATE_FAILED, message=message or UNKNOWN_ERROR_MESSAGE)


class _SingleDelivery:
    """Wraps a completion so that only the first result is delivered."""

    def __init__(self, asset_id: str, completion: MutationCompletion):
        self.asset_id = asset_id
        self.completion = completion
        self.state: MutationState = "received"
        self._lock = threading.Lock()

    def advance(self, state: MutationState) -> None:
        self.state = state
        logger.debug(f"Mutation {self.asset_id}: {state}")

    def deliver(self, result: MutationResult) -> None:
        with self._lock:
            if self.state == "completed":
                logger.warning(f"Ignored repeated completion for asset {self.asset_id}")
                return
            self.advance("completed")
        self.completion(result)


class AssetMutator:
    """Applies creation-date changes through an injected AssetStore."""

    def __init__(self, store: AssetStore):
        """Initialize mutator.

        Args:
            store: Media store that owns the assets.
        """
        self.store = store

    def mutate(self, asset_id: str, when: datetime, completion: MutationCompletion) -> None:
        """Set the creation date of an asset.

        Returns immediately once the change is handed to the store; the
        result arrives through `completion`, possibly on a store thread.

        Args:
            asset_id: Identifier of the asset to change.
            when: New creation date (timezone-aware, seconds precision).
            completion: Called exactly once with the MutationResult.
        """
        call = _SingleDelivery(asset_id, completion)

        call.advance("resolving")
        try:
            asset = self.store.find_asset(asset_id)
        except Exception as e:
            logger.exception(f"Lookup of asset {asset_id} failed")
            call.deliver(map_commit_outcome(False, e))
            return

        if asset is None:
            logger.info(f"No asset matches {asset_id}; committing empty change")

        change = CreationDateChange(asset_id=asset_id, creation_date=when, asset=asset)

        def on_commit(success: bool, error: StoreError | None) -> None:
            result = map_commit_outcome(success, error)
            if isinstance(result, MutationSuccess):
                logger.info(f"Creation date of {asset_id} set to {when.isoformat()}")
            else:
                logger.warning(f"Creation date of {asset_id} not set: {result.message}")
            call.deliver(result)

        call.advance("mutating")
        try:
            self.store.commit(change, on_commit)
        except Exception as e:
            logger.exception(f"Commit for asset {asset_id} raised")
            call.deliver(map_commit_outcome(False, e))
