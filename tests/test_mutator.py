"""Tests for the asset mutator.

Covers outcome mapping, the single change transaction per call and the
exactly-once completion guarantee.
"""

import threading
from datetime import datetime, timezone

import pytest

from conftest import DeferredStore, DoubleDeliveryStore, RaisingStore
from redate.bridge.mutator import AssetMutator, map_commit_outcome
from redate.models.domain import (
    SET_DATE_FAILED,
    UNKNOWN_ERROR_MESSAGE,
    MutationFailure,
    MutationSuccess,
)
from redate.store.base import StoreError
from redate.store.memory import InMemoryAssetStore

WHEN = datetime(2023, 11, 14, 22, 13, 20, tzinfo=timezone.utc)


class TestMapCommitOutcome:
    """Test store outcome -> MutationResult mapping."""

    def test_success(self):
        assert map_commit_outcome(True, None) == MutationSuccess()

    def test_success_ignores_error(self):
        assert map_commit_outcome(True, StoreError("noise")) == MutationSuccess()

    def test_failure_uses_store_message(self):
        result = map_commit_outcome(False, StoreError("Access denied"))
        assert result == MutationFailure(SET_DATE_FAILED, "Access denied")

    def test_failure_without_error(self):
        result = map_commit_outcome(False, None)
        assert result == MutationFailure(SET_DATE_FAILED, UNKNOWN_ERROR_MESSAGE)

    @pytest.mark.parametrize("error", [StoreError(), StoreError(""), RuntimeError()])
    def test_failure_with_empty_message(self, error):
        """The caller never receives an empty description."""
        result = map_commit_outcome(False, error)
        assert result.message == UNKNOWN_ERROR_MESSAGE

    def test_failure_from_plain_exception(self):
        result = map_commit_outcome(False, OSError("disk full"))
        assert result == MutationFailure(SET_DATE_FAILED, "disk full")


class TestAssetMutator:
    """Test AssetMutator against in-memory stores."""

    def test_success_updates_asset(self, memory_store):
        results = []
        AssetMutator(memory_store).mutate("abc123", WHEN, results.append)

        assert results == [MutationSuccess()]
        assert memory_store.find_asset("abc123").creation_date == WHEN

    def test_one_transaction_per_call(self, memory_store):
        AssetMutator(memory_store).mutate("abc123", WHEN, lambda r: None)
        assert memory_store.commit_count == 1

    def test_missing_asset_still_commits(self, memory_store):
        """No match is forwarded to the store, which decides the outcome."""
        results = []
        AssetMutator(memory_store).mutate("missing-id", WHEN, results.append)

        assert memory_store.commit_count == 1
        assert results == [MutationFailure(SET_DATE_FAILED, "Asset not found: missing-id")]

    def test_missing_asset_vacuous_store(self):
        store = InMemoryAssetStore(vacuous_success=True)
        results = []
        AssetMutator(store).mutate("missing-id", WHEN, results.append)
        assert results == [MutationSuccess()]

    def test_store_failure_not_retried(self, sample_asset):
        store = InMemoryAssetStore([sample_asset], fail_with=StoreError("Permission revoked"))
        results = []
        AssetMutator(store).mutate("abc123", WHEN, results.append)

        assert store.commit_count == 1
        assert results == [MutationFailure(SET_DATE_FAILED, "Permission revoked")]

    def test_double_delivery_reported_once(self, sample_asset):
        store = DoubleDeliveryStore([sample_asset])
        results = []
        AssetMutator(store).mutate("abc123", WHEN, results.append)
        assert results == [MutationSuccess()]

    def test_raising_commit_completes_with_failure(self, sample_asset):
        store = RaisingStore([sample_asset])
        results = []
        AssetMutator(store).mutate("abc123", WHEN, results.append)
        assert results == [MutationFailure(SET_DATE_FAILED, "photo library unavailable")]

    def test_raising_lookup_completes_with_failure(self, memory_store, monkeypatch):
        def broken_lookup(asset_id):
            raise StoreError("library locked")

        monkeypatch.setattr(memory_store, "find_asset", broken_lookup)
        results = []
        AssetMutator(memory_store).mutate("abc123", WHEN, results.append)

        assert results == [MutationFailure(SET_DATE_FAILED, "library locked")]
        assert memory_store.commit_count == 0

    def test_completion_waits_for_store(self, sample_asset):
        """mutate returns before the store reports back."""
        store = DeferredStore([sample_asset])
        results = []
        AssetMutator(store).mutate("abc123", WHEN, results.append)

        assert results == []
        change, _ = store.pending[0]
        assert change.asset == sample_asset
        assert change.creation_date == WHEN

        store.release(True)
        assert results == [MutationSuccess()]

    def test_sqlite_store_end_to_end(self, sqlite_store):
        done = threading.Event()
        results = []

        def completion(result):
            results.append(result)
            done.set()

        AssetMutator(sqlite_store).mutate("abc123", WHEN, completion)
        assert done.wait(timeout=5)
        assert results == [MutationSuccess()]
        assert sqlite_store.find_asset("abc123").creation_date == WHEN
