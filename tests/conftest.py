"""Shared pytest fixtures for redate tests."""

from datetime import datetime, timezone

import pytest

from redate.db.session import create_memory_engine
from redate.models.domain import Asset, CreationDateChange
from redate.store.base import AssetStore, CommitCompletion, StoreError
from redate.store.memory import InMemoryAssetStore
from redate.store.sqlite import SqliteAssetStore

ORIGINAL_DATE = datetime(2020, 5, 17, 9, 0, tzinfo=timezone.utc)


class DoubleDeliveryStore(InMemoryAssetStore):
    """Store that breaks the single-delivery contract."""

    def commit(self, change: CreationDateChange, completion: CommitCompletion) -> None:
        super().commit(change, completion)
        completion(False, StoreError("late duplicate"))


class RaisingStore(InMemoryAssetStore):
    """Store whose commit raises instead of calling back."""

    def commit(self, change: CreationDateChange, completion: CommitCompletion) -> None:
        self.commit_count += 1
        raise RuntimeError("photo library unavailable")


class DeferredStore(AssetStore):
    """Store that holds completions until the test releases them."""

    def __init__(self, assets: list[Asset] | None = None):
        self.assets = {a.asset_id: a for a in assets or []}
        self.pending: list[tuple[CreationDateChange, CommitCompletion]] = []

    def find_asset(self, asset_id: str) -> Asset | None:
        return self.assets.get(asset_id)

    def commit(self, change: CreationDateChange, completion: CommitCompletion) -> None:
        self.pending.append((change, completion))

    def release(self, success: bool = True, error: StoreError | None = None) -> None:
        for _, completion in self.pending:
            completion(success, error)
        self.pending.clear()


@pytest.fixture
def sample_asset() -> Asset:
    """A photo with a known creation date."""
    return Asset(asset_id="abc123", media_type="image", creation_date=ORIGINAL_DATE)


@pytest.fixture
def memory_store(sample_asset: Asset) -> InMemoryAssetStore:
    """In-memory store holding the sample asset."""
    return InMemoryAssetStore([sample_asset])


@pytest.fixture
def engine():
    """Create an in-memory SQLite engine for testing."""
    return create_memory_engine()


@pytest.fixture
def sqlite_store(engine, sample_asset: Asset):
    """SQLite store holding the sample asset."""
    store = SqliteAssetStore(engine=engine)
    store.add(sample_asset)
    yield store
    store.close()
