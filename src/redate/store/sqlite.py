"""SQLite-backed media store.

Per the store contract:
- Every statement runs on a single store-owned worker: change transactions
  are submitted and reported through the completion, lookups wait for
  their result. Reads and writes are serialized in submission order and
  no connection is ever used by two threads at once
- Each change is one database transaction: creation and modification
  dates are written together or not at all
"""

from __future__ import annotations

import logging
import threading
from concurrent.futures import ThreadPoolExecutor
from datetime import datetime, timezone
from pathlib import Path

from sqlalchemy import Engine
from sqlalchemy.exc import SQLAlchemyError

from redate.db import repo
from redate.db.session import get_engine, get_session_factory, init_db, transaction
from redate.models.domain import Asset, CreationDateChange
from redate.store.base import AssetStore, CommitCompletion, StoreError

logger = logging.getLogger(__name__)


class AssetNotFoundError(StoreError):
    """Raised inside a change transaction whose asset does not exist."""

    def __init__(self, asset_id: str):
        super().__init__(f"Asset not found: {asset_id}", code="NOT_FOUND")
        self.asset_id = asset_id


class SqliteAssetStore(AssetStore):
    """Media store persisted in a SQLite database."""

    def __init__(self, engine: Engine | None = None, db_path: Path | None = None):
        """Initialize store.

        Args:
            engine: Engine to use. Takes precedence over db_path.
            db_path: SQLite database file, used when no engine is given.
        """
        self.engine = engine if engine is not None else get_engine(db_path)
        init_db(self.engine)
        self._factory = get_session_factory(self.engine)
        self._worker_ident: int | None = None
        self._worker = ThreadPoolExecutor(
            max_workers=1,
            thread_name_prefix="asset-store",
            initializer=self._bind_worker,
        )

    def _bind_worker(self) -> None:
        self._worker_ident = threading.get_ident()

    def _on_worker(self, fn, *args):
        """Run fn on the worker thread and wait for its result."""
        if threading.get_ident() == self._worker_ident:
            # Called from a completion; waiting on the worker would deadlock
            return fn(*args)
        return self._worker.submit(fn, *args).result()

    def add(self, asset: Asset) -> None:
        """Insert an asset. Used for seeding."""
        self._on_worker(self._insert, asset)

    def _insert(self, asset: Asset) -> None:
        with transaction(self._factory) as session:
            repo.create_asset(session, asset)

    def find_asset(self, asset_id: str) -> Asset | None:
        return self._on_worker(self._lookup, asset_id)

    def _lookup(self, asset_id: str) -> Asset | None:
        with transaction(self._factory) as session:
            return repo.get_asset(session, asset_id)

    def commit(self, change: CreationDateChange, completion: CommitCompletion) -> None:
        self._worker.submit(self._apply, change, completion)

    def _apply(self, change: CreationDateChange, completion: CommitCompletion) -> None:
        """Run one change transaction on the worker and report its outcome."""
        try:
            with transaction(self._factory) as session:
                if change.asset is None:
                    raise AssetNotFoundError(change.asset_id)
                updated = repo.set_creation_date(
                    session,
                    change.asset_id,
                    change.creation_date,
                    modified_at=datetime.now(timezone.utc),
                )
                if not updated:
                    raise AssetNotFoundError(change.asset_id)
        except StoreError as e:
            logger.info(f"Change for {change.asset_id} rejected: {e.message}")
            completion(False, e)
            return
        except SQLAlchemyError as e:
            logger.error(f"Change for {change.asset_id} failed: {e}")
            completion(False, StoreError(str(getattr(e, "orig", None) or e)))
            return
        except Exception as e:
            logger.exception(f"Change for {change.asset_id} failed unexpectedly")
            completion(False, StoreError(str(e) or None))
            return

        completion(True, None)

    def close(self) -> None:
        """Wait for pending changes and stop the worker."""
        self._worker.shutdown(wait=True)
