#!/usr/bin/env python3
"""Seed a SQLite media store with demo assets.

Usage:
    python scripts/seed_assets.py [db_path]

Creates the schema if needed and inserts a handful of assets whose
creation dates can then be rewritten through the bridge.
"""

from __future__ import annotations

import sys
from datetime import datetime, timezone
from pathlib import Path

# Add src to path for imports
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT / "src"))

from redate.models.domain import Asset  # noqa: E402
from redate.store.sqlite import SqliteAssetStore  # noqa: E402

DEFAULT_DB_PATH = PROJECT_ROOT / "data" / "redate.db"

DEMO_ASSETS = [
    Asset("abc123", "image", datetime(2023, 11, 14, 22, 13, 20, tzinfo=timezone.utc)),
    Asset("beach-0042", "image", datetime(2019, 7, 4, 18, 30, tzinfo=timezone.utc)),
    Asset("clip-0007", "video", datetime(2021, 1, 1, tzinfo=timezone.utc)),
    Asset("scan-1962", "image", None),
]


def main() -> int:
    """Main entry point."""
    db_path = Path(sys.argv[1]) if len(sys.argv) > 1 else DEFAULT_DB_PATH
    store = SqliteAssetStore(db_path=db_path)

    created = 0
    for asset in DEMO_ASSETS:
        if store.find_asset(asset.asset_id) is not None:
            print(f"  exists   {asset.asset_id}")
            continue
        store.add(asset)
        created += 1
        print(f"  created  {asset.asset_id}")

    store.close()
    print(f"Seeded {created} asset(s) into {db_path}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
