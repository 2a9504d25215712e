"""Repository functions for the media_assets table.

Encapsulates all SQLAlchemy queries and returns domain models (not
SQLAlchemy entities) to callers.
"""

from __future__ import annotations

from datetime import datetime

from sqlalchemy.orm import Session

from redate.core.timestamps import from_storage, to_storage
from redate.db.schema import MediaAsset
from redate.models.domain import Asset


def _asset_to_entity(row: MediaAsset) -> Asset:
    """Convert SQLAlchemy MediaAsset to domain entity."""
    return Asset(
        asset_id=row.asset_id,
        media_type=row.media_type,
        creation_date=from_storage(row.creation_date),
        modification_date=from_storage(row.modification_date),
    )


def get_asset(session: Session, asset_id: str) -> Asset | None:
    """Get asset by ID."""
    row = session.query(MediaAsset).filter(MediaAsset.asset_id == asset_id).first()
    return _asset_to_entity(row) if row else None


def create_asset(session: Session, asset: Asset) -> None:
    """Insert a new asset row. Caller commits."""
    session.add(
        MediaAsset(
            asset_id=asset.asset_id,
            media_type=asset.media_type,
            creation_date=to_storage(asset.creation_date) if asset.creation_date else None,
            modification_date=(
                to_storage(asset.modification_date) if asset.modification_date else None
            ),
        )
    )


def set_creation_date(
    session: Session,
    asset_id: str,
    creation_date: datetime,
    modified_at: datetime,
) -> bool:
    """Update the creation date of one asset. Caller commits.

    Returns:
        True if a row was updated, False if no asset matched.
    """
    row = session.query(MediaAsset).filter(MediaAsset.asset_id == asset_id).first()
    if row is None:
        return False

    row.creation_date = to_storage(creation_date)
    row.modification_date = to_storage(modified_at)
    return True
