"""FastAPI application factory.

Boots the channel registry, registers the bridge plugins against a media
store and exposes the channels over HTTP.

Configuration (explicit arguments take precedence):
- REDATE_DB_PATH: SQLite store file (default data/redate.db)
- REDATE_CHANNEL_NAME: channel the bridge listens on (default CHANNEL_NAME)
"""

from __future__ import annotations

import os
from pathlib import Path

from fastapi import FastAPI, Request

from redate.bridge.channel import CHANNEL_NAME, ChannelRegistry, register_plugins
from redate.store.base import AssetStore


def get_registry(request: Request) -> ChannelRegistry:
    """Dependency to get the application's channel registry."""
    return request.app.state.registry


def create_app(
    store: AssetStore | None = None,
    db_path: Path | None = None,
    channel_name: str | None = None,
) -> FastAPI:
    """Create FastAPI application.

    Args:
        store: Media store to mutate. Defaults to a SqliteAssetStore.
        db_path: Database file for the default store.
        channel_name: Channel to bind the bridge to.

    Returns:
        Configured FastAPI application.
    """
    app = FastAPI(
        title="redate API",
        description="Creation-date bridge for media assets",
        version="0.1.0",
    )

    if store is None:
        from redate.store.sqlite import SqliteAssetStore

        db_path = db_path or Path(os.environ.get("REDATE_DB_PATH", "data/redate.db"))
        store = SqliteAssetStore(db_path=db_path)

    channel_name = channel_name or os.environ.get("REDATE_CHANNEL_NAME", CHANNEL_NAME)

    registry = ChannelRegistry()
    register_plugins(registry, store, channel_name=channel_name)
    app.state.registry = registry
    app.state.store = store

    from redate.api.routes import channels

    app.include_router(channels.router, prefix="/api")

    @app.get("/health")
    def health_check():
        """Health check endpoint."""
        return {"status": "ok"}

    return app
