"""Database schema for the SQLite media store.

One table holds the metadata the bridge may mutate. Datetimes are stored
as naive UTC with seconds precision.
"""

from datetime import datetime

from sqlalchemy import DateTime, String
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    """Base class for all models."""

    pass


class MediaAsset(Base):
    """A photo or video tracked by the store."""

    __tablename__ = "media_assets"

    asset_id: Mapped[str] = mapped_column(String(128), primary_key=True)
    media_type: Mapped[str] = mapped_column(String(16), nullable=False, default="image")
    creation_date: Mapped[datetime | None] = mapped_column(DateTime, nullable=True)
    modification_date: Mapped[datetime | None] = mapped_column(DateTime, nullable=True)
