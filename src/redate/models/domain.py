"""Domain models for redate.

Pure Python dataclasses used between the bridge, the mutator and the
media stores. Independent of pydantic and SQLAlchemy.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Literal, Union

# ============================================================================
# Error codes
# ============================================================================

INVALID_ARGS = "INVALID_ARGS"
SET_DATE_FAILED = "SET_DATE_FAILED"

INVALID_ARGS_MESSAGE = "Invalid arguments"
UNKNOWN_ERROR_MESSAGE = "Unknown error"


# ============================================================================
# Asset Domain
# ============================================================================

MediaType = Literal["image", "video", "audio", "unknown"]


@dataclass(frozen=True)
class Asset:
    """Handle to a single media item held by a store."""

    asset_id: str
    media_type: MediaType = "image"
    creation_date: datetime | None = None
    modification_date: datetime | None = None


@dataclass(frozen=True)
class CreationDateChange:
    """One change transaction: set the creation date of a resolved asset.

    `asset` is None when the identifier had no match; the store decides
    whether such a change fails or succeeds vacuously.
    """

    asset_id: str
    creation_date: datetime
    asset: Asset | None = None


# ============================================================================
# Mutation Domain
# ============================================================================

MutationState = Literal["received", "resolving", "mutating", "completed"]


@dataclass(frozen=True)
class MutationSuccess:
    """The creation date was written."""

    ok: bool = True


@dataclass(frozen=True)
class MutationFailure:
    """The store rejected or failed the change transaction."""

    code: str
    message: str


MutationResult = Union[MutationSuccess, MutationFailure]
