"""Pydantic models for the bridge wire format.

These models describe what crosses the channel boundary: the method call
sent by the caller, the argument bag of `setCreationDate`, and the reply
envelope returned for every call.
"""

from typing import Any, Literal

from pydantic import BaseModel, Field, StrictInt, StrictStr


class MethodCall(BaseModel):
    """A named operation plus an untyped argument bag."""

    method: str
    arguments: Any = None


class SetCreationDateArgs(BaseModel):
    """Argument bag of the `setCreationDate` operation.

    Strict types: a numeric string is not a timestamp and a bool is not an int.
    """

    asset_id: StrictStr = Field(alias="assetId")
    timestamp: StrictInt


class BridgeError(BaseModel):
    """Structured error carried by an error reply."""

    code: str
    message: str
    details: Any = None


class BridgeReply(BaseModel):
    """Reply envelope for a single method call."""

    status: Literal["success", "error", "not_implemented"]
    result: Any = None
    error: BridgeError | None = None
