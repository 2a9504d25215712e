"""Single-use reply slot for a pending method call.

A PendingReply is resolved exactly once with one of three outcomes:
success, error, or not implemented. Later resolutions are ignored and
logged; they never reach the caller.
"""

from __future__ import annotations

import logging
from concurrent.futures import Future, InvalidStateError
from typing import Any

from redate.models.types import BridgeError, BridgeReply

logger = logging.getLogger(__name__)


class PendingReply:
    """The caller's pending request, backed by a concurrent Future."""

    def __init__(self, method: str = ""):
        self.method = method
        self.future: Future[BridgeReply] = Future()

    @property
    def done(self) -> bool:
        return self.future.done()

    def success(self, result: Any = True) -> bool:
        """Resolve with a success result."""
        return self._resolve(BridgeReply(status="success", result=result))

    def error(self, code: str, message: str, details: Any = None) -> bool:
        """Resolve with a structured error."""
        return self._resolve(
            BridgeReply(
                status="error",
                error=BridgeError(code=code, message=message, details=details),
            )
        )

    def not_implemented(self) -> bool:
        """Resolve with the "no such operation" outcome."""
        return self._resolve(BridgeReply(status="not_implemented"))

    def _resolve(self, reply: BridgeReply) -> bool:
        """Set the reply if still pending.

        Returns:
            True if this call resolved the reply, False if it was already done.
        """
        try:
            self.future.set_result(reply)
        except InvalidStateError:
            if self.future.cancelled():
                logger.info(f"Caller cancelled {self.method or 'call'}; dropped {reply.status} reply")
            else:
                logger.warning(f"Dropped duplicate {reply.status} reply for {self.method or 'call'}")
            return False
        return True
