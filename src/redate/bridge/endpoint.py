"""Bridge endpoint for the `setCreationDate` operation.

Validates the request shape and hands valid requests to the AssetMutator.
Performs no I/O of its own and never waits for the mutation to finish.
"""

from __future__ import annotations

import logging
from concurrent.futures import Future

from pydantic import ValidationError

from redate.bridge.mutator import AssetMutator
from redate.bridge.reply import PendingReply
from redate.core.timestamps import instant_from_timestamp
from redate.models.domain import (
    INVALID_ARGS,
    INVALID_ARGS_MESSAGE,
    MutationFailure,
    MutationResult,
)
from redate.models.types import BridgeReply, MethodCall, SetCreationDateArgs

logger = logging.getLogger(__name__)

SET_CREATION_DATE = "setCreationDate"


class BridgeEndpoint:
    """Serves method calls arriving on one channel."""

    def __init__(self, mutator: AssetMutator):
        self.mutator = mutator

    def handle(self, call: MethodCall, reply: PendingReply) -> None:
        """Dispatch a method call and resolve `reply` exactly once.

        Args:
            call: Operation name and argument bag.
            reply: Pending reply to resolve.
        """
        if call.method != SET_CREATION_DATE:
            logger.warning(f"Method not implemented: {call.method!r}")
            reply.not_implemented()
            return

        try:
            args = SetCreationDateArgs.model_validate(call.arguments)
        except ValidationError as e:
            logger.warning(f"Rejected {call.method} arguments: {e.error_count()} error(s)")
            reply.error(INVALID_ARGS, INVALID_ARGS_MESSAGE)
            return

        try:
            when = instant_from_timestamp(args.timestamp)
        except OverflowError:
            logger.warning(f"Timestamp out of range: {args.timestamp}")
            reply.error(INVALID_ARGS, INVALID_ARGS_MESSAGE, details="timestamp out of range")
            return

        def emit(result: MutationResult) -> None:
            if isinstance(result, MutationFailure):
                reply.error(result.code, result.message)
            else:
                reply.success(True)

        self.mutator.mutate(args.asset_id, when, emit)

    def invoke(self, call: MethodCall) -> Future[BridgeReply]:
        """Handle a call and return the future of its reply."""
        reply = PendingReply(call.method)
        self.handle(call, reply)
        return reply.future
