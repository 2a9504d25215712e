"""Name-addressed method channels.

A ChannelRegistry maps channel names to endpoints. Caller and endpoint
must agree on the exact name; a call sent to a name nobody registered is
not delivered.
"""

from __future__ import annotations

import logging
from concurrent.futures import Future

from redate.bridge.endpoint import BridgeEndpoint
from redate.bridge.mutator import AssetMutator
from redate.models.types import BridgeReply, MethodCall
from redate.store.base import AssetStore

logger = logging.getLogger(__name__)

# vendor/app namespace + feature name
CHANNEL_NAME = "io.redate.app/photo_metadata"


class ChannelError(Exception):
    """Error raised by the channel layer itself."""

    def __init__(self, code: str, message: str):
        super().__init__(message)
        self.code = code
        self.message = message


class ChannelNotFoundError(ChannelError):
    def __init__(self, name: str):
        super().__init__("CHANNEL_NOT_FOUND", f"No handler registered for channel {name!r}")
        self.name = name


class ChannelAlreadyRegisteredError(ChannelError):
    def __init__(self, name: str):
        super().__init__("CHANNEL_EXISTS", f"Channel {name!r} is already registered")
        self.name = name


class ChannelRegistry:
    """Routes method calls to the endpoint bound to a channel name."""

    def __init__(self):
        self._handlers: dict[str, BridgeEndpoint] = {}

    def register(self, name: str, handler: BridgeEndpoint) -> None:
        """Bind a handler to a channel name.

        Raises:
            ChannelAlreadyRegisteredError: If the name is already bound.
        """
        if name in self._handlers:
            raise ChannelAlreadyRegisteredError(name)
        self._handlers[name] = handler
        logger.info(f"Registered channel {name}")

    def unregister(self, name: str) -> None:
        self._handlers.pop(name, None)

    def names(self) -> list[str]:
        return sorted(self._handlers)

    def send(self, name: str, call: MethodCall) -> Future[BridgeReply]:
        """Deliver a method call to the channel's handler.

        Returns:
            Future resolved with the reply.

        Raises:
            ChannelNotFoundError: If no handler is bound to `name`.
        """
        handler = self._handlers.get(name)
        if handler is None:
            raise ChannelNotFoundError(name)
        return handler.invoke(call)


def register_plugins(
    registry: ChannelRegistry,
    store: AssetStore,
    channel_name: str = CHANNEL_NAME,
) -> BridgeEndpoint:
    """Wire the creation-date endpoint onto `registry`.

    Args:
        registry: Registry to bind into.
        store: Media store the endpoint mutates.
        channel_name: Name to bind. Defaults to CHANNEL_NAME.

    Returns:
        The registered endpoint.
    """
    endpoint = BridgeEndpoint(AssetMutator(store))
    registry.register(channel_name, endpoint)
    return endpoint
