"""Channels API endpoint.

POST /api/channels/{channel_name} - Send a method call to a channel
"""

from __future__ import annotations

import asyncio

from fastapi import APIRouter, Depends, HTTPException
from fastapi.concurrency import run_in_threadpool

from redate.api.app import get_registry
from redate.bridge.channel import ChannelNotFoundError, ChannelRegistry
from redate.models.types import BridgeReply, MethodCall

router = APIRouter()


@router.post("/channels/{channel_name:path}", response_model=BridgeReply)
async def send_method_call(
    channel_name: str,
    call: MethodCall,
    registry: ChannelRegistry = Depends(get_registry),
) -> BridgeReply:
    """Send a method call and wait for its reply.

    Every reply kind, including errors, is returned with status 200. Asset
    lookup runs in the threadpool; the store commit completes the future.

    Args:
        channel_name: Exact channel name, e.g. io.redate.app/photo_metadata.
        call: Method name and argument bag.
        registry: Channel registry (injected).

    Returns:
        BridgeReply for the call.

    Raises:
        HTTPException: 404 if no handler is bound to the channel.
    """
    try:
        future = await run_in_threadpool(registry.send, channel_name, call)
    except ChannelNotFoundError as e:
        raise HTTPException(status_code=404, detail=e.message)

    return await asyncio.wrap_future(future)
