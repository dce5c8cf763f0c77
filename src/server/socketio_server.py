"""Socket.IO server wiring for the draft room.

Each inbound event is handed to the BroadcastGateway, which owns ordering,
validation feedback and fan-out.
"""

import logging
from typing import Any, Dict, Optional

import socketio

from src.draft_room.broadcast_gateway import BroadcastGateway

logger = logging.getLogger(__name__)

# Inbound event name -> gateway handler name
ACTION_EVENTS = {
    "join": "on_join",
    "join_as_spectator": "on_join_as_spectator",
    "start": "on_start",
    "pick": "on_pick",
    "pause": "on_pause",
    "resume": "on_resume",
    "undo": "on_undo",
    "chat_post": "on_chat_post",
    "chat_history_request": "on_chat_history_request",
}


def create_socketio_server(cors_origins="*") -> socketio.AsyncServer:
    """Create the async Socket.IO server."""
    return socketio.AsyncServer(
        async_mode="asgi",
        cors_allowed_origins=cors_origins,
        ping_timeout=30,
        ping_interval=25,
        logger=False,
        engineio_logger=False,
    )


def register_handlers(sio: socketio.AsyncServer, gateway: BroadcastGateway):
    """Route Socket.IO events to the gateway."""

    @sio.event
    async def connect(sid: str, environ: Dict, auth: Optional[Dict] = None):
        await gateway.on_connect(sid)

    @sio.event
    async def disconnect(sid: str, *args):
        await gateway.on_disconnect(sid)

    for event, handler_name in ACTION_EVENTS.items():
        sio.on(event, _make_handler(getattr(gateway, handler_name)))

    logger.debug("Registered %d Socket.IO action events", len(ACTION_EVENTS))


def _make_handler(gateway_handler):
    async def handler(sid: str, data: Any = None):
        await gateway_handler(sid, data)

    return handler
