"""Application assembly: engine, gateway, Socket.IO and FastAPI."""

import logging
import random
from pathlib import Path
from typing import Optional

import socketio
from fastapi import FastAPI

from src.draft_room.broadcast_gateway import BroadcastGateway
from src.draft_room.draft_engine import DraftEngine
from src.draft_room.results_export import ResultsExporter
from src.player_pool.item_pool import ItemPool
from src.server.routes import router
from src.server.socketio_server import create_socketio_server, register_handlers

logger = logging.getLogger(__name__)


def create_api(gateway: BroadcastGateway) -> FastAPI:
    """FastAPI app serving the read endpoints for one gateway."""
    api = FastAPI(title="Playoff Draft Room", version="1.0.0")
    api.state.gateway = gateway
    api.include_router(router)
    return api


def create_app(
    pool: ItemPool,
    results_dir: Optional[Path] = None,
    cors_origins="*",
    rng: Optional[random.Random] = None,
) -> socketio.ASGIApp:
    """Build the Socket.IO-wrapped FastAPI app for a loaded player pool."""
    engine = DraftEngine(pool, rng=rng)
    sio = create_socketio_server(cors_origins)
    gateway = BroadcastGateway(engine, sio, exporter=ResultsExporter(results_dir))
    register_handlers(sio, gateway)

    logger.info("Draft ID: %s", engine.draft_state.session_token)
    return socketio.ASGIApp(sio, other_asgi_app=create_api(gateway))
