"""Read-only HTTP endpoints for the draft room."""

import logging
from typing import Dict, List, Optional

from fastapi import APIRouter, HTTPException, Request

from src.draft_room.broadcast_gateway import BroadcastGateway
from src.draft_room.errors import NotComplete

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["draft"])


def _gateway(request: Request) -> BroadcastGateway:
    return request.app.state.gateway


@router.get("/state")
async def get_state(request: Request) -> Dict:
    """Current draft snapshot."""
    return _gateway(request).snapshot()


@router.get("/players")
async def get_players(request: Request, position: Optional[str] = None) -> List[Dict]:
    """Undrafted players, optionally filtered by position ("ALL" = no filter)."""
    return _gateway(request).available_items(position)


@router.get("/results")
async def get_results(request: Request) -> Dict:
    """Final results; only available once the draft is complete."""
    try:
        return _gateway(request).engine.get_results()
    except NotComplete as e:
        raise HTTPException(status_code=400, detail=e.message)
