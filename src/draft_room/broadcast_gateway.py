"""Fan-out of draft state and events to every connected observer.

The gateway is transport-agnostic: ``emitter`` is anything with an
``async emit(event, data=None, to=None)`` and
``async enter_room(sid, room)`` method, such as a ``socketio.AsyncServer``.
Broadcasts go to ``DRAFT_ROOM``, which a connection only joins once its
initial sync has been sent.
"""

import asyncio
import logging
from typing import Any, Awaitable, Callable, Dict, List, Optional

from src.draft_room.chat_log import ChatLog
from src.draft_room.draft_engine import DraftEngine
from src.draft_room.errors import ValidationError
from src.draft_room.results_export import ResultsExporter

logger = logging.getLogger(__name__)

DRAFT_ROOM = "draft"


def build_snapshot(engine: DraftEngine) -> Dict:
    """Serializable view of the full draft state.

    The drafted-id set goes out as a sorted list, spectators as id and name
    only, and no connection ids are exposed.
    """
    with engine.lock:
        state = engine.draft_state
        current = state.get_current_team()
        return {
            "session_token": state.session_token,
            "phase": state.phase.value,
            "paused": state.paused,
            "teams": [
                {
                    "team_id": team.team_id,
                    "name": team.name,
                    "connected": team.is_connected,
                    "picks_made": team.get_total_items(),
                    "roster": engine.get_team_roster(team),
                    "roster_status": engine.policy.get_roster_summary(team),
                }
                for team in state.teams
            ],
            "spectators": [
                {"spectator_id": s.spectator_id, "name": s.name}
                for s in state.spectators
            ],
            "pick_order": list(state.pick_order),
            "current_pick_index": state.current_pick_index,
            "current_team_id": current.team_id if current else None,
            "picks": [pick.to_dict() for pick in state.picks],
            "drafted_item_ids": sorted(state.drafted_item_ids),
        }


def _payload_value(data: Any, key: str) -> Any:
    """Pull ``key`` out of an event payload; bare values are used as-is."""
    if isinstance(data, dict):
        return data.get(key)
    return data


def _parse_pick_number(value: Any) -> Optional[int]:
    """Accept an int or a string of digits; anything else becomes None."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str) and value.strip().isdigit():
        return int(value.strip())
    return None


class BroadcastGateway:
    """Routes inbound actions to the engine and pushes the results out.

    One asyncio lock covers each action and the broadcasts that follow it,
    so every observer sees snapshots in commit order.
    """

    def __init__(
        self,
        engine: DraftEngine,
        emitter,
        chat_log: Optional[ChatLog] = None,
        exporter: Optional[ResultsExporter] = None,
    ):
        self.engine = engine
        self.emitter = emitter
        self.chat_log = chat_log or ChatLog(engine.registry, lock=engine.lock)
        self.exporter = exporter
        self._lock = asyncio.Lock()
        self._pending_exports = set()

        if exporter is not None:
            engine.on_complete = self._schedule_export

    # ------------------------------------------------------------------
    # Outbound helpers
    # ------------------------------------------------------------------
    def snapshot(self) -> Dict:
        return build_snapshot(self.engine)

    def available_items(self, category: Optional[str] = None) -> List[Dict]:
        return [item.to_dict() for item in self.engine.get_available_items(category)]

    async def _broadcast(self, event: str, data: Any):
        await self.emitter.emit(event, data, to=DRAFT_ROOM)

    async def _send(self, sid: str, event: str, data: Any):
        await self.emitter.emit(event, data, to=sid)

    async def _broadcast_snapshot(self):
        await self._broadcast("snapshot", self.snapshot())

    async def _reject(self, sid: str, error: ValidationError):
        logger.warning("Rejected action from %s: %s", sid, error.message)
        await self._send(
            sid, "action_rejected", {"reason": error.reason, "message": error.message}
        )

    async def _attempt(self, sid: str, action: Callable, *args):
        """Run an engine action; report a rule violation to the actor only.

        Returns (ok, result).
        """
        try:
            return True, action(*args)
        except ValidationError as e:
            await self._reject(sid, e)
            return False, None

    # ------------------------------------------------------------------
    # Connection lifecycle
    # ------------------------------------------------------------------
    async def on_connect(self, sid: str):
        """Initial sync: state and available players before anything else."""
        async with self._lock:
            logger.info("Client connected: %s", sid)
            await self._send(sid, "snapshot", self.snapshot())
            await self._send(sid, "available_items_updated", self.available_items())
            # Joined last so no broadcast can arrive ahead of the sync
            await self.emitter.enter_room(sid, DRAFT_ROOM)

    async def on_disconnect(self, sid: str):
        async with self._lock:
            self.engine.disconnect(sid)
            logger.info("Client disconnected: %s", sid)

    # ------------------------------------------------------------------
    # Inbound actions
    # ------------------------------------------------------------------
    async def on_join(self, sid: str, data: Any = None):
        async with self._lock:
            ok, team = await self._attempt(
                sid, self.engine.join, _payload_value(data, "name"), sid
            )
            if not ok:
                return
            await self._send(sid, "joined", {"team_id": team.team_id, "team_name": team.name})
            await self._broadcast_snapshot()

    async def on_join_as_spectator(self, sid: str, data: Any = None):
        async with self._lock:
            ok, spectator = await self._attempt(
                sid, self.engine.join_as_spectator, _payload_value(data, "name"), sid
            )
            if not ok:
                return
            await self._send(
                sid,
                "joined_as_spectator",
                {"spectator_id": spectator.spectator_id, "spectator_name": spectator.name},
            )
            await self._broadcast_snapshot()

    async def on_start(self, sid: str, data: Any = None):
        async with self._lock:
            ok, pick_order = await self._attempt(sid, self.engine.start)
            if not ok:
                return
            await self._broadcast("draft_started", {"pick_order": pick_order})
            await self._broadcast_snapshot()

    async def on_pick(self, sid: str, data: Any = None):
        async with self._lock:
            ok, pick = await self._attempt(
                sid, self.engine.pick, sid, _payload_value(data, "item_id")
            )
            if not ok:
                return

            team = self.engine.registry.team_by_id(pick.team_id)
            item = self.engine.pool.get(pick.item_id)
            await self._broadcast(
                "item_drafted",
                {
                    "item_id": item.item_id,
                    "team_id": team.team_id,
                    "team_name": team.name,
                    "item_name": item.name,
                    "item_category": item.category.value,
                    "item_group": item.group,
                    "pick_number": pick.pick_number,
                },
            )
            await self._broadcast_snapshot()
            await self._broadcast("available_items_updated", self.available_items())

    async def on_pause(self, sid: str, data: Any = None):
        async with self._lock:
            ok, _ = await self._attempt(sid, self.engine.pause, sid)
            if ok:
                await self._broadcast_snapshot()

    async def on_resume(self, sid: str, data: Any = None):
        async with self._lock:
            ok, _ = await self._attempt(sid, self.engine.resume, sid)
            if ok:
                await self._broadcast_snapshot()

    async def on_undo(self, sid: str, data: Any = None):
        # None is reported as PickNotFound after the auth checks
        pick_number = _parse_pick_number(_payload_value(data, "pick_number"))

        async with self._lock:
            ok, _ = await self._attempt(sid, self.engine.undo, sid, pick_number)
            if not ok:
                return
            await self._broadcast_snapshot()
            await self._broadcast("available_items_updated", self.available_items())

    async def on_chat_post(self, sid: str, data: Any = None):
        async with self._lock:
            message = self.chat_log.post(sid, _payload_value(data, "text"))
            if message is not None:
                await self._broadcast("chat_message", message.to_dict())

    async def on_chat_history_request(self, sid: str, data: Any = None):
        async with self._lock:
            await self._send(
                sid, "chat_history", [m.to_dict() for m in self.chat_log.history()]
            )

    # ------------------------------------------------------------------
    # Results export
    # ------------------------------------------------------------------
    def _schedule_export(self, results: Dict) -> Optional[Awaitable]:
        """Write results on a worker thread without holding up later actions."""
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            self._export(results)
            return None

        future = loop.run_in_executor(None, self._export, results)
        self._pending_exports.add(future)
        future.add_done_callback(self._pending_exports.discard)
        return future

    def _export(self, results: Dict):
        try:
            self.exporter.save_results(results)
        except Exception:
            # Runs on a worker thread; nothing awaits the outcome
            logger.exception("Error saving draft results")

    async def wait_for_exports(self):
        """Wait for any in-flight result exports (used at shutdown and in tests)."""
        if self._pending_exports:
            await asyncio.gather(*list(self._pending_exports))
