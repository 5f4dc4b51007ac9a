from __future__ import annotations

"""Crafting plan service.

Purpose: WebSocket gateway that executor clients connect to. A client sends a
plan request (item, count, inventory snapshot) and receives either the merged
plan or a single failure message it can surface to the player.

How: One connection per executor; each session owns its outstanding plan id
and a new request supersedes it (the client is told to cancel the old one).
Resolution runs in a worker thread so the receive loop stays responsive.

Engineering notes: Validate inputs defensively; keep handlers small; structured
logging with request and player ids; never let one bad request close the
connection.

"""

import asyncio
import json
import logging
import signal
import uuid
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional

import websockets
from websockets.asyncio.server import ServerConnection, serve

from .actions import to_step
from .catalog import Catalog, load_catalog
from .config import Settings, configure_logging, load_settings
from .data_files import load_aliases
from .names import normalize_item_name, suggestions, validate_and_correct_name
from .planner import describe_recipe, plan_craft
from .schemas import Plan, PlanFailed
from .selector import Preferences, load_default_preferences


logger = logging.getLogger("craftplan.server")


@dataclass
class Session:
    player_uuid: Optional[str]
    websocket: ServerConnection
    authenticated: bool = False
    active_request_id: Optional[str] = None
    active_plan_id: Optional[str] = None


def _load_aliases_or_empty() -> Dict[str, str]:
    try:
        return load_aliases()
    except FileNotFoundError:
        return {}


def inventory_counts(raw: Any) -> Dict[str, int]:
    """Accept {name: count} or [{name|id, count}] and return summed counts by bare name."""
    counts: Dict[str, int] = {}
    if isinstance(raw, dict):
        pairs = list(raw.items())
    elif isinstance(raw, list):
        pairs = []
        for slot in raw:
            if isinstance(slot, dict):
                pairs.append((slot.get("name") or slot.get("id"), slot.get("count", 0)))
    else:
        return counts
    for name, count in pairs:
        if not isinstance(name, str) or not name:
            continue
        try:
            c = int(count)
        except (TypeError, ValueError):
            logger.warning("ignoring inventory slot %s with count %r", name, count)
            continue
        if c <= 0:
            continue
        key = normalize_item_name(name)
        counts[key] = counts.get(key, 0) + c
    return counts


class PlanServer:
    def __init__(
        self,
        settings: Optional[Settings] = None,
        catalog: Optional[Catalog] = None,
        prefs: Optional[Preferences] = None,
        aliases: Optional[Mapping[str, str]] = None,
    ) -> None:
        self.settings = settings or load_settings()
        self.catalog = catalog or load_catalog()
        self.prefs = prefs or load_default_preferences()
        self.aliases: Mapping[str, str] = aliases if aliases is not None else _load_aliases_or_empty()
        self.sessions: Dict[ServerConnection, Session] = {}
        self._shutdown_event = asyncio.Event()

    async def start(self) -> None:
        configure_logging(self.settings.log_level)
        host = self.settings.host
        port = self.settings.port

        logger.info("listening on %s:%s", host, port)

        async with serve(self._handle_client, host, port):
            await self._shutdown_event.wait()

    async def stop(self) -> None:
        self._shutdown_event.set()

    async def _handle_client(self, websocket: ServerConnection) -> None:
        session = Session(player_uuid=None, websocket=websocket)
        self.sessions[websocket] = session
        client = f"{websocket.remote_address}"
        logger.info("client connected: %s", client)
        try:
            async for raw in websocket:
                try:
                    msg = json.loads(raw)
                except ValueError:
                    logger.warning("invalid JSON from %s", client)
                    continue
                if not isinstance(msg, dict):
                    logger.warning("non-object message from %s", client)
                    continue
                if not await self.handle_message(session, msg):
                    return
        except websockets.ConnectionClosedError:
            logger.info("client disconnected: %s", client)
        finally:
            self.sessions.pop(websocket, None)

    async def handle_message(self, session: Session, msg: Dict[str, Any]) -> bool:
        """Dispatch one decoded message. Returns False when the connection was closed."""
        mtype = msg.get("type")
        if mtype == "handshake":
            return await self._on_handshake(session, msg)

        if mtype == "ping":
            await self._send_json(session.websocket, {"type": "pong"})
            return True

        if not session.authenticated:
            logger.info("%s before handshake from %s; closing", mtype, session.websocket.remote_address)
            await session.websocket.close(code=1008, reason="auth_required")
            return False

        if mtype == "plan_request":
            await self._on_plan_request(session, msg)
        elif mtype == "recipe_request":
            await self._on_recipe_request(session, msg)
        elif mtype == "progress_update":
            self._on_progress(session, msg)
        else:
            logger.debug("unhandled message type: %s", mtype)
        return True

    async def _on_handshake(self, session: Session, msg: Dict[str, Any]) -> bool:
        pid = msg.get("player_uuid")
        provided_pw = msg.get("password")
        if not isinstance(provided_pw, str) or provided_pw != self.settings.password:
            logger.info("handshake rejected for %s: auth_failed", pid)
            await session.websocket.close(code=1008, reason="auth_failed")
            return False
        session.player_uuid = pid if isinstance(pid, str) and pid else None
        session.authenticated = True
        logger.info("handshake from %s", session.player_uuid or "unknown")
        await self._send_json(session.websocket, {"type": "handshake_ack", "player_uuid": session.player_uuid})
        return True

    def _resolve_name(self, text: str) -> tuple[Optional[str], str]:
        name = normalize_item_name(text, self.aliases)
        match = validate_and_correct_name(name, self.catalog)
        if match.valid and match.corrected != name:
            logger.info("auto-corrected %r to %r", text, match.corrected)
        return match.corrected, name

    async def _on_plan_request(self, session: Session, msg: Dict[str, Any]) -> None:
        request_id = str(msg.get("request_id") or uuid.uuid4())
        player_id = session.player_uuid or "unknown"
        item_text = str(msg.get("item", ""))
        raw_count = msg.get("count", 1)
        try:
            count = int(raw_count)
        except (TypeError, ValueError):
            logger.warning("plan request %s: invalid count %r, using 1", request_id, raw_count)
            count = 1
        logger.info("plan request %s from %s: %s x%s", request_id, player_id, item_text, count)

        # a new top-level request always supersedes the outstanding plan
        if session.active_request_id is not None:
            await self._send_json(session.websocket, {"type": "cancel", "request_id": session.active_request_id})
            session.active_request_id = None
            session.active_plan_id = None

        item, normalized = self._resolve_name(item_text)
        if item is None:
            failed: PlanFailed = {
                "type": "plan_failed",
                "request_id": request_id,
                "item": normalized,
                "kind": "unknown_item",
                "reason": f'I don\'t know what "{item_text}" is.',
                "suggestions": suggestions(normalized, self.catalog),
            }
            await self._send_json(session.websocket, failed)
            return

        inv = inventory_counts(msg.get("inventory"))
        result = await asyncio.to_thread(
            plan_craft,
            item,
            count,
            self.catalog,
            inv,
            prefs=self.prefs,
            max_depth=self.settings.max_resolve_depth,
        )
        if not result.feasible:
            failed = {
                "type": "plan_failed",
                "request_id": request_id,
                "item": item,
                "kind": result.kind,  # type: ignore[union-attr]
                "reason": result.reason,  # type: ignore[union-attr]
                "suggestions": [],
            }
            await self._send_json(session.websocket, failed)
            return

        plan: Plan = {
            "type": "plan",
            "plan_id": str(uuid.uuid4()),
            "request_id": request_id,
            "item": item,
            "count": count,
            "steps": [to_step(a) for a in result.actions],  # type: ignore[union-attr]
        }
        session.active_request_id = request_id
        session.active_plan_id = plan["plan_id"]
        await self._send_json(session.websocket, plan)

    async def _on_recipe_request(self, session: Session, msg: Dict[str, Any]) -> None:
        request_id = str(msg.get("request_id") or uuid.uuid4())
        item, normalized = self._resolve_name(str(msg.get("item", "")))
        info = describe_recipe(item or normalized, self.catalog, self.prefs)
        await self._send_json(session.websocket, {
            "type": "recipe_info",
            "request_id": request_id,
            "item": item or normalized,
            **info,
        })

    def _on_progress(self, session: Session, msg: Dict[str, Any]) -> None:
        player_id = session.player_uuid or "unknown"
        logger.info(
            "progress_update from %s: plan_id=%s step=%s status=%s note=%s",
            player_id,
            msg.get("plan_id"),
            msg.get("step"),
            msg.get("status"),
            msg.get("note"),
        )
        # the executor drops its whole queue on failure; forget the plan too
        if msg.get("status") in {"fail", "cancelled"} and msg.get("plan_id") == session.active_plan_id:
            session.active_request_id = None
            session.active_plan_id = None

    async def _send_json(self, websocket: ServerConnection, obj: Mapping[str, Any]) -> None:
        await websocket.send(json.dumps(obj, separators=(",", ":")))


def main() -> None:
    server = PlanServer()

    loop = asyncio.new_event_loop()
    asyncio.set_event_loop(loop)

    def _signal_handler() -> None:
        logger.info("shutdown requested")
        loop.create_task(server.stop())

    for sig in (signal.SIGINT, signal.SIGTERM):
        try:
            loop.add_signal_handler(sig, _signal_handler)
        except NotImplementedError:
            # Signals not supported on some platforms (e.g., Windows)
            pass

    try:
        loop.run_until_complete(server.start())
    finally:
        loop.run_until_complete(loop.shutdown_asyncgens())
        loop.close()


if __name__ == "__main__":
    main()
