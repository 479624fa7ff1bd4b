"""Conversation message relay over WebSocket.

Learn: clients connect to /ws and speak small JSON frames:

    {"type": "join", "room": "<conversation id>"}
    {"type": "leave", "room": "<conversation id>"}
    {"type": "broadcast", "room": "<conversation id>", "payload": <anything>}
    {"type": "ping"}

A broadcast is delivered to every OTHER connection in the room as

    {"type": "received", "room": "<conversation id>", "payload": <unchanged>}

The relay is a pass-through. Nothing is stored, there is no ack, no
ordering across senders, no presence and no backfill: whoever is not
connected when a message is relayed never sees it. Any connection may
join any room it knows the id of; the sender does not need to have joined
the room it broadcasts to.
"""

import json
import uuid
from collections import defaultdict
from typing import Any, Optional, Protocol

import structlog
from fastapi import APIRouter, WebSocket, WebSocketDisconnect
from starlette.websockets import WebSocketState

from bazaar.auth.dependencies import extract_credential
from bazaar.auth.tokens import verify_token
from bazaar.config import settings
from bazaar.errors import InvalidCredential

logger = structlog.get_logger()
router = APIRouter()


class Connection(Protocol):
    async def send_json(self, data: Any) -> None: ...


class RoomHub:
    """In-process room membership and fan-out.

    Connections are keyed by a per-socket id. All access happens on the
    event loop, so plain dicts suffice.
    """

    def __init__(self) -> None:
        self._rooms: dict[str, dict[str, Connection]] = defaultdict(dict)

    def join(self, room: str, conn_id: str, conn: Connection) -> None:
        self._rooms[room][conn_id] = conn

    def leave(self, room: str, conn_id: str) -> None:
        members = self._rooms.get(room)
        if members is None:
            return
        members.pop(conn_id, None)
        if not members:
            del self._rooms[room]

    def disconnect(self, conn_id: str) -> list[str]:
        """Drop a connection from every room. Returns the rooms it was in."""
        left = self.rooms_of(conn_id)
        for room in left:
            self.leave(room, conn_id)
        return left

    def members(self, room: str) -> list[str]:
        return list(self._rooms.get(room, {}))

    def rooms_of(self, conn_id: str) -> list[str]:
        return sorted(room for room, members in self._rooms.items() if conn_id in members)

    async def broadcast(
        self, room: str, payload: Any, sender_id: Optional[str] = None
    ) -> int:
        """Send payload to every member except the sender. Returns deliveries.

        A member whose send fails is dropped from the hub; the message is
        not retried or queued.
        """
        message = {"type": "received", "room": room, "payload": payload}
        delivered = 0
        for conn_id, conn in list(self._rooms.get(room, {}).items()):
            if conn_id == sender_id:
                continue
            try:
                await conn.send_json(message)
                delivered += 1
            except Exception as e:
                logger.info("relay.send_failed", room=room, conn_id=conn_id, error=str(e))
                self.disconnect(conn_id)
        return delivered


# Process-wide hub (one per worker)
hub = RoomHub()


def _room_of(frame: dict) -> Optional[str]:
    room = frame.get("room")
    if isinstance(room, bool) or not isinstance(room, (str, int)):
        return None
    room = str(room).strip()
    return room or None


async def handle_frame(websocket: WebSocket, raw: str, conn_id: str) -> None:
    """Apply one client frame. Bad frames get an error reply, never a close."""
    try:
        frame = json.loads(raw)
    except json.JSONDecodeError:
        await websocket.send_json({"type": "error", "error": "Frame is not valid JSON"})
        return
    if not isinstance(frame, dict):
        await websocket.send_json({"type": "error", "error": "Frame must be an object"})
        return

    kind = frame.get("type")
    if kind == "ping":
        await websocket.send_json({"type": "pong"})
        return

    if kind not in ("join", "leave", "broadcast"):
        await websocket.send_json({"type": "error", "error": f"Unknown frame type: {kind}"})
        return

    room = _room_of(frame)
    if room is None:
        await websocket.send_json({"type": "error", "error": "room is required"})
        return

    if kind == "join":
        hub.join(room, conn_id, websocket)
        logger.info("relay.joined", conn_id=conn_id, room=room)
        await websocket.send_json({"type": "joined", "room": room})
    elif kind == "leave":
        hub.leave(room, conn_id)
        logger.info("relay.left", conn_id=conn_id, room=room)
        await websocket.send_json({"type": "left", "room": room})
    else:
        delivered = await hub.broadcast(room, frame.get("payload"), sender_id=conn_id)
        logger.debug("relay.broadcast", conn_id=conn_id, room=room, delivered=delivered)


def _frame_text(message: dict) -> Optional[str]:
    """Text of a websocket.receive message. Binary frames are read as UTF-8."""
    text = message.get("text")
    if text is not None:
        return text
    data = message.get("bytes")
    if data is None:
        return None
    try:
        return data.decode("utf-8")
    except UnicodeDecodeError:
        return None


def _authenticate(websocket: WebSocket) -> Optional[str]:
    """User id from ?token=, Bearer header or auth cookie. None if absent.

    Raises InvalidCredential for a credential that does not verify.
    """
    token = websocket.query_params.get("token") or extract_credential(
        websocket.headers.get("Authorization"),
        websocket.cookies.get(settings.auth_cookie_name),
    )
    if not token:
        return None
    return verify_token(token).subject_user_id


@router.websocket("/ws")
async def relay_socket(websocket: WebSocket):
    """Relay endpoint.

    A credential is optional in development and required elsewhere
    (close code 4001). It identifies the connection in logs only; it does
    not restrict which rooms may be joined.
    """
    try:
        user_id = _authenticate(websocket)
    except InvalidCredential:
        await websocket.close(code=4001, reason="Invalid or expired token")
        return
    if user_id is None and settings.environment != "development":
        await websocket.close(code=4001, reason="Authentication required")
        return

    await websocket.accept()
    conn_id = uuid.uuid4().hex
    logger.info("relay.connected", conn_id=conn_id, user_id=user_id)

    try:
        while True:
            message = await websocket.receive()
            if message["type"] == "websocket.disconnect":
                break
            raw = _frame_text(message)
            if raw is None:
                await websocket.send_json(
                    {"type": "error", "error": "Binary frames must be UTF-8 JSON"}
                )
                continue
            await handle_frame(websocket, raw, conn_id)
    except WebSocketDisconnect:
        pass
    finally:
        rooms = hub.disconnect(conn_id)
        logger.info("relay.disconnected", conn_id=conn_id, rooms=rooms)
        if websocket.client_state == WebSocketState.CONNECTED:
            await websocket.close()
