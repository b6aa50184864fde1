"""WebSocket plumbing: per-diagram client connections and pointer dispatch."""
import json
import logging
from typing import Any

from fastapi import WebSocket, WebSocketDisconnect

from ..engine.diagram import Diagram
from ..engine.gesture import Drawing, GestureState, Snapped
from ..engine.wires import Edge
from ..models.schemas import GestureStateSchema, PointerEvent

logger = logging.getLogger(__name__)


class ConnectionManager:
    """Tracks the browser clients attached to each diagram."""

    def __init__(self):
        self._clients: dict[str, list[WebSocket]] = {}

    async def connect(self, session_id: str, websocket: WebSocket):
        await websocket.accept()
        self._clients.setdefault(session_id, []).append(websocket)
        logger.info(f"Client attached to diagram '{session_id}'")

    def disconnect(self, session_id: str, websocket: WebSocket):
        clients = self._clients.get(session_id)
        if clients is None:
            return
        remaining = [ws for ws in clients if ws is not websocket]
        if remaining:
            self._clients[session_id] = remaining
        else:
            del self._clients[session_id]

    def client_count(self, session_id: str) -> int:
        return len(self._clients.get(session_id, ()))

    async def send_to_session(self, session_id: str, data: dict[str, Any]):
        """Send ``data`` to every client of a diagram, dropping clients that fail."""
        clients = tuple(self._clients.get(session_id, ()))
        if not clients:
            return
        message = json.dumps(data)
        for ws in clients:
            try:
                await ws.send_text(message)
            except (RuntimeError, OSError, WebSocketDisconnect) as e:
                logger.warning(f"Dropping client of diagram '{session_id}': {e}")
                self.disconnect(session_id, ws)


manager = ConnectionManager()


def describe_gesture(state: GestureState) -> GestureStateSchema:
    if isinstance(state, Snapped):
        return GestureStateSchema(state="snapped", source=state.source_key,
                                  target=state.target_key)
    if isinstance(state, Drawing):
        return GestureStateSchema(state="drawing", source=state.source_key)
    return GestureStateSchema(state="idle")


def dispatch_pointer_event(diagram: Diagram, event: PointerEvent) -> Edge | None:
    """Feed one client pointer event into the diagram's connection gesture.

    Returns the wire committed by a ``pointer_up``, if any.
    """
    gesture = diagram.gesture
    if event.event in ("pointer_down", "pointer_enter", "pointer_leave") and not event.key:
        raise ValueError(f"'{event.event}' needs a connector key")

    if event.event == "pointer_down":
        gesture.pointer_down(event.key, event.x, event.y)
    elif event.event == "pointer_drag":
        gesture.pointer_drag(event.x, event.y)
    elif event.event == "pointer_up":
        return gesture.pointer_up(event.x, event.y)
    elif event.event == "pointer_enter":
        gesture.pointer_enter(event.key)
    elif event.event == "pointer_leave":
        gesture.pointer_leave(event.key)
    else:
        gesture.cancel()
    return None
