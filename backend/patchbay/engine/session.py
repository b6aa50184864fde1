"""Diagram session manager: tracks the live diagrams served by the API."""
import asyncio
import logging
import uuid

from ..config import settings
from .diagram import Diagram

logger = logging.getLogger(__name__)


class DiagramSession:
    def __init__(self, session_id: str, diagram: Diagram):
        self.session_id = session_id
        self.diagram = diagram
        # REST edits and pointer events for one diagram are applied one at a time
        self.lock = asyncio.Lock()


_sessions: dict[str, DiagramSession] = {}


def create_session(diagram: Diagram, session_id: str | None = None) -> DiagramSession:
    session_id = session_id or str(uuid.uuid4())
    while len(_sessions) >= settings.max_sessions:
        oldest = next(iter(_sessions))
        logger.info(f"Evicting diagram session '{oldest}'")
        remove_session(oldest)
    session = DiagramSession(session_id, diagram)
    _sessions[session_id] = session
    return session


def get_session(session_id: str) -> DiagramSession | None:
    return _sessions.get(session_id)


def remove_session(session_id: str) -> None:
    session = _sessions.pop(session_id, None)
    if session is not None:
        session.diagram.gesture.cancel()


def clear_sessions() -> None:
    for session_id in list(_sessions):
        remove_session(session_id)
