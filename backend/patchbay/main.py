"""FastAPI application with CORS, lifespan, routes and the diagram WebSocket."""
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, WebSocket, WebSocketDisconnect
from fastapi.middleware.cors import CORSMiddleware
from pydantic import ValidationError

from .config import settings
from .api.routes import flush_commands, router
from .api.websocket import describe_gesture, dispatch_pointer_event, manager
from .engine.session import get_session
from .models.schemas import PointerEvent

logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup: trigger node-type auto-discovery
    from . import nodes  # noqa: F401
    yield


app = FastAPI(
    title=settings.app_name,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(router)


@app.websocket("/ws/diagram/{diagram_id}")
async def diagram_endpoint(websocket: WebSocket, diagram_id: str):
    session = get_session(diagram_id)
    if session is None:
        await websocket.close(code=4404)
        return

    await manager.connect(diagram_id, websocket)
    try:
        while True:
            raw = await websocket.receive_text()
            try:
                event = PointerEvent.model_validate_json(raw)
            except ValidationError as e:
                await websocket.send_json({"type": "error", "detail": str(e)})
                continue

            async with session.lock:
                try:
                    edge = dispatch_pointer_event(session.diagram, event)
                except ValueError as e:
                    await websocket.send_json({"type": "error", "detail": str(e)})
                    continue
                await flush_commands(session)

            await websocket.send_json({
                "type": "gesture",
                "state": describe_gesture(session.diagram.gesture.state).model_dump(),
                "committed": edge.key if edge is not None else None,
            })
    except WebSocketDisconnect:
        manager.disconnect(diagram_id, websocket)
        # last client gone: drop any half-drawn wire
        if manager.client_count(diagram_id) == 0:
            session.diagram.gesture.cancel()


def run():
    import uvicorn
    uvicorn.run(app, host=settings.host, port=settings.port, log_level=settings.log_level.lower())