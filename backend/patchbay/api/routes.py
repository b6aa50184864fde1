"""REST API routes."""
import logging
from dataclasses import asdict
from typing import Any

from fastapi import APIRouter, HTTPException

from ..engine.diagram import Diagram
from ..engine.scopes import connector_color
from ..engine.session import DiagramSession, create_session, get_session, remove_session
from ..engine.wires import Edge, WiringInvariantError
from ..models.schemas import (
    ConnectorInfo, CreateDiagramRequest, CreateDiagramResponse, CreateNodeRequest,
    DiagramSchema, NodeSchema, ScopeSchema, UpdateNodeRequest,
    WireResponse, WireSchema,
)
from ..nodes.base import Node, NodeSettings
from ..nodes.registry import NodeRegistry
from .scene import SceneRenderer
from .websocket import manager

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api")


def _session_or_404(diagram_id: str) -> DiagramSession:
    session = get_session(diagram_id)
    if session is None:
        raise HTTPException(status_code=404, detail="Diagram not found")
    return session


def _node_or_404(session: DiagramSession, node_id: str) -> Node:
    node = session.diagram.get_node(node_id)
    if node is None:
        raise HTTPException(status_code=404, detail="Node not found")
    return node


def _wire_response(edge: Edge) -> WireResponse:
    return WireResponse(
        key=edge.key, source=edge.source.id, target=edge.target.id,
        scope=edge.scope, color=edge.color,
    )


async def flush_commands(session: DiagramSession) -> None:
    """Push queued renderer commands to the diagram's WebSocket clients."""
    renderer = session.diagram.renderer
    if not isinstance(renderer, SceneRenderer) or not renderer.pending:
        return
    await manager.send_to_session(session.session_id, {
        "type": "commands", "commands": renderer.drain(),
    })


def new_diagram(raster: int | None = None,
                scopes: list[ScopeSchema] | None = None) -> DiagramSession:
    diagram = Diagram(raster=raster)
    diagram.set_renderer(SceneRenderer(diagram.nodes))
    for scope in scopes or []:
        diagram.define_scope(scope.name, scope.color)
    return create_session(diagram)


@router.get("/node-types")
async def list_node_types():
    """Return all registered node-type definitions."""
    return {
        name: asdict(defn)
        for name, defn in NodeRegistry.all_definitions().items()
    }


@router.get("/node-types/palette")
async def node_palette():
    """Node-type names grouped by palette category."""
    return NodeRegistry.by_category()


@router.post("/diagrams", response_model=CreateDiagramResponse)
async def create_diagram(request: CreateDiagramRequest):
    session = new_diagram(request.raster, request.scopes)
    logger.info(f"Created diagram '{session.session_id}'")
    return CreateDiagramResponse(diagram_id=session.session_id)


@router.get("/diagrams/{diagram_id}", response_model=DiagramSchema)
async def get_diagram(diagram_id: str):
    session = _session_or_404(diagram_id)
    return session.diagram.export_json()


@router.delete("/diagrams/{diagram_id}")
async def delete_diagram(diagram_id: str):
    _session_or_404(diagram_id)
    remove_session(diagram_id)
    return {"status": "deleted"}


@router.post("/diagrams/{diagram_id}/import")
async def import_diagram(diagram_id: str, data: DiagramSchema):
    session = _session_or_404(diagram_id)
    async with session.lock:
        try:
            added = session.diagram.import_json(data.model_dump())
        except ValueError as e:
            raise HTTPException(status_code=400, detail=str(e))
        except WiringInvariantError as e:
            raise HTTPException(status_code=409, detail=str(e))
        await flush_commands(session)
    return {"added": [_wire_response(e) for e in added]}


@router.post("/diagrams/{diagram_id}/scopes", response_model=ScopeSchema)
async def define_scope(diagram_id: str, scope: ScopeSchema):
    session = _session_or_404(diagram_id)
    session.diagram.define_scope(scope.name, scope.color)
    return scope


@router.post("/diagrams/{diagram_id}/nodes", response_model=NodeSchema)
async def add_node(diagram_id: str, request: CreateNodeRequest):
    session = _session_or_404(diagram_id)
    overrides: dict[str, Any] = {
        k: v for k, v in (("x", request.x), ("y", request.y), ("label", request.label))
        if v is not None
    }

    if request.settings is not None:
        node_settings = NodeSettings.from_dict({**request.settings.model_dump(), **overrides})
    elif request.node_type is not None:
        if not NodeRegistry.has(request.node_type):
            raise HTTPException(status_code=400,
                                detail=f"Unknown node type: {request.node_type}")
        node_settings = NodeRegistry.settings_for(request.node_type, **overrides)
    else:
        raise HTTPException(status_code=400, detail="Either node_type or settings is required")

    async with session.lock:
        try:
            node = session.diagram.add_node(node_settings, node_type=request.node_type)
        except ValueError as e:
            raise HTTPException(status_code=400, detail=str(e))
        except WiringInvariantError as e:
            raise HTTPException(status_code=409, detail=str(e))
        await flush_commands(session)
    return node.settings_snapshot()


@router.patch("/diagrams/{diagram_id}/nodes/{node_id}")
async def update_node(diagram_id: str, node_id: str, request: UpdateNodeRequest):
    session = _session_or_404(diagram_id)
    node = _node_or_404(session, node_id)
    redrawn: list[Edge] = []
    async with session.lock:
        if request.label is not None:
            node.set_label(request.label)
        if request.x is not None or request.y is not None:
            x = node.settings.x if request.x is None else request.x
            y = node.settings.y if request.y is None else request.y
            redrawn = session.diagram.move_node(node_id, x, y)
        await flush_commands(session)
    return {"node": node.settings_snapshot(), "redrawn": [e.key for e in redrawn]}


@router.delete("/diagrams/{diagram_id}/nodes/{node_id}")
async def delete_node(diagram_id: str, node_id: str):
    session = _session_or_404(diagram_id)
    node = _node_or_404(session, node_id)
    if not node.settings.can_remove:
        raise HTTPException(status_code=409, detail="Node cannot be removed")
    async with session.lock:
        session.diagram.remove_node(node_id)
        await flush_commands(session)
    return {"status": "deleted"}


@router.get("/diagrams/{diagram_id}/wires", response_model=list[WireSchema])
async def list_wires(diagram_id: str):
    session = _session_or_404(diagram_id)
    return session.diagram.export_wires()


@router.post("/diagrams/{diagram_id}/wires")
async def add_wire(diagram_id: str, wire: WireSchema):
    session = _session_or_404(diagram_id)
    async with session.lock:
        edge = session.diagram.add_wire(wire.source, wire.target)
        await flush_commands(session)
    if edge is None:
        return {"created": False, "wire": None}
    return {"created": True, "wire": _wire_response(edge)}


@router.delete("/diagrams/{diagram_id}/wires/{key}")
async def delete_wire(diagram_id: str, key: str):
    session = _session_or_404(diagram_id)
    async with session.lock:
        edge = session.diagram.remove_wire(key)
        await flush_commands(session)
    if edge is None:
        raise HTTPException(status_code=404, detail="Wire not found")
    return {"status": "deleted"}


@router.get("/diagrams/{diagram_id}/connectors", response_model=list[ConnectorInfo])
async def list_connectors(diagram_id: str):
    """Live connectors with their handle color and current partners."""
    session = _session_or_404(diagram_id)
    diagram = session.diagram
    return [
        ConnectorInfo(
            key=key, kind=connector.kind.value, node_id=connector.owner_node_id,
            scopes=sorted(connector.scopes),
            color=connector_color(connector.scopes, diagram.scopes),
            connections=sorted(c.id for c in connector.connections()),
        )
        for key, connector in diagram.registry.connectors.items()
    ]
