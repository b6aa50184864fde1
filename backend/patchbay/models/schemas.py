"""Pydantic schemas for API request/response models."""
from typing import Literal

from pydantic import BaseModel, Field


class ScopeSchema(BaseModel):
    name: str
    color: str


class ConnectorSchema(BaseModel):
    name: str
    scopes: list[str] = Field(min_length=1)
    label: str = ""


class NodeSettingsSchema(BaseModel):
    x: float = 0
    y: float = 0
    width: float = 250
    color: str = "#000055"
    font_color: str = "white"
    border_color: str = "black"
    can_remove: bool = True
    label: str = ""
    description: str = ""
    inputs: list[ConnectorSchema] = []
    outputs: list[ConnectorSchema] = []


class NodeSchema(NodeSettingsSchema):
    id: str
    node_type: str | None = None


class ConnectorInfo(BaseModel):
    key: str
    kind: Literal["input", "output"]
    node_id: str
    scopes: list[str]
    color: str
    connections: list[str] = []


class WireSchema(BaseModel):
    source: str
    target: str


class WireResponse(BaseModel):
    key: str
    source: str
    target: str
    scope: str | None = None
    color: str


class DiagramSchema(BaseModel):
    scopes: list[ScopeSchema] = []
    nodes: list[NodeSchema] = []
    wires: list[WireSchema] = []


class CreateDiagramRequest(BaseModel):
    raster: int | None = None
    scopes: list[ScopeSchema] = []


class CreateDiagramResponse(BaseModel):
    diagram_id: str


class CreateNodeRequest(BaseModel):
    node_type: str | None = None
    settings: NodeSettingsSchema | None = None
    x: float | None = None
    y: float | None = None
    label: str | None = None


class UpdateNodeRequest(BaseModel):
    x: float | None = None
    y: float | None = None
    label: str | None = None


class PointerEvent(BaseModel):
    event: Literal[
        "pointer_down", "pointer_drag", "pointer_up",
        "pointer_enter", "pointer_leave", "cancel",
    ]
    key: str | None = None
    x: float = 0
    y: float = 0


class GestureStateSchema(BaseModel):
    state: Literal["idle", "drawing", "snapped"]
    source: str | None = None
    target: str | None = None
