"""Renderer that turns wiring callbacks into draw commands for a browser client.

Connector positions come from node rectangles. Commands are queued as plain
dicts and drained after each request or pointer event, then sent over the
diagram's WebSocket.
"""
from typing import Any, Mapping

from ..engine.connector import Connector, ConnectorKind
from ..engine.geometry import Point, line_path, wire_path
from ..engine.wires import Edge
from ..nodes.base import Node

SOURCE_EVENTS = ["pointer_down", "pointer_drag", "pointer_up"]
SINK_EVENTS = ["pointer_enter", "pointer_leave"]


class SceneRenderer:

    def __init__(self, nodes: Mapping[str, Node]):
        self._nodes = nodes
        self._commands: list[dict[str, Any]] = []

    def drain(self) -> list[dict[str, Any]]:
        commands, self._commands = self._commands, []
        return commands

    @property
    def pending(self) -> int:
        return len(self._commands)

    def connector_center(self, connector: Connector) -> Point:
        node = self._nodes.get(connector.owner_node_id)
        if node is None:
            return Point(0, 0)
        return node.connector_center(connector)

    def draw_wire(self, edge: Edge, start: Point, end: Point) -> None:
        self._commands.append({
            "type": "wire.draw", "key": edge.key,
            "source": edge.source.id, "target": edge.target.id,
            "color": edge.color, "path": wire_path(start, end),
        })

    def move_wire(self, edge: Edge, start: Point, end: Point) -> None:
        self._commands.append({
            "type": "wire.move", "key": edge.key, "path": wire_path(start, end),
        })

    def erase_wire(self, edge: Edge) -> None:
        self._commands.append({"type": "wire.erase", "key": edge.key})

    def draw_preview(self, start: Point, end: Point) -> None:
        self._commands.append({"type": "preview.draw", "path": line_path(start, end)})

    def move_preview(self, start: Point, end: Point) -> None:
        self._commands.append({"type": "preview.move", "path": line_path(start, end)})

    def erase_preview(self) -> None:
        self._commands.append({"type": "preview.erase"})

    def arm_connector(self, key: str, kind: ConnectorKind) -> None:
        events = SOURCE_EVENTS if kind == ConnectorKind.SOURCE else SINK_EVENTS
        self._commands.append({"type": "connector.arm", "key": key, "events": events})

    def disarm_connector(self, key: str) -> None:
        self._commands.append({"type": "connector.disarm", "key": key})
