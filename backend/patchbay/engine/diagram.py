"""Diagram container: scopes, nodes and the wiring core that connects them."""
import logging
import math
import re
from typing import Any, Iterable

from ..config import settings
from ..nodes.base import Node, NodeSettings
from ..nodes.registry import NodeRegistry
from .gesture import ConnectionGesture
from .renderer import Renderer
from .scopes import Scope
from .wires import Edge, WireRegistry

logger = logging.getLogger(__name__)

_NODE_ID = re.compile(r"^node-(\d+)$")


class Diagram:
    """One editable diagram.

    Owns the scope table, the nodes, the wire registry and the single
    connection gesture. Node ids are ``node-1``, ``node-2``, ... and are never
    handed out twice within the lifetime of a diagram.
    """

    def __init__(self, renderer: Renderer | None = None, raster: int | None = None):
        self.scopes: dict[str, Scope] = {}
        self.nodes: dict[str, Node] = {}
        self.raster = settings.default_raster if raster is None else raster
        self.registry = WireRegistry(renderer, self.scopes)
        self.gesture = ConnectionGesture(self.registry)
        self._last_id = 0

    @property
    def renderer(self) -> Renderer:
        return self.registry.renderer

    def set_renderer(self, renderer: Renderer) -> None:
        """Swap the drawing surface and re-arm every live connector on it."""
        self.gesture.cancel()
        self.registry.renderer = renderer
        for key, connector in self.registry.connectors.items():
            renderer.arm_connector(key, connector.kind)

    # -- Scopes --

    def define_scope(self, name: str, color: str) -> Scope:
        scope = Scope(name=name, color=color)
        self.scopes[name] = scope
        return scope

    def has_scope(self, name: str) -> bool:
        return name in self.scopes

    def get_scope(self, name: str) -> Scope | None:
        return self.scopes.get(name)

    # -- Nodes --

    def _next_node_id(self) -> str:
        self._last_id += 1
        while f"node-{self._last_id}" in self.nodes:
            self._last_id += 1
        return f"node-{self._last_id}"

    def _reserve_node_id(self, node_id: str) -> None:
        m = _NODE_ID.match(node_id)
        if m:
            self._last_id = max(self._last_id, int(m.group(1)))

    def add_node(self, node_settings: NodeSettings | None = None,
                 node_type: str | None = None, node_id: str | None = None) -> Node:
        """Create a node from explicit settings or from a registered node type."""
        if node_settings is None:
            if node_type is None:
                raise ValueError("add_node needs settings or a node type")
            node_settings = NodeRegistry.settings_for(node_type)

        if node_id is None:
            node_id = self._next_node_id()
        elif node_id in self.nodes:
            raise ValueError(f"Node id '{node_id}' is already in use")
        else:
            self._reserve_node_id(node_id)

        node = Node(node_id, self.registry, node_settings, node_type=node_type)
        self.nodes[node_id] = node
        logger.info(f"Added node '{node_id}' ({node_type or 'custom'})")
        return node

    def has_node(self, node_id: str) -> bool:
        return node_id in self.nodes

    def get_node(self, node_id: str) -> Node | None:
        return self.nodes.get(node_id)

    def remove_node(self, node_id: str) -> bool:
        node = self.nodes.pop(node_id, None)
        if node is None:
            return False
        node.destroy()
        logger.info(f"Removed node '{node_id}'")
        return True

    def remove_nodes(self, node_ids: Iterable[str]) -> None:
        for node_id in list(node_ids):
            self.remove_node(node_id)

    def remove_all_nodes(self) -> None:
        self.remove_nodes(self.nodes.keys())

    def move_node(self, node_id: str, x: float, y: float) -> list[Edge]:
        """Move a node, snapping to the raster if one is set, and redraw its wires."""
        node = self.nodes.get(node_id)
        if node is None:
            return []
        if self.raster > 0:
            x = math.floor(x / self.raster + 0.5) * self.raster
            y = math.floor(y / self.raster + 0.5) * self.raster
        node.move_to(x, y)
        return self.registry.redraw_wires(node.connector_keys)

    # -- Wires --

    def add_wire(self, source: str, target: str) -> Edge | None:
        return self.registry.add_wire(source, target)

    def remove_wire(self, key: str) -> Edge | None:
        return self.registry.remove_wire(key)

    def export_wires(self) -> list[dict[str, str]]:
        return self.registry.export_edges()

    # -- Export / import --

    def export_json(self) -> dict[str, Any]:
        return {
            "scopes": [{"name": s.name, "color": s.color} for s in self.scopes.values()],
            "nodes": [node.settings_snapshot() for node in self.nodes.values()],
            "wires": self.export_wires(),
        }

    def import_json(self, data: dict[str, Any]) -> list[Edge]:
        """Load scopes, nodes and wires.

        Nodes whose id already exists are kept as they are, and wires that
        already exist are skipped, so importing the same data twice is a no-op.
        """
        for scope in data.get("scopes", []):
            self.define_scope(scope["name"], scope["color"])

        for item in data.get("nodes", []):
            node_id = item.get("id")
            if node_id is not None and node_id in self.nodes:
                continue
            self.add_node(
                NodeSettings.from_dict(item),
                node_type=item.get("node_type"),
                node_id=node_id,
            )

        return self.registry.import_edges(data.get("wires", []))
