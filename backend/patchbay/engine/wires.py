"""Wire registry: live connectors, the canonical edge map and cascading removal.

Invariant maintained by every public method: an edge is in ``edges`` if and
only if each of its endpoints lists the other in its adjacency mapping.
"""
import logging
from dataclasses import dataclass
from typing import Any, Callable, Iterable, Mapping

from .compatibility import shared_scopes
from .connector import Connector
from .geometry import Point
from .renderer import NullRenderer, Renderer
from .scopes import Scope, resolve_wire_scope, wire_color

logger = logging.getLogger(__name__)

KEY_SEPARATOR = "|"


class WiringInvariantError(RuntimeError):
    """Adjacency sets and the edge map disagree.

    Raised for bookkeeping defects inside the core, never for rejected user
    gestures.
    """


def canonical_key(a_id: str, b_id: str) -> str:
    """Direction-free edge key: both endpoint ids, sorted and joined."""
    return KEY_SEPARATOR.join(sorted((a_id, b_id)))


@dataclass(eq=False)
class Edge:
    key: str
    source: Connector
    target: Connector
    scope: str | None   # None when several scopes are shared
    color: str

    def to_dict(self) -> dict[str, str]:
        return {"source": self.source.id, "target": self.target.id}


class WireRegistry:
    """Registry of connectors and the wires between them."""

    def __init__(self, renderer: Renderer | None = None,
                 scopes: Mapping[str, Scope] | None = None):
        self.renderer: Renderer = renderer or NullRenderer()
        # Shared with the owning diagram, so scopes defined later still resolve
        self.scopes: Mapping[str, Scope] = scopes if scopes is not None else {}
        self.connectors: dict[str, Connector] = {}
        self.edges: dict[str, Edge] = {}
        self._unregister_listeners: list[Callable[[str], None]] = []

    def __contains__(self, edge_key: str) -> bool:
        return edge_key in self.edges

    @property
    def wire_count(self) -> int:
        return len(self.edges)

    def add_unregister_listener(self, callback: Callable[[str], None]) -> None:
        """Call ``callback(key)`` before a connector is unregistered."""
        self._unregister_listeners.append(callback)

    # -- Connectors --

    def register_connector(self, connector: Connector) -> str:
        if KEY_SEPARATOR in connector.id:
            raise ValueError(
                f"Connector id '{connector.id}' must not contain '{KEY_SEPARATOR}'"
            )
        key = connector.id
        existing = self.connectors.get(key)
        if existing is connector:
            return key
        if existing is not None:
            raise WiringInvariantError(f"Connector key '{key}' is already registered")

        self.connectors[key] = connector
        self.renderer.arm_connector(key, connector.kind)
        logger.debug(f"Registered connector '{key}' ({connector.kind.value})")
        return key

    def get_connector(self, key: str) -> Connector | None:
        return self.connectors.get(key)

    def unregister_connector(self, key: str) -> None:
        """Remove a connector and every wire touching it. Unknown keys are ignored."""
        connector = self.connectors.get(key)
        if connector is None:
            return

        for listener in tuple(self._unregister_listeners):
            listener(key)

        partners = tuple(connector.adjacency.values())
        doomed: list[tuple[Connector, Edge]] = []
        for partner in partners:
            edge = self.edges.get(canonical_key(connector.id, partner.id))
            if edge is None or not partner.is_connected_to(connector):
                logger.error(
                    f"Inconsistent adjacency between '{connector.id}' and '{partner.id}'"
                )
                raise WiringInvariantError(
                    f"Connector '{connector.id}' lists '{partner.id}' but the "
                    f"wire between them is not tracked symmetrically"
                )
            doomed.append((partner, edge))

        for partner, edge in doomed:
            del self.edges[edge.key]
            partner.remove_connection(connector)
            connector.remove_connection(partner)
            self.renderer.erase_wire(edge)

        self.renderer.disarm_connector(key)
        del self.connectors[key]
        logger.debug(f"Unregistered connector '{key}', removed {len(doomed)} wire(s)")

    # -- Wires --

    def add_wire(self, start_key: str, end_key: str) -> Edge | None:
        """Wire two connectors together.

        Returns the new edge, or None when the pair may not be connected
        (unknown key, no shared scope, same node, already connected).
        """
        source = self.connectors.get(start_key)
        target = self.connectors.get(end_key)
        if source is None or target is None:
            logger.warning(f"Ignoring wire {start_key} -> {end_key}: unknown connector")
            return None

        if not source.is_allowed(target):
            logger.debug(f"Rejected wire {start_key} -> {end_key}")
            return None

        shared = shared_scopes(source, target)
        key = canonical_key(source.id, target.id)
        if not shared:
            logger.error(f"Wire {key} passed the compatibility check with no shared scope")
            raise WiringInvariantError(f"No shared scope for allowed wire '{key}'")
        if key in self.edges:
            logger.error(f"Wire {key} is tracked but its endpoints are not adjacent")
            raise WiringInvariantError(f"Wire '{key}' exists without adjacency")

        source.add_connection(target)
        target.add_connection(source)
        edge = Edge(
            key=key, source=source, target=target,
            scope=resolve_wire_scope(shared),
            color=wire_color(shared, self.scopes),
        )
        self.edges[key] = edge
        self.renderer.draw_wire(edge, self._center(source), self._center(target))
        logger.info(f"Added wire {source.id} -> {target.id}")
        return edge

    def remove_wire(self, edge_key: str) -> Edge | None:
        edge = self.edges.pop(edge_key, None)
        if edge is None:
            return None
        edge.source.remove_connection(edge.target)
        edge.target.remove_connection(edge.source)
        self.renderer.erase_wire(edge)
        logger.info(f"Removed wire {edge.source.id} -> {edge.target.id}")
        return edge

    def edges_for(self, key: str) -> list[Edge]:
        connector = self.connectors.get(key)
        if connector is None:
            return []
        return [
            self.edges[canonical_key(connector.id, partner.id)]
            for partner in connector.connections()
        ]

    def redraw_wires(self, keys: Iterable[str]) -> list[Edge]:
        """Recompute endpoint geometry of the wires touching ``keys``.

        Only those wires are handed to the renderer; the graph is not changed.
        """
        redrawn: list[Edge] = []
        seen: set[str] = set()
        for key in keys:
            connector = self.connectors.get(key)
            if connector is None:
                continue
            for partner in tuple(connector.adjacency.values()):
                edge = self.edges.get(canonical_key(connector.id, partner.id))
                if edge is None or edge.key in seen:
                    continue
                seen.add(edge.key)
                self.renderer.move_wire(
                    edge, self._center(edge.source), self._center(edge.target)
                )
                redrawn.append(edge)
        return redrawn

    # -- Export / import --

    def export_edges(self) -> list[dict[str, str]]:
        return [edge.to_dict() for edge in self.edges.values()]

    def import_edges(self, edges: Iterable[Mapping[str, Any]]) -> list[Edge]:
        """Re-create wires from an exported edge list.

        Pairs that are already connected are skipped, so importing the same
        list twice leaves the graph unchanged.
        """
        added: list[Edge] = []
        for item in edges:
            edge = self.add_wire(item["source"], item["target"])
            if edge is not None:
                added.append(edge)
        return added

    def _center(self, connector: Connector) -> Point:
        return self.renderer.connector_center(connector)
