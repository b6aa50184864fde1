"""Renderer protocol: the drawing surface the wiring core talks to.

The core never draws anything itself. It asks the renderer where a
connector's handle is, tells it which wires to draw, move or erase, and
arms or disarms the pointer callbacks on connector handles. Pointer events
flow back the other way, into ConnectionGesture.
"""
from typing import TYPE_CHECKING, Protocol, runtime_checkable

from .connector import ConnectorKind
from .geometry import Point

if TYPE_CHECKING:
    from .connector import Connector
    from .wires import Edge


@runtime_checkable
class Renderer(Protocol):

    # --- Geometry ---

    def connector_center(self, connector: "Connector") -> Point:
        """Return the center of the connector's handle in screen coordinates."""
        ...

    # --- Committed wires ---

    def draw_wire(self, edge: "Edge", start: Point, end: Point) -> None:
        """Draw a new wire; ``edge.color`` holds the resolved display color."""
        ...

    def move_wire(self, edge: "Edge", start: Point, end: Point) -> None:
        ...

    def erase_wire(self, edge: "Edge") -> None:
        ...

    # --- Gesture preview ---

    def draw_preview(self, start: Point, end: Point) -> None:
        ...

    def move_preview(self, start: Point, end: Point) -> None:
        ...

    def erase_preview(self) -> None:
        ...

    # --- Pointer callbacks ---

    def arm_connector(self, key: str, kind: ConnectorKind) -> None:
        """Start routing pointer events on this connector's handle to the gesture.

        Sources get down/drag/up, sinks get enter/leave.
        """
        ...

    def disarm_connector(self, key: str) -> None:
        ...


class NullRenderer:
    """Renderer that draws nothing; every connector sits at the origin."""

    def connector_center(self, connector):
        return Point(0, 0)

    def draw_wire(self, edge, start, end):
        pass

    def move_wire(self, edge, start, end):
        pass

    def erase_wire(self, edge):
        pass

    def draw_preview(self, start, end):
        pass

    def move_preview(self, start, end):
        pass

    def erase_preview(self):
        pass

    def arm_connector(self, key, kind):
        pass

    def disarm_connector(self, key):
        pass
