"""Connection gesture: drag from a source connector and drop on a sink.

One ConnectionGesture exists per diagram, so at most one wire is being
drawn at any time. Its state is one of three values:

  Idle       nothing in progress
  Drawing    dragging from a source; the preview follows the pointer
  Snapped    hovering an allowed sink; the preview is locked on it

Releasing the pointer while Snapped commits the wire through the registry;
every other exit just drops the preview. All exits end in Idle.
"""
import logging
from dataclasses import dataclass
from typing import Callable, Union

from ..config import settings
from .connector import Connector
from .geometry import Point, shorten_line
from .wires import Edge, WireRegistry

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Idle:
    pass


@dataclass(frozen=True)
class Drawing:
    source_key: str
    pointer: Point


@dataclass(frozen=True)
class Snapped:
    source_key: str
    target_key: str
    pointer: Point


GestureState = Union[Idle, Drawing, Snapped]

IDLE = Idle()


class ConnectionGesture:
    """Interprets pointer events on connector handles."""

    def __init__(self, registry: WireRegistry, margin: float | None = None):
        self.registry = registry
        self.margin = settings.preview_margin if margin is None else margin
        self._state: GestureState = IDLE
        self._on_change: Callable[[GestureState], None] | None = None
        registry.add_unregister_listener(self.forget)

    @property
    def state(self) -> GestureState:
        return self._state

    @property
    def is_active(self) -> bool:
        return not isinstance(self._state, Idle)

    def set_on_change(self, callback: Callable[[GestureState], None] | None) -> None:
        self._on_change = callback

    # -- Pointer events on source handles --

    def pointer_down(self, key: str, x: float, y: float) -> GestureState:
        source = self.registry.get_connector(key)
        if source is None or not source.is_source:
            return self._state
        if self.is_active:
            self.cancel()

        start = self._center(source)
        self.registry.renderer.draw_preview(start, start)
        self._set_state(Drawing(source_key=key, pointer=Point(x, y)))
        return self._state

    def pointer_drag(self, x: float, y: float) -> GestureState:
        state = self._state
        pointer = Point(x, y)
        if isinstance(state, Drawing):
            self._preview_to(state.source_key, pointer)
            self._set_state(Drawing(source_key=state.source_key, pointer=pointer))
        elif isinstance(state, Snapped):
            # locked on the target; remember where the pointer is for leave()
            self._state = Snapped(state.source_key, state.target_key, pointer)
        return self._state

    def pointer_up(self, x: float, y: float) -> Edge | None:
        """Finish the gesture. Returns the committed edge, if any."""
        state = self._state
        if isinstance(state, Idle):
            return None
        try:
            if isinstance(state, Snapped):
                return self.registry.add_wire(state.source_key, state.target_key)
            return None
        finally:
            self._reset()

    # -- Pointer events on sink handles --

    def pointer_enter(self, key: str) -> GestureState:
        state = self._state
        if isinstance(state, Idle):
            return state
        target = self.registry.get_connector(key)
        source = self.registry.get_connector(state.source_key)
        if target is None or source is None or not target.is_sink:
            return state
        if not target.is_allowed(source):
            logger.debug(f"Not snapping {state.source_key} onto {key}")
            return state

        self._preview_to(state.source_key, self._center(target))
        self._set_state(Snapped(state.source_key, key, state.pointer))
        return self._state

    def pointer_leave(self, key: str) -> GestureState:
        state = self._state
        if isinstance(state, Snapped) and state.target_key == key:
            self._preview_to(state.source_key, state.pointer)
            self._set_state(Drawing(state.source_key, state.pointer))
        return self._state

    # -- Aborts --

    def cancel(self) -> None:
        if self.is_active:
            self._reset()

    def forget(self, key: str) -> None:
        """Cancel a gesture that references a connector about to disappear."""
        state = self._state
        if isinstance(state, Idle):
            return
        if state.source_key == key or (
                isinstance(state, Snapped) and state.target_key == key):
            logger.info(f"Cancelling wire gesture: connector '{key}' removed")
            self._reset()

    # -- Internals --

    def _center(self, connector: Connector) -> Point:
        return self.registry.renderer.connector_center(connector)

    def _preview_to(self, source_key: str, end: Point) -> None:
        source = self.registry.get_connector(source_key)
        start = self._center(source)
        self.registry.renderer.move_preview(start, shorten_line(start, end, self.margin))

    def _reset(self) -> None:
        self._state = IDLE
        try:
            self.registry.renderer.erase_preview()
        finally:
            self._notify()

    def _set_state(self, state: GestureState) -> None:
        self._state = state
        self._notify()

    def _notify(self) -> None:
        if self._on_change:
            self._on_change(self._state)
