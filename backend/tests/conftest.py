"""Shared test fixtures for patchbay tests."""
import sys
from pathlib import Path

import pytest

# Ensure the patchbay package is importable
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from patchbay.api.scene import SceneRenderer
from patchbay.engine.connector import Connector, ConnectorKind
from patchbay.engine.diagram import Diagram
from patchbay.engine.gesture import ConnectionGesture
from patchbay.engine.geometry import Point
from patchbay.engine.scopes import Scope
from patchbay.engine.wires import WireRegistry

SCOPES = {
    "image": Scope("image", "#ff8800"),
    "video": Scope("video", "#00aaff"),
    "audio": Scope("audio", "#33cc33"),
}


class RecordingRenderer:
    """Renderer double that records every call it receives."""

    def __init__(self):
        self.calls: list[tuple] = []
        self.centers: dict[str, Point] = {}

    def names(self) -> list[str]:
        return [c[0] for c in self.calls]

    def clear(self):
        self.calls.clear()

    def connector_center(self, connector):
        return self.centers.get(connector.id, Point(0, 0))

    def draw_wire(self, edge, start, end):
        self.calls.append(("draw_wire", edge.key, start, end, edge.color))

    def move_wire(self, edge, start, end):
        self.calls.append(("move_wire", edge.key, start, end))

    def erase_wire(self, edge):
        self.calls.append(("erase_wire", edge.key))

    def draw_preview(self, start, end):
        self.calls.append(("draw_preview", start, end))

    def move_preview(self, start, end):
        self.calls.append(("move_preview", start, end))

    def erase_preview(self):
        self.calls.append(("erase_preview",))

    def arm_connector(self, key, kind):
        self.calls.append(("arm_connector", key, kind))

    def disarm_connector(self, key):
        self.calls.append(("disarm_connector", key))


def make_connector(node_id: str, name: str, scopes, kind=ConnectorKind.SOURCE) -> Connector:
    return Connector(
        id=f"{node_id}-{name}", kind=kind,
        scopes=frozenset(scopes), owner_node_id=node_id,
    )


@pytest.fixture
def renderer():
    return RecordingRenderer()


@pytest.fixture
def registry(renderer):
    return WireRegistry(renderer, dict(SCOPES))


@pytest.fixture
def gesture(registry):
    return ConnectionGesture(registry, margin=5)


@pytest.fixture
def wired(registry):
    """Registry holding n1-out {image}, n2-in {image}, n3-in {image}, n4-in {audio}."""
    registry.register_connector(make_connector("n1", "out", {"image"}))
    registry.register_connector(make_connector("n2", "in", {"image"}, ConnectorKind.SINK))
    registry.register_connector(make_connector("n3", "in", {"image"}, ConnectorKind.SINK))
    registry.register_connector(make_connector("n4", "in", {"audio"}, ConnectorKind.SINK))
    return registry


@pytest.fixture
def diagram():
    """Diagram drawing through a SceneRenderer, with image/video/audio scopes."""
    dia = Diagram()
    dia.set_renderer(SceneRenderer(dia.nodes))
    for scope in SCOPES.values():
        dia.define_scope(scope.name, scope.color)
    return dia
