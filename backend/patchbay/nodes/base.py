"""Node settings, node instances and the node-type base class."""
from abc import ABC, abstractmethod
from dataclasses import asdict, dataclass, field, replace
from typing import Any

from ..engine.connector import Connector, ConnectorConfig, ConnectorKind
from ..engine.geometry import Point, Rect
from ..engine.wires import WireRegistry, WiringInvariantError

NODE_HEIGHT = 40        # header height; connector rows start below it
LINE_HEIGHT = 15        # height per connector row
CONNECTOR_INSET = 10    # horizontal distance of connector handles from the edge


@dataclass
class NodeSettings:
    x: float = 0
    y: float = 0
    width: float = 250
    color: str = "#000055"
    font_color: str = "white"
    border_color: str = "black"
    can_remove: bool = True
    label: str = ""
    description: str = ""
    inputs: list[ConnectorConfig] = field(default_factory=list)
    outputs: list[ConnectorConfig] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    @staticmethod
    def from_dict(d: dict[str, Any]) -> "NodeSettings":
        defaults = NodeSettings()
        return NodeSettings(
            x=d.get("x", defaults.x),
            y=d.get("y", defaults.y),
            width=d.get("width", defaults.width),
            color=d.get("color", defaults.color),
            font_color=d.get("font_color", defaults.font_color),
            border_color=d.get("border_color", defaults.border_color),
            can_remove=d.get("can_remove", defaults.can_remove),
            label=d.get("label", defaults.label),
            description=d.get("description", defaults.description),
            inputs=[ConnectorConfig(**c) for c in d.get("inputs", [])],
            outputs=[ConnectorConfig(**c) for c in d.get("outputs", [])],
        )


class Node:
    """A box on the canvas that owns a set of connectors.

    Connectors are created and registered with the wire registry on
    construction; ``destroy()`` unregisters them, which removes every wire
    touching the node.
    """

    def __init__(self, node_id: str, registry: WireRegistry,
                 settings: NodeSettings, node_type: str | None = None):
        names = [c.name for c in settings.inputs + settings.outputs]
        duplicates = {n for n in names if names.count(n) > 1}
        if duplicates:
            raise ValueError(
                f"Node '{node_id}' declares duplicate connector names: {sorted(duplicates)}"
            )

        self.id = node_id
        self.node_type = node_type
        self.registry = registry
        self.settings = settings
        self.connector_keys: list[str] = []

        connectors = (
            [Connector.from_config(c, ConnectorKind.SINK, node_id) for c in settings.inputs] +
            [Connector.from_config(c, ConnectorKind.SOURCE, node_id) for c in settings.outputs]
        )
        try:
            for connector in connectors:
                self.connector_keys.append(registry.register_connector(connector))
        except (ValueError, WiringInvariantError):
            # a node that failed to build must not leave connectors behind
            self.destroy()
            raise

    def connectors(self) -> list[Connector]:
        return [c for key in self.connector_keys
                if (c := self.registry.get_connector(key)) is not None]

    def rect(self) -> Rect:
        rows = max(len(self.settings.inputs), len(self.settings.outputs))
        return Rect(self.settings.x, self.settings.y, self.settings.width,
                    NODE_HEIGHT + rows * LINE_HEIGHT)

    def connector_center(self, connector: Connector) -> Point:
        """Center of a connector handle: inputs on the left edge, outputs on the right."""
        if connector.is_sink:
            configs, x = self.settings.inputs, self.settings.x + CONNECTOR_INSET
        else:
            configs, x = (self.settings.outputs,
                          self.settings.x + self.settings.width - CONNECTOR_INSET)
        names = [f"{self.id}-{c.name}" for c in configs]
        row = names.index(connector.id)
        return Point(x, self.settings.y + NODE_HEIGHT + row * LINE_HEIGHT)

    def move_to(self, x: float, y: float) -> None:
        self.settings = replace(self.settings, x=x, y=y)

    def set_label(self, label: str) -> None:
        self.settings = replace(self.settings, label=label)

    def settings_snapshot(self) -> dict[str, Any]:
        return {"id": self.id, "node_type": self.node_type, **self.settings.to_dict()}

    def destroy(self) -> None:
        keys, self.connector_keys = self.connector_keys, []
        for key in keys:
            self.registry.unregister_connector(key)


@dataclass
class NodeDefinition:
    """Serializable node-type definition sent to the frontend."""
    node_type: str
    display_name: str
    category: str
    description: str
    inputs: list[ConnectorConfig]
    outputs: list[ConnectorConfig]


class BaseNodeType(ABC):
    """Abstract base class for the node types offered in the editor palette."""

    CATEGORY: str = "Uncategorized"
    DISPLAY_NAME: str = ""
    DESCRIPTION: str = ""
    COLOR: str = NodeSettings.color
    CAN_REMOVE: bool = True

    @classmethod
    @abstractmethod
    def INPUTS(cls) -> list[ConnectorConfig]:
        ...

    @classmethod
    @abstractmethod
    def OUTPUTS(cls) -> list[ConnectorConfig]:
        ...

    @classmethod
    def default_settings(cls, **overrides: Any) -> NodeSettings:
        settings = NodeSettings(
            color=cls.COLOR,
            can_remove=cls.CAN_REMOVE,
            label=cls.DISPLAY_NAME or cls.__name__,
            description=cls.DESCRIPTION or cls.__doc__ or "",
            inputs=cls.INPUTS(),
            outputs=cls.OUTPUTS(),
        )
        return replace(settings, **overrides)

    @classmethod
    def get_definition(cls, node_type: str) -> NodeDefinition:
        return NodeDefinition(
            node_type=node_type,
            display_name=cls.DISPLAY_NAME or cls.__name__,
            category=cls.CATEGORY,
            description=cls.DESCRIPTION or cls.__doc__ or "",
            inputs=cls.INPUTS(),
            outputs=cls.OUTPUTS(),
        )
