"""Connector primitives: kinds, configuration and adjacency bookkeeping."""
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable

from .compatibility import can_connect, scopes_overlap


class ConnectorKind(str, Enum):
    SOURCE = "output"
    SINK = "input"


@dataclass
class ConnectorConfig:
    """Declared connector on a node type, before it is bound to a node."""
    name: str
    scopes: list[str] = field(default_factory=list)
    label: str = ""


@dataclass(eq=False)
class Connector:
    """A typed connection point owned by a node.

    ``adjacency`` maps partner connector ids to the partner objects. It is
    kept symmetric by the wire registry: whenever A lists B, B lists A.
    """
    id: str
    kind: ConnectorKind
    scopes: frozenset[str]
    owner_node_id: str
    label: str = ""
    adjacency: dict[str, "Connector"] = field(default_factory=dict, repr=False)

    def __post_init__(self):
        self.scopes = frozenset(self.scopes)
        if not self.scopes:
            raise ValueError(f"Connector '{self.id}' needs at least one scope")

    @classmethod
    def from_config(cls, config: ConnectorConfig, kind: ConnectorKind,
                    owner_node_id: str) -> "Connector":
        return cls(
            id=f"{owner_node_id}-{config.name}",
            kind=kind,
            scopes=frozenset(config.scopes),
            owner_node_id=owner_node_id,
            label=config.label,
        )

    @property
    def is_source(self) -> bool:
        return self.kind == ConnectorKind.SOURCE

    @property
    def is_sink(self) -> bool:
        return self.kind == ConnectorKind.SINK

    def add_connection(self, target: "Connector") -> None:
        self.adjacency[target.id] = target

    def remove_connection(self, target: "Connector") -> None:
        self.adjacency.pop(target.id, None)

    def connections(self) -> list["Connector"]:
        return list(self.adjacency.values())

    def is_connected_to(self, target: "Connector") -> bool:
        return target.id in self.adjacency

    def has_scopes(self, candidate_scopes: Iterable[str]) -> bool:
        return scopes_overlap(self.scopes, candidate_scopes)

    def is_allowed(self, target: "Connector") -> bool:
        """True if a wire between this connector and ``target`` may be added."""
        return can_connect(self, target)
