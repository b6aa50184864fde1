"""Compatibility rule deciding whether two connectors may be wired.

Every check here is symmetric in its two arguments, so
``can_connect(a, b) == can_connect(b, a)`` holds for any pair. Connector
kind is not part of the rule: the gesture only starts drags on sources and
snaps on sinks, while edge-list import accepts any compatible pair.
"""
from typing import TYPE_CHECKING, Iterable

if TYPE_CHECKING:
    from .connector import Connector


def scopes_overlap(scopes: Iterable[str], candidates: Iterable[str]) -> bool:
    return not frozenset(scopes).isdisjoint(candidates)


def shared_scopes(a: "Connector", b: "Connector") -> frozenset[str]:
    return a.scopes & b.scopes


def can_connect(a: "Connector", b: "Connector") -> bool:
    if not scopes_overlap(a.scopes, b.scopes):
        return False
    if a.owner_node_id == b.owner_node_id:
        return False
    # already connected, from either side
    if b.id in a.adjacency or a.id in b.adjacency:
        return False
    return True
