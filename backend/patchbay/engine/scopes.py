"""Scope definitions and display color resolution."""
from dataclasses import dataclass
from typing import Iterable, Mapping

from ..config import settings


@dataclass(frozen=True)
class Scope:
    name: str
    color: str


def resolve_wire_scope(shared: Iterable[str]) -> str | None:
    """Return the single shared scope, or None when several are shared.

    Multiple shared scopes have no canonical ordering, so no single one wins.
    """
    shared = sorted(shared)
    if len(shared) == 1:
        return shared[0]
    return None


def wire_color(shared: Iterable[str], scopes: Mapping[str, Scope]) -> str:
    shared = frozenset(shared)
    if len(shared) > 1:
        return settings.ambiguous_color
    name = resolve_wire_scope(shared)
    if name in scopes:
        return scopes[name].color
    return settings.unknown_wire_color


def connector_color(connector_scopes: Iterable[str], scopes: Mapping[str, Scope]) -> str:
    connector_scopes = frozenset(connector_scopes)
    if len(connector_scopes) > 1:
        return settings.ambiguous_color
    (name,) = connector_scopes
    if name in scopes:
        return scopes[name].color
    return settings.unknown_connector_color
