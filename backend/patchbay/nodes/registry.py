"""Node-type registry: the palette of node types a diagram can instantiate."""
import importlib
import logging
import pkgutil
from typing import Any

from .base import BaseNodeType, NodeDefinition, NodeSettings

logger = logging.getLogger(__name__)

# Modules inside a node package that hold no node types
_SKIP_MODULES = ("base", "registry")


class NodeRegistry:
    """Class-level table of node-type name -> BaseNodeType subclass."""

    _types: dict[str, type[BaseNodeType]] = {}

    @classmethod
    def register(cls, node_type: str | None = None):
        """Class decorator adding a node type to the palette.

            @NodeRegistry.register("Blend")
            class BlendNode(BaseNodeType):
                ...

        Without a name the class name is used. Registering another class
        under a taken name raises ValueError; re-registering the same class
        (module reload) is allowed.
        """
        def decorator(node_cls: type[BaseNodeType]) -> type[BaseNodeType]:
            name = node_type or node_cls.__name__
            current = cls._types.get(name)
            if current is not None and current.__qualname__ != node_cls.__qualname__:
                raise ValueError(f"Node type '{name}' is already registered by {current.__name__}")
            cls._types[name] = node_cls
            return node_cls
        return decorator

    @classmethod
    def unregister(cls, node_type: str) -> None:
        cls._types.pop(node_type, None)

    @classmethod
    def get(cls, node_type: str) -> type[BaseNodeType]:
        try:
            return cls._types[node_type]
        except KeyError:
            raise KeyError(f"Unknown node type: {node_type}") from None

    @classmethod
    def has(cls, node_type: str) -> bool:
        return node_type in cls._types

    @classmethod
    def settings_for(cls, node_type: str, **overrides: Any) -> NodeSettings:
        """Fresh settings for a new node of ``node_type``; overrides win."""
        return cls.get(node_type).default_settings(**overrides)

    @classmethod
    def by_category(cls) -> dict[str, list[str]]:
        palette: dict[str, list[str]] = {}
        for name in sorted(cls._types):
            palette.setdefault(cls._types[name].CATEGORY, []).append(name)
        return palette

    @classmethod
    def all_definitions(cls) -> dict[str, NodeDefinition]:
        return {name: node_cls.get_definition(name) for name, node_cls in cls._types.items()}

    @classmethod
    def discover(cls, package_name: str) -> list[str]:
        """Import every node module of ``package_name`` so its decorators run.

        Returns the imported module names.
        """
        package = importlib.import_module(package_name)
        loaded: list[str] = []
        for info in pkgutil.iter_modules(getattr(package, "__path__", [])):
            if info.name.startswith("_") or info.name in _SKIP_MODULES:
                continue
            importlib.import_module(f"{package_name}.{info.name}")
            loaded.append(info.name)
        logger.debug(f"Discovered node modules in {package_name}: {loaded}")
        return loaded
