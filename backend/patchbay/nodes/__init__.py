"""Auto-discover all node-type modules on import."""
from .registry import NodeRegistry

NodeRegistry.discover("patchbay.nodes")
