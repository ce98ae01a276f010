"""Services over a ``Database`` handle — the core's only mutation and query surface."""

from wires.services.dependency_service import DependencyService
from wires.services.graph_service import GraphService
from wires.services.wire_service import WireService

__all__ = ["DependencyService", "GraphService", "WireService"]
