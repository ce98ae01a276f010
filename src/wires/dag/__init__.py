"""Dependency graph engine: cycle guard, readiness and export."""

from wires.dag.graph import DependencyGraph, would_create_cycle
from wires.dag.readiness import ready_wires
from wires.dag.export import export_graph, to_dot

__all__ = ["DependencyGraph", "would_create_cycle", "ready_wires", "export_graph", "to_dot"]
