"""Dependency graph — reachability, cycle guard and whole-graph cycle detection."""

from __future__ import annotations
from collections.abc import Iterable
from dataclasses import dataclass, field

from wires.schemas.dependency import DependencyEdge

EdgeLike = DependencyEdge | tuple[str, str]


@dataclass
class DAGNode:
    """A wire in the dependency graph."""
    id: str
    depends_on: set[str] = field(default_factory=set)
    blocks: set[str] = field(default_factory=set)


def edge_pair(edge: EdgeLike) -> tuple[str, str]:
    if isinstance(edge, DependencyEdge):
        return edge.wire_id, edge.depends_on
    return edge[0], edge[1]


class DependencyGraph:
    """In-memory snapshot of the edge set. Edge direction: wire → the wire it depends on."""

    def __init__(self):
        self._nodes: dict[str, DAGNode] = {}

    @classmethod
    def from_edges(cls, edges: Iterable[EdgeLike], wire_ids: Iterable[str] = ()) -> "DependencyGraph":
        graph = cls()
        for wire_id in wire_ids:
            graph.add_wire(wire_id)
        for edge in edges:
            graph.add_dependency(*edge_pair(edge))
        return graph

    def add_wire(self, wire_id: str) -> None:
        if wire_id not in self._nodes:
            self._nodes[wire_id] = DAGNode(id=wire_id)

    def add_dependency(self, wire_id: str, depends_on: str) -> None:
        """Record that ``wire_id`` depends on ``depends_on``. No cycle check."""
        self.add_wire(wire_id)
        self.add_wire(depends_on)
        self._nodes[wire_id].depends_on.add(depends_on)
        self._nodes[depends_on].blocks.add(wire_id)

    @property
    def nodes(self) -> dict[str, DAGNode]:
        return self._nodes

    def find_path(self, start: str, goal: str) -> list[str] | None:
        """Iterative DFS along depends_on edges. Returns [start, ..., goal] or None."""
        if start not in self._nodes:
            return None

        parent: dict[str, str] = {}
        visited: set[str] = set()
        stack = [start]
        while stack:
            node = stack.pop()
            if node in visited:
                continue
            visited.add(node)
            if node == goal:
                path = [node]
                while node != start:
                    node = parent[node]
                    path.append(node)
                path.reverse()
                return path
            for child in sorted(self._nodes[node].depends_on, reverse=True):
                if child not in visited:
                    parent.setdefault(child, node)
                    stack.append(child)
        return None

    def cycle_for(self, wire_id: str, depends_on: str) -> list[str] | None:
        """The cycle that adding ``wire_id → depends_on`` would close, or None.

        A self-edge is reported as ``[wire_id, wire_id]``.
        """
        if wire_id == depends_on:
            return [wire_id, wire_id]
        path = self.find_path(depends_on, wire_id)
        if path is None:
            return None
        return [wire_id, *path]

    def detect_cycles(self) -> list[str] | None:
        """Detect cycles using DFS. Returns cycle path or None."""
        WHITE, GRAY, BLACK = 0, 1, 2
        color = {n: WHITE for n in self._nodes}

        for root in sorted(self._nodes):
            if color[root] != WHITE:
                continue
            trail = [root]
            color[root] = GRAY
            iters = [iter(sorted(self._nodes[root].depends_on))]
            while iters:
                child = next(iters[-1], None)
                if child is None:
                    color[trail.pop()] = BLACK
                    iters.pop()
                    continue
                if color[child] == GRAY:
                    return trail[trail.index(child):] + [child]
                if color[child] == WHITE:
                    color[child] = GRAY
                    trail.append(child)
                    iters.append(iter(sorted(self._nodes[child].depends_on)))
        return None


def would_create_cycle(edges: Iterable[EdgeLike], wire_id: str, depends_on: str) -> bool:
    """True if adding ``wire_id → depends_on`` to ``edges`` would make the graph cyclic."""
    return DependencyGraph.from_edges(edges).cycle_for(wire_id, depends_on) is not None
