"""Graph export — node/edge lists and GraphViz DOT text."""

from __future__ import annotations
from collections.abc import Iterable

from wires.dag.graph import EdgeLike, edge_pair
from wires.models.wire import WireStatus
from wires.schemas.dependency import GraphEdge, GraphExport, GraphNode
from wires.schemas.wire import WireRecord

_DOT_FILL = {
    WireStatus.TODO: "white",
    WireStatus.IN_PROGRESS: "lightyellow",
    WireStatus.DONE: "palegreen",
    WireStatus.CANCELLED: "lightgray",
}


def export_graph(wires: Iterable[WireRecord], edges: Iterable[EdgeLike]) -> GraphExport:
    """Every wire as a node, every dependency as an edge (`from` depends on `to`)."""
    nodes = [
        GraphNode(id=w.id, title=w.title, status=w.status, priority=w.priority)
        for w in wires
    ]
    graph_edges = [GraphEdge(from_=wire_id, to=depends_on) for wire_id, depends_on in map(edge_pair, edges)]
    return GraphExport(nodes=nodes, edges=graph_edges)


def _dot_quote(text: str) -> str:
    return '"' + text.replace("\\", "\\\\").replace('"', '\\"').replace("\n", "\\n") + '"'


def to_dot(graph: GraphExport) -> str:
    """Render an export as a GraphViz digraph."""
    lines = ["digraph wires {", "    rankdir=LR;", "    node [shape=box, style=filled];"]
    for node in graph.nodes:
        label = _dot_quote(f"{node.id}: {node.title}")
        lines.append(f"    {_dot_quote(node.id)} [label={label}, fillcolor={_DOT_FILL[node.status]}];")
    for edge in graph.edges:
        lines.append(f"    {_dot_quote(edge.from_)} -> {_dot_quote(edge.to)};")
    lines.append("}")
    return "\n".join(lines) + "\n"
