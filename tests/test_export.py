"""Tests for graph export (JSON structure and DOT)."""

import json
from datetime import datetime

from wires.cli.render import to_json
from wires.dag.export import export_graph, to_dot
from wires.models.wire import WireStatus
from wires.schemas.wire import WireRecord

NOW = datetime(2025, 1, 1)


def record(id, title, status=WireStatus.TODO, priority=0):
    return WireRecord(id=id, title=title, status=status, priority=priority, created_at=NOW, updated_at=NOW)


class TestExportGraph:
    def test_counts_match(self):
        wires = [record("aaaaaaa", "A"), record("bbbbbbb", "B"), record("ccccccc", "C")]
        export = export_graph(wires, [("aaaaaaa", "bbbbbbb"), ("aaaaaaa", "ccccccc")])
        assert len(export.nodes) == 3
        assert len(export.edges) == 2

    def test_json_uses_from_and_to(self):
        export = export_graph(
            [record("aaaaaaa", "A", priority=2), record("bbbbbbb", "B", status=WireStatus.DONE)],
            [("aaaaaaa", "bbbbbbb")],
        )
        data = json.loads(to_json(export))
        assert data["edges"] == [{"from": "aaaaaaa", "to": "bbbbbbb"}]
        assert {"id": "aaaaaaa", "title": "A", "status": "TODO", "priority": 2} in data["nodes"]
        assert {"id": "bbbbbbb", "title": "B", "status": "DONE", "priority": 0} in data["nodes"]

    def test_empty(self):
        data = json.loads(to_json(export_graph([], [])))
        assert data == {"nodes": [], "edges": []}


class TestDot:
    def test_contains_every_node_and_edge(self):
        export = export_graph(
            [record("aaaaaaa", "Build"), record("bbbbbbb", "Design", status=WireStatus.DONE)],
            [("aaaaaaa", "bbbbbbb")],
        )
        dot = to_dot(export)
        assert dot.startswith("digraph wires {")
        assert dot.rstrip().endswith("}")
        assert '"aaaaaaa" [label="aaaaaaa: Build"' in dot
        assert '"bbbbbbb" [label="bbbbbbb: Design", fillcolor=palegreen]' in dot
        assert '"aaaaaaa" -> "bbbbbbb";' in dot

    def test_quotes_are_escaped(self):
        dot = to_dot(export_graph([record("aaaaaaa", 'say "hi"')], []))
        assert 'label="aaaaaaa: say \\"hi\\""' in dot
