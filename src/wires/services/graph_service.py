"""Graph service — readiness and export over a consistent store snapshot."""

from __future__ import annotations

from wires.core.database import Database
from wires.dag.export import export_graph
from wires.dag.graph import DependencyGraph
from wires.dag.readiness import DONE_ONLY, ready_wires
from wires.models.wire import WireStatus
from wires.repositories.dependency_repo import DependencyRepository
from wires.repositories.wire_repo import WireRepository
from wires.schemas.dependency import DependencyEdge, GraphExport
from wires.schemas.wire import WireRecord


class GraphService:
    def __init__(self, db: Database, satisfied: frozenset[WireStatus] = DONE_ONLY):
        self.db = db
        self.satisfied = satisfied

    def _snapshot(self) -> tuple[list[WireRecord], list[DependencyEdge]]:
        with self.db.snapshot() as session:
            wires = [WireRecord.model_validate(w) for w in WireRepository(session).list_all()]
            edges = [DependencyEdge.model_validate(e) for e in DependencyRepository(session).list_all()]
        return wires, edges

    def ready(self) -> list[WireRecord]:
        """Wires that can be worked on now; recomputed from the live store on every call."""
        wires, edges = self._snapshot()
        return ready_wires(wires, edges, satisfied=self.satisfied)

    def export(self) -> GraphExport:
        wires, edges = self._snapshot()
        return export_graph(wires, edges)

    def find_cycle(self) -> list[str] | None:
        """Whole-store acyclicity check. None when the edge set is a DAG."""
        wires, edges = self._snapshot()
        return DependencyGraph.from_edges(edges, wire_ids=[w.id for w in wires]).detect_cycles()
