"""Dependency service — edge mutations gated by the cycle guard."""

from __future__ import annotations

import logging

from wires.core.database import Database
from wires.core.errors import NotFound, SelfDependency, WouldCreateCycle
from wires.dag.graph import DependencyGraph
from wires.repositories.dependency_repo import DependencyRepository
from wires.repositories.wire_repo import WireRepository
from wires.schemas.dependency import DependencyEdge

logger = logging.getLogger("wires.dag")


class DependencyService:
    def __init__(self, db: Database):
        self.db = db

    def add_edge(self, wire_id: str, depends_on: str) -> DependencyEdge:
        """Make ``wire_id`` depend on ``depends_on``.

        The cycle check reads the edge set inside the same write transaction
        that inserts the edge, so a rejected edge leaves the store untouched
        and concurrent inserts cannot jointly close a cycle. Re-adding an
        existing edge is a no-op.
        """
        if wire_id == depends_on:
            raise SelfDependency(wire_id)

        with self.db.transaction() as session:
            wires = WireRepository(session)
            for endpoint in (wire_id, depends_on):
                if not wires.exists(endpoint):
                    raise NotFound(endpoint)

            deps = DependencyRepository(session)
            graph = DependencyGraph.from_edges((e.wire_id, e.depends_on) for e in deps.list_all())
            cycle = graph.cycle_for(wire_id, depends_on)
            if cycle:
                logger.warning(f"Rejected dependency {wire_id} → {depends_on}: {' → '.join(cycle)}")
                raise WouldCreateCycle(cycle)

            added = deps.add(wire_id, depends_on)

        if added:
            logger.info(f"Added dependency {wire_id} → {depends_on}")
        return DependencyEdge(wire_id=wire_id, depends_on=depends_on)

    def remove_edge(self, wire_id: str, depends_on: str) -> bool:
        """Remove the edge if present. Absent edges are a no-op; returns whether one was removed."""
        with self.db.transaction() as session:
            removed = DependencyRepository(session).remove(wire_id, depends_on)

        if removed:
            logger.info(f"Removed dependency {wire_id} → {depends_on}")
        return removed

    def purge(self, wire_id: str) -> int:
        with self.db.transaction() as session:
            return DependencyRepository(session).purge(wire_id)

    def blockers_of(self, wire_id: str) -> set[str]:
        """Ids of the wires ``wire_id`` directly depends on."""
        with self.db.snapshot() as session:
            return DependencyRepository(session).blockers_of(wire_id)

    def dependents_of(self, depends_on: str) -> set[str]:
        """Ids of the wires directly depending on ``depends_on``."""
        with self.db.snapshot() as session:
            return DependencyRepository(session).dependents_of(depends_on)

    def edges(self) -> list[DependencyEdge]:
        with self.db.snapshot() as session:
            return [DependencyEdge.model_validate(e) for e in DependencyRepository(session).list_all()]

    def count(self) -> int:
        with self.db.snapshot() as session:
            return DependencyRepository(session).count()
