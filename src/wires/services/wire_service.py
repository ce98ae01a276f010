"""Wire service — business logic for creating, updating and deleting wires."""

from __future__ import annotations

import hashlib
import logging
import time
from collections import defaultdict
from collections.abc import Callable

from wires.core.database import Database
from wires.core.errors import DuplicateWireId, EmptyTitle, NotFound
from wires.dag.readiness import DONE_ONLY
from wires.models.wire import WireStatus
from wires.repositories.dependency_repo import DependencyRepository
from wires.repositories.wire_repo import WireRepository
from wires.schemas.wire import (
    DependencyInfo,
    StatusChange,
    StatusWarning,
    WireCreate,
    WireDetail,
    WireRecord,
    WireUpdate,
)

logger = logging.getLogger("wires.service")

ID_LENGTH = 7


def generate_id(title: str) -> str:
    """7 hex chars of SHA-256(title + nanosecond timestamp)."""
    digest = hashlib.sha256(f"{title}{time.time_ns()}".encode("utf-8")).hexdigest()
    return digest[:ID_LENGTH]


class WireService:
    def __init__(
        self,
        db: Database,
        satisfied: frozenset[WireStatus] = DONE_ONLY,
        id_attempts: int = 5,
        id_factory: Callable[[str], str] = generate_id,
    ):
        self.db = db
        self.satisfied = satisfied
        self.id_attempts = max(1, id_attempts)
        self.id_factory = id_factory

    def create(self, title: str, description: str | None = None, priority: int = 0) -> WireRecord:
        data = WireCreate(title=title, description=description, priority=priority)
        clean_title = data.title.strip()
        if not clean_title:
            raise EmptyTitle()

        with self.db.transaction() as session:
            repo = WireRepository(session)
            wire = repo.create(
                id=self._new_id(repo, clean_title),
                title=clean_title,
                description=data.description or None,
                status=WireStatus.TODO.value,
                priority=data.priority,
            )
            record = WireRecord.model_validate(wire)

        logger.info(f"Created wire {record.id}: {record.title}")
        return record

    def _new_id(self, repo: WireRepository, title: str) -> str:
        candidate = ""
        for _ in range(self.id_attempts):
            candidate = self.id_factory(title)
            if not repo.exists(candidate):
                return candidate
            logger.debug(f"Wire id collision on {candidate}, regenerating")
        raise DuplicateWireId(candidate)

    def get(self, wire_id: str) -> WireRecord:
        with self.db.snapshot() as session:
            wire = WireRepository(session).get_by_id(wire_id)
            if wire is None:
                raise NotFound(wire_id)
            return WireRecord.model_validate(wire)

    def get_detail(self, wire_id: str) -> WireDetail:
        """The wire plus the wires it depends on and the wires it blocks."""
        with self.db.snapshot() as session:
            wires = WireRepository(session)
            deps = DependencyRepository(session)
            wire = wires.get_by_id(wire_id)
            if wire is None:
                raise NotFound(wire_id)

            depends_on = wires.get_many(sorted(deps.blockers_of(wire_id)))
            blocks = wires.get_many(sorted(deps.dependents_of(wire_id)))
            return WireDetail.model_validate(
                {
                    **WireRecord.model_validate(wire).model_dump(),
                    "depends_on": [DependencyInfo.model_validate(w) for w in depends_on],
                    "blocks": [DependencyInfo.model_validate(w) for w in blocks],
                }
            )

    def list(self, status: WireStatus | None = None) -> list[WireRecord]:
        """All wires (optionally one status), newest first."""
        with self.db.snapshot() as session:
            return [WireRecord.model_validate(w) for w in WireRepository(session).list_all(status)]

    def list_details(self, status: WireStatus | None = None) -> list[WireDetail]:
        """Like ``list`` but with dependency summaries, read in one snapshot."""
        with self.db.snapshot() as session:
            wires = WireRepository(session)
            listed = wires.list_all(status)
            infos = {w.id: DependencyInfo.model_validate(w) for w in wires.list_all()}

            depends_on: dict[str, list[DependencyInfo]] = defaultdict(list)
            blocks: dict[str, list[DependencyInfo]] = defaultdict(list)
            for edge in DependencyRepository(session).list_all():
                depends_on[edge.wire_id].append(infos[edge.depends_on])
                blocks[edge.depends_on].append(infos[edge.wire_id])

            return [
                WireDetail.model_validate(
                    {
                        **WireRecord.model_validate(w).model_dump(),
                        "depends_on": depends_on.get(w.id, []),
                        "blocks": blocks.get(w.id, []),
                    }
                )
                for w in listed
            ]

    def count(self) -> int:
        with self.db.snapshot() as session:
            return WireRepository(session).count()

    def update(
        self,
        wire_id: str,
        title: str | None = None,
        description: str | None = None,
        status: WireStatus | None = None,
        priority: int | None = None,
    ) -> WireRecord:
        """Change the given fields; an empty description clears it."""
        changes = WireUpdate(title=title, description=description, status=status, priority=priority)
        if changes.title is not None and not changes.title.strip():
            raise EmptyTitle()

        with self.db.transaction() as session:
            repo = WireRepository(session)
            wire = repo.get_by_id(wire_id)
            if wire is None:
                raise NotFound(wire_id)

            if not changes.is_empty():
                if changes.description is not None:
                    wire.description = changes.description or None
                repo.update(
                    wire,
                    title=changes.title.strip() if changes.title is not None else None,
                    status=changes.status.value if changes.status is not None else None,
                    priority=changes.priority,
                )
                logger.info(f"Updated wire {wire_id}: {sorted(changes.model_dump(exclude_none=True))}")
            return WireRecord.model_validate(wire)

    def set_status(self, wire_id: str, status: WireStatus) -> StatusChange:
        """Move a wire to ``status``. Completing a wire with open blockers is allowed but warned about."""
        with self.db.transaction() as session:
            wires = WireRepository(session)
            wire = wires.get_by_id(wire_id)
            if wire is None:
                raise NotFound(wire_id)

            wires.update(wire, status=status.value)

            warnings: list[StatusWarning] = []
            if status is WireStatus.DONE:
                blockers = wires.get_many(sorted(DependencyRepository(session).blockers_of(wire_id)))
                warnings = [
                    StatusWarning(wire_id=b.id, status=b.status)
                    for b in blockers
                    if WireStatus(b.status) not in self.satisfied
                ]
            change = StatusChange(id=wire.id, status=wire.status, updated_at=wire.updated_at, warnings=warnings)

        logger.info(f"Wire {wire_id} → {status.value}")
        if warnings:
            logger.warning(f"Wire {wire_id} marked done with {len(warnings)} incomplete dependencies")
        return change

    def start(self, wire_id: str) -> StatusChange:
        return self.set_status(wire_id, WireStatus.IN_PROGRESS)

    def done(self, wire_id: str) -> StatusChange:
        return self.set_status(wire_id, WireStatus.DONE)

    def cancel(self, wire_id: str) -> StatusChange:
        return self.set_status(wire_id, WireStatus.CANCELLED)

    def delete(self, wire_id: str) -> None:
        """Delete a wire and, in the same transaction, every edge touching it."""
        with self.db.transaction() as session:
            wires = WireRepository(session)
            if not wires.exists(wire_id):
                raise NotFound(wire_id)
            removed = DependencyRepository(session).purge(wire_id)
            wires.delete(wire_id)

        logger.info(f"Deleted wire {wire_id} and {removed} dependency edge(s)")
