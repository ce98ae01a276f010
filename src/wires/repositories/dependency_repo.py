"""Dependency edge repository."""

from sqlalchemy import select, func, delete, or_
from sqlalchemy.orm import Session
from wires.models.dependency import WireDependency


class DependencyRepository:
    def __init__(self, session: Session):
        self.session = session

    def add(self, wire_id: str, depends_on: str) -> bool:
        """Insert the edge. Returns False when it was already present."""
        if self.exists(wire_id, depends_on):
            return False
        self.session.add(WireDependency(wire_id=wire_id, depends_on=depends_on))
        self.session.flush()
        return True

    def exists(self, wire_id: str, depends_on: str) -> bool:
        result = self.session.execute(
            select(func.count())
            .select_from(WireDependency)
            .where(WireDependency.wire_id == wire_id, WireDependency.depends_on == depends_on)
        )
        return result.scalar_one() > 0

    def remove(self, wire_id: str, depends_on: str) -> bool:
        result = self.session.execute(
            delete(WireDependency).where(
                WireDependency.wire_id == wire_id,
                WireDependency.depends_on == depends_on,
            )
        )
        return result.rowcount > 0

    def purge(self, wire_id: str) -> int:
        """Delete every edge touching ``wire_id`` in either role."""
        result = self.session.execute(
            delete(WireDependency).where(
                or_(WireDependency.wire_id == wire_id, WireDependency.depends_on == wire_id)
            )
        )
        return result.rowcount

    def blockers_of(self, wire_id: str) -> set[str]:
        result = self.session.execute(
            select(WireDependency.depends_on).where(WireDependency.wire_id == wire_id)
        )
        return set(result.scalars().all())

    def dependents_of(self, depends_on: str) -> set[str]:
        result = self.session.execute(
            select(WireDependency.wire_id).where(WireDependency.depends_on == depends_on)
        )
        return set(result.scalars().all())

    def list_all(self) -> list[WireDependency]:
        result = self.session.execute(
            select(WireDependency).order_by(WireDependency.wire_id, WireDependency.depends_on)
        )
        return list(result.scalars().all())

    def count(self) -> int:
        result = self.session.execute(select(func.count()).select_from(WireDependency))
        return result.scalar_one()
