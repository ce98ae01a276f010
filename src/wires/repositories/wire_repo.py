"""Wire repository — data access layer.

Repositories never commit; the surrounding ``Database.transaction()`` owns
the unit of work.
"""

from sqlalchemy import select, func, delete
from sqlalchemy.orm import Session
from wires.models.wire import Wire, WireStatus, utcnow


class WireRepository:
    def __init__(self, session: Session):
        self.session = session

    def create(self, **kwargs) -> Wire:
        now = utcnow()
        kwargs.setdefault("created_at", now)
        kwargs.setdefault("updated_at", now)
        wire = Wire(**kwargs)
        self.session.add(wire)
        self.session.flush()
        return wire

    def get_by_id(self, id: str) -> Wire | None:
        return self.session.get(Wire, id)

    def exists(self, id: str) -> bool:
        result = self.session.execute(select(func.count(Wire.id)).where(Wire.id == id))
        return result.scalar_one() > 0

    def get_many(self, ids: list[str]) -> list[Wire]:
        if not ids:
            return []
        result = self.session.execute(select(Wire).where(Wire.id.in_(ids)).order_by(Wire.id))
        return list(result.scalars().all())

    def list_all(self, status: WireStatus | None = None) -> list[Wire]:
        """Newest first; id breaks ties between wires created in the same instant."""
        query = select(Wire)
        if status is not None:
            query = query.where(Wire.status == status.value)
        result = self.session.execute(query.order_by(Wire.created_at.desc(), Wire.id.desc()))
        return list(result.scalars().all())

    def update(self, wire: Wire, **kwargs) -> Wire:
        for key, value in kwargs.items():
            if value is not None:
                setattr(wire, key, value)
        wire.updated_at = utcnow()
        self.session.flush()
        return wire

    def delete(self, id: str) -> bool:
        result = self.session.execute(delete(Wire).where(Wire.id == id))
        return result.rowcount > 0

    def count(self) -> int:
        result = self.session.execute(select(func.count(Wire.id)))
        return result.scalar_one()
