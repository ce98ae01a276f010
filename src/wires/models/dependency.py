"""Dependency edge model — `wire_id` depends on `depends_on`."""

from sqlalchemy import String, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column
from wires.core.database import Base


class WireDependency(Base):
    """An edge in the wire graph; both endpoints cascade on wire deletion."""
    __tablename__ = "dependencies"

    wire_id: Mapped[str] = mapped_column(
        String(7), ForeignKey("wires.id", ondelete="CASCADE"), primary_key=True, index=True
    )
    depends_on: Mapped[str] = mapped_column(
        String(7), ForeignKey("wires.id", ondelete="CASCADE"), primary_key=True, index=True
    )
