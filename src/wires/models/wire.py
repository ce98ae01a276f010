"""Wire SQLAlchemy model."""

import enum
from datetime import datetime, timezone
from sqlalchemy import String, Text, DateTime, Integer
from sqlalchemy.orm import Mapped, mapped_column
from wires.core.database import Base
from wires.core.errors import InvalidStatus


def utcnow() -> datetime:
    """Naive UTC timestamp (SQLite keeps no timezone)."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


class WireStatus(str, enum.Enum):
    TODO = "TODO"
    IN_PROGRESS = "IN_PROGRESS"
    DONE = "DONE"
    CANCELLED = "CANCELLED"

    @property
    def is_active(self) -> bool:
        return self in (WireStatus.TODO, WireStatus.IN_PROGRESS)

    @classmethod
    def parse(cls, text: str) -> "WireStatus":
        """Parse user text: case-insensitive, `-` and spaces accepted for `_`."""
        normalized = text.strip().upper().replace("-", "_").replace(" ", "_")
        try:
            return cls(normalized)
        except ValueError:
            raise InvalidStatus(text) from None


class Wire(Base):
    __tablename__ = "wires"

    id: Mapped[str] = mapped_column(String(7), primary_key=True)
    title: Mapped[str] = mapped_column(Text, nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    status: Mapped[str] = mapped_column(String(20), nullable=False, default=WireStatus.TODO.value, index=True)
    priority: Mapped[int] = mapped_column(Integer, nullable=False, default=0, index=True)
    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=utcnow)
    updated_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=utcnow)
