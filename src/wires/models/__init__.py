"""SQLAlchemy models for wires and their dependency edges."""

from wires.models.wire import Wire, WireStatus
from wires.models.dependency import WireDependency

__all__ = ["Wire", "WireStatus", "WireDependency"]
