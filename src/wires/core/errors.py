"""Typed errors raised by the wires core."""

from __future__ import annotations


class WireError(Exception):
    """Base class for every error the core surfaces to its callers."""

    kind = "wire_error"

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)

    def to_dict(self) -> dict:
        return {"error": self.message, "kind": self.kind}


class NotFound(WireError):
    kind = "not_found"

    def __init__(self, wire_id: str):
        self.wire_id = wire_id
        super().__init__(f"Wire not found: {wire_id}")


class EmptyTitle(WireError):
    kind = "empty_title"

    def __init__(self):
        super().__init__("Wire title must not be empty")


class SelfDependency(WireError):
    kind = "self_dependency"

    def __init__(self, wire_id: str):
        self.wire_id = wire_id
        super().__init__(f"Circular dependency detected: wire {wire_id} cannot depend on itself")


class WouldCreateCycle(WireError):
    """Raised when a new edge would close a dependency cycle."""

    kind = "would_create_cycle"

    def __init__(self, cycle: list[str]):
        self.cycle = cycle
        super().__init__(f"Circular dependency detected: {' → '.join(cycle)}")


class DuplicateWireId(WireError):
    kind = "duplicate_id"

    def __init__(self, wire_id: str):
        self.wire_id = wire_id
        super().__init__(f"Wire id already exists: {wire_id}")


class InvalidStatus(WireError):
    kind = "invalid_status"

    def __init__(self, value: str):
        self.value = value
        super().__init__(f"Invalid status: {value} (expected TODO, IN_PROGRESS, DONE or CANCELLED)")


class AlreadyInitialized(WireError):
    kind = "already_initialized"

    def __init__(self, path: str):
        self.path = path
        super().__init__(f"Wires repository already initialized at {path}")


class NotARepository(WireError):
    kind = "not_a_repository"

    def __init__(self):
        super().__init__("Not a wires repository (or any parent directory). Run `wr init` first.")


class InvalidConfig(WireError):
    kind = "invalid_config"

    def __init__(self, path: str, reason: str):
        self.path = path
        super().__init__(f"Invalid config file {path}: {reason}")
