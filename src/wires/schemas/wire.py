"""Pydantic records for wires — the plain structures the core hands out."""

from datetime import datetime
from pydantic import BaseModel, Field

from wires.models.wire import WireStatus


class WireCreate(BaseModel):
    title: str
    description: str | None = None
    priority: int = 0


class WireUpdate(BaseModel):
    title: str | None = None
    description: str | None = None
    status: WireStatus | None = None
    priority: int | None = None

    def is_empty(self) -> bool:
        return all(value is None for value in (self.title, self.description, self.status, self.priority))


class WireRecord(BaseModel):
    id: str
    title: str
    description: str | None = None
    status: WireStatus
    priority: int = 0
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class DependencyInfo(BaseModel):
    """Summary of a wire on the other end of a dependency edge."""
    id: str
    title: str
    status: WireStatus

    model_config = {"from_attributes": True}


class WireDetail(WireRecord):
    depends_on: list[DependencyInfo] = Field(default_factory=list)
    blocks: list[DependencyInfo] = Field(default_factory=list)


class StatusWarning(BaseModel):
    type: str = "incomplete_dependency"
    wire_id: str
    status: WireStatus


class StatusChange(BaseModel):
    id: str
    status: WireStatus
    updated_at: datetime
    warnings: list[StatusWarning] = Field(default_factory=list)
