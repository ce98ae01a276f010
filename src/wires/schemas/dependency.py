"""Pydantic records for dependency edges and graph exports."""

from pydantic import BaseModel, Field

from wires.models.wire import WireStatus


class DependencyEdge(BaseModel):
    wire_id: str
    depends_on: str

    model_config = {"from_attributes": True, "frozen": True}


class GraphNode(BaseModel):
    id: str
    title: str
    status: WireStatus
    priority: int = 0


class GraphEdge(BaseModel):
    """Exported edge: `from` depends on `to`."""
    from_: str = Field(alias="from")
    to: str

    model_config = {"populate_by_name": True}


class GraphExport(BaseModel):
    nodes: list[GraphNode] = Field(default_factory=list)
    edges: list[GraphEdge] = Field(default_factory=list)
