from __future__ import annotations

from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field


FOUND = "found"
NOT_FOUND = "not_found"
BACKEND_FAILURE = "backend_failure"


class RouteResult(BaseModel):
    status: Literal["found", "not_found", "backend_failure"]
    backend: int = Field(description="Index of the backend that handled the request")
    source: Optional[str] = None
    target: Optional[str] = None
    path: List[str] = Field(default_factory=list)
    distance: Optional[float] = None
    delay_ms: float = Field(default=0.0, description="Simulated latency applied to this request")

    @classmethod
    def found(cls, backend: int, path: List[str], distance: float, **extra) -> "RouteResult":
        return cls(status=FOUND, backend=backend, path=list(path), distance=float(distance), **extra)

    @classmethod
    def not_found(cls, backend: int, **extra) -> "RouteResult":
        return cls(status=NOT_FOUND, backend=backend, **extra)

    @classmethod
    def backend_failure(cls, backend: int, **extra) -> "RouteResult":
        return cls(status=BACKEND_FAILURE, backend=backend, **extra)

    @property
    def is_found(self) -> bool:
        return self.status == FOUND


class RouteRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    from_node: Optional[str] = Field(default=None, alias="from")
    to_node: Optional[str] = Field(default=None, alias="to")
    latency_ms: Optional[float] = Field(default=None, ge=0.0)
    jitter_ms: Optional[float] = Field(default=None, ge=0.0)
    failure_rate: Optional[float] = Field(default=None, ge=0.0, le=1.0)


class NearestNodeRequest(BaseModel):
    lat: float
    lon: float


class NearestNodeResponse(BaseModel):
    node_id: str
    lat: float
    lon: float


class BackendSummary(BaseModel):
    index: int
    name: Optional[str] = None
    num_nodes: int
    num_edges: int


class ActivityEntry(BaseModel):
    t: str
    text: str
