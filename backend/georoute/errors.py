"""
Error kinds raised by the routing core.

Everything derives from ``ValueError`` so the HTTP layer can keep mapping
bad input to a 400 the same way for all of them.
"""

from __future__ import annotations


class GeoRouteError(ValueError):
    """Base class for routing errors."""


class InvalidGraph(GeoRouteError):
    """A graph definition is malformed. Fatal at load time."""


class UnknownNode(GeoRouteError):
    """A node id is not in the graph being searched."""

    def __init__(self, node, backend: int | None = None):
        self.node = node
        self.backend = backend
        where = f" on backend {backend}" if backend is not None else ""
        super().__init__(f"Node {node!r} not found{where}")


class NoBackendsAvailable(GeoRouteError):
    """Dispatcher was asked to pick from zero backends."""


class MissingEndpoint(GeoRouteError):
    """A route request lacks its from or to node. Raised before dispatch."""

    def __init__(self, field: str):
        self.field = field
        super().__init__(f"'{field}' is required")
