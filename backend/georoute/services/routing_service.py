"""
Routing service: the load balancer plus the regional servers behind it.

A request goes through these steps, in order:

1. reject a missing endpoint (no dispatch, counter untouched)
2. pick a backend round-robin
3. draw the simulated failure
4. wait out the simulated latency (applies to every outcome)
5. on failure, answer ``backend_failure`` without running the search
6. otherwise run Dijkstra on the backend's graph
"""

from __future__ import annotations

import asyncio
import math
from functools import lru_cache
from typing import Callable, Optional

import numpy as np

from ..algorithms import dijkstra_shortest_path
from ..config import RouteOptions, get_config, get_settings
from ..errors import MissingEndpoint, UnknownNode
from ..graph_store import GraphStore, get_graph_store
from ..models.route import RouteResult
from .activity_log import ActivityLog
from .dispatcher import Dispatcher


class RoutingService:
    def __init__(
        self,
        store: GraphStore,
        dispatcher: Dispatcher,
        engine: Callable = dijkstra_shortest_path,
        activity: ActivityLog | None = None,
    ):
        self.store = store
        self.dispatcher = dispatcher
        self.engine = engine
        self.activity = activity if activity is not None else ActivityLog()

    async def submit(
        self,
        from_node: Optional[str],
        to_node: Optional[str],
        options: RouteOptions | None = None,
    ) -> RouteResult:
        """
        Route ``from_node`` -> ``to_node`` on the next backend in rotation.

        Raises
        ------
        MissingEndpoint
            If either endpoint is empty. Raised before dispatch.
        NoBackendsAvailable
            If the store holds no backends.
        UnknownNode
            If the selected backend's graph lacks an endpoint. ``backend`` is set.
        """
        if not from_node:
            self.activity.add("Select both FROM and TO nodes before submitting.", tag="WARN")
            raise MissingEndpoint("from")
        if not to_node:
            self.activity.add("Select both FROM and TO nodes before submitting.", tag="WARN")
            raise MissingEndpoint("to")

        if options is None:
            options = get_config()

        index = self.dispatcher.select_backend(len(self.store))
        server = index + 1
        self.activity.add(f"Load Balancer: forwarding request to Server {server}", tag="DISPATCH")

        will_fail = self.dispatcher.should_fail(options.failure_rate)
        delay = self.dispatcher.delay_seconds(options.latency_ms, options.jitter_ms)
        await asyncio.sleep(delay)

        extra = {"source": from_node, "target": to_node, "delay_ms": delay * 1000.0}
        if will_fail:
            self.activity.add(f"Server {server} failed to respond (simulated).", tag=f"SERVER {server}")
            return RouteResult.backend_failure(index, **extra)

        graph = self.store.get(index).graph
        try:
            distance, path = self.engine(graph, from_node, to_node)
        except UnknownNode as e:
            self.activity.add(f"Server {server}: {e}", tag=f"SERVER {server}")
            raise UnknownNode(e.node, backend=index) from e

        if math.isinf(distance):
            self.activity.add(
                f"Server {server}: No route found between {from_node} and {to_node}.",
                tag=f"SERVER {server}",
            )
            return RouteResult.not_found(index, **extra)

        self.activity.add(
            f"Server {server}: Route found {' -> '.join(path)} (distance {distance:g})",
            tag=f"SERVER {server}",
        )
        return RouteResult.found(index, path, distance, **extra)


@lru_cache(maxsize=1)
def get_routing_service() -> RoutingService:
    settings = get_settings()
    return RoutingService(
        get_graph_store(),
        Dispatcher(rng=np.random.default_rng(settings.seed)),
        activity=ActivityLog(max_entries=settings.activity_log_size),
    )
