import numpy as np
import pytest

from georoute.algorithms import dijkstra_shortest_path
from georoute.config import GRAPH_DIRS_ENV, SEED_ENV, RouteOptions, get_settings, reset_config
from georoute.graph_store import GraphStore, get_graph_store
from georoute.regions import REGIONAL_GRAPHS
from georoute.services.activity_log import ActivityLog
from georoute.services.dispatcher import Dispatcher
from georoute.services.routing_service import RoutingService, get_routing_service


class CountingEngine:
    """Wraps the real search and counts how often it runs."""

    def __init__(self):
        self.calls = 0

    def __call__(self, graph, source, target):
        self.calls += 1
        return dijkstra_shortest_path(graph, source, target)


@pytest.fixture(autouse=True)
def _reset_route_config():
    reset_config()
    yield
    reset_config()


@pytest.fixture
def store():
    return GraphStore.from_definitions(REGIONAL_GRAPHS)


@pytest.fixture
def dispatcher():
    return Dispatcher(rng=np.random.default_rng(0))


@pytest.fixture
def engine():
    return CountingEngine()


@pytest.fixture
def service(store, dispatcher, engine):
    return RoutingService(store, dispatcher, engine=engine, activity=ActivityLog())


@pytest.fixture
def instant():
    """No latency, no failures."""
    return RouteOptions(latency_ms=0.0, jitter_ms=0.0, failure_rate=0.0)


def _clear_cached_singletons():
    get_settings.cache_clear()
    get_graph_store.cache_clear()
    get_routing_service.cache_clear()


@pytest.fixture
def clean_settings(monkeypatch):
    """Environment-driven settings, rebuilt from scratch for the test."""
    monkeypatch.delenv(GRAPH_DIRS_ENV, raising=False)
    monkeypatch.delenv(SEED_ENV, raising=False)
    _clear_cached_singletons()
    yield monkeypatch
    _clear_cached_singletons()
