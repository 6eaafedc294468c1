import math
from itertools import product

import networkx as nx
import pytest

from georoute.algorithms import dijkstra_shortest_path
from georoute.errors import UnknownNode
from georoute.graph_store import load_graph
from georoute.regions import REGIONAL_GRAPHS


class RecordingGraph:
    """Graph wrapper that remembers which nodes had their edges expanded."""

    def __init__(self, graph):
        self.graph = graph
        self.expanded = []

    @property
    def nodes(self):
        return self.graph.nodes

    def __contains__(self, node):
        return node in self.graph

    def edges(self, node):
        self.expanded.append(node)
        return self.graph.edges(node)


def test_grid_region_prefers_cheaper_southern_route():
    graph = load_graph(REGIONAL_GRAPHS[0])

    cost, path = dijkstra_shortest_path(graph, "A", "G")

    assert path == ["A", "C", "F", "G"]
    assert cost == 6


def test_equal_cost_routes_report_the_first_one_settled():
    # A-C-F-G and A-B-D-E-G both cost 7; G is first reached via F.
    graph = load_graph(REGIONAL_GRAPHS[1])

    cost, path = dijkstra_shortest_path(graph, "A", "G")

    assert path == ["A", "C", "F", "G"]
    assert cost == 7


def test_disconnected_region_returns_inf_and_empty_path():
    graph = load_graph(REGIONAL_GRAPHS[2])

    cost, path = dijkstra_shortest_path(graph, "A", "B")

    assert math.isinf(cost)
    assert path == []


def test_isolated_destination_is_unreachable():
    graph = load_graph(REGIONAL_GRAPHS[2])

    cost, path = dijkstra_shortest_path(graph, "A", "E")

    assert math.isinf(cost)
    assert path == []


@pytest.mark.parametrize("definition", REGIONAL_GRAPHS)
def test_source_equals_target(definition):
    graph = load_graph(definition)
    for node in graph.nodes:
        assert dijkstra_shortest_path(graph, node, node) == (0.0, [node])


@pytest.mark.parametrize("source, target", [("Z", "A"), ("A", "Z")])
def test_unknown_endpoint_raises(source, target):
    graph = load_graph(REGIONAL_GRAPHS[0])

    with pytest.raises(UnknownNode) as raised:
        dijkstra_shortest_path(graph, source, target)
    assert raised.value.node == "Z"


def test_directed_edges_are_one_way():
    graph = load_graph({"A": [("B", 1)], "B": []})

    assert dijkstra_shortest_path(graph, "A", "B") == (1.0, ["A", "B"])
    assert math.isinf(dijkstra_shortest_path(graph, "B", "A")[0])


def test_parallel_edges_use_the_cheapest():
    graph = load_graph({"A": [("B", 5), ("B", 2), ("B", 9)], "B": []})

    assert dijkstra_shortest_path(graph, "A", "B") == (2.0, ["A", "B"])


def test_zero_cost_edges():
    graph = load_graph({"A": [("B", 0)], "B": [("A", 0), ("C", 0)], "C": []})

    assert dijkstra_shortest_path(graph, "A", "C") == (0.0, ["A", "B", "C"])


def test_stops_once_target_is_popped():
    graph = RecordingGraph(load_graph({
        "A": [("B", 1)],
        "B": [("C", 1)],
        "C": [("D", 1)],
        "D": [],
    }))

    cost, path = dijkstra_shortest_path(graph, "A", "B")

    assert (cost, path) == (1.0, ["A", "B"])
    assert graph.expanded == ["A"]


def test_stale_queue_entries_are_skipped():
    # B is first queued at 5, then improved to 2 via C; the stale (5, B)
    # entry is popped last and must not expand B again.
    graph = RecordingGraph(load_graph({
        "A": [("B", 5), ("C", 1)],
        "C": [("B", 1)],
        "B": [("D", 1)],
        "D": [],
        "E": [],
    }))

    cost, path = dijkstra_shortest_path(graph, "A", "E")

    assert math.isinf(cost)
    assert path == []
    assert graph.expanded == ["A", "C", "B", "D"]


@pytest.mark.parametrize("definition", REGIONAL_GRAPHS)
def test_distances_match_networkx(definition):
    graph = load_graph(definition)
    nx_graph = graph.to_networkx()

    for source in graph.nodes:
        expected = nx.single_source_dijkstra_path_length(nx_graph, source, weight="cost")
        for target in graph.nodes:
            cost, path = dijkstra_shortest_path(graph, source, target)
            if target in expected:
                assert cost == pytest.approx(expected[target])
                assert path[0] == source and path[-1] == target
            else:
                assert math.isinf(cost)


def test_reloading_same_definition_gives_identical_results():
    first = load_graph(REGIONAL_GRAPHS[1])
    second = load_graph(REGIONAL_GRAPHS[1])

    for source, target in product(first.nodes, repeat=2):
        assert dijkstra_shortest_path(first, source, target) == dijkstra_shortest_path(second, source, target)
