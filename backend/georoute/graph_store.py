from __future__ import annotations

import math
from collections.abc import Mapping
from functools import lru_cache
from numbers import Real
from pathlib import Path
from types import MappingProxyType
from typing import Dict, Iterable, List, NamedTuple, Sequence, Tuple

import networkx as nx
import pandas as pd

from .config import get_settings
from .errors import InvalidGraph, UnknownNode
from .regions import REGIONAL_GRAPHS


class Edge(NamedTuple):
    source: str
    target: str
    cost: float


class Graph:
    """Read-only weighted directed graph over a fixed node set."""

    def __init__(self, adjacency: Dict[str, Tuple[Edge, ...]], name: str | None = None):
        self.name = name
        self._adjacency = MappingProxyType(dict(adjacency))

    @property
    def adjacency(self) -> Mapping[str, Tuple[Edge, ...]]:
        return self._adjacency

    @property
    def nodes(self) -> List[str]:
        return list(self._adjacency)

    @property
    def num_edges(self) -> int:
        return sum(len(edges) for edges in self._adjacency.values())

    def __contains__(self, node) -> bool:
        return node in self._adjacency

    def __len__(self) -> int:
        return len(self._adjacency)

    def __repr__(self) -> str:
        return f"Graph(name={self.name!r}, nodes={len(self)}, edges={self.num_edges})"

    def edges(self, node: str) -> Tuple[Edge, ...]:
        """Outgoing edges of ``node``; empty for an isolated node."""
        try:
            return self._adjacency[node]
        except (KeyError, TypeError):
            raise UnknownNode(node) from None

    def to_networkx(self) -> nx.MultiDiGraph:
        graph = nx.MultiDiGraph(name=self.name)
        graph.add_nodes_from(self._adjacency)
        for edges in self._adjacency.values():
            for edge in edges:
                graph.add_edge(edge.source, edge.target, cost=edge.cost)
        return graph


class Backend(NamedTuple):
    index: int
    graph: Graph


def _parse_edge(source: str, raw) -> Tuple[str, object]:
    if isinstance(raw, Mapping):
        if "to" not in raw or "cost" not in raw:
            raise InvalidGraph(f"Edge from {source!r} needs 'to' and 'cost': {raw!r}")
        return raw["to"], raw["cost"]
    if isinstance(raw, (tuple, list)) and len(raw) == 2:
        return raw[0], raw[1]
    raise InvalidGraph(f"Malformed edge from {source!r}: {raw!r}")


def _check_cost(source: str, target: str, cost) -> float:
    if isinstance(cost, bool) or not isinstance(cost, Real):
        raise InvalidGraph(f"Edge {source!r}->{target!r} has non-numeric cost {cost!r}")
    cost = float(cost)
    if math.isnan(cost) or cost < 0:
        raise InvalidGraph(f"Edge {source!r}->{target!r} has invalid cost {cost!r}")
    return cost


def load_graph(definitions: Mapping, name: str | None = None) -> Graph:
    """
    Build a Graph from ``{node: [(target, cost), ...]}``.

    Edges may also be given as ``{"to": target, "cost": cost}`` mappings.
    Every edge target must itself be a key; parallel edges are kept as-is.

    Raises
    ------
    InvalidGraph
        On a dangling edge target, a bad cost or a malformed definition.
    """
    if not isinstance(definitions, Mapping):
        raise InvalidGraph(f"Graph definition must be a mapping, got {type(definitions).__name__}")

    adjacency: Dict[str, Tuple[Edge, ...]] = {}
    for source, raw_edges in definitions.items():
        if not isinstance(source, str) or not source:
            raise InvalidGraph(f"Node ids must be non-empty strings, got {source!r}")
        if raw_edges is None:
            raw_edges = ()
        edges = []
        for raw in raw_edges:
            target, cost = _parse_edge(source, raw)
            if target not in definitions:
                raise InvalidGraph(f"Edge {source!r}->{target!r} references unknown node {target!r}")
            edges.append(Edge(source, target, _check_cost(source, target, cost)))
        adjacency[source] = tuple(edges)

    graph = Graph(adjacency, name=name)
    print(f"[DEBUG] Loaded graph {name or '<unnamed>'}: nodes={len(graph)}, edges={graph.num_edges}", flush=True)
    return graph


def read_graph_csv(edge_path: Path, node_path: Path | None = None) -> Dict[str, List[Tuple[str, float]]]:
    """
    Read an edge table (``source,target,cost``) and an optional node table
    (``node_id``) into a definition that ``load_graph`` accepts.

    Nodes that appear only in the node table become isolated nodes.
    """
    edge_df = pd.read_csv(edge_path, dtype={"source": str, "target": str})
    missing = {"source", "target", "cost"} - set(edge_df.columns)
    if missing:
        raise InvalidGraph(f"{edge_path} is missing columns: {', '.join(sorted(missing))}")

    definitions: Dict[str, List[Tuple[str, float]]] = {}
    if node_path is not None:
        node_df = pd.read_csv(node_path, dtype={"node_id": str})
        if "node_id" not in node_df.columns:
            raise InvalidGraph(f"{node_path} is missing column: node_id")
        for node_id in node_df["node_id"]:
            definitions.setdefault(node_id, [])

    for source, target, cost in zip(edge_df["source"], edge_df["target"], edge_df["cost"]):
        definitions.setdefault(source, []).append((target, cost))
    return definitions


class GraphStore:
    """Fixed set of backends, one graph each, indexed from 0."""

    def __init__(self, graphs: Iterable[Graph]):
        self._backends = tuple(Backend(index, graph) for index, graph in enumerate(graphs))

    @classmethod
    def from_definitions(cls, definitions: Sequence[Mapping]) -> "GraphStore":
        return cls(
            load_graph(definition, name=f"server-{index + 1}")
            for index, definition in enumerate(definitions)
        )

    @classmethod
    def from_csv_dirs(cls, dirs: Sequence[Path]) -> "GraphStore":
        definitions = []
        for directory in dirs:
            directory = Path(directory)
            node_path = directory / "nodes.csv"
            definitions.append(
                read_graph_csv(directory / "edges.csv", node_path if node_path.exists() else None)
            )
        return cls.from_definitions(definitions)

    @property
    def backends(self) -> Tuple[Backend, ...]:
        return self._backends

    def __len__(self) -> int:
        return len(self._backends)

    def get(self, index: int) -> Backend:
        return self._backends[index]


@lru_cache(maxsize=1)
def get_graph_store() -> GraphStore:
    settings = get_settings()
    if settings.graph_csv_dirs:
        print(f"[DEBUG] Loading {len(settings.graph_csv_dirs)} regional graphs from CSV...", flush=True)
        return GraphStore.from_csv_dirs(settings.graph_csv_dirs)
    return GraphStore.from_definitions(REGIONAL_GRAPHS)
