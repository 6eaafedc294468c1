from __future__ import annotations

from functools import lru_cache
from typing import Dict, List, Mapping, Sequence, Tuple

import numpy as np

from .errors import UnknownNode
from .regions import NODE_COORDS


class NodeTable:
    """Static node -> (lat, lon) lookup owned by the presentation side."""

    def __init__(self, coords: Mapping[str, Tuple[float, float]]):
        self._coords: Dict[str, Tuple[float, float]] = {
            node: (float(lat), float(lon)) for node, (lat, lon) in coords.items()
        }

    def __contains__(self, node) -> bool:
        return node in self._coords

    def __len__(self) -> int:
        return len(self._coords)

    @property
    def node_ids(self) -> List[str]:
        return list(self._coords)

    def coords(self, node: str) -> Tuple[float, float]:
        try:
            return self._coords[node]
        except KeyError:
            raise UnknownNode(node) from None

    def nearest_node(self, lat: float, lon: float) -> str:
        """
        Closest node by plain Euclidean distance in degree space.

        No geodesic correction. Ties go to the node listed first.
        """
        if not self._coords:
            raise ValueError("Node table has no coordinates")
        points = np.array(list(self._coords.values()), dtype=np.float64)
        dists = np.linalg.norm(points - np.array([lat, lon], dtype=np.float64), axis=1)
        idx = int(np.argmin(dists))
        return self.node_ids[idx]

    def nodes_geojson(self, graph=None) -> Dict:
        features: List[Dict] = []
        nx_graph = graph.to_networkx() if graph is not None else None
        for node_id, (lat, lon) in self._coords.items():
            properties = {"node_id": node_id}
            if nx_graph is not None:
                if node_id not in nx_graph:
                    continue
                properties["degree"] = int(nx_graph.degree(node_id))
            features.append(
                {
                    "type": "Feature",
                    "geometry": {"type": "Point", "coordinates": [lon, lat]},
                    "properties": properties,
                }
            )
        return {"type": "FeatureCollection", "features": features}

    def route_geojson(self, path: Sequence[str], **properties) -> Dict:
        """LineString through the path's nodes, GeoJSON ``[lon, lat]`` order."""
        coordinates = []
        for node in path:
            lat, lon = self.coords(node)
            coordinates.append([lon, lat])
        return {
            "type": "Feature",
            "geometry": {"type": "LineString", "coordinates": coordinates},
            "properties": {"node_ids": list(path), **properties},
        }


@lru_cache(maxsize=1)
def get_node_table() -> NodeTable:
    return NodeTable(NODE_COORDS)
