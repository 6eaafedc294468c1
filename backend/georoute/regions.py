"""
Built-in regional graphs and the node coordinate table.

Each regional server holds a slightly different view of the same seven
cities: server 1 is grid-like, server 2 re-weights it, server 3 drops links
so that B, D and E are cut off from the rest.
"""

from __future__ import annotations

REGIONAL_GRAPHS = [
    # Server 1: simple grid-like graph
    {
        "A": [("B", 1), ("C", 2)],
        "B": [("A", 1), ("D", 2)],
        "C": [("A", 2), ("F", 3)],
        "D": [("B", 2), ("E", 2)],
        "E": [("D", 2), ("G", 3)],
        "F": [("C", 3), ("G", 1)],
        "G": [("F", 1), ("E", 3)],
    },
    # Server 2: alternate weights
    {
        "A": [("B", 1), ("C", 3)],
        "B": [("A", 1), ("D", 1)],
        "C": [("A", 3), ("F", 2)],
        "D": [("B", 1), ("E", 4)],
        "E": [("D", 4), ("G", 1)],
        "F": [("C", 2), ("G", 2)],
        "G": [("F", 2), ("E", 1)],
    },
    # Server 3: different topology
    {
        "A": [("C", 2)],
        "C": [("A", 2), ("F", 2)],
        "F": [("C", 2), ("G", 1)],
        "G": [("F", 1)],
        # isolated nodes
        "B": [("D", 2)],
        "D": [("B", 2)],
        "E": [],
    },
]

# node_id -> (lat, lon)
NODE_COORDS = {
    "A": (-33.9249, 18.4241),  # Cape Town
    "B": (-26.2041, 28.0473),  # Johannesburg
    "C": (-29.8579, 31.0292),  # Durban
    "D": (-25.7461, 28.1881),  # Pretoria
    "E": (-33.4608, 22.9375),  # Mossel Bay
    "F": (-30.5595, 22.9375),
    "G": (-34.0, 25.0),
}

PRESETS = {
    "A-G": ("A", "G"),
}
