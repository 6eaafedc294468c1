"""Simulated distributed routing: round-robin dispatch over regional Dijkstra backends."""

__version__ = "0.1.0"
