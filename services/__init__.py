"""
Distributed DCR Services
========================

Services:
- dcr_graph: In-memory DCR graph parsing, adjacency and projection views
- subscriptions: Simulation subscription list and its command-line client
"""

__all__ = [
    "dcr_graph",
    "subscriptions",
]
