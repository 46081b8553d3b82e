"""
DCR Graph Routes
================

API route handlers for the DCR Graph Service.

Routes:
- graph: Parsing, adjacency and projection views
"""

from services.dcr_graph.routes import graph


__all__ = ["graph"]
