"""
DCR Graph Service
=================

In-memory DCR graph engine.

Features:
- Constraint document decoding (conditions, responses, includes, excludes)
- Concurrent event graph materialization with a thread-safe registry
- Kind-agnostic adjacency matrix
- Bounded per-event projections

Port: 8081
"""

__version__ = "0.1.0"
