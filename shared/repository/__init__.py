"""
Repository Module
=================

Client for the remote DCR graph repository.

Usage:
    from shared.repository import DCRRepositoryClient

    async with DCRRepositoryClient() as client:
        sim_id, relations = await client.fetch_relations(graph_id)
"""

from shared.repository.client import DCRRepositoryClient


__all__ = ["DCRRepositoryClient"]
