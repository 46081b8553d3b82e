"""
Shared Models
=============

Pydantic models shared across the DCR services.
"""

from shared.models.common import ErrorResponse, HealthResponse


__all__ = [
    "ErrorResponse",
    "HealthResponse",
]
