"""
Distributed DCR Shared Library
==============================

Common utilities, configurations, and abstractions shared across the
DCR graph and subscription services.

Modules:
    - config: Configuration management with Pydantic Settings
    - logging: Structured logging with structlog
    - exceptions: Project error hierarchy
    - repository: Client for the remote DCR graph repository
    - models: Shared Pydantic models

Version: 0.1.0
"""

__version__ = "0.1.0"
__author__ = "Distributed DCR Team"

from shared.config import settings
from shared.logging import get_logger, setup_logging

__all__ = [
    "settings",
    "get_logger",
    "setup_logging",
    "__version__",
]
