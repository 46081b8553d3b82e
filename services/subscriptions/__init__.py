"""
Subscription Service
====================

Keeps the list of graph simulations clients are subscribed to.

This service provides:
- Subscribe / unsubscribe endpoints
- Subscription listing
- A command-line client (dcr-cli)

Port: 8080
"""

__version__ = "0.1.0"
