"""
Subscription Service Routes
===========================

API route handlers for the subscription service.
"""

from services.subscriptions.routes import subscriptions


__all__ = ["subscriptions"]
