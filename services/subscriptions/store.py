"""
Subscription Store
==================

Lock-guarded, ordered list of graph simulation subscriptions.

A store is created per application instance and passed explicitly; there
is no module-level store.

Version: 0.1.0
"""

import threading

from pydantic import BaseModel

from shared.logging import get_logger


logger = get_logger(__name__)


class Subscription(BaseModel):
    """A subscription to one simulation of a repository graph."""

    graphid: str = ""
    simid: str = ""


class SubscriptionStore:
    """
    Thread-safe subscription list.

    Duplicates are allowed; removal drops the first matching entry.
    """

    def __init__(self) -> None:
        self._subscriptions: list[Subscription] = []
        self._lock = threading.Lock()

    def add(self, subscription: Subscription) -> None:
        """Append a subscription."""
        with self._lock:
            self._subscriptions.append(subscription)
        logger.info(
            "subscription_added",
            graphid=subscription.graphid,
            simid=subscription.simid,
        )

    def remove(self, subscription: Subscription) -> bool:
        """
        Remove the first subscription matching graph and simulation id.

        Returns:
            True if a subscription was removed
        """
        with self._lock:
            for i, existing in enumerate(self._subscriptions):
                if existing == subscription:
                    del self._subscriptions[i]
                    break
            else:
                logger.info(
                    "subscription_not_found",
                    graphid=subscription.graphid,
                    simid=subscription.simid,
                )
                return False

        logger.info(
            "subscription_removed",
            graphid=subscription.graphid,
            simid=subscription.simid,
        )
        return True

    def list(self) -> list[Subscription]:
        """Snapshot of the current subscriptions, in insertion order."""
        with self._lock:
            return list(self._subscriptions)

    def __len__(self) -> int:
        with self._lock:
            return len(self._subscriptions)
