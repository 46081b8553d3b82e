"""
Subscription Routes
===================

API endpoints for managing simulation subscriptions.
"""

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import PlainTextResponse

from shared.logging import get_logger

from services.subscriptions.store import Subscription, SubscriptionStore


logger = get_logger(__name__)
router = APIRouter()


def get_store(request: Request) -> SubscriptionStore:
    """Resolve the store owned by the running application."""
    return request.app.state.subscriptions


# ============================================================================
# Subscription Endpoints
# ============================================================================


@router.post(
    "/subscribe",
    status_code=status.HTTP_202_ACCEPTED,
    response_class=PlainTextResponse,
)
async def subscribe(
    subscription: Subscription,
    store: SubscriptionStore = Depends(get_store),
) -> str:
    """
    Subscribe to a graph simulation.

    Args:
        subscription: Graph and simulation identifiers
    """
    store.add(subscription)
    return "Subscription request accepted"


@router.post(
    "/unsubscribe",
    status_code=status.HTTP_202_ACCEPTED,
    response_class=PlainTextResponse,
)
async def unsubscribe(
    subscription: Subscription,
    store: SubscriptionStore = Depends(get_store),
) -> str:
    """
    Remove a subscription.

    Unknown subscriptions are accepted as well; the miss is only logged.
    """
    store.remove(subscription)
    return "Unsubscription request accepted"


@router.get("/subscriptions", response_model=list[Subscription])
async def list_subscriptions(
    store: SubscriptionStore = Depends(get_store),
) -> list[Subscription]:
    """
    List current subscriptions in insertion order.
    """
    return store.list()
