"""
Billing API endpoints.

Subscription status and cancellation, Stripe Checkout, the customer
portal, and the Stripe webhook receiver.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Header, Request

from api.dependencies import (
    get_app_settings,
    get_billing_service,
    get_webhook_reconciler,
)
from api.middleware.auth import get_current_user
from shared.config import Settings
from shared.envelope import SuccessResponse, ok
from shared.models import Principal

from .interfaces import IBillingService
from .models import (
    CancelSubscriptionResult,
    CheckoutRequest,
    CheckoutSession,
    PortalSession,
    SubscriptionStatus,
    WebhookAck,
)
from .webhooks import WebhookReconciler, verify_webhook

router = APIRouter()


@router.get("/subscription", response_model=SuccessResponse[SubscriptionStatus])
async def get_subscription(
    user: Principal = Depends(get_current_user),
    service: IBillingService = Depends(get_billing_service),
) -> SuccessResponse[SubscriptionStatus]:
    """Get the caller's live subscription and current plan."""
    return ok(await service.get_subscription(user.id))


@router.delete("/subscription", response_model=SuccessResponse[CancelSubscriptionResult])
async def cancel_subscription(
    user: Principal = Depends(get_current_user),
    service: IBillingService = Depends(get_billing_service),
) -> SuccessResponse[CancelSubscriptionResult]:
    """Cancel the caller's subscription at the end of the current period."""
    result = await service.cancel_subscription(user.id)
    return ok(result, "Subscription canceled successfully")


@router.post("/checkout", response_model=SuccessResponse[CheckoutSession])
async def create_checkout(
    request: CheckoutRequest,
    user: Principal = Depends(get_current_user),
    service: IBillingService = Depends(get_billing_service),
) -> SuccessResponse[CheckoutSession]:
    return ok(await service.create_checkout(user, request))


@router.post("/billing-portal", response_model=SuccessResponse[PortalSession])
async def create_billing_portal(
    user: Principal = Depends(get_current_user),
    service: IBillingService = Depends(get_billing_service),
) -> SuccessResponse[PortalSession]:
    return ok(await service.create_portal_session(user.id))


@router.post("/webhooks/stripe", response_model=SuccessResponse[WebhookAck])
async def stripe_webhook(
    request: Request,
    stripe_signature: Optional[str] = Header(default=None),
    reconciler: WebhookReconciler = Depends(get_webhook_reconciler),
    settings: Settings = Depends(get_app_settings),
) -> SuccessResponse[WebhookAck]:
    """
    Receive a Stripe event.

    Unauthenticated: the Stripe-Signature header over the raw body is the
    only credential. Unknown event types are acknowledged.
    """
    raw_body = await request.body()
    event = verify_webhook(raw_body, stripe_signature, settings.stripe_webhook_secret)
    await reconciler.handle(event)
    return ok(WebhookAck(), "Webhook processed successfully")
