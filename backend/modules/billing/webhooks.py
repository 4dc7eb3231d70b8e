"""
Stripe webhook verification and reconciliation.

Events arrive out of band and may be redelivered or arrive out of order.
Every handler writes a field-scoped upsert keyed by user id, so applying
the same event twice converges to the same record.
"""

import json
import logging
from typing import Awaitable, Callable, Optional

import stripe

from modules.preferences.interfaces import IPreferenceRepository
from shared.exceptions import OrionError
from shared.validation import validate

from .gateway import snapshot_from_subscription
from .interfaces import IStripeGateway
from .models import (
    StripeCheckoutSessionObject,
    StripeEvent,
    StripeSubscriptionObject,
    SubscriptionSnapshot,
)
from .plans import PlanCatalog
from .service import subscription_fields
from .exceptions import WebhookProcessingError, WebhookVerificationError

logger = logging.getLogger(__name__)

EventHandler = Callable[[StripeEvent], Awaitable[None]]

# Seconds of clock skew allowed between Stripe's timestamp and ours
SIGNATURE_TOLERANCE = 300


def verify_webhook(
    raw_body: bytes,
    signature: Optional[str],
    secret: str,
    tolerance: int = SIGNATURE_TOLERANCE,
) -> StripeEvent:
    """
    Check the Stripe-Signature header and decode the event.

    The signature is checked against the raw bytes before anything is
    parsed.

    Raises:
        WebhookVerificationError: Missing/invalid signature or malformed body
    """
    if not signature:
        raise WebhookVerificationError("Missing signature")
    if not secret:
        raise WebhookVerificationError("Webhook secret is not configured")

    try:
        payload = raw_body.decode("utf-8")
        stripe.WebhookSignature.verify_header(payload, signature, secret, tolerance)
    except (UnicodeDecodeError, stripe.SignatureVerificationError) as e:
        logger.warning(f"Webhook signature verification failed: {e}")
        raise WebhookVerificationError() from e

    try:
        data = json.loads(payload)
    except json.JSONDecodeError as e:
        raise WebhookVerificationError("Invalid webhook payload") from e

    result = validate(StripeEvent, data)
    if not result.ok:
        raise WebhookVerificationError("Invalid webhook payload")
    return result.value


class WebhookReconciler:
    """
    Apply verified Stripe events to the preference records.

    Dispatch goes through a handler table; unknown event types hit the
    default arm and are acknowledged without side effects.
    """

    def __init__(
        self,
        preferences: IPreferenceRepository,
        gateway: IStripeGateway,
        plans: PlanCatalog,
    ):
        self._preferences = preferences
        self._gateway = gateway
        self._plans = plans
        self._handlers: dict[str, EventHandler] = {
            "checkout.session.completed": self._on_checkout_completed,
            "customer.subscription.updated": self._on_subscription_updated,
            "customer.subscription.deleted": self._on_subscription_deleted,
            "invoice.payment_succeeded": self._on_invoice,
            "invoice.payment_failed": self._on_invoice,
        }

    @property
    def supported_events(self) -> list[str]:
        return list(self._handlers)

    async def handle(self, event: StripeEvent) -> None:
        """
        Dispatch one event.

        Raises:
            WebhookProcessingError: If the event can't be applied
        """
        logger.info(f"Stripe webhook received: {event.type} ({event.id})")
        handler = self._handlers.get(event.type, self._on_unhandled)
        try:
            await handler(event)
        except WebhookProcessingError:
            raise
        except OrionError as e:
            raise WebhookProcessingError(e.message, event.type) from e
        except Exception as e:
            logger.exception(f"Stripe webhook {event.type} ({event.id}) failed")
            raise WebhookProcessingError("Unexpected error applying event", event.type) from e
        logger.info(f"Stripe webhook processed: {event.type} ({event.id})")

    def _store_snapshot(self, user_id: str, snapshot: SubscriptionSnapshot, event_type: str) -> None:
        if self._plans.get_plan_by_price_id(snapshot.price_id) is None:
            raise WebhookProcessingError("Invalid price ID or plan not found", event_type)

        self._preferences.upsert(user_id, subscription_fields(snapshot))
        logger.info(
            f"Subscription {snapshot.id} for user {user_id}: plan={snapshot.plan} status={snapshot.status}"
        )

    async def _on_checkout_completed(self, event: StripeEvent) -> None:
        result = validate(StripeCheckoutSessionObject, event.payload)
        if not result.ok:
            raise WebhookProcessingError("Malformed checkout session", event.type)
        session = result.value

        user_id = session.user_id
        if not user_id:
            raise WebhookProcessingError("No userId in session metadata", event.type)
        if not session.subscription_id:
            raise WebhookProcessingError("No subscription ID in session", event.type)

        snapshot = self._gateway.retrieve_subscription(session.subscription_id)
        self._store_snapshot(user_id, snapshot, event.type)

    def _parse_subscription(self, event: StripeEvent) -> StripeSubscriptionObject:
        result = validate(StripeSubscriptionObject, event.payload)
        if not result.ok:
            raise WebhookProcessingError("Malformed subscription", event.type)
        return result.value

    async def _on_subscription_updated(self, event: StripeEvent) -> None:
        subscription = self._parse_subscription(event)
        user_id = subscription.user_id
        if not user_id:
            logger.warning(f"No userId in subscription metadata ({subscription.id})")
            return
        snapshot = snapshot_from_subscription(event.payload, self._plans)
        self._store_snapshot(user_id, snapshot, event.type)

    async def _on_subscription_deleted(self, event: StripeEvent) -> None:
        subscription = self._parse_subscription(event)
        user_id = subscription.user_id
        if not user_id:
            logger.warning(f"No userId in subscription metadata ({subscription.id})")
            return
        self._preferences.upsert(
            user_id,
            {"plan": "free", "stripe_subscription_status": "canceled"},
        )
        logger.info(f"Subscription canceled for user {user_id}")

    async def _on_invoice(self, event: StripeEvent) -> None:
        outcome = "succeeded" if event.type == "invoice.payment_succeeded" else "failed"
        logger.info(f"Payment {outcome}: {event.payload.get('id')}")

    async def _on_unhandled(self, event: StripeEvent) -> None:
        logger.info(f"Unhandled event type: {event.type}")
