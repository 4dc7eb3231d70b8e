"""
Stripe gateway.

Thin wrapper over the Stripe SDK. Every call passes the configured API
key explicitly and every Stripe failure is re-raised as a domain error,
so services never see SDK exception types.
"""

import logging
from datetime import datetime, timezone
from typing import Any, Optional

import stripe

from .exceptions import StripeServiceError
from .models import CheckoutSession, SubscriptionSnapshot
from .plans import PlanCatalog

logger = logging.getLogger(__name__)


def _as_dict(obj: Any) -> dict[str, Any]:
    """Normalize a StripeObject (or an already-decoded dict) to a plain dict."""
    if isinstance(obj, dict) and not hasattr(obj, "to_dict"):
        return obj
    return obj.to_dict()


def _from_timestamp(value: Optional[int]) -> Optional[datetime]:
    if value is None:
        return None
    return datetime.fromtimestamp(value, tz=timezone.utc)


def snapshot_from_subscription(data: dict[str, Any], plans: PlanCatalog) -> SubscriptionSnapshot:
    """
    Build a SubscriptionSnapshot from a Stripe subscription payload.

    The price comes from the first subscription item. Newer API versions
    report current_period_end per item rather than on the subscription.
    """
    items = (data.get("items") or {}).get("data") or []
    first_item = items[0] if items else {}
    price_id = (first_item.get("price") or {}).get("id") or ""

    customer = data.get("customer")
    if isinstance(customer, dict):
        customer = customer.get("id")

    period_end = data.get("current_period_end") or first_item.get("current_period_end")
    plan = plans.get_plan_by_price_id(price_id)

    return SubscriptionSnapshot(
        id=data["id"],
        customer_id=customer or "",
        status=data.get("status") or "",
        price_id=price_id,
        current_period_end=_from_timestamp(period_end),
        cancel_at_period_end=bool(data.get("cancel_at_period_end")),
        plan=plan.id if plan else "free",
    )


class StripeGateway:
    """Stripe API calls used by billing."""

    def __init__(self, secret_key: str, plans: PlanCatalog):
        self._api_key = secret_key
        self._plans = plans

    def create_checkout_session(
        self,
        user_id: str,
        email: str,
        price_id: str,
        success_url: str,
        cancel_url: str,
    ) -> CheckoutSession:
        """
        Create a subscription-mode Checkout session.

        The user id travels as client_reference_id and as metadata on both
        the session and the resulting subscription, so every later webhook
        can be tied back to the user.
        """
        try:
            session = stripe.checkout.Session.create(
                api_key=self._api_key,
                customer_email=email,
                client_reference_id=user_id,
                mode="subscription",
                payment_method_types=["card"],
                line_items=[{"price": price_id, "quantity": 1}],
                success_url=success_url,
                cancel_url=cancel_url,
                metadata={"userId": user_id},
                subscription_data={"metadata": {"userId": user_id}},
            )
        except stripe.StripeError as e:
            raise StripeServiceError(str(e), operation="checkout.create") from e

        return CheckoutSession(url=session.url or "", session_id=session.id)

    def create_portal_session(self, customer_id: str, return_url: str) -> str:
        try:
            session = stripe.billing_portal.Session.create(
                api_key=self._api_key,
                customer=customer_id,
                return_url=return_url,
            )
        except stripe.StripeError as e:
            raise StripeServiceError(str(e), operation="billing_portal.create") from e
        return session.url

    def retrieve_subscription(self, subscription_id: str) -> SubscriptionSnapshot:
        try:
            subscription = stripe.Subscription.retrieve(subscription_id, api_key=self._api_key)
        except stripe.StripeError as e:
            raise StripeServiceError(str(e), operation="subscription.retrieve") from e
        return snapshot_from_subscription(_as_dict(subscription), self._plans)

    def cancel_at_period_end(self, subscription_id: str) -> SubscriptionSnapshot:
        try:
            subscription = stripe.Subscription.modify(
                subscription_id,
                api_key=self._api_key,
                cancel_at_period_end=True,
            )
        except stripe.StripeError as e:
            raise StripeServiceError(str(e), operation="subscription.cancel") from e
        logger.info(f"Subscription {subscription_id} set to cancel at period end")
        return snapshot_from_subscription(_as_dict(subscription), self._plans)
