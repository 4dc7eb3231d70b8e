"""
Billing service implementation.

Subscription state lives in Stripe; the preference record caches the
fields the app needs (plan, customer, subscription, status, price,
period end). Reads reconcile that cache against the live snapshot.
"""

import logging
from typing import Any

from modules.preferences.exceptions import PreferencesNotFoundError
from modules.preferences.interfaces import IPreferenceRepository
from modules.preferences.models import Preferences
from shared.models import Principal

from .interfaces import IBillingService, IStripeGateway
from .models import (
    CancelSubscriptionResult,
    CheckoutRequest,
    CheckoutSession,
    PortalSession,
    SubscriptionSnapshot,
    SubscriptionStatus,
)
from .plans import PlanCatalog, is_free_plan
from .exceptions import (
    CheckoutError,
    NoActiveSubscriptionError,
    NoStripeCustomerError,
    PortalError,
    PortalNotActivatedError,
    StripeServiceError,
    UnknownPriceError,
)

logger = logging.getLogger(__name__)


def subscription_fields(snapshot: SubscriptionSnapshot) -> dict[str, Any]:
    """Preference columns mirroring a subscription snapshot."""
    return {
        "plan": snapshot.plan,
        "stripe_customer_id": snapshot.customer_id,
        "stripe_subscription_id": snapshot.id,
        "stripe_subscription_status": snapshot.status,
        "stripe_price_id": snapshot.price_id,
        "stripe_current_period_end": snapshot.current_period_end,
    }


def stale_fields(prefs: Preferences, snapshot: SubscriptionSnapshot) -> dict[str, Any]:
    """The cached subscription columns that disagree with the snapshot."""
    return {
        column: value
        for column, value in subscription_fields(snapshot).items()
        if getattr(prefs, column) != value
    }


class BillingService(IBillingService):
    """Billing service backed by Stripe and the preference repository."""

    def __init__(
        self,
        preferences: IPreferenceRepository,
        gateway: IStripeGateway,
        plans: PlanCatalog,
        frontend_url: str,
    ):
        self._preferences = preferences
        self._gateway = gateway
        self._plans = plans
        self._frontend_url = frontend_url.rstrip("/")

    async def get_subscription(self, user_id: str) -> SubscriptionStatus:
        prefs = self._preferences.get_by_user(user_id)
        if prefs is None or not prefs.stripe_subscription_id:
            return SubscriptionStatus(subscription=None, plan="free")

        try:
            snapshot = self._gateway.retrieve_subscription(prefs.stripe_subscription_id)
        except StripeServiceError as e:
            logger.warning(f"Could not fetch subscription for user {user_id}: {e.message}")
            return SubscriptionStatus(subscription=None, plan=prefs.plan or "free")

        changes = stale_fields(prefs, snapshot)
        if changes:
            self._preferences.upsert(user_id, changes)
            logger.info(f"Refreshed cached subscription fields for user {user_id}: {sorted(changes)}")

        return SubscriptionStatus(subscription=snapshot, plan=snapshot.plan)

    async def cancel_subscription(self, user_id: str) -> CancelSubscriptionResult:
        prefs = self._preferences.get_by_user(user_id)
        if prefs is None or not prefs.stripe_subscription_id:
            raise NoActiveSubscriptionError(user_id)

        subscription_id = prefs.stripe_subscription_id
        self._gateway.cancel_at_period_end(subscription_id)
        self._preferences.upsert(user_id, {"stripe_subscription_status": "canceled"})

        logger.info(f"Subscription {subscription_id} canceled for user {user_id}")
        return CancelSubscriptionResult(subscription_id=subscription_id)

    async def create_checkout(self, user: Principal, request: CheckoutRequest) -> CheckoutSession:
        plan = self._plans.get_plan_by_price_id(request.price_id)
        if plan is None or is_free_plan(plan.id):
            raise UnknownPriceError(request.price_id)

        success_url = str(request.success_url or f"{self._frontend_url}/dashboard/billing?success=true")
        cancel_url = str(request.cancel_url or f"{self._frontend_url}/dashboard/billing?canceled=true")

        try:
            session = self._gateway.create_checkout_session(
                user_id=user.id,
                email=user.email,
                price_id=request.price_id,
                success_url=success_url,
                cancel_url=cancel_url,
            )
        except StripeServiceError as e:
            logger.error(f"Checkout failed for user {user.id}: {e.message}")
            raise CheckoutError() from e

        logger.info(f"Checkout session {session.session_id} created for user {user.id} ({plan.id})")
        return session

    async def create_portal_session(self, user_id: str) -> PortalSession:
        prefs = self._preferences.get_by_user(user_id)
        if prefs is None:
            raise PreferencesNotFoundError(user_id)
        if not prefs.stripe_customer_id:
            raise NoStripeCustomerError(user_id)

        try:
            url = self._gateway.create_portal_session(
                prefs.stripe_customer_id,
                return_url=f"{self._frontend_url}/dashboard/billing",
            )
        except StripeServiceError as e:
            logger.error(f"Billing portal failed for user {user_id}: {e.message}")
            if "customer portal" in e.message.lower():
                raise PortalNotActivatedError() from e
            raise PortalError() from e

        logger.info(f"Billing portal session created for user {user_id}")
        return PortalSession(url=url)
