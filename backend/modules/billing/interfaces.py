"""
Billing module interface.

Routes depend on IBillingService; the service and the webhook reconciler
depend on IStripeGateway, which tests replace with a fake.
"""

from typing import Protocol, runtime_checkable

from shared.models import Principal

from .models import (
    CancelSubscriptionResult,
    CheckoutRequest,
    CheckoutSession,
    PortalSession,
    SubscriptionSnapshot,
    SubscriptionStatus,
)


@runtime_checkable
class IStripeGateway(Protocol):
    """Outbound Stripe calls. Failures raise StripeServiceError."""

    def create_checkout_session(
        self,
        user_id: str,
        email: str,
        price_id: str,
        success_url: str,
        cancel_url: str,
    ) -> CheckoutSession:
        ...

    def create_portal_session(self, customer_id: str, return_url: str) -> str:
        ...

    def retrieve_subscription(self, subscription_id: str) -> SubscriptionSnapshot:
        ...

    def cancel_at_period_end(self, subscription_id: str) -> SubscriptionSnapshot:
        ...


@runtime_checkable
class IBillingService(Protocol):
    """
    Interface for subscription operations initiated by the user.

    Asynchronous state changes coming from Stripe go through the
    WebhookReconciler instead.
    """

    async def get_subscription(self, user_id: str) -> SubscriptionStatus:
        """
        Get the user's live subscription and plan.

        Cached Stripe fields on the preference record are refreshed when
        they differ from what Stripe reports.
        """
        ...

    async def cancel_subscription(self, user_id: str) -> CancelSubscriptionResult:
        """
        Cancel the user's subscription at the end of the billing period.

        Raises:
            NoActiveSubscriptionError: If the user has no subscription
        """
        ...

    async def create_checkout(self, user: Principal, request: CheckoutRequest) -> CheckoutSession:
        """
        Start a Stripe Checkout session for a paid plan.

        Raises:
            UnknownPriceError: If the price isn't one of the paid plans
            CheckoutError: If Stripe rejects the request
        """
        ...

    async def create_portal_session(self, user_id: str) -> PortalSession:
        """
        Open the Stripe customer portal.

        Raises:
            PreferencesNotFoundError: If the user has no preference record
            NoStripeCustomerError: If the user never subscribed
            PortalNotActivatedError: If the portal isn't configured in Stripe
            PortalError: On any other Stripe failure
        """
        ...
