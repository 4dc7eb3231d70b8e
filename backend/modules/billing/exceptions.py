"""
Billing module exceptions.

These exceptions are raised by the billing module and can be caught
by API error handlers to return appropriate HTTP responses.
"""

from typing import Optional

from shared.exceptions import ExternalServiceError, ValidationError


class StripeServiceError(ExternalServiceError):
    """Raised when a Stripe API call fails."""

    def __init__(self, message: str, operation: str, code: Optional[str] = None):
        super().__init__(
            message,
            service="stripe",
            code=code or "STRIPE_ERROR",
            details={"operation": operation},
        )


class CheckoutError(ExternalServiceError):
    """Raised when a checkout session cannot be created."""

    def __init__(self):
        super().__init__(
            "Failed to create checkout session",
            service="stripe",
            code="CHECKOUT_FAILED",
        )


class PortalError(ExternalServiceError):
    """Raised when a billing portal session cannot be created."""

    def __init__(self):
        super().__init__(
            "Failed to create billing portal session. Please try again.",
            service="stripe",
            code="PORTAL_ERROR",
        )


class PortalNotActivatedError(ExternalServiceError):
    """Raised when the Stripe customer portal is not configured."""

    status_code = 503

    def __init__(self):
        super().__init__(
            "Stripe Customer Portal is not activated. Please enable it in your Stripe Dashboard.",
            service="stripe",
            code="PORTAL_NOT_ACTIVATED",
        )


class NoStripeCustomerError(ValidationError):
    """Raised when opening the portal for a user who never subscribed."""

    def __init__(self, user_id: str):
        super().__init__(
            "No active subscription found. Please subscribe to a plan first.",
            code="NO_STRIPE_CUSTOMER",
            details={"user_id": user_id},
        )


class NoActiveSubscriptionError(ValidationError):
    """Raised when canceling without a subscription."""

    def __init__(self, user_id: str):
        super().__init__(
            "No active subscription",
            code="NO_ACTIVE_SUBSCRIPTION",
            details={"user_id": user_id},
        )


class UnknownPriceError(ValidationError):
    """Raised when a price id doesn't belong to any paid plan."""

    def __init__(self, price_id: str):
        super().__init__(
            "Invalid price ID or plan not found",
            code="UNKNOWN_PRICE",
            details={"price_id": price_id},
        )


class WebhookVerificationError(ValidationError):
    """Raised when Stripe webhook signature verification fails."""

    def __init__(self, reason: str = "Webhook signature verification failed"):
        super().__init__(reason, code="WEBHOOK_VERIFICATION_FAILED")


class WebhookProcessingError(ValidationError):
    """Raised when a verified event cannot be applied."""

    def __init__(self, reason: str, event_type: Optional[str] = None):
        super().__init__(
            "Webhook handler failed",
            code="WEBHOOK_PROCESSING_FAILED",
            details={"reason": reason, "event_type": event_type},
        )
