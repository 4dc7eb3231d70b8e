"""
Billing module.

Handles Stripe subscriptions: checkout, customer portal, cancellation,
and reconciliation of asynchronous webhook events into the cached
subscription fields on the preference record.

Public API:
- IBillingService, IStripeGateway: Interfaces for billing operations
- PlanCatalog: Plan lookup by id and Stripe price id
- SubscriptionSnapshot, SubscriptionStatus: Data models
- Billing exceptions: NoActiveSubscriptionError, WebhookVerificationError, etc.
"""

from .interfaces import IBillingService, IStripeGateway
from .plans import Plan, PlanCatalog, is_free_plan, can_upgrade
from .models import (
    SubscriptionSnapshot,
    SubscriptionStatus,
    CancelSubscriptionResult,
    CheckoutRequest,
    CheckoutSession,
    PortalSession,
    StripeEvent,
    StripeSubscriptionObject,
)
from .exceptions import (
    StripeServiceError,
    CheckoutError,
    PortalError,
    PortalNotActivatedError,
    NoStripeCustomerError,
    NoActiveSubscriptionError,
    UnknownPriceError,
    WebhookVerificationError,
    WebhookProcessingError,
)

__all__ = [
    # Interfaces
    "IBillingService",
    "IStripeGateway",
    # Plans
    "Plan",
    "PlanCatalog",
    "is_free_plan",
    "can_upgrade",
    # Models
    "SubscriptionSnapshot",
    "SubscriptionStatus",
    "CancelSubscriptionResult",
    "CheckoutRequest",
    "CheckoutSession",
    "PortalSession",
    "StripeEvent",
    "StripeSubscriptionObject",
    # Exceptions
    "StripeServiceError",
    "CheckoutError",
    "PortalError",
    "PortalNotActivatedError",
    "NoStripeCustomerError",
    "NoActiveSubscriptionError",
    "UnknownPriceError",
    "WebhookVerificationError",
    "WebhookProcessingError",
]
