"""
Billing module data models.

These models define the data structures used by the billing module
and exposed through its routes.
"""

from datetime import datetime
from typing import Any, Optional, Union

from pydantic import AnyHttpUrl, BaseModel, ConfigDict, Field


class SubscriptionSnapshot(BaseModel):
    """Live subscription state as reported by Stripe."""

    id: str
    customer_id: str
    status: str
    price_id: str = ""
    current_period_end: Optional[datetime] = None
    cancel_at_period_end: bool = False
    plan: str = Field(default="free", description="Plan id derived from the price")


class SubscriptionStatus(BaseModel):
    """Response for GET /subscription."""

    subscription: Optional[SubscriptionSnapshot] = None
    plan: str = "free"


class CancelSubscriptionResult(BaseModel):
    subscription_id: str
    cancel_at_period_end: bool = True


class CheckoutRequest(BaseModel):
    """Request to start a Stripe Checkout session."""

    price_id: str = Field(..., min_length=1, description="Stripe price ID")
    success_url: Optional[AnyHttpUrl] = None
    cancel_url: Optional[AnyHttpUrl] = None


class CheckoutSession(BaseModel):
    url: str
    session_id: str


class PortalSession(BaseModel):
    url: str


class WebhookAck(BaseModel):
    received: bool = True


# -----------------------------------------------------------------------------
# Stripe event payloads (only the fields the reconciler reads)
# -----------------------------------------------------------------------------


class StripeCheckoutSessionObject(BaseModel):
    """``data.object`` of a checkout.session.completed event."""

    model_config = ConfigDict(extra="ignore")

    id: str
    client_reference_id: Optional[str] = None
    metadata: dict[str, Any] = Field(default_factory=dict)
    subscription: Optional[Union[str, dict[str, Any]]] = None

    @property
    def user_id(self) -> Optional[str]:
        return self.metadata.get("userId") or self.client_reference_id

    @property
    def subscription_id(self) -> Optional[str]:
        if isinstance(self.subscription, dict):
            return self.subscription.get("id")
        return self.subscription


class StripeSubscriptionObject(BaseModel):
    """``data.object`` of a customer.subscription.* event."""

    model_config = ConfigDict(extra="ignore")

    id: str = Field(..., min_length=1)
    customer: Optional[Union[str, dict[str, Any]]] = None
    status: Optional[str] = None
    metadata: Optional[dict[str, Any]] = None

    @property
    def user_id(self) -> Optional[str]:
        return (self.metadata or {}).get("userId")


class StripeEvent(BaseModel):
    """Envelope of a verified webhook event."""

    model_config = ConfigDict(extra="ignore")

    id: str
    type: str
    data: dict[str, Any]

    @property
    def payload(self) -> dict[str, Any]:
        return self.data.get("object") or {}
