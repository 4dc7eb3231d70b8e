"""Tests for modules/billing/service.py."""

import pytest

from modules.billing.exceptions import (
    CheckoutError,
    NoActiveSubscriptionError,
    NoStripeCustomerError,
    PortalError,
    PortalNotActivatedError,
    StripeServiceError,
    UnknownPriceError,
)
from modules.billing.models import CheckoutRequest
from modules.billing.service import BillingService
from modules.preferences.exceptions import PreferencesNotFoundError
from modules.preferences.repository import InMemoryPreferenceRepository

from tests.factories import ENTERPRISE_PRICE_ID, PRO_PRICE_ID, FakeStripeGateway


class TestBillingService:
    @pytest.fixture
    def preferences(self):
        return InMemoryPreferenceRepository()

    @pytest.fixture
    def gateway(self, plans):
        return FakeStripeGateway(plans)

    @pytest.fixture
    def service(self, preferences, gateway, plans):
        return BillingService(preferences, gateway, plans, frontend_url="http://localhost:3001/")

    @pytest.mark.asyncio
    async def test_subscription_without_record(self, service):
        status = await service.get_subscription("user-1")
        assert status.subscription is None
        assert status.plan == "free"

    @pytest.mark.asyncio
    async def test_subscription_reconciles_stale_fields(self, service, preferences, gateway):
        gateway.add_subscription(price_id=ENTERPRISE_PRICE_ID, status="past_due")
        preferences.upsert("user-1", {
            "plan": "pro",
            "stripe_subscription_id": "sub_123",
            "stripe_subscription_status": "active",
            "stripe_price_id": PRO_PRICE_ID,
        })

        status = await service.get_subscription("user-1")

        assert status.plan == "enterprise"
        assert status.subscription.status == "past_due"
        prefs = preferences.get_by_user("user-1")
        assert prefs.plan == "enterprise"
        assert prefs.stripe_subscription_status == "past_due"
        assert prefs.stripe_price_id == ENTERPRISE_PRICE_ID
        assert prefs.stripe_customer_id == "cus_123"

    @pytest.mark.asyncio
    async def test_subscription_stripe_unreachable(self, service, preferences, gateway):
        preferences.upsert("user-1", {"plan": "pro", "stripe_subscription_id": "sub_123"})
        gateway.error = StripeServiceError("timeout", operation="subscription.retrieve")

        status = await service.get_subscription("user-1")

        assert status.subscription is None
        assert status.plan == "pro"

    @pytest.mark.asyncio
    async def test_cancel(self, service, preferences, gateway):
        gateway.add_subscription()
        preferences.upsert("user-1", {"stripe_subscription_id": "sub_123"})

        result = await service.cancel_subscription("user-1")

        assert result.subscription_id == "sub_123"
        assert result.cancel_at_period_end is True
        assert gateway.canceled == ["sub_123"]
        assert preferences.get_by_user("user-1").stripe_subscription_status == "canceled"

    @pytest.mark.asyncio
    async def test_cancel_without_subscription(self, service, preferences):
        preferences.create("user-1", {})
        with pytest.raises(NoActiveSubscriptionError) as exc_info:
            await service.cancel_subscription("user-1")
        assert exc_info.value.message == "No active subscription"

    @pytest.mark.asyncio
    async def test_checkout_default_urls(self, service, gateway, principal):
        session = await service.create_checkout(principal, CheckoutRequest(price_id=PRO_PRICE_ID))

        assert session.session_id == "cs_1"
        call = gateway.checkout_calls[0]
        assert call["user_id"] == "user-1"
        assert call["email"] == "alice@example.com"
        assert call["success_url"] == "http://localhost:3001/dashboard/billing?success=true"
        assert call["cancel_url"] == "http://localhost:3001/dashboard/billing?canceled=true"

    @pytest.mark.asyncio
    async def test_checkout_unknown_price(self, service, principal):
        with pytest.raises(UnknownPriceError):
            await service.create_checkout(principal, CheckoutRequest(price_id="price_bogus"))

    @pytest.mark.asyncio
    async def test_checkout_stripe_failure(self, service, gateway, principal):
        gateway.error = StripeServiceError("card declined", operation="checkout.create")
        with pytest.raises(CheckoutError):
            await service.create_checkout(principal, CheckoutRequest(price_id=PRO_PRICE_ID))

    @pytest.mark.asyncio
    async def test_portal(self, service, preferences, gateway):
        preferences.upsert("user-1", {"stripe_customer_id": "cus_123"})

        session = await service.create_portal_session("user-1")

        assert session.url == "https://billing.stripe.test/cus_123"
        assert gateway.portal_calls == [("cus_123", "http://localhost:3001/dashboard/billing")]

    @pytest.mark.asyncio
    async def test_portal_without_record(self, service):
        with pytest.raises(PreferencesNotFoundError) as exc_info:
            await service.create_portal_session("user-1")
        assert exc_info.value.code == "NO_PREFERENCES"

    @pytest.mark.asyncio
    async def test_portal_without_customer(self, service, preferences):
        preferences.create("user-1", {})
        with pytest.raises(NoStripeCustomerError) as exc_info:
            await service.create_portal_session("user-1")
        assert exc_info.value.status_code == 400

    @pytest.mark.asyncio
    async def test_portal_not_activated(self, service, preferences, gateway):
        preferences.upsert("user-1", {"stripe_customer_id": "cus_123"})
        gateway.error = StripeServiceError(
            "You can't create a portal session in test mode until you save your customer portal settings",
            operation="billing_portal.create",
        )
        with pytest.raises(PortalNotActivatedError) as exc_info:
            await service.create_portal_session("user-1")
        assert exc_info.value.status_code == 503

    @pytest.mark.asyncio
    async def test_portal_other_failure(self, service, preferences, gateway):
        preferences.upsert("user-1", {"stripe_customer_id": "cus_123"})
        gateway.error = StripeServiceError("boom", operation="billing_portal.create")
        with pytest.raises(PortalError):
            await service.create_portal_session("user-1")
