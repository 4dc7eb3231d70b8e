"""
Shared test fixtures and utilities.

This module provides common test infrastructure used across all test modules.
API tests run against a container wired with in-memory repositories, so no
database or Stripe account is needed.
"""

import pytest
from fastapi.testclient import TestClient

from api import app
from api.dependencies import (
    ServiceContainer,
    get_billing_service,
    get_webhook_reconciler,
    reset_container,
    set_container,
)
from modules.auth.tokens import TokenCodec
from modules.billing.plans import PlanCatalog
from modules.billing.service import BillingService
from modules.billing.webhooks import WebhookReconciler
from shared.config import Settings
from shared.models import Principal

from tests.factories import (
    ENTERPRISE_PRICE_ID,
    PRO_PRICE_ID,
    FakeStripeGateway,
    make_codec,
    make_settings,
)


@pytest.fixture
def settings() -> Settings:
    return make_settings()


@pytest.fixture
def container(settings: Settings):
    """Install an in-memory container for the duration of a test."""
    container = ServiceContainer(settings)
    set_container(container)
    yield container
    reset_container()
    app.dependency_overrides.clear()


@pytest.fixture
def client(container: ServiceContainer) -> TestClient:
    return TestClient(app)


@pytest.fixture
def codec() -> TokenCodec:
    return make_codec()


@pytest.fixture
def principal() -> Principal:
    """Provide a consistent test user."""
    return Principal(id="user-1", email="alice@example.com", name="Alice")


@pytest.fixture
def plans() -> PlanCatalog:
    return PlanCatalog(pro_price_id=PRO_PRICE_ID, enterprise_price_id=ENTERPRISE_PRICE_ID)


@pytest.fixture
def fake_stripe(container: ServiceContainer) -> FakeStripeGateway:
    """Route the billing endpoints through an in-memory Stripe gateway."""
    gateway = FakeStripeGateway(container.plans)
    billing = BillingService(
        preferences=container.preference_repository,
        gateway=gateway,
        plans=container.plans,
        frontend_url=container.settings.frontend_url,
    )
    reconciler = WebhookReconciler(
        preferences=container.preference_repository,
        gateway=gateway,
        plans=container.plans,
    )
    app.dependency_overrides[get_billing_service] = lambda: billing
    app.dependency_overrides[get_webhook_reconciler] = lambda: reconciler
    return gateway
