"""
Dependency injection setup for FastAPI.

This module provides the "container" that wires together all module
implementations. Each module exposes its service through an interface,
and this file creates the concrete implementations from Settings.

STORAGE_BACKEND picks the repositories: "supabase" for the real
database, "memory" for local development and tests.
"""

import logging
import secrets
from datetime import timedelta
from typing import TYPE_CHECKING, Optional

from shared.config import Settings, get_settings

# Type checking imports for interfaces (avoids circular imports)
if TYPE_CHECKING:
    from modules.auth.interfaces import IAuthService, IUserRepository
    from modules.auth.resolver import IdentityResolver
    from modules.auth.tokens import TokenCodec
    from modules.billing.interfaces import IBillingService, IStripeGateway
    from modules.billing.plans import PlanCatalog
    from modules.billing.webhooks import WebhookReconciler
    from modules.preferences.interfaces import IPreferenceRepository, IPreferenceService
    from modules.tasks.interfaces import ITaskRepository, ITaskService

logger = logging.getLogger(__name__)


class ServiceContainer:
    """
    Container for all service instances.

    This class manages the lifecycle of service instances and their
    dependencies. Services are created lazily on first access.

    All services are cached as singletons within the container.
    Use reset() to clear all cached services for testing.
    """

    def __init__(self, settings: Optional[Settings] = None) -> None:
        self._settings = settings
        self.reset()

    @property
    def settings(self) -> Settings:
        if self._settings is None:
            self._settings = get_settings()
        return self._settings

    # -------------------------------------------------------------------------
    # Auth
    # -------------------------------------------------------------------------

    @property
    def token_codec(self) -> "TokenCodec":
        """Get the token codec, failing fast if no signing secret is configured."""
        if self._token_codec is None:
            from modules.auth.tokens import TokenCodec

            secret = self.settings.auth_jwt_secret
            if not secret:
                if not self.settings.debug:
                    raise RuntimeError(
                        "Auth configuration missing. Set the AUTH_JWT_SECRET environment variable."
                    )
                secret = secrets.token_urlsafe(32)
                logger.warning(
                    "AUTH_JWT_SECRET is not set; using a random secret. "
                    "Tokens will not survive a restart."
                )
            self._token_codec = TokenCodec(
                secret=secret,
                issuer=self.settings.auth_token_issuer,
                audience=self.settings.auth_token_audience,
                expires_in=timedelta(days=self.settings.auth_token_expires_days),
            )
        return self._token_codec

    @property
    def user_repository(self) -> "IUserRepository":
        if self._user_repository is None:
            if self.settings.storage_backend == "memory":
                from modules.auth.repository import InMemoryUserRepository
                self._user_repository = InMemoryUserRepository()
            else:
                from modules.auth.repository import UserRepository
                from shared.database import get_supabase_client
                self._user_repository = UserRepository(get_supabase_client(self.settings))
        return self._user_repository

    @property
    def identity_resolver(self) -> "IdentityResolver":
        if self._identity_resolver is None:
            from modules.auth.resolver import (
                IdentityResolver,
                bearer_token_from_header,
                token_from_cookie,
            )
            self._identity_resolver = IdentityResolver(
                codec=self.token_codec,
                users=self.user_repository,
                extractors=[
                    bearer_token_from_header,
                    token_from_cookie(self.settings.auth_cookie_name),
                ],
            )
        return self._identity_resolver

    @property
    def auth(self) -> "IAuthService":
        """Get the auth service instance."""
        if self._auth_service is None:
            from modules.auth.service import AuthService
            self._auth_service = AuthService(
                users=self.user_repository,
                codec=self.token_codec,
                tasks=self.task_repository,
                preferences=self.preference_repository,
                password_rounds=self.settings.auth_bcrypt_rounds,
            )
        return self._auth_service

    # -------------------------------------------------------------------------
    # Tasks and preferences
    # -------------------------------------------------------------------------

    @property
    def task_repository(self) -> "ITaskRepository":
        if self._task_repository is None:
            if self.settings.storage_backend == "memory":
                from modules.tasks.repository import InMemoryTaskRepository
                self._task_repository = InMemoryTaskRepository()
            else:
                from modules.tasks.repository import TaskRepository
                from shared.database import get_supabase_client
                self._task_repository = TaskRepository(get_supabase_client(self.settings))
        return self._task_repository

    @property
    def preference_repository(self) -> "IPreferenceRepository":
        if self._preference_repository is None:
            if self.settings.storage_backend == "memory":
                from modules.preferences.repository import InMemoryPreferenceRepository
                self._preference_repository = InMemoryPreferenceRepository()
            else:
                from modules.preferences.repository import PreferenceRepository
                from shared.database import get_supabase_client
                self._preference_repository = PreferenceRepository(get_supabase_client(self.settings))
        return self._preference_repository

    @property
    def preferences(self) -> "IPreferenceService":
        """Get the preference service instance."""
        if self._preference_service is None:
            from modules.preferences.service import PreferenceService
            self._preference_service = PreferenceService(self.preference_repository)
        return self._preference_service

    @property
    def tasks(self) -> "ITaskService":
        """Get the task service instance."""
        if self._task_service is None:
            from modules.tasks.service import TaskService
            self._task_service = TaskService(
                repository=self.task_repository,
                preferences=self.preferences,
            )
        return self._task_service

    # -------------------------------------------------------------------------
    # Billing
    # -------------------------------------------------------------------------

    @property
    def plans(self) -> "PlanCatalog":
        if self._plans is None:
            from modules.billing.plans import PlanCatalog
            self._plans = PlanCatalog(
                pro_price_id=self.settings.stripe_price_id_pro,
                enterprise_price_id=self.settings.stripe_price_id_enterprise,
            )
        return self._plans

    @property
    def stripe_gateway(self) -> "IStripeGateway":
        if self._stripe_gateway is None:
            from modules.billing.gateway import StripeGateway
            self._stripe_gateway = StripeGateway(self.settings.stripe_secret_key, self.plans)
        return self._stripe_gateway

    @property
    def billing(self) -> "IBillingService":
        """Get the billing service instance."""
        if self._billing_service is None:
            from modules.billing.service import BillingService
            self._billing_service = BillingService(
                preferences=self.preference_repository,
                gateway=self.stripe_gateway,
                plans=self.plans,
                frontend_url=self.settings.frontend_url,
            )
        return self._billing_service

    @property
    def webhooks(self) -> "WebhookReconciler":
        if self._webhook_reconciler is None:
            from modules.billing.webhooks import WebhookReconciler
            self._webhook_reconciler = WebhookReconciler(
                preferences=self.preference_repository,
                gateway=self.stripe_gateway,
                plans=self.plans,
            )
        return self._webhook_reconciler

    def reset(self) -> None:
        """
        Reset all cached services.

        This is primarily for testing - allows tests to get fresh
        service instances with different mock dependencies.
        """
        self._token_codec: "TokenCodec | None" = None
        self._user_repository: "IUserRepository | None" = None
        self._identity_resolver: "IdentityResolver | None" = None
        self._auth_service: "IAuthService | None" = None
        self._task_repository: "ITaskRepository | None" = None
        self._preference_repository: "IPreferenceRepository | None" = None
        self._preference_service: "IPreferenceService | None" = None
        self._task_service: "ITaskService | None" = None
        self._plans: "PlanCatalog | None" = None
        self._stripe_gateway: "IStripeGateway | None" = None
        self._billing_service: "IBillingService | None" = None
        self._webhook_reconciler: "WebhookReconciler | None" = None


# Module-level container singleton
_container: ServiceContainer | None = None


def get_container() -> ServiceContainer:
    """Get the singleton service container."""
    global _container
    if _container is None:
        _container = ServiceContainer()
    return _container


def set_container(container: ServiceContainer) -> None:
    """Install a pre-built container (tests, alternative wiring)."""
    global _container
    _container = container


def reset_container() -> None:
    """
    Reset the service container.

    This clears the cached container, so the next call to get_container()
    will create a fresh container with new service instances.

    Primarily used for testing.
    """
    global _container
    _container = None


# FastAPI dependency functions
# These are the functions that should be used in route Depends() calls


def get_app_settings() -> Settings:
    """FastAPI dependency for the settings the container was built with."""
    return get_container().settings


def get_identity_resolver() -> "IdentityResolver":
    return get_container().identity_resolver


def get_auth_service() -> "IAuthService":
    """FastAPI dependency for auth service."""
    return get_container().auth


def get_task_service() -> "ITaskService":
    """FastAPI dependency for task service."""
    return get_container().tasks


def get_preference_service() -> "IPreferenceService":
    """FastAPI dependency for preference service."""
    return get_container().preferences


def get_billing_service() -> "IBillingService":
    """FastAPI dependency for billing service."""
    return get_container().billing


def get_webhook_reconciler() -> "WebhookReconciler":
    """FastAPI dependency for the Stripe webhook reconciler."""
    return get_container().webhooks
