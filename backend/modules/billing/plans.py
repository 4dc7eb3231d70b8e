"""
Pricing plan catalogue.

Plans are ordered free < pro < enterprise. Paid plans are matched to
Stripe price ids from settings.
"""

from dataclasses import dataclass, field
from typing import Optional


@dataclass(frozen=True)
class Plan:
    id: str
    name: str
    description: str
    price: int
    price_id: Optional[str] = None
    max_tasks: int = -1  # -1 means unlimited
    max_users: int = -1
    features: tuple[str, ...] = field(default_factory=tuple)
    popular: bool = False


PLAN_ORDER = ("free", "pro", "enterprise")


class PlanCatalog:
    """Lookup helpers over the configured plans."""

    def __init__(self, pro_price_id: str = "", enterprise_price_id: str = ""):
        self._plans = (
            Plan(
                id="free",
                name="Free",
                description="Perfect for getting started",
                price=0,
                max_tasks=10,
                max_users=1,
                features=(
                    "Up to 10 tasks",
                    "Basic analytics",
                    "Community support",
                    "Mobile app access",
                ),
            ),
            Plan(
                id="pro",
                name="Pro",
                description="For professionals and small teams",
                price=19,
                price_id=pro_price_id or None,
                max_users=5,
                popular=True,
                features=(
                    "Unlimited tasks",
                    "Advanced analytics",
                    "Priority support",
                    "Custom integrations",
                    "API access",
                    "Team collaboration (up to 5 users)",
                ),
            ),
            Plan(
                id="enterprise",
                name="Enterprise",
                description="For large organizations",
                price=99,
                price_id=enterprise_price_id or None,
                features=(
                    "Everything in Pro",
                    "Unlimited team members",
                    "Advanced security",
                    "SLA guarantee",
                    "Dedicated account manager",
                    "Custom contract",
                    "SSO (SAML)",
                ),
            ),
        )

    @property
    def plans(self) -> tuple[Plan, ...]:
        return self._plans

    def get_plan_by_id(self, plan_id: str) -> Optional[Plan]:
        return next((plan for plan in self._plans if plan.id == plan_id), None)

    def get_plan_by_price_id(self, price_id: Optional[str]) -> Optional[Plan]:
        if not price_id:
            return None
        return next((plan for plan in self._plans if plan.price_id == price_id), None)


def is_free_plan(plan_id: str) -> bool:
    return plan_id == "free"


def can_upgrade(current_plan: str, target_plan: str) -> bool:
    """Whether target_plan ranks above current_plan. Unknown ids rank lowest."""
    rank = {plan_id: index for index, plan_id in enumerate(PLAN_ORDER)}
    return rank.get(target_plan, -1) > rank.get(current_plan, -1)
