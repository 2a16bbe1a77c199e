"""Per-user state tracking for Locust load test scenarios.

Each Locust user instance maintains its own state — no cross-user sharing.
State tracks what the API returned so follow-up requests can reference it.
"""

from dataclasses import dataclass, field


@dataclass
class ShopperState:
    """Tracks the cart and orders of one simulated customer."""

    headers: dict = field(default_factory=dict)
    product_ids: list[str] = field(default_factory=list)
    cart_total: float = 0.0
    order_ids: list[str] = field(default_factory=list)


@dataclass
class FulfillmentState:
    """Tracks the order an administrator is moving through fulfillment."""

    headers: dict = field(default_factory=dict)
    order_id: str | None = None
    current_status: str = "pending"
