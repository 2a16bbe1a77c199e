"""Ordering policy — tunable business rules read from the environment.

Provides get_policy() / set_policy() / reset_policy() so tests and
deployments can swap rules without touching domain code:

- ORDERING_TAX_RATE: fraction applied to the subtotal (default 0.10)
- ORDERING_DECREMENT_STOCK: withdraw ordered quantities from product stock
  at checkout (default off)
- ORDERING_ENFORCE_STATUS_TRANSITIONS: reject order status changes that the
  fulfillment state machine does not allow (default off, any status may be
  set by an administrator)
"""

import os
from dataclasses import dataclass, field
from decimal import Decimal

_TRUTHY = {"1", "true", "yes", "on"}


def _flag(name: str, default: bool = False) -> bool:
    value = os.environ.get(name)
    if value is None:
        return default
    return value.strip().lower() in _TRUTHY


@dataclass(frozen=True)
class OrderingPolicy:
    tax_rate: Decimal = field(default=Decimal("0.10"))
    decrement_stock: bool = False
    enforce_status_transitions: bool = False

    @classmethod
    def from_env(cls) -> "OrderingPolicy":
        return cls(
            tax_rate=Decimal(os.environ.get("ORDERING_TAX_RATE", "0.10")),
            decrement_stock=_flag("ORDERING_DECREMENT_STOCK"),
            enforce_status_transitions=_flag("ORDERING_ENFORCE_STATUS_TRANSITIONS"),
        )


_current_policy: OrderingPolicy | None = None


def get_policy() -> OrderingPolicy:
    """Return the active policy, loading it from the environment on first use."""
    global _current_policy
    if _current_policy is None:
        _current_policy = OrderingPolicy.from_env()
    return _current_policy


def set_policy(policy: OrderingPolicy) -> None:
    """Override the active policy (useful for tests)."""
    global _current_policy
    _current_policy = policy


def reset_policy() -> None:
    """Drop the cached policy so the next lookup re-reads the environment."""
    global _current_policy
    _current_policy = None
