"""Principal resolver factory.

Provides get_resolver() / set_resolver() to swap implementations:
- StaticTokenResolver (ORDERING_ACCESS_ADAPTER=static, the default)
"""

import os

from ordering.access.port import Principal, PrincipalResolver
from ordering.access.static_adapter import StaticTokenResolver

__all__ = ["Principal", "PrincipalResolver", "get_resolver", "reset_resolver", "set_resolver"]

_current_resolver: PrincipalResolver | None = None


def get_resolver() -> PrincipalResolver:
    """Return the active resolver, building the configured adapter on first use."""
    global _current_resolver
    if _current_resolver is None:
        adapter = os.environ.get("ORDERING_ACCESS_ADAPTER", "static")
        if adapter == "static":
            _current_resolver = StaticTokenResolver.from_env()
        else:
            raise ValueError(f"Unknown access adapter: {adapter}")
    return _current_resolver


def set_resolver(resolver: PrincipalResolver) -> None:
    """Override the active resolver (useful for tests)."""
    global _current_resolver
    _current_resolver = resolver


def reset_resolver() -> None:
    """Reset to the configured default resolver."""
    global _current_resolver
    _current_resolver = None
