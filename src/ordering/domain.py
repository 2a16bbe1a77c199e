"""Ordering bounded context — catalogue lookups, shopping carts and orders.

Handles the per-customer shopping cart, the checkout transaction that turns
a cart into a priced order snapshot, and the fulfillment status workflow
that follows it.
"""

from protean.domain import Domain

from ordering.utils.logging import configure_logging, get_logger

configure_logging()

logger = get_logger(__name__)

ordering = Domain(name="ordering")
