"""Cart view — the `{items, subtotal, tax, total}` shape every cart operation returns.

The view resolves each line against the live catalogue, so prices reflect the
current product records. Checkout prices the order from this same view, which
keeps the order snapshot and its totals in step.
"""

from dataclasses import dataclass, field

from protean.utils.globals import current_domain

from ordering.catalogue.product import Product
from ordering.policy import get_policy
from ordering.pricing import PricedLine, Totals, compute_totals, to_decimal


@dataclass(frozen=True)
class ResolvedLine:
    product: Product
    quantity: int

    def priced(self) -> PricedLine:
        return PricedLine(
            price=to_decimal(self.product.price),
            discount=to_decimal(self.product.discount),
            quantity=self.quantity,
        )

    def to_dict(self) -> dict:
        return {"product": self.product.to_display(), "quantity": self.quantity}


@dataclass(frozen=True)
class CartView:
    lines: list[ResolvedLine] = field(default_factory=list)
    totals: Totals = field(default_factory=Totals)
    # Product ids of cart lines that no longer resolve
    dropped: list[str] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.lines

    def to_dict(self) -> dict:
        return {"items": [line.to_dict() for line in self.lines], **self.totals.as_dict()}


def build_cart_view(cart) -> CartView:
    """Resolve a cart (or None) against the catalogue and price it.

    Lines whose product no longer exists in the catalogue are left out of both
    the items and the totals, and listed in `dropped`.
    """
    if cart is None or not cart.lines:
        return CartView()

    products = current_domain.repository_for(Product).find_many(line.product_id for line in cart.lines)
    resolved = [
        ResolvedLine(product=products[str(line.product_id)], quantity=line.quantity)
        for line in cart.lines
        if str(line.product_id) in products
    ]
    dropped = [str(line.product_id) for line in cart.lines if str(line.product_id) not in products]
    totals = compute_totals((line.priced() for line in resolved), get_policy().tax_rate)
    return CartView(lines=resolved, totals=totals, dropped=dropped)
