"""Application tests for the reconciliation sweep over already-ordered carts."""

import json
from datetime import UTC, datetime, timedelta

from ordering.cart.cart import ShoppingCart
from ordering.cart.lines import AddCartLine
from ordering.catalogue.management import AddProduct
from ordering.checkout.reconciliation import ReconcileCarts, already_ordered
from ordering.order.order import Order
from ordering.pricing import Totals
from protean import current_domain


def _add_product():
    return current_domain.process(AddProduct(title="Desk Lamp", price=40.0), asynchronous=False)


def _fill_cart(customer_id, product_id, quantity=2):
    current_domain.process(
        AddCartLine(customer_id=customer_id, product_id=product_id, quantity=quantity),
        asynchronous=False,
    )
    return current_domain.repository_for(ShoppingCart).find_for(customer_id)


def _order_from(cart, customer_details, created_at=None):
    """Persist an order for the cart's lines without emptying the cart."""
    order = Order.place(
        customer_id=cart.customer_id,
        lines_data=[
            {"product_id": str(line.product_id), "title": "Desk Lamp", "price": 40.0, "quantity": line.quantity}
            for line in cart.lines
        ],
        customer=customer_details,
        totals=Totals(),
    )
    if created_at:
        order.created_at = created_at
    current_domain.repository_for(Order).add(order)
    return order


def _reconcile(customer_id=None):
    return current_domain.process(ReconcileCarts(customer_id=customer_id), asynchronous=False)


class TestAlreadyOrdered:
    def test_matching_lines_after_last_change(self, customer_details):
        cart = _fill_cart("cust-001", _add_product())
        order = _order_from(cart, customer_details, created_at=datetime.now(UTC) + timedelta(seconds=1))
        assert already_ordered(cart, order)

    def test_no_order(self):
        cart = _fill_cart("cust-001", _add_product())
        assert not already_ordered(cart, None)

    def test_different_quantities(self, customer_details):
        product_id = _add_product()
        cart = _fill_cart("cust-001", product_id, 2)
        order = _order_from(cart, customer_details, created_at=datetime.now(UTC) + timedelta(seconds=1))
        cart.set_line_quantity(product_id, 3)
        assert not already_ordered(cart, order)

    def test_cart_changed_after_order(self, customer_details):
        cart = _fill_cart("cust-001", _add_product())
        order = _order_from(cart, customer_details, created_at=datetime.now(UTC) - timedelta(minutes=5))
        assert not already_ordered(cart, order)


class TestReconcileCartsCommand:
    def test_clears_already_ordered_cart(self, customer_details):
        cart = _fill_cart("cust-001", _add_product())
        _order_from(cart, customer_details, created_at=datetime.now(UTC) + timedelta(seconds=1))

        assert _reconcile() == 1
        assert current_domain.repository_for(ShoppingCart).find_for("cust-001").is_empty

    def test_leaves_unordered_carts(self, customer_details):
        _fill_cart("cust-001", _add_product())
        assert _reconcile() == 0
        assert not current_domain.repository_for(ShoppingCart).find_for("cust-001").is_empty

    def test_limited_to_one_customer(self, customer_details):
        product_id = _add_product()
        later = datetime.now(UTC) + timedelta(seconds=1)
        _order_from(_fill_cart("cust-001", product_id), customer_details, created_at=later)
        _order_from(_fill_cart("cust-002", product_id), customer_details, created_at=later)

        assert _reconcile("cust-001") == 1
        assert current_domain.repository_for(ShoppingCart).find_for("cust-001").is_empty
        assert not current_domain.repository_for(ShoppingCart).find_for("cust-002").is_empty

    def test_customer_without_cart_reconciles_nothing(self):
        assert _reconcile("cust-404") == 0


class TestSweepBeyondOnePage:
    def _stock_carts(self, product_id, count):
        repo = current_domain.repository_for(ShoppingCart)
        for n in range(count):
            cart = ShoppingCart.create(customer_id=f"cust-{n:03d}")
            cart.add_line(product_id, 1)
            repo.add(cart)

    def test_every_filled_cart_is_listed(self):
        product_id = _add_product()
        self._stock_carts(product_id, 120)
        current_domain.repository_for(ShoppingCart).get_or_create("cust-empty")

        assert len(current_domain.repository_for(ShoppingCart).with_lines()) == 120

    def test_sweep_reaches_every_cart(self, customer_details):
        product_id = _add_product()
        self._stock_carts(product_id, 120)
        later = datetime.now(UTC) + timedelta(seconds=1)
        repo = current_domain.repository_for(ShoppingCart)
        for n in range(120):
            _order_from(repo.find_for(f"cust-{n:03d}"), customer_details, created_at=later)

        assert _reconcile() == 120
        assert repo.with_lines() == []
