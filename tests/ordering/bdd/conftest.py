"""Shared BDD fixtures and step definitions for the Ordering domain."""

import json

import pytest
from ordering.cart.cart import ShoppingCart
from ordering.cart.lines import AddCartLine
from ordering.catalogue.management import AddProduct
from ordering.checkout.placement import PlaceOrder
from ordering.order.order import Order
from ordering.order.status import ChangeOrderStatus
from protean import current_domain
from protean.exceptions import ValidationError
from pytest_bdd import given, parsers, then, when


# ---------------------------------------------------------------------------
# Scalar fixtures
# ---------------------------------------------------------------------------
@pytest.fixture()
def customer_id():
    return "cust-001"


@pytest.fixture()
def catalogue():
    """Product ids by title, filled by the catalogue steps."""
    return {}


@pytest.fixture()
def error():
    """Container for captured validation errors."""
    return {"exc": None}


@pytest.fixture()
def placed():
    """Id of the order placed by the checkout step."""
    return {"order_id": None}


# ---------------------------------------------------------------------------
# Given steps
# ---------------------------------------------------------------------------
@given(parsers.cfparse('the catalogue has a product "{title}" priced {price:f} with {discount:d} percent discount'))
def catalogue_product(catalogue, title, price, discount):
    catalogue[title] = current_domain.process(
        AddProduct(title=title, price=price, discount=float(discount)),
        asynchronous=False,
    )


@given(parsers.cfparse('the customer has {quantity:d} of "{title}" in the cart'))
def cart_has_product(catalogue, customer_id, quantity, title):
    current_domain.process(
        AddCartLine(customer_id=customer_id, product_id=catalogue[title], quantity=quantity),
        asynchronous=False,
    )


# ---------------------------------------------------------------------------
# Shared When steps
# ---------------------------------------------------------------------------
@given("the customer checks out")
@when("the customer checks out")
def customer_checks_out(customer_id, customer_details, placed, error):
    try:
        placed["order_id"] = current_domain.process(
            PlaceOrder(customer_id=customer_id, customer=json.dumps(customer_details)),
            asynchronous=False,
        )
    except ValidationError as exc:
        error["exc"] = exc


@given(parsers.cfparse('the order status is set to "{status}"'))
@when(parsers.cfparse('the order status is set to "{status}"'))
def order_status_set(placed, status):
    current_domain.process(ChangeOrderStatus(order_id=placed["order_id"], status=status), asynchronous=False)


# ---------------------------------------------------------------------------
# Shared Then steps
# ---------------------------------------------------------------------------
@then(parsers.cfparse('the order status is "{status}"'))
def order_status_is(placed, status):
    assert current_domain.repository_for(Order).get(placed["order_id"]).status == status


@then(parsers.cfparse("the order total is {amount:f}"))
def order_total_is(placed, amount):
    assert current_domain.repository_for(Order).get(placed["order_id"]).total == amount


@then("the customer's cart is empty")
def customer_cart_is_empty(customer_id):
    assert current_domain.repository_for(ShoppingCart).find_for(customer_id).is_empty
