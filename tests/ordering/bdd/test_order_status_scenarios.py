"""BDD tests for the order status workflow."""

from ordering.order.order import Order
from ordering.order.status import ChangeOrderStatus
from ordering.policy import OrderingPolicy, set_policy
from protean import current_domain
from protean.exceptions import ValidationError
from pytest_bdd import given, parsers, scenarios, then, when

scenarios("features/order_status.feature")


# ---------------------------------------------------------------------------
# Given steps
# ---------------------------------------------------------------------------
@given("status transitions are enforced")
def enforce_transitions():
    set_policy(OrderingPolicy(enforce_status_transitions=True))


# ---------------------------------------------------------------------------
# When steps
# ---------------------------------------------------------------------------
@when(parsers.cfparse('the order status is changed to "{status}"'))
def attempt_status_change(placed, status, error):
    try:
        current_domain.process(ChangeOrderStatus(order_id=placed["order_id"], status=status), asynchronous=False)
    except ValidationError as exc:
        error["exc"] = exc


# ---------------------------------------------------------------------------
# Then steps
# ---------------------------------------------------------------------------
@then("the status change is rejected")
def status_change_rejected(error):
    assert isinstance(error["exc"], ValidationError)


@then("the order has a delivery timestamp")
def order_has_delivery_timestamp(placed):
    assert current_domain.repository_for(Order).get(placed["order_id"]).delivered_at is not None
