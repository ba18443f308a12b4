"""BDD tests for placing orders and moving them through the kitchen."""

import pytest
from canteen.ordering.order.order import Order, OrderStatus
from canteen.ordering.order.placement import PlaceOrder
from canteen.ordering.order.status import CancelOrder, UpdateOrderStatus
from protean import current_domain
from pytest_bdd import given, parsers, scenarios, then, when

scenarios("features/order_lifecycle.feature")


@pytest.fixture()
def placed():
    """Holds the id of the order placed in the scenario."""
    return {"order_id": None}


def _orders():
    return current_domain.repository_for(Order)._dao.query.all().items


def _place(student, placed):
    placed["order_id"] = current_domain.process(PlaceOrder(user_id=str(student.id)), asynchronous=False)


# ---------------------------------------------------------------------------
# Given steps
# ---------------------------------------------------------------------------
@given(parsers.cfparse('the student has placed an order for {quantity:d} "{name}"'))
def _(add_to_cart, student, menu, placed, name, quantity):
    add_to_cart(menu[name], quantity)
    _place(student, placed)


# ---------------------------------------------------------------------------
# When steps
# ---------------------------------------------------------------------------
@when("the student places the order")
def _(attempt, student, placed):
    attempt(lambda: _place(student, placed))


@given(parsers.cfparse('the kitchen marks the order "{status}"'))
@when(parsers.cfparse('the kitchen marks the order "{status}"'))
def _(placed, status):
    current_domain.process(UpdateOrderStatus(order_id=placed["order_id"], status=status), asynchronous=False)


@when("the student cancels the order")
def _(attempt, student, placed):
    attempt(
        lambda: current_domain.process(
            CancelOrder(user_id=str(student.id), order_id=placed["order_id"]),
            asynchronous=False,
        )
    )


# ---------------------------------------------------------------------------
# Then steps
# ---------------------------------------------------------------------------
@then(parsers.cfparse("an order totalling {total:g} is pending"))
def _(placed, total):
    order = current_domain.repository_for(Order).get(placed["order_id"])
    assert order.total_amount == float(total)
    assert order.status == OrderStatus.PENDING.value


@then("no order exists")
def _():
    assert _orders() == []


@then(parsers.cfparse('placement is rejected because "{name}" is no longer available'))
def _(error, name):
    assert error["exc"] is not None
    assert f'Item "{name}" is no longer available' in error["exc"].messages["items"]


@then(parsers.cfparse('the order status is "{status}"'))
def _(placed, status):
    assert current_domain.repository_for(Order).get(placed["order_id"]).status == status


@then("the order has an actual ready time")
def _(placed):
    assert current_domain.repository_for(Order).get(placed["order_id"]).actual_ready_time is not None
