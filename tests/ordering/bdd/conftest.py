"""Shared BDD fixtures and step definitions for ordering."""

import pytest
from canteen.catalogue.menu_item import MenuItem
from canteen.exceptions import CanteenError
from canteen.ordering.cart.items import AddToCart, find_cart
from protean import current_domain
from protean.exceptions import ValidationError
from pytest_bdd import given, parsers, then


@pytest.fixture()
def student(make_user):
    return make_user(email="asha@campus.edu")


@pytest.fixture()
def menu():
    """Menu items created by Given steps, keyed by name."""
    return {}


@pytest.fixture()
def error():
    """Container for the error raised by the last When step."""
    return {"exc": None}


def error_text(error):
    exc = error["exc"]
    assert exc is not None, "expected the request to be rejected"
    return [message for messages in exc.messages.values() for message in messages]


# ---------------------------------------------------------------------------
# Given steps
# ---------------------------------------------------------------------------
@given(parsers.cfparse('a menu item "{name}" priced at {price:g}'))
def _(make_menu_item, menu, name, price):
    menu[name] = make_menu_item(name=name, price=float(price))


@given(parsers.cfparse('"{name}" is switched off'))
def _(menu, name):
    repo = current_domain.repository_for(MenuItem)
    item = repo.get(str(menu[name].id))
    item.toggle_availability()
    repo.add(item)


@given(parsers.cfparse('the student has added {quantity:d} of "{name}" to the cart'))
def _(add_to_cart, menu, name, quantity):
    add_to_cart(menu[name], quantity)


# ---------------------------------------------------------------------------
# Then steps
# ---------------------------------------------------------------------------
@then(parsers.cfparse('the request is rejected with "{message}"'))
def _(error, message):
    assert message in error_text(error)


@then(parsers.cfparse("the cart total is {total:g}"))
def _(student, total):
    assert find_cart(student.id).total_amount == float(total)


@then("the cart is empty")
def _(student):
    cart = find_cart(student.id)
    assert cart is None or cart.is_empty


# ---------------------------------------------------------------------------
# Actions shared by When steps
# ---------------------------------------------------------------------------
@pytest.fixture()
def attempt(error):
    """Run a domain action, recording a rejection instead of raising it."""

    def _attempt(action):
        try:
            return action()
        except (ValidationError, CanteenError) as exc:
            error["exc"] = exc
            return None

    return _attempt


@pytest.fixture()
def add_to_cart(student):
    def _add(menu_item, quantity):
        current_domain.process(
            AddToCart(user_id=str(student.id), menu_item_id=str(menu_item.id), quantity=quantity),
            asynchronous=False,
        )

    return _add
