"""Shared BDD fixtures and step definitions."""

import pytest
from friendhome.cart.items import AddToCart, find_cart
from friendhome.checkout.placement import PlaceOrder
from friendhome.menu.menu_item import MenuItem
from friendhome.order.order import Order
from protean import current_domain
from pytest_bdd import given, parsers, then


@pytest.fixture()
def dishes():
    """Menu item ids by title."""
    return {}


@pytest.fixture()
def error():
    """Container for captured domain errors."""
    return {"exc": None}


# ---------------------------------------------------------------------------
# Given steps
# ---------------------------------------------------------------------------
@given(parsers.cfparse('the menu has "{title}" at {price:d} rupees'))
def _(dishes, title, price):
    item = MenuItem.add(title=title, category="Mains", price=float(price))
    current_domain.repository_for(MenuItem).add(item)
    dishes[title] = str(item.id)


@given("a signed-in customer", target_fixture="shopper")
def _(customer_id):
    return customer_id


@given(parsers.cfparse('the cart holds {quantity:d} "{title}"'))
def _(shopper, dishes, quantity, title):
    current_domain.process(
        AddToCart(customer_id=shopper, menu_item_id=dishes[title], quantity=quantity),
        asynchronous=False,
    )


@given("the customer has placed an order", target_fixture="placed_order_id")
def _(shopper):
    return current_domain.process(
        PlaceOrder(
            customer_id=shopper,
            label="Home",
            address_line="12, 3rd Cross Street, Anna Nagar",
            latitude=13.15,
            longitude=80.25,
        ),
        asynchronous=False,
    )


# ---------------------------------------------------------------------------
# Then steps
# ---------------------------------------------------------------------------
@then("no order exists")
def _():
    assert current_domain.repository_for(Order)._dao.query.all().items == []


@then(parsers.cfparse("the cart still holds {count:d} items"))
def _(shopper, count):
    assert find_cart(shopper).item_count == count
