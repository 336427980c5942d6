"""Shared BDD fixtures and step definitions for the storefront."""

import pytest
from protean.exceptions import ValidationError
from pytest_bdd import given, parsers, then
from storefront.order.events import (
    OrderCancelled,
    OrderCollected,
    OrderPlaced,
    OrderPreparing,
    OrderReady,
)
from storefront.order.order import Order, OrderStatus
from storefront.shared.errors import InvalidTransition
from storefront.shop.events import ShopDetailsUpdated
from storefront.shop.shop import Shop

# Map event name strings to classes for dynamic lookup in Then steps
_ORDER_EVENT_CLASSES = {
    "OrderPlaced": OrderPlaced,
    "OrderPreparing": OrderPreparing,
    "OrderReady": OrderReady,
    "OrderCollected": OrderCollected,
    "OrderCancelled": OrderCancelled,
}


def _titles(text):
    """Split a comma separated list of category titles, keeping blanks."""
    return [title.strip() for title in text.split(",")] if text else []


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------
@pytest.fixture()
def error():
    """Container for captured validation errors."""
    return {"exc": None}


@pytest.fixture()
def stall():
    """A stall selling chicken rice at 4.50, used to place orders."""
    shop = Shop.create(owner_id="vendor-001", name="Chicken Rice Stall")
    shop.update_details("Chicken Rice Stall", "Hainanese", "loc-001", ["Mains"])
    shop.add_product(name="Chicken Rice", price=4.5, category_index=0)
    return shop


# ---------------------------------------------------------------------------
# Given steps: Order
# ---------------------------------------------------------------------------
def _place(stall, customer_id, quantity=2):
    order = Order.place(
        customer_id=customer_id,
        shop_id=stall.id,
        shop_name=stall.name,
        collection_no=1,
        product=stall.sold_products()[0],
        quantity=quantity,
    )
    order._events.clear()
    return order


@given("an order was placed", target_fixture="order")
def placed_order(stall):
    return _place(stall, "cust-001")


@given(parsers.cfparse('an order was placed by "{customer_id}"'), target_fixture="order")
def order_placed_by(stall, customer_id):
    return _place(stall, customer_id)


@given(parsers.cfparse('the order has moved to "{status}"'), target_fixture="order")
def order_moved_to(order, status):
    if status == OrderStatus.CANCELLED.value:
        order.cancel(customer_id=order.customer_id)
    else:
        order.advance_to(status)
    order._events.clear()
    return order


# ---------------------------------------------------------------------------
# Given steps: Shop
# ---------------------------------------------------------------------------
@given(parsers.cfparse('a shop with categories "{titles}"'), target_fixture="shop")
def shop_with_categories(titles):
    shop = Shop.create(owner_id="vendor-001", name="Chicken Rice Stall")
    shop.update_details("Chicken Rice Stall", "Hainanese", "loc-001", _titles(titles))
    shop._events.clear()
    return shop


@given(parsers.cfparse('the shop sells "{name}" under "{title}"'))
def shop_sells(shop, name, title):
    shop.add_product(name=name, price=3.0, category_index=shop.category_titles().index(title))
    shop._events.clear()


# ---------------------------------------------------------------------------
# Then steps: Order
# ---------------------------------------------------------------------------
@then(parsers.cfparse('the order status is "{status}"'))
def order_status_is(order, status):
    assert order.status == status


@then(parsers.cfparse('every order line is "{status}"'))
def order_lines_are(order, status):
    assert {line.status for line in order.order_products} == {status}


@then("the order action fails with an invalid transition")
def order_action_invalid(error):
    assert isinstance(error["exc"], InvalidTransition), f"Expected InvalidTransition, got {error['exc']!r}"


@then("the order action fails with a validation error")
def order_action_fails(error):
    assert error["exc"] is not None, "Expected a validation error but none was raised"
    assert isinstance(error["exc"], ValidationError)


@then(parsers.cfparse("an {event_type} order event is raised"))
def order_event_raised(order, event_type):
    event_cls = _ORDER_EVENT_CLASSES[event_type]
    assert any(
        isinstance(e, event_cls) for e in order._events
    ), f"No {event_type} event found. Events: {[type(e).__name__ for e in order._events]}"


@then("no order event is raised")
def no_order_event(order):
    assert order._events == []


# ---------------------------------------------------------------------------
# Then steps: Shop
# ---------------------------------------------------------------------------
@then(parsers.cfparse('the shop categories are "{titles}"'))
def shop_categories_are(shop, titles):
    assert shop.category_titles() == _titles(titles)


@then("a ShopDetailsUpdated shop event is raised")
def shop_details_event(shop):
    assert any(isinstance(e, ShopDetailsUpdated) for e in shop._events)


@then("no shop event is raised")
def no_shop_event(shop):
    assert shop._events == []
