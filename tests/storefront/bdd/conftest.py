"""Shared BDD fixtures and step definitions for the Storefront."""

import pytest
from protean.exceptions import ValidationError
from pytest_bdd import given, parsers, then, when

from storefront.shared.exceptions import EmptyCartError, InsufficientStockError, InvalidTransitionError
from storefront.store import Store

_ERROR_CLASSES = {
    "a validation error": ValidationError,
    "an empty cart error": EmptyCartError,
    "an insufficient stock error": InsufficientStockError,
    "an invalid transition error": InvalidTransitionError,
}

CUSTOMER = {
    "name": "Ana Torres",
    "email": "ana@example.com",
    "phone": "+593 99 123 4567",
    "address": "Av. Amazonas 123",
    "city": "Quito",
}


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------
@pytest.fixture()
def error():
    """Container for captured domain errors."""
    return {"exc": None}


def _place_order(store, error):
    try:
        return store.place_order(CUSTOMER)["id"]
    except ValidationError as exc:
        error["exc"] = exc
        return None


# ---------------------------------------------------------------------------
# Given steps
# ---------------------------------------------------------------------------
@given("the demo catalog is loaded", target_fixture="store")
def demo_catalog():
    store = Store()
    store.seed_catalog()
    return store


@given(parsers.cfparse('the cart holds {quantity:d} of "{product_id}"'))
def cart_holds(store, quantity, product_id):
    store.add_to_cart(product_id, quantity)


@given(parsers.cfparse('an order for {quantity:d} of "{product_id}" was placed'), target_fixture="order")
def order_placed(store, error, quantity, product_id):
    store.add_to_cart(product_id, quantity)
    return _place_order(store, error)


# ---------------------------------------------------------------------------
# When steps
# ---------------------------------------------------------------------------
@when("the shopper places an order", target_fixture="order")
def shopper_places_order(store, error):
    return _place_order(store, error)


# ---------------------------------------------------------------------------
# Then steps
# ---------------------------------------------------------------------------
@then(parsers.cfparse("the action fails with {kind}"))
def action_fails(error, kind):
    assert error["exc"] is not None, "Expected an error but none was raised"
    assert isinstance(error["exc"], _ERROR_CLASSES[kind])


@then(parsers.cfparse('the order status is "{status}"'))
def order_status_is(store, order, status):
    assert store.get_order(order)["status"] == status


@then(parsers.cfparse('the stock of "{product_id}" is {stock:d}'))
def stock_is(store, product_id, stock):
    assert store.get_product(product_id)["stock"] == stock


@then("the cart is empty")
def cart_is_empty(store):
    assert store.get_cart()["items"] == []


@then("no orders exist")
def no_orders(store):
    assert store.list_orders() == []
