"""Tests for Order creation and its status state machine."""

import pytest
from protean.exceptions import ValidationError

from storefront.cart.cart import Cart
from storefront.catalog.product import Category, Product
from storefront.order.customer import Customer
from storefront.order.order import Order, OrderStatus
from storefront.shared.exceptions import EmptyCartError, InvalidTransitionError

CUSTOMER = {
    "name": "Ana Torres",
    "email": "ana@example.com",
    "phone": "",
    "address": "Av. Amazonas 123",
    "city": "Quito",
}


def _cart_with_items():
    product = Product.create(
        product_id="lamp-001",
        name="Romantic Rose Lamp",
        description="",
        price=49.99,
        stock=15,
        category=Category.ROSE,
    )
    cart = Cart.create()
    cart.add_item(product, 5)
    return cart


def _make_order(order_id="ORD-0001"):
    return Order.create(order_id, CUSTOMER, _cart_with_items())


def _order_in(status):
    order = _make_order()
    if status == OrderStatus.CANCELLED:
        order.cancel()
        return order
    while order.status != status.value:
        order.advance()
    return order


class TestOrderCreation:
    def test_create_order_from_cart(self):
        order = _make_order()

        assert str(order.id) == "ORD-0001"
        assert order.status == OrderStatus.PENDING.value
        assert order.total == 249.95
        assert len(order.lines) == 1
        assert order.lines[0].quantity == 5
        assert order.customer.name == "Ana Torres"
        assert order.created_at == order.updated_at
        assert order.is_pending()

    def test_create_accepts_customer_value_object(self):
        customer = Customer.build(**CUSTOMER)
        order = Order.create("ORD-0002", customer, _cart_with_items())
        assert order.customer == customer

    def test_total_includes_discount(self):
        cart = _cart_with_items()
        cart.set_discount(49.95)
        order = Order.create("ORD-0001", CUSTOMER, cart)
        assert order.total == 200.0

    def test_order_does_not_change_with_cart(self):
        cart = _cart_with_items()
        order = Order.create("ORD-0001", CUSTOMER, cart)

        cart.clear()
        assert len(order.lines) == 1
        assert order.total == 249.95

    def test_empty_id_rejected(self):
        with pytest.raises(ValidationError):
            Order.create("", CUSTOMER, _cart_with_items())

    def test_missing_customer_rejected(self):
        with pytest.raises(ValidationError):
            Order.create("ORD-0001", None, _cart_with_items())

    def test_invalid_customer_rejected(self):
        with pytest.raises(ValidationError) as exc:
            Order.create("ORD-0001", {**CUSTOMER, "email": "not-an-email"}, _cart_with_items())
        assert "email" in exc.value.messages

    def test_empty_cart_rejected(self):
        with pytest.raises(EmptyCartError):
            Order.create("ORD-0001", CUSTOMER, Cart.create())

    def test_unknown_customer_keys_are_ignored(self):
        order = Order.create("ORD-0001", {**CUSTOMER, "zip": "170150"}, _cart_with_items())
        assert order.customer.city == "Quito"

    def test_customer_that_is_not_a_mapping_rejected(self):
        with pytest.raises(ValidationError) as exc:
            Order.create("ORD-0001", "Ana Torres", _cart_with_items())
        assert "customer" in exc.value.messages


class TestAdvance:
    def test_walks_the_forward_chain(self):
        order = _make_order()
        seen = []
        for _ in range(4):
            order.advance()
            seen.append(order.status)
        assert seen == ["paid", "prepared", "shipped", "delivered"]

    def test_advance_refreshes_updated_at(self):
        order = _make_order()
        before = order.updated_at
        order.advance()
        assert order.updated_at >= before

    def test_cannot_advance_delivered_order(self):
        order = _order_in(OrderStatus.DELIVERED)
        with pytest.raises(InvalidTransitionError):
            order.advance()
        assert order.status == "delivered"

    def test_cannot_advance_cancelled_order(self):
        order = _order_in(OrderStatus.CANCELLED)
        with pytest.raises(InvalidTransitionError):
            order.advance()
        assert order.status == "cancelled"


class TestCancel:
    @pytest.mark.parametrize("status", [OrderStatus.PENDING, OrderStatus.PAID, OrderStatus.PREPARED])
    def test_cancel_before_shipping(self, status):
        order = _order_in(status)
        assert order.is_cancellable()

        order.cancel()
        assert order.status == "cancelled"
        assert not order.is_cancellable()

    @pytest.mark.parametrize("status", [OrderStatus.SHIPPED, OrderStatus.DELIVERED])
    def test_cannot_cancel_after_shipping(self, status):
        order = _order_in(status)
        assert not order.is_cancellable()

        with pytest.raises(InvalidTransitionError):
            order.cancel()
        assert order.status == status.value

    def test_cannot_cancel_twice(self):
        order = _order_in(OrderStatus.CANCELLED)
        with pytest.raises(InvalidTransitionError) as exc:
            order.cancel()
        assert "already cancelled" in str(exc.value)


class TestNotesAndPresentation:
    def test_set_notes(self):
        order = _make_order()
        order.set_notes("Leave with the doorman")
        assert order.notes == "Leave with the doorman"
        assert order.to_snapshot()["notes"] == "Leave with the doorman"

    def test_summary(self):
        assert _make_order().summary() == "Order #ORD-0001 | Ana Torres | $249.95 | Status: pending"

    def test_snapshot(self):
        snapshot = _make_order().to_snapshot()
        assert snapshot["id"] == "ORD-0001"
        assert snapshot["status"] == "pending"
        assert snapshot["total"] == 249.95
        assert snapshot["customer"]["email"] == "ana@example.com"
        assert snapshot["items"][0]["product_id"] == "lamp-001"
