"""Order aggregate — a frozen snapshot of a checkout plus its lifecycle status.

The customer, the line items and the total are copied from the cart when the
order is created and never change afterwards, whatever happens to catalog
prices or stock later. Only ``status`` and ``notes`` move.

State Machine:
    PENDING → PAID → PREPARED → SHIPPED → DELIVERED
    CANCELLED (from PENDING, PAID, PREPARED) — absorbing
"""

from collections.abc import Mapping
from datetime import UTC, datetime
from enum import Enum

from protean.exceptions import ValidationError
from protean.fields import DateTime, Float, HasMany, Identifier, Integer, String, Text, ValueObject

from storefront.domain import storefront
from storefront.order.customer import Customer
from storefront.shared.exceptions import EmptyCartError, InvalidTransitionError


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------
class OrderStatus(Enum):
    PENDING = "pending"
    PAID = "paid"
    PREPARED = "prepared"
    SHIPPED = "shipped"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"


# Forward chain followed by advance()
_NEXT_STATUS = {
    OrderStatus.PENDING: OrderStatus.PAID,
    OrderStatus.PAID: OrderStatus.PREPARED,
    OrderStatus.PREPARED: OrderStatus.SHIPPED,
    OrderStatus.SHIPPED: OrderStatus.DELIVERED,
}

# Keys read from a customer mapping; anything else is ignored
_CUSTOMER_FIELDS = ("name", "email", "phone", "address", "city")

# States from which cancellation is allowed
_CANCELLABLE_STATES = {
    OrderStatus.PENDING,
    OrderStatus.PAID,
    OrderStatus.PREPARED,
}


# ---------------------------------------------------------------------------
# Entities
# ---------------------------------------------------------------------------
@storefront.entity(part_of="Order")
class OrderLine:
    """A cart line as it stood when the order was placed."""

    product_id = Identifier(required=True)
    product_name = String(required=True, max_length=255)
    price = Float(required=True, min_value=0.0)
    quantity = Integer(required=True, min_value=1)
    image_url = String(max_length=2048)

    def subtotal(self):
        return self.price * self.quantity

    def to_snapshot(self):
        return {
            "product_id": str(self.product_id),
            "product_name": self.product_name,
            "price": self.price,
            "quantity": self.quantity,
            "image_url": self.image_url or "",
        }


# ---------------------------------------------------------------------------
# Aggregate Root
# ---------------------------------------------------------------------------
@storefront.aggregate
class Order:
    customer = ValueObject(Customer, required=True)
    lines = HasMany(OrderLine)
    total = Float(required=True, min_value=0.0)
    status = String(
        choices=OrderStatus,
        default=OrderStatus.PENDING.value,
    )
    notes = Text()
    created_at = DateTime()
    updated_at = DateTime()

    # -------------------------------------------------------------------
    # Factory method
    # -------------------------------------------------------------------
    @classmethod
    def create(cls, order_id, customer, cart):
        """Create a pending order from the current contents of ``cart``.

        Args:
            order_id: Sequential identifier allocated by the Store.
            customer: A ``Customer`` or a mapping of its fields.
            cart: The cart to copy lines and total from. It is not modified.
        """
        if not order_id:
            raise ValidationError({"id": ["Order id is required"]})
        if customer is None:
            raise ValidationError({"customer": ["Customer is required"]})
        if not isinstance(customer, Customer):
            if not isinstance(customer, Mapping):
                raise ValidationError({"customer": ["Customer details must be a mapping of fields"]})
            customer = Customer.build(**{key: customer.get(key) for key in _CUSTOMER_FIELDS})
        if cart.is_empty():
            raise EmptyCartError({"cart": ["Cannot create an order from an empty cart"]})

        now = datetime.now(UTC)
        order = cls(
            id=order_id,
            customer=customer,
            total=cart.total(),
            status=OrderStatus.PENDING.value,
            created_at=now,
            updated_at=now,
        )
        for line in cart.lines:
            order.add_lines(
                OrderLine(
                    product_id=str(line.product_id),
                    product_name=line.product_name,
                    price=line.price,
                    quantity=line.quantity,
                    image_url=line.image_url,
                )
            )
        return order

    # -------------------------------------------------------------------
    # Lifecycle transitions
    # -------------------------------------------------------------------
    def advance(self):
        """Move to the next status in the forward chain."""
        current = OrderStatus(self.status)
        if current == OrderStatus.DELIVERED:
            raise InvalidTransitionError({"status": ["Order has already been delivered and cannot advance"]})
        if current == OrderStatus.CANCELLED:
            raise InvalidTransitionError({"status": ["Cancelled orders cannot change status"]})

        self.status = _NEXT_STATUS[current].value
        self.updated_at = datetime.now(UTC)

    def cancel(self):
        current = OrderStatus(self.status)
        if current == OrderStatus.CANCELLED:
            raise InvalidTransitionError({"status": ["Order is already cancelled"]})
        if current not in _CANCELLABLE_STATES:
            raise InvalidTransitionError(
                {"status": [f"Cannot cancel order in {current.value} state: it has already been shipped or delivered"]}
            )

        self.status = OrderStatus.CANCELLED.value
        self.updated_at = datetime.now(UTC)

    def is_cancellable(self):
        return OrderStatus(self.status) in _CANCELLABLE_STATES

    def is_pending(self):
        return OrderStatus(self.status) == OrderStatus.PENDING

    # -------------------------------------------------------------------
    # Notes
    # -------------------------------------------------------------------
    def set_notes(self, notes):
        """Attach free-form notes, e.g. delivery instructions."""
        self.notes = notes
        self.updated_at = datetime.now(UTC)

    # -------------------------------------------------------------------
    # Presentation
    # -------------------------------------------------------------------
    def summary(self):
        return f"Order #{self.id} | {self.customer.name} | ${self.total:.2f} | Status: {self.status}"

    def to_snapshot(self):
        return {
            "id": str(self.id),
            "customer": self.customer.to_snapshot(),
            "items": [line.to_snapshot() for line in self.lines],
            "total": self.total,
            "status": self.status,
            "notes": self.notes or "",
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
        }
