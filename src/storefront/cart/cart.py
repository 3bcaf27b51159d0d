"""Shopping Cart aggregate — the staging area an Order is built from.

There is exactly one active cart per store. Each line keeps a snapshot of the
product's name, price and image taken when it was first added, so later
catalog edits never change what is already in the cart.
"""

from datetime import UTC, datetime

from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.fields import DateTime, Float, HasMany, Identifier, Integer, String

from storefront.domain import storefront
from storefront.shared.exceptions import InsufficientStockError


@storefront.entity(part_of="Cart")
class CartLine:
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


@storefront.aggregate
class Cart:
    lines = HasMany(CartLine)
    discount = Float(min_value=0.0, default=0.0)
    created_at = DateTime()
    updated_at = DateTime()

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @classmethod
    def create(cls):
        now = datetime.now(UTC)
        return cls(discount=0.0, created_at=now, updated_at=now)

    def _line_for(self, product_id):
        return next((line for line in self.lines if str(line.product_id) == str(product_id)), None)

    # -------------------------------------------------------------------
    # Line management
    # -------------------------------------------------------------------
    def add_item(self, product, quantity):
        """Add ``quantity`` units of ``product``, merging with an existing line.

        The combined quantity, not just the increment, must fit in the
        product's current stock.
        """
        if quantity is None or quantity <= 0:
            raise ValidationError({"quantity": ["Quantity must be positive"]})

        existing = self._line_for(product.id)
        new_quantity = quantity + (existing.quantity if existing else 0)
        if not product.is_available(new_quantity):
            raise InsufficientStockError(
                {
                    "quantity": [
                        f"Insufficient stock for '{product.name}': "
                        f"{product.stock} available, {new_quantity} requested"
                    ]
                }
            )

        if existing:
            existing.quantity = new_quantity
        else:
            self.add_lines(
                CartLine(
                    product_id=str(product.id),
                    product_name=product.name,
                    price=product.price,
                    quantity=quantity,
                    image_url=product.image_url,
                )
            )

        self.updated_at = datetime.now(UTC)

    def remove_item(self, product_id):
        """Drop the line for ``product_id``."""
        line = self._line_for(product_id)
        if line is None:
            raise ObjectNotFoundError({"product_id": [f"Product '{product_id}' is not in the cart"]})

        self.remove_lines(line)

        # A discount may never exceed what is left in the cart
        if self.discount and self.discount > self.subtotal():
            self.discount = self.subtotal()
        self.updated_at = datetime.now(UTC)

    def set_discount(self, amount):
        if amount is None or amount < 0:
            raise ValidationError({"discount": ["Discount cannot be negative"]})
        if amount > self.subtotal():
            raise ValidationError({"discount": ["Discount cannot exceed the cart subtotal"]})

        self.discount = amount
        self.updated_at = datetime.now(UTC)

    def clear(self):
        for line in list(self.lines):
            self.remove_lines(line)
        self.discount = 0.0
        self.updated_at = datetime.now(UTC)

    # -------------------------------------------------------------------
    # Totals
    # -------------------------------------------------------------------
    def subtotal(self):
        return round(sum(line.subtotal() for line in self.lines), 2)

    def total(self):
        # Never negative
        return round(max(0.0, self.subtotal() - (self.discount or 0.0)), 2)

    def item_count(self):
        return sum(line.quantity for line in self.lines)

    def is_empty(self):
        return not self.lines

    def to_snapshot(self):
        return {
            "items": [line.to_snapshot() for line in self.lines],
            "discount": self.discount or 0.0,
            "subtotal": self.subtotal(),
            "total": self.total(),
            "item_count": self.item_count(),
        }
