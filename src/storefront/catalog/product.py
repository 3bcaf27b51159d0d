"""Product aggregate — one sellable item and its stock count.

A Product is owned by the Ledger. Its price and descriptive fields change only
through validated setters, and its stock only through ``debit``/``credit``, so
the count can never be observed below zero.
"""

from datetime import UTC, datetime
from enum import Enum

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import DateTime, Float, Integer, String, Text

from storefront.domain import storefront
from storefront.shared.exceptions import InsufficientStockError


class Category(Enum):
    ROSE = "rose"
    SUNFLOWER = "sunflower"
    LOTUS = "lotus"
    DAISY = "daisy"


def _category_value(category):
    if isinstance(category, Category):
        return category.value
    try:
        return Category(category).value
    except ValueError:
        raise ValidationError({"category": [f"Invalid category: {category!r}"]}) from None


@storefront.aggregate
class Product:
    name = String(required=True, max_length=255)
    description = Text()
    price = Float(required=True)
    stock = Integer(min_value=0, default=0)
    category = String(required=True, choices=Category)
    image_url = String(max_length=2048)
    created_at = DateTime()

    @invariant.post
    def price_must_be_positive(self):
        if self.price is not None and self.price <= 0:
            raise ValidationError({"price": ["Price must be greater than zero"]})

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @classmethod
    def create(cls, product_id, name, description, price, stock, category, image_url=None):
        """Register a new product with validated price, stock and category."""
        if not product_id:
            raise ValidationError({"id": ["Product id is required"]})
        if price is not None and price <= 0:
            raise ValidationError({"price": ["Price must be greater than zero"]})
        if stock is not None and stock < 0:
            raise ValidationError({"stock": ["Stock cannot be negative"]})

        return cls(
            id=product_id,
            name=name,
            description=description,
            price=price,
            stock=stock,
            category=_category_value(category),
            image_url=image_url,
            created_at=datetime.now(UTC),
        )

    # -------------------------------------------------------------------
    # Validated setters
    # -------------------------------------------------------------------
    def rename(self, name):
        if not name:
            raise ValidationError({"name": ["Name cannot be empty"]})
        self.name = name

    def set_description(self, description):
        self.description = description

    def set_price(self, price):
        if price is None or price <= 0:
            raise ValidationError({"price": ["Price must be greater than zero"]})
        self.price = price

    def set_category(self, category):
        self.category = _category_value(category)

    def set_image_url(self, image_url):
        self.image_url = image_url

    # -------------------------------------------------------------------
    # Stock
    # -------------------------------------------------------------------
    def is_available(self, quantity):
        """True when ``quantity`` units can be sold right now."""
        return self.stock >= quantity

    def is_in_stock(self):
        return self.stock > 0

    def debit(self, quantity):
        """Take ``quantity`` units out of stock (a sale)."""
        if quantity is None or quantity <= 0:
            raise ValidationError({"quantity": ["Quantity must be positive"]})
        if not self.is_available(quantity):
            raise InsufficientStockError(
                {"quantity": [f"Insufficient stock for '{self.name}': {self.stock} available, {quantity} requested"]}
            )

        self.stock = self.stock - quantity

    def credit(self, quantity):
        """Put ``quantity`` units back into stock (restock or return)."""
        if quantity is None or quantity <= 0:
            raise ValidationError({"quantity": ["Quantity must be positive"]})

        self.stock = self.stock + quantity

    # -------------------------------------------------------------------
    # Presentation
    # -------------------------------------------------------------------
    def formatted_price(self):
        return f"${self.price:.2f}"

    def to_snapshot(self):
        return {
            "id": str(self.id),
            "name": self.name,
            "description": self.description or "",
            "price": self.price,
            "stock": self.stock,
            "category": self.category,
            "image_url": self.image_url or "",
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }
