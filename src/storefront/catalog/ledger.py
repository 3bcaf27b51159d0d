"""Ledger — the authoritative per-product price and stock record.

The Ledger is a plain in-memory collection of Product aggregates keyed by id.
It performs no locking of its own: the Store serializes every access to it.
"""

from collections import Counter

from protean.exceptions import ObjectNotFoundError, ValidationError

from storefront.catalog.product import Category, Product
from storefront.shared.exceptions import InsufficientStockError


class Ledger:
    def __init__(self, products=None):
        self._products: dict[str, Product] = {}
        for product in products or []:
            self.add(product)

    def __len__(self):
        return len(self._products)

    def __contains__(self, product_id):
        return product_id in self._products

    def add(self, product: Product) -> None:
        product_id = str(product.id)
        if product_id in self._products:
            raise ValidationError({"id": [f"Product '{product_id}' already exists"]})
        self._products[product_id] = product

    def get(self, product_id) -> Product:
        try:
            return self._products[product_id]
        except KeyError:
            raise ObjectNotFoundError({"product_id": [f"Product '{product_id}' not found"]}) from None

    def list_all(self) -> list[Product]:
        return list(self._products.values())

    def list_by_category(self, category) -> list[Product]:
        value = category.value if isinstance(category, Category) else category
        return [p for p in self._products.values() if p.category == value]

    # -------------------------------------------------------------------
    # Stock movements
    # -------------------------------------------------------------------
    def debit(self, product_id, quantity) -> None:
        self.get(product_id).debit(quantity)

    def credit(self, product_id, quantity) -> None:
        self.get(product_id).credit(quantity)

    def debit_all(self, quantities) -> None:
        """Debit several products as one unit: either every debit applies or none does.

        ``quantities`` is an iterable of ``(product_id, quantity)`` pairs. Pairs
        for the same product are summed before availability is checked.
        """
        wanted = Counter()
        for product_id, quantity in quantities:
            if quantity is None or quantity <= 0:
                raise ValidationError({"quantity": ["Quantity must be positive"]})
            wanted[product_id] += quantity

        products = {product_id: self.get(product_id) for product_id in wanted}
        for product_id, quantity in wanted.items():
            product = products[product_id]
            if not product.is_available(quantity):
                raise InsufficientStockError(
                    {
                        "quantity": [
                            f"Insufficient stock for '{product.name}': {product.stock} available, {quantity} requested"
                        ]
                    }
                )

        for product_id, quantity in wanted.items():
            products[product_id].debit(quantity)
