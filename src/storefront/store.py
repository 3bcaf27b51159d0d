"""Store — the transactional coordinator of the storefront.

The Store owns the product ledger, the single active cart and the placed
orders. Every public method runs start to finish while holding one exclusive
lock, so no two operations ever interleave, and pushes the storefront domain
context so it can be called from any request thread.

Callers never receive live aggregates. Every method that returns data returns
a snapshot dict built while the lock is still held.

Order placement:
    1. Reject an empty cart
    2. Allocate the next sequential order id
    3. Build the Order from the cart and the customer
    4. Check stock for every line, then debit every line
    5. Record the order and clear the cart
A failure at any step leaves the ledger, the cart and the order sequence
exactly as they were.
"""

import threading
from contextlib import contextmanager

import structlog
from protean.exceptions import ObjectNotFoundError, ValidationError

from storefront.cart.cart import Cart
from storefront.catalog.ledger import Ledger
from storefront.catalog.product import Product
from storefront.catalog.seed import seed_ledger
from storefront.domain import storefront
from storefront.order.order import Order
from storefront.shared.exceptions import EmptyCartError, error_message

logger = structlog.get_logger(__name__)

ORDER_ID_FORMAT = "ORD-{:04d}"


class Store:
    """In-memory storefront guarded by a single lock.

    The storefront domain must be initialized (``storefront.init()``) before a
    Store is built.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._orders: dict[str, Order] = {}
        self._order_seq = 1
        with storefront.domain_context():
            self._ledger = Ledger()
            self._cart = Cart.create()

    @contextmanager
    def _exclusive(self):
        with self._lock, storefront.domain_context():
            yield

    def _get_order(self, order_id) -> Order:
        try:
            return self._orders[order_id]
        except KeyError:
            raise ObjectNotFoundError({"order_id": [f"Order '{order_id}' not found"]}) from None

    # -------------------------------------------------------------------
    # Catalog
    # -------------------------------------------------------------------
    def add_product(self, product_id, name, description, price, stock, category, image_url=None) -> dict:
        with self._exclusive():
            product = Product.create(
                product_id=product_id,
                name=name,
                description=description,
                price=price,
                stock=stock,
                category=category,
                image_url=image_url,
            )
            self._ledger.add(product)
            return product.to_snapshot()

    def seed_catalog(self) -> int:
        """Load the demo catalog; products already in the ledger are kept."""
        with self._exclusive():
            added = seed_ledger(self._ledger)
        logger.info("Catalog seeded", products_added=added)
        return added

    def get_product(self, product_id) -> dict:
        with self._exclusive():
            return self._ledger.get(product_id).to_snapshot()

    def list_products(self) -> list[dict]:
        with self._exclusive():
            return [p.to_snapshot() for p in self._ledger.list_all()]

    def list_products_by_category(self, category) -> list[dict]:
        with self._exclusive():
            return [p.to_snapshot() for p in self._ledger.list_by_category(category)]

    def restock(self, product_id, quantity) -> dict:
        with self._exclusive():
            self._ledger.credit(product_id, quantity)
            product = self._ledger.get(product_id)
            logger.info("Product restocked", product_id=product_id, quantity=quantity, stock=product.stock)
            return product.to_snapshot()

    def update_price(self, product_id, price) -> dict:
        """Change a product's price. Lines already in the cart keep their price."""
        with self._exclusive():
            product = self._ledger.get(product_id)
            product.set_price(price)
            return product.to_snapshot()

    # -------------------------------------------------------------------
    # Cart
    # -------------------------------------------------------------------
    def get_cart(self) -> dict:
        with self._exclusive():
            return self._cart.to_snapshot()

    def add_to_cart(self, product_id, quantity) -> dict:
        with self._exclusive():
            product = self._ledger.get(product_id)
            self._cart.add_item(product, quantity)
            return self._cart.to_snapshot()

    def remove_from_cart(self, product_id) -> dict:
        with self._exclusive():
            self._cart.remove_item(product_id)
            return self._cart.to_snapshot()

    def clear_cart(self) -> dict:
        with self._exclusive():
            self._cart.clear()
            return self._cart.to_snapshot()

    def apply_discount(self, amount) -> dict:
        with self._exclusive():
            self._cart.set_discount(amount)
            return self._cart.to_snapshot()

    # -------------------------------------------------------------------
    # Orders
    # -------------------------------------------------------------------
    def place_order(self, customer) -> dict:
        """Convert the cart into an order for ``customer``.

        ``customer`` is a ``Customer`` value object or a mapping of its
        fields. Raises ``EmptyCartError``, ``ValidationError``,
        ``InsufficientStockError`` or ``ObjectNotFoundError``.
        """
        with self._exclusive():
            if self._cart.is_empty():
                raise EmptyCartError({"cart": ["The cart is empty"]})

            order_id = ORDER_ID_FORMAT.format(self._order_seq)
            try:
                order = Order.create(order_id, customer, self._cart)
                self._ledger.debit_all((str(line.product_id), line.quantity) for line in order.lines)
            except (ValidationError, ObjectNotFoundError) as exc:
                logger.warning("Order placement rejected", order_id=order_id, error=error_message(exc))
                raise

            self._order_seq += 1
            self._orders[order_id] = order
            self._cart.clear()

            logger.info(
                "Order placed",
                order_id=order_id,
                total=order.total,
                line_count=len(order.lines),
            )
            return order.to_snapshot()

    def get_order(self, order_id) -> dict:
        with self._exclusive():
            return self._get_order(order_id).to_snapshot()

    def list_orders(self) -> list[dict]:
        """All orders, oldest first."""
        with self._exclusive():
            return [order.to_snapshot() for order in self._orders.values()]

    def advance_order(self, order_id) -> dict:
        with self._exclusive():
            order = self._get_order(order_id)
            previous = order.status
            order.advance()
            logger.info("Order advanced", order_id=order_id, from_status=previous, to_status=order.status)
            return order.to_snapshot()

    def cancel_order(self, order_id) -> dict:
        """Cancel an order and return its quantities to the ledger."""
        with self._exclusive():
            order = self._get_order(order_id)
            order.cancel()
            for line in order.lines:
                self._ledger.credit(str(line.product_id), line.quantity)
            logger.info("Order cancelled", order_id=order_id, restocked_lines=len(order.lines))
            return order.to_snapshot()

    def set_order_notes(self, order_id, notes) -> dict:
        with self._exclusive():
            order = self._get_order(order_id)
            order.set_notes(notes)
            return order.to_snapshot()
