"""Storefront bounded context — Product Catalog, Shopping Cart and Orders.

Tracks the product ledger, the single active cart and placed orders, and
coordinates the transactional conversion of the cart into an order.
"""

import structlog
from protean.domain import Domain

storefront = Domain(name="storefront")

logger = structlog.get_logger(__name__)
