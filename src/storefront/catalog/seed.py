"""Demo catalog of floral lamps loaded at startup."""

from storefront.catalog.ledger import Ledger
from storefront.catalog.product import Category, Product

DEMO_PRODUCTS = [
    {
        "product_id": "lamp-001",
        "name": "Romantic Rose Lamp",
        "description": "Elegant table lamp with cold-porcelain rose petals and warm LED light.",
        "price": 49.99,
        "stock": 15,
        "category": Category.ROSE,
        "image_url": "https://images.example.com/lamps/romantic-rose.jpg",
    },
    {
        "product_id": "lamp-002",
        "name": "Spring Sunflower Lamp",
        "description": "Floor lamp inspired by the sunflower, with golden resin petals.",
        "price": 89.99,
        "stock": 8,
        "category": Category.SUNFLOWER,
        "image_url": "https://m.media-amazon.com/images/I/71seWZWMIvL._AC_SL1500_.jpg",
    },
    {
        "product_id": "lamp-003",
        "name": "Zen Lotus Lamp",
        "description": "Ambient lamp shaped like a lotus flower. Gives a soft, relaxing light.",
        "price": 65.00,
        "stock": 12,
        "category": Category.LOTUS,
        "image_url": "https://images.example.com/lamps/zen-lotus.jpg",
    },
    {
        "product_id": "lamp-004",
        "name": "Cheerful Daisy Lamp",
        "description": "Multicolour daisy-shaped lamp for kids' rooms. Child safe.",
        "price": 35.50,
        "stock": 20,
        "category": Category.DAISY,
        "image_url": "https://images.example.com/lamps/cheerful-daisy.jpg",
    },
    {
        "product_id": "lamp-005",
        "name": "Vintage Rose Lamp",
        "description": "Vintage-style pendant lamp decorated with antique roses.",
        "price": 75.00,
        "stock": 6,
        "category": Category.ROSE,
        "image_url": "https://m.media-amazon.com/images/I/61AV5CcHo3L._AC_UF894,1000_QL80_.jpg",
    },
    {
        "product_id": "lamp-006",
        "name": "Mini Sunflower Lamp",
        "description": "Desk lamp with a sunflower design. Perfect for your workspace.",
        "price": 28.99,
        "stock": 25,
        "category": Category.SUNFLOWER,
        "image_url": "https://images.example.com/lamps/mini-sunflower.jpg",
    },
]


def demo_products():
    """Build fresh Product aggregates for the demo catalog.

    Must be called inside an active domain context.
    """
    return [Product.create(**data) for data in DEMO_PRODUCTS]


def seed_ledger(ledger: Ledger) -> int:
    """Add every demo product missing from ``ledger``; return how many were added."""
    added = 0
    for product in demo_products():
        if str(product.id) not in ledger:
            ledger.add(product)
            added += 1
    return added
