"""Storefront: in-memory floral lamp shop with catalog, cart and order placement."""
