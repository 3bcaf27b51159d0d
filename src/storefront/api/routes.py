"""FastAPI endpoints for the Storefront.

Handlers are plain ``def`` functions: FastAPI runs them on its worker thread
pool and the Store's lock serializes them.
"""

from fastapi import APIRouter, Depends, Request

from storefront.api.schemas import (
    AddToCartRequest,
    ApplyDiscountRequest,
    CartOut,
    OrderNotesRequest,
    OrderOut,
    PlaceOrderRequest,
    ProductOut,
    RemoveFromCartRequest,
)
from storefront.catalog.product import Category
from storefront.store import Store

product_router = APIRouter(prefix="/api/products", tags=["products"])
cart_router = APIRouter(prefix="/api/cart", tags=["cart"])
order_router = APIRouter(prefix="/api/orders", tags=["orders"])

# Category names as the storefront's shoppers type them, plus the canonical ones
_CATEGORY_ALIASES = {
    "rosa": Category.ROSE,
    "girasol": Category.SUNFLOWER,
    "loto": Category.LOTUS,
    "margarita": Category.DAISY,
    **{category.value: category for category in Category},
}


def parse_category(value: str) -> Category:
    """Resolve a category query string; unknown names fall back to rose."""
    return _CATEGORY_ALIASES.get(value.strip().lower(), Category.ROSE)


def get_store(request: Request) -> Store:
    return request.app.state.store


def _ok(data) -> dict:
    return {"success": True, "data": data}


# --- Product endpoints ---


@product_router.get("")
def list_products(category: str | None = None, store: Store = Depends(get_store)) -> dict:
    if category:
        products = store.list_products_by_category(parse_category(category))
    else:
        products = store.list_products()
    return _ok([ProductOut(**p).model_dump() for p in products])


@product_router.get("/{product_id}")
def get_product(product_id: str, store: Store = Depends(get_store)) -> dict:
    return _ok(ProductOut(**store.get_product(product_id)).model_dump())


# --- Cart endpoints ---


@cart_router.get("")
def get_cart(store: Store = Depends(get_store)) -> dict:
    return _ok(CartOut(**store.get_cart()).model_dump())


@cart_router.post("/add")
def add_to_cart(body: AddToCartRequest, store: Store = Depends(get_store)) -> dict:
    return _ok(CartOut(**store.add_to_cart(body.product_id, body.quantity)).model_dump())


@cart_router.post("/remove")
def remove_from_cart(body: RemoveFromCartRequest, store: Store = Depends(get_store)) -> dict:
    return _ok(CartOut(**store.remove_from_cart(body.product_id)).model_dump())


@cart_router.post("/clear")
def clear_cart(store: Store = Depends(get_store)) -> dict:
    return _ok(CartOut(**store.clear_cart()).model_dump())


@cart_router.post("/discount")
def apply_discount(body: ApplyDiscountRequest, store: Store = Depends(get_store)) -> dict:
    return _ok(CartOut(**store.apply_discount(body.amount)).model_dump())


# --- Order endpoints ---


@order_router.post("", status_code=201)
def place_order(body: PlaceOrderRequest, store: Store = Depends(get_store)) -> dict:
    order = store.place_order(body.model_dump())
    return _ok(OrderOut(**order).model_dump())


@order_router.get("/list")
def list_orders(store: Store = Depends(get_store)) -> dict:
    return _ok([OrderOut(**o).model_dump() for o in store.list_orders()])


@order_router.get("/{order_id}")
def get_order(order_id: str, store: Store = Depends(get_store)) -> dict:
    return _ok(OrderOut(**store.get_order(order_id)).model_dump())


@order_router.post("/{order_id}/advance")
def advance_order(order_id: str, store: Store = Depends(get_store)) -> dict:
    return _ok(OrderOut(**store.advance_order(order_id)).model_dump())


@order_router.post("/{order_id}/cancel")
def cancel_order(order_id: str, store: Store = Depends(get_store)) -> dict:
    return _ok(OrderOut(**store.cancel_order(order_id)).model_dump())


@order_router.put("/{order_id}/notes")
def set_order_notes(order_id: str, body: OrderNotesRequest, store: Store = Depends(get_store)) -> dict:
    return _ok(OrderOut(**store.set_order_notes(order_id, body.notes)).model_dump())
