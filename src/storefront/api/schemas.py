"""Pydantic request/response schemas for the Storefront API.

These are external contracts — separate from the Protean aggregates, which
only ever reach the API as Store snapshots.
"""

from pydantic import BaseModel, Field


# ---------------------------------------------------------------------------
# Request Schemas
# ---------------------------------------------------------------------------
class AddToCartRequest(BaseModel):
    product_id: str = Field(min_length=1)
    quantity: int = Field(gt=0)

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "product_id": "lamp-001",
                    "quantity": 2,
                }
            ]
        }
    }


class RemoveFromCartRequest(BaseModel):
    product_id: str = Field(min_length=1)


class ApplyDiscountRequest(BaseModel):
    amount: float = Field(ge=0)


class PlaceOrderRequest(BaseModel):
    """Customer details; field-level rules are enforced by the domain."""

    name: str = ""
    email: str = ""
    phone: str = ""
    address: str = ""
    city: str = ""

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "name": "Ana Torres",
                    "email": "ana@example.com",
                    "phone": "+593 99 123 4567",
                    "address": "Av. Amazonas 123",
                    "city": "Quito",
                }
            ]
        }
    }


class OrderNotesRequest(BaseModel):
    notes: str


# ---------------------------------------------------------------------------
# Response Schemas
# ---------------------------------------------------------------------------
class ProductOut(BaseModel):
    id: str
    name: str
    description: str
    price: float
    stock: int
    category: str
    image_url: str
    created_at: str | None = None


class CartLineOut(BaseModel):
    product_id: str
    product_name: str
    price: float
    quantity: int
    image_url: str


class CartOut(BaseModel):
    items: list[CartLineOut]
    discount: float
    subtotal: float
    total: float
    item_count: int


class CustomerOut(BaseModel):
    name: str
    email: str
    phone: str
    address: str
    city: str


class OrderOut(BaseModel):
    id: str
    customer: CustomerOut
    items: list[CartLineOut]
    total: float
    status: str
    notes: str
    created_at: str | None = None
    updated_at: str | None = None
