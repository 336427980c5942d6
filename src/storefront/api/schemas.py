"""Pydantic request/response schemas for the Storefront API.

These are separate from Protean commands. The API layer is the external
contract; commands are internal domain concepts.
"""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field


# ---------------------------------------------------------------------------
# Locations and accounts
# ---------------------------------------------------------------------------
class CreateLocationRequest(BaseModel):
    model_config = {"json_schema_extra": {"examples": [{"name": "Central Library", "description": "Level 1 foyer"}]}}

    name: str = Field(..., max_length=100)
    description: str | None = None


class LocationResponse(BaseModel):
    location_id: str
    name: str
    description: str | None = None


class RegisterAccountRequest(BaseModel):
    model_config = {
        "json_schema_extra": {"examples": [{"name": "Mei Ling", "email": "mei@example.com", "role": "Vendor"}]}
    }

    name: str = Field(..., max_length=100)
    email: str = Field(..., max_length=254)
    role: str


class AccountResponse(BaseModel):
    account_id: str
    name: str
    email: str
    role: str
    favourites: list[str] = []


class FavouriteResponse(BaseModel):
    product_id: str
    is_favourite: bool


# ---------------------------------------------------------------------------
# Shops
# ---------------------------------------------------------------------------
class CreateShopRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [{"owner_id": "vendor-001", "name": "Chicken Rice Stall", "description": "Hainanese style"}]
        }
    }

    owner_id: str
    name: str = Field(..., max_length=100)
    description: str | None = None


class EditShopRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "owner_id": "vendor-001",
                    "name": "Chicken Rice Stall",
                    "description": "Hainanese style",
                    "location": "Central Library",
                    "categories": ["Mains", "Drinks"],
                }
            ]
        }
    }

    owner_id: str
    name: str | None = None
    description: str | None = None
    location: str | None = None
    categories: list[str] = []


class OwnerRequest(BaseModel):
    owner_id: str


class CreateProductRequest(BaseModel):
    owner_id: str
    name: str = Field(..., max_length=150)
    description: str | None = None
    price: float
    estimated_prep_time: float = 0.0
    category_index: int


class UpdateProductRequest(BaseModel):
    owner_id: str
    name: str = Field(..., max_length=150)
    description: str | None = None
    price: float
    estimated_prep_time: float = 0.0
    category_index: int | None = None


class MoveProductsRequest(BaseModel):
    owner_id: str
    source_positions: list[int] = Field(..., min_length=1)
    destination: int = Field(..., ge=0)


class RemoveProductsRequest(BaseModel):
    owner_id: str
    positions: list[int] = Field(..., min_length=1)


class ProductStockRequest(BaseModel):
    owner_id: str
    is_out_of_stock: bool


class ShopIdResponse(BaseModel):
    shop_id: str


class ProductIdResponse(BaseModel):
    product_id: str


class ProductCardResponse(BaseModel):
    product_id: str
    name: str
    description: str | None = None
    price: float
    image_url: str | None = None
    estimated_prep_time: float = 0.0
    is_out_of_stock: bool = False


class CategorySectionResponse(BaseModel):
    title: str
    ordering_index: int
    products: list[ProductCardResponse]


class CatalogResponse(BaseModel):
    shop_id: str
    shop_name: str
    location_name: str | None = None
    is_closed: bool
    sections: list[CategorySectionResponse]


# ---------------------------------------------------------------------------
# Orders
# ---------------------------------------------------------------------------
class OptionChoiceRequest(BaseModel):
    description: str
    cost: float = Field(0.0, ge=0.0)


class PlaceOrderRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "customer_id": "customer-001",
                    "shop_id": "shop-001",
                    "product_id": "product-001",
                    "quantity": 2,
                    "option_choices": [{"description": "Extra rice", "cost": 0.5}],
                }
            ]
        }
    }

    customer_id: str
    shop_id: str
    product_id: str
    quantity: int
    option_choices: list[OptionChoiceRequest] = []


class CancelOrderRequest(BaseModel):
    customer_id: str
    note: str | None = Field(None, max_length=500)


class VendorActionRequest(BaseModel):
    vendor_id: str


class OrderIdResponse(BaseModel):
    order_id: str


class OrderSummaryResponse(BaseModel):
    order_id: str
    shop_id: str
    customer_id: str
    collection_no: int
    status: str
    total: float
    item_count: int
    placed_at: datetime | None = None


class OrderBoardResponse(BaseModel):
    current: list[OrderSummaryResponse]
    history: list[OrderSummaryResponse]


class CustomerOrdersResponse(BaseModel):
    current: list[dict]
    history: list[dict]


class StatusResponse(BaseModel):
    status: str = "ok"
