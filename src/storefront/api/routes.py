"""FastAPI routes for the Storefront bounded context.

Each route translates between Pydantic schemas (external contract) and
Protean commands (internal domain concepts). Domain rule violations surface as
400s and missing records as 404s through Protean's exception handlers.
"""

import json
from dataclasses import asdict

from fastapi import APIRouter, HTTPException, Request
from fastapi.responses import JSONResponse, Response
from protean.utils.globals import current_domain

from storefront.account.account import Account
from storefront.account.favourites import ToggleFavourite
from storefront.account.registration import RegisterAccount
from storefront.api.schemas import (
    AccountResponse,
    CancelOrderRequest,
    CatalogResponse,
    CreateLocationRequest,
    CreateProductRequest,
    CreateShopRequest,
    CustomerOrdersResponse,
    EditShopRequest,
    FavouriteResponse,
    LocationResponse,
    MoveProductsRequest,
    OrderBoardResponse,
    OrderIdResponse,
    OrderSummaryResponse,
    OwnerRequest,
    PlaceOrderRequest,
    ProductIdResponse,
    ProductStockRequest,
    RegisterAccountRequest,
    RemoveProductsRequest,
    ShopIdResponse,
    StatusResponse,
    UpdateProductRequest,
    VendorActionRequest,
)
from storefront.location.location import CreateLocation, Location, location_name
from storefront.order.cancellation import CancelOrder
from storefront.order.order import ACTIVE_STATUSES, Order
from storefront.order.placement import PlaceOrder
from storefront.order.progression import MarkOrderCollected, MarkOrderReady, StartPreparingOrder
from storefront.order.schema import OrderSchema
from storefront.order.views import partition_orders
from storefront.projections.order_summary import OrderSummary
from storefront.shop.catalog import group_catalog
from storefront.shop.creation import CreateShop
from storefront.shop.editing import EditShop
from storefront.shop.images import SetShopImage
from storefront.shop.operation import CloseShop, OpenShop
from storefront.shop.products import (
    AddProduct,
    MoveProducts,
    RemoveProduct,
    RemoveProducts,
    SetProductStock,
    UpdateProduct,
)
from storefront.shop.shop import Shop
from storefront.storage import get_storage
from storefront.storage.port import check_image_size, shop_image_key

location_router = APIRouter(prefix="/locations", tags=["locations"])
account_router = APIRouter(prefix="/accounts", tags=["accounts"])
shop_router = APIRouter(prefix="/shops", tags=["shops"])
order_router = APIRouter(prefix="/orders", tags=["orders"])


# ---------------------------------------------------------------------------
# Locations
# ---------------------------------------------------------------------------
@location_router.post("", status_code=201, response_model=LocationResponse)
async def create_location(body: CreateLocationRequest) -> LocationResponse:
    location_id = current_domain.process(
        CreateLocation(name=body.name, description=body.description),
        asynchronous=False,
    )
    return LocationResponse(location_id=location_id, name=body.name, description=body.description)


@location_router.get("", response_model=list[LocationResponse])
async def list_locations() -> list[LocationResponse]:
    locations = current_domain.repository_for(Location).list_all()
    return [
        LocationResponse(location_id=str(location.id), name=location.name, description=location.description)
        for location in locations
    ]


# ---------------------------------------------------------------------------
# Accounts
# ---------------------------------------------------------------------------
def _account_response(account) -> AccountResponse:
    return AccountResponse(
        account_id=str(account.id),
        name=account.name,
        email=account.email,
        role=account.role,
        favourites=sorted(account.favourite_ids()),
    )


@account_router.post("", status_code=201, response_model=AccountResponse)
async def register_account(body: RegisterAccountRequest) -> AccountResponse:
    account_id = current_domain.process(
        RegisterAccount(name=body.name, email=body.email, role=body.role),
        asynchronous=False,
    )
    return _account_response(current_domain.repository_for(Account).get(account_id))


@account_router.get("/{account_id}", response_model=AccountResponse)
async def get_account(account_id: str) -> AccountResponse:
    return _account_response(current_domain.repository_for(Account).get(account_id))


@account_router.put("/{account_id}/favourites/{product_id}", response_model=FavouriteResponse)
async def toggle_favourite(account_id: str, product_id: str) -> FavouriteResponse:
    """Flip a product in the customer's favourites."""
    is_favourite = current_domain.process(
        ToggleFavourite(account_id=account_id, product_id=product_id),
        asynchronous=False,
    )
    return FavouriteResponse(product_id=product_id, is_favourite=is_favourite)


# ---------------------------------------------------------------------------
# Shops
# ---------------------------------------------------------------------------
@shop_router.post("", status_code=201, response_model=ShopIdResponse)
async def create_shop(body: CreateShopRequest) -> ShopIdResponse:
    shop_id = current_domain.process(
        CreateShop(owner_id=body.owner_id, name=body.name, description=body.description),
        asynchronous=False,
    )
    return ShopIdResponse(shop_id=shop_id)


@shop_router.put("/{shop_id}", response_model=StatusResponse)
async def edit_shop(shop_id: str, body: EditShopRequest) -> StatusResponse:
    command = EditShop(
        shop_id=shop_id,
        owner_id=body.owner_id,
        name=body.name,
        description=body.description,
        location=body.location,
        category_titles=json.dumps(body.categories),
    )
    current_domain.process(command, asynchronous=False)
    return StatusResponse()


@shop_router.put("/{shop_id}/open", response_model=StatusResponse)
async def open_shop(shop_id: str, body: OwnerRequest) -> StatusResponse:
    current_domain.process(OpenShop(shop_id=shop_id, owner_id=body.owner_id), asynchronous=False)
    return StatusResponse()


@shop_router.put("/{shop_id}/close", response_model=StatusResponse)
async def close_shop(shop_id: str, body: OwnerRequest) -> StatusResponse:
    current_domain.process(CloseShop(shop_id=shop_id, owner_id=body.owner_id), asynchronous=False)
    return StatusResponse()


@shop_router.get("/{shop_id}/catalog", response_model=CatalogResponse)
async def get_catalog(shop_id: str) -> CatalogResponse:
    shop = current_domain.repository_for(Shop).get(shop_id)
    view = group_catalog(shop, location_name(shop.location_id))
    return CatalogResponse(
        shop_id=view.shop_id,
        shop_name=view.shop_name,
        location_name=view.location_name,
        is_closed=view.is_closed,
        sections=[
            {
                "title": section.title,
                "ordering_index": section.ordering_index,
                "products": [asdict(card) for card in section.products],
            }
            for section in view.sections
        ],
    )


@shop_router.put("/{shop_id}/image", response_model=StatusResponse)
async def upload_shop_image(shop_id: str, owner_id: str, request: Request) -> StatusResponse:
    """Upload the raw image bytes sent as the request body."""
    data = await request.body()
    check_image_size(data)
    current_domain.repository_for(Shop).get(shop_id).assert_owned_by(owner_id)

    result = get_storage().upload(shop_image_key(shop_id), data)
    if not result.success:
        raise HTTPException(status_code=502, detail=result.failure_reason)

    current_domain.process(SetShopImage(shop_id=shop_id, image_url=result.url), asynchronous=False)
    return StatusResponse()


@shop_router.get("/{shop_id}/image")
async def get_shop_image(shop_id: str):
    current_domain.repository_for(Shop).get(shop_id)
    result = get_storage().download(shop_image_key(shop_id))
    if not result.success:
        return JSONResponse(status_code=404, content={"error": result.failure_reason})
    return Response(content=result.data, media_type="application/octet-stream")


@shop_router.post("/{shop_id}/products", status_code=201, response_model=ProductIdResponse)
async def add_product(shop_id: str, body: CreateProductRequest) -> ProductIdResponse:
    command = AddProduct(
        shop_id=shop_id,
        owner_id=body.owner_id,
        name=body.name,
        description=body.description,
        price=body.price,
        estimated_prep_time=body.estimated_prep_time,
        category_index=body.category_index,
    )
    product_id = current_domain.process(command, asynchronous=False)
    return ProductIdResponse(product_id=product_id)


@shop_router.put("/{shop_id}/products/{product_id}", response_model=StatusResponse)
async def update_product(shop_id: str, product_id: str, body: UpdateProductRequest) -> StatusResponse:
    command = UpdateProduct(
        shop_id=shop_id,
        owner_id=body.owner_id,
        product_id=product_id,
        name=body.name,
        description=body.description,
        price=body.price,
        estimated_prep_time=body.estimated_prep_time,
        category_index=body.category_index,
    )
    current_domain.process(command, asynchronous=False)
    return StatusResponse()


@shop_router.delete("/{shop_id}/products/{product_id}", response_model=StatusResponse)
async def remove_product(shop_id: str, product_id: str, owner_id: str) -> StatusResponse:
    current_domain.process(
        RemoveProduct(shop_id=shop_id, owner_id=owner_id, product_id=product_id),
        asynchronous=False,
    )
    return StatusResponse()


@shop_router.put("/{shop_id}/products/{product_id}/stock", response_model=StatusResponse)
async def set_product_stock(shop_id: str, product_id: str, body: ProductStockRequest) -> StatusResponse:
    command = SetProductStock(
        shop_id=shop_id,
        owner_id=body.owner_id,
        product_id=product_id,
        is_out_of_stock=body.is_out_of_stock,
    )
    current_domain.process(command, asynchronous=False)
    return StatusResponse()


@shop_router.put("/{shop_id}/categories/{category_index}/order", response_model=StatusResponse)
async def move_products(shop_id: str, category_index: int, body: MoveProductsRequest) -> StatusResponse:
    command = MoveProducts(
        shop_id=shop_id,
        owner_id=body.owner_id,
        category_index=category_index,
        source_positions=json.dumps(body.source_positions),
        destination=body.destination,
    )
    current_domain.process(command, asynchronous=False)
    return StatusResponse()


@shop_router.post("/{shop_id}/categories/{category_index}/removals", response_model=StatusResponse)
async def remove_products(shop_id: str, category_index: int, body: RemoveProductsRequest) -> StatusResponse:
    """Remove the products at the given display positions of one category."""
    command = RemoveProducts(
        shop_id=shop_id,
        owner_id=body.owner_id,
        category_index=category_index,
        positions=json.dumps(body.positions),
    )
    current_domain.process(command, asynchronous=False)
    return StatusResponse()


@shop_router.get("/{shop_id}/orders", response_model=OrderBoardResponse)
async def get_order_board(shop_id: str) -> OrderBoardResponse:
    """Order board from the summary read model, newest first."""
    current_domain.repository_for(Shop).get(shop_id)
    records = current_domain.repository_for(OrderSummary)._dao.query.filter(shop_id=shop_id).all().items
    records = sorted(records, key=lambda record: record.placed_at, reverse=True)
    active = {status.value for status in ACTIVE_STATUSES}

    def _summary(record):
        return OrderSummaryResponse(
            order_id=str(record.order_id),
            shop_id=str(record.shop_id),
            customer_id=str(record.customer_id),
            collection_no=record.collection_no,
            status=record.status,
            total=record.total,
            item_count=record.item_count,
            placed_at=record.placed_at,
        )

    return OrderBoardResponse(
        current=[_summary(r) for r in records if r.status in active],
        history=[_summary(r) for r in records if r.status not in active],
    )


# ---------------------------------------------------------------------------
# Orders
# ---------------------------------------------------------------------------
@order_router.post("", status_code=201, response_model=OrderIdResponse)
async def place_order(body: PlaceOrderRequest) -> OrderIdResponse:
    command = PlaceOrder(
        customer_id=body.customer_id,
        shop_id=body.shop_id,
        product_id=body.product_id,
        quantity=body.quantity,
        option_choices=json.dumps([choice.model_dump() for choice in body.option_choices]),
    )
    order_id = current_domain.process(command, asynchronous=False)
    return OrderIdResponse(order_id=order_id)


@order_router.get("", response_model=CustomerOrdersResponse)
async def list_customer_orders(customer_id: str) -> CustomerOrdersResponse:
    """A customer's current orders and order history, in wire format."""
    orders = current_domain.repository_for(Order).find_by_customer(customer_id)
    by_id = {str(order.id): order for order in orders}
    views = partition_orders(orders)
    return CustomerOrdersResponse(
        current=[OrderSchema.from_order(by_id[view.order_id]).to_wire() for view in views.current],
        history=[OrderSchema.from_order(by_id[view.order_id]).to_wire() for view in views.history],
    )


@order_router.get("/{order_id}")
async def get_order(order_id: str):
    order = current_domain.repository_for(Order).get(order_id)
    return JSONResponse(content=OrderSchema.from_order(order).to_wire())


@order_router.put("/{order_id}/cancel", response_model=StatusResponse)
async def cancel_order(order_id: str, body: CancelOrderRequest) -> StatusResponse:
    current_domain.process(
        CancelOrder(order_id=order_id, customer_id=body.customer_id, note=body.note),
        asynchronous=False,
    )
    return StatusResponse()


_VENDOR_ACTIONS = {
    "prepare": StartPreparingOrder,
    "ready": MarkOrderReady,
    "collect": MarkOrderCollected,
}


@order_router.put("/{order_id}/{action}", response_model=StatusResponse)
async def advance_order(order_id: str, action: str, body: VendorActionRequest) -> StatusResponse:
    """Vendor progression: prepare, ready or collect."""
    command_cls = _VENDOR_ACTIONS.get(action)
    if command_cls is None:
        raise HTTPException(status_code=404, detail=f"Unknown order action '{action}'")
    current_domain.process(command_cls(order_id=order_id, vendor_id=body.vendor_id), asynchronous=False)
    return StatusResponse()

