"""Gateway adapter backed by the storefront domain.

Writes become commands processed by the domain; observations are served by
the snapshot hub; image bytes go through the image storage port. Domain and
storage failures come back as failed results. Anything else is a bug and
propagates.
"""

import json

from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.utils.globals import current_domain

from storefront.account.account import Account
from storefront.account.favourites import ToggleFavourite
from storefront.gateway.port import GatewayResult, PersistenceGateway, ProductData, failed, ok
from storefront.observation import get_hub
from storefront.observation.hub import ObservationTopic, SnapshotHub
from storefront.order.cancellation import CancelOrder
from storefront.order.order import OrderStatus
from storefront.order.placement import PlaceOrder
from storefront.order.progression import MarkOrderCollected, MarkOrderReady, StartPreparingOrder
from storefront.shared.errors import DatabaseError
from storefront.shop.creation import CreateShop
from storefront.shop.editing import EditShop
from storefront.shop.images import SetProductImage, SetShopImage
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
from storefront.storage.port import ImageStorage, check_image_size, product_image_key, shop_image_key
from storefront.utils.logging import get_logger

logger = get_logger(__name__)

_GATEWAY_ERRORS = (ValidationError, ObjectNotFoundError, DatabaseError)

_PROGRESSION_COMMANDS = {
    OrderStatus.PREPARING: StartPreparingOrder,
    OrderStatus.READY: MarkOrderReady,
    OrderStatus.COLLECTED: MarkOrderCollected,
}


class DomainGateway(PersistenceGateway):
    def __init__(self, storage: ImageStorage | None = None, hub: SnapshotHub | None = None) -> None:
        self._storage = storage
        self._hub = hub

    @property
    def storage(self) -> ImageStorage:
        return self._storage or get_storage()

    @property
    def hub(self) -> SnapshotHub:
        return self._hub or get_hub()

    def _run(self, operation: str, action, **context) -> GatewayResult:
        try:
            return ok(action())
        except _GATEWAY_ERRORS as exc:
            logger.warning("gateway_operation_failed", operation=operation, error=str(exc), **context)
            return failed(exc)

    def _process(self, command):
        return current_domain.process(command, asynchronous=False)

    def _upload(self, key: str, data: bytes) -> str:
        result = self.storage.upload(key, data)
        if not result.success:
            raise DatabaseError(result.failure_reason)
        return result.url

    # --- Shops ---

    def create_shop(self, owner_id, name, description, image_bytes=None) -> GatewayResult:
        def action():
            check_image_size(image_bytes)
            shop_id = self._process(CreateShop(owner_id=owner_id, name=name, description=description))
            if image_bytes:
                url = self._upload(shop_image_key(shop_id), image_bytes)
                self._process(SetShopImage(shop_id=shop_id, image_url=url))
            return shop_id

        return self._run("create_shop", action, owner_id=str(owner_id))

    def edit_shop(
        self,
        shop_id,
        owner_id,
        name,
        description,
        location,
        category_titles,
        image_bytes=None,
    ) -> GatewayResult:
        def action():
            self._process(
                EditShop(
                    shop_id=shop_id,
                    owner_id=owner_id,
                    name=name,
                    description=description,
                    location=location,
                    category_titles=json.dumps(list(category_titles)),
                    image_size=len(image_bytes) if image_bytes is not None else None,
                )
            )
            if image_bytes:
                url = self._upload(shop_image_key(shop_id), image_bytes)
                self._process(SetShopImage(shop_id=shop_id, image_url=url))

        return self._run("edit_shop", action, shop_id=str(shop_id))

    def set_shop_closed(self, shop_id, owner_id, is_closed: bool) -> GatewayResult:
        command_cls = CloseShop if is_closed else OpenShop
        return self._run(
            "set_shop_closed",
            lambda: self._process(command_cls(shop_id=shop_id, owner_id=owner_id)),
            shop_id=str(shop_id),
        )

    def get_shop_image(self, shop_id) -> GatewayResult:
        def action():
            current_domain.repository_for(Shop).get(shop_id)
            result = self.storage.download(shop_image_key(shop_id))
            if not result.success:
                raise DatabaseError(result.failure_reason)
            return result.data

        return self._run("get_shop_image", action, shop_id=str(shop_id))

    def observe_shops_by_owner(self, owner_id, callback):
        return self.hub.subscribe(ObservationTopic.SHOPS_BY_OWNER, owner_id, callback)

    def observe_shops(self, callback):
        return self.hub.subscribe(ObservationTopic.ALL_SHOPS, None, callback)

    # --- Products ---

    def _upload_product_image(self, shop_id, product_id, image_bytes):
        url = self._upload(product_image_key(shop_id, product_id), image_bytes)
        self._process(SetProductImage(shop_id=shop_id, product_id=product_id, image_url=url))

    def create_product(self, shop_id, owner_id, product_data: ProductData, image_bytes=None) -> GatewayResult:
        def action():
            check_image_size(image_bytes)
            product_id = self._process(
                AddProduct(
                    shop_id=shop_id,
                    owner_id=owner_id,
                    name=product_data.name,
                    description=product_data.description,
                    price=product_data.price,
                    estimated_prep_time=product_data.estimated_prep_time,
                    category_index=product_data.category_index,
                )
            )
            if image_bytes:
                self._upload_product_image(shop_id, product_id, image_bytes)
            return product_id

        return self._run("create_product", action, shop_id=str(shop_id))

    def edit_product(self, shop_id, owner_id, product_id, product_data: ProductData, image_bytes=None) -> GatewayResult:
        def action():
            check_image_size(image_bytes)
            self._process(
                UpdateProduct(
                    shop_id=shop_id,
                    owner_id=owner_id,
                    product_id=product_id,
                    name=product_data.name,
                    description=product_data.description,
                    price=product_data.price,
                    estimated_prep_time=product_data.estimated_prep_time,
                    category_index=product_data.category_index,
                )
            )
            if image_bytes:
                self._upload_product_image(shop_id, product_id, image_bytes)

        return self._run("edit_product", action, shop_id=str(shop_id), product_id=str(product_id))

    def delete_product(self, shop_id, owner_id, product_id) -> GatewayResult:
        return self._run(
            "delete_product",
            lambda: self._process(RemoveProduct(shop_id=shop_id, owner_id=owner_id, product_id=product_id)),
            shop_id=str(shop_id),
            product_id=str(product_id),
        )

    def delete_products(self, shop_id, owner_id, category_index, positions) -> GatewayResult:
        return self._run(
            "delete_products",
            lambda: self._process(
                RemoveProducts(
                    shop_id=shop_id,
                    owner_id=owner_id,
                    category_index=category_index,
                    positions=json.dumps(list(positions)),
                )
            ),
            shop_id=str(shop_id),
        )

    def move_products(self, shop_id, owner_id, category_index, source_positions, destination) -> GatewayResult:
        return self._run(
            "move_products",
            lambda: self._process(
                MoveProducts(
                    shop_id=shop_id,
                    owner_id=owner_id,
                    category_index=category_index,
                    source_positions=json.dumps(sorted(source_positions)),
                    destination=destination,
                )
            ),
            shop_id=str(shop_id),
        )

    def set_product_stock(self, shop_id, owner_id, product_id, is_out_of_stock: bool) -> GatewayResult:
        return self._run(
            "set_product_stock",
            lambda: self._process(
                SetProductStock(
                    shop_id=shop_id,
                    owner_id=owner_id,
                    product_id=product_id,
                    is_out_of_stock=is_out_of_stock,
                )
            ),
            shop_id=str(shop_id),
            product_id=str(product_id),
        )

    # --- Orders ---

    def create_order(self, customer_id, shop_id, product_id, quantity, option_choices=None) -> GatewayResult:
        return self._run(
            "create_order",
            lambda: self._process(
                PlaceOrder(
                    customer_id=customer_id,
                    shop_id=shop_id,
                    product_id=product_id,
                    quantity=quantity,
                    option_choices=json.dumps(list(option_choices or [])),
                )
            ),
            shop_id=str(shop_id),
            customer_id=str(customer_id),
        )

    def cancel_order(self, order_id, customer_id) -> GatewayResult:
        return self._run(
            "cancel_order",
            lambda: self._process(CancelOrder(order_id=order_id, customer_id=customer_id)),
            order_id=str(order_id),
        )

    def advance_order(self, order_id, vendor_id, target_status) -> GatewayResult:
        def action():
            try:
                target = OrderStatus(target_status)
            except ValueError:
                raise ValidationError({"status": [f"Unknown order status '{target_status}'"]}) from None
            command_cls = _PROGRESSION_COMMANDS.get(target)
            if command_cls is None:
                raise ValidationError({"status": [f"Vendors cannot move orders to {target.value}"]})
            self._process(command_cls(order_id=order_id, vendor_id=vendor_id))

        return self._run("advance_order", action, order_id=str(order_id))

    def observe_orders_by_customer(self, customer_id, callback):
        return self.hub.subscribe(ObservationTopic.ORDERS_BY_CUSTOMER, customer_id, callback)

    def observe_orders_by_shop(self, shop_id, callback):
        return self.hub.subscribe(ObservationTopic.ORDERS_BY_SHOP, shop_id, callback)

    # --- Accounts ---

    def get_account(self, account_id) -> GatewayResult:
        return self._run(
            "get_account",
            lambda: current_domain.repository_for(Account).get(account_id),
            account_id=str(account_id),
        )

    def toggle_favourite(self, customer_id, product_id) -> GatewayResult:
        return self._run(
            "toggle_favourite",
            lambda: self._process(ToggleFavourite(account_id=customer_id, product_id=product_id)),
            customer_id=str(customer_id),
        )
