"""Event handlers that push fresh snapshots to observers.

Every shop change republishes the owner's shops and the public shop list;
every order change republishes the customer's orders and the shop's board.
"""

import structlog
from protean.utils.mixins import handle

from storefront.domain import storefront
from storefront.observation import get_hub
from storefront.observation.hub import ObservationTopic
from storefront.order.events import (
    OrderCancelled,
    OrderCollected,
    OrderPlaced,
    OrderPreparing,
    OrderReady,
)
from storefront.order.order import Order
from storefront.shop.events import (
    ProductAdded,
    ProductDetailsUpdated,
    ProductImageUpdated,
    ProductRemoved,
    ProductsReordered,
    ProductStockChanged,
    ShopCreated,
    ShopDetailsUpdated,
    ShopImageUpdated,
    ShopOperatingStatusChanged,
)
from storefront.shop.shop import Shop

logger = structlog.get_logger(__name__)


@storefront.event_handler(part_of=Shop)
class ShopSnapshotPublisher:
    def _publish(self, event) -> None:
        hub = get_hub()
        delivered = hub.publish(ObservationTopic.SHOPS_BY_OWNER, event.owner_id)
        delivered += hub.publish(ObservationTopic.ALL_SHOPS)
        logger.debug("shop_snapshot_published", shop_id=str(event.shop_id), deliveries=delivered)

    @handle(ShopCreated)
    def on_shop_created(self, event: ShopCreated) -> None:
        self._publish(event)

    @handle(ShopDetailsUpdated)
    def on_shop_details_updated(self, event: ShopDetailsUpdated) -> None:
        self._publish(event)

    @handle(ShopImageUpdated)
    def on_shop_image_updated(self, event: ShopImageUpdated) -> None:
        self._publish(event)

    @handle(ShopOperatingStatusChanged)
    def on_operating_status_changed(self, event: ShopOperatingStatusChanged) -> None:
        self._publish(event)

    @handle(ProductAdded)
    def on_product_added(self, event: ProductAdded) -> None:
        self._publish(event)

    @handle(ProductDetailsUpdated)
    def on_product_details_updated(self, event: ProductDetailsUpdated) -> None:
        self._publish(event)

    @handle(ProductImageUpdated)
    def on_product_image_updated(self, event: ProductImageUpdated) -> None:
        self._publish(event)

    @handle(ProductRemoved)
    def on_product_removed(self, event: ProductRemoved) -> None:
        self._publish(event)

    @handle(ProductsReordered)
    def on_products_reordered(self, event: ProductsReordered) -> None:
        self._publish(event)

    @handle(ProductStockChanged)
    def on_product_stock_changed(self, event: ProductStockChanged) -> None:
        self._publish(event)


@storefront.event_handler(part_of=Order)
class OrderSnapshotPublisher:
    def _publish(self, event) -> None:
        hub = get_hub()
        delivered = hub.publish(ObservationTopic.ORDERS_BY_CUSTOMER, event.customer_id)
        delivered += hub.publish(ObservationTopic.ORDERS_BY_SHOP, event.shop_id)
        logger.debug("order_snapshot_published", order_id=str(event.order_id), deliveries=delivered)

    @handle(OrderPlaced)
    def on_order_placed(self, event: OrderPlaced) -> None:
        self._publish(event)

    @handle(OrderPreparing)
    def on_order_preparing(self, event: OrderPreparing) -> None:
        self._publish(event)

    @handle(OrderReady)
    def on_order_ready(self, event: OrderReady) -> None:
        self._publish(event)

    @handle(OrderCollected)
    def on_order_collected(self, event: OrderCollected) -> None:
        self._publish(event)

    @handle(OrderCancelled)
    def on_order_cancelled(self, event: OrderCancelled) -> None:
        self._publish(event)
