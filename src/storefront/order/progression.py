"""Vendor-side order progression: preparing, ready, collected."""

from protean import handle
from protean.fields import Identifier
from protean.utils.globals import current_domain

from storefront.domain import storefront
from storefront.order.order import Order, OrderStatus
from storefront.shop.shop import Shop
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


@storefront.command(part_of="Order")
class StartPreparingOrder:
    order_id = Identifier(required=True)
    vendor_id = Identifier(required=True)


@storefront.command(part_of="Order")
class MarkOrderReady:
    order_id = Identifier(required=True)
    vendor_id = Identifier(required=True)


@storefront.command(part_of="Order")
class MarkOrderCollected:
    order_id = Identifier(required=True)
    vendor_id = Identifier(required=True)


@storefront.command_handler(part_of=Order)
class OrderProgressionHandler:
    def _advance(self, command, target_status):
        repo = current_domain.repository_for(Order)
        order = repo.get(command.order_id)

        shop = current_domain.repository_for(Shop).get(order.shop_id)
        shop.assert_owned_by(command.vendor_id)

        order.advance_to(target_status)
        repo.add(order)
        logger.info("order_advanced", order_id=str(order.id), status=order.status)

    @handle(StartPreparingOrder)
    def start_preparing(self, command):
        self._advance(command, OrderStatus.PREPARING)

    @handle(MarkOrderReady)
    def mark_ready(self, command):
        self._advance(command, OrderStatus.READY)

    @handle(MarkOrderCollected)
    def mark_collected(self, command):
        self._advance(command, OrderStatus.COLLECTED)
