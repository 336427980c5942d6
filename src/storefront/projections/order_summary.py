"""Order summary: one row per order for shop order boards."""

from protean.core.projector import on
from protean.fields import DateTime, Float, Identifier, Integer, String
from protean.utils.globals import current_domain

from storefront.domain import storefront
from storefront.order.events import (
    OrderCancelled,
    OrderCollected,
    OrderPlaced,
    OrderPreparing,
    OrderReady,
)
from storefront.order.order import Order, OrderStatus


@storefront.projection
class OrderSummary:
    order_id = Identifier(identifier=True, required=True)
    shop_id = Identifier(required=True)
    shop_name = String(max_length=100)
    customer_id = Identifier(required=True)
    collection_no = Integer(required=True)
    status = String(required=True)
    total = Float(default=0.0)
    item_count = Integer(default=0)
    placed_at = DateTime()
    updated_at = DateTime()


@storefront.projector(projector_for=OrderSummary, aggregates=[Order])
class OrderSummaryProjector:
    @on(OrderPlaced)
    def on_order_placed(self, event):
        current_domain.repository_for(OrderSummary).add(
            OrderSummary(
                order_id=event.order_id,
                shop_id=event.shop_id,
                shop_name=event.shop_name,
                customer_id=event.customer_id,
                collection_no=event.collection_no,
                status=OrderStatus.ACCEPTED.value,
                total=event.total,
                item_count=event.quantity,
                placed_at=event.placed_at,
                updated_at=event.placed_at,
            )
        )

    def _update_status(self, order_id, status, updated_at):
        repo = current_domain.repository_for(OrderSummary)
        record = repo.get(order_id)
        record.status = status.value
        record.updated_at = updated_at
        repo.add(record)

    @on(OrderPreparing)
    def on_order_preparing(self, event):
        self._update_status(event.order_id, OrderStatus.PREPARING, event.started_at)

    @on(OrderReady)
    def on_order_ready(self, event):
        self._update_status(event.order_id, OrderStatus.READY, event.ready_at)

    @on(OrderCollected)
    def on_order_collected(self, event):
        self._update_status(event.order_id, OrderStatus.COLLECTED, event.collected_at)

    @on(OrderCancelled)
    def on_order_cancelled(self, event):
        self._update_status(event.order_id, OrderStatus.CANCELLED, event.cancelled_at)
