"""Read-side views of orders: current orders versus order history.

An order is *current* while the shop is still working on it or it waits for
pickup, and part of the *history* once collected or cancelled. Both lists run
newest first.
"""

from dataclasses import dataclass
from datetime import datetime

from storefront.order.order import ACTIVE_STATUSES, OrderStatus


@dataclass(frozen=True)
class OrderLineView:
    product_id: str
    product_name: str
    product_price: float
    quantity: int
    option_choices: tuple[tuple[str, float], ...]
    status: str
    total: float


@dataclass(frozen=True)
class OrderView:
    order_id: str
    customer_id: str
    shop_id: str
    shop_name: str
    status: str
    date: datetime
    collection_no: int
    lines: tuple[OrderLineView, ...]
    total: float

    @property
    def is_current(self) -> bool:
        return OrderStatus(self.status) in ACTIVE_STATUSES

    @classmethod
    def from_order(cls, order) -> "OrderView":
        lines = tuple(
            OrderLineView(
                product_id=str(line.product_id),
                product_name=line.product_name,
                product_price=line.product_price,
                quantity=line.quantity,
                option_choices=tuple((c["description"], float(c.get("cost") or 0.0)) for c in line.choices()),
                status=line.status,
                total=line.total,
            )
            for line in order.ordered_lines()
        )
        return cls(
            order_id=str(order.id),
            customer_id=str(order.customer_id),
            shop_id=str(order.shop_id),
            shop_name=order.shop_name,
            status=order.status,
            date=order.date,
            collection_no=order.collection_no,
            lines=lines,
            total=sum(line.total for line in lines),
        )


@dataclass(frozen=True)
class OrderViews:
    current: tuple[OrderView, ...] = ()
    history: tuple[OrderView, ...] = ()

    def all(self) -> tuple[OrderView, ...]:
        return self.current + self.history

    def find(self, order_id) -> OrderView | None:
        return next((view for view in self.all() if view.order_id == str(order_id)), None)


def partition_orders(orders) -> OrderViews:
    """Split orders into current and history, each sorted by date descending.

    Accepts Order aggregates or ready-made ``OrderView``s. Every order lands in
    exactly one of the two tuples.
    """
    views = [order if isinstance(order, OrderView) else OrderView.from_order(order) for order in orders]
    views.sort(key=lambda view: view.date, reverse=True)
    return OrderViews(
        current=tuple(view for view in views if view.is_current),
        history=tuple(view for view in views if not view.is_current),
    )
