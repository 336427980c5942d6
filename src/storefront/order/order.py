"""Order aggregate: a customer's pickup order at one shop.

State machine:
    ACCEPTED -> PREPARING -> READY -> COLLECTED
    ACCEPTED -> READY | COLLECTED, PREPARING -> COLLECTED (steps may be skipped)
    CANCELLED from any active state

Collected and cancelled orders are terminal. Only the customer who placed an
order can cancel it; progression is the shop owner's job. Every line carries
its own status, which follows the order's.
"""

import json
from datetime import UTC, datetime
from enum import Enum

from protean import atomic_change, invariant
from protean.exceptions import ValidationError
from protean.fields import DateTime, Float, HasMany, Identifier, Integer, String, Text

from storefront.domain import storefront
from storefront.order.events import (
    OrderCancelled,
    OrderCollected,
    OrderPlaced,
    OrderPreparing,
    OrderReady,
)
from storefront.shared.errors import InvalidTransition

MIN_QUANTITY = 1
MAX_QUANTITY = 1000


class OrderStatus(Enum):
    ACCEPTED = "Accepted"
    PREPARING = "Preparing"
    READY = "Ready"
    COLLECTED = "Collected"
    CANCELLED = "Cancelled"


ACTIVE_STATUSES = frozenset({OrderStatus.ACCEPTED, OrderStatus.PREPARING, OrderStatus.READY})
TERMINAL_STATUSES = frozenset({OrderStatus.COLLECTED, OrderStatus.CANCELLED})

# State machine transition map
_VALID_TRANSITIONS = {
    OrderStatus.ACCEPTED: {
        OrderStatus.PREPARING,
        OrderStatus.READY,
        OrderStatus.COLLECTED,
        OrderStatus.CANCELLED,
    },
    OrderStatus.PREPARING: {OrderStatus.READY, OrderStatus.COLLECTED, OrderStatus.CANCELLED},
    OrderStatus.READY: {OrderStatus.COLLECTED, OrderStatus.CANCELLED},
    OrderStatus.COLLECTED: set(),  # Terminal
    OrderStatus.CANCELLED: set(),  # Terminal
}


def can_transition(current: OrderStatus, target: OrderStatus) -> bool:
    return target in _VALID_TRANSITIONS[current]


def check_quantity(quantity):
    if quantity is None or not MIN_QUANTITY <= quantity <= MAX_QUANTITY:
        raise ValidationError({"quantity": [f"Quantity must be between {MIN_QUANTITY} and {MAX_QUANTITY}"]})


def normalise_choices(option_choices):
    """Validate option choices and return them as plain {description, cost} dicts."""
    normalised = []
    for choice in option_choices or []:
        description = (choice.get("description") or "").strip()
        cost = float(choice.get("cost") or 0.0)
        if not description:
            raise ValidationError({"option_choices": ["Option description cannot be empty"]})
        if cost < 0:
            raise ValidationError({"option_choices": [f"Option '{description}' cannot cost less than 0"]})
        normalised.append({"description": description, "cost": cost})
    return normalised


@storefront.entity(part_of="Order")
class OrderProduct:
    """One line of an order.

    Name and price are copied from the product when the order is placed, so the
    line reads the same after the vendor edits or removes the product.
    """

    product_id = Identifier(required=True)
    product_name = String(required=True, max_length=150)
    product_price = Float(required=True, min_value=0.0)
    quantity = Integer(required=True, min_value=MIN_QUANTITY, max_value=MAX_QUANTITY)
    option_choices = Text()  # JSON array of {description, cost}
    status = String(choices=OrderStatus, default=OrderStatus.ACCEPTED.value)
    line_index = Integer(default=0)

    def choices(self):
        return json.loads(self.option_choices) if self.option_choices else []

    @property
    def total(self):
        options = sum(float(choice.get("cost") or 0.0) for choice in self.choices())
        return self.product_price * self.quantity + options


@storefront.aggregate
class Order:
    customer_id = Identifier(required=True)
    shop_id = Identifier(required=True)
    shop_name = String(required=True, max_length=100)
    status = String(choices=OrderStatus, default=OrderStatus.ACCEPTED.value)
    order_products = HasMany(OrderProduct)
    collection_no = Integer(required=True, min_value=1)
    date = DateTime(required=True)
    cancellation_note = Text()
    updated_at = DateTime()

    @invariant.post
    def lines_follow_order_status(self):
        for line in self.order_products:
            if line.status != self.status:
                raise ValidationError({"order_products": ["Order lines must share the order's status"]})

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @classmethod
    def place(cls, customer_id, shop_id, shop_name, collection_no, product, quantity, option_choices=None):
        """Accept a single-line order for ``product``.

        ``product`` is the shop's Product entity; its name and price are
        snapshotted onto the line.
        """
        check_quantity(quantity)

        now = datetime.now(UTC)
        order = cls(
            customer_id=customer_id,
            shop_id=shop_id,
            shop_name=shop_name,
            status=OrderStatus.ACCEPTED.value,
            collection_no=collection_no,
            date=now,
            updated_at=now,
        )
        order.add_order_products(
            OrderProduct(
                product_id=str(product.id),
                product_name=product.name,
                product_price=product.price,
                quantity=quantity,
                option_choices=json.dumps(normalise_choices(option_choices)),
                status=OrderStatus.ACCEPTED.value,
                line_index=0,
            )
        )

        order.raise_(
            OrderPlaced(
                order_id=str(order.id),
                customer_id=str(customer_id),
                shop_id=str(shop_id),
                shop_name=shop_name,
                collection_no=collection_no,
                product_id=str(product.id),
                product_name=product.name,
                quantity=quantity,
                total=order.total,
                placed_at=now,
            )
        )
        return order

    # -------------------------------------------------------------------
    # Derived values
    # -------------------------------------------------------------------
    @property
    def total(self):
        return sum(line.total for line in self.order_products)

    def ordered_lines(self):
        return sorted(self.order_products, key=lambda line: line.line_index)

    def is_active(self):
        return OrderStatus(self.status) in ACTIVE_STATUSES

    # -------------------------------------------------------------------
    # State machine
    # -------------------------------------------------------------------
    def _assert_can_transition(self, target_status):
        current = OrderStatus(self.status)
        if not can_transition(current, target_status):
            raise InvalidTransition(current.value, target_status.value)

    def _move_to(self, target_status):
        now = datetime.now(UTC)
        with atomic_change(self):
            self.status = target_status.value
            for line in self.order_products:
                line.status = target_status.value
            self.updated_at = now
        return now

    def cancel(self, customer_id, note=None):
        """Cancel on behalf of the customer who placed the order."""
        self._assert_can_transition(OrderStatus.CANCELLED)
        if str(customer_id) != str(self.customer_id):
            raise ValidationError({"customer_id": ["Only the customer who placed the order can cancel it"]})

        self.cancellation_note = note
        now = self._move_to(OrderStatus.CANCELLED)
        self.raise_(
            OrderCancelled(
                order_id=str(self.id),
                customer_id=str(self.customer_id),
                shop_id=str(self.shop_id),
                cancelled_at=now,
            )
        )

    def start_preparing(self):
        self._assert_can_transition(OrderStatus.PREPARING)
        now = self._move_to(OrderStatus.PREPARING)
        self.raise_(
            OrderPreparing(
                order_id=str(self.id),
                customer_id=str(self.customer_id),
                shop_id=str(self.shop_id),
                started_at=now,
            )
        )

    def mark_ready(self):
        self._assert_can_transition(OrderStatus.READY)
        now = self._move_to(OrderStatus.READY)
        self.raise_(
            OrderReady(
                order_id=str(self.id),
                customer_id=str(self.customer_id),
                shop_id=str(self.shop_id),
                collection_no=self.collection_no,
                ready_at=now,
            )
        )

    def mark_collected(self):
        self._assert_can_transition(OrderStatus.COLLECTED)
        now = self._move_to(OrderStatus.COLLECTED)
        self.raise_(
            OrderCollected(
                order_id=str(self.id),
                customer_id=str(self.customer_id),
                shop_id=str(self.shop_id),
                collected_at=now,
            )
        )

    def advance_to(self, target_status):
        """Vendor-side progression to ``target_status``."""
        target = OrderStatus(target_status)
        transitions = {
            OrderStatus.PREPARING: self.start_preparing,
            OrderStatus.READY: self.mark_ready,
            OrderStatus.COLLECTED: self.mark_collected,
        }
        if target not in transitions:
            raise InvalidTransition(self.status, target.value)
        transitions[target]()
