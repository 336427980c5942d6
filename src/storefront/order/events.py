"""Domain events for the Order aggregate.

Each status change is its own event. Shop and customer ids travel with every
event so both sides of an order can follow it.
"""

from protean.fields import DateTime, Float, Identifier, Integer, String

from storefront.domain import storefront


@storefront.event(part_of="Order")
class OrderPlaced:
    """A customer placed an order and the shop accepted it."""

    __version__ = 1

    order_id = Identifier(required=True)
    customer_id = Identifier(required=True)
    shop_id = Identifier(required=True)
    shop_name = String(required=True)
    collection_no = Integer(required=True)
    product_id = Identifier(required=True)
    product_name = String(required=True)
    quantity = Integer(required=True)
    total = Float(required=True)
    placed_at = DateTime(required=True)


@storefront.event(part_of="Order")
class OrderPreparing:
    """The shop started preparing an order."""

    __version__ = 1

    order_id = Identifier(required=True)
    customer_id = Identifier(required=True)
    shop_id = Identifier(required=True)
    started_at = DateTime(required=True)


@storefront.event(part_of="Order")
class OrderReady:
    """An order is waiting at the counter under its collection number."""

    __version__ = 1

    order_id = Identifier(required=True)
    customer_id = Identifier(required=True)
    shop_id = Identifier(required=True)
    collection_no = Integer(required=True)
    ready_at = DateTime(required=True)


@storefront.event(part_of="Order")
class OrderCollected:
    __version__ = 1

    order_id = Identifier(required=True)
    customer_id = Identifier(required=True)
    shop_id = Identifier(required=True)
    collected_at = DateTime(required=True)


@storefront.event(part_of="Order")
class OrderCancelled:
    """The customer cancelled an order before collecting it."""

    __version__ = 1

    order_id = Identifier(required=True)
    customer_id = Identifier(required=True)
    shop_id = Identifier(required=True)
    cancelled_at = DateTime(required=True)
