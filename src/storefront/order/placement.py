"""Order placement: command and handler."""

import json

from protean import handle
from protean.fields import Identifier, Integer, Text
from protean.utils.globals import current_domain

from storefront.account.account import Account, AccountRole
from storefront.domain import storefront
from storefront.order.counter import CollectionCounter, counter_for
from storefront.order.order import Order, check_quantity
from storefront.shop.shop import Shop
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


@storefront.command(part_of="Order")
class PlaceOrder:
    customer_id = Identifier(required=True)
    shop_id = Identifier(required=True)
    product_id = Identifier(required=True)
    quantity = Integer(required=True)
    option_choices = Text()  # JSON array of {description, cost}


@storefront.command_handler(part_of=Order)
class PlaceOrderHandler:
    @handle(PlaceOrder)
    def place_order(self, command):
        check_quantity(command.quantity)

        customer = current_domain.repository_for(Account).get(command.customer_id)
        customer.assert_role(AccountRole.CUSTOMER, "place orders")

        shop = current_domain.repository_for(Shop).get(command.shop_id)
        shop.ensure_accepting_orders()
        product = shop.product_snapshot(command.product_id)

        choices = json.loads(command.option_choices) if command.option_choices else []

        counter = counter_for(shop.id)
        collection_no = counter.next_number()

        order = Order.place(
            customer_id=command.customer_id,
            shop_id=shop.id,
            shop_name=shop.name,
            collection_no=collection_no,
            product=product,
            quantity=command.quantity,
            option_choices=choices,
        )

        current_domain.repository_for(CollectionCounter).add(counter)
        current_domain.repository_for(Order).add(order)
        logger.info(
            "order_placed",
            order_id=str(order.id),
            shop_id=str(shop.id),
            collection_no=collection_no,
        )
        return str(order.id)
