"""Repository for the Order aggregate."""

from storefront.domain import storefront
from storefront.order.order import Order


@storefront.repository(part_of=Order)
class OrderRepository:
    def find_by_customer(self, customer_id) -> list[Order]:
        orders = self._dao.query.filter(customer_id=str(customer_id)).all().items
        return [self.get(order.id) for order in orders]

    def find_by_shop(self, shop_id) -> list[Order]:
        orders = self._dao.query.filter(shop_id=str(shop_id)).all().items
        return [self.get(order.id) for order in orders]
