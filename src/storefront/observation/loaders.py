"""Snapshot loaders: how each observation topic turns a key into a view."""

from protean.utils.globals import current_domain

from storefront.observation.hub import ObservationTopic
from storefront.order.order import Order
from storefront.order.views import OrderViews, partition_orders
from storefront.shop.shop import Shop


def shops_by_owner(owner_id) -> tuple:
    return tuple(current_domain.repository_for(Shop).find_by_owner(owner_id))


def all_shops(_key=None) -> tuple:
    return tuple(current_domain.repository_for(Shop).list_all())


def orders_by_customer(customer_id) -> OrderViews:
    return partition_orders(current_domain.repository_for(Order).find_by_customer(customer_id))


def orders_by_shop(shop_id) -> OrderViews:
    return partition_orders(current_domain.repository_for(Order).find_by_shop(shop_id))


DEFAULT_LOADERS = {
    ObservationTopic.SHOPS_BY_OWNER: shops_by_owner,
    ObservationTopic.ALL_SHOPS: all_shops,
    ObservationTopic.ORDERS_BY_CUSTOMER: orders_by_customer,
    ObservationTopic.ORDERS_BY_SHOP: orders_by_shop,
}
