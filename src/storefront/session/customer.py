"""Customer session: browsing shops, ordering and keeping favourites."""

from protean.exceptions import ObjectNotFoundError

from storefront.account.favourites import favourite_products
from storefront.order.views import OrderViews
from storefront.session.base import Session
from storefront.shop.catalog import group_catalog


class CustomerSession(Session):
    def __init__(self, account, gateway, auth) -> None:
        super().__init__(account, gateway, auth)
        self.shops: tuple = ()
        self.order_views = OrderViews()
        self.favourites: frozenset = account.favourite_ids()
        self._watch(gateway.observe_shops, self._on_shops)
        self._watch(lambda cb: gateway.observe_orders_by_customer(self.account_id, cb), self._on_orders)

    def _on_shops(self, result) -> None:
        shops = self._accept(result, "shops")
        if shops is not None:
            self.shops = shops

    def _on_orders(self, result) -> None:
        views = self._accept(result, "orders")
        if views is not None:
            self.order_views = views

    # --- Views ---

    @property
    def current_orders(self):
        return self.order_views.current

    @property
    def order_history(self):
        return self.order_views.history

    def shop(self, shop_id):
        shop = next((s for s in self.shops if str(s.id) == str(shop_id)), None)
        if shop is None:
            raise ObjectNotFoundError({"shop": [f"Shop {shop_id} does not exist"]})
        return shop

    def catalog(self, shop_id, location_name=None):
        return group_catalog(self.shop(shop_id), location_name)

    def is_favourite(self, product_id) -> bool:
        return str(product_id) in self.favourites

    def favourite_products(self) -> tuple:
        return favourite_products(self.favourites, self.shops)

    # --- Intents ---

    def place_order(self, shop_id, product_id, quantity, option_choices=None) -> str:
        return self.gateway.create_order(self.account_id, shop_id, product_id, quantity, option_choices).unwrap()

    def cancel_order(self, order_id) -> None:
        self.gateway.cancel_order(order_id, self.account_id).unwrap()

    def toggle_favourite(self, product_id) -> bool:
        is_favourite = self.gateway.toggle_favourite(self.account_id, product_id).unwrap()
        if is_favourite:
            self.favourites = self.favourites | {str(product_id)}
        else:
            self.favourites = self.favourites - {str(product_id)}
        return is_favourite
