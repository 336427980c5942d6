"""Vendor session: running one shop and its order board."""

from protean.exceptions import ObjectNotFoundError

from storefront.gateway.port import ProductData
from storefront.order.order import OrderStatus
from storefront.order.views import OrderViews
from storefront.session.base import Session
from storefront.shop.catalog import group_catalog


class VendorSession(Session):
    """Vendors run a single shop: the first one they opened.

    ``current_shop`` stays ``None`` until the first snapshot containing a shop
    arrives; operations that need a shop raise ``ObjectNotFoundError`` until
    then.
    """

    def __init__(self, account, gateway, auth) -> None:
        super().__init__(account, gateway, auth)
        self.shops: tuple = ()
        self.current_shop = None
        self.order_views = OrderViews()
        self._board = None
        self._watch(lambda cb: gateway.observe_shops_by_owner(self.account_id, cb), self._on_shops)

    # --- Snapshots ---

    def _on_shops(self, result) -> None:
        shops = self._accept(result, "shops")
        if shops is None:
            return

        self.shops = shops
        previous = self.current_shop
        self.current_shop = shops[0] if shops else None
        if self.current_shop is not None and (previous is None or str(previous.id) != str(self.current_shop.id)):
            self._watch_board(self.current_shop.id)

    def _watch_board(self, shop_id) -> None:
        if self._board is not None:
            self._board.cancel()
            self._subscriptions.remove(self._board)
        self._board = self.gateway.observe_orders_by_shop(shop_id, self._on_orders)
        self._subscriptions.append(self._board)

    def close(self) -> None:
        super().close()
        self._board = None

    def _on_orders(self, result) -> None:
        views = self._accept(result, "orders")
        if views is not None:
            self.order_views = views

    def _require_shop(self):
        if self.current_shop is None:
            raise ObjectNotFoundError({"shop": ["You have not opened a shop yet"]})
        return self.current_shop

    # --- Views ---

    @property
    def shop_name(self) -> str:
        return self.current_shop.name if self.current_shop is not None else "My Shop"

    def catalog(self, location_name=None):
        return group_catalog(self._require_shop(), location_name)

    # --- Shop intents ---

    def create_shop(self, name, description, image_bytes=None) -> str:
        return self.gateway.create_shop(self.account_id, name, description, image_bytes).unwrap()

    def edit_shop(self, name, description, location, category_titles, image_bytes=None) -> None:
        shop = self._require_shop()
        self.gateway.edit_shop(
            shop.id,
            self.account_id,
            name,
            description,
            location,
            category_titles,
            image_bytes,
        ).unwrap()

    def set_closed(self, is_closed: bool) -> None:
        self.gateway.set_shop_closed(self._require_shop().id, self.account_id, is_closed).unwrap()

    # --- Product intents ---

    def create_product(self, product_data: ProductData, image_bytes=None) -> str:
        shop = self._require_shop()
        return self.gateway.create_product(shop.id, self.account_id, product_data, image_bytes).unwrap()

    def edit_product(self, product_id, product_data: ProductData, image_bytes=None) -> None:
        shop = self._require_shop()
        self.gateway.edit_product(shop.id, self.account_id, product_id, product_data, image_bytes).unwrap()

    def delete_product(self, product_id) -> None:
        self.gateway.delete_product(self._require_shop().id, self.account_id, product_id).unwrap()

    def delete_products(self, category_index, positions) -> None:
        """Delete the products shown at ``positions`` within one category."""
        self.gateway.delete_products(self._require_shop().id, self.account_id, category_index, positions).unwrap()

    def move_products(self, category_index, source_positions, destination) -> None:
        shop = self._require_shop()
        self.gateway.move_products(shop.id, self.account_id, category_index, source_positions, destination).unwrap()

    def set_product_stock(self, product_id, is_out_of_stock: bool) -> None:
        shop = self._require_shop()
        self.gateway.set_product_stock(shop.id, self.account_id, product_id, is_out_of_stock).unwrap()

    # --- Order intents ---

    def advance_order(self, order_id, target_status: OrderStatus) -> None:
        self.gateway.advance_order(order_id, self.account_id, target_status).unwrap()
