"""Persistence gateway port (abstract interface).

The single seam between client-facing sessions and whatever stores shops,
orders and accounts. Writes return a ``GatewayResult``; observations return a
``Subscription`` and deliver ``GatewayResult`` values to their callback, first
immediately and then after every relevant change.
"""

from abc import ABC, abstractmethod
from collections.abc import Callable
from dataclasses import dataclass

from storefront.observation.hub import Subscription
from storefront.shared.result import GatewayResult, failed, ok

__all__ = ["GatewayResult", "PersistenceGateway", "ProductData", "failed", "ok"]


@dataclass(frozen=True)
class ProductData:
    """Vendor-entered product fields, shared by create and edit."""

    name: str
    price: float
    category_index: int
    description: str | None = None
    estimated_prep_time: float = 0.0


class PersistenceGateway(ABC):
    # --- Shops ---

    @abstractmethod
    def create_shop(self, owner_id, name, description, image_bytes=None) -> GatewayResult:
        """Create an open, empty shop. The value is the new shop id."""
        ...

    @abstractmethod
    def edit_shop(
        self,
        shop_id,
        owner_id,
        name,
        description,
        location,
        category_titles,
        image_bytes=None,
    ) -> GatewayResult:
        ...

    @abstractmethod
    def set_shop_closed(self, shop_id, owner_id, is_closed: bool) -> GatewayResult:
        ...

    @abstractmethod
    def get_shop_image(self, shop_id) -> GatewayResult:
        """Fetch the stored shop image. The value is the image bytes."""
        ...

    @abstractmethod
    def observe_shops_by_owner(self, owner_id, callback: Callable[[GatewayResult], None]) -> Subscription:
        ...

    @abstractmethod
    def observe_shops(self, callback: Callable[[GatewayResult], None]) -> Subscription:
        """Observe every shop, for customers browsing."""
        ...

    # --- Products ---

    @abstractmethod
    def create_product(self, shop_id, owner_id, product_data: ProductData, image_bytes=None) -> GatewayResult:
        """Add a product to a shop. The value is the new product id."""
        ...

    @abstractmethod
    def edit_product(self, shop_id, owner_id, product_id, product_data: ProductData, image_bytes=None) -> GatewayResult:
        ...

    @abstractmethod
    def delete_product(self, shop_id, owner_id, product_id) -> GatewayResult:
        ...

    @abstractmethod
    def delete_products(self, shop_id, owner_id, category_index, positions) -> GatewayResult:
        """Remove the products at ``positions`` within one category in a single write."""
        ...

    @abstractmethod
    def move_products(self, shop_id, owner_id, category_index, source_positions, destination) -> GatewayResult:
        ...

    @abstractmethod
    def set_product_stock(self, shop_id, owner_id, product_id, is_out_of_stock: bool) -> GatewayResult:
        ...

    # --- Orders ---

    @abstractmethod
    def create_order(self, customer_id, shop_id, product_id, quantity, option_choices=None) -> GatewayResult:
        """Place an order. The value is the new order id."""
        ...

    @abstractmethod
    def cancel_order(self, order_id, customer_id) -> GatewayResult:
        ...

    @abstractmethod
    def advance_order(self, order_id, vendor_id, target_status) -> GatewayResult:
        ...

    @abstractmethod
    def observe_orders_by_customer(self, customer_id, callback: Callable[[GatewayResult], None]) -> Subscription:
        ...

    @abstractmethod
    def observe_orders_by_shop(self, shop_id, callback: Callable[[GatewayResult], None]) -> Subscription:
        ...

    # --- Accounts ---

    @abstractmethod
    def get_account(self, account_id) -> GatewayResult:
        ...

    @abstractmethod
    def toggle_favourite(self, customer_id, product_id) -> GatewayResult:
        """Flip a product in a customer's favourites. The value is True when it is now a favourite."""
        ...
