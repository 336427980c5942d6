"""Storefront domain API package."""

from storefront.api.routes import account_router, location_router, order_router, shop_router

__all__ = ["account_router", "location_router", "order_router", "shop_router"]
