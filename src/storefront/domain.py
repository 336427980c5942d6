"""Storefront bounded context: shops, catalogues and pickup orders.

Vendors run a shop (categories, products, opening state) and work through the
orders placed against it; customers browse catalogues, place orders, keep
favourites and follow their orders from acceptance to collection.
"""

from protean.domain import Domain

from storefront.utils.logging import configure_logging, get_logger

# Configure logging for the application
configure_logging()

# Get logger for this module
logger = get_logger(__name__)

# Domain Composition Root
storefront = Domain(name="storefront")
