"""Domain events for the Shop aggregate.

Every event carries the shop id and its owner so subscribers keyed by either
can react without loading the shop.
"""

from protean.fields import Boolean, DateTime, Float, Identifier, Integer, String, Text

from storefront.domain import storefront


@storefront.event(part_of="Shop")
class ShopCreated:
    """A vendor opened a new shop."""

    __version__ = 1

    shop_id = Identifier(required=True)
    owner_id = Identifier(required=True)
    name = String(required=True)
    created_at = DateTime(required=True)


@storefront.event(part_of="Shop")
class ShopDetailsUpdated:
    """Name, description, location or categories of a shop changed."""

    __version__ = 1

    shop_id = Identifier(required=True)
    owner_id = Identifier(required=True)
    name = String(required=True)
    description = Text()
    location_id = Identifier()
    category_titles = Text()  # JSON array, in ordering-index order


@storefront.event(part_of="Shop")
class ShopImageUpdated:
    __version__ = 1

    shop_id = Identifier(required=True)
    owner_id = Identifier(required=True)
    image_url = String(required=True)


@storefront.event(part_of="Shop")
class ShopOperatingStatusChanged:
    """A shop was opened for orders or closed to them."""

    __version__ = 1

    shop_id = Identifier(required=True)
    owner_id = Identifier(required=True)
    is_closed = Boolean(required=True)
    changed_at = DateTime(required=True)


@storefront.event(part_of="Shop")
class ProductAdded:
    __version__ = 1

    shop_id = Identifier(required=True)
    owner_id = Identifier(required=True)
    product_id = Identifier(required=True)
    name = String(required=True)
    price = Float(required=True)
    category_index = Integer(required=True)


@storefront.event(part_of="Shop")
class ProductDetailsUpdated:
    __version__ = 1

    shop_id = Identifier(required=True)
    owner_id = Identifier(required=True)
    product_id = Identifier(required=True)
    name = String(required=True)
    price = Float(required=True)
    category_index = Integer(required=True)


@storefront.event(part_of="Shop")
class ProductImageUpdated:
    __version__ = 1

    shop_id = Identifier(required=True)
    owner_id = Identifier(required=True)
    product_id = Identifier(required=True)
    image_url = String(required=True)


@storefront.event(part_of="Shop")
class ProductRemoved:
    """A product was taken off the shop's menu. Past orders keep their snapshot."""

    __version__ = 1

    shop_id = Identifier(required=True)
    owner_id = Identifier(required=True)
    product_id = Identifier(required=True)


@storefront.event(part_of="Shop")
class ProductsReordered:
    __version__ = 1

    shop_id = Identifier(required=True)
    owner_id = Identifier(required=True)
    category_index = Integer(required=True)
    product_ids = Text(required=True)  # JSON array, new display order


@storefront.event(part_of="Shop")
class ProductStockChanged:
    __version__ = 1

    shop_id = Identifier(required=True)
    owner_id = Identifier(required=True)
    product_id = Identifier(required=True)
    is_out_of_stock = Boolean(required=True)
