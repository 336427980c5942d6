"""Shop aggregate root with its ShopCategory and Product entities.

A shop owns its menu. Products are entities of the shop rather than
aggregates of their own, so every catalogue rule (a product sits in exactly
one existing category, display order is per category, a closed shop takes no
orders) is enforced inside one transactional boundary.

Categories are addressed by their ordering index. Editing a shop renames
categories in place, appends new ones and drops trailing ones; a category can
only be dropped once it holds no products.
"""

import json
from datetime import UTC, datetime

from protean import atomic_change, invariant
from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.fields import Boolean, DateTime, Float, HasMany, Identifier, Integer, String, Text

from storefront.domain import storefront
from storefront.shared.errors import ShopClosed
from storefront.shop.events import (
    ProductAdded,
    ProductDetailsUpdated,
    ProductImageUpdated,
    ProductRemoved,
    ProductsReordered,
    ProductStockChanged,
    ShopCreated,
    ShopDetailsUpdated,
    ShopImageUpdated,
    ShopOperatingStatusChanged,
)

# Sentinel for distinguishing "not provided" from None in partial updates
_UNSET = object()


@storefront.entity(part_of="Shop")
class ShopCategory:
    title = String(required=True, max_length=100)
    ordering_index = Integer(required=True, min_value=0)


@storefront.entity(part_of="Shop")
class Product:
    """An item on a shop's menu.

    ``display_order`` orders a product inside its category; ``position`` is
    its place in the shop's overall sold-products sequence.
    """

    name = String(required=True, max_length=150)
    shop_name = String(max_length=100)
    description = Text()
    price = Float(required=True, min_value=0.0)
    image_url = String(max_length=500)
    estimated_prep_time = Float(default=0.0, min_value=0.0)  # minutes
    is_out_of_stock = Boolean(default=False)
    category_index = Integer(required=True, min_value=0)
    display_order = Integer(default=0)
    position = Integer(default=0)


@storefront.aggregate
class Shop:
    name = String(required=True, max_length=100)
    description = Text()
    image_url = String(max_length=500)
    location_id = Identifier()
    is_closed = Boolean(default=False)
    owner_id = Identifier(required=True)
    categories = HasMany(ShopCategory)
    products = HasMany(Product)
    created_at = DateTime()
    updated_at = DateTime()

    @invariant.post
    def category_titles_must_be_unique_and_non_blank(self):
        titles = [category.title.strip() for category in self.categories]
        if any(not title for title in titles):
            raise ValidationError({"categories": ["Shop category cannot be blank"]})
        if len(set(titles)) != len(titles):
            raise ValidationError({"categories": ["Shop category cannot be repeated"]})

    @invariant.post
    def products_must_belong_to_an_existing_category(self):
        indices = {category.ordering_index for category in self.categories}
        for product in self.products:
            if product.category_index not in indices:
                raise ValidationError(
                    {"category_index": [f"Product '{product.name}' refers to unknown category {product.category_index}"]}
                )

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @classmethod
    def create(cls, owner_id, name, description=None, location_id=None):
        if not name or not name.strip():
            raise ValidationError({"name": ["Shop name cannot be empty"]})

        now = datetime.now(UTC)
        shop = cls(
            owner_id=owner_id,
            name=name.strip(),
            description=description,
            location_id=location_id,
            is_closed=False,
            created_at=now,
            updated_at=now,
        )
        shop.raise_(
            ShopCreated(
                shop_id=str(shop.id),
                owner_id=str(owner_id),
                name=shop.name,
                created_at=now,
            )
        )
        return shop

    # -------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------
    def ordered_categories(self):
        return sorted(self.categories, key=lambda category: category.ordering_index)

    def category_titles(self):
        return [category.title for category in self.ordered_categories()]

    def sold_products(self):
        """Products in the order they were added to the menu."""
        return sorted(self.products, key=lambda product: product.position)

    def category_products(self, category_index):
        """Products of one category in display order."""
        return sorted(
            (product for product in self.products if product.category_index == category_index),
            key=lambda product: product.display_order,
        )

    def find_product(self, product_id):
        product = next((p for p in self.products if str(p.id) == str(product_id)), None)
        if product is None:
            raise ObjectNotFoundError({"product": [f"Product {product_id} is not sold by {self.name}"]})
        return product

    # -------------------------------------------------------------------
    # Guards
    # -------------------------------------------------------------------
    def assert_owned_by(self, account_id):
        if str(self.owner_id) != str(account_id):
            raise ValidationError({"owner_id": ["Only the shop owner can manage this shop"]})

    def ensure_accepting_orders(self):
        if self.is_closed:
            raise ShopClosed(self.name)

    def product_snapshot(self, product_id):
        """Return the product a customer is about to order, if it can be ordered."""
        product = self.find_product(product_id)
        if product.is_out_of_stock:
            raise ValidationError({"product_id": [f"{product.name} is out of stock"]})
        return product

    def _assert_category_exists(self, category_index):
        if category_index not in {category.ordering_index for category in self.categories}:
            raise ValidationError({"category_index": [f"Shop has no category at index {category_index}"]})

    # -------------------------------------------------------------------
    # Shop details
    # -------------------------------------------------------------------
    def update_details(self, name, description, location_id, category_titles):
        """Apply a validated edit.

        Callers run the edit rules first (see ``storefront.shop.editing``), so
        by now every title is non-blank and unique and every dropped category
        is empty.
        """
        titles = [title.strip() for title in category_titles]
        existing = self.ordered_categories()
        now = datetime.now(UTC)

        with atomic_change(self):
            self.name = name.strip()
            self.description = description
            self.location_id = location_id

            for category in existing[len(titles) :]:
                self.remove_categories(category)
            for index, title in enumerate(titles):
                if index < len(existing):
                    existing[index].title = title
                else:
                    self.add_categories(ShopCategory(title=title, ordering_index=index))

            for product in self.products:
                product.shop_name = self.name
            self.updated_at = now

        self.raise_(
            ShopDetailsUpdated(
                shop_id=str(self.id),
                owner_id=str(self.owner_id),
                name=self.name,
                description=description,
                location_id=location_id,
                category_titles=json.dumps(titles),
            )
        )

    def set_image(self, image_url):
        self.image_url = image_url
        self.updated_at = datetime.now(UTC)
        self.raise_(ShopImageUpdated(shop_id=str(self.id), owner_id=str(self.owner_id), image_url=image_url))

    def set_closed(self, is_closed):
        """Open or close the shop. Setting the current state again is a no-op."""
        if bool(self.is_closed) == bool(is_closed):
            return

        now = datetime.now(UTC)
        self.is_closed = is_closed
        self.updated_at = now
        self.raise_(
            ShopOperatingStatusChanged(
                shop_id=str(self.id),
                owner_id=str(self.owner_id),
                is_closed=is_closed,
                changed_at=now,
            )
        )

    # -------------------------------------------------------------------
    # Products
    # -------------------------------------------------------------------
    def add_product(self, name, price, category_index, description=None, estimated_prep_time=0.0):
        self._assert_category_exists(category_index)
        if price is None or price < 0:
            raise ValidationError({"price": ["Price cannot be negative"]})

        in_category = self.category_products(category_index)
        product = Product(
            name=name,
            shop_name=self.name,
            description=description,
            price=price,
            estimated_prep_time=estimated_prep_time or 0.0,
            is_out_of_stock=False,
            category_index=category_index,
            display_order=len(in_category),
            position=max((p.position for p in self.products), default=-1) + 1,
        )
        self.add_products(product)
        self.updated_at = datetime.now(UTC)

        self.raise_(
            ProductAdded(
                shop_id=str(self.id),
                owner_id=str(self.owner_id),
                product_id=str(product.id),
                name=name,
                price=price,
                category_index=category_index,
            )
        )
        return product

    def update_product(
        self,
        product_id,
        name=_UNSET,
        description=_UNSET,
        price=_UNSET,
        estimated_prep_time=_UNSET,
        category_index=_UNSET,
    ):
        """Edit a product. Moving it to another category appends it there."""
        product = self.find_product(product_id)

        if price is not _UNSET and (price is None or price < 0):
            raise ValidationError({"price": ["Price cannot be negative"]})
        if category_index is not _UNSET:
            self._assert_category_exists(category_index)

        with atomic_change(self):
            if name is not _UNSET:
                product.name = name
            if description is not _UNSET:
                product.description = description
            if price is not _UNSET:
                product.price = price
            if estimated_prep_time is not _UNSET:
                product.estimated_prep_time = estimated_prep_time
            if category_index is not _UNSET and category_index != product.category_index:
                old_index = product.category_index
                product.display_order = len(self.category_products(category_index))
                product.category_index = category_index
                self._renumber(old_index)
            self.updated_at = datetime.now(UTC)

        self.raise_(
            ProductDetailsUpdated(
                shop_id=str(self.id),
                owner_id=str(self.owner_id),
                product_id=str(product.id),
                name=product.name,
                price=product.price,
                category_index=product.category_index,
            )
        )

    def set_product_image(self, product_id, image_url):
        product = self.find_product(product_id)
        product.image_url = image_url
        self.updated_at = datetime.now(UTC)
        self.raise_(
            ProductImageUpdated(
                shop_id=str(self.id),
                owner_id=str(self.owner_id),
                product_id=str(product.id),
                image_url=image_url,
            )
        )

    def set_product_stock(self, product_id, is_out_of_stock):
        product = self.find_product(product_id)
        if bool(product.is_out_of_stock) == bool(is_out_of_stock):
            return

        product.is_out_of_stock = is_out_of_stock
        self.updated_at = datetime.now(UTC)
        self.raise_(
            ProductStockChanged(
                shop_id=str(self.id),
                owner_id=str(self.owner_id),
                product_id=str(product.id),
                is_out_of_stock=is_out_of_stock,
            )
        )

    def remove_product(self, product_id):
        product = self.find_product(product_id)
        category_index = product.category_index

        with atomic_change(self):
            self.remove_products(product)
            self._renumber(category_index)
            self.updated_at = datetime.now(UTC)

        self.raise_(
            ProductRemoved(
                shop_id=str(self.id),
                owner_id=str(self.owner_id),
                product_id=str(product_id),
            )
        )

    def remove_products_at(self, category_index, positions):
        """Remove every product shown at ``positions`` within one category, all or nothing."""
        self._assert_category_exists(category_index)
        removed = self.products_at(category_index, positions)

        with atomic_change(self):
            for product in removed:
                self.remove_products(product)
            self._renumber(category_index)
            self.updated_at = datetime.now(UTC)

        for product in removed:
            self.raise_(
                ProductRemoved(
                    shop_id=str(self.id),
                    owner_id=str(self.owner_id),
                    product_id=str(product.id),
                )
            )
        return [str(product.id) for product in removed]

    def products_at(self, category_index, positions):
        """Resolve display positions inside a category to products."""
        in_category = self.category_products(category_index)
        for position in positions:
            if not 0 <= position < len(in_category):
                raise ValidationError({"positions": [f"No product at position {position} in category {category_index}"]})
        return [in_category[position] for position in sorted(set(positions))]

    def move_products(self, category_index, source_positions, destination):
        """Move the products at ``source_positions`` so they sit before the item
        originally at ``destination`` (or at the end when ``destination`` equals
        the category size). Other categories are untouched.
        """
        self._assert_category_exists(category_index)
        in_category = self.category_products(category_index)
        moving = self.products_at(category_index, source_positions)
        if not 0 <= destination <= len(in_category):
            raise ValidationError({"destination": [f"Destination {destination} is outside category {category_index}"]})

        sources = set(source_positions)
        remaining = [product for offset, product in enumerate(in_category) if offset not in sources]
        insert_at = destination - sum(1 for offset in sources if offset < destination)
        reordered = remaining[:insert_at] + moving + remaining[insert_at:]

        with atomic_change(self):
            for display_order, product in enumerate(reordered):
                product.display_order = display_order
            self.updated_at = datetime.now(UTC)

        self.raise_(
            ProductsReordered(
                shop_id=str(self.id),
                owner_id=str(self.owner_id),
                category_index=category_index,
                product_ids=json.dumps([str(product.id) for product in reordered]),
            )
        )

    def _renumber(self, category_index):
        for display_order, product in enumerate(self.category_products(category_index)):
            product.display_order = display_order
