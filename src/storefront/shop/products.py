"""Menu management: adding, editing, removing, reordering and restocking products."""

import json

from protean import handle
from protean.fields import Boolean, Float, Identifier, Integer, String, Text
from protean.utils.globals import current_domain

from storefront.domain import storefront
from storefront.shop.shop import Shop
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


def _positions(value):
    return json.loads(value) if isinstance(value, str) else value


@storefront.command(part_of="Shop")
class AddProduct:
    shop_id = Identifier(required=True)
    owner_id = Identifier(required=True)
    name = String(required=True, max_length=150)
    description = Text()
    price = Float(required=True)
    estimated_prep_time = Float(default=0.0)
    category_index = Integer(required=True)


@storefront.command(part_of="Shop")
class UpdateProduct:
    shop_id = Identifier(required=True)
    owner_id = Identifier(required=True)
    product_id = Identifier(required=True)
    name = String(required=True, max_length=150)
    description = Text()
    price = Float(required=True)
    estimated_prep_time = Float(default=0.0)
    category_index = Integer()  # None keeps the current category


@storefront.command(part_of="Shop")
class RemoveProduct:
    shop_id = Identifier(required=True)
    owner_id = Identifier(required=True)
    product_id = Identifier(required=True)


@storefront.command(part_of="Shop")
class RemoveProducts:
    shop_id = Identifier(required=True)
    owner_id = Identifier(required=True)
    category_index = Integer(required=True)
    positions = Text(required=True)  # JSON array of display positions


@storefront.command(part_of="Shop")
class MoveProducts:
    shop_id = Identifier(required=True)
    owner_id = Identifier(required=True)
    category_index = Integer(required=True)
    source_positions = Text(required=True)  # JSON array of display positions
    destination = Integer(required=True)


@storefront.command(part_of="Shop")
class SetProductStock:
    shop_id = Identifier(required=True)
    owner_id = Identifier(required=True)
    product_id = Identifier(required=True)
    is_out_of_stock = Boolean(required=True)


@storefront.command_handler(part_of=Shop)
class ProductManagementHandler:
    def _owned_shop(self, command):
        repo = current_domain.repository_for(Shop)
        shop = repo.get(command.shop_id)
        shop.assert_owned_by(command.owner_id)
        return repo, shop

    @handle(AddProduct)
    def add_product(self, command):
        repo, shop = self._owned_shop(command)
        product = shop.add_product(
            name=command.name,
            price=command.price,
            category_index=command.category_index,
            description=command.description,
            estimated_prep_time=command.estimated_prep_time,
        )
        repo.add(shop)
        logger.info("product_added", shop_id=str(shop.id), product_id=str(product.id))
        return str(product.id)

    @handle(UpdateProduct)
    def update_product(self, command):
        repo, shop = self._owned_shop(command)
        changes = {
            "name": command.name,
            "description": command.description,
            "price": command.price,
            "estimated_prep_time": command.estimated_prep_time,
        }
        if command.category_index is not None:
            changes["category_index"] = command.category_index
        shop.update_product(command.product_id, **changes)
        repo.add(shop)

    @handle(RemoveProduct)
    def remove_product(self, command):
        repo, shop = self._owned_shop(command)
        shop.remove_product(command.product_id)
        repo.add(shop)
        logger.info("product_removed", shop_id=str(shop.id), product_id=str(command.product_id))

    @handle(RemoveProducts)
    def remove_products(self, command):
        repo, shop = self._owned_shop(command)
        removed = shop.remove_products_at(command.category_index, _positions(command.positions))
        repo.add(shop)
        logger.info("products_removed", shop_id=str(shop.id), product_ids=removed)

    @handle(MoveProducts)
    def move_products(self, command):
        repo, shop = self._owned_shop(command)
        shop.move_products(command.category_index, _positions(command.source_positions), command.destination)
        repo.add(shop)

    @handle(SetProductStock)
    def set_product_stock(self, command):
        repo, shop = self._owned_shop(command)
        shop.set_product_stock(command.product_id, command.is_out_of_stock)
        repo.add(shop)
