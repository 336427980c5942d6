"""Recording uploaded shop and product images.

The bytes go to the image storage port first; these commands only record the
URL the upload produced.
"""

from protean import handle
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from storefront.domain import storefront
from storefront.shop.shop import Shop


@storefront.command(part_of="Shop")
class SetShopImage:
    shop_id = Identifier(required=True)
    image_url = String(required=True, max_length=500)


@storefront.command(part_of="Shop")
class SetProductImage:
    shop_id = Identifier(required=True)
    product_id = Identifier(required=True)
    image_url = String(required=True, max_length=500)


@storefront.command_handler(part_of=Shop)
class ShopImageHandler:
    @handle(SetShopImage)
    def set_shop_image(self, command):
        repo = current_domain.repository_for(Shop)
        shop = repo.get(command.shop_id)
        shop.set_image(command.image_url)
        repo.add(shop)

    @handle(SetProductImage)
    def set_product_image(self, command):
        repo = current_domain.repository_for(Shop)
        shop = repo.get(command.shop_id)
        shop.set_product_image(command.product_id, command.image_url)
        repo.add(shop)
