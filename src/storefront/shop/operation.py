"""Opening and closing a shop for orders."""

from protean import handle
from protean.fields import Identifier
from protean.utils.globals import current_domain

from storefront.domain import storefront
from storefront.shop.shop import Shop


@storefront.command(part_of="Shop")
class OpenShop:
    shop_id = Identifier(required=True)
    owner_id = Identifier(required=True)


@storefront.command(part_of="Shop")
class CloseShop:
    shop_id = Identifier(required=True)
    owner_id = Identifier(required=True)


@storefront.command_handler(part_of=Shop)
class ShopOperationHandler:
    def _set_closed(self, command, is_closed):
        repo = current_domain.repository_for(Shop)
        shop = repo.get(command.shop_id)
        shop.assert_owned_by(command.owner_id)
        shop.set_closed(is_closed)
        repo.add(shop)

    @handle(OpenShop)
    def open_shop(self, command):
        self._set_closed(command, False)

    @handle(CloseShop)
    def close_shop(self, command):
        self._set_closed(command, True)
