"""Shop creation: command and handler."""

from protean import handle
from protean.fields import Identifier, String, Text
from protean.utils.globals import current_domain

from storefront.account.account import Account, AccountRole
from storefront.domain import storefront
from storefront.shop.shop import Shop
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


@storefront.command(part_of="Shop")
class CreateShop:
    owner_id = Identifier(required=True)
    name = String(max_length=100)
    description = Text()
    location_id = Identifier()


@storefront.command_handler(part_of=Shop)
class CreateShopHandler:
    @handle(CreateShop)
    def create_shop(self, command):
        owner = current_domain.repository_for(Account).get(command.owner_id)
        owner.assert_role(AccountRole.VENDOR, "open shops")

        shop = Shop.create(
            owner_id=command.owner_id,
            name=command.name,
            description=command.description,
            location_id=command.location_id,
        )
        current_domain.repository_for(Shop).add(shop)
        logger.info("shop_created", shop_id=str(shop.id), owner_id=str(command.owner_id))
        return str(shop.id)
