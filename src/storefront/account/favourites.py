"""Customer favourites: the toggle rule, its command and the favourites view."""

from protean import handle
from protean.exceptions import ObjectNotFoundError
from protean.fields import Identifier
from protean.utils.globals import current_domain

from storefront.account.account import Account, toggle_favourite
from storefront.domain import storefront
from storefront.shop.shop import Shop

__all__ = ["ToggleFavourite", "ToggleFavouriteHandler", "favourite_products", "toggle_favourite"]


def favourite_products(favourite_ids, shops) -> tuple:
    """Products among ``shops`` whose ids are favourites, in shop then sold order.

    Ids that no longer match a product (deleted since) are skipped.
    """
    wanted = {str(product_id) for product_id in favourite_ids}
    return tuple(product for shop in shops for product in shop.sold_products() if str(product.id) in wanted)


@storefront.command(part_of="Account")
class ToggleFavourite:
    account_id = Identifier(required=True)
    product_id = Identifier(required=True)


@storefront.command_handler(part_of=Account)
class ToggleFavouriteHandler:
    @handle(ToggleFavourite)
    def toggle_favourite(self, command):
        repo = current_domain.repository_for(Account)
        account = repo.get(command.account_id)

        # Deleted products can still be dropped from favourites
        product_id = str(command.product_id)
        if product_id not in account.favourite_ids():
            if current_domain.repository_for(Shop).find_by_product(product_id) is None:
                raise ObjectNotFoundError({"product": [f"Product {product_id} does not exist"]})

        is_favourite = account.toggle_favourite(product_id)
        repo.add(account)
        return is_favourite
