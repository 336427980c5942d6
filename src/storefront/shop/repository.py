"""Repository for the Shop aggregate."""

from storefront.domain import storefront
from storefront.shop.shop import Shop


@storefront.repository(part_of=Shop)
class ShopRepository:
    def find_by_owner(self, owner_id) -> list[Shop]:
        """Shops owned by a vendor, oldest first, with their menus loaded."""
        shops = self._dao.query.filter(owner_id=str(owner_id)).all().items
        return sorted((self.get(shop.id) for shop in shops), key=_created)

    def find_by_product(self, product_id) -> Shop | None:
        """The shop currently selling ``product_id``, if any."""
        return next(
            (shop for shop in self.list_all() if any(str(p.id) == str(product_id) for p in shop.products)),
            None,
        )

    def list_all(self) -> list[Shop]:
        return sorted((self.get(shop.id) for shop in self._dao.query.all().items), key=_created)


def _created(shop):
    return (shop.created_at, shop.name)
