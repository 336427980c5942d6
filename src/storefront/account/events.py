"""Domain events for the Account aggregate."""

from protean.fields import Boolean, DateTime, Identifier, String

from storefront.domain import storefront


@storefront.event(part_of="Account")
class AccountRegistered:
    """A vendor or customer signed up."""

    __version__ = 1

    account_id: Identifier(required=True)
    name: String(required=True)
    email: String(required=True)
    role: String(required=True)
    registered_at: DateTime(required=True)


@storefront.event(part_of="Account")
class FavouriteToggled:
    """A customer added a product to, or removed it from, their favourites."""

    __version__ = 1

    account_id: Identifier(required=True)
    product_id: Identifier(required=True)
    is_favourite: Boolean(required=True)
