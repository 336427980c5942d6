"""Account aggregate: the signed-in identity behind both storefront roles."""

import json
from datetime import UTC, datetime
from enum import Enum

from protean.exceptions import ValidationError
from protean.fields import DateTime, String, Text

from storefront.account.events import AccountRegistered, FavouriteToggled
from storefront.domain import storefront


class AccountRole(Enum):
    VENDOR = "Vendor"
    CUSTOMER = "Customer"


def toggle_favourite(favourites: frozenset, product_id: str) -> frozenset:
    """Return ``favourites`` with ``product_id`` added if absent, removed if present."""
    if product_id in favourites:
        return favourites - {product_id}
    return favourites | {product_id}


@storefront.aggregate
class Account:
    """A vendor or a customer.

    The role is fixed at registration. Customers keep a set of favourite
    product ids; vendors own shops and carry no favourites.
    """

    name: String(required=True, max_length=100)
    email: String(required=True, max_length=254, unique=True)
    role: String(required=True, choices=AccountRole)
    favourites: Text()  # JSON array of product ids
    registered_at: DateTime()

    @classmethod
    def register(cls, name, email, role):
        account = cls(
            name=name,
            email=email,
            role=role,
            favourites=json.dumps([]),
            registered_at=datetime.now(UTC),
        )
        account.raise_(
            AccountRegistered(
                account_id=str(account.id),
                name=name,
                email=email,
                role=role,
                registered_at=account.registered_at,
            )
        )
        return account

    @property
    def is_vendor(self):
        return self.role == AccountRole.VENDOR.value

    def assert_role(self, role: AccountRole, action: str):
        """Reject ``action`` unless this account has ``role``."""
        if self.role != role.value:
            raise ValidationError({"role": [f"Only {role.value.lower()}s can {action}"]})

    def favourite_ids(self) -> frozenset:
        return frozenset(json.loads(self.favourites) if self.favourites else [])

    def toggle_favourite(self, product_id) -> bool:
        """Flip ``product_id`` in the favourites set and report whether it is now a favourite."""
        if self.is_vendor:
            raise ValidationError({"role": ["Only customers keep favourites"]})

        updated = toggle_favourite(self.favourite_ids(), str(product_id))
        self.favourites = json.dumps(sorted(updated))
        is_favourite = str(product_id) in updated

        self.raise_(
            FavouriteToggled(
                account_id=str(self.id),
                product_id=str(product_id),
                is_favourite=is_favourite,
            )
        )
        return is_favourite
