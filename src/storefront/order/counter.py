"""Per-shop collection numbers.

Each shop hands out collection numbers 1, 2, 3, ... The counter is its own
aggregate, keyed by the shop id, and is saved in the same unit of work as the
order that consumes the number; aggregate versioning stops two concurrent
placements from both committing the same increment.
"""

from protean.exceptions import ObjectNotFoundError
from protean.fields import Identifier, Integer
from protean.utils.globals import current_domain

from storefront.domain import storefront


@storefront.aggregate
class CollectionCounter:
    shop_id = Identifier(identifier=True)
    last_issued = Integer(default=0, min_value=0)

    def next_number(self) -> int:
        self.last_issued = (self.last_issued or 0) + 1
        return self.last_issued


def counter_for(shop_id) -> CollectionCounter:
    """Load the shop's counter, starting a fresh one for a shop's first order."""
    try:
        return current_domain.repository_for(CollectionCounter).get(str(shop_id))
    except ObjectNotFoundError:
        return CollectionCounter(shop_id=str(shop_id), last_issued=0)
