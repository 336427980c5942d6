"""Shop editing: the edit rules, command and handler.

The rules run in a fixed order and the first one that fails is reported, so a
vendor fixing a form sees one problem at a time and always the same one first.
"""

import json

from protean import handle
from protean.exceptions import ValidationError
from protean.fields import Identifier, Integer, String, Text
from protean.utils.globals import current_domain

from storefront.domain import storefront
from storefront.location.location import resolve_location_id
from storefront.shop.shop import Shop
from storefront.storage.port import MAX_IMAGE_SIZE
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


def _blank(value):
    return value is None or not value.strip()


def check_shop_edit(shop, name, description, location, category_titles, image_size=None):
    """Raise ``ValidationError`` for the first edit rule the proposed values break."""
    if _blank(name):
        raise ValidationError({"name": ["Shop name cannot be empty"]})
    if _blank(description):
        raise ValidationError({"description": ["Shop description cannot be empty"]})
    if _blank(location):
        raise ValidationError({"location": ["Shop location cannot be empty"]})

    titles = [title.strip() if title else "" for title in category_titles]
    if any(not title for title in titles):
        raise ValidationError({"categories": ["Shop category cannot be blank"]})
    if len(set(titles)) != len(titles):
        raise ValidationError({"categories": ["Shop category cannot be repeated"]})
    if not titles:
        raise ValidationError({"categories": ["Shop must have at least 1 category"]})

    if image_size is not None and image_size > MAX_IMAGE_SIZE:
        raise ValidationError({"image": ["Uploaded image size must be less than 5MB"]})

    for category in shop.ordered_categories()[len(titles) :]:
        if shop.category_products(category.ordering_index):
            raise ValidationError({"categories": [f"Category '{category.title}' still has products"]})


@storefront.command(part_of="Shop")
class EditShop:
    shop_id = Identifier(required=True)
    owner_id = Identifier(required=True)
    name = String(max_length=100)
    description = Text()
    location = String(max_length=100)  # location name, resolved to an id
    category_titles = Text(required=True)  # JSON array of titles, in display order
    image_size = Integer()  # bytes of an accompanying upload, if any


@storefront.command_handler(part_of=Shop)
class EditShopHandler:
    @handle(EditShop)
    def edit_shop(self, command):
        repo = current_domain.repository_for(Shop)
        shop = repo.get(command.shop_id)
        shop.assert_owned_by(command.owner_id)

        titles = json.loads(command.category_titles) if isinstance(command.category_titles, str) else command.category_titles
        check_shop_edit(
            shop,
            name=command.name,
            description=command.description,
            location=command.location,
            category_titles=titles,
            image_size=command.image_size,
        )
        location_id = resolve_location_id(command.location.strip())

        shop.update_details(
            name=command.name,
            description=command.description,
            location_id=location_id,
            category_titles=titles,
        )
        repo.add(shop)
        logger.info("shop_edited", shop_id=str(shop.id), categories=len(titles))
