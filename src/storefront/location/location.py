"""Location aggregate: the campus or building a shop operates from."""

from protean import handle
from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.fields import String, Text
from protean.utils.globals import current_domain

from storefront.domain import storefront


@storefront.aggregate
class Location:
    name: String(required=True, max_length=100, unique=True)
    description: Text()


@storefront.repository(part_of=Location)
class LocationRepository:
    def find_by_name(self, name: str) -> Location | None:
        return self._dao.query.filter(name=name).all().first

    def list_all(self) -> list[Location]:
        return sorted(self._dao.query.all().items, key=lambda location: location.name)


@storefront.command(part_of="Location")
class CreateLocation:
    name: String(required=True, max_length=100)
    description: Text()


@storefront.command_handler(part_of=Location)
class CreateLocationHandler:
    @handle(CreateLocation)
    def create_location(self, command):
        repo = current_domain.repository_for(Location)
        if repo.find_by_name(command.name) is not None:
            raise ValidationError({"name": [f"Location '{command.name}' already exists"]})

        location = Location(name=command.name, description=command.description)
        repo.add(location)
        return str(location.id)


def resolve_location_id(name: str) -> str:
    """Return the id of the location called ``name``."""
    location = current_domain.repository_for(Location).find_by_name(name)
    if location is None:
        raise ValidationError({"location": [f"Unknown location '{name}'"]})
    return str(location.id)


def location_name(location_id: str | None) -> str | None:
    if not location_id:
        return None
    try:
        return current_domain.repository_for(Location).get(location_id).name
    except ObjectNotFoundError:
        return None
