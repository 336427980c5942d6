"""Image storage factory.

Provides get_storage() / set_storage() / reset_storage() to swap
implementations. Defaults to InMemoryImageStorage.
"""

from storefront.storage.memory_adapter import InMemoryImageStorage
from storefront.storage.port import ImageStorage

_current_storage: ImageStorage | None = None


def get_storage() -> ImageStorage:
    """Return the active image storage. Defaults to InMemoryImageStorage."""
    global _current_storage
    if _current_storage is None:
        _current_storage = InMemoryImageStorage()
    return _current_storage


def set_storage(storage: ImageStorage) -> None:
    """Override the active image storage (useful for tests)."""
    global _current_storage
    _current_storage = storage


def reset_storage() -> None:
    global _current_storage
    _current_storage = None
