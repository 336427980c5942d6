"""Image storage port (abstract interface).

Shop and product images are stored outside the domain. Uploads larger than
``MAX_IMAGE_SIZE`` are rejected before they reach an adapter.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass

from protean.exceptions import ValidationError

MAX_IMAGE_SIZE = 5 * 1024 * 1024  # 5MB


@dataclass(frozen=True)
class StorageResult:
    success: bool
    url: str | None = None
    data: bytes | None = None
    failure_reason: str | None = None


def check_image_size(data: bytes | None) -> None:
    if data is not None and len(data) > MAX_IMAGE_SIZE:
        raise ValidationError({"image": ["Uploaded image size must be less than 5MB"]})


def shop_image_key(shop_id) -> str:
    return f"shops/{shop_id}"


def product_image_key(shop_id, product_id) -> str:
    return f"shops/{shop_id}/products/{product_id}"


class ImageStorage(ABC):
    @abstractmethod
    def upload(self, key: str, data: bytes) -> StorageResult:
        """Store ``data`` under ``key`` and return its public URL."""
        ...

    @abstractmethod
    def download(self, key: str) -> StorageResult:
        """Fetch the bytes stored under ``key``."""
        ...
