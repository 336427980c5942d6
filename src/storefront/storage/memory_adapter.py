"""Dictionary-backed image storage for development and tests."""

from storefront.storage.port import ImageStorage, StorageResult


class InMemoryImageStorage(ImageStorage):
    """Keeps images in a dict keyed by storage key.

    ``configure(should_succeed=False)`` makes every call fail, which is how
    tests simulate an unavailable bucket.
    """

    def __init__(self) -> None:
        self.blobs: dict[str, bytes] = {}
        self.should_succeed: bool = True
        self.failure_reason: str = "Storage unavailable"
        self.calls: list[dict] = []

    def configure(self, should_succeed: bool, failure_reason: str = "Storage unavailable") -> None:
        self.should_succeed = should_succeed
        self.failure_reason = failure_reason

    def upload(self, key: str, data: bytes) -> StorageResult:
        self.calls.append({"method": "upload", "key": key, "size": len(data)})
        if not self.should_succeed:
            return StorageResult(success=False, failure_reason=self.failure_reason)

        self.blobs[key] = bytes(data)
        return StorageResult(success=True, url=f"memory://images/{key}")

    def download(self, key: str) -> StorageResult:
        self.calls.append({"method": "download", "key": key})
        if not self.should_succeed:
            return StorageResult(success=False, failure_reason=self.failure_reason)
        if key not in self.blobs:
            return StorageResult(success=False, failure_reason=f"No image stored under '{key}'")
        return StorageResult(success=True, url=f"memory://images/{key}", data=self.blobs[key])
