"""Result envelope returned by every gateway write and delivered by every observation."""

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class GatewayResult:
    """Either a value or the error that prevented it. Never both."""

    success: bool
    value: Any = None
    error: Exception | None = None

    def unwrap(self):
        """Return the value, raising the captured error on failure."""
        if not self.success:
            raise self.error
        return self.value


def ok(value=None) -> GatewayResult:
    return GatewayResult(success=True, value=value)


def failed(error: Exception) -> GatewayResult:
    return GatewayResult(success=False, error=error)
