"""Authentication port.

The storefront never talks to an identity provider directly. It asks this
port who is signed in and asks it to end the session; adapters bind it to a
concrete provider.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass

from storefront.shared.errors import AuthError


@dataclass(frozen=True)
class AuthResult:
    """Outcome of an authentication call.

    ``account_id`` is ``None`` on success when nobody is signed in.
    """

    success: bool
    account_id: str | None = None
    error: AuthError | None = None


class AuthGateway(ABC):
    @abstractmethod
    def get_current_user(self) -> AuthResult:
        """Resolve the account id of the signed-in user."""
        ...

    @abstractmethod
    def sign_out_user(self) -> AuthResult:
        """End the current session."""
        ...
