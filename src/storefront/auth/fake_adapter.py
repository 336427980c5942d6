"""In-process authentication adapter for development and tests.

A caller signs an account in with ``sign_in()``; ``configure()`` makes every
call fail with an ``AuthError`` to exercise error paths.
"""

from storefront.auth.port import AuthGateway, AuthResult
from storefront.shared.errors import AuthError


class FakeAuth(AuthGateway):
    def __init__(self) -> None:
        self.current_account_id: str | None = None
        self.should_succeed: bool = True
        self.failure_reason: str = "Authentication provider unavailable"
        self.calls: list[dict] = []

    def configure(self, should_succeed: bool, failure_reason: str = "Authentication provider unavailable") -> None:
        self.should_succeed = should_succeed
        self.failure_reason = failure_reason

    def sign_in(self, account_id: str) -> None:
        self.current_account_id = str(account_id)

    def get_current_user(self) -> AuthResult:
        self.calls.append({"method": "get_current_user"})
        if not self.should_succeed:
            return AuthResult(success=False, error=AuthError(self.failure_reason))
        return AuthResult(success=True, account_id=self.current_account_id)

    def sign_out_user(self) -> AuthResult:
        self.calls.append({"method": "sign_out_user", "account_id": self.current_account_id})
        if not self.should_succeed:
            return AuthResult(success=False, error=AuthError(self.failure_reason))
        self.current_account_id = None
        return AuthResult(success=True)
