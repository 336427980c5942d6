"""Account registration: command and handler."""

from protean import handle
from protean.exceptions import ValidationError
from protean.fields import String
from protean.utils.globals import current_domain

from storefront.account.account import Account, AccountRole
from storefront.domain import storefront


@storefront.command(part_of="Account")
class RegisterAccount:
    name: String(required=True, max_length=100)
    email: String(required=True, max_length=254)
    role: String(required=True, choices=AccountRole)


@storefront.command_handler(part_of=Account)
class RegisterAccountHandler:
    @handle(RegisterAccount)
    def register_account(self, command):
        repo = current_domain.repository_for(Account)
        if repo._dao.query.filter(email=command.email).all().items:
            raise ValidationError({"email": ["An account with this email already exists"]})

        account = Account.register(name=command.name, email=command.email, role=command.role)
        repo.add(account)
        return str(account.id)
