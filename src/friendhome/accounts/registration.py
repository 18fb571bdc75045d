"""Account registration and profile management — commands and handler."""

import structlog
from protean import handle
from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from friendhome.accounts.account import Account
from friendhome.accounts.roles import ensure_admin
from friendhome.domain import friendhome

logger = structlog.get_logger(__name__)


@friendhome.command(part_of="Account")
class RegisterAccount:
    """Create the profile for a user the identity provider just signed up."""

    user_id = Identifier(required=True)
    email = String(required=True, max_length=254)
    phone = String(required=True, max_length=20)
    full_name = String(required=True, max_length=150)


@friendhome.command(part_of="Account")
class UpdateProfile:
    user_id = Identifier(required=True)
    full_name = String(max_length=150)
    phone = String(max_length=20)


@friendhome.command(part_of="Account")
class GrantAdminRole:
    """Promote a user to administrator. Only an administrator may do this."""

    user_id = Identifier(required=True)
    granted_by = Identifier(required=True)


def _ensure_phone_unused(phone, user_id):
    holders = current_domain.repository_for(Account)._dao.query.filter(phone=phone).all().items
    if any(str(holder.user_id) != str(user_id) for holder in holders):
        raise ValidationError({"phone": ["Phone number is already registered"]})


@friendhome.command_handler(part_of=Account)
class AccountHandler:
    @handle(RegisterAccount)
    def register_account(self, command):
        repo = current_domain.repository_for(Account)
        try:
            repo.get(command.user_id)
        except ObjectNotFoundError:
            pass
        else:
            raise ValidationError({"user_id": ["Account already exists"]})

        _ensure_phone_unused(command.phone, command.user_id)

        account = Account.register(
            user_id=command.user_id,
            email=command.email,
            phone=command.phone,
            full_name=command.full_name,
        )
        repo.add(account)
        logger.info("Account registered", user_id=str(command.user_id))
        return str(account.user_id)

    @handle(UpdateProfile)
    def update_profile(self, command):
        repo = current_domain.repository_for(Account)
        account = repo.get(command.user_id)
        if command.phone is not None:
            _ensure_phone_unused(command.phone, command.user_id)
        account.update_profile(full_name=command.full_name, phone=command.phone)
        repo.add(account)

    @handle(GrantAdminRole)
    def grant_admin_role(self, command):
        ensure_admin(command.granted_by)

        repo = current_domain.repository_for(Account)
        account = repo.get(command.user_id)
        account.grant_admin()
        repo.add(account)
        logger.info(
            "Administrator role granted",
            user_id=str(command.user_id),
            granted_by=str(command.granted_by),
        )
