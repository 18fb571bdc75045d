"""Role checks shared by admin-only command handlers and API dependencies."""

from protean.exceptions import InvalidOperationError, ObjectNotFoundError
from protean.utils.globals import current_domain

from friendhome.accounts.account import Account


def is_admin(user_id) -> bool:
    if not user_id:
        return False
    try:
        account = current_domain.repository_for(Account).get(str(user_id))
    except ObjectNotFoundError:
        return False
    return account.is_admin


def ensure_admin(user_id) -> None:
    """Reject the operation unless ``user_id`` belongs to an administrator."""
    if not is_admin(user_id):
        raise InvalidOperationError(f"User {user_id} is not an administrator")
