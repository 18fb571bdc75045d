"""Account aggregate — profile and role of an authenticated user.

Passwords and sessions are handled by the upstream identity provider; an
Account only records who the caller is (keyed by the provider's user id),
how to reach them, and whether they may run the admin panel.
"""

import re
from datetime import UTC, datetime
from enum import Enum

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import DateTime, Identifier, String

from friendhome.domain import friendhome

_PHONE_PATTERN = re.compile(r"^[6-9]\d{9}$")


class Role(Enum):
    USER = "user"
    ADMIN = "admin"


@friendhome.aggregate
class Account:
    user_id = Identifier(identifier=True)
    email = String(required=True, max_length=254)
    phone = String(required=True, max_length=10)
    full_name = String(required=True, max_length=150)
    role = String(choices=Role, default=Role.USER.value)
    created_at = DateTime()

    @invariant.post
    def phone_must_be_valid(self):
        if self.phone is not None and not _PHONE_PATTERN.match(self.phone):
            raise ValidationError({"phone": ["Please enter a valid 10-digit phone number"]})

    @invariant.post
    def email_must_be_valid(self):
        email = self.email
        if email is None:
            return
        if email.count("@") != 1 or any(c.isspace() for c in email):
            raise ValidationError({"email": ["Please enter a valid email"]})
        local_part, domain_part = email.split("@")
        if not local_part or "." not in domain_part or domain_part.startswith(".") or domain_part.endswith("."):
            raise ValidationError({"email": ["Please enter a valid email"]})

    @invariant.post
    def full_name_must_be_meaningful(self):
        if self.full_name is not None and len(self.full_name.strip()) < 2:
            raise ValidationError({"full_name": ["Name must be at least 2 characters"]})

    @classmethod
    def register(cls, user_id, email, phone, full_name):
        return cls(
            user_id=user_id,
            email=email,
            phone=phone,
            full_name=full_name,
            role=Role.USER.value,
            created_at=datetime.now(UTC),
        )

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN.value

    def update_profile(self, full_name=None, phone=None):
        if full_name is not None:
            self.full_name = full_name
        if phone is not None:
            self.phone = phone

    def grant_admin(self):
        if self.is_admin:
            raise ValidationError({"role": ["User is already an administrator"]})
        self.role = Role.ADMIN.value
