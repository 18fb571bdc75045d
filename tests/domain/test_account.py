"""Tests for the Account aggregate."""

import pytest
from friendhome.accounts.account import Account, Role
from protean.exceptions import ValidationError


def _register(**overrides):
    kwargs = {
        "user_id": "user-001",
        "email": "priya@example.com",
        "phone": "9876543210",
        "full_name": "Priya Raman",
    }
    kwargs.update(overrides)
    return Account.register(**kwargs)


class TestRegistration:
    def test_new_accounts_are_regular_users(self):
        account = _register()
        assert account.role == Role.USER.value
        assert not account.is_admin

    @pytest.mark.parametrize("phone", ["5876543210", "987654321", "98765432100", "98765-4321"])
    def test_phone_must_be_an_indian_mobile_number(self, phone):
        with pytest.raises(ValidationError):
            _register(phone=phone)

    @pytest.mark.parametrize("email", ["priya.example.com", "priya@example", "pri ya@example.com", "a@b@c.com"])
    def test_email_must_be_valid(self, email):
        with pytest.raises(ValidationError):
            _register(email=email)

    def test_name_must_have_two_characters(self):
        with pytest.raises(ValidationError):
            _register(full_name="P")


class TestProfile:
    def test_update_profile(self):
        account = _register()
        account.update_profile(full_name="Priya R", phone="8123456789")
        assert account.full_name == "Priya R"
        assert account.phone == "8123456789"

    def test_update_rejects_invalid_phone(self):
        account = _register()
        with pytest.raises(ValidationError):
            account.update_profile(phone="12345")


class TestRoles:
    def test_grant_admin(self):
        account = _register()
        account.grant_admin()
        assert account.is_admin

    def test_cannot_grant_admin_twice(self):
        account = _register()
        account.grant_admin()
        with pytest.raises(ValidationError):
            account.grant_admin()
