import os
from pathlib import Path

import pytest
from protean.integrations.pytest import DomainFixture


def pytest_addoption(parser):
    parser.addoption(
        "--env",
        action="store",
        default="test",
        help="Config environment to run tests on",
    )


def pytest_sessionstart(session):
    """Pytest hook to run before collecting tests.

    Selects the config overlay through PROTEAN_ENV before the domain is imported.
    """
    os.environ["PROTEAN_ENV"] = session.config.option.env


def pytest_collection_modifyitems(config, items):
    """Automatically mark tests based on their directory location."""
    for item in items:
        test_path = str(Path(item.fspath))

        if "/domain/" in test_path:
            item.add_marker(pytest.mark.domain)
        elif "/application/" in test_path:
            item.add_marker(pytest.mark.application)
        elif "/integration/" in test_path:
            item.add_marker(pytest.mark.integration)
            if not any(m.name == "fast" for m in item.iter_markers()):
                item.add_marker(pytest.mark.slow)


@pytest.fixture(scope="session")
def friendhome_bed():
    from friendhome.domain import friendhome
    from friendhome.utils.db import drop_db, setup_db

    bed = DomainFixture(friendhome)
    bed.setup()
    setup_db(friendhome)
    yield bed
    drop_db(friendhome)
    bed.teardown()


@pytest.fixture(autouse=True)
def _ctx(friendhome_bed):
    with friendhome_bed.domain_context():
        yield


@pytest.fixture(autouse=True)
def run_around_tests(_ctx):
    """Fixture to automatically cleanup infrastructure after every test"""
    from friendhome.menu.storage import reset_storage
    from friendhome.notifications.channel import reset_channels
    from friendhome.tracking.feed import reset_feed

    yield

    from protean import current_domain

    for _, provider in current_domain.providers.items():
        provider._data_reset()
    current_domain.event_store.store._data_reset()

    reset_channels()
    reset_feed()
    reset_storage()


# ---------------------------------------------------------------------------
# Shared data fixtures
# ---------------------------------------------------------------------------
def _register(user_id, phone, full_name="Test Customer", email=None):
    from friendhome.accounts.registration import RegisterAccount
    from protean import current_domain

    current_domain.process(
        RegisterAccount(
            user_id=user_id,
            email=email or f"{user_id}@example.com",
            phone=phone,
            full_name=full_name,
        ),
        asynchronous=False,
    )
    return user_id


@pytest.fixture()
def customer_id():
    return _register("user-001", "9876543210", full_name="Priya Raman")


@pytest.fixture()
def admin_id():
    from friendhome.accounts.account import Account
    from protean import current_domain

    user_id = _register("admin-001", "9123456780", full_name="Kitchen Admin")
    repo = current_domain.repository_for(Account)
    account = repo.get(user_id)
    account.grant_admin()
    repo.add(account)
    return user_id


@pytest.fixture()
def menu():
    """Two dishes on the storefront, keyed by title."""
    from friendhome.menu.menu_item import MenuItem
    from protean import current_domain

    repo = current_domain.repository_for(MenuItem)
    items = {}
    for title, category, price in [
        ("Masala Dosa", "South Indian", 80.0),
        ("Chicken Fried Rice", "Chinese", 150.0),
    ]:
        item = MenuItem.add(title=title, category=category, price=price)
        repo.add(item)
        items[title] = str(item.id)
    return items


@pytest.fixture()
def filled_cart(customer_id, menu):
    """Two dosas and one fried rice: subtotal 310."""
    from friendhome.cart.items import AddToCart
    from protean import current_domain

    current_domain.process(
        AddToCart(customer_id=customer_id, menu_item_id=menu["Masala Dosa"], quantity=2),
        asynchronous=False,
    )
    current_domain.process(
        AddToCart(customer_id=customer_id, menu_item_id=menu["Chicken Fried Rice"], quantity=1),
        asynchronous=False,
    )
    return customer_id
