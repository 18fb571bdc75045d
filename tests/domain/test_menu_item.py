"""Tests for the MenuItem aggregate."""

import pytest
from friendhome.menu.events import MenuImageChanged, MenuItemAdded, MenuItemAvailabilityChanged
from friendhome.menu.menu_item import MenuItem
from protean.exceptions import ValidationError


def _dosa():
    return MenuItem.add(title="Masala Dosa", category="South Indian", price=80.0)


def test_new_items_are_available():
    item = _dosa()
    assert item.is_available
    assert any(isinstance(e, MenuItemAdded) for e in item._events)


def test_price_cannot_be_negative():
    with pytest.raises(ValidationError):
        MenuItem.add(title="Masala Dosa", category="South Indian", price=-1.0)


def test_update_details_keeps_unset_fields():
    item = _dosa()
    item.update_details(price=90.0)
    assert item.price == 90.0
    assert item.title == "Masala Dosa"


def test_blank_title_is_rejected():
    item = _dosa()
    with pytest.raises(ValidationError):
        item.update_details(title="  ")


def test_toggle_availability():
    item = _dosa()
    item.toggle_availability()
    assert item.is_available is False
    item.toggle_availability()
    assert item.is_available is True

    events = [e for e in item._events if isinstance(e, MenuItemAvailabilityChanged)]
    assert [e.is_available for e in events] == [False, True]


def test_attach_and_remove_image():
    item = _dosa()
    item.attach_image("/media/menu-images/abc-1.jpg")
    assert item.image_url == "/media/menu-images/abc-1.jpg"

    item.remove_image()
    assert item.image_url is None

    events = [e for e in item._events if isinstance(e, MenuImageChanged)]
    assert [e.image_url for e in events] == ["/media/menu-images/abc-1.jpg", ""]
