"""Application tests for order placement from a cart."""

import pytest
from friendhome.address.address import Address
from friendhome.cart.items import find_cart
from friendhome.checkout.placement import PlaceOrder
from friendhome.menu.management import ToggleMenuItemAvailability, UpdateMenuItem
from friendhome.menu.menu_item import MenuItem
from friendhome.order.order import Order
from friendhome.projections.order_summary import OrderSummary
from protean import current_domain
from protean.exceptions import ValidationError

ANNA_NAGAR = (13.15, 80.25)
TAMBARAM = (12.9249, 80.1000)


def _place(customer_id, location=ANNA_NAGAR, **overrides):
    kwargs = {
        "customer_id": customer_id,
        "label": "Home",
        "address_line": "12, 3rd Cross Street, Anna Nagar",
        "latitude": location[0],
        "longitude": location[1],
        "notes": "Ring the bell twice",
    }
    kwargs.update(overrides)
    return current_domain.process(PlaceOrder(**kwargs), asynchronous=False)


def _all(aggregate_cls):
    return current_domain.repository_for(aggregate_cls)._dao.query.all().items


class TestSuccessfulPlacement:
    def test_returns_new_order_id(self, filled_cart):
        order_id = _place(filled_cart)
        order = current_domain.repository_for(Order).get(order_id)
        assert str(order.customer_id) == filled_cart

    def test_creates_one_address_one_order_and_an_item_per_line(self, filled_cart):
        order_id = _place(filled_cart)

        addresses = _all(Address)
        orders = _all(Order)
        assert len(addresses) == 1
        assert len(orders) == 1

        order = current_domain.repository_for(Order).get(order_id)
        assert len(order.items) == 2
        assert str(order.address_id) == str(addresses[0].id)

    def test_order_is_priced_from_the_cart(self, filled_cart):
        order = current_domain.repository_for(Order).get(_place(filled_cart))
        assert order.pricing.subtotal == 310.0
        assert order.pricing.tax == 15.5
        assert order.pricing.delivery_fee == 30.0
        assert order.pricing.total == 355.5
        assert order.pricing.total == pytest.approx(
            order.pricing.subtotal + order.pricing.tax + order.pricing.delivery_fee
        )

    def test_order_records_distance_and_notes(self, filled_cart):
        order = current_domain.repository_for(Order).get(_place(filled_cart))
        assert 7.0 < order.distance_km < 8.5
        assert order.notes == "Ring the bell twice"
        assert order.status == "placed"

    def test_address_belongs_to_the_customer(self, filled_cart):
        _place(filled_cart)
        address = _all(Address)[0]
        assert str(address.customer_id) == filled_cart
        assert address.location.as_tuple() == ANNA_NAGAR

    def test_cart_is_cleared(self, filled_cart):
        _place(filled_cart)
        assert find_cart(filled_cart).items == []


class TestPriceSnapshot:
    def test_menu_price_change_leaves_placed_order_untouched(self, filled_cart, menu, admin_id):
        order_id = _place(filled_cart)

        current_domain.process(
            UpdateMenuItem(actor_id=admin_id, menu_item_id=menu["Masala Dosa"], price=120.0),
            asynchronous=False,
        )
        assert current_domain.repository_for(MenuItem).get(menu["Masala Dosa"]).price == 120.0

        order = current_domain.repository_for(Order).get(order_id)
        assert order.pricing.subtotal == 310.0
        assert order.pricing.tax == 15.5
        assert order.pricing.delivery_fee == 30.0
        assert order.pricing.total == 355.5
        assert {item.title: item.price for item in order.items} == {
            "Masala Dosa": 80.0,
            "Chicken Fried Rice": 150.0,
        }
        assert current_domain.repository_for(OrderSummary).get(order_id).total == 355.5


class TestRejectedPlacement:
    def test_far_destination_is_rejected_before_anything_is_saved(self, filled_cart):
        with pytest.raises(ValidationError) as exc:
            _place(filled_cart, location=TAMBARAM)

        assert "Sorry, we only deliver within 10km" in str(exc.value)
        assert _all(Address) == []
        assert _all(Order) == []
        assert find_cart(filled_cart).item_count == 3

    def test_empty_cart_is_rejected(self, customer_id):
        with pytest.raises(ValidationError) as exc:
            _place(customer_id)
        assert "Your cart is empty" in str(exc.value)

    def test_missing_location_is_rejected(self, filled_cart):
        with pytest.raises(ValidationError) as exc:
            _place(filled_cart, latitude=None, longitude=None)
        assert "Please select your location on the map" in str(exc.value)

    def test_short_address_line_is_rejected(self, filled_cart):
        with pytest.raises(ValidationError) as exc:
            _place(filled_cart, address_line="Anna Ngr")
        assert "Address must be at least 10 characters" in str(exc.value)
        assert _all(Order) == []

    def test_missing_label_is_rejected(self, filled_cart):
        with pytest.raises(ValidationError):
            _place(filled_cart, label="")
        assert _all(Address) == []

    def test_dish_taken_off_the_menu_blocks_checkout(self, filled_cart, menu, admin_id):
        current_domain.process(
            ToggleMenuItemAvailability(actor_id=admin_id, menu_item_id=menu["Chicken Fried Rice"]),
            asynchronous=False,
        )
        with pytest.raises(ValidationError) as exc:
            _place(filled_cart)
        assert "Chicken Fried Rice is no longer available" in str(exc.value)


class TestAtomicity:
    def test_failure_after_address_is_saved_rolls_everything_back(self, filled_cart, monkeypatch):
        def failing_place(*args, **kwargs):
            raise ValidationError({"order": ["Simulated failure"]})

        monkeypatch.setattr(Order, "place", failing_place)

        with pytest.raises(ValidationError):
            _place(filled_cart)

        assert _all(Address) == []
        assert _all(Order) == []
        assert find_cart(filled_cart).item_count == 3
