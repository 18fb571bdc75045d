"""Order placement — turn the customer's cart into an order at a delivery address.

The handler runs inside the command's unit of work: the address, the order
with its items and the emptied cart are committed together. Validation and
the delivery-zone check happen before anything is written, so a rejected
checkout leaves the cart untouched.
"""

import structlog
from protean import handle
from protean.exceptions import ValidationError
from protean.fields import Float, Identifier, String, Text
from protean.utils.globals import current_domain

from friendhome.address.address import Address
from friendhome.cart.cart import ShoppingCart
from friendhome.cart.items import find_cart
from friendhome.checkout.pricing import FeeSchedule, price_lines
from friendhome.domain import friendhome
from friendhome.menu.menu_item import MenuItem
from friendhome.order.order import Order
from friendhome.shared.geo import DeliveryZone

logger = structlog.get_logger(__name__)


@friendhome.command(part_of="Order")
class PlaceOrder:
    customer_id = Identifier(required=True)
    label = String(max_length=50)
    address_line = Text()
    latitude = Float()
    longitude = Float()
    notes = Text()


def _validate_address_form(command) -> Address:
    """Build the (unsaved) delivery address, raising on any form error."""
    if command.latitude is None or command.longitude is None:
        raise ValidationError({"location": ["Please select your location on the map"]})

    # Address invariants cover the label and line rules
    return Address.record(
        customer_id=command.customer_id,
        label=(command.label or "").strip(),
        line=(command.address_line or "").strip(),
        latitude=command.latitude,
        longitude=command.longitude,
    )


def _ensure_still_available(lines):
    repo = current_domain.repository_for(MenuItem)
    for line in lines:
        item = repo.get(line["menu_item_id"])
        if not item.is_available:
            raise ValidationError({"items": [f"{item.title} is no longer available"]})


@friendhome.command_handler(part_of=Order)
class PlaceOrderHandler:
    @handle(PlaceOrder)
    def place_order(self, command):
        cart = find_cart(command.customer_id)
        if cart is None or not cart.items:
            raise ValidationError({"cart": ["Your cart is empty"]})

        address = _validate_address_form(command)

        zone = DeliveryZone.from_settings()
        distance = zone.ensure_deliverable(address.location.as_tuple())

        lines = cart.lines()
        _ensure_still_available(lines)
        pricing = price_lines(lines, FeeSchedule.from_settings())

        current_domain.repository_for(Address).add(address)

        order = Order.place(
            customer_id=command.customer_id,
            address_id=address.id,
            lines=lines,
            pricing=pricing,
            distance_km=distance,
            max_distance_km=zone.max_km,
            notes=command.notes,
            address_label=address.label,
            address_line=address.line,
        )
        current_domain.repository_for(Order).add(order)

        cart.clear()
        current_domain.repository_for(ShoppingCart).add(cart)

        logger.info(
            "Order placed",
            order_id=str(order.id),
            customer_id=str(command.customer_id),
            items=len(lines),
            total=pricing.total,
            distance_km=order.distance_km,
        )
        return str(order.id)
