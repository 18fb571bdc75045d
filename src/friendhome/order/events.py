"""Domain events for the Order aggregate."""

from protean.fields import DateTime, Float, Identifier, String, Text

from friendhome.domain import friendhome


@friendhome.event(part_of="Order")
class OrderPlaced:
    """A customer's cart was converted into a placed order at checkout."""

    __version__ = 1

    order_id = Identifier(required=True)
    customer_id = Identifier(required=True)
    address_id = Identifier(required=True)
    address_label = String()
    address_line = Text()
    items = Text(required=True)  # JSON: list of {menu_item_id, title, quantity, price}
    subtotal = Float(required=True)
    tax = Float(required=True)
    delivery_fee = Float(required=True)
    total = Float(required=True)
    currency = String(max_length=3)
    distance_km = Float(required=True)
    notes = Text()
    placed_at = DateTime(required=True)


@friendhome.event(part_of="Order")
class OrderStatusChanged:
    """An administrator moved an order to a new status."""

    __version__ = 1

    order_id = Identifier(required=True)
    customer_id = Identifier(required=True)
    previous_status = String(required=True)
    new_status = String(required=True)
    changed_by = Identifier()
    changed_at = DateTime(required=True)
