"""Order aggregate — a placed order, its line items and its pricing snapshot.

An Order is created atomically with its line items at checkout and never
edited afterwards except for its status, which only an administrator sets.
The kitchen normally walks an order through

    PLACED → PREPARING → OUT_FOR_DELIVERY → DELIVERED

or CANCELLED, but an administrator may set any status at any time so that a
mis-click can be corrected. DELIVERED and CANCELLED count as completed.

Line items and pricing are denormalized snapshots: later menu edits never
alter what a historical order shows or what it cost.
"""

import json
from datetime import UTC, datetime
from enum import Enum

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import DateTime, Float, HasMany, Identifier, Integer, String, Text, ValueObject

from friendhome.domain import friendhome
from friendhome.order.events import OrderPlaced, OrderStatusChanged

# Rounding slack when comparing two-decimal currency amounts
_CURRENCY_TOLERANCE = 0.005


class OrderStatus(Enum):
    PLACED = "placed"
    PREPARING = "preparing"
    OUT_FOR_DELIVERY = "out_for_delivery"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"


STATUS_LABELS = {
    OrderStatus.PLACED: "Order Placed",
    OrderStatus.PREPARING: "Preparing",
    OrderStatus.OUT_FOR_DELIVERY: "Out for Delivery",
    OrderStatus.DELIVERED: "Delivered",
    OrderStatus.CANCELLED: "Cancelled",
}

TERMINAL_STATUSES = {OrderStatus.DELIVERED, OrderStatus.CANCELLED}


# ---------------------------------------------------------------------------
# Value Objects
# ---------------------------------------------------------------------------
@friendhome.value_object(part_of="Order")
class OrderPricing:
    """Financial summary of an order: subtotal, tax, delivery fee and total.

    Computed once at checkout from the cart and stored verbatim.
    """

    subtotal = Float(default=0.0, min_value=0.0)
    tax = Float(default=0.0, min_value=0.0)
    delivery_fee = Float(default=0.0, min_value=0.0)
    total = Float(default=0.0, min_value=0.0)
    currency = String(max_length=3, default="INR")

    @invariant.post
    def total_is_sum_of_parts(self):
        expected = (self.subtotal or 0.0) + (self.tax or 0.0) + (self.delivery_fee or 0.0)
        if abs((self.total or 0.0) - expected) > _CURRENCY_TOLERANCE:
            raise ValidationError({"total": ["Total must equal subtotal + tax + delivery fee"]})


# ---------------------------------------------------------------------------
# Entities
# ---------------------------------------------------------------------------
@friendhome.entity(part_of="Order")
class OrderItem:
    """An immutable snapshot of one purchased menu item at order time."""

    menu_item_id = Identifier(required=True)
    title = String(required=True, max_length=255)
    quantity = Integer(required=True, min_value=1)
    price = Float(required=True, min_value=0.0)

    @property
    def line_total(self) -> float:
        return self.price * self.quantity


# ---------------------------------------------------------------------------
# Aggregate Root
# ---------------------------------------------------------------------------
@friendhome.aggregate
class Order:
    customer_id = Identifier(required=True)
    address_id = Identifier(required=True)
    status = String(
        choices=OrderStatus,
        default=OrderStatus.PLACED.value,
    )
    items = HasMany(OrderItem)
    pricing = ValueObject(OrderPricing)
    distance_km = Float(required=True, min_value=0.0)
    delivery_radius_km = Float(min_value=0.0)
    notes = Text()
    created_at = DateTime()
    updated_at = DateTime()

    @invariant.post
    def must_be_within_delivery_radius(self):
        if self.delivery_radius_km is None or self.distance_km is None:
            return
        if self.distance_km > self.delivery_radius_km:
            raise ValidationError(
                {
                    "distance_km": [
                        f"Sorry, we only deliver within {self.delivery_radius_km:g}km. "
                        f"Your location is {self.distance_km:.1f}km away."
                    ]
                }
            )

    # -------------------------------------------------------------------
    # Factory method
    # -------------------------------------------------------------------
    @classmethod
    def place(
        cls,
        customer_id,
        address_id,
        lines,
        pricing,
        distance_km,
        max_distance_km,
        notes=None,
        address_label=None,
        address_line=None,
    ):
        """Create a placed order from priced cart lines.

        Args:
            customer_id: The user placing the order.
            address_id: The delivery address created for this order.
            lines: List of dicts with menu_item_id, title, quantity, price.
            pricing: OrderPricing computed from the same lines.
            distance_km: Distance from the restaurant to the delivery point.
            max_distance_km: Delivery radius the order must fall within.
        """
        if not lines:
            raise ValidationError({"items": ["Cannot place an order without items"]})

        subtotal = round(sum(line["price"] * line["quantity"] for line in lines), 2)
        if abs(subtotal - pricing.subtotal) > _CURRENCY_TOLERANCE:
            raise ValidationError({"subtotal": ["Subtotal does not match the order lines"]})

        now = datetime.now(UTC)
        order = cls(
            customer_id=customer_id,
            address_id=address_id,
            status=OrderStatus.PLACED.value,
            items=[
                OrderItem(
                    menu_item_id=line["menu_item_id"],
                    title=line["title"],
                    quantity=line["quantity"],
                    price=line["price"],
                )
                for line in lines
            ],
            pricing=pricing,
            distance_km=round(distance_km, 2),
            delivery_radius_km=max_distance_km,
            notes=notes or None,
            created_at=now,
            updated_at=now,
        )

        order.raise_(
            OrderPlaced(
                order_id=str(order.id),
                customer_id=str(customer_id),
                address_id=str(address_id),
                address_label=address_label,
                address_line=address_line,
                items=json.dumps(
                    [
                        {
                            "menu_item_id": str(item.menu_item_id),
                            "title": item.title,
                            "quantity": item.quantity,
                            "price": item.price,
                        }
                        for item in order.items
                    ]
                ),
                subtotal=pricing.subtotal,
                tax=pricing.tax,
                delivery_fee=pricing.delivery_fee,
                total=pricing.total,
                currency=pricing.currency,
                distance_km=order.distance_km,
                notes=order.notes,
                placed_at=now,
            )
        )
        return order

    # -------------------------------------------------------------------
    # Status workflow
    # -------------------------------------------------------------------
    @property
    def is_active(self) -> bool:
        return OrderStatus(self.status) not in TERMINAL_STATUSES

    def update_status(self, new_status, changed_by=None):
        """Set the order to ``new_status``. Setting the current status is a no-op."""
        try:
            target = OrderStatus(new_status)
        except ValueError:
            raise ValidationError({"status": [f"Unknown order status: {new_status}"]}) from None

        current = OrderStatus(self.status)
        if target == current:
            return

        now = datetime.now(UTC)
        self.status = target.value
        self.updated_at = now

        self.raise_(
            OrderStatusChanged(
                order_id=str(self.id),
                customer_id=str(self.customer_id),
                previous_status=current.value,
                new_status=target.value,
                changed_by=str(changed_by) if changed_by else None,
                changed_at=now,
            )
        )
