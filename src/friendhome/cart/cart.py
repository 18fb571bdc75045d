"""Shopping Cart aggregate — the dishes a customer intends to order.

Each customer owns exactly one cart. Lines snapshot the dish title and price
at the moment they are added, so the checkout summary shows what the customer
saw. The cart is emptied once an order is placed from it.
"""

from datetime import UTC, datetime

from protean.exceptions import ValidationError
from protean.fields import DateTime, Float, HasMany, Identifier, Integer, String

from friendhome.cart.events import (
    CartCleared,
    CartItemAdded,
    CartItemRemoved,
    CartQuantityUpdated,
)
from friendhome.domain import friendhome


@friendhome.entity(part_of="ShoppingCart")
class CartItem:
    menu_item_id = Identifier(required=True)
    title = String(required=True, max_length=255)
    unit_price = Float(required=True, min_value=0.0)
    quantity = Integer(required=True, min_value=1)
    added_at = DateTime()

    @property
    def line_total(self) -> float:
        return self.unit_price * self.quantity


@friendhome.aggregate
class ShoppingCart:
    customer_id = Identifier(required=True)
    items = HasMany(CartItem)
    created_at = DateTime()
    updated_at = DateTime()

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @classmethod
    def create(cls, customer_id):
        now = datetime.now(UTC)
        return cls(customer_id=customer_id, created_at=now, updated_at=now)

    # -------------------------------------------------------------------
    # Derived values
    # -------------------------------------------------------------------
    @property
    def item_count(self) -> int:
        return sum(item.quantity for item in self.items)

    @property
    def total(self) -> float:
        return round(sum(item.line_total for item in self.items), 2)

    def lines(self) -> list[dict]:
        """Cart contents in the shape pricing and order placement expect."""
        return [
            {
                "menu_item_id": str(item.menu_item_id),
                "title": item.title,
                "quantity": item.quantity,
                "price": item.unit_price,
            }
            for item in self.items
        ]

    def _find(self, menu_item_id):
        return next((i for i in self.items if str(i.menu_item_id) == str(menu_item_id)), None)

    # -------------------------------------------------------------------
    # Item management
    # -------------------------------------------------------------------
    def add_item(self, menu_item_id, title, unit_price, quantity=1):
        """Add a dish to the cart (or increase its quantity if already present)."""
        if quantity < 1:
            raise ValidationError({"quantity": ["Quantity must be at least 1"]})

        now = datetime.now(UTC)
        existing = self._find(menu_item_id)
        if existing:
            existing.quantity += quantity
        else:
            self.add_items(
                CartItem(
                    menu_item_id=menu_item_id,
                    title=title,
                    unit_price=unit_price,
                    quantity=quantity,
                    added_at=now,
                )
            )
        self.updated_at = now

        self.raise_(
            CartItemAdded(
                cart_id=str(self.id),
                customer_id=str(self.customer_id),
                menu_item_id=str(menu_item_id),
                title=title,
                unit_price=unit_price,
                quantity=quantity,
            )
        )

    def update_item_quantity(self, menu_item_id, new_quantity):
        """Set a line's quantity. Zero or less removes the line."""
        item = self._find(menu_item_id)
        if item is None:
            raise ValidationError({"item_id": ["Item not found in cart"]})

        if new_quantity <= 0:
            self.remove_item(menu_item_id)
            return

        previous_quantity = item.quantity
        item.quantity = new_quantity
        self.updated_at = datetime.now(UTC)

        self.raise_(
            CartQuantityUpdated(
                cart_id=str(self.id),
                menu_item_id=str(menu_item_id),
                previous_quantity=previous_quantity,
                new_quantity=new_quantity,
            )
        )

    def remove_item(self, menu_item_id):
        item = self._find(menu_item_id)
        if item is None:
            raise ValidationError({"item_id": ["Item not found in cart"]})

        self.remove_items(item)
        self.updated_at = datetime.now(UTC)

        self.raise_(CartItemRemoved(cart_id=str(self.id), menu_item_id=str(menu_item_id)))

    def clear(self):
        removed = len(self.items)
        for item in list(self.items):
            self.remove_items(item)
        self.updated_at = datetime.now(UTC)

        self.raise_(
            CartCleared(
                cart_id=str(self.id),
                customer_id=str(self.customer_id),
                items_removed=removed,
            )
        )
