"""MenuItem aggregate — a dish on the storefront."""

from datetime import UTC, datetime

from protean.exceptions import ValidationError
from protean.fields import Boolean, DateTime, Float, String, Text

from friendhome.domain import friendhome
from friendhome.menu.events import (
    MenuImageChanged,
    MenuItemAdded,
    MenuItemAvailabilityChanged,
    MenuItemUpdated,
)


@friendhome.aggregate
class MenuItem:
    """A dish customers can add to their cart.

    Unavailable items stay in the admin listing but disappear from the
    storefront and cannot be added to a cart.
    """

    title = String(required=True, max_length=255)
    description = Text()
    category = String(required=True, max_length=100)
    price = Float(required=True, min_value=0.0)
    image_url = String(max_length=1024)
    is_available = Boolean(default=True)
    created_at = DateTime()
    updated_at = DateTime()

    @classmethod
    def add(cls, title, category, price, description=None):
        now = datetime.now(UTC)
        item = cls(
            title=title,
            category=category,
            price=price,
            description=description or None,
            is_available=True,
            created_at=now,
            updated_at=now,
        )
        item.raise_(
            MenuItemAdded(
                menu_item_id=str(item.id),
                title=item.title,
                category=item.category,
                price=item.price,
                description=item.description,
            )
        )
        return item

    def update_details(self, title=None, category=None, price=None, description=None):
        """Edit descriptive fields. Fields left as None keep their value."""
        if title is not None:
            if not title.strip():
                raise ValidationError({"title": ["Title cannot be blank"]})
            self.title = title
        if category is not None:
            if not category.strip():
                raise ValidationError({"category": ["Category cannot be blank"]})
            self.category = category
        if price is not None:
            self.price = price
        if description is not None:
            self.description = description or None
        self.updated_at = datetime.now(UTC)

        self.raise_(
            MenuItemUpdated(
                menu_item_id=str(self.id),
                title=self.title,
                category=self.category,
                price=self.price,
                description=self.description,
            )
        )

    def toggle_availability(self):
        self.is_available = not self.is_available
        self.updated_at = datetime.now(UTC)

        self.raise_(
            MenuItemAvailabilityChanged(
                menu_item_id=str(self.id),
                is_available=self.is_available,
            )
        )

    def attach_image(self, image_url):
        self.image_url = image_url
        self.updated_at = datetime.now(UTC)
        self.raise_(MenuImageChanged(menu_item_id=str(self.id), image_url=image_url))

    def remove_image(self):
        self.image_url = None
        self.updated_at = datetime.now(UTC)
        self.raise_(MenuImageChanged(menu_item_id=str(self.id), image_url=""))
