"""Domain events for the MenuItem aggregate."""

from protean.fields import Boolean, Float, Identifier, String, Text

from friendhome.domain import friendhome


@friendhome.event(part_of="MenuItem")
class MenuItemAdded:
    """A new dish was added to the menu."""

    __version__ = 1

    menu_item_id = Identifier(required=True)
    title = String(required=True)
    category = String(required=True)
    price = Float(required=True)
    description = Text()


@friendhome.event(part_of="MenuItem")
class MenuItemUpdated:
    """A dish's title, description, category or price was edited."""

    __version__ = 1

    menu_item_id = Identifier(required=True)
    title = String(required=True)
    category = String(required=True)
    price = Float(required=True)
    description = Text()


@friendhome.event(part_of="MenuItem")
class MenuItemAvailabilityChanged:
    """A dish was taken off, or put back on, the storefront."""

    __version__ = 1

    menu_item_id = Identifier(required=True)
    is_available = Boolean(required=True)


@friendhome.event(part_of="MenuItem")
class MenuImageChanged:
    """A dish's photo was uploaded or removed. An empty URL means removed."""

    __version__ = 1

    menu_item_id = Identifier(required=True)
    image_url = String(max_length=1024)
