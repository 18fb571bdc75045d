"""Domain events for the ShoppingCart aggregate."""

from protean.fields import Float, Identifier, Integer, String

from friendhome.domain import friendhome


@friendhome.event(part_of="ShoppingCart")
class CartItemAdded:
    """A menu item was added to the cart, or its quantity increased."""

    __version__ = 1

    cart_id = Identifier(required=True)
    customer_id = Identifier(required=True)
    menu_item_id = Identifier(required=True)
    title = String(required=True)
    unit_price = Float(required=True)
    quantity = Integer(required=True)


@friendhome.event(part_of="ShoppingCart")
class CartQuantityUpdated:
    __version__ = 1

    cart_id = Identifier(required=True)
    menu_item_id = Identifier(required=True)
    previous_quantity = Integer(required=True)
    new_quantity = Integer(required=True)


@friendhome.event(part_of="ShoppingCart")
class CartItemRemoved:
    __version__ = 1

    cart_id = Identifier(required=True)
    menu_item_id = Identifier(required=True)


@friendhome.event(part_of="ShoppingCart")
class CartCleared:
    """Every line was removed, either by the customer or after checkout."""

    __version__ = 1

    cart_id = Identifier(required=True)
    customer_id = Identifier(required=True)
    items_removed = Integer(required=True)
