"""Cart item management — commands and handler."""

from protean import handle
from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.fields import Identifier, Integer
from protean.utils.globals import current_domain

from friendhome.cart.cart import ShoppingCart
from friendhome.domain import friendhome
from friendhome.menu.menu_item import MenuItem


@friendhome.command(part_of="ShoppingCart")
class AddToCart:
    customer_id = Identifier(required=True)
    menu_item_id = Identifier(required=True)
    quantity = Integer(default=1, min_value=1)


@friendhome.command(part_of="ShoppingCart")
class UpdateCartQuantity:
    customer_id = Identifier(required=True)
    menu_item_id = Identifier(required=True)
    new_quantity = Integer(required=True)


@friendhome.command(part_of="ShoppingCart")
class RemoveFromCart:
    customer_id = Identifier(required=True)
    menu_item_id = Identifier(required=True)


@friendhome.command(part_of="ShoppingCart")
class ClearCart:
    customer_id = Identifier(required=True)


def find_cart(customer_id):
    """Return the customer's cart, or None if they never added anything."""
    carts = current_domain.repository_for(ShoppingCart)._dao.query.filter(customer_id=str(customer_id)).all().items
    return carts[0] if carts else None


def cart_for(customer_id):
    """Return the customer's cart, creating an empty one on first use."""
    return find_cart(customer_id) or ShoppingCart.create(customer_id=customer_id)


def _existing_cart(customer_id):
    cart = find_cart(customer_id)
    if cart is None:
        raise ValidationError({"cart": ["Your cart is empty"]})
    return cart


@friendhome.command_handler(part_of=ShoppingCart)
class ManageCartItemsHandler:
    @handle(AddToCart)
    def add_to_cart(self, command):
        try:
            menu_item = current_domain.repository_for(MenuItem).get(command.menu_item_id)
        except ObjectNotFoundError:
            raise ValidationError({"menu_item_id": ["Menu item does not exist"]}) from None
        if not menu_item.is_available:
            raise ValidationError({"menu_item_id": [f"{menu_item.title} is currently unavailable"]})

        cart = cart_for(command.customer_id)
        cart.add_item(
            menu_item_id=menu_item.id,
            title=menu_item.title,
            unit_price=menu_item.price,
            quantity=command.quantity,
        )
        current_domain.repository_for(ShoppingCart).add(cart)

    @handle(UpdateCartQuantity)
    def update_cart_quantity(self, command):
        cart = _existing_cart(command.customer_id)
        cart.update_item_quantity(
            menu_item_id=command.menu_item_id,
            new_quantity=command.new_quantity,
        )
        current_domain.repository_for(ShoppingCart).add(cart)

    @handle(RemoveFromCart)
    def remove_from_cart(self, command):
        cart = _existing_cart(command.customer_id)
        cart.remove_item(menu_item_id=command.menu_item_id)
        current_domain.repository_for(ShoppingCart).add(cart)

    @handle(ClearCart)
    def clear_cart(self, command):
        cart = find_cart(command.customer_id)
        if cart is None or not cart.items:
            return
        cart.clear()
        current_domain.repository_for(ShoppingCart).add(cart)
