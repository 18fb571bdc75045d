"""Read-side queries over orders, addresses and the menu."""

from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from friendhome.address.address import Address
from friendhome.menu.menu_item import MenuItem
from friendhome.order.order import Order
from friendhome.projections.order_summary import OrderSummary


def _newest_first(records):
    return sorted(records, key=lambda r: r.created_at, reverse=True)


def order_history(customer_id) -> list:
    repo = current_domain.repository_for(OrderSummary)
    return _newest_first(repo._dao.query.filter(customer_id=str(customer_id)).all().items)


def order_board() -> dict:
    """All orders, newest first, split into ``active`` and ``completed``."""
    summaries = _newest_first(current_domain.repository_for(OrderSummary)._dao.query.all().items)
    return {
        "active": [s for s in summaries if s.is_active],
        "completed": [s for s in summaries if not s.is_active],
    }


def order_for_customer(order_id, customer_id) -> tuple[Order, Address | None]:
    """Return an order with its delivery address, visible only to its owner.

    Raises ObjectNotFoundError for unknown orders and for other customers'
    orders alike, so order ids cannot be probed.
    """
    order = current_domain.repository_for(Order).get(order_id)
    if str(order.customer_id) != str(customer_id):
        raise ObjectNotFoundError(f"Order with id {order_id} does not exist")

    try:
        address = current_domain.repository_for(Address).get(order.address_id)
    except ObjectNotFoundError:
        address = None
    return order, address


def addresses_for(customer_id) -> list:
    repo = current_domain.repository_for(Address)
    return _newest_first(repo._dao.query.filter(customer_id=str(customer_id)).all().items)


def _by_category(items):
    return sorted(items, key=lambda i: (i.category, i.title))


def storefront_menu() -> list:
    """Available dishes ordered by category then title."""
    return _by_category(current_domain.repository_for(MenuItem)._dao.query.filter(is_available=True).all().items)


def admin_menu() -> list:
    """Every dish, available or not, ordered by category then title."""
    return _by_category(current_domain.repository_for(MenuItem)._dao.query.all().items)


def menu_categories() -> list[str]:
    """Distinct categories of the available dishes, alphabetically."""
    return sorted({item.category for item in storefront_menu()})
