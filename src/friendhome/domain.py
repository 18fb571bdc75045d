"""FriendHome bounded context — menu, cart, checkout, orders and tracking.

A single Protean domain backs the whole storefront: the menu catalogue, the
per-user shopping cart, the geofenced checkout that converts a cart into an
order, order status tracking and push-subscription registration.
"""

from protean.domain import Domain

from friendhome.utils.logging import configure_logging, get_logger

configure_logging()

logger = get_logger(__name__)

friendhome = Domain(name="friendhome")
