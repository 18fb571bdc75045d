"""Status alerts — push the customer a notification whenever their order moves.

Dispatch is fire-and-forget: a failed push is logged and never undoes or
blocks the status change that triggered it.
"""

import structlog
from protean.utils.mixins import handle

from friendhome.domain import friendhome
from friendhome.notifications.channel import get_push_channel
from friendhome.notifications.subscription import subscriptions_for
from friendhome.order.events import OrderStatusChanged
from friendhome.order.order import STATUS_LABELS, Order, OrderStatus

logger = structlog.get_logger(__name__)

_STATUS_MESSAGES = {
    OrderStatus.PLACED: "Your order is back in the queue.",
    OrderStatus.PREPARING: "The kitchen has started preparing your order.",
    OrderStatus.OUT_FOR_DELIVERY: "Your order is on its way.",
    OrderStatus.DELIVERED: "Your order has been delivered. Enjoy your meal!",
    OrderStatus.CANCELLED: "Your order has been cancelled.",
}


def status_alert(order_id: str, status: str) -> tuple[str, str]:
    """Title and body of the push sent when an order reaches ``status``."""
    state = OrderStatus(status)
    title = f"Order #{order_id[:8]}: {STATUS_LABELS[state]}"
    body = _STATUS_MESSAGES.get(state, f"Your order is now {STATUS_LABELS[state].lower()}.")
    return title, body


@friendhome.event_handler(part_of=Order)
class OrderStatusAlertsHandler:
    @handle(OrderStatusChanged)
    def on_status_changed(self, event: OrderStatusChanged) -> None:
        subscriptions = subscriptions_for(event.customer_id)
        if not subscriptions:
            logger.debug("No push subscriptions, skipping status alert", order_id=str(event.order_id))
            return

        title, body = status_alert(str(event.order_id), event.new_status)
        channel = get_push_channel()
        data = {"order_id": str(event.order_id), "status": event.new_status, "url": f"/orders/{event.order_id}"}

        for subscription in subscriptions:
            try:
                result = channel.send(subscription.as_payload(), title, body, data)
            except Exception:
                logger.exception("Push dispatch raised", order_id=str(event.order_id))
                continue

            if result.get("status") != "sent":
                logger.warning(
                    "Push dispatch failed",
                    order_id=str(event.order_id),
                    error=result.get("error"),
                )
