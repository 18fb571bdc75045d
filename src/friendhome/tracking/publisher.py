"""Publishes order status changes to the live change feed."""

from protean.utils.mixins import handle

from friendhome.domain import friendhome
from friendhome.order.events import OrderStatusChanged
from friendhome.order.order import Order
from friendhome.tracking.feed import OrderChange, get_feed


@friendhome.event_handler(part_of=Order)
class OrderChangePublisher:
    @handle(OrderStatusChanged)
    def on_status_changed(self, event: OrderStatusChanged) -> None:
        get_feed().publish(
            OrderChange(
                order_id=str(event.order_id),
                status=event.new_status,
                updated_at=event.changed_at,
            )
        )
