"""Order status workflow — admin command and handler."""

import structlog
from protean import handle
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from friendhome.accounts.roles import ensure_admin
from friendhome.domain import friendhome
from friendhome.order.order import Order

logger = structlog.get_logger(__name__)


@friendhome.command(part_of="Order")
class UpdateOrderStatus:
    actor_id = Identifier(required=True)
    order_id = Identifier(required=True)
    status = String(required=True, max_length=30)


@friendhome.command_handler(part_of=Order)
class UpdateOrderStatusHandler:
    @handle(UpdateOrderStatus)
    def update_order_status(self, command):
        ensure_admin(command.actor_id)

        repo = current_domain.repository_for(Order)
        order = repo.get(command.order_id)
        previous = order.status
        order.update_status(command.status, changed_by=command.actor_id)
        repo.add(order)

        logger.info(
            "Order status updated",
            order_id=str(order.id),
            previous_status=previous,
            new_status=order.status,
        )
        return order.status
