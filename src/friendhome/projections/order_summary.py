"""Order summary — the customer's order history and the kitchen's order board."""

import json

from protean.core.projector import on
from protean.exceptions import ObjectNotFoundError
from protean.fields import DateTime, Float, Identifier, Integer, String, Text
from protean.utils.globals import current_domain

from friendhome.accounts.account import Account
from friendhome.domain import friendhome
from friendhome.order.events import OrderPlaced, OrderStatusChanged
from friendhome.order.order import Order, OrderStatus


@friendhome.projection
class OrderSummary:
    order_id = Identifier(identifier=True, required=True)
    customer_id = Identifier(required=True)
    customer_name = String(max_length=150)
    customer_phone = String(max_length=20)
    status = String(required=True)
    total = Float()
    currency = String(default="INR")
    item_count = Integer(default=0)
    items = Text()  # JSON: list of {quantity, title}
    address_label = String(max_length=50)
    address_line = Text()
    distance_km = Float()
    notes = Text()
    created_at = DateTime()
    updated_at = DateTime()

    @property
    def is_active(self) -> bool:
        return self.status not in (OrderStatus.DELIVERED.value, OrderStatus.CANCELLED.value)


@friendhome.projector(projector_for=OrderSummary, aggregates=[Order])
class OrderSummaryProjector:
    @on(OrderPlaced)
    def on_order_placed(self, event):
        items = json.loads(event.items) if isinstance(event.items, str) else []

        try:
            account = current_domain.repository_for(Account).get(str(event.customer_id))
        except ObjectNotFoundError:
            account = None

        current_domain.repository_for(OrderSummary).add(
            OrderSummary(
                order_id=event.order_id,
                customer_id=event.customer_id,
                customer_name=account.full_name if account else None,
                customer_phone=account.phone if account else None,
                status=OrderStatus.PLACED.value,
                total=event.total,
                currency=event.currency or "INR",
                item_count=sum(item["quantity"] for item in items),
                items=json.dumps([{"quantity": item["quantity"], "title": item["title"]} for item in items]),
                address_label=event.address_label,
                address_line=event.address_line,
                distance_km=event.distance_km,
                notes=event.notes,
                created_at=event.placed_at,
                updated_at=event.placed_at,
            )
        )

    @on(OrderStatusChanged)
    def on_status_changed(self, event):
        repo = current_domain.repository_for(OrderSummary)
        summary = repo.get(event.order_id)
        summary.status = event.new_status
        summary.updated_at = event.changed_at
        repo.add(summary)
