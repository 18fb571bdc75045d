"""Application tests for the order status workflow and its side effects."""

import asyncio
import json

import pytest
from friendhome.checkout.placement import PlaceOrder
from friendhome.notifications.channel import get_push_channel
from friendhome.notifications.subscription import SubscribePush
from friendhome.order.order import Order
from friendhome.order.status import UpdateOrderStatus
from friendhome.projections.order_summary import OrderSummary
from friendhome.projections.queries import order_board, order_history
from friendhome.tracking.feed import get_feed
from protean import current_domain
from protean.exceptions import InvalidOperationError, ValidationError


@pytest.fixture()
def order_id(filled_cart):
    return current_domain.process(
        PlaceOrder(
            customer_id=filled_cart,
            label="Home",
            address_line="12, 3rd Cross Street, Anna Nagar",
            latitude=13.15,
            longitude=80.25,
        ),
        asynchronous=False,
    )


def _move(order_id, status, actor_id):
    return current_domain.process(
        UpdateOrderStatus(actor_id=actor_id, order_id=order_id, status=status),
        asynchronous=False,
    )


class TestUpdateOrderStatus:
    def test_admin_moves_order_forward(self, order_id, admin_id):
        assert _move(order_id, "preparing", admin_id) == "preparing"
        assert current_domain.repository_for(Order).get(order_id).status == "preparing"

    def test_customer_cannot_change_status(self, order_id, customer_id):
        with pytest.raises(InvalidOperationError):
            _move(order_id, "cancelled", customer_id)
        assert current_domain.repository_for(Order).get(order_id).status == "placed"

    def test_unknown_status_is_rejected(self, order_id, admin_id):
        with pytest.raises(ValidationError):
            _move(order_id, "eaten", admin_id)
        assert current_domain.repository_for(Order).get(order_id).status == "placed"

    def test_admin_can_revert_a_delivered_order(self, order_id, admin_id):
        _move(order_id, "delivered", admin_id)
        assert _move(order_id, "out_for_delivery", admin_id) == "out_for_delivery"
        assert current_domain.repository_for(OrderSummary).get(order_id).status == "out_for_delivery"


class TestOrderSummaryProjection:
    def test_placement_creates_summary(self, order_id, customer_id):
        summary = current_domain.repository_for(OrderSummary).get(order_id)
        assert summary.status == "placed"
        assert summary.total == 355.5
        assert summary.item_count == 3
        assert summary.customer_name == "Priya Raman"
        assert summary.customer_phone == "9876543210"
        assert summary.address_line == "12, 3rd Cross Street, Anna Nagar"
        assert sorted(json.loads(summary.items), key=lambda i: i["title"]) == [
            {"quantity": 1, "title": "Chicken Fried Rice"},
            {"quantity": 2, "title": "Masala Dosa"},
        ]

    def test_status_change_updates_summary(self, order_id, admin_id):
        _move(order_id, "preparing", admin_id)
        assert current_domain.repository_for(OrderSummary).get(order_id).status == "preparing"

    def test_history_lists_only_own_orders(self, order_id, customer_id, admin_id):
        assert [str(s.order_id) for s in order_history(customer_id)] == [order_id]
        assert order_history(admin_id) == []

    def test_board_splits_active_and_completed(self, order_id, admin_id):
        assert [str(s.order_id) for s in order_board()["active"]] == [order_id]

        _move(order_id, "cancelled", admin_id)
        board = order_board()
        assert board["active"] == []
        assert [str(s.order_id) for s in board["completed"]] == [order_id]


class TestStatusAlerts:
    def _subscribe(self, user_id, endpoint="https://push.example.com/sub/abc"):
        current_domain.process(
            SubscribePush(user_id=user_id, endpoint=endpoint, p256dh="p256dh-key", auth="auth-secret"),
            asynchronous=False,
        )

    def test_owner_is_pushed_on_status_change(self, order_id, customer_id, admin_id):
        self._subscribe(customer_id)
        _move(order_id, "preparing", admin_id)

        pushes = get_push_channel().sent_pushes
        assert len(pushes) == 1
        assert pushes[0]["endpoint"] == "https://push.example.com/sub/abc"
        assert pushes[0]["title"] == f"Order #{order_id[:8]}: Preparing"
        assert pushes[0]["data"] == {"order_id": order_id, "status": "preparing", "url": f"/orders/{order_id}"}

    def test_every_subscription_of_the_owner_is_pushed(self, order_id, customer_id, admin_id):
        self._subscribe(customer_id, "https://push.example.com/sub/phone")
        self._subscribe(customer_id, "https://push.example.com/sub/laptop")
        self._subscribe(admin_id, "https://push.example.com/sub/kitchen")
        _move(order_id, "preparing", admin_id)

        endpoints = sorted(p["endpoint"] for p in get_push_channel().sent_pushes)
        assert endpoints == ["https://push.example.com/sub/laptop", "https://push.example.com/sub/phone"]

    def test_failed_push_does_not_undo_status_change(self, order_id, customer_id, admin_id):
        self._subscribe(customer_id)
        get_push_channel().configure(should_succeed=False)

        _move(order_id, "preparing", admin_id)
        assert current_domain.repository_for(Order).get(order_id).status == "preparing"

    def test_no_subscription_no_push(self, order_id, admin_id):
        _move(order_id, "preparing", admin_id)
        assert get_push_channel().sent_pushes == []


class TestLiveTracking:
    def test_subscriber_receives_status_change(self, order_id, admin_id):
        async def scenario():
            async with get_feed().subscribe(order_id) as changes:
                _move(order_id, "preparing", admin_id)
                return await asyncio.wait_for(changes.__anext__(), timeout=1)

        change = asyncio.run(scenario())
        assert change.order_id == order_id
        assert change.status == "preparing"
        assert change.updated_at is not None

    def test_subscription_is_removed_on_exit(self, order_id):
        async def scenario():
            async with get_feed().subscribe(order_id):
                assert get_feed().subscriber_count(order_id) == 1

        asyncio.run(scenario())
        assert get_feed().subscriber_count(order_id) == 0
