"""FastAPI routes for customers — accounts, menu, cart, checkout, orders and alerts."""

import json

from fastapi import APIRouter, HTTPException, Request
from fastapi.responses import StreamingResponse
from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from friendhome.accounts.account import Account
from friendhome.accounts.registration import RegisterAccount, UpdateProfile
from friendhome.api.deps import CurrentUser
from friendhome.api.schemas import (
    AccountResponse,
    AddressResponse,
    AddToCartRequest,
    CartResponse,
    CheckoutRequest,
    MenuItemResponse,
    OrderDetailResponse,
    OrderIdResponse,
    OrderSummaryResponse,
    PushSubscriptionRequest,
    QuoteRequest,
    QuoteResponse,
    RegisterAccountRequest,
    StatusResponse,
    SubscriptionIdResponse,
    UpdateCartQuantityRequest,
    UpdateProfileRequest,
)
from friendhome.cart.items import AddToCart, ClearCart, RemoveFromCart, UpdateCartQuantity, find_cart
from friendhome.checkout.placement import PlaceOrder
from friendhome.checkout.quote import quote
from friendhome.notifications.subscription import SubscribePush, UnsubscribePush
from friendhome.order.order import OrderStatus
from friendhome.projections.queries import (
    addresses_for,
    menu_categories,
    order_for_customer,
    order_history,
    storefront_menu,
)
from friendhome.tracking.feed import get_feed

# Seconds between SSE keepalive comments while no change arrives
KEEPALIVE_SECONDS = 15

# ---------------------------------------------------------------------------
# Account Router
# ---------------------------------------------------------------------------
account_router = APIRouter(prefix="/accounts", tags=["accounts"])


@account_router.post("", status_code=201, response_model=AccountResponse)
async def register_account(body: RegisterAccountRequest, user_id: CurrentUser) -> AccountResponse:
    command = RegisterAccount(
        user_id=user_id,
        email=body.email,
        phone=body.phone,
        full_name=body.full_name,
    )
    current_domain.process(command, asynchronous=False)
    return AccountResponse.from_account(current_domain.repository_for(Account).get(user_id))


@account_router.get("/me", response_model=AccountResponse)
async def get_my_account(user_id: CurrentUser) -> AccountResponse:
    try:
        account = current_domain.repository_for(Account).get(user_id)
    except ObjectNotFoundError:
        raise HTTPException(status_code=404, detail="Profile not found") from None
    return AccountResponse.from_account(account)


@account_router.put("/me", response_model=AccountResponse)
async def update_my_account(body: UpdateProfileRequest, user_id: CurrentUser) -> AccountResponse:
    command = UpdateProfile(
        user_id=user_id,
        full_name=body.full_name,
        phone=body.phone,
    )
    current_domain.process(command, asynchronous=False)
    return AccountResponse.from_account(current_domain.repository_for(Account).get(user_id))


# ---------------------------------------------------------------------------
# Menu Router
# ---------------------------------------------------------------------------
menu_router = APIRouter(prefix="/menu", tags=["menu"])


@menu_router.get("", response_model=list[MenuItemResponse])
async def list_menu() -> list[MenuItemResponse]:
    return [MenuItemResponse.from_item(item) for item in storefront_menu()]


@menu_router.get("/categories", response_model=list[str])
async def list_menu_categories() -> list[str]:
    return menu_categories()


# ---------------------------------------------------------------------------
# Cart Router
# ---------------------------------------------------------------------------
cart_router = APIRouter(prefix="/cart", tags=["cart"])


@cart_router.get("", response_model=CartResponse)
async def get_cart(user_id: CurrentUser) -> CartResponse:
    return CartResponse.from_cart(find_cart(user_id))


@cart_router.post("/items", response_model=CartResponse)
async def add_cart_item(body: AddToCartRequest, user_id: CurrentUser) -> CartResponse:
    command = AddToCart(
        customer_id=user_id,
        menu_item_id=body.menu_item_id,
        quantity=body.quantity,
    )
    current_domain.process(command, asynchronous=False)
    return CartResponse.from_cart(find_cart(user_id))


@cart_router.put("/items/{item_id}", response_model=CartResponse)
async def update_cart_item(item_id: str, body: UpdateCartQuantityRequest, user_id: CurrentUser) -> CartResponse:
    command = UpdateCartQuantity(
        customer_id=user_id,
        menu_item_id=item_id,
        new_quantity=body.quantity,
    )
    current_domain.process(command, asynchronous=False)
    return CartResponse.from_cart(find_cart(user_id))


@cart_router.delete("/items/{item_id}", response_model=CartResponse)
async def remove_cart_item(item_id: str, user_id: CurrentUser) -> CartResponse:
    current_domain.process(RemoveFromCart(customer_id=user_id, menu_item_id=item_id), asynchronous=False)
    return CartResponse.from_cart(find_cart(user_id))


@cart_router.delete("", response_model=CartResponse)
async def clear_cart(user_id: CurrentUser) -> CartResponse:
    current_domain.process(ClearCart(customer_id=user_id), asynchronous=False)
    return CartResponse.from_cart(find_cart(user_id))


# ---------------------------------------------------------------------------
# Checkout Router
# ---------------------------------------------------------------------------
checkout_router = APIRouter(prefix="/checkout", tags=["checkout"])


@checkout_router.post("", status_code=201, response_model=OrderIdResponse)
async def place_order(body: CheckoutRequest, user_id: CurrentUser) -> OrderIdResponse:
    command = PlaceOrder(
        customer_id=user_id,
        label=body.label,
        address_line=body.address_line,
        latitude=body.latitude,
        longitude=body.longitude,
        notes=body.notes,
    )
    order_id = current_domain.process(command, asynchronous=False)
    return OrderIdResponse(order_id=order_id)


@checkout_router.post("/quote", response_model=QuoteResponse)
async def quote_checkout(body: QuoteRequest, user_id: CurrentUser) -> QuoteResponse:
    return QuoteResponse(**quote(user_id, latitude=body.latitude, longitude=body.longitude))


# ---------------------------------------------------------------------------
# Order Router
# ---------------------------------------------------------------------------
order_router = APIRouter(prefix="/orders", tags=["orders"])


def _owned_order(order_id: str, user_id: str):
    try:
        return order_for_customer(order_id, user_id)
    except ObjectNotFoundError:
        raise HTTPException(status_code=404, detail="Order not found") from None


@order_router.get("", response_model=list[OrderSummaryResponse])
async def list_my_orders(user_id: CurrentUser) -> list[OrderSummaryResponse]:
    return [OrderSummaryResponse.from_summary(summary) for summary in order_history(user_id)]


@order_router.get("/{order_id}", response_model=OrderDetailResponse)
async def get_my_order(order_id: str, user_id: CurrentUser) -> OrderDetailResponse:
    order, address = _owned_order(order_id, user_id)
    return OrderDetailResponse.from_order(order, address)


def _sse(change: dict) -> str:
    return f"event: status\ndata: {json.dumps(change)}\n\n"


@order_router.get("/{order_id}/events")
async def stream_order_events(order_id: str, request: Request, user_id: CurrentUser):
    """Stream the order's status changes as Server-Sent Events.

    The first event carries the current status. The stream ends once the
    order reaches a terminal status.
    """
    order, _ = _owned_order(order_id, user_id)
    terminal = {OrderStatus.DELIVERED.value, OrderStatus.CANCELLED.value}
    current = {
        "order_id": str(order.id),
        "status": order.status,
        "updated_at": order.updated_at.isoformat() if order.updated_at else None,
    }
    subscription = None if order.status in terminal else get_feed().subscribe(order.id)

    async def event_generator():
        yield _sse(current)
        if subscription is None:
            return

        async with subscription:
            while True:
                if await request.is_disconnected():
                    break
                try:
                    change = await subscription.next(timeout=KEEPALIVE_SECONDS)
                except StopAsyncIteration:
                    break
                if change is None:
                    yield ": keepalive\n\n"
                    continue
                yield _sse(change.as_dict())
                if change.status in terminal:
                    break

    return StreamingResponse(
        event_generator(),
        media_type="text/event-stream",
        headers={
            "Cache-Control": "no-cache",
            "X-Accel-Buffering": "no",
        },
    )


# ---------------------------------------------------------------------------
# Address Router
# ---------------------------------------------------------------------------
address_router = APIRouter(prefix="/addresses", tags=["addresses"])


@address_router.get("", response_model=list[AddressResponse])
async def list_my_addresses(user_id: CurrentUser) -> list[AddressResponse]:
    return [AddressResponse.from_address(address) for address in addresses_for(user_id)]


# ---------------------------------------------------------------------------
# Notification Router
# ---------------------------------------------------------------------------
notification_router = APIRouter(prefix="/notifications", tags=["notifications"])


@notification_router.post("/subscriptions", status_code=201, response_model=SubscriptionIdResponse)
async def subscribe_push(body: PushSubscriptionRequest, user_id: CurrentUser) -> SubscriptionIdResponse:
    command = SubscribePush(
        user_id=user_id,
        endpoint=body.endpoint,
        p256dh=body.p256dh,
        auth=body.auth,
    )
    subscription_id = current_domain.process(command, asynchronous=False)
    return SubscriptionIdResponse(subscription_id=subscription_id)


@notification_router.delete("/subscriptions", response_model=StatusResponse)
async def unsubscribe_push(user_id: CurrentUser) -> StatusResponse:
    current_domain.process(UnsubscribePush(user_id=user_id), asynchronous=False)
    return StatusResponse()
