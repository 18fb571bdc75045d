"""Pydantic request/response schemas for the FriendHome API.

These are external contracts (anti-corruption layer) — separate from
internal Protean commands.
"""

import json
from datetime import datetime

from pydantic import BaseModel, Field


# ---------------------------------------------------------------------------
# Accounts
# ---------------------------------------------------------------------------
class RegisterAccountRequest(BaseModel):
    email: str
    phone: str
    full_name: str

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "email": "priya@example.com",
                    "phone": "9876543210",
                    "full_name": "Priya Raman",
                }
            ]
        }
    }


class UpdateProfileRequest(BaseModel):
    full_name: str | None = None
    phone: str | None = None


class AccountResponse(BaseModel):
    user_id: str
    email: str
    phone: str
    full_name: str
    role: str

    @classmethod
    def from_account(cls, account) -> "AccountResponse":
        return cls(
            user_id=str(account.user_id),
            email=account.email,
            phone=account.phone,
            full_name=account.full_name,
            role=account.role,
        )


# ---------------------------------------------------------------------------
# Menu
# ---------------------------------------------------------------------------
class MenuItemRequest(BaseModel):
    title: str
    category: str
    price: float = Field(ge=0)
    description: str | None = None


class UpdateMenuItemRequest(BaseModel):
    title: str | None = None
    category: str | None = None
    price: float | None = Field(default=None, ge=0)
    description: str | None = None


class MenuItemResponse(BaseModel):
    id: str
    title: str
    description: str | None = None
    category: str
    price: float
    image_url: str | None = None
    is_available: bool

    @classmethod
    def from_item(cls, item) -> "MenuItemResponse":
        return cls(
            id=str(item.id),
            title=item.title,
            description=item.description,
            category=item.category,
            price=item.price,
            image_url=item.image_url,
            is_available=item.is_available,
        )


class AvailabilityResponse(BaseModel):
    is_available: bool


class ImageResponse(BaseModel):
    image_url: str


# ---------------------------------------------------------------------------
# Cart
# ---------------------------------------------------------------------------
class AddToCartRequest(BaseModel):
    menu_item_id: str
    quantity: int = Field(ge=1, default=1)


class UpdateCartQuantityRequest(BaseModel):
    quantity: int


class CartLineResponse(BaseModel):
    menu_item_id: str
    title: str
    price: float
    quantity: int


class CartResponse(BaseModel):
    items: list[CartLineResponse] = []
    item_count: int = 0
    total: float = 0.0

    @classmethod
    def from_cart(cls, cart) -> "CartResponse":
        if cart is None:
            return cls()
        return cls(
            items=[CartLineResponse(**line) for line in cart.lines()],
            item_count=cart.item_count,
            total=cart.total,
        )


# ---------------------------------------------------------------------------
# Checkout
# ---------------------------------------------------------------------------
class CheckoutRequest(BaseModel):
    label: str = ""
    address_line: str = ""
    latitude: float | None = None
    longitude: float | None = None
    notes: str | None = None

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "label": "Home",
                    "address_line": "12, 3rd Cross Street, Anna Nagar West",
                    "latitude": 13.0912,
                    "longitude": 80.2001,
                    "notes": "Less spicy please",
                }
            ]
        }
    }


class QuoteRequest(BaseModel):
    latitude: float | None = None
    longitude: float | None = None


class QuoteResponse(BaseModel):
    item_count: int
    subtotal: float
    tax: float
    delivery_fee: float
    total: float
    currency: str
    max_delivery_km: float
    distance_km: float | None = None
    deliverable: bool | None = None


class OrderIdResponse(BaseModel):
    order_id: str


# ---------------------------------------------------------------------------
# Orders
# ---------------------------------------------------------------------------
class OrderSummaryItem(BaseModel):
    quantity: int
    title: str


class OrderSummaryResponse(BaseModel):
    order_id: str
    status: str
    total: float
    currency: str
    item_count: int
    items: list[OrderSummaryItem]
    customer_name: str | None = None
    customer_phone: str | None = None
    address_label: str | None = None
    address_line: str | None = None
    notes: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @classmethod
    def from_summary(cls, summary) -> "OrderSummaryResponse":
        return cls(
            order_id=str(summary.order_id),
            status=summary.status,
            total=summary.total,
            currency=summary.currency,
            item_count=summary.item_count,
            items=[OrderSummaryItem(**item) for item in json.loads(summary.items or "[]")],
            customer_name=summary.customer_name,
            customer_phone=summary.customer_phone,
            address_label=summary.address_label,
            address_line=summary.address_line,
            notes=summary.notes,
            created_at=summary.created_at,
            updated_at=summary.updated_at,
        )


class OrderBoardResponse(BaseModel):
    active: list[OrderSummaryResponse]
    completed: list[OrderSummaryResponse]


class AddressResponse(BaseModel):
    id: str
    label: str
    line: str
    latitude: float
    longitude: float
    created_at: datetime | None = None

    @classmethod
    def from_address(cls, address) -> "AddressResponse":
        return cls(
            id=str(address.id),
            label=address.label,
            line=address.line,
            latitude=address.location.latitude,
            longitude=address.location.longitude,
            created_at=address.created_at,
        )


class OrderLineResponse(BaseModel):
    menu_item_id: str
    title: str
    quantity: int
    price: float


class OrderDetailResponse(BaseModel):
    order_id: str
    status: str
    items: list[OrderLineResponse]
    subtotal: float
    tax: float
    delivery_fee: float
    total: float
    currency: str
    distance_km: float
    notes: str | None = None
    address: AddressResponse | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @classmethod
    def from_order(cls, order, address=None) -> "OrderDetailResponse":
        return cls(
            order_id=str(order.id),
            status=order.status,
            items=[
                OrderLineResponse(
                    menu_item_id=str(item.menu_item_id),
                    title=item.title,
                    quantity=item.quantity,
                    price=item.price,
                )
                for item in order.items
            ],
            subtotal=order.pricing.subtotal,
            tax=order.pricing.tax,
            delivery_fee=order.pricing.delivery_fee,
            total=order.pricing.total,
            currency=order.pricing.currency,
            distance_km=order.distance_km,
            notes=order.notes,
            address=AddressResponse.from_address(address) if address else None,
            created_at=order.created_at,
            updated_at=order.updated_at,
        )


class UpdateOrderStatusRequest(BaseModel):
    status: str


# ---------------------------------------------------------------------------
# Notifications
# ---------------------------------------------------------------------------
class PushSubscriptionRequest(BaseModel):
    endpoint: str
    p256dh: str
    auth: str


class SubscriptionIdResponse(BaseModel):
    subscription_id: str


# ---------------------------------------------------------------------------
# Shared
# ---------------------------------------------------------------------------
class StatusResponse(BaseModel):
    status: str = "ok"
