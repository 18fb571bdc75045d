"""FastAPI routes for administrators — menu management, order board and roles."""

from fastapi import APIRouter, HTTPException, Request
from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from friendhome.accounts.registration import GrantAdminRole
from friendhome.api.deps import AdminUser
from friendhome.api.schemas import (
    AvailabilityResponse,
    ImageResponse,
    MenuItemRequest,
    MenuItemResponse,
    OrderBoardResponse,
    OrderSummaryResponse,
    StatusResponse,
    UpdateMenuItemRequest,
    UpdateOrderStatusRequest,
)
from friendhome.menu.images import upload_menu_image
from friendhome.menu.management import (
    AddMenuItem,
    RemoveMenuImage,
    ToggleMenuItemAvailability,
    UpdateMenuItem,
)
from friendhome.menu.menu_item import MenuItem
from friendhome.order.status import UpdateOrderStatus
from friendhome.projections.queries import admin_menu, order_board

admin_router = APIRouter(prefix="/admin", tags=["admin"])


def _menu_item(menu_item_id: str) -> MenuItem:
    try:
        return current_domain.repository_for(MenuItem).get(menu_item_id)
    except ObjectNotFoundError:
        raise HTTPException(status_code=404, detail="Menu item not found") from None


# ---------------------------------------------------------------------------
# Menu
# ---------------------------------------------------------------------------
@admin_router.get("/menu", response_model=list[MenuItemResponse])
async def list_all_menu_items(admin_id: AdminUser) -> list[MenuItemResponse]:  # noqa: ARG001
    return [MenuItemResponse.from_item(item) for item in admin_menu()]


@admin_router.post("/menu", status_code=201, response_model=MenuItemResponse)
async def add_menu_item(body: MenuItemRequest, admin_id: AdminUser) -> MenuItemResponse:
    command = AddMenuItem(
        actor_id=admin_id,
        title=body.title,
        category=body.category,
        price=body.price,
        description=body.description,
    )
    menu_item_id = current_domain.process(command, asynchronous=False)
    return MenuItemResponse.from_item(_menu_item(menu_item_id))


@admin_router.put("/menu/{menu_item_id}", response_model=MenuItemResponse)
async def update_menu_item(menu_item_id: str, body: UpdateMenuItemRequest, admin_id: AdminUser) -> MenuItemResponse:
    _menu_item(menu_item_id)
    command = UpdateMenuItem(
        actor_id=admin_id,
        menu_item_id=menu_item_id,
        title=body.title,
        category=body.category,
        price=body.price,
        description=body.description,
    )
    current_domain.process(command, asynchronous=False)
    return MenuItemResponse.from_item(_menu_item(menu_item_id))


@admin_router.put("/menu/{menu_item_id}/availability", response_model=AvailabilityResponse)
async def toggle_menu_item(menu_item_id: str, admin_id: AdminUser) -> AvailabilityResponse:
    _menu_item(menu_item_id)
    command = ToggleMenuItemAvailability(actor_id=admin_id, menu_item_id=menu_item_id)
    is_available = current_domain.process(command, asynchronous=False)
    return AvailabilityResponse(is_available=is_available)


@admin_router.put("/menu/{menu_item_id}/image", response_model=ImageResponse)
async def upload_image(
    menu_item_id: str,
    request: Request,
    admin_id: AdminUser,
) -> ImageResponse:
    """Upload a photo as the raw request body; ``Content-Type`` must be JPEG, PNG, WebP or GIF."""
    _menu_item(menu_item_id)
    data = await request.body()
    image_url = upload_menu_image(
        actor_id=admin_id,
        menu_item_id=menu_item_id,
        data=data,
        content_type=request.headers.get("content-type"),
    )
    return ImageResponse(image_url=image_url)


@admin_router.delete("/menu/{menu_item_id}/image", response_model=StatusResponse)
async def remove_image(menu_item_id: str, admin_id: AdminUser) -> StatusResponse:
    _menu_item(menu_item_id)
    current_domain.process(RemoveMenuImage(actor_id=admin_id, menu_item_id=menu_item_id), asynchronous=False)
    return StatusResponse()


# ---------------------------------------------------------------------------
# Orders
# ---------------------------------------------------------------------------
@admin_router.get("/orders", response_model=OrderBoardResponse)
async def get_order_board(admin_id: AdminUser) -> OrderBoardResponse:  # noqa: ARG001
    board = order_board()
    return OrderBoardResponse(
        active=[OrderSummaryResponse.from_summary(s) for s in board["active"]],
        completed=[OrderSummaryResponse.from_summary(s) for s in board["completed"]],
    )


@admin_router.put("/orders/{order_id}/status", response_model=StatusResponse)
async def update_order_status(order_id: str, body: UpdateOrderStatusRequest, admin_id: AdminUser) -> StatusResponse:
    command = UpdateOrderStatus(actor_id=admin_id, order_id=order_id, status=body.status)
    try:
        status = current_domain.process(command, asynchronous=False)
    except ObjectNotFoundError:
        raise HTTPException(status_code=404, detail="Order not found") from None
    return StatusResponse(status=status)


# ---------------------------------------------------------------------------
# Accounts
# ---------------------------------------------------------------------------
@admin_router.put("/accounts/{user_id}/admin", response_model=StatusResponse)
async def grant_admin(user_id: str, admin_id: AdminUser) -> StatusResponse:
    try:
        current_domain.process(GrantAdminRole(user_id=user_id, granted_by=admin_id), asynchronous=False)
    except ObjectNotFoundError:
        raise HTTPException(status_code=404, detail="Account not found") from None
    return StatusResponse()
