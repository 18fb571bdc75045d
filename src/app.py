"""FriendHome FastAPI application.

Web server that processes commands synchronously via HTTP. Every request is
wrapped in the friendhome domain context.

Usage:
    uvicorn app:app --app-dir src --host 0.0.0.0 --port 8000 --reload
"""

# ---------------------------------------------------------------------------
# Domain initialization
# ---------------------------------------------------------------------------
# The domain is initialized at module level so uvicorn workers share it.
# PROTEAN_ENV controls which config overlay is applied:
#   - "test"       → event_processing = "sync"  (projectors fire in UoW)
#   - "production" → event_processing = "async" (projectors fire via Engine)
from pathlib import Path

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from friendhome.domain import friendhome  # noqa: E402
from friendhome.settings import custom_settings
from friendhome.utils.logging import add_context, clear_context
from protean.integrations.fastapi import register_exception_handlers

friendhome.init()

# ---------------------------------------------------------------------------
# FastAPI app
# ---------------------------------------------------------------------------
app = FastAPI(
    title="FriendHome API",
    description="Single-restaurant food ordering — menu, cart, geofenced checkout and live order tracking",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def domain_context_middleware(request: Request, call_next):
    """Push the friendhome domain context for each request."""
    clear_context()
    add_context(method=request.method, path=request.url.path, user_id=request.headers.get("x-user-id"))
    with friendhome.domain_context():
        response = await call_next(request)
    return response


register_exception_handlers(app)

# ---------------------------------------------------------------------------
# Routers
# ---------------------------------------------------------------------------
from friendhome.api.admin_routes import admin_router  # noqa: E402
from friendhome.api.routes import (  # noqa: E402
    account_router,
    address_router,
    cart_router,
    checkout_router,
    menu_router,
    notification_router,
    order_router,
)

app.include_router(account_router)
app.include_router(menu_router)
app.include_router(cart_router)
app.include_router(checkout_router)
app.include_router(order_router)
app.include_router(address_router)
app.include_router(notification_router)
app.include_router(admin_router)

# ---------------------------------------------------------------------------
# Menu images
# ---------------------------------------------------------------------------
with friendhome.domain_context():
    _image_settings = custom_settings()

_image_dir = Path(_image_settings["menu_image_dir"])
_image_dir.mkdir(parents=True, exist_ok=True)
app.mount(_image_settings["menu_image_base_url"], StaticFiles(directory=_image_dir), name="menu-images")


# ---------------------------------------------------------------------------
# Health / root
# ---------------------------------------------------------------------------
@app.get("/health")
async def health():
    return JSONResponse(
        content={
            "status": "ok",
            "domain": friendhome.name,
        }
    )
