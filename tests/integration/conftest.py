import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from friendhome.api.admin_routes import admin_router
from friendhome.api.routes import (
    account_router,
    address_router,
    cart_router,
    checkout_router,
    menu_router,
    notification_router,
    order_router,
)
from protean.integrations.fastapi import register_exception_handlers


@pytest.fixture()
def client():
    app = FastAPI()
    for router in (
        account_router,
        menu_router,
        cart_router,
        checkout_router,
        order_router,
        address_router,
        notification_router,
        admin_router,
    ):
        app.include_router(router)
    register_exception_handlers(app)
    return TestClient(app)


@pytest.fixture()
def as_customer(customer_id):
    return {"X-User-Id": customer_id}


@pytest.fixture()
def as_admin(admin_id):
    return {"X-User-Id": admin_id}
