"""HTTP surface of the canteen backend."""

from fastapi import FastAPI

from canteen.api.admin import router as admin_router
from canteen.api.auth import router as auth_router
from canteen.api.cart import router as cart_router
from canteen.api.errors import register_exception_handlers
from canteen.api.health import router as health_router
from canteen.api.menu import router as menu_router
from canteen.api.orders import router as order_router
from canteen.api.users import router as user_router

ROUTERS = [
    health_router,
    auth_router,
    user_router,
    menu_router,
    admin_router,
    cart_router,
    order_router,
]


def install_api(app: FastAPI) -> FastAPI:
    """Attach every router and the error envelope handlers to ``app``."""
    register_exception_handlers(app)
    for router in ROUTERS:
        app.include_router(router)
    return app


__all__ = [
    "ROUTERS",
    "admin_router",
    "auth_router",
    "cart_router",
    "health_router",
    "install_api",
    "menu_router",
    "order_router",
    "user_router",
]
