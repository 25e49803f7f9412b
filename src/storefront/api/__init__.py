"""Storefront API package."""

from storefront.api.errors import register_error_handlers
from storefront.api.routes import cart_router, customer_router, order_router, product_router

__all__ = ["product_router", "customer_router", "cart_router", "order_router", "register_error_handlers"]
