"""Storefront bounded context — catalogue inventory, carts, checkout and orders.

A single domain so that a checkout can read customers, carts and products and
write stock, orders and carts inside one unit of work.
"""

from protean.domain import Domain

from storefront.utils.logging import configure_logging, get_logger

configure_logging()

logger = get_logger(__name__)

storefront = Domain(name="storefront")
