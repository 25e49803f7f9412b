"""Environment-driven application settings.

Protean's own configuration (providers, processing modes) lives in
``domain.toml``; the values here are storefront business knobs.
"""

import os

from storefront.catalogue.variants import InventoryMode

DEFAULT_PLACEHOLDER_HEX = "#000000"


def inventory_mode() -> InventoryMode:
    """Return the inventory schema generation active for this deployment."""
    raw = os.getenv("STOREFRONT_INVENTORY_MODE", InventoryMode.COLORED.value).strip().lower()
    try:
        return InventoryMode(raw)
    except ValueError:
        raise ValueError(
            f"STOREFRONT_INVENTORY_MODE must be one of {[m.value for m in InventoryMode]}, got {raw!r}"
        ) from None


def placeholder_hex_code() -> str:
    return os.getenv("STOREFRONT_PLACEHOLDER_HEX", DEFAULT_PLACEHOLDER_HEX)


def notification_timeout() -> float:
    """Seconds to wait on the confirmation email before giving up."""
    return float(os.getenv("STOREFRONT_NOTIFICATION_TIMEOUT", "10"))


def new_customer_discount() -> float:
    """Fractional discount applied to a customer's first order (0.10 = 10%)."""
    return float(os.getenv("STOREFRONT_NEW_CUSTOMER_DISCOUNT", "0.10"))
