"""Storefront error taxonomy.

Domain failures extend Protean's ``ValidationError`` so that existing handlers
(and the FastAPI integration) treat them as client errors; each one also
carries a ``details`` dict with the structured data a client needs to act on
the failure, such as the quantity actually in stock.
"""

from protean.exceptions import ObjectNotFoundError, ValidationError

NotFoundError = ObjectNotFoundError


class StorefrontError(ValidationError):
    """Base class for storefront validation failures with structured details."""

    def __init__(self, messages, **details):
        super().__init__(messages)
        self.details = details


class InvalidVariantError(StorefrontError):
    def __init__(self, field, value, valid_options):
        options = sorted(valid_options)
        super().__init__(
            {field: [f"'{value}' is not a valid {field}. Valid options: {', '.join(options) or 'none'}"]},
            valid_options=options,
        )
        self.valid_options = options


class InsufficientStockError(StorefrontError):
    def __init__(self, selector, requested, available):
        super().__init__(
            {"quantity": [f"Only {available} items available for {selector.label}"]},
            requested=requested,
            available=available,
        )
        self.requested = requested
        self.available = available


class InsufficientInventoryError(StorefrontError):
    """Raised by checkout with every offending line, not just the first."""

    def __init__(self, lines):
        super().__init__({"inventory": ["Insufficient inventory for one or more items"]}, lines=lines)
        self.lines = lines


class DuplicateVariantError(StorefrontError):
    def __init__(self, color):
        super().__init__({"color": [f"Color {color} already exists"]}, color=color)


class EmptyCartError(StorefrontError):
    def __init__(self):
        super().__init__({"cart": ["Cart is empty"]})


class TransactionAbortError(Exception):
    """The checkout transaction was rolled back; no partial effects survive."""

    def __init__(self, reason, **details):
        super().__init__(reason)
        self.reason = reason
        self.details = details
