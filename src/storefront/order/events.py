"""Domain events for the Order aggregate."""

from protean.fields import Boolean, DateTime, Float, Identifier, String, Text

from storefront.domain import storefront


@storefront.event(part_of="Order")
class OrderPlaced:
    """Checkout converted a cart into an order and reserved its stock."""

    __version__ = 1

    order_id = Identifier(required=True)
    customer_id = Identifier()
    guest_email = String(max_length=254)
    lines = Text(required=True)  # JSON: list of line dicts
    total_price = Float(required=True)
    new_customer_discount = Boolean(default=False)
    placed_at = DateTime(required=True)


@storefront.event(part_of="Order")
class OrderUpdated:
    __version__ = 1

    order_id = Identifier(required=True)
    changes = Text(required=True)  # JSON: {field: new value}
    updated_at = DateTime(required=True)
