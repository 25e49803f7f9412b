"""Domain events for the Customer aggregate."""

from protean.fields import DateTime, Identifier, String

from storefront.domain import storefront


@storefront.event(part_of="Customer")
class CustomerRegistered:
    __version__ = 1

    customer_id = Identifier(required=True)
    name = String(required=True, max_length=150)
    email = String(required=True, max_length=254)
    registered_at = DateTime(required=True)


@storefront.event(part_of="Customer")
class NewCustomerDiscountRedeemed:
    """The customer's first order consumed the new-customer discount."""

    __version__ = 1

    customer_id = Identifier(required=True)
    order_id = Identifier(required=True)
