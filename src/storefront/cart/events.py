"""Domain events for the Cart aggregate."""

from protean.fields import Identifier, Integer, String

from storefront.domain import storefront


@storefront.event(part_of="Cart")
class CartItemAdded:
    """A variant was added to the cart, or its quantity merged into an existing line."""

    __version__ = 1

    cart_id = Identifier(required=True)
    product_id = Identifier(required=True)
    size = String(required=True, max_length=50)
    color = String(max_length=100)
    quantity = Integer(required=True)
    line_quantity = Integer(required=True)


@storefront.event(part_of="Cart")
class CartItemUpdated:
    __version__ = 1

    cart_id = Identifier(required=True)
    product_id = Identifier(required=True)
    size = String(required=True, max_length=50)
    color = String(max_length=100)
    previous_quantity = Integer(required=True)
    new_quantity = Integer(required=True)


@storefront.event(part_of="Cart")
class CartItemRemoved:
    __version__ = 1

    cart_id = Identifier(required=True)
    product_id = Identifier(required=True)
    size = String(required=True, max_length=50)
    color = String(max_length=100)


@storefront.event(part_of="Cart")
class CartReconciled:
    """Lines whose stock disappeared were dropped when the cart was read."""

    __version__ = 1

    cart_id = Identifier(required=True)
    removed_count = Integer(required=True)


@storefront.event(part_of="Cart")
class CartCleared:
    __version__ = 1

    cart_id = Identifier(required=True)
