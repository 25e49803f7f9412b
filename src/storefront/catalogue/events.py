"""Domain events for the Product aggregate."""

from protean.fields import DateTime, Float, Identifier, Integer, String

from storefront.domain import storefront


@storefront.event(part_of="Product")
class ProductCreated:
    """A product was added to the catalogue."""

    __version__ = 1

    product_id = Identifier(required=True)
    title = String(required=True, max_length=255)
    price = Float(required=True)
    discount = Float()
    created_at = DateTime(required=True)


@storefront.event(part_of="Product")
class ProductDetailsUpdated:
    __version__ = 1

    product_id = Identifier(required=True)
    title = String(max_length=255)
    price = Float()
    discount = Float()
    updated_at = DateTime(required=True)


@storefront.event(part_of="Product")
class StockLevelChanged:
    """Stock for one variant moved, by an admin adjustment or a checkout."""

    __version__ = 1

    product_id = Identifier(required=True)
    color = String(max_length=100)
    size = String(required=True, max_length=50)
    previous_quantity = Integer(required=True)
    new_quantity = Integer(required=True)
    reason = String(max_length=50)


@storefront.event(part_of="Product")
class ColorAdded:
    __version__ = 1

    product_id = Identifier(required=True)
    name = String(required=True, max_length=100)
    hex_code = String(required=True, max_length=9)


@storefront.event(part_of="Product")
class ColorRemoved:
    __version__ = 1

    product_id = Identifier(required=True)
    name = String(required=True, max_length=100)
