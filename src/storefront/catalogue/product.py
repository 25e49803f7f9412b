"""Product aggregate root with its embedded inventory.

A product owns its stock exclusively: ``Colorway`` entities declare the colors
it comes in (two-dimension mode only) and ``StockRecord`` entities hold one
quantity per variant. All stock access goes through ``Product.ledger``, which
picks the ledger matching the deployment's inventory mode.
"""

from datetime import UTC, datetime
from enum import Enum

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import DateTime, Float, HasMany, Integer, String, Text

from storefront.catalogue import pricing
from storefront.catalogue.events import (
    ColorAdded,
    ColorRemoved,
    ProductCreated,
    ProductDetailsUpdated,
    StockLevelChanged,
)
from storefront.catalogue.ledger import ledger_for
from storefront.domain import storefront
from storefront.exceptions import InsufficientStockError


class Gender(Enum):
    BOY = "boy"
    GIRL = "girl"
    UNISEX = "unisex"


class StockChangeReason(Enum):
    ADJUSTMENT = "adjustment"
    RESTOCK = "restock"
    REDUCTION = "reduction"
    CHECKOUT = "checkout"


@storefront.entity(part_of="Product")
class Colorway:
    name = String(required=True, max_length=100)
    hex_code = String(required=True, max_length=9)


@storefront.entity(part_of="Product")
class StockRecord:
    """Quantity on hand for one variant. ``color`` is empty in sized mode."""

    color = String(max_length=100)
    size = String(required=True, max_length=50)
    quantity = Integer(default=0, min_value=0)


@storefront.aggregate
class Product:
    title = String(required=True, max_length=255)
    description = Text()
    price = Float(required=True, min_value=0.0)
    discount = Float(default=0.0, min_value=0.0, max_value=100.0)
    gender = String(choices=Gender, required=True)
    category = String(max_length=100)
    brand = String(max_length=100)
    image = String(max_length=500)
    colors = HasMany(Colorway)
    stock_records = HasMany(StockRecord)
    created_at = DateTime()
    updated_at = DateTime()

    @invariant.post
    def color_names_must_be_unique(self):
        names = [c.name for c in self.colors]
        if len(names) != len(set(names)):
            raise ValidationError({"colors": ["Color names must be unique within a product"]})

    @invariant.post
    def variants_must_be_unique(self):
        keys = [(r.color, r.size) for r in self.stock_records]
        if len(keys) != len(set(keys)):
            raise ValidationError({"stock": ["Each size may appear only once per color"]})

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @classmethod
    def create(
        cls,
        title,
        price,
        gender,
        discount=0.0,
        description=None,
        category=None,
        brand=None,
        image=None,
        stock=None,
    ):
        """Create a product, seeding inventory from ``stock``.

        ``stock`` follows the active inventory mode: a list of
        ``{size, quantity}`` in sized mode, or a list of
        ``{name, hex_code, inventory: [{size, quantity}]}`` in colored mode.
        """
        now = datetime.now(UTC)
        product = cls(
            title=title,
            price=price,
            discount=discount or 0.0,
            gender=gender,
            description=description,
            category=category,
            brand=brand,
            image=image,
            created_at=now,
            updated_at=now,
        )
        product.ledger.load(stock)
        product.raise_(
            ProductCreated(
                product_id=str(product.id),
                title=title,
                price=price,
                discount=product.discount,
                created_at=now,
            )
        )
        return product

    def update_details(self, **fields):
        """Update catalogue attributes. Inventory is managed separately."""
        editable = ("title", "description", "price", "discount", "gender", "category", "brand", "image")
        for name in editable:
            if fields.get(name) is not None:
                setattr(self, name, fields[name])

        now = datetime.now(UTC)
        self.updated_at = now
        self.raise_(
            ProductDetailsUpdated(
                product_id=str(self.id),
                title=self.title,
                price=self.price,
                discount=self.discount,
                updated_at=now,
            )
        )

    # -------------------------------------------------------------------
    # Inventory
    # -------------------------------------------------------------------
    @property
    def ledger(self):
        return ledger_for(self)

    def selector(self, size, color=None):
        return self.ledger.selector(size, color)

    def is_available(self, selector, requested_quantity=1) -> bool:
        return self.ledger.is_available(selector, requested_quantity)

    def quantity_for(self, selector) -> int:
        return self.ledger.quantity_for(selector)

    def set_stock(self, selector, quantity):
        previous, new = self.ledger.set_quantity(selector, quantity)
        self._stock_changed(selector, previous, new, StockChangeReason.ADJUSTMENT)

    def add_stock(self, selector, quantity):
        previous, new = self.ledger.increase(selector, quantity)
        self._stock_changed(selector, previous, new, StockChangeReason.RESTOCK)

    def reduce_stock(self, selector, quantity, reason=StockChangeReason.CHECKOUT) -> bool:
        previous = self.ledger.quantity_for(selector)
        if not self.ledger.reduce(selector, quantity):
            return False
        self._stock_changed(selector, previous, previous - quantity, reason)
        return True

    def withdraw_stock(self, selector, quantity):
        """Reduce stock outside checkout, failing loudly when stock is short."""
        if not self.reduce_stock(selector, quantity, reason=StockChangeReason.REDUCTION):
            raise InsufficientStockError(selector, quantity, self.ledger.quantity_for(selector))

    def add_color(self, name, hex_code, inventory=None):
        self.ledger.add_color(name, hex_code, inventory)
        self.updated_at = datetime.now(UTC)
        self.raise_(ColorAdded(product_id=str(self.id), name=name, hex_code=hex_code))

    def remove_color(self, name):
        if self.ledger.remove_color(name):
            self.updated_at = datetime.now(UTC)
            self.raise_(ColorRemoved(product_id=str(self.id), name=name))

    def replace_color_stock(self, name, inventory):
        self.ledger.replace_color_stock(name, inventory)
        self.updated_at = datetime.now(UTC)

    def _stock_changed(self, selector, previous, new, reason):
        self.updated_at = datetime.now(UTC)
        self.raise_(
            StockLevelChanged(
                product_id=str(self.id),
                color=selector.color,
                size=selector.size,
                previous_quantity=previous,
                new_quantity=new,
                reason=reason.value,
            )
        )

    # Entity primitives used by the ledgers
    def _find_stock(self, color, size):
        return next((r for r in self.stock_records if r.color == color and r.size == size), None)

    def _append_stock(self, color, size, quantity):
        self.add_stock_records(StockRecord(color=color, size=size, quantity=quantity))

    def _drop_stock(self, record):
        self.remove_stock_records(record)

    def _find_colorway(self, name):
        return next((c for c in self.colors if c.name == name), None)

    def _append_colorway(self, name, hex_code):
        self.add_colors(Colorway(name=name, hex_code=hex_code))

    def _drop_colorway(self, colorway):
        self.remove_colors(colorway)

    # -------------------------------------------------------------------
    # Derived views (never stored)
    # -------------------------------------------------------------------
    @property
    def total_quantity(self) -> int:
        return self.ledger.total_quantity()

    @property
    def available_sizes(self) -> list[str]:
        return self.ledger.available_sizes()

    @property
    def available_colors(self) -> list[dict]:
        return self.ledger.available_colors()

    @property
    def discounted_price(self) -> float:
        return pricing.discounted_price(self)

    @property
    def savings(self) -> float:
        return pricing.savings_for(self, True)

    @property
    def is_on_sale(self) -> bool:
        return bool(self.discount and self.discount > 0)
