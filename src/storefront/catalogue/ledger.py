"""Inventory ledger — stock accounting for one product.

A ledger wraps a ``Product`` and answers availability questions, and applies
stock mutations, in terms of ``VariantSelector`` values. ``SizeLedger`` serves
the single-dimension schema (stock keyed by size), ``ColorSizeLedger`` the
two-dimension schema (stock keyed by color and size, with declared colors).

Ledgers mutate the product's in-memory entities only. Nothing is persisted
until the product is added back to its repository, so a failed command leaves
stock untouched when its unit of work rolls back.
"""

from abc import ABC, abstractmethod

from protean.exceptions import ValidationError

from storefront import settings
from storefront.catalogue.variants import InventoryMode, VariantSelector
from storefront.exceptions import DuplicateVariantError, InvalidVariantError


class InventoryLedger(ABC):
    mode: InventoryMode

    def __init__(self, product):
        self.product = product

    # -------------------------------------------------------------------
    # Selectors
    # -------------------------------------------------------------------
    @abstractmethod
    def selector(self, size, color=None) -> VariantSelector:
        """Build the canonical selector for this mode from raw request values."""

    @abstractmethod
    def validate(self, selector: VariantSelector) -> None:
        """Raise ``InvalidVariantError`` if the selector names an undeclared variant."""

    # -------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------
    def _record(self, selector):
        return self.product._find_stock(selector.color, selector.size)

    def _records(self):
        return [r for r in self.product.stock_records if self._in_scope(r)]

    @abstractmethod
    def _in_scope(self, record) -> bool: ...

    def is_available(self, selector, requested_quantity=1) -> bool:
        record = self._record(selector)
        return record is not None and record.quantity >= requested_quantity

    def quantity_for(self, selector) -> int:
        record = self._record(selector)
        return record.quantity if record is not None else 0

    def total_quantity(self) -> int:
        return sum(r.quantity for r in self._records())

    def available_sizes(self) -> list[str]:
        sizes = []
        for record in self._records():
            if record.quantity > 0 and record.size not in sizes:
                sizes.append(record.size)
        return sizes

    def available_colors(self) -> list[dict]:
        return []

    # -------------------------------------------------------------------
    # Mutations
    # -------------------------------------------------------------------
    def set_quantity(self, selector, quantity) -> tuple[int, int]:
        """Set stock for a variant, clamped at zero, creating the variant if absent.

        Returns ``(previous, new)`` quantities.
        """
        quantity = max(0, int(quantity))
        record = self._record(selector)
        if record is None:
            self._ensure_bucket(selector)
            self.product._append_stock(selector.color, selector.size, quantity)
            return 0, quantity

        previous = record.quantity
        record.quantity = quantity
        return previous, quantity

    def increase(self, selector, quantity) -> tuple[int, int]:
        if quantity <= 0:
            raise ValidationError({"quantity": ["Quantity must be positive"]})
        return self.set_quantity(selector, self.quantity_for(selector) + quantity)

    def reduce(self, selector, quantity) -> bool:
        """Decrement stock; returns False without mutating when stock is short."""
        if quantity <= 0:
            raise ValidationError({"quantity": ["Quantity must be positive"]})

        record = self._record(selector)
        if record is None or record.quantity < quantity:
            return False

        record.quantity -= quantity
        return True

    def load(self, stock) -> None:
        """Apply an initial stock description in this mode's shape."""
        for entry in stock or []:
            self.set_quantity(self.selector(entry["size"]), entry.get("quantity", 0))

    def _ensure_bucket(self, selector) -> None:
        pass

    def add_color(self, name, hex_code, inventory=None):
        raise ValidationError({"color": ["Colors are not tracked in sized inventory mode"]})

    def remove_color(self, name):
        raise ValidationError({"color": ["Colors are not tracked in sized inventory mode"]})

    def replace_color_stock(self, name, inventory):
        raise ValidationError({"color": ["Colors are not tracked in sized inventory mode"]})


class SizeLedger(InventoryLedger):
    """Stock keyed by size alone."""

    mode = InventoryMode.SIZED

    def selector(self, size, color=None) -> VariantSelector:
        return VariantSelector.of(size)

    def validate(self, selector) -> None:
        # Any size is addressable; an unknown size simply has no stock.
        return None

    def _in_scope(self, record) -> bool:
        return record.color is None


class ColorSizeLedger(InventoryLedger):
    """Stock keyed by (color, size), with colors declared on the product."""

    mode = InventoryMode.COLORED

    def selector(self, size, color=None) -> VariantSelector:
        if not color:
            raise ValidationError({"color": ["Color is required"]})
        return VariantSelector.of(size, color)

    def validate(self, selector) -> None:
        if self.product._find_colorway(selector.color) is None:
            raise InvalidVariantError("color", selector.color, [c.name for c in self.product.colors])

    def _in_scope(self, record) -> bool:
        return record.color is not None

    def total_for_color(self, name) -> int:
        return sum(r.quantity for r in self._records() if r.color == name)

    def available_colors(self) -> list[dict]:
        colors = []
        for colorway in self.product.colors:
            sizes = [
                {"size": r.size, "quantity": r.quantity}
                for r in self._records()
                if r.color == colorway.name and r.quantity > 0
            ]
            if sizes:
                colors.append({"name": colorway.name, "hex_code": colorway.hex_code, "available_sizes": sizes})
        return colors

    def _ensure_bucket(self, selector) -> None:
        if self.product._find_colorway(selector.color) is None:
            self.product._append_colorway(selector.color, settings.placeholder_hex_code())

    def load(self, stock) -> None:
        for entry in stock or []:
            self.add_color(entry["name"], entry.get("hex_code") or entry.get("hexCode"), entry.get("inventory"))

    def add_color(self, name, hex_code, inventory=None):
        if self.product._find_colorway(name) is not None:
            raise DuplicateVariantError(name)
        self.product._append_colorway(name, hex_code)
        for entry in inventory or []:
            self.set_quantity(self.selector(entry["size"], name), entry.get("quantity", 0))

    def remove_color(self, name) -> bool:
        colorway = self.product._find_colorway(name)
        if colorway is None:
            return False
        for record in [r for r in self._records() if r.color == name]:
            self.product._drop_stock(record)
        self.product._drop_colorway(colorway)
        return True

    def replace_color_stock(self, name, inventory):
        """Replace a color's size inventory wholesale, creating the color if needed."""
        if self.product._find_colorway(name) is None:
            self.product._append_colorway(name, settings.placeholder_hex_code())
        for record in [r for r in self._records() if r.color == name]:
            self.product._drop_stock(record)
        for entry in inventory or []:
            self.set_quantity(self.selector(entry["size"], name), entry.get("quantity", 0))


_LEDGERS = {
    InventoryMode.SIZED: SizeLedger,
    InventoryMode.COLORED: ColorSizeLedger,
}


def ledger_for(product, mode: InventoryMode | None = None) -> InventoryLedger:
    """Return the ledger for ``product`` under the deployment's inventory mode."""
    return _LEDGERS[mode or settings.inventory_mode()](product)


def make_selector(size, color=None, mode: InventoryMode | None = None) -> VariantSelector:
    """Build a canonical selector without a product at hand."""
    return _LEDGERS[mode or settings.inventory_mode()](None).selector(size, color)
