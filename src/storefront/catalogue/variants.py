"""Variant selectors — how a purchasable configuration of a product is addressed.

Two inventory schema generations exist: products stocked by size alone, and
products stocked per color and size. A deployment runs exactly one of them;
the selector is the tagged value that carries either ``{size}`` or
``{color, size}``.
"""

from enum import Enum

from protean.fields import String

from storefront.domain import storefront


class InventoryMode(Enum):
    SIZED = "sized"
    COLORED = "colored"


@storefront.value_object
class VariantSelector:
    size = String(required=True, max_length=50)
    color = String(max_length=100)

    @classmethod
    def of(cls, size, color=None):
        return cls(size=size, color=color or None)

    @property
    def is_colored(self) -> bool:
        return self.color is not None

    @property
    def key(self) -> tuple:
        return (self.color, self.size)

    @property
    def label(self) -> str:
        if self.is_colored:
            return f"color {self.color} size {self.size}"
        return f"size {self.size}"

    def matches(self, color, size) -> bool:
        return self.key == (color or None, size)
