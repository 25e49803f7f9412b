"""Inventory administration — commands and handler.

Checkout decrements stock inside its own unit of work; these commands cover
the back-office adjustments: setting a variant's level, restocking, manual
reductions, and managing the colors a product comes in.
"""

import json

from protean import handle
from protean.fields import Identifier, Integer, String, Text
from protean.utils.globals import current_domain

from storefront.catalogue.product import Product
from storefront.domain import storefront


def _inventory(value):
    return json.loads(value) if isinstance(value, str) else (value or [])


@storefront.command(part_of="Product")
class SetStock:
    product_id = Identifier(required=True)
    size = String(required=True, max_length=50)
    color = String(max_length=100)
    quantity = Integer(required=True)


@storefront.command(part_of="Product")
class AddStock:
    product_id = Identifier(required=True)
    size = String(required=True, max_length=50)
    color = String(max_length=100)
    quantity = Integer(default=1, min_value=1)


@storefront.command(part_of="Product")
class ReduceStock:
    product_id = Identifier(required=True)
    size = String(required=True, max_length=50)
    color = String(max_length=100)
    quantity = Integer(default=1, min_value=1)


@storefront.command(part_of="Product")
class ReplaceColorStock:
    """Replace every size entry of one color in a single operation."""

    product_id = Identifier(required=True)
    color = String(required=True, max_length=100)
    inventory = Text(required=True)  # JSON: list of {size, quantity}


@storefront.command(part_of="Product")
class AddColor:
    product_id = Identifier(required=True)
    name = String(required=True, max_length=100)
    hex_code = String(required=True, max_length=9)
    inventory = Text()  # JSON: list of {size, quantity}


@storefront.command(part_of="Product")
class RemoveColor:
    product_id = Identifier(required=True)
    name = String(required=True, max_length=100)


@storefront.command_handler(part_of=Product)
class ManageInventoryHandler:
    @handle(SetStock)
    def set_stock(self, command):
        repo = current_domain.repository_for(Product)
        product = repo.get(command.product_id)
        product.set_stock(product.selector(command.size, command.color), command.quantity)
        repo.add(product)

    @handle(AddStock)
    def add_stock(self, command):
        repo = current_domain.repository_for(Product)
        product = repo.get(command.product_id)
        product.add_stock(product.selector(command.size, command.color), command.quantity)
        repo.add(product)

    @handle(ReduceStock)
    def reduce_stock(self, command):
        repo = current_domain.repository_for(Product)
        product = repo.get(command.product_id)
        product.withdraw_stock(product.selector(command.size, command.color), command.quantity)
        repo.add(product)

    @handle(ReplaceColorStock)
    def replace_color_stock(self, command):
        repo = current_domain.repository_for(Product)
        product = repo.get(command.product_id)
        product.replace_color_stock(command.color, _inventory(command.inventory))
        repo.add(product)

    @handle(AddColor)
    def add_color(self, command):
        repo = current_domain.repository_for(Product)
        product = repo.get(command.product_id)
        product.add_color(command.name, command.hex_code, _inventory(command.inventory))
        repo.add(product)

    @handle(RemoveColor)
    def remove_color(self, command):
        repo = current_domain.repository_for(Product)
        product = repo.get(command.product_id)
        product.remove_color(command.name)
        repo.add(product)
