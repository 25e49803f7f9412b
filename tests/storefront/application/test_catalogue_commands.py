"""Application tests for product maintenance and inventory commands."""

import json

import pytest
from protean import current_domain
from protean.exceptions import ObjectNotFoundError, ValidationError
from storefront.catalogue.creation import DeleteProduct, UpdateProductDetails
from storefront.catalogue.inventory import (
    AddColor,
    AddStock,
    ReduceStock,
    RemoveColor,
    ReplaceColorStock,
    SetStock,
)
from storefront.catalogue.product import Product
from storefront.catalogue.variants import VariantSelector
from storefront.exceptions import DuplicateVariantError, InsufficientStockError


def _product(product_id):
    return current_domain.repository_for(Product).get(product_id)


def _process(command):
    return current_domain.process(command, asynchronous=False)


class TestProductMaintenance:
    def test_create_persists_stock(self, create_product):
        product = _product(create_product())
        assert product.total_quantity == 8
        assert {c.name for c in product.colors} == {"red", "blue"}

    def test_create_sized_product(self, sized_mode, create_product):
        product = _product(create_product(stock=[{"size": "S", "quantity": 2}, {"size": "M", "quantity": 1}]))
        assert sorted(product.available_sizes) == ["M", "S"]
        assert product.total_quantity == 3

    def test_update_details(self, create_product):
        product_id = create_product()
        _process(UpdateProductDetails(product_id=product_id, title="Cosy Hoodie", discount=25.0))
        product = _product(product_id)
        assert product.title == "Cosy Hoodie"
        assert product.discount == 25.0
        assert product.price == 1000.0

    def test_delete(self, create_product):
        product_id = create_product()
        _process(DeleteProduct(product_id=product_id))
        with pytest.raises(ObjectNotFoundError):
            _product(product_id)


class TestInventoryCommands:
    def test_set_stock(self, create_product):
        product_id = create_product()
        _process(SetStock(product_id=product_id, size="M", color="red", quantity=12))
        assert _product(product_id).quantity_for(VariantSelector.of("M", "red")) == 12

    def test_set_stock_clamps_negative(self, create_product):
        product_id = create_product()
        _process(SetStock(product_id=product_id, size="M", color="red", quantity=-3))
        assert _product(product_id).quantity_for(VariantSelector.of("M", "red")) == 0

    def test_add_stock(self, create_product):
        product_id = create_product()
        _process(AddStock(product_id=product_id, size="M", color="red", quantity=2))
        assert _product(product_id).quantity_for(VariantSelector.of("M", "red")) == 7

    def test_reduce_stock(self, create_product):
        product_id = create_product()
        _process(ReduceStock(product_id=product_id, size="M", color="red", quantity=2))
        assert _product(product_id).quantity_for(VariantSelector.of("M", "red")) == 3

    def test_reduce_beyond_stock(self, create_product):
        product_id = create_product()
        with pytest.raises(InsufficientStockError):
            _process(ReduceStock(product_id=product_id, size="M", color="red", quantity=9))
        assert _product(product_id).quantity_for(VariantSelector.of("M", "red")) == 5

    def test_color_required_in_colored_mode(self, create_product):
        with pytest.raises(ValidationError):
            _process(SetStock(product_id=create_product(), size="M", quantity=1))

    def test_replace_color_stock(self, create_product):
        product_id = create_product()
        _process(
            ReplaceColorStock(
                product_id=product_id,
                color="red",
                inventory=json.dumps([{"size": "S", "quantity": 2}, {"size": "L", "quantity": 1}]),
            )
        )
        product = _product(product_id)
        assert product.quantity_for(VariantSelector.of("M", "red")) == 0
        assert product.ledger.total_for_color("red") == 3

    def test_add_color(self, create_product):
        product_id = create_product()
        _process(AddColor(product_id=product_id, name="green", hex_code="#00FF00", inventory=json.dumps([{"size": "M", "quantity": 4}])))
        assert _product(product_id).quantity_for(VariantSelector.of("M", "green")) == 4

    def test_add_duplicate_color(self, create_product):
        with pytest.raises(DuplicateVariantError):
            _process(AddColor(product_id=create_product(), name="red", hex_code="#FF0000"))

    def test_remove_color(self, create_product):
        product_id = create_product()
        _process(RemoveColor(product_id=product_id, name="blue"))
        product = _product(product_id)
        assert [c.name for c in product.colors] == ["red"]
        assert product.total_quantity == 5

    def test_unknown_product(self):
        with pytest.raises(ObjectNotFoundError):
            _process(SetStock(product_id="prod-404", size="M", color="red", quantity=1))
