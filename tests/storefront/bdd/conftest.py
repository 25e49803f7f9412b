"""Shared BDD fixtures and step definitions for the storefront."""

import json

import pytest
from protean import current_domain
from pytest_bdd import given, parsers, then, when
from storefront.cart.cart import Cart
from storefront.cart.items import AddToCart
from storefront.cart.owner import OwnerRef
from storefront.catalogue.creation import CreateProduct
from storefront.catalogue.inventory import SetStock
from storefront.catalogue.product import Product
from storefront.catalogue.variants import VariantSelector
from storefront.customer.registration import RegisterCustomer
from storefront.order.checkout import place_order


@pytest.fixture()
def shop():
    """Scenario state: product ids by title, the current owner, and outcomes."""
    return {"products": {}, "owner": {}, "order_id": None, "error": None}


def owner_ref(shop):
    return OwnerRef.from_identifiers(**shop["owner"])


def cart_of(shop):
    return current_domain.repository_for(Cart).find_for_owner(owner_ref(shop))


# ---------------------------------------------------------------------------
# Given steps
# ---------------------------------------------------------------------------
@given(parsers.cfparse('a product "{title}" priced {price:f} with a {discount:d}% discount'))
def _(shop, title, price, discount):
    command = CreateProduct(title=title, price=price, discount=float(discount), gender="unisex", stock=json.dumps([]))
    shop["products"][title] = current_domain.process(command, asynchronous=False)


@given(parsers.cfparse('the product "{title}" has {quantity:d} in "{color}" size "{size}"'))
@given(parsers.cfparse('the stock of "{title}" in "{color}" size "{size}" is set to {quantity:d}'))
def _(shop, title, quantity, color, size):
    command = SetStock(product_id=shop["products"][title], size=size, color=color, quantity=quantity)
    current_domain.process(command, asynchronous=False)


@given("a registered customer")
def _(shop):
    customer_id = current_domain.process(
        RegisterCustomer(name="Ada Shopper", email="ada@example.com"), asynchronous=False
    )
    shop["owner"] = {"customer_id": customer_id}


@given(parsers.cfparse('a guest with session "{session_id}"'))
def _(shop, session_id):
    shop["owner"] = {"session_id": session_id}


# ---------------------------------------------------------------------------
# Steps usable as Given or When
# ---------------------------------------------------------------------------
@given(parsers.cfparse('the customer adds {quantity:d} "{title}" in "{color}" size "{size}" to their cart'))
@when(parsers.cfparse('the customer adds {quantity:d} "{title}" in "{color}" size "{size}" to their cart'))
def _(shop, quantity, title, color, size):
    command = AddToCart(product_id=shop["products"][title], size=size, color=color, quantity=quantity, **shop["owner"])
    current_domain.process(command, asynchronous=False)


@given("the customer checks out")
@when("the customer checks out")
def _(shop):
    try:
        shop["order_id"] = place_order(**shop["owner"])
    except Exception as exc:
        shop["error"] = exc


# ---------------------------------------------------------------------------
# Then steps
# ---------------------------------------------------------------------------
@then(parsers.cfparse('the product "{title}" has {quantity:d} left in "{color}" size "{size}"'))
def _(shop, title, quantity, color, size):
    product = current_domain.repository_for(Product).get(shop["products"][title])
    assert product.quantity_for(VariantSelector.of(size, color)) == quantity


@then("the cart is empty")
def _(shop):
    cart = cart_of(shop)
    assert len(cart.items) == 0
    assert cart.total_amount == 0.0


@then(parsers.cfparse("the cart has {count:d} line"))
@then(parsers.cfparse("the cart has {count:d} lines"))
def _(shop, count):
    assert len(cart_of(shop).items) == count


@then(parsers.cfparse("the cart total is {amount:f}"))
def _(shop, amount):
    assert cart_of(shop).total_amount == amount


@then(parsers.cfparse("the cart line quantity is {quantity:d}"))
def _(shop, quantity):
    assert cart_of(shop).items[0].quantity == quantity
