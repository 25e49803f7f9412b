"""Cart item management — commands and handler.

Every command names its owner by exactly one of ``customer_id`` or
``session_id``. A cart is opened on the first item added; the other commands
require an existing cart.
"""

from protean import handle
from protean.exceptions import ObjectNotFoundError
from protean.fields import Identifier, Integer, String
from protean.utils.globals import current_domain

from storefront.cart.cart import Cart
from storefront.cart.owner import OwnerRef
from storefront.cart.repository import products_in
from storefront.catalogue.ledger import make_selector
from storefront.catalogue.product import Product
from storefront.domain import storefront


@storefront.command(part_of="Cart")
class AddToCart:
    customer_id = Identifier()
    session_id = String(max_length=255)
    product_id = Identifier(required=True)
    size = String(required=True, max_length=50)
    color = String(max_length=100)
    quantity = Integer(default=1)


@storefront.command(part_of="Cart")
class UpdateCartItem:
    customer_id = Identifier()
    session_id = String(max_length=255)
    product_id = Identifier(required=True)
    size = String(required=True, max_length=50)
    color = String(max_length=100)
    quantity = Integer(required=True)


@storefront.command(part_of="Cart")
class RemoveFromCart:
    customer_id = Identifier()
    session_id = String(max_length=255)
    product_id = Identifier(required=True)
    size = String(required=True, max_length=50)
    color = String(max_length=100)


@storefront.command(part_of="Cart")
class ClearCart:
    customer_id = Identifier()
    session_id = String(max_length=255)


def _owner(command) -> OwnerRef:
    return OwnerRef.from_identifiers(customer_id=command.customer_id, session_id=command.session_id)


def _existing_cart(repo, owner) -> Cart:
    cart = repo.find_for_owner(owner)
    if cart is None:
        raise ObjectNotFoundError({"cart": ["Cart not found"]})
    return cart


@storefront.command_handler(part_of=Cart)
class ManageCartHandler:
    @handle(AddToCart)
    def add_to_cart(self, command):
        owner = _owner(command)
        repo = current_domain.repository_for(Cart)
        cart = repo.find_for_owner(owner) or Cart.open(owner)

        product = current_domain.repository_for(Product).get(command.product_id)
        cart.add_item(
            product,
            product.selector(command.size, command.color),
            command.quantity,
            products_in(cart),
        )
        repo.add(cart)
        return str(cart.id)

    @handle(UpdateCartItem)
    def update_cart_item(self, command):
        repo = current_domain.repository_for(Cart)
        cart = _existing_cart(repo, _owner(command))
        cart.update_item(
            command.product_id,
            make_selector(command.size, command.color),
            command.quantity,
            products_in(cart),
        )
        repo.add(cart)
        return str(cart.id)

    @handle(RemoveFromCart)
    def remove_from_cart(self, command):
        repo = current_domain.repository_for(Cart)
        cart = _existing_cart(repo, _owner(command))
        cart.remove_item(command.product_id, make_selector(command.size, command.color), products_in(cart))
        repo.add(cart)
        return str(cart.id)

    @handle(ClearCart)
    def clear_cart(self, command):
        repo = current_domain.repository_for(Cart)
        cart = _existing_cart(repo, _owner(command))
        cart.clear()
        repo.add(cart)
        return str(cart.id)
