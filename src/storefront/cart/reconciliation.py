"""Cart reconciliation — prune lines that can no longer be fulfilled.

Run when a cart is fetched: products get deleted and stock gets sold to other
shoppers while a cart sits idle, and the shopper should see a cart that
checkout will accept.
"""

from protean import handle
from protean.exceptions import ObjectNotFoundError
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from storefront.cart.cart import Cart
from storefront.cart.owner import OwnerRef
from storefront.cart.repository import products_in
from storefront.domain import storefront
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


@storefront.command(part_of="Cart")
class ReconcileCart:
    customer_id = Identifier()
    session_id = String(max_length=255)


@storefront.command_handler(part_of=Cart)
class ReconcileCartHandler:
    @handle(ReconcileCart)
    def reconcile_cart(self, command):
        owner = OwnerRef.from_identifiers(customer_id=command.customer_id, session_id=command.session_id)
        repo = current_domain.repository_for(Cart)
        cart = repo.find_for_owner(owner)
        if cart is None:
            raise ObjectNotFoundError({"cart": ["Cart not found"]})

        products = products_in(cart)
        removed = cart.reconcile(products)
        if removed:
            logger.info("cart_reconciled", cart_id=str(cart.id), removed_count=removed)
            repo.add(cart)
        return str(cart.id)
