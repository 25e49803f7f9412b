"""Repository for the Cart aggregate."""

from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from storefront.cart.cart import Cart
from storefront.cart.owner import OwnerRef
from storefront.catalogue.product import Product
from storefront.domain import storefront


@storefront.repository(part_of=Cart)
class CartRepository:
    def find_for_owner(self, owner: OwnerRef) -> Cart | None:
        """Find the cart belonging to a customer or a guest session."""
        if owner.is_guest:
            return self._dao.query.filter(session_id=owner.session_id).all().first
        return self._dao.query.filter(customer_id=owner.customer_id).all().first


def products_in(cart: Cart, extra=()) -> dict:
    """Load every product a cart references, keyed by id.

    Products that no longer exist are left out of the mapping.
    """
    repo = current_domain.repository_for(Product)
    product_ids = {str(item.product_id) for item in cart.items} | {str(pid) for pid in extra}

    products = {}
    for product_id in product_ids:
        try:
            products[product_id] = repo.get(product_id)
        except ObjectNotFoundError:
            continue
    return products
