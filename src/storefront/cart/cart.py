"""Cart aggregate — line items a shopper intends to buy.

The stored ``total_amount`` is a cache: every mutator ends by recomputing it
from the current lines and current product prices, using the price a shopper
with the cart's authentication status is shown. Products are passed in as a
mapping of product id to ``Product``; the cart never loads them itself.
"""

from datetime import UTC, datetime

from protean import invariant
from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.fields import Boolean, DateTime, Float, HasMany, Identifier, Integer, String

from storefront.cart.events import (
    CartCleared,
    CartItemAdded,
    CartItemRemoved,
    CartItemUpdated,
    CartReconciled,
)
from storefront.cart.owner import OwnerRef
from storefront.catalogue.pricing import price_for
from storefront.catalogue.variants import VariantSelector
from storefront.domain import storefront
from storefront.exceptions import InsufficientStockError
from storefront.shared.money import round_money


@storefront.entity(part_of="Cart")
class CartItem:
    product_id = Identifier(required=True)
    size = String(required=True, max_length=50)
    color = String(max_length=100)
    quantity = Integer(required=True, min_value=1)
    added_at = DateTime()

    @property
    def selector(self) -> VariantSelector:
        return VariantSelector.of(self.size, self.color)


@storefront.aggregate
class Cart:
    customer_id = Identifier()
    session_id = String(max_length=255)
    is_guest = Boolean(default=False)
    items = HasMany(CartItem)
    total_amount = Float(default=0.0)
    created_at = DateTime()
    updated_at = DateTime()

    @invariant.post
    def must_have_exactly_one_owner(self):
        if self.is_guest:
            valid = bool(self.session_id) and not self.customer_id
        else:
            valid = bool(self.customer_id) and not self.session_id
        if not valid:
            raise ValidationError({"owner": ["A cart belongs to either a customer or a guest session"]})

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @classmethod
    def open(cls, owner: OwnerRef):
        now = datetime.now(UTC)
        return cls(
            customer_id=owner.customer_id,
            session_id=owner.session_id,
            is_guest=owner.is_guest,
            total_amount=0.0,
            created_at=now,
            updated_at=now,
        )

    @property
    def owner(self) -> OwnerRef:
        if self.is_guest:
            return OwnerRef.guest(self.session_id)
        return OwnerRef.authenticated(self.customer_id)

    @property
    def is_authenticated(self) -> bool:
        return not self.is_guest

    def _find_item(self, product_id, selector):
        return next(
            (i for i in self.items if str(i.product_id) == str(product_id) and selector.matches(i.color, i.size)),
            None,
        )

    # -------------------------------------------------------------------
    # Item management
    # -------------------------------------------------------------------
    def add_item(self, product, selector, quantity, products):
        """Add a variant, merging into an existing line for the same variant."""
        if quantity < 1:
            raise ValidationError({"quantity": ["Quantity must be at least 1"]})

        product.ledger.validate(selector)

        existing = self._find_item(product.id, selector)
        requested = existing.quantity + quantity if existing else quantity
        if not product.is_available(selector, requested):
            raise InsufficientStockError(selector, requested, product.quantity_for(selector))

        now = datetime.now(UTC)
        if existing:
            existing.quantity = requested
        else:
            self.add_items(
                CartItem(
                    product_id=str(product.id),
                    size=selector.size,
                    color=selector.color,
                    quantity=quantity,
                    added_at=now,
                )
            )

        self.recompute_total({**products, str(product.id): product})
        self.raise_(
            CartItemAdded(
                cart_id=str(self.id),
                product_id=str(product.id),
                size=selector.size,
                color=selector.color,
                quantity=quantity,
                line_quantity=requested,
            )
        )

    def update_item(self, product_id, selector, quantity, products):
        """Set a line's quantity; zero or less removes the line."""
        item = self._find_item(product_id, selector)
        if item is None:
            raise ObjectNotFoundError({"item": ["Item not found in cart"]})

        if quantity <= 0:
            self.remove_item(product_id, selector, products)
            return

        product = products.get(str(product_id))
        if product is None:
            raise ObjectNotFoundError({"product_id": ["Product not found"]})
        if not product.is_available(selector, quantity):
            raise InsufficientStockError(selector, quantity, product.quantity_for(selector))

        previous = item.quantity
        item.quantity = quantity
        self.recompute_total(products)
        self.raise_(
            CartItemUpdated(
                cart_id=str(self.id),
                product_id=str(product_id),
                size=selector.size,
                color=selector.color,
                previous_quantity=previous,
                new_quantity=quantity,
            )
        )

    def remove_item(self, product_id, selector, products):
        """Drop the matching line. Removing an absent line is not an error."""
        item = self._find_item(product_id, selector)
        if item is not None:
            self.remove_items(item)
            self.raise_(
                CartItemRemoved(
                    cart_id=str(self.id),
                    product_id=str(product_id),
                    size=selector.size,
                    color=selector.color,
                )
            )
        self.recompute_total(products)

    def reconcile(self, products) -> int:
        """Drop lines whose product or stock no longer covers them.

        Returns the number of lines removed.
        """
        stale = [
            item
            for item in self.items
            if (product := products.get(str(item.product_id))) is None
            or not product.is_available(item.selector, item.quantity)
        ]
        if not stale:
            return 0

        for item in stale:
            self.remove_items(item)
        self.recompute_total(products)
        self.raise_(CartReconciled(cart_id=str(self.id), removed_count=len(stale)))
        return len(stale)

    def clear(self):
        for item in list(self.items):
            self.remove_items(item)
        self.total_amount = 0.0
        self.updated_at = datetime.now(UTC)
        self.raise_(CartCleared(cart_id=str(self.id)))

    # -------------------------------------------------------------------
    # Totals
    # -------------------------------------------------------------------
    def recompute_total(self, products):
        total = 0.0
        for item in self.items:
            product = products.get(str(item.product_id))
            if product is not None:
                total += price_for(product, self.is_authenticated) * item.quantity
        self.total_amount = round_money(total)
        self.updated_at = datetime.now(UTC)
