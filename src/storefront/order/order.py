"""Order aggregate — the immutable snapshot produced by checkout.

Each line stores the unit price and line total charged at checkout, so
historical totals stay correct when catalogue prices move later. After
placement only the status, shipping address and phone number change.

State Machine:
    PENDING → PROCESSING → SHIPPED → DELIVERED
    CANCELLED (from PENDING, PROCESSING)
"""

import json
from datetime import UTC, datetime
from enum import Enum

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import (
    Boolean,
    DateTime,
    Float,
    HasMany,
    Identifier,
    Integer,
    String,
    ValueObject,
)

from storefront.domain import storefront
from storefront.order.events import OrderPlaced, OrderUpdated
from storefront.shared.email import EmailAddress


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------
class OrderStatus(Enum):
    PENDING = "pending"
    PROCESSING = "processing"
    SHIPPED = "shipped"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"


# State machine transition map
_VALID_TRANSITIONS = {
    OrderStatus.PENDING: {OrderStatus.PROCESSING, OrderStatus.CANCELLED},
    OrderStatus.PROCESSING: {OrderStatus.SHIPPED, OrderStatus.CANCELLED},
    OrderStatus.SHIPPED: {OrderStatus.DELIVERED},
    OrderStatus.DELIVERED: set(),  # Terminal
    OrderStatus.CANCELLED: set(),  # Terminal
}


# ---------------------------------------------------------------------------
# Value Objects
# ---------------------------------------------------------------------------
@storefront.value_object(part_of="Order")
class GuestContact:
    """Contact details captured for an order placed without an account."""

    email = String(required=True, max_length=254)
    name = String(required=True, max_length=150)

    @invariant.post
    def email_must_be_valid(self):
        EmailAddress(address=self.email)


# ---------------------------------------------------------------------------
# Entities
# ---------------------------------------------------------------------------
@storefront.entity(part_of="Order")
class OrderLine:
    product_id = Identifier(required=True)
    title = String(required=True, max_length=255)
    size = String(required=True, max_length=50)
    color = String(max_length=100)
    quantity = Integer(required=True, min_value=1)
    unit_price = Float(required=True, min_value=0.0)
    line_total = Float(required=True, min_value=0.0)


# ---------------------------------------------------------------------------
# Aggregate Root
# ---------------------------------------------------------------------------
@storefront.aggregate
class Order:
    customer_id = Identifier()
    is_guest = Boolean(default=False)
    guest_contact = ValueObject(GuestContact)
    lines = HasMany(OrderLine)
    total_price = Float(required=True, min_value=0.0)
    status = String(choices=OrderStatus, default=OrderStatus.PENDING.value)
    address = String(max_length=500)
    phone_number = String(max_length=30)
    new_customer_discount = Boolean(default=False)
    created_at = DateTime()
    updated_at = DateTime()

    @invariant.post
    def must_have_exactly_one_owner(self):
        if self.is_guest:
            valid = self.guest_contact is not None and not self.customer_id
        else:
            valid = bool(self.customer_id) and self.guest_contact is None
        if not valid:
            raise ValidationError({"owner": ["An order belongs to either a customer or a guest"]})

    # -------------------------------------------------------------------
    # Factory method
    # -------------------------------------------------------------------
    @classmethod
    def place(
        cls,
        lines,
        total_price,
        customer_id=None,
        guest_contact=None,
        new_customer_discount=False,
        address=None,
        phone_number=None,
    ):
        """Create an order from priced checkout lines.

        Args:
            lines: List of dicts with product_id, title, size, color,
                   quantity, unit_price, line_total.
            total_price: Final order total, already rounded.
            customer_id: Owner for authenticated checkouts.
            guest_contact: ``GuestContact`` for guest checkouts.
        """
        now = datetime.now(UTC)
        order = cls(
            customer_id=customer_id,
            is_guest=guest_contact is not None,
            guest_contact=guest_contact,
            lines=[OrderLine(**line) for line in lines],
            total_price=total_price,
            status=OrderStatus.PENDING.value,
            address=address,
            phone_number=phone_number,
            new_customer_discount=new_customer_discount,
            created_at=now,
            updated_at=now,
        )
        order.raise_(
            OrderPlaced(
                order_id=str(order.id),
                customer_id=str(customer_id) if customer_id else None,
                guest_email=guest_contact.email if guest_contact else None,
                lines=json.dumps(lines),
                total_price=total_price,
                new_customer_discount=new_customer_discount,
                placed_at=now,
            )
        )
        return order

    # -------------------------------------------------------------------
    # Updates
    # -------------------------------------------------------------------
    def _assert_can_transition(self, target_status):
        current = OrderStatus(self.status)
        if target_status not in _VALID_TRANSITIONS.get(current, set()):
            raise ValidationError({"status": [f"Cannot transition from {current.value} to {target_status.value}"]})

    def update_details(self, status=None, address=None, phone_number=None):
        changes = {}

        if status is not None and status != self.status:
            try:
                target = OrderStatus(status)
            except ValueError:
                raise ValidationError(
                    {"status": [f"Invalid status {status!r}. Valid options: {[s.value for s in OrderStatus]}"]}
                ) from None
            self._assert_can_transition(target)
            self.status = target.value
            changes["status"] = target.value

        if address is not None and address != self.address:
            self.address = address
            changes["address"] = address

        if phone_number is not None and phone_number != self.phone_number:
            self.phone_number = phone_number
            changes["phone_number"] = phone_number

        if not changes:
            return

        self.updated_at = datetime.now(UTC)
        self.raise_(
            OrderUpdated(
                order_id=str(self.id),
                changes=json.dumps(changes),
                updated_at=self.updated_at,
            )
        )
