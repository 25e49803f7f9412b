"""Customer aggregate — a registered shopper.

Credentials live with the authentication service; the storefront only keeps
what checkout needs: contact details, role, the customer's cart and whether
the first-order discount is still unclaimed.
"""

from datetime import UTC, datetime
from enum import Enum

from protean.fields import Boolean, DateTime, Identifier, String

from storefront.customer.events import CustomerRegistered, NewCustomerDiscountRedeemed
from storefront.domain import storefront
from storefront.shared.email import EmailAddress


class CustomerRole(Enum):
    ADMIN = "admin"
    CUSTOMER = "customer"


@storefront.aggregate
class Customer:
    name = String(required=True, max_length=150)
    email = String(required=True, max_length=254, unique=True)
    role = String(choices=CustomerRole, default=CustomerRole.CUSTOMER.value)
    cart_id = Identifier()
    is_new_customer = Boolean(default=True)
    registered_at = DateTime()

    @classmethod
    def register(cls, name, email, role=None):
        address = EmailAddress(address=email).address
        now = datetime.now(UTC)
        customer = cls(
            name=name,
            email=address,
            role=role or CustomerRole.CUSTOMER.value,
            is_new_customer=True,
            registered_at=now,
        )
        customer.raise_(
            CustomerRegistered(
                customer_id=str(customer.id),
                name=name,
                email=address,
                registered_at=now,
            )
        )
        return customer

    def attach_cart(self, cart_id):
        self.cart_id = cart_id

    def redeem_new_customer_discount(self, order_id):
        self.is_new_customer = False
        self.raise_(
            NewCustomerDiscountRedeemed(
                customer_id=str(self.id),
                order_id=str(order_id),
            )
        )
