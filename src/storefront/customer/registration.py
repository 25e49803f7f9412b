"""Customer registration — command and handler.

Registration creates the customer and an empty cart in the same unit of
work, so every registered customer owns exactly one cart from the start.
"""

from protean import handle
from protean.fields import String
from protean.utils.globals import current_domain

from storefront.cart.cart import Cart
from storefront.cart.owner import OwnerRef
from storefront.customer.customer import Customer
from storefront.domain import storefront


@storefront.command(part_of="Customer")
class RegisterCustomer:
    name = String(required=True, max_length=150)
    email = String(required=True, max_length=254)
    role = String(max_length=20)


@storefront.command_handler(part_of=Customer)
class RegisterCustomerHandler:
    @handle(RegisterCustomer)
    def register_customer(self, command):
        customer = Customer.register(name=command.name, email=command.email, role=command.role)
        cart = Cart.open(OwnerRef.authenticated(customer.id))
        customer.attach_cart(cart.id)

        current_domain.repository_for(Cart).add(cart)
        current_domain.repository_for(Customer).add(customer)
        return str(customer.id)
