"""Checkout — converts a cart into an order.

``PlaceOrder`` runs entirely inside one unit of work: the owner lookup, the
availability check over every line, pricing, the stock decrements, the order
write, the cart clear and the new-customer flag flip either all commit or
none do. Repository writes are held back until the handler returns, so an
exception anywhere in the handler leaves products, cart and customer exactly
as they were.

``submit_order`` runs the unit of work and reports the committed order id.
``place_order`` also sends the confirmation email once the unit of work has
committed; its outcome is logged and never changes the checkout result. The
HTTP route sends it from a background task instead, after the response.
"""

from protean import handle
from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from storefront.cart.cart import Cart
from storefront.cart.owner import OwnerRef
from storefront.cart.repository import products_in
from storefront.catalogue.pricing import line_total, new_customer_discount_factor, price_for
from storefront.catalogue.product import Product, StockChangeReason
from storefront.customer.customer import Customer
from storefront.domain import storefront
from storefront.exceptions import EmptyCartError, InsufficientInventoryError, TransactionAbortError
from storefront.notification.confirmation import notify_order_placed
from storefront.order.order import GuestContact, Order
from storefront.shared.money import round_money
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


@storefront.command(part_of="Order")
class PlaceOrder:
    customer_id = Identifier()
    session_id = String(max_length=255)
    guest_email = String(max_length=254)
    guest_name = String(max_length=150)
    address = String(max_length=500)
    phone_number = String(max_length=30)


def _shortages(cart, products) -> list[dict]:
    shortages = []
    for item in cart.items:
        product = products.get(str(item.product_id))
        available = product.quantity_for(item.selector) if product is not None else 0
        if available < item.quantity:
            shortages.append(
                {
                    "product_id": str(item.product_id),
                    "title": product.title if product is not None else None,
                    "size": item.size,
                    "color": item.color,
                    "requested": item.quantity,
                    "available": available,
                }
            )
    return shortages


@storefront.command_handler(part_of=Order)
class PlaceOrderHandler:
    @handle(PlaceOrder)
    def place_order(self, command):
        owner = OwnerRef.from_identifiers(customer_id=command.customer_id, session_id=command.session_id)

        # Resolve owner
        customer = None
        guest_contact = None
        if owner.is_guest:
            guest_contact = GuestContact(email=command.guest_email, name=command.guest_name)
        else:
            customer = current_domain.repository_for(Customer).get(owner.customer_id)

        # Load cart
        cart_repo = current_domain.repository_for(Cart)
        cart = cart_repo.find_for_owner(owner)
        if cart is None or not cart.items:
            raise EmptyCartError()

        # Validate every line before touching stock
        products = products_in(cart)
        shortages = _shortages(cart, products)
        if shortages:
            raise InsufficientInventoryError(shortages)

        # Price
        order_repo = current_domain.repository_for(Order)
        is_eligible = customer is not None and order_repo.count_for_customer(customer.id) == 0

        lines = []
        subtotal = 0.0
        for item in cart.items:
            product = products[str(item.product_id)]
            unit_price = price_for(product, True)
            subtotal += unit_price * item.quantity
            lines.append(
                {
                    "product_id": str(product.id),
                    "title": product.title,
                    "size": item.size,
                    "color": item.color,
                    "quantity": item.quantity,
                    "unit_price": unit_price,
                    "line_total": line_total(unit_price, item.quantity),
                }
            )
        total_price = round_money(subtotal * new_customer_discount_factor(is_eligible))

        # Reserve stock
        for item in cart.items:
            product = products[str(item.product_id)]
            if not product.reduce_stock(item.selector, item.quantity, reason=StockChangeReason.CHECKOUT):
                raise TransactionAbortError(
                    "Inventory changed during checkout",
                    product_id=str(product.id),
                    size=item.size,
                    color=item.color,
                )

        order = Order.place(
            lines=lines,
            total_price=total_price,
            customer_id=customer.id if customer else None,
            guest_contact=guest_contact,
            new_customer_discount=is_eligible,
            address=command.address,
            phone_number=command.phone_number,
        )

        if is_eligible:
            customer.redeem_new_customer_discount(order.id)
            current_domain.repository_for(Customer).add(customer)

        cart.clear()

        product_repo = current_domain.repository_for(Product)
        for product in products.values():
            product_repo.add(product)
        order_repo.add(order)
        cart_repo.add(cart)

        return str(order.id)


def submit_order(**fields) -> str:
    """Run checkout and return the id of the committed order.

    Domain failures propagate unchanged. Anything else raised while the unit
    of work runs or commits, such as a version conflict with a concurrent
    checkout, is reported as ``TransactionAbortError``.
    """
    command = PlaceOrder(**fields)
    try:
        order_id = current_domain.process(command, asynchronous=False)
    except (ValidationError, ObjectNotFoundError, TransactionAbortError):
        raise
    except Exception as exc:
        raise TransactionAbortError("Checkout transaction failed", cause=str(exc)) from exc

    order = current_domain.repository_for(Order).get(order_id)
    logger.info(
        "order_placed",
        order_id=order_id,
        owner="guest" if order.is_guest else "customer",
        total_price=order.total_price,
        new_customer_discount=order.new_customer_discount,
    )
    return order_id


def place_order(**fields) -> str:
    """Run checkout, then send the confirmation email outside the transaction."""
    order_id = submit_order(**fields)
    notify_order_placed(order_id)
    return order_id
