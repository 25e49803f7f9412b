"""Order modification — status, shipping address and phone number.

Everything else on an order is a checkout snapshot and never changes.
``update_order`` accepts a loose mapping from the boundary and keeps only the
updatable fields; unknown keys are dropped without complaint.
"""

from protean import handle
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from storefront.domain import storefront
from storefront.order.order import Order

UPDATABLE_FIELDS = ("status", "address", "phone_number")


@storefront.command(part_of="Order")
class UpdateOrder:
    order_id = Identifier(required=True)
    status = String(max_length=20)
    address = String(max_length=500)
    phone_number = String(max_length=30)


@storefront.command_handler(part_of=Order)
class ModifyOrderHandler:
    @handle(UpdateOrder)
    def update_order(self, command):
        repo = current_domain.repository_for(Order)
        order = repo.get(command.order_id)
        order.update_details(
            status=command.status,
            address=command.address,
            phone_number=command.phone_number,
        )
        repo.add(order)
        return str(order.id)


def update_order(order_id, fields: dict) -> str:
    allowed = {key: value for key, value in fields.items() if key in UPDATABLE_FIELDS}
    return current_domain.process(UpdateOrder(order_id=order_id, **allowed), asynchronous=False)
