"""Repository for the Order aggregate."""

from storefront.domain import storefront
from storefront.order.order import Order


@storefront.repository(part_of=Order)
class OrderRepository:
    def count_for_customer(self, customer_id) -> int:
        """Number of orders a customer has placed, used for first-order eligibility."""
        return self._dao.query.filter(customer_id=str(customer_id)).all().total

    def for_customer(self, customer_id) -> list[Order]:
        return self._dao.query.filter(customer_id=str(customer_id)).order_by("-created_at").all().items
