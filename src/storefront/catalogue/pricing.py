"""Pricing policy — pure functions, no side effects.

Catalogue discounts are a loyalty incentive: display prices only include them
for authenticated shoppers. Checkout always prices as authenticated, so guest
orders receive the discount too (see DESIGN.md).
"""

from storefront import settings
from storefront.shared.money import round_money


def discounted_price(product) -> float:
    """Base price less the catalogue discount, rounded to cents."""
    if product.discount and product.discount > 0:
        return round_money(product.price * (1 - product.discount / 100))
    return product.price


def price_for(product, is_authenticated: bool) -> float:
    if is_authenticated and product.discount and product.discount > 0:
        return discounted_price(product)
    return product.price


def savings_for(product, is_authenticated: bool) -> float:
    return round_money(product.price - price_for(product, is_authenticated))


def new_customer_discount_factor(is_eligible: bool) -> float:
    """Multiplier applied to an already-discounted checkout subtotal."""
    if is_eligible:
        return 1 - settings.new_customer_discount()
    return 1.0


def line_total(unit_price: float, quantity: int) -> float:
    return round_money(unit_price * quantity)
