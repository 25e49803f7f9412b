"""BDD tests for the shopping cart."""

from protean import current_domain
from pytest_bdd import parsers, scenarios, then, when
from storefront.cart.items import AddToCart
from storefront.cart.reconciliation import ReconcileCart
from storefront.exceptions import InsufficientStockError

scenarios("features/cart.feature")


# ---------------------------------------------------------------------------
# When steps
# ---------------------------------------------------------------------------
@when(parsers.cfparse('the customer tries to add {quantity:d} "{title}" in "{color}" size "{size}" to their cart'))
def _(shop, quantity, title, color, size):
    command = AddToCart(product_id=shop["products"][title], size=size, color=color, quantity=quantity, **shop["owner"])
    try:
        current_domain.process(command, asynchronous=False)
    except InsufficientStockError as exc:
        shop["error"] = exc


@when("the cart is read")
def _(shop):
    current_domain.process(ReconcileCart(**shop["owner"]), asynchronous=False)


# ---------------------------------------------------------------------------
# Then steps
# ---------------------------------------------------------------------------
@then(parsers.cfparse("the cart is refused because only {available:d} are available"))
def _(shop, available):
    assert isinstance(shop["error"], InsufficientStockError)
    assert shop["error"].available == available
