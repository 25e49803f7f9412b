"""Order confirmation email — sent once checkout has committed.

Delivery is best-effort: the order already exists when this runs, so every
failure (a slow provider, a rejected message, a missing customer record) is
logged and swallowed rather than reported as a checkout failure.
"""

from concurrent.futures import ThreadPoolExecutor
from concurrent.futures import TimeoutError as FutureTimeoutError

from protean.utils.globals import current_domain

from storefront import settings
from storefront.customer.customer import Customer
from storefront.domain import storefront
from storefront.notification import get_email_channel
from storefront.order.order import Order
from storefront.utils.logging import get_logger

logger = get_logger(__name__)

_executor: ThreadPoolExecutor | None = None


def _pool() -> ThreadPoolExecutor:
    global _executor
    if _executor is None:
        _executor = ThreadPoolExecutor(max_workers=4, thread_name_prefix="order-confirmation")
    return _executor


def shutdown_confirmations(wait: bool = False) -> None:
    """Drop queued sends and release the worker pool. A later send starts a new pool."""
    global _executor
    if _executor is not None:
        _executor.shutdown(wait=wait, cancel_futures=True)
        _executor = None


def _log_late_outcome(order_id):
    def _callback(future):
        if future.cancelled():
            return
        if future.exception() is not None:
            logger.warning("order_confirmation_late", order_id=order_id, error=str(future.exception()))
        else:
            logger.warning("order_confirmation_late", order_id=order_id, status=future.result().get("status"))

    return _callback


class OrderConfirmationTemplate:
    @staticmethod
    def render(context: dict) -> dict:
        order_id = context.get("order_id", "N/A")
        name = context.get("name") or "there"

        rows = []
        for line in context.get("lines", []):
            variant = f"{line['color']} / {line['size']}" if line.get("color") else line["size"]
            rows.append(
                f"- {line['title']} ({variant}) x{line['quantity']} "
                f"@ {line['unit_price']:.2f} = {line['line_total']:.2f}"
            )

        body = [f"Hi {name},", "", f"Thank you for your order #{order_id}.", "", *rows, ""]
        if context.get("new_customer_discount"):
            body.append("Your first-order discount has been applied.")
        body.append(f"Order Total: {context.get('total_price', 0.0):.2f}")
        body.extend(["", "We'll let you know once your order ships."])

        return {"subject": f"Order #{order_id} Confirmed", "body": "\n".join(body)}


def send_order_confirmation(order, owner: dict, lines: list[dict]) -> dict:
    """Send the confirmation email, waiting at most the configured timeout.

    Returns:
        dict with keys: success (bool), error (str or None)
    """
    message = OrderConfirmationTemplate.render(
        {
            "order_id": str(order.id),
            "name": owner.get("name"),
            "lines": lines,
            "total_price": order.total_price,
            "new_customer_discount": order.new_customer_discount,
        }
    )

    future = _pool().submit(get_email_channel().send, owner["email"], message["subject"], message["body"])
    try:
        result = future.result(timeout=settings.notification_timeout())
    except FutureTimeoutError:
        # A send already running cannot be interrupted; record how it ends.
        if not future.cancel():
            future.add_done_callback(_log_late_outcome(str(order.id)))
        return {"success": False, "error": "Timed out waiting for email delivery"}
    except Exception as exc:
        return {"success": False, "error": str(exc)}

    if result.get("status") == "sent":
        return {"success": True, "error": None}
    return {"success": False, "error": result.get("error", "Unknown dispatch error")}


def _owner_contact(order) -> dict:
    if order.is_guest:
        return {"email": order.guest_contact.email, "name": order.guest_contact.name}
    customer = current_domain.repository_for(Customer).get(order.customer_id)
    return {"email": customer.email, "name": customer.name}


def notify_order_placed(order_id) -> dict:
    """Fetch the committed order and email its owner. Never raises."""
    try:
        order = current_domain.repository_for(Order).get(order_id)
        lines = [
            {
                "title": line.title,
                "size": line.size,
                "color": line.color,
                "quantity": line.quantity,
                "unit_price": line.unit_price,
                "line_total": line.line_total,
            }
            for line in order.lines
        ]
        result = send_order_confirmation(order, _owner_contact(order), lines)
    except Exception as exc:
        result = {"success": False, "error": str(exc)}

    if result["success"]:
        logger.info("order_confirmation_sent", order_id=str(order_id))
    else:
        logger.error("order_confirmation_failed", order_id=str(order_id), error=result["error"])
    return result


def notify_order_placed_in_background(order_id) -> None:
    """Entry point for work scheduled after the HTTP response has been sent."""
    with storefront.domain_context():
        notify_order_placed(order_id)
