"""Order status template: sent when an order changes status."""

from html import escape

_MESSAGES = {
    "Preparing": "The kitchen has started preparing your order.",
    "Ready": "Your order is ready for pickup!",
    "Completed": "Your order has been completed. Enjoy your meal!",
    "Cancelled": "Your order has been cancelled.",
}


class OrderStatusUpdateTemplate:
    name = "order_status_update"

    @staticmethod
    def render(context: dict) -> dict:
        order_id = context.get("order_id", "N/A")
        user_name = context.get("name", "there")
        status = context.get("status", "")
        message = _MESSAGES.get(status, "")
        return {
            "subject": f"Order Update - {order_id}",
            "body": f"Hi {user_name},\n\nOrder #{order_id} is now {status}.\n{message}",
            "html_body": (
                f"<p>Hi {escape(str(user_name))},</p>"
                f"<p>Order <strong>#{escape(str(order_id))}</strong> "
                f"is now <strong>{escape(str(status))}</strong>.</p>"
                f"<p>{message}</p>"
            ),
        }
