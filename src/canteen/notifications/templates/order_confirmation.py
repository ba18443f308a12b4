"""Order confirmation template: sent when an order is placed."""

from html import escape


class OrderConfirmationTemplate:
    name = "order_confirmation"

    @staticmethod
    def render(context: dict) -> dict:
        order_id = context.get("order_id", "N/A")
        user_name = context.get("name", "there")
        lines = context.get("items", [])
        total = float(context.get("total_amount", 0))
        ready_at = context.get("estimated_ready_time", "")

        item_lines = "\n".join(
            f"  {line['quantity']} x {line['name']}  {float(line['subtotal']):.2f}" for line in lines
        )
        item_rows = "".join(
            f"<tr><td>{escape(str(line['name']))}</td><td>{line['quantity']}</td>"
            f"<td>{float(line['subtotal']):.2f}</td></tr>"
            for line in lines
        )
        return {
            "subject": f"Order Confirmation - {order_id}",
            "body": (
                f"Hi {user_name},\n\n"
                f"Thanks for your order #{order_id}.\n\n"
                f"{item_lines}\n\n"
                f"Total: {total:.2f}\n"
                f"Estimated ready time: {ready_at}\n\n"
                "We'll let you know when it's ready for pickup."
            ),
            "html_body": (
                f"<h2>Order Confirmation</h2>"
                f"<p>Hi {escape(str(user_name))},</p>"
                f"<p>Thanks for your order <strong>#{escape(str(order_id))}</strong>.</p>"
                f"<table><tr><th>Item</th><th>Qty</th><th>Subtotal</th></tr>{item_rows}</table>"
                f"<p><strong>Total: {total:.2f}</strong></p>"
                f"<p>Estimated ready time: {escape(str(ready_at))}</p>"
                "<p>We'll let you know when it's ready for pickup.</p>"
            ),
        }
