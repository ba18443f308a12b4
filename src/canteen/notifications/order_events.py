"""Order notifications: confirmation on placement, pickup notice when Ready.

Delivery is best effort. Any failure is logged and swallowed so that the
order itself is never affected.
"""

import json

import structlog
from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain
from protean.utils.mixins import handle

from canteen.domain import canteen
from canteen.identity.user import User
from canteen.notifications.mailer import send_templated_email
from canteen.ordering.order.events import OrderPlaced, OrderStatusChanged
from canteen.ordering.order.order import Order, OrderStatus

logger = structlog.get_logger(__name__)


def _recipient(user_id):
    try:
        return current_domain.repository_for(User).get(str(user_id))
    except ObjectNotFoundError:
        logger.warning("Order notification skipped, user not found", user_id=str(user_id))
        return None


def _send(user, template_name, context, order_id):
    try:
        send_templated_email(user.email, template_name, {"name": user.name, **context})
    except Exception as exc:
        logger.error("Order notification failed", order_id=order_id, template=template_name, error=str(exc))


@canteen.event_handler(part_of=Order)
class OrderNotificationsHandler:
    @handle(OrderPlaced)
    def on_order_placed(self, event: OrderPlaced) -> None:
        user = _recipient(event.user_id)
        if user is None:
            return

        _send(
            user,
            "order_confirmation",
            {
                "order_id": str(event.order_id),
                "items": json.loads(event.items),
                "total_amount": event.total_amount,
                "estimated_ready_time": event.estimated_ready_time.strftime("%H:%M"),
            },
            order_id=str(event.order_id),
        )

    @handle(OrderStatusChanged)
    def on_order_status_changed(self, event: OrderStatusChanged) -> None:
        if event.new_status != OrderStatus.READY.value:
            return

        user = _recipient(event.user_id)
        if user is None:
            return

        _send(
            user,
            "order_status_update",
            {"order_id": str(event.order_id), "status": event.new_status},
            order_id=str(event.order_id),
        )
