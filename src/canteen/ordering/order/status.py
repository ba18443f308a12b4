"""Order status changes: customer cancellation and admin updates."""

import structlog
from protean import handle
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from canteen.domain import canteen
from canteen.ordering.order.order import Order
from canteen.ordering.order.queries import get_user_order
from canteen.utils.lookup import get_or_not_found

logger = structlog.get_logger(__name__)


@canteen.command(part_of="Order")
class CancelOrder:
    user_id = Identifier(required=True)
    order_id = Identifier(required=True)


@canteen.command(part_of="Order")
class UpdateOrderStatus:
    order_id = Identifier(required=True)
    status = String(max_length=20)


@canteen.command_handler(part_of=Order)
class OrderStatusHandler:
    @handle(CancelOrder)
    def cancel_order(self, command):
        order = get_user_order(command.user_id, command.order_id)
        order.cancel()
        current_domain.repository_for(Order).add(order)
        logger.info("Order cancelled by customer", order_id=str(order.id))

    @handle(UpdateOrderStatus)
    def update_order_status(self, command):
        order = get_or_not_found(Order, command.order_id, "Order not found")
        previous = order.status
        if order.change_status(command.status):
            current_domain.repository_for(Order).add(order)
            logger.info("Order status updated", order_id=str(order.id), previous=previous, status=order.status)
