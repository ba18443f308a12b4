"""Order aggregate (CQRS): a placed cart, tracked through the kitchen.

Lines are copied from the cart at placement time and never change
afterwards. Status moves forward only::

    Pending -> Preparing -> Ready -> Completed
    Pending -> Cancelled
"""

import json
from datetime import UTC, datetime, timedelta
from enum import Enum

from protean.exceptions import ValidationError
from protean.fields import DateTime, Float, HasMany, Identifier, Integer, String

from canteen.domain import canteen
from canteen.exceptions import ConflictError
from canteen.ordering.order.events import OrderCancelled, OrderPlaced, OrderStatusChanged

MAX_PREPARATION_MINUTES = 60
DEFAULT_PREPARATION_MINUTES = 15


class OrderStatus(Enum):
    PENDING = "Pending"
    PREPARING = "Preparing"
    READY = "Ready"
    COMPLETED = "Completed"
    CANCELLED = "Cancelled"


_PROGRESSION = [
    OrderStatus.PENDING.value,
    OrderStatus.PREPARING.value,
    OrderStatus.READY.value,
    OrderStatus.COMPLETED.value,
]
_TERMINAL = {OrderStatus.COMPLETED.value, OrderStatus.CANCELLED.value}


def estimate_ready_time(preparation_times, now=None):
    """Longest preparation time among the items, capped at an hour."""
    now = now or datetime.now(UTC)
    minutes = max(
        (t if t else DEFAULT_PREPARATION_MINUTES for t in preparation_times),
        default=DEFAULT_PREPARATION_MINUTES,
    )
    return now + timedelta(minutes=min(minutes, MAX_PREPARATION_MINUTES))


@canteen.entity(part_of="Order")
class OrderLine:
    menu_item_id = Identifier(required=True)
    name = String(required=True, max_length=100)
    quantity = Integer(required=True, min_value=1)
    price = Float(required=True, min_value=0.0)
    subtotal = Float(required=True, min_value=0.0)


@canteen.aggregate
class Order:
    user_id = Identifier(required=True)
    items = HasMany(OrderLine)
    total_amount = Float(required=True, min_value=0.0)
    status = String(choices=OrderStatus, default=OrderStatus.PENDING.value)
    special_instructions = String(max_length=200, default="")
    order_date = DateTime(required=True)
    estimated_ready_time = DateTime()
    actual_ready_time = DateTime()
    updated_at = DateTime()

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @classmethod
    def place(cls, user_id, lines, total_amount, estimated_ready_time, special_instructions=None, now=None):
        """Create a pending order from cart line snapshots.

        Args:
            lines: dicts with menu_item_id, name, quantity, price and subtotal.
        """
        if not lines:
            raise ValidationError({"items": ["Order must contain at least one item"]})
        now = now or datetime.now(UTC)
        order = cls(
            user_id=user_id,
            items=[OrderLine(**line) for line in lines],
            total_amount=total_amount,
            status=OrderStatus.PENDING.value,
            special_instructions=special_instructions or "",
            order_date=now,
            estimated_ready_time=estimated_ready_time,
            updated_at=now,
        )
        order.raise_(
            OrderPlaced(
                order_id=str(order.id),
                user_id=str(user_id),
                items=json.dumps(lines),
                item_count=sum(line["quantity"] for line in lines),
                total_amount=total_amount,
                special_instructions=order.special_instructions,
                order_date=now,
                estimated_ready_time=estimated_ready_time,
            )
        )
        return order

    # -------------------------------------------------------------------
    # Status changes
    # -------------------------------------------------------------------
    def cancel(self, now=None):
        """Cancel on the customer's behalf; only pending orders qualify."""
        if self.status != OrderStatus.PENDING.value:
            raise ConflictError({"status": ["Can only cancel pending orders"]})

        now = now or datetime.now(UTC)
        self.status = OrderStatus.CANCELLED.value
        self.updated_at = now
        self.raise_(OrderCancelled(order_id=str(self.id), user_id=str(self.user_id), cancelled_at=now))

    def change_status(self, new_status, now=None) -> bool:
        """Move the order to ``new_status``; returns False when nothing changed."""
        if new_status not in [s.value for s in OrderStatus]:
            raise ValidationError({"status": ["Invalid status"]})
        if new_status == self.status:
            return False

        current = self.status
        if current in _TERMINAL:
            raise ConflictError({"status": [f"Cannot change status of a {current.lower()} order"]})
        if new_status == OrderStatus.CANCELLED.value:
            if current != OrderStatus.PENDING.value:
                raise ConflictError({"status": ["Can only cancel pending orders"]})
        elif _PROGRESSION.index(new_status) < _PROGRESSION.index(current):
            raise ConflictError({"status": [f"Cannot move order from {current} back to {new_status}"]})

        now = now or datetime.now(UTC)
        self.status = new_status
        if new_status == OrderStatus.READY.value:
            self.actual_ready_time = now
        self.updated_at = now

        self.raise_(
            OrderStatusChanged(
                order_id=str(self.id),
                user_id=str(self.user_id),
                previous_status=current,
                new_status=new_status,
                changed_at=now,
                actual_ready_time=self.actual_ready_time,
            )
        )
        if new_status == OrderStatus.CANCELLED.value:
            self.raise_(OrderCancelled(order_id=str(self.id), user_id=str(self.user_id), cancelled_at=now))
        return True
