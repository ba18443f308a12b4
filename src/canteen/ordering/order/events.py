"""Domain events for the Order aggregate."""

from protean.fields import DateTime, Float, Identifier, Integer, String, Text

from canteen.domain import canteen


@canteen.event(part_of="Order")
class OrderPlaced:
    """A cart was converted into a pending order."""

    __version__ = 1

    order_id = Identifier(required=True)
    user_id = Identifier(required=True)
    items = Text(required=True)  # JSON array of {menu_item_id, name, quantity, price, subtotal}
    item_count = Integer(required=True)
    total_amount = Float(required=True)
    special_instructions = String(max_length=200)
    order_date = DateTime(required=True)
    estimated_ready_time = DateTime(required=True)


@canteen.event(part_of="Order")
class OrderStatusChanged:
    __version__ = 1

    order_id = Identifier(required=True)
    user_id = Identifier(required=True)
    previous_status = String(required=True, max_length=20)
    new_status = String(required=True, max_length=20)
    changed_at = DateTime(required=True)
    actual_ready_time = DateTime()


@canteen.event(part_of="Order")
class OrderCancelled:
    __version__ = 1

    order_id = Identifier(required=True)
    user_id = Identifier(required=True)
    cancelled_at = DateTime(required=True)
