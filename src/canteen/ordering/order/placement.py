"""Order placement: converts the user's cart into a pending order.

The handler runs inside one unit of work, so the new order and the emptied
cart are committed together. Every menu item in the cart is re-read first;
if any has been removed or switched off, nothing is written.
"""

import structlog
from protean import handle
from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from canteen.catalogue.menu_item import MenuItem
from canteen.domain import canteen
from canteen.exceptions import ConflictError
from canteen.ordering.cart.cart import Cart
from canteen.ordering.cart.items import find_cart
from canteen.ordering.order.order import Order, estimate_ready_time

logger = structlog.get_logger(__name__)


@canteen.command(part_of="Order")
class PlaceOrder:
    user_id = Identifier(required=True)
    special_instructions = String(max_length=200)


def _current_menu_items(cart):
    """Load each distinct menu item in the cart, failing on the first unusable one."""
    repo = current_domain.repository_for(MenuItem)
    menu_items = {}
    for line in cart.items:
        key = str(line.menu_item_id)
        if key in menu_items:
            continue
        try:
            menu_item = repo.get(key)
        except ObjectNotFoundError:
            menu_item = None
        if menu_item is None or not menu_item.is_available:
            raise ConflictError({"items": [f'Item "{line.name}" is no longer available']})
        menu_items[key] = menu_item
    return menu_items


@canteen.command_handler(part_of=Order)
class PlaceOrderHandler:
    @handle(PlaceOrder)
    def place_order(self, command):
        cart = find_cart(command.user_id)
        if cart is None or cart.is_empty:
            raise ValidationError({"cart": ["Cart is empty"]})

        menu_items = _current_menu_items(cart)
        estimated_ready_time = estimate_ready_time(item.preparation_time for item in menu_items.values())

        lines = [
            {
                "menu_item_id": str(line.menu_item_id),
                "name": line.name,
                "quantity": line.quantity,
                "price": line.price,
                "subtotal": line.subtotal,
            }
            for line in cart.items
        ]
        order = Order.place(
            user_id=command.user_id,
            lines=lines,
            total_amount=cart.total_amount,
            estimated_ready_time=estimated_ready_time,
            special_instructions=command.special_instructions,
        )
        current_domain.repository_for(Order).add(order)

        cart.clear()
        current_domain.repository_for(Cart).add(cart)

        logger.info(
            "Order placed",
            order_id=str(order.id),
            user_id=str(command.user_id),
            total_amount=order.total_amount,
            estimated_ready_time=estimated_ready_time.isoformat(),
        )
        return str(order.id)
