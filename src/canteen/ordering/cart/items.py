"""Cart item management: commands, handler and the lazy cart lookup."""

from protean import handle
from protean.exceptions import ValidationError
from protean.fields import Identifier, Integer
from protean.utils.globals import current_domain

from canteen.catalogue.menu_item import MenuItem
from canteen.domain import canteen
from canteen.exceptions import ConflictError
from canteen.ordering.cart.cart import Cart
from canteen.utils.lookup import get_or_not_found


def find_cart(user_id):
    return current_domain.repository_for(Cart)._dao.query.filter(user_id=str(user_id)).all().first


def get_or_create_cart(user_id):
    """Return the user's cart, creating and saving an empty one on first use."""
    cart = find_cart(user_id)
    if cart is None:
        cart = Cart.create(user_id=str(user_id))
        current_domain.repository_for(Cart).add(cart)
    return cart


@canteen.command(part_of="Cart")
class AddToCart:
    user_id = Identifier(required=True)
    menu_item_id = Identifier()
    quantity = Integer(default=1)


@canteen.command(part_of="Cart")
class UpdateCartItem:
    user_id = Identifier(required=True)
    menu_item_id = Identifier(required=True)
    quantity = Integer()


@canteen.command(part_of="Cart")
class RemoveFromCart:
    user_id = Identifier(required=True)
    menu_item_id = Identifier(required=True)


@canteen.command(part_of="Cart")
class ClearCart:
    user_id = Identifier(required=True)


@canteen.command_handler(part_of=Cart)
class ManageCartItemsHandler:
    @handle(AddToCart)
    def add_to_cart(self, command):
        if not command.menu_item_id:
            raise ValidationError({"menu_item_id": ["Please provide menu item ID"]})
        Cart.check_add_quantity(command.quantity)

        menu_item = get_or_not_found(MenuItem, command.menu_item_id, "Menu item not found")
        if not menu_item.is_available:
            raise ConflictError({"menu_item_id": ["This item is currently unavailable"]})

        cart = get_or_create_cart(command.user_id)
        cart.add_item(
            menu_item_id=str(menu_item.id),
            name=menu_item.name,
            price=menu_item.price,
            quantity=command.quantity,
        )
        current_domain.repository_for(Cart).add(cart)

    @handle(UpdateCartItem)
    def update_cart_item(self, command):
        cart = get_or_create_cart(command.user_id)
        cart.update_item_quantity(command.menu_item_id, command.quantity)
        current_domain.repository_for(Cart).add(cart)

    @handle(RemoveFromCart)
    def remove_from_cart(self, command):
        cart = get_or_create_cart(command.user_id)
        cart.remove_item(command.menu_item_id)
        current_domain.repository_for(Cart).add(cart)

    @handle(ClearCart)
    def clear_cart(self, command):
        cart = get_or_create_cart(command.user_id)
        cart.clear()
        current_domain.repository_for(Cart).add(cart)
