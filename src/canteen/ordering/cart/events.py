"""Domain events for the Cart aggregate."""

from protean.fields import Float, Identifier, Integer

from canteen.domain import canteen


@canteen.event(part_of="Cart")
class CartItemAdded:
    """A menu item was added to the cart, or its quantity increased."""

    __version__ = 1

    cart_id = Identifier(required=True)
    user_id = Identifier(required=True)
    menu_item_id = Identifier(required=True)
    quantity = Integer(required=True)
    line_quantity = Integer(required=True)
    total_amount = Float(required=True)


@canteen.event(part_of="Cart")
class CartItemQuantityChanged:
    __version__ = 1

    cart_id = Identifier(required=True)
    user_id = Identifier(required=True)
    menu_item_id = Identifier(required=True)
    previous_quantity = Integer(required=True)
    new_quantity = Integer(required=True)
    total_amount = Float(required=True)


@canteen.event(part_of="Cart")
class CartItemRemoved:
    __version__ = 1

    cart_id = Identifier(required=True)
    user_id = Identifier(required=True)
    menu_item_id = Identifier(required=True)
    total_amount = Float(required=True)


@canteen.event(part_of="Cart")
class CartCleared:
    __version__ = 1

    cart_id = Identifier(required=True)
    user_id = Identifier(required=True)
