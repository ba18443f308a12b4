"""Cart endpoints for the signed-in user."""

from fastapi import APIRouter, Depends
from protean.utils.globals import current_domain

from canteen.api.deps import get_current_user
from canteen.api.schemas import AddToCartRequest, Envelope, UpdateCartItemRequest
from canteen.api.serializers import cart_to_dict
from canteen.identity.user import User
from canteen.ordering.cart.items import AddToCart, ClearCart, RemoveFromCart, UpdateCartItem, get_or_create_cart

router = APIRouter(prefix="/cart", tags=["cart"])


def _cart_payload(user: User) -> dict:
    return cart_to_dict(get_or_create_cart(str(user.id)))


@router.get("", response_model=Envelope)
async def get_cart(user: User = Depends(get_current_user)) -> Envelope:
    return Envelope(data=_cart_payload(user))


@router.delete("", response_model=Envelope)
async def clear_cart(user: User = Depends(get_current_user)) -> Envelope:
    current_domain.process(ClearCart(user_id=str(user.id)), asynchronous=False)
    return Envelope(message="Cart cleared", data=_cart_payload(user))


@router.post("/items", response_model=Envelope)
async def add_item(body: AddToCartRequest, user: User = Depends(get_current_user)) -> Envelope:
    command = AddToCart(
        user_id=str(user.id),
        menu_item_id=body.menu_item_id,
        quantity=body.quantity,
    )
    current_domain.process(command, asynchronous=False)
    return Envelope(message="Item added to cart", data=_cart_payload(user))


@router.put("/items/{menu_item_id}", response_model=Envelope)
async def update_item(menu_item_id: str, body: UpdateCartItemRequest, user: User = Depends(get_current_user)) -> Envelope:
    command = UpdateCartItem(
        user_id=str(user.id),
        menu_item_id=menu_item_id,
        quantity=body.quantity,
    )
    current_domain.process(command, asynchronous=False)
    return Envelope(message="Cart updated", data=_cart_payload(user))


@router.delete("/items/{menu_item_id}", response_model=Envelope)
async def remove_item(menu_item_id: str, user: User = Depends(get_current_user)) -> Envelope:
    current_domain.process(RemoveFromCart(user_id=str(user.id), menu_item_id=menu_item_id), asynchronous=False)
    return Envelope(message="Item removed from cart", data=_cart_payload(user))
