"""Order endpoints: placement and history for users, oversight for admins."""

from datetime import date

from fastapi import APIRouter, Depends, Query
from protean.exceptions import ValidationError
from protean.utils.globals import current_domain

from canteen.api.deps import get_current_user, require_admin
from canteen.api.schemas import Envelope, OrderListEnvelope, PagedEnvelope, PlaceOrderRequest, UpdateOrderStatusRequest
from canteen.api.serializers import order_to_dict, paginate
from canteen.identity.user import User
from canteen.ordering.order.order import Order
from canteen.ordering.order.placement import PlaceOrder
from canteen.ordering.order.queries import (
    day_window,
    get_user_order,
    list_orders,
    list_user_orders,
    summarize_by_status,
)
from canteen.ordering.order.stats import get_order_stats
from canteen.ordering.order.status import CancelOrder, UpdateOrderStatus

router = APIRouter(prefix="/orders", tags=["orders"])


def _order_payload(order_id) -> dict:
    return order_to_dict(current_domain.repository_for(Order).get(order_id))


@router.post("", status_code=201, response_model=Envelope)
async def place_order(body: PlaceOrderRequest | None = None, user: User = Depends(get_current_user)) -> Envelope:
    instructions = body.special_instructions if body else None
    order_id = current_domain.process(
        PlaceOrder(user_id=str(user.id), special_instructions=instructions),
        asynchronous=False,
    )
    return Envelope(message="Order placed successfully", data=_order_payload(order_id))


@router.get("", response_model=PagedEnvelope)
async def my_orders(
    status: str | None = None,
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    user: User = Depends(get_current_user),
) -> PagedEnvelope:
    orders, meta = paginate(list_user_orders(str(user.id), status=status), page, limit)
    return PagedEnvelope(data=[order_to_dict(o) for o in orders], **meta)


# ---------------------------------------------------------------------------
# Admin (declared before "/{order_id}" so "admin" is not read as an id)
# ---------------------------------------------------------------------------
@router.get("/admin/all", response_model=OrderListEnvelope)
async def all_orders(
    status: str | None = None,
    start_date: date | None = None,
    end_date: date | None = None,
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=100),
    admin: User = Depends(require_admin),
) -> OrderListEnvelope:
    start, end = day_window(start_date, end_date)
    orders = list_orders(status=status, start=start, end=end)
    page_items, meta = paginate(orders, page, limit)
    return OrderListEnvelope(
        data=[order_to_dict(o) for o in page_items],
        stats=summarize_by_status(orders),
        **meta,
    )


@router.get("/admin/stats", response_model=Envelope)
async def order_stats(
    start_date: date | None = None,
    end_date: date | None = None,
    admin: User = Depends(require_admin),
) -> Envelope:
    start, end = day_window(start_date, end_date)
    return Envelope(data=get_order_stats(start=start, end=end))


@router.put("/{order_id}/status", response_model=Envelope)
async def update_status(order_id: str, body: UpdateOrderStatusRequest, admin: User = Depends(require_admin)) -> Envelope:
    if not body.status:
        raise ValidationError({"status": ["Invalid status"]})
    current_domain.process(UpdateOrderStatus(order_id=order_id, status=body.status), asynchronous=False)
    return Envelope(message="Order status updated successfully", data=_order_payload(order_id))


# ---------------------------------------------------------------------------
# Customer
# ---------------------------------------------------------------------------
@router.get("/{order_id}", response_model=Envelope)
async def get_order(order_id: str, user: User = Depends(get_current_user)) -> Envelope:
    return Envelope(data=order_to_dict(get_user_order(str(user.id), order_id)))


@router.put("/{order_id}/cancel", response_model=Envelope)
async def cancel_order(order_id: str, user: User = Depends(get_current_user)) -> Envelope:
    current_domain.process(CancelOrder(user_id=str(user.id), order_id=order_id), asynchronous=False)
    return Envelope(message="Order cancelled successfully", data=_order_payload(order_id))
