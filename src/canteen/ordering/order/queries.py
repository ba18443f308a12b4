"""Order read paths for customers and admins."""

from datetime import UTC, date, datetime, time, timedelta

from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from canteen.exceptions import NotFoundError
from canteen.ordering.order.order import Order, OrderStatus


def as_utc(value: datetime | None) -> datetime | None:
    """Stored datetimes may come back naive from SQL providers; treat them as UTC."""
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value


def day_window(start: date | None, end: date | None) -> tuple[datetime | None, datetime | None]:
    """Turn inclusive calendar days into a half-open ``[from, to)`` UTC window."""
    window_start = datetime.combine(start, time.min, tzinfo=UTC) if start else None
    window_end = datetime.combine(end + timedelta(days=1), time.min, tzinfo=UTC) if end else None
    return window_start, window_end


def _newest_first(orders):
    return sorted(orders, key=lambda o: as_utc(o.order_date), reverse=True)


def get_user_order(user_id, order_id):
    """Load an order only if it belongs to ``user_id``."""
    try:
        order = current_domain.repository_for(Order).get(str(order_id))
    except ObjectNotFoundError as exc:
        raise NotFoundError({"_entity": ["Order not found"]}) from exc
    if str(order.user_id) != str(user_id):
        raise NotFoundError({"_entity": ["Order not found"]})
    return order


def list_user_orders(user_id, status=None):
    query = current_domain.repository_for(Order)._dao.query.filter(user_id=str(user_id))
    if status:
        query = query.filter(status=status)
    return _newest_first(query.limit(None).all().items)


def list_orders(status=None, start=None, end=None):
    """All orders, optionally narrowed by status and a ``[start, end)`` window."""
    query = current_domain.repository_for(Order)._dao.query
    if status:
        query = query.filter(status=status)
    # limit(None) goes last: every filter() clone falls back to the 100-row default
    orders = query.limit(None).all().items

    if start is not None:
        orders = [o for o in orders if as_utc(o.order_date) >= start]
    if end is not None:
        orders = [o for o in orders if as_utc(o.order_date) < end]
    return _newest_first(orders)


def summarize_by_status(orders):
    """``{status: {"count", "total_amount"}}`` for every status, zeros included."""
    summary = {s.value: {"count": 0, "total_amount": 0.0} for s in OrderStatus}
    for order in orders:
        bucket = summary[order.status]
        bucket["count"] += 1
        bucket["total_amount"] = round(bucket["total_amount"] + order.total_amount, 2)
    return summary
