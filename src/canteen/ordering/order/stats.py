"""Order statistics for the admin dashboard.

Every figure is a plain grouping over the matched orders, whatever their
status; ``by_status`` is there to tell cancelled revenue apart.
"""

from collections import defaultdict
from datetime import UTC, datetime, timedelta

from canteen.ordering.order.queries import as_utc, list_orders

POPULAR_ITEMS_LIMIT = 10
RECENT_DAYS = 7


def _overall(orders):
    revenue = round(sum(o.total_amount for o in orders), 2)
    return {
        "total_orders": len(orders),
        "total_revenue": revenue,
        "average_order_value": round(revenue / len(orders), 2) if orders else 0.0,
    }


def _by_status(orders):
    counts = defaultdict(int)
    for order in orders:
        counts[order.status] += 1
    return [{"status": status, "count": count} for status, count in sorted(counts.items())]


def _popular_items(orders, limit):
    totals = defaultdict(lambda: {"total_ordered": 0, "revenue": 0.0})
    for order in orders:
        for line in order.items:
            bucket = totals[line.name]
            bucket["total_ordered"] += line.quantity
            bucket["revenue"] = round(bucket["revenue"] + line.subtotal, 2)

    ranked = sorted(totals.items(), key=lambda kv: (-kv[1]["total_ordered"], kv[0]))
    return [{"name": name, **values} for name, values in ranked[:limit]]


def _by_date(orders, now):
    since = now - timedelta(days=RECENT_DAYS)
    days = defaultdict(lambda: {"count": 0, "revenue": 0.0})
    for order in orders:
        placed = as_utc(order.order_date)
        if placed < since:
            continue
        bucket = days[placed.date().isoformat()]
        bucket["count"] += 1
        bucket["revenue"] = round(bucket["revenue"] + order.total_amount, 2)
    return [{"date": day, **values} for day, values in sorted(days.items())]


def get_order_stats(start=None, end=None, now=None):
    """Aggregate orders placed within ``[start, end)``.

    The daily breakdown always covers the last seven days, whatever the
    window.
    """
    now = now or datetime.now(UTC)
    orders = list_orders(start=start, end=end)
    return {
        "overall": _overall(orders),
        "by_status": _by_status(orders),
        "popular_items": _popular_items(orders, POPULAR_ITEMS_LIMIT),
        "by_date": _by_date(list_orders(start=now - timedelta(days=RECENT_DAYS)), now),
    }
