"""Shape aggregates into JSON-ready dicts for API responses."""

import math


def _iso(value):
    return value.isoformat() if value is not None else None


def user_to_dict(user) -> dict:
    """Public view of a user; never includes password or reset fields."""
    return {
        "id": str(user.id),
        "name": user.name,
        "email": user.email,
        "student_id": user.student_id,
        "phone": user.phone,
        "role": user.role,
        "is_verified": user.is_verified,
        "avatar_url": user.avatar_url,
        "created_at": _iso(user.created_at),
    }


def category_to_dict(category) -> dict:
    return {
        "id": str(category.id),
        "name": category.name,
        "description": category.description,
    }


def menu_item_to_dict(item, categories=None) -> dict:
    """``categories`` maps category id to Category, to embed the category name."""
    category = (categories or {}).get(str(item.category_id))
    return {
        "id": str(item.id),
        "name": item.name,
        "description": item.description,
        "category": (
            category_to_dict(category) if category else {"id": str(item.category_id), "name": None, "description": None}
        ),
        "price": item.price,
        "is_available": item.is_available,
        "preparation_time": item.preparation_time,
        "image_url": item.image_url,
        "created_at": _iso(item.created_at),
        "updated_at": _iso(item.updated_at),
    }


def cart_to_dict(cart) -> dict:
    return {
        "id": str(cart.id),
        "user_id": str(cart.user_id),
        "items": [
            {
                "menu_item_id": str(line.menu_item_id),
                "name": line.name,
                "price": line.price,
                "quantity": line.quantity,
                "subtotal": line.subtotal,
            }
            for line in cart.items
        ],
        "total_amount": cart.total_amount,
        "updated_at": _iso(cart.updated_at),
    }


def order_to_dict(order) -> dict:
    return {
        "id": str(order.id),
        "user_id": str(order.user_id),
        "items": [
            {
                "menu_item_id": str(line.menu_item_id),
                "name": line.name,
                "quantity": line.quantity,
                "price": line.price,
                "subtotal": line.subtotal,
            }
            for line in order.items
        ],
        "total_amount": order.total_amount,
        "status": order.status,
        "special_instructions": order.special_instructions,
        "order_date": _iso(order.order_date),
        "estimated_ready_time": _iso(order.estimated_ready_time),
        "actual_ready_time": _iso(order.actual_ready_time),
    }


def paginate(items: list, page: int, limit: int) -> tuple[list, dict]:
    """Slice one page out of ``items`` and describe it."""
    total = len(items)
    start = (page - 1) * limit
    page_items = items[start : start + limit]
    return page_items, {
        "count": len(page_items),
        "total": total,
        "page": page,
        "pages": math.ceil(total / limit) if limit else 0,
    }
