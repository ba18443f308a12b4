"""Menu read paths: filtered listing, quick search and category lookups."""

from protean.utils.globals import current_domain

from canteen.catalogue.category import Category
from canteen.catalogue.menu_item import MenuItem

SEARCH_LIMIT = 10


def _matches(item, term):
    return term in (item.name or "").lower() or term in (item.description or "").lower()


def list_categories():
    categories = current_domain.repository_for(Category)._dao.query.limit(None).all().items
    return sorted(categories, key=lambda c: c.name.lower())


def find_category_by_name(name):
    """Case-insensitive lookup, used to keep category names unique."""
    wanted = name.strip().lower()
    return next((c for c in list_categories() if c.name.lower() == wanted), None)


def count_items_in_category(category_id) -> int:
    return current_domain.repository_for(MenuItem)._dao.query.filter(category_id=str(category_id)).all().total


def filter_menu_items(category=None, min_price=None, max_price=None, is_available=None, search=None):
    """Menu items matching every given filter, sorted by name."""
    query = current_domain.repository_for(MenuItem)._dao.query
    if category:
        query = query.filter(category_id=category)
    if is_available is not None:
        query = query.filter(is_available=is_available)
    items = query.limit(None).all().items

    if min_price is not None:
        items = [i for i in items if i.price >= min_price]
    if max_price is not None:
        items = [i for i in items if i.price <= max_price]
    if search:
        term = search.strip().lower()
        items = [i for i in items if _matches(i, term)]

    return sorted(items, key=lambda i: i.name.lower())


def search_menu_items(q, limit=SEARCH_LIMIT):
    """Available items whose name or description contains ``q``."""
    return filter_menu_items(is_available=True, search=q)[:limit]
