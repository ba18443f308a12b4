"""Public menu endpoints."""

from fastapi import APIRouter, Query
from protean.exceptions import ValidationError

from canteen.api.schemas import Envelope, PagedEnvelope
from canteen.api.serializers import category_to_dict, menu_item_to_dict, paginate
from canteen.catalogue.menu_item import MenuItem
from canteen.catalogue.queries import filter_menu_items, list_categories, search_menu_items
from canteen.utils.lookup import get_or_not_found

router = APIRouter(prefix="/menu", tags=["menu"])


def _categories_by_id():
    return {str(c.id): c for c in list_categories()}


@router.get("", response_model=PagedEnvelope)
async def list_menu(
    category: str | None = None,
    min_price: float | None = Query(None, ge=0),
    max_price: float | None = Query(None, ge=0),
    is_available: bool | None = None,
    search: str | None = None,
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=100),
) -> PagedEnvelope:
    items = filter_menu_items(
        category=category,
        min_price=min_price,
        max_price=max_price,
        is_available=is_available,
        search=search,
    )
    page_items, meta = paginate(items, page, limit)
    categories = _categories_by_id()
    return PagedEnvelope(data=[menu_item_to_dict(i, categories) for i in page_items], **meta)


# Declared before "/{item_id}" so these paths are not captured as ids
@router.get("/search", response_model=Envelope)
async def search_menu(q: str | None = None) -> Envelope:
    if not q or not q.strip():
        raise ValidationError({"q": ["Please provide search query"]})
    categories = _categories_by_id()
    return Envelope(data=[menu_item_to_dict(i, categories) for i in search_menu_items(q)])


@router.get("/categories", response_model=Envelope)
async def categories() -> Envelope:
    return Envelope(data=[category_to_dict(c) for c in list_categories()])


@router.get("/{item_id}", response_model=Envelope)
async def get_menu_item(item_id: str) -> Envelope:
    item = get_or_not_found(MenuItem, item_id, "Menu item not found")
    return Envelope(data=menu_item_to_dict(item, _categories_by_id()))
