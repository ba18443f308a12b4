"""Admin catalogue endpoints: categories and menu items.

Menu item create/update take multipart form data so an image can travel
with the fields.
"""

from fastapi import APIRouter, Depends, File, Form, UploadFile
from protean.utils.globals import current_domain

from canteen.api.deps import require_admin
from canteen.api.schemas import CategoryRequest, Envelope
from canteen.api.serializers import category_to_dict, menu_item_to_dict
from canteen.catalogue.category import Category
from canteen.catalogue.category_management import CreateCategory, DeleteCategory, UpdateCategory
from canteen.catalogue.menu_item import MenuItem
from canteen.catalogue.menu_management import (
    ToggleMenuItemAvailability,
    create_menu_item,
    delete_menu_item,
    update_menu_item,
)
from canteen.catalogue.queries import list_categories

router = APIRouter(prefix="/admin", tags=["admin"], dependencies=[Depends(require_admin)])


async def _read_upload(image: UploadFile | None):
    if image is None:
        return None, None
    data = await image.read()
    return (data or None), image.filename


def _menu_item_payload(menu_item_id):
    item = current_domain.repository_for(MenuItem).get(menu_item_id)
    return menu_item_to_dict(item, {str(c.id): c for c in list_categories()})


# ---------------------------------------------------------------------------
# Menu items
# ---------------------------------------------------------------------------
@router.post("/menu", status_code=201, response_model=Envelope)
async def create_item(
    name: str | None = Form(None),
    description: str | None = Form(None),
    category: str | None = Form(None),
    price: float | None = Form(None),
    preparation_time: int | None = Form(None),
    is_available: bool = Form(True),
    image: UploadFile | None = File(None),
) -> Envelope:
    data, filename = await _read_upload(image)
    item_id = create_menu_item(
        name=name,
        description=description,
        category_id=category,
        price=price,
        preparation_time=preparation_time,
        is_available=is_available,
        image=data,
        filename=filename,
    )
    return Envelope(message="Menu item created successfully", data=_menu_item_payload(item_id))


@router.put("/menu/{item_id}", response_model=Envelope)
async def update_item(
    item_id: str,
    name: str | None = Form(None),
    description: str | None = Form(None),
    category: str | None = Form(None),
    price: float | None = Form(None),
    preparation_time: int | None = Form(None),
    is_available: bool | None = Form(None),
    image: UploadFile | None = File(None),
) -> Envelope:
    data, filename = await _read_upload(image)
    update_menu_item(
        item_id,
        image=data,
        filename=filename,
        name=name,
        description=description,
        category_id=category,
        price=price,
        preparation_time=preparation_time,
        is_available=is_available,
    )
    return Envelope(message="Menu item updated successfully", data=_menu_item_payload(item_id))


@router.delete("/menu/{item_id}", response_model=Envelope)
async def delete_item(item_id: str) -> Envelope:
    delete_menu_item(item_id)
    return Envelope(message="Menu item deleted successfully")


@router.patch("/menu/{item_id}/availability", response_model=Envelope)
async def toggle_availability(item_id: str) -> Envelope:
    is_available = current_domain.process(ToggleMenuItemAvailability(menu_item_id=item_id), asynchronous=False)
    message = "Menu item enabled" if is_available else "Menu item disabled"
    return Envelope(message=message, data=_menu_item_payload(item_id))


# ---------------------------------------------------------------------------
# Categories
# ---------------------------------------------------------------------------
@router.post("/categories", status_code=201, response_model=Envelope)
async def create_category(body: CategoryRequest) -> Envelope:
    category_id = current_domain.process(
        CreateCategory(name=body.name, description=body.description),
        asynchronous=False,
    )
    category = current_domain.repository_for(Category).get(category_id)
    return Envelope(message="Category created successfully", data=category_to_dict(category))


@router.put("/categories/{category_id}", response_model=Envelope)
async def update_category(category_id: str, body: CategoryRequest) -> Envelope:
    current_domain.process(
        UpdateCategory(category_id=category_id, name=body.name, description=body.description),
        asynchronous=False,
    )
    category = current_domain.repository_for(Category).get(category_id)
    return Envelope(message="Category updated successfully", data=category_to_dict(category))


@router.delete("/categories/{category_id}", response_model=Envelope)
async def delete_category(category_id: str) -> Envelope:
    current_domain.process(DeleteCategory(category_id=category_id), asynchronous=False)
    return Envelope(message="Category deleted successfully")
