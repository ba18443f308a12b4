"""Menu item management: commands, handler and image-aware entry points.

Routes call the ``create_menu_item``/``update_menu_item``/``delete_menu_item``
functions rather than the commands directly, because images must be
uploaded to the external store before the item is written and removed after
it is deleted.
"""

import structlog
from protean import handle
from protean.exceptions import ValidationError
from protean.fields import Boolean, Float, Identifier, Integer, String
from protean.utils.globals import current_domain

from canteen.catalogue.category import Category
from canteen.catalogue.menu_item import MenuItem
from canteen.domain import canteen
from canteen.media.images import MENU_ITEMS_FOLDER, discard_image, upload_image
from canteen.utils.lookup import get_or_not_found

logger = structlog.get_logger(__name__)

_REQUIRED_FIELDS = ("name", "description", "category_id", "price", "preparation_time")


@canteen.command(part_of="MenuItem")
class CreateMenuItem:
    name = String(max_length=100)
    description = String(max_length=500)
    category_id = Identifier()
    price = Float()
    preparation_time = Integer()
    is_available = Boolean(default=True)
    image_url = String(max_length=500)
    image_public_id = String(max_length=255)


@canteen.command(part_of="MenuItem")
class UpdateMenuItem:
    menu_item_id = Identifier(required=True)
    name = String(max_length=100)
    description = String(max_length=500)
    category_id = Identifier()
    price = Float()
    preparation_time = Integer()
    is_available = Boolean()
    image_url = String(max_length=500)
    image_public_id = String(max_length=255)


@canteen.command(part_of="MenuItem")
class DeleteMenuItem:
    menu_item_id = Identifier(required=True)


@canteen.command(part_of="MenuItem")
class ToggleMenuItemAvailability:
    menu_item_id = Identifier(required=True)


def _require_category(category_id):
    get_or_not_found(Category, category_id, "Category not found")


@canteen.command_handler(part_of=MenuItem)
class ManageMenuItemHandler:
    @handle(CreateMenuItem)
    def create_menu_item(self, command):
        if any(getattr(command, field) in (None, "") for field in _REQUIRED_FIELDS):
            raise ValidationError({"menu_item": ["Please provide all required fields"]})
        _require_category(command.category_id)

        item = MenuItem.create(
            name=command.name,
            description=command.description,
            category_id=command.category_id,
            price=command.price,
            preparation_time=command.preparation_time,
            is_available=command.is_available if command.is_available is not None else True,
            image_url=command.image_url,
            image_public_id=command.image_public_id,
        )
        current_domain.repository_for(MenuItem).add(item)
        return str(item.id)

    @handle(UpdateMenuItem)
    def update_menu_item(self, command):
        repo = current_domain.repository_for(MenuItem)
        item = get_or_not_found(MenuItem, command.menu_item_id, "Menu item not found")

        if command.category_id:
            _require_category(command.category_id)

        item.update_details(
            name=command.name,
            description=command.description,
            category_id=command.category_id,
            price=command.price,
            preparation_time=command.preparation_time,
            is_available=command.is_available,
        )
        if command.image_public_id:
            item.replace_image(command.image_url, command.image_public_id)
        repo.add(item)

    @handle(DeleteMenuItem)
    def delete_menu_item(self, command):
        repo = current_domain.repository_for(MenuItem)
        item = get_or_not_found(MenuItem, command.menu_item_id, "Menu item not found")
        repo._dao.delete(item)
        return item.image_public_id

    @handle(ToggleMenuItemAvailability)
    def toggle_availability(self, command):
        repo = current_domain.repository_for(MenuItem)
        item = get_or_not_found(MenuItem, command.menu_item_id, "Menu item not found")
        is_available = item.toggle_availability()
        repo.add(item)
        return is_available


# ---------------------------------------------------------------------------
# Entry points used by the admin API
# ---------------------------------------------------------------------------
def create_menu_item(
    name=None,
    description=None,
    category_id=None,
    price=None,
    preparation_time=None,
    is_available=True,
    image=None,
    filename=None,
):
    """Validate, upload the optional image, then create the item."""
    fields = {
        "name": name,
        "description": description,
        "category_id": category_id,
        "price": price,
        "preparation_time": preparation_time,
    }
    if any(value in (None, "") for value in fields.values()):
        raise ValidationError({"menu_item": ["Please provide all required fields"]})
    _require_category(category_id)

    stored = upload_image(image, MENU_ITEMS_FOLDER, filename=filename) if image else None

    item_id = current_domain.process(
        CreateMenuItem(
            **fields,
            is_available=is_available,
            image_url=stored.url if stored else None,
            image_public_id=stored.public_id if stored else None,
        ),
        asynchronous=False,
    )
    logger.info("Menu item created", menu_item_id=item_id, has_image=stored is not None)
    return item_id


def update_menu_item(menu_item_id, image=None, filename=None, **changes):
    """Apply a partial update, replacing the image when a new one is given.

    The old image is deleted before the new one is uploaded; if the upload
    then fails the item keeps pointing at the deleted image.
    """
    item = get_or_not_found(MenuItem, menu_item_id, "Menu item not found")
    if changes.get("category_id"):
        _require_category(changes["category_id"])

    stored = None
    if image:
        discard_image(item.image_public_id)
        stored = upload_image(image, MENU_ITEMS_FOLDER, filename=filename)

    current_domain.process(
        UpdateMenuItem(
            menu_item_id=menu_item_id,
            image_url=stored.url if stored else None,
            image_public_id=stored.public_id if stored else None,
            **changes,
        ),
        asynchronous=False,
    )


def delete_menu_item(menu_item_id):
    image_public_id = current_domain.process(DeleteMenuItem(menu_item_id=menu_item_id), asynchronous=False)
    discard_image(image_public_id)
    logger.info("Menu item deleted", menu_item_id=menu_item_id)
