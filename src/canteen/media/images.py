"""Upload and delete helpers shared by menu items and avatars."""

import structlog

from canteen.exceptions import DependencyError
from canteen.media import get_image_store
from canteen.media.port import ImageStoreError, StoredImage

logger = structlog.get_logger(__name__)

MENU_ITEMS_FOLDER = "menu-items"
AVATARS_FOLDER = "avatars"


def upload_image(data: bytes, folder: str, filename: str | None = None) -> StoredImage:
    try:
        stored = get_image_store().upload(data, folder, filename=filename)
    except ImageStoreError as exc:
        logger.error("Image upload failed", folder=folder, error=str(exc))
        raise DependencyError({"image": ["Failed to upload image"]}) from exc

    logger.info("Image uploaded", folder=folder, public_id=stored.public_id)
    return stored


def discard_image(public_id: str | None) -> None:
    """Delete an image, tolerating failure.

    A failed delete leaves an orphan in the store; it is logged and the
    caller carries on.
    """
    if not public_id:
        return
    try:
        get_image_store().delete(public_id)
    except ImageStoreError as exc:
        logger.warning("Image delete failed, leaving orphan", public_id=public_id, error=str(exc))
