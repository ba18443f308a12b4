"""Cloudinary-backed image store.

Credentials come from the ``CLOUDINARY_URL`` environment variable, which the
cloudinary SDK reads on its own.
"""

import cloudinary.uploader
from cloudinary.exceptions import Error as CloudinaryError

from canteen.media.port import ImageStore, ImageStoreError, StoredImage


class CloudinaryImageStore(ImageStore):
    def upload(self, data: bytes, folder: str, filename: str | None = None) -> StoredImage:
        try:
            result = cloudinary.uploader.upload(data, folder=folder, resource_type="image")
        except CloudinaryError as exc:
            raise ImageStoreError(str(exc)) from exc
        return StoredImage(url=result["secure_url"], public_id=result["public_id"])

    def delete(self, public_id: str) -> None:
        try:
            result = cloudinary.uploader.destroy(public_id)
        except CloudinaryError as exc:
            raise ImageStoreError(str(exc)) from exc
        if result.get("result") not in ("ok", "not found"):
            raise ImageStoreError(f"Unexpected delete result for {public_id}: {result}")
