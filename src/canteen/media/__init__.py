"""Image store factory.

Provides get_image_store() / set_image_store() to swap implementations:
- FakeImageStore for development and testing
- CloudinaryImageStore when ``IMAGE_STORE=cloudinary``
"""

import os

from canteen.media.port import ImageStore

_current_store: ImageStore | None = None


def get_image_store() -> ImageStore:
    """Return the current image store. Defaults to FakeImageStore."""
    global _current_store
    if _current_store is None:
        if os.getenv("IMAGE_STORE", "fake").lower() == "cloudinary":
            from canteen.media.cloudinary_store import CloudinaryImageStore

            _current_store = CloudinaryImageStore()
        else:
            from canteen.media.fake_store import FakeImageStore

            _current_store = FakeImageStore()
    return _current_store


def set_image_store(store: ImageStore) -> None:
    global _current_store
    _current_store = store


def reset_image_store() -> None:
    global _current_store
    _current_store = None
