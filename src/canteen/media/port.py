"""Image store port (abstract interface).

Menu pictures and avatars live in an external object store. Adapters return
the public URL and the store's id for the object; the id is what ``delete``
takes.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass(frozen=True)
class StoredImage:
    url: str
    public_id: str


class ImageStoreError(Exception):
    """Raised by adapters when the store rejects or fails an operation."""


class ImageStore(ABC):
    @abstractmethod
    def upload(self, data: bytes, folder: str, filename: str | None = None) -> StoredImage:
        """Store ``data`` under ``folder``.

        Raises:
            ImageStoreError: on any failure.
        """
        ...

    @abstractmethod
    def delete(self, public_id: str) -> None:
        """Remove an object.

        Raises:
            ImageStoreError: on any failure.
        """
        ...
