"""In-memory image store for development and tests."""

from uuid import uuid4

from canteen.media.port import ImageStore, ImageStoreError, StoredImage


class FakeImageStore(ImageStore):
    def __init__(self):
        self.objects: dict[str, bytes] = {}
        self.fail_uploads = False
        self.fail_deletes = False

    def configure(self, fail_uploads: bool = False, fail_deletes: bool = False):
        self.fail_uploads = fail_uploads
        self.fail_deletes = fail_deletes

    def upload(self, data: bytes, folder: str, filename: str | None = None) -> StoredImage:
        if self.fail_uploads:
            raise ImageStoreError("Upload rejected by image store")
        public_id = f"{folder}/{uuid4().hex[:16]}"
        self.objects[public_id] = data
        return StoredImage(url=f"https://images.example.test/{public_id}", public_id=public_id)

    def delete(self, public_id: str) -> None:
        if self.fail_deletes:
            raise ImageStoreError(f"Could not delete {public_id}")
        self.objects.pop(public_id, None)

    def reset(self):
        self.objects.clear()
        self.fail_uploads = False
        self.fail_deletes = False
