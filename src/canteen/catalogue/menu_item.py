"""MenuItem aggregate: a dish or drink that students can order."""

from datetime import UTC, datetime

from protean.fields import Boolean, DateTime, Float, Identifier, Integer, String

from canteen.domain import canteen

DEFAULT_PREPARATION_TIME = 15


@canteen.aggregate
class MenuItem:
    """An orderable item.

    ``preparation_time`` is in minutes and feeds the ready-time estimate of
    orders that contain the item. The image fields reference an object in the
    external image store.
    """

    name: String(required=True, max_length=100)
    description: String(required=True, max_length=500)
    category_id: Identifier(required=True)
    price: Float(required=True, min_value=0.0)
    is_available: Boolean(default=True)
    preparation_time: Integer(default=DEFAULT_PREPARATION_TIME, min_value=1)
    image_url: String(max_length=500)
    image_public_id: String(max_length=255)
    created_at: DateTime()
    updated_at: DateTime()

    @classmethod
    def create(
        cls,
        name,
        description,
        category_id,
        price,
        preparation_time=DEFAULT_PREPARATION_TIME,
        is_available=True,
        image_url=None,
        image_public_id=None,
    ):
        now = datetime.now(UTC)
        return cls(
            name=name.strip(),
            description=description.strip(),
            category_id=category_id,
            price=price,
            preparation_time=preparation_time,
            is_available=is_available,
            image_url=image_url,
            image_public_id=image_public_id,
            created_at=now,
            updated_at=now,
        )

    def update_details(self, **changes):
        """Apply a partial update; keys whose value is ``None`` are ignored."""
        for field in ("name", "description", "category_id", "price", "preparation_time", "is_available"):
            value = changes.get(field)
            if value is not None:
                setattr(self, field, value)
        self.updated_at = datetime.now(UTC)

    def replace_image(self, image_url, image_public_id):
        self.image_url = image_url
        self.image_public_id = image_public_id
        self.updated_at = datetime.now(UTC)

    def toggle_availability(self):
        self.is_available = not self.is_available
        self.updated_at = datetime.now(UTC)
        return self.is_available
