"""Category aggregate: groups menu items on the canteen menu."""

from datetime import UTC, datetime

from protean.fields import DateTime, String

from canteen.domain import canteen


@canteen.aggregate
class Category:
    name: String(required=True, max_length=50, unique=True)
    description: String(max_length=200)
    created_at: DateTime()
    updated_at: DateTime()

    @classmethod
    def create(cls, name, description=None):
        now = datetime.now(UTC)
        return cls(
            name=name.strip(),
            description=description,
            created_at=now,
            updated_at=now,
        )

    def update_details(self, name=None, description=None):
        if name is not None:
            self.name = name.strip()
        if description is not None:
            self.description = description
        self.updated_at = datetime.now(UTC)
