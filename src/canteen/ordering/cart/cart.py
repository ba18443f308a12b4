"""Cart aggregate: one per user, holding price snapshots of menu items.

Each line copies the menu item's name and price at the moment it is added.
Later quantity changes reuse that snapshot and never re-read the catalogue,
so a line keeps its original price until it is removed and added again.
"""

from datetime import UTC, datetime

from protean import atomic_change, invariant
from protean.exceptions import ValidationError
from protean.fields import DateTime, Float, HasMany, Identifier, Integer, String

from canteen.domain import canteen
from canteen.exceptions import NotFoundError
from canteen.ordering.cart.events import CartCleared, CartItemAdded, CartItemQuantityChanged, CartItemRemoved

MAX_QUANTITY_PER_ITEM = 10


def _money(value) -> float:
    return round(float(value), 2)


@canteen.entity(part_of="Cart")
class CartLine:
    menu_item_id = Identifier(required=True)
    name = String(required=True, max_length=100)
    price = Float(required=True, min_value=0.0)
    quantity = Integer(required=True, min_value=1, max_value=MAX_QUANTITY_PER_ITEM)
    subtotal = Float(required=True, min_value=0.0)


@canteen.aggregate
class Cart:
    user_id = Identifier(required=True, unique=True)
    items = HasMany(CartLine)
    total_amount = Float(default=0.0)
    created_at = DateTime()
    updated_at = DateTime()

    @invariant.post
    def total_must_equal_sum_of_subtotals(self):
        if not self.items:
            return
        expected = _money(sum(line.subtotal for line in self.items))
        if _money(self.total_amount or 0.0) != expected:
            raise ValidationError({"total_amount": ["Cart total must equal the sum of line subtotals"]})

    @invariant.post
    def subtotals_must_match_quantities(self):
        for line in self.items:
            if _money(line.subtotal) != _money(line.price * line.quantity):
                raise ValidationError({"items": [f"Subtotal of {line.name} does not match price and quantity"]})

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @classmethod
    def create(cls, user_id):
        now = datetime.now(UTC)
        return cls(user_id=user_id, total_amount=0.0, created_at=now, updated_at=now)

    # -------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------
    def line_for(self, menu_item_id):
        return next((line for line in self.items if str(line.menu_item_id) == str(menu_item_id)), None)

    @property
    def is_empty(self) -> bool:
        return not self.items

    @staticmethod
    def check_add_quantity(quantity):
        if quantity is None or not 1 <= quantity <= MAX_QUANTITY_PER_ITEM:
            raise ValidationError({"quantity": [f"Quantity must be between 1 and {MAX_QUANTITY_PER_ITEM}"]})

    def _recalculate_total(self):
        self.total_amount = _money(sum(line.subtotal for line in self.items))
        self.updated_at = datetime.now(UTC)

    # -------------------------------------------------------------------
    # Mutations
    # -------------------------------------------------------------------
    def add_item(self, menu_item_id, name, price, quantity=1):
        """Add ``quantity`` of a menu item, merging with an existing line.

        ``name`` and ``price`` are the current catalogue values; they are only
        used when a new line is created.
        """
        self.check_add_quantity(quantity)

        existing = self.line_for(menu_item_id)
        if existing is not None and existing.quantity + quantity > MAX_QUANTITY_PER_ITEM:
            raise ValidationError({"quantity": [f"Maximum quantity per item is {MAX_QUANTITY_PER_ITEM}"]})

        with atomic_change(self):
            if existing is not None:
                existing.quantity += quantity
                existing.subtotal = _money(existing.price * existing.quantity)
                line = existing
            else:
                line = CartLine(
                    menu_item_id=menu_item_id,
                    name=name,
                    price=_money(price),
                    quantity=quantity,
                    subtotal=_money(price * quantity),
                )
                self.add_items(line)
            self._recalculate_total()

        self.raise_(
            CartItemAdded(
                cart_id=str(self.id),
                user_id=str(self.user_id),
                menu_item_id=str(menu_item_id),
                quantity=quantity,
                line_quantity=line.quantity,
                total_amount=self.total_amount,
            )
        )

    def update_item_quantity(self, menu_item_id, quantity):
        """Overwrite a line's quantity; zero removes the line."""
        if quantity is None or not 0 <= quantity <= MAX_QUANTITY_PER_ITEM:
            raise ValidationError({"quantity": [f"Quantity must be between 0 and {MAX_QUANTITY_PER_ITEM}"]})

        line = self.line_for(menu_item_id)
        if line is None:
            raise NotFoundError({"menu_item_id": ["Item not found in cart"]})

        if quantity == 0:
            self.remove_item(menu_item_id)
            return

        previous_quantity = line.quantity
        with atomic_change(self):
            line.quantity = quantity
            line.subtotal = _money(line.price * quantity)
            self._recalculate_total()

        self.raise_(
            CartItemQuantityChanged(
                cart_id=str(self.id),
                user_id=str(self.user_id),
                menu_item_id=str(menu_item_id),
                previous_quantity=previous_quantity,
                new_quantity=quantity,
                total_amount=self.total_amount,
            )
        )

    def remove_item(self, menu_item_id):
        """Drop the line for a menu item. A missing line is not an error."""
        line = self.line_for(menu_item_id)
        if line is None:
            return

        with atomic_change(self):
            self.remove_items(line)
            self._recalculate_total()

        self.raise_(
            CartItemRemoved(
                cart_id=str(self.id),
                user_id=str(self.user_id),
                menu_item_id=str(menu_item_id),
                total_amount=self.total_amount,
            )
        )

    def clear(self):
        with atomic_change(self):
            for line in list(self.items):
                self.remove_items(line)
            self.total_amount = 0.0
            self.updated_at = datetime.now(UTC)

        self.raise_(CartCleared(cart_id=str(self.id), user_id=str(self.user_id)))
