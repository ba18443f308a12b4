"""Per-user state tracking for Locust load test scenarios.

Each Locust user instance keeps its own state; nothing is shared across
simulated users.
"""

from dataclasses import dataclass, field


@dataclass
class StudentState:
    token: str | None = None
    menu_item_ids: list[str] = field(default_factory=list)
    order_ids: list[str] = field(default_factory=list)


@dataclass
class KitchenState:
    token: str | None = None
    pending_order_ids: list[str] = field(default_factory=list)
