"""
Player Model for Fable.

Tracks location and carried items. The total weight of carried items
never exceeds `max_inventory_weight`, and an item id is carried at most once.
"""

from __future__ import annotations

from collections.abc import Callable

from pydantic import BaseModel, Field


class Player(BaseModel):
    """The player character."""

    current_room_id: str
    inventory: list[str] = Field(default_factory=list)
    max_inventory_weight: float = Field(default=10.0, ge=0)
    default_item_weight: float = Field(default=1.0, ge=0)
    item_weights: dict[str, float] = Field(
        default_factory=dict, description="item id -> weight"
    )

    def get_item_weight(self, item_id: str) -> float:
        return self.item_weights.get(item_id, self.default_item_weight)

    def set_item_weight(self, item_id: str, weight: float) -> None:
        self.item_weights[item_id] = weight

    def get_current_weight(self) -> float:
        return sum(self.get_item_weight(item_id) for item_id in self.inventory)

    def can_carry(self, item_id: str) -> bool:
        """Whether picking up the item keeps the load within the limit."""
        return self.get_current_weight() + self.get_item_weight(item_id) <= self.max_inventory_weight

    def add_item(self, item_id: str) -> bool:
        if item_id in self.inventory or not self.can_carry(item_id):
            return False
        self.inventory.append(item_id)
        return True

    def remove_item(self, item_id: str) -> bool:
        if item_id not in self.inventory:
            return False
        self.inventory.remove(item_id)
        return True

    def has_item(self, item_id: str) -> bool:
        return item_id in self.inventory

    def get_inventory_list(self) -> list[str]:
        return list(self.inventory)

    def clear_inventory(self) -> None:
        self.inventory = []

    def move_to_room(self, room_id: str) -> None:
        self.current_room_id = room_id

    def get_inventory_description(
        self, resolve_name: Callable[[str], str | None] | None = None
    ) -> str:
        """
        Describe what the player carries.

        Args:
            resolve_name: Optional lookup from item id to display name;
                ids it cannot resolve are left out

        Returns:
            Human-readable inventory line with the current load
        """
        if not self.inventory:
            return "You are not carrying anything."

        if resolve_name is not None:
            names = [name for name in map(resolve_name, self.inventory) if name]
        else:
            names = list(self.inventory)

        load = f"({self.get_current_weight():g}/{self.max_inventory_weight:g} weight)"
        return f"You are carrying: {', '.join(names)} {load}"
