"""
Item Model for Fable.

Items are passive data holders with a handful of behaviors:
examining, taking/dropping, container bookkeeping and "use".
"""

from __future__ import annotations

from enum import Enum
from typing import TypeVar

from pydantic import BaseModel, Field, model_validator

from fable.models.effects import CapacityEffect, DamageEffect, ItemEffect, UnlocksEffect
from fable.models.usage import DEFAULT_USE_STRATEGIES, GameEntity, UseStrategyRegistry

EffectT = TypeVar("EffectT")


class ItemType(str, Enum):
    """Kinds of items."""

    REGULAR = "regular"
    CONTAINER = "container"
    KEY = "key"
    WEAPON = "weapon"
    TOOL = "tool"
    CONSUMABLE = "consumable"


class Item(BaseModel):
    """
    A portable (or fixed) object in the world.

    Container contents are only meaningful when `is_container` is set.
    Items that decline taking never enter a player or NPC inventory.
    """

    id: str = Field(min_length=1)
    name: str = Field(min_length=1)
    description: str = ""
    weight: float = Field(default=1.0, ge=0)
    type: ItemType = ItemType.REGULAR

    is_container: bool = False
    container_items: list[str] = Field(default_factory=list)

    is_usable: bool = False
    use_description: str = ""

    takeable: bool = Field(default=True, description="Whether the item can be picked up")
    on_take_message: str = ""
    on_drop_message: str = ""

    effects: list[ItemEffect] = Field(default_factory=list)

    @model_validator(mode="after")
    def fill_defaults(self) -> Item:
        """Fill in name-dependent messages and check container contents."""
        if not self.on_take_message:
            self.on_take_message = f"You take the {self.name}."
        if not self.on_drop_message:
            self.on_drop_message = f"You drop the {self.name}."
        if self.container_items and not self.is_container:
            raise ValueError(f"Item '{self.id}' is not a container but has contents")
        return self

    # --- Description ---

    def examine(self) -> str:
        """Long-form description with contents and use hint."""
        result = self.description

        if self.is_container and self.container_items:
            result += f"\n\nInside you can see: {', '.join(self.container_items)}"

        if self.is_usable and self.use_description:
            result += f"\n\n{self.use_description}"

        return result

    def interact(
        self,
        action: str,
        target: GameEntity | None = None,
        strategies: UseStrategyRegistry | None = None,
    ) -> str:
        """Dispatch a named action to the matching behavior."""
        action = action.lower()
        if action in ("examine", "look"):
            return self.examine()
        if action == "use":
            return self.use(target, strategies)
        if action == "take":
            return self.on_take()
        if action == "drop":
            return self.on_drop()
        return f"You can't {action} the {self.name}."

    # --- Taking ---

    def can_take(self) -> bool:
        return self.takeable

    def on_take(self) -> str:
        return self.on_take_message

    def on_drop(self) -> str:
        return self.on_drop_message

    # --- Using ---

    def use(
        self,
        target: GameEntity | None = None,
        strategies: UseStrategyRegistry | None = None,
    ) -> str:
        """
        Use the item, optionally with a target.

        Special target interactions are resolved through the strategy
        registered for this item's type.

        Args:
            target: Entity to use the item with
            strategies: Registry to resolve the strategy from

        Returns:
            Description of what happened
        """
        if not self.is_usable:
            return f"You can't use the {self.name}."

        if target is not None:
            strategy = (strategies or DEFAULT_USE_STRATEGIES).get(self.type)
            if strategy.can_use_with(self, target):
                return strategy.use_with(self, target)

        return self.use_description or f"You use the {self.name}."

    def can_use_with(
        self,
        target: GameEntity,
        strategies: UseStrategyRegistry | None = None,
    ) -> bool:
        """Whether using this item with the target triggers a special interaction."""
        return (strategies or DEFAULT_USE_STRATEGIES).get(self.type).can_use_with(self, target)

    def get_effect(self, effect_type: type[EffectT]) -> EffectT | None:
        """Return the first effect of the given kind."""
        for effect in self.effects:
            if isinstance(effect, effect_type):
                return effect
        return None

    # --- Containers ---

    @property
    def container_capacity(self) -> int | None:
        capacity = self.get_effect(CapacityEffect)
        return capacity.slots if capacity is not None else None

    def add_to_container(self, item_id: str) -> bool:
        """Put an item id inside. Returns False if not a container, full, or duplicate."""
        if not self.is_container:
            return False

        if item_id in self.container_items:
            return False

        capacity = self.container_capacity
        if capacity is not None and len(self.container_items) >= capacity:
            return False

        self.container_items.append(item_id)
        return True

    def remove_from_container(self, item_id: str) -> bool:
        """Take an item id out. Returns False if not a container or not inside."""
        if not self.is_container or item_id not in self.container_items:
            return False

        self.container_items.remove(item_id)
        return True

    def get_container_contents(self) -> list[str]:
        return list(self.container_items) if self.is_container else []


# =============================================================================
# Factories
# =============================================================================


def create_key(
    id: str,
    name: str,
    description: str,
    unlocks: list[str] | None = None,
) -> Item:
    """Factory function to create a key."""
    return Item(
        id=id,
        name=name,
        description=description,
        weight=0.1,
        type=ItemType.KEY,
        is_usable=True,
        use_description=f"The {name} might unlock something.",
        effects=[UnlocksEffect(target_id=target) for target in unlocks or []],
    )


def create_container(id: str, name: str, description: str, capacity: int = 5) -> Item:
    """Factory function to create a container."""
    return Item(
        id=id,
        name=name,
        description=description,
        weight=2,
        type=ItemType.CONTAINER,
        is_container=True,
        effects=[CapacityEffect(slots=capacity)],
    )


def create_weapon(id: str, name: str, description: str, damage: int) -> Item:
    """Factory function to create a weapon."""
    return Item(
        id=id,
        name=name,
        description=description,
        weight=1,
        type=ItemType.WEAPON,
        is_usable=True,
        use_description=f"You wield the {name}.",
        effects=[DamageEffect(amount=damage)],
    )
