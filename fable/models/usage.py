"""
Use-With Strategies for Fable.

Special "use X with Y" interactions are resolved through a small strategy
registry keyed by item type instead of item subclasses. The base strategy
declines every target, so ordinary items fall back to their plain use text.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

from fable.models.effects import DamageEffect, UnlocksEffect

if TYPE_CHECKING:
    from fable.models.item import Item, ItemType


class GameEntity(Protocol):
    """Anything that can be the target of an interaction."""

    id: str
    name: str


class UseStrategy(Protocol):
    """Interface for item-specific use-with behavior."""

    def can_use_with(self, item: Item, target: GameEntity) -> bool:
        """Whether this item has a special interaction with the target."""
        ...

    def use_with(self, item: Item, target: GameEntity) -> str:
        """Perform the special interaction and describe it."""
        ...


class DeclineUseStrategy:
    """Default strategy: no special interactions."""

    def can_use_with(self, item: Item, target: GameEntity) -> bool:
        return False

    def use_with(self, item: Item, target: GameEntity) -> str:
        return f"You use the {item.name} with the {target.name}."


class KeyUseStrategy:
    """Keys fit the entities listed in their unlock effects; opening locks is left to the host."""

    def can_use_with(self, item: Item, target: GameEntity) -> bool:
        return any(
            isinstance(effect, UnlocksEffect) and effect.target_id == target.id
            for effect in item.effects
        )

    def use_with(self, item: Item, target: GameEntity) -> str:
        return f"The {item.name} fits the {target.name}."


class WeaponUseStrategy:
    """Weapons with a damage effect can be used against any target."""

    def can_use_with(self, item: Item, target: GameEntity) -> bool:
        return item.get_effect(DamageEffect) is not None

    def use_with(self, item: Item, target: GameEntity) -> str:
        damage = item.get_effect(DamageEffect)
        amount = damage.amount if damage is not None else 0
        return f"You strike the {target.name} with the {item.name} for {amount} damage."


class UseStrategyRegistry:
    """Maps item types to their use-with strategies."""

    def __init__(self) -> None:
        self._default: UseStrategy = DeclineUseStrategy()
        self._strategies: dict[str, UseStrategy] = {
            "key": KeyUseStrategy(),
            "weapon": WeaponUseStrategy(),
        }

    def get(self, item_type: ItemType | str) -> UseStrategy:
        """Look up the strategy for an item type, falling back to decline."""
        return self._strategies.get(_type_key(item_type), self._default)

    def register(self, item_type: ItemType | str, strategy: UseStrategy) -> None:
        """
        Register (or replace) the strategy for an item type.

        Args:
            item_type: Item type the strategy applies to
            strategy: Object implementing the UseStrategy interface
        """
        self._strategies[_type_key(item_type)] = strategy


def _type_key(item_type: ItemType | str) -> str:
    return str(getattr(item_type, "value", item_type))


DEFAULT_USE_STRATEGIES = UseStrategyRegistry()
