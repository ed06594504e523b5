"""
Item Effect and NPC Behavior Models for Fable.

Type-specific item data and NPC reactions are closed sets of tagged
variants. Each variant carries a `kind` discriminator so definitions
round-trip through JSON/YAML without any executable payload.
"""

from __future__ import annotations

from typing import Annotated, Literal

from pydantic import BaseModel, Field

# =============================================================================
# Item Effects
# =============================================================================


class DamageEffect(BaseModel):
    """Damage dealt when the item is used against a target."""

    kind: Literal["damage"] = "damage"
    amount: int = Field(ge=0, description="Damage points dealt per use")


class CapacityEffect(BaseModel):
    """Maximum number of items a container can hold."""

    kind: Literal["capacity"] = "capacity"
    slots: int = Field(ge=0, description="Number of item slots")


class UnlocksEffect(BaseModel):
    """Marks an item as able to unlock a specific target entity."""

    kind: Literal["unlocks"] = "unlocks"
    target_id: str = Field(min_length=1, description="Entity the item unlocks")


class HealEffect(BaseModel):
    """Healing granted when a consumable is used."""

    kind: Literal["heal"] = "heal"
    amount: int = Field(ge=0)


ItemEffect = Annotated[
    DamageEffect | CapacityEffect | UnlocksEffect | HealEffect,
    Field(discriminator="kind"),
]


# =============================================================================
# NPC Behaviors
# =============================================================================


class SayBehavior(BaseModel):
    """NPC says a fixed line when the trigger fires."""

    kind: Literal["say"] = "say"
    trigger: str = Field(min_length=1)
    text: str


class GiveItemBehavior(BaseModel):
    """NPC hands over an item from its inventory when the trigger fires."""

    kind: Literal["give_item"] = "give_item"
    trigger: str = Field(min_length=1)
    item_id: str = Field(min_length=1)


NPCBehavior = Annotated[
    SayBehavior | GiveItemBehavior,
    Field(discriminator="kind"),
]


def effects_from_properties(properties: dict[str, object]) -> list[ItemEffect]:
    """
    Convert a free-form property mapping into typed item effects.

    Recognizes `damage`, `capacity`, `heal` and `unlocks`; other keys are
    ignored.

    Args:
        properties: Legacy property bag from a content definition

    Returns:
        List of effects in a stable order
    """
    effects: list[ItemEffect] = []
    if "damage" in properties:
        effects.append(DamageEffect(amount=int(properties["damage"])))  # type: ignore[arg-type]
    if "capacity" in properties:
        effects.append(CapacityEffect(slots=int(properties["capacity"])))  # type: ignore[arg-type]
    if "heal" in properties:
        effects.append(HealEffect(amount=int(properties["heal"])))  # type: ignore[arg-type]
    unlocks = properties.get("unlocks")
    if isinstance(unlocks, str):
        effects.append(UnlocksEffect(target_id=unlocks))
    elif isinstance(unlocks, list):
        effects.extend(UnlocksEffect(target_id=str(t)) for t in unlocks)
    return effects
