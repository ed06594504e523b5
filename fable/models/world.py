"""
World Definition Schemas for Fable.

These describe author-supplied content as it arrives from the content
loader, before it is turned into live entities. Field names follow the
camelCase used by world files; snake_case names are accepted as well.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from fable.models.effects import ItemEffect, NPCBehavior
from fable.models.item import ItemType


class DefinitionModel(BaseModel):
    """Base for definition schemas: camelCase aliases, extra keys ignored."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")


class GameMetadata(DefinitionModel):
    """Title block of a world definition."""

    title: str = ""
    author: str = "Unknown"
    version: str = "1.0.0"
    description: str = "A text adventure game"
    starting_room_id: str = ""


class ExitDefinition(DefinitionModel):
    direction: str
    room_id: str
    is_locked: bool = False
    lock_description: str | None = None


class RoomDefinition(DefinitionModel):
    name: str | None = None
    description: str | None = None
    short_description: str | None = None
    long_description: str | None = None
    exits: list[ExitDefinition] = Field(default_factory=list)
    items: list[str] = Field(default_factory=list)
    npcs: list[str] = Field(default_factory=list)


class ItemDefinition(DefinitionModel):
    id: str | None = None
    name: str
    description: str = ""
    weight: float = Field(default=1.0, ge=0)
    type: ItemType = ItemType.REGULAR
    is_container: bool = False
    container_capacity: int | None = Field(default=None, ge=0)
    contents: list[str] = Field(default_factory=list)
    is_usable: bool = False
    use_description: str = ""
    can_take: bool = True
    on_take_message: str = ""
    on_drop_message: str = ""
    effects: list[ItemEffect] = Field(default_factory=list)
    special_properties: dict[str, Any] = Field(default_factory=dict)


class DialogueDefinition(DefinitionModel):
    id: str
    trigger: str = "talk"
    response: str
    next_dialogue_id: str | None = None
    conditions: list[str] = Field(default_factory=list)


class NPCDefinition(DefinitionModel):
    id: str | None = None
    name: str
    description: str = ""
    long_description: str = ""
    is_alive: bool = True
    starting_inventory: list[str] = Field(default_factory=list)
    dialogues: list[DialogueDefinition] = Field(default_factory=list)
    default_response: str = ""
    behaviors: list[NPCBehavior] = Field(default_factory=list)


class GameData(DefinitionModel):
    """A complete world definition."""

    metadata: GameMetadata = Field(default_factory=GameMetadata)
    rooms: dict[str, RoomDefinition] = Field(default_factory=dict)
    items: dict[str, ItemDefinition] = Field(default_factory=dict)
    npcs: dict[str, NPCDefinition] = Field(default_factory=dict)
