"""
Content Loader for Fable.

Turns author-supplied world definitions into entity instances and checks
their referential integrity. Validation collects every problem it finds;
loading is all-or-nothing.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from fable.models import (
    NPC,
    CapacityEffect,
    DialogueNode,
    Exit,
    GameData,
    Item,
    ItemDefinition,
    NPCDefinition,
    Room,
    RoomDefinition,
    effects_from_properties,
)

logger = logging.getLogger(__name__)


class GameDataValidationError(ValueError):
    """A world definition failed validation; `errors` lists every problem."""

    def __init__(self, errors: list[str]) -> None:
        self.errors = list(errors)
        super().__init__(f"Game data validation failed: {', '.join(self.errors)}")


# =============================================================================
# Validation
# =============================================================================


def _structure_errors(exc: ValidationError) -> list[str]:
    errors = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error["loc"])
        errors.append(f"Invalid field '{location}': {error['msg']}")
    return errors


def validate_game_data(data: GameData | Mapping[str, Any]) -> list[str]:
    """
    Check a world definition.

    Structural problems (wrong types, missing required fields) are
    reported first; referential checks only run on a well-formed definition,
    and entities are only test-built once every reference resolves.

    Args:
        data: A GameData or its raw mapping form

    Returns:
        Every problem found, empty if the definition is valid
    """
    if not isinstance(data, GameData):
        try:
            data = GameData.model_validate(data)
        except ValidationError as e:
            return _structure_errors(e)

    errors: list[str] = []
    metadata = data.metadata

    if not metadata.title:
        errors.append("Game metadata missing title")
    if not metadata.starting_room_id:
        errors.append("Game metadata missing startingRoomId")
    elif metadata.starting_room_id not in data.rooms:
        errors.append(f"Starting room '{metadata.starting_room_id}' not found")

    item_locations: dict[str, str] = {}
    npc_locations: dict[str, str] = {}

    for room_id, room in data.rooms.items():
        for exit in room.exits:
            if exit.room_id not in data.rooms:
                errors.append(f"Room '{room_id}' has exit to non-existent room '{exit.room_id}'")

        for item_id in room.items:
            if item_id not in data.items:
                errors.append(f"Room '{room_id}' contains non-existent item '{item_id}'")
            elif item_id in item_locations:
                errors.append(
                    f"Item '{item_id}' is placed in both '{item_locations[item_id]}' and '{room_id}'"
                )
            else:
                item_locations[item_id] = room_id

        for npc_id in room.npcs:
            if npc_id not in data.npcs:
                errors.append(f"Room '{room_id}' contains non-existent NPC '{npc_id}'")
            elif npc_id in npc_locations:
                errors.append(
                    f"NPC '{npc_id}' is placed in both '{npc_locations[npc_id]}' and '{room_id}'"
                )
            else:
                npc_locations[npc_id] = room_id

    for item_id, item in data.items.items():
        if item.contents and not item.is_container:
            errors.append(f"Item '{item_id}' has contents but is not a container")
        for content_id in item.contents:
            if content_id not in data.items:
                errors.append(f"Item '{item_id}' contains non-existent item '{content_id}'")

    for npc_id, npc in data.npcs.items():
        for item_id in npc.starting_inventory:
            if item_id not in data.items:
                errors.append(f"NPC '{npc_id}' carries non-existent item '{item_id}'")
            elif not data.items[item_id].can_take:
                errors.append(f"NPC '{npc_id}' carries untakeable item '{item_id}'")

        dialogue_ids = {dialogue.id for dialogue in npc.dialogues}
        for dialogue in npc.dialogues:
            if dialogue.next_dialogue_id and dialogue.next_dialogue_id not in dialogue_ids:
                errors.append(
                    f"NPC '{npc_id}' dialogue '{dialogue.id}' leads to "
                    f"non-existent dialogue '{dialogue.next_dialogue_id}'"
                )

    if not errors:
        errors.extend(_construction_errors(data))

    return errors


def _construction_errors(data: GameData) -> list[str]:
    """Try to build every entity and report the ones that fail."""
    errors: list[str] = []
    builders = (
        ("Room", data.rooms, create_room_from_definition),
        ("Item", data.items, create_item_from_definition),
        ("NPC", data.npcs, create_npc_from_definition),
    )
    for label, definitions, build in builders:
        for entity_id, definition in definitions.items():
            try:
                build(entity_id, definition)
            except ValidationError as e:
                errors.extend(f"{label} '{entity_id}' is invalid: {err['msg']}" for err in e.errors())
            except (ValueError, TypeError) as e:
                errors.append(f"{label} '{entity_id}' is invalid: {e}")
    return errors


def parse_game_data(data: GameData | Mapping[str, Any]) -> GameData:
    """
    Validate a world definition and return it as GameData.

    Raises:
        GameDataValidationError: If any structural or referential check fails,
            or an entity cannot be built from its definition
    """
    errors = validate_game_data(data)
    if errors:
        raise GameDataValidationError(errors)
    if isinstance(data, GameData):
        return data
    return GameData.model_validate(data)


# =============================================================================
# Entity construction
# =============================================================================


def create_room_from_definition(room_id: str, room_def: RoomDefinition) -> Room:
    return Room(
        id=room_id,
        name=room_def.name or room_id,
        short_description=room_def.short_description or room_def.description or "A room.",
        long_description=room_def.long_description or room_def.description or "A room.",
        exits=[
            Exit(
                direction=exit.direction,
                room_id=exit.room_id,
                is_locked=exit.is_locked,
                lock_description=exit.lock_description,
            )
            for exit in room_def.exits
        ],
        item_ids=list(room_def.items),
        npc_ids=list(room_def.npcs),
    )


def create_item_from_definition(item_id: str, item_def: ItemDefinition) -> Item:
    """Build an Item, folding legacy special properties into typed effects."""
    effects = list(item_def.effects) + effects_from_properties(item_def.special_properties)
    has_capacity = any(isinstance(effect, CapacityEffect) for effect in effects)
    if item_def.container_capacity is not None and not has_capacity:
        effects.append(CapacityEffect(slots=item_def.container_capacity))

    return Item(
        id=item_id,
        name=item_def.name,
        description=item_def.description,
        weight=item_def.weight,
        type=item_def.type,
        is_container=item_def.is_container,
        container_items=list(item_def.contents) if item_def.is_container else [],
        is_usable=item_def.is_usable,
        use_description=item_def.use_description,
        takeable=item_def.can_take,
        on_take_message=item_def.on_take_message,
        on_drop_message=item_def.on_drop_message,
        effects=effects,
    )


def create_npc_from_definition(npc_id: str, npc_def: NPCDefinition) -> NPC:
    return NPC(
        id=npc_id,
        name=npc_def.name,
        description=npc_def.description,
        long_description=npc_def.long_description,
        is_alive=npc_def.is_alive,
        inventory=list(npc_def.starting_inventory),
        dialogues={
            dialogue.id: DialogueNode(
                id=dialogue.id,
                trigger=dialogue.trigger,
                response=dialogue.response,
                next_dialogue_id=dialogue.next_dialogue_id,
                conditions=list(dialogue.conditions),
            )
            for dialogue in npc_def.dialogues
        },
        default_response=npc_def.default_response,
        behaviors=list(npc_def.behaviors),
    )


def build_rooms(data: GameData) -> dict[str, Room]:
    return {room_id: create_room_from_definition(room_id, d) for room_id, d in data.rooms.items()}


def build_items(data: GameData) -> dict[str, Item]:
    return {item_id: create_item_from_definition(item_id, d) for item_id, d in data.items.items()}


def build_npcs(data: GameData) -> dict[str, NPC]:
    return {npc_id: create_npc_from_definition(npc_id, d) for npc_id, d in data.npcs.items()}


# =============================================================================
# Files
# =============================================================================


def normalize_world_mapping(raw: Mapping[str, Any]) -> dict[str, Any]:
    """
    Accept both world file shapes.

    The canonical shape has a `metadata` block. The flat shape keeps
    `title`, `author`, `version`, `description` and `start_location`
    at the top level next to `rooms`, `items` and `npcs`.
    """
    if "metadata" in raw:
        return dict(raw)

    return {
        "metadata": {
            "title": raw.get("title") or "Untitled Game",
            "author": raw.get("author") or "Unknown",
            "version": raw.get("version") or "1.0.0",
            "description": raw.get("description") or "A text adventure game",
            "startingRoomId": raw.get("start_location") or raw.get("startingRoomId") or "start",
        },
        "rooms": raw.get("rooms") or {},
        "items": raw.get("items") or {},
        "npcs": raw.get("npcs") or {},
    }


def load_world_file(path: str | Path) -> GameData:
    """
    Read and validate a world definition from a YAML or JSON file.

    Raises:
        GameDataValidationError: If the file cannot be parsed or is invalid
    """
    path = Path(path)
    text = path.read_text(encoding="utf-8")

    try:
        if path.suffix.lower() == ".json":
            raw = json.loads(text)
        else:
            raw = yaml.safe_load(text)
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        raise GameDataValidationError([f"Could not parse {path.name}: {e}"]) from e

    if not isinstance(raw, Mapping):
        raise GameDataValidationError([f"{path.name} does not contain a world definition"])

    logger.info("Loaded world definition from %s", path)
    return parse_game_data(normalize_world_mapping(raw))
