"""
Content for Fable.

Loading, validating and building worlds from author-supplied
definitions, plus a bundled sample world.
"""

from fable.content.loader import (
    GameDataValidationError,
    build_items,
    build_npcs,
    build_rooms,
    create_item_from_definition,
    create_npc_from_definition,
    create_room_from_definition,
    load_world_file,
    normalize_world_mapping,
    parse_game_data,
    validate_game_data,
)
from fable.content.sample import create_sample_game_data

__all__ = [
    "GameDataValidationError",
    "build_items",
    "build_npcs",
    "build_rooms",
    "create_item_from_definition",
    "create_npc_from_definition",
    "create_room_from_definition",
    "create_sample_game_data",
    "load_world_file",
    "normalize_world_mapping",
    "parse_game_data",
    "validate_game_data",
]
