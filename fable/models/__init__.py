"""
Core Data Models for Fable.

These models define the world the engine operates on:
rooms, items, NPCs, the player, the session state, and the
definition schemas author-supplied content arrives in.
"""

from fable.models.effects import (
    CapacityEffect,
    DamageEffect,
    GiveItemBehavior,
    HealEffect,
    ItemEffect,
    NPCBehavior,
    SayBehavior,
    UnlocksEffect,
    effects_from_properties,
)
from fable.models.item import (
    Item,
    ItemType,
    create_container,
    create_key,
    create_weapon,
)
from fable.models.npc import NPC, DialogueNode
from fable.models.player import Player
from fable.models.room import Exit, Room
from fable.models.state import GameState
from fable.models.usage import (
    DEFAULT_USE_STRATEGIES,
    DeclineUseStrategy,
    GameEntity,
    KeyUseStrategy,
    UseStrategy,
    UseStrategyRegistry,
    WeaponUseStrategy,
)
from fable.models.world import (
    DialogueDefinition,
    ExitDefinition,
    GameData,
    GameMetadata,
    ItemDefinition,
    NPCDefinition,
    RoomDefinition,
)

__all__ = [
    # Entities
    "Exit",
    "Item",
    "ItemType",
    "NPC",
    "DialogueNode",
    "Player",
    "Room",
    "create_container",
    "create_key",
    "create_weapon",
    # Session
    "GameState",
    # Effects and behaviors
    "CapacityEffect",
    "DamageEffect",
    "GiveItemBehavior",
    "HealEffect",
    "ItemEffect",
    "NPCBehavior",
    "SayBehavior",
    "UnlocksEffect",
    "effects_from_properties",
    # Use strategies
    "DEFAULT_USE_STRATEGIES",
    "DeclineUseStrategy",
    "GameEntity",
    "KeyUseStrategy",
    "UseStrategy",
    "UseStrategyRegistry",
    "WeaponUseStrategy",
    # Definitions
    "DialogueDefinition",
    "ExitDefinition",
    "GameData",
    "GameMetadata",
    "ItemDefinition",
    "NPCDefinition",
    "RoomDefinition",
]
