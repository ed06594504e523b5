"""
Room Model for Fable.

Rooms hold presence lists for items and NPCs plus a list of exits.
Presence-list mutation is idempotent.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

from fable.models.usage import GameEntity


class Exit(BaseModel):
    """A directed, possibly locked connection to another room."""

    direction: str = Field(min_length=1)
    room_id: str = Field(min_length=1)
    is_locked: bool = False
    lock_description: str | None = None


class Room(BaseModel):
    """A location the player can stand in."""

    id: str = Field(min_length=1)
    name: str = Field(min_length=1)
    short_description: str = ""
    long_description: str = ""
    exits: list[Exit] = Field(default_factory=list)
    item_ids: list[str] = Field(default_factory=list)
    npc_ids: list[str] = Field(default_factory=list)
    visited: bool = False

    @property
    def description(self) -> str:
        return self.short_description

    def get_description(self, is_long: bool = False) -> str:
        """
        Describe the room.

        The long form is used for unvisited rooms or when asked for.
        Items, NPCs and exits are appended in that order, each only if present.
        """
        result = self.long_description if is_long or not self.visited else self.short_description

        if self.item_ids:
            result += "\n\nYou can see: " + ", ".join(self.item_ids)

        if self.npc_ids:
            result += "\n\nPresent: " + ", ".join(self.npc_ids)

        if self.exits:
            result += "\n\nExits: " + ", ".join(exit.direction for exit in self.exits)

        return result

    def examine(self) -> str:
        return self.get_description(is_long=True)

    def interact(self, action: str, target: GameEntity | None = None) -> str:
        if action.lower() in ("examine", "look"):
            return self.examine()
        return f"You can't {action.lower()} the {self.name}."

    # --- Exits ---

    def get_exits(self) -> list[Exit]:
        return list(self.exits)

    def get_exit(self, direction: str) -> Exit | None:
        direction = direction.lower()
        for exit in self.exits:
            if exit.direction.lower() == direction:
                return exit
        return None

    def has_exit(self, direction: str) -> bool:
        return self.get_exit(direction) is not None

    # --- Presence ---

    def add_item(self, item_id: str) -> None:
        if item_id not in self.item_ids:
            self.item_ids.append(item_id)

    def remove_item(self, item_id: str) -> None:
        if item_id in self.item_ids:
            self.item_ids.remove(item_id)

    def add_npc(self, npc_id: str) -> None:
        if npc_id not in self.npc_ids:
            self.npc_ids.append(npc_id)

    def remove_npc(self, npc_id: str) -> None:
        if npc_id in self.npc_ids:
            self.npc_ids.remove(npc_id)

    def mark_visited(self) -> None:
        self.visited = True
