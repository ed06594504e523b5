"""
Session State Model for Fable.

GameState is the mutable record of progress: location, inventory,
visited rooms, flags, variables and the turn counter. Snapshots are
plain JSON (lists and objects, no sets) so they can be stored anywhere.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


class GameState(BaseModel):
    """
    Progress of one play session.

    The turn counter only grows, and the visited set only grows.
    """

    current_room_id: str
    inventory: list[str] = Field(default_factory=list)
    visited_rooms: set[str] = Field(default_factory=set)
    game_flags: dict[str, bool] = Field(default_factory=dict)
    game_variables: dict[str, Any] = Field(default_factory=dict)
    turn_count: int = Field(default=0, ge=0)

    def visit(self, room_id: str) -> None:
        self.current_room_id = room_id
        self.visited_rooms.add(room_id)

    def advance_turn(self) -> int:
        self.turn_count += 1
        return self.turn_count

    def to_snapshot(self) -> dict[str, Any]:
        """
        Encode as a JSON-serializable dict.

        The visited set becomes a sorted list so snapshots are stable.
        """
        data = self.model_dump(mode="json")
        data["visited_rooms"] = sorted(self.visited_rooms)
        return data

    @classmethod
    def from_snapshot(cls, data: dict[str, Any]) -> GameState:
        """Decode a snapshot produced by `to_snapshot`."""
        return cls.model_validate(data)
