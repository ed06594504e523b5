"""Tests for session state snapshots."""

from __future__ import annotations

import json

import pytest
from pydantic import ValidationError

from fable.models import GameState


class TestGameState:
    """Tests for GameState progress tracking and encoding."""

    def test_visit_and_turns(self):
        state = GameState(current_room_id="start", visited_rooms={"start"})
        state.visit("attic")
        assert state.current_room_id == "attic"
        assert state.visited_rooms == {"start", "attic"}
        assert state.advance_turn() == 1
        assert state.advance_turn() == 2

    def test_negative_turn_count_rejected(self):
        with pytest.raises(ValidationError):
            GameState(current_room_id="start", turn_count=-1)

    def test_snapshot_is_plain_json(self):
        state = GameState(
            current_room_id="attic",
            inventory=["lamp"],
            visited_rooms={"start", "attic"},
            game_flags={"lit": True},
            game_variables={"notes": ["a"]},
            turn_count=4,
        )
        snapshot = state.to_snapshot()
        assert snapshot["visited_rooms"] == ["attic", "start"]

        decoded = GameState.from_snapshot(json.loads(json.dumps(snapshot)))
        assert decoded == state
