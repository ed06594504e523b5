"""
Sample World for Fable.

A two-room world: a start room holding a brass key, and a northern
room guarded by an NPC with a two-line conversation.
"""

from __future__ import annotations

from typing import Any


def create_sample_game_data() -> dict[str, Any]:
    """Return the sample world definition in its raw (file) form."""
    return {
        "metadata": {
            "title": "Sample Game",
            "author": "Test Author",
            "version": "1.0.0",
            "description": "A simple test game",
            "startingRoomId": "start",
        },
        "rooms": {
            "start": {
                "name": "Starting Room",
                "description": "You are in a simple room.",
                "shortDescription": "A simple room.",
                "longDescription": "You are in a simple room with white walls and a single door.",
                "exits": [{"direction": "north", "roomId": "north_room"}],
                "items": ["key"],
                "npcs": [],
            },
            "north_room": {
                "name": "Northern Room",
                "description": "A room to the north.",
                "shortDescription": "Northern room.",
                "longDescription": "This northern room is slightly larger than the previous one.",
                "exits": [{"direction": "south", "roomId": "start"}],
                "items": [],
                "npcs": ["guard"],
            },
        },
        "items": {
            "key": {
                "id": "key",
                "name": "brass key",
                "description": "A small brass key that looks important.",
                "weight": 0.1,
                "type": "key",
                "isUsable": True,
                "canTake": True,
                "onTakeMessage": "You pick up the brass key.",
                "useDescription": "This key might unlock something.",
            },
        },
        "npcs": {
            "guard": {
                "id": "guard",
                "name": "guard",
                "description": "A stern-looking guard.",
                "longDescription": "A tall guard in armor, watching you carefully.",
                "isAlive": True,
                "dialogues": [
                    {
                        "id": "greeting",
                        "trigger": "talk",
                        "response": "Halt! What are you doing here?",
                        "nextDialogueId": "explain",
                    },
                    {
                        "id": "explain",
                        "trigger": "talk",
                        "response": "I see. Well, be careful around here.",
                    },
                ],
                "defaultResponse": "The guard nods at you.",
            },
        },
    }
