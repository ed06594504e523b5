"""
Core Engine for Fable.

The engine orchestrates:
- Command parsing (tagging, synonyms, object extraction)
- Verb dispatch (movement, items, dialogue)
- Session lifecycle (load, start, save, restore)
- Output and state-change notifications
"""

from __future__ import annotations

from fable.engine.game import GameEngine
from fable.engine.listeners import ListenerRegistry, Subscription
from fable.engine.models import (
    Command,
    CommandResult,
    EngineConfig,
    NoActiveSessionError,
    NoGameLoadedError,
)
from fable.engine.parser import (
    AVAILABLE_COMMANDS,
    DIRECTIONS,
    SYNONYMS,
    CommandParser,
    expand_directions,
    normalize_verb,
)
from fable.engine.tagger import LexiconTagger, PartOfSpeechTagger, TaggedText

__all__ = [
    # Main engine
    "GameEngine",
    # Models
    "Command",
    "CommandResult",
    "EngineConfig",
    "NoActiveSessionError",
    "NoGameLoadedError",
    # Parsing
    "AVAILABLE_COMMANDS",
    "DIRECTIONS",
    "SYNONYMS",
    "CommandParser",
    "LexiconTagger",
    "PartOfSpeechTagger",
    "TaggedText",
    "expand_directions",
    "normalize_verb",
    # Observers
    "ListenerRegistry",
    "Subscription",
]
