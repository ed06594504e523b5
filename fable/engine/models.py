"""
Engine Data Models for Fable.

Defines the structures that flow through a turn:
- Command: parsed player input
- CommandResult: response to the caller
- EngineConfig: tunable engine settings
"""

from __future__ import annotations

import os

from pydantic import BaseModel, Field


class Command(BaseModel):
    """A structured (verb, object, preposition, indirect object) tuple."""

    verb: str = Field(description="Canonical verb; '' for empty input, 'unknown' if unresolved")
    object: str | None = Field(default=None, description="Direct object")
    preposition: str | None = None
    indirect_object: str | None = None


class CommandResult(BaseModel):
    """Result of processing one command."""

    success: bool
    message: str = ""
    game_state_changed: bool = False


class EngineConfig(BaseModel):
    """
    Engine configuration.

    Configuration via environment variables (see `from_env`):
        FABLE_MAX_INVENTORY_WEIGHT: Player carry limit (default: 10)
        FABLE_DEFAULT_ITEM_WEIGHT: Weight assumed for unknown items (default: 1)
        FABLE_LOG_OUTPUT: Mirror output lines to the debug log when "1"/"true"
    """

    max_inventory_weight: float = Field(default=10.0, ge=0)
    default_item_weight: float = Field(default=1.0, ge=0)
    echo_output_to_log: bool = False

    @classmethod
    def from_env(cls) -> EngineConfig:
        """Build a config, overriding defaults from the environment."""
        config = cls()
        if os.getenv("FABLE_MAX_INVENTORY_WEIGHT"):
            config.max_inventory_weight = float(os.getenv("FABLE_MAX_INVENTORY_WEIGHT", "10"))
        if os.getenv("FABLE_DEFAULT_ITEM_WEIGHT"):
            config.default_item_weight = float(os.getenv("FABLE_DEFAULT_ITEM_WEIGHT", "1"))
        if os.getenv("FABLE_LOG_OUTPUT"):
            config.echo_output_to_log = os.getenv("FABLE_LOG_OUTPUT", "").lower() in ("1", "true")
        return config


class NoGameLoadedError(RuntimeError):
    """An operation needs a loaded game."""


class NoActiveSessionError(RuntimeError):
    """An operation needs a started or restored session."""
