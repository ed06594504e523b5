"""Command-line interface for Fable."""

from fable.cli.repl import GameREPL, MetaCommand, main, run_game

__all__ = ["GameREPL", "MetaCommand", "main", "run_game"]
