"""
Interactive REPL for Fable.

Provides a text-based host for playing a loaded world. Lines starting
with "/" are REPL meta-commands (saving, restoring); everything else is
passed to the engine.
"""

from __future__ import annotations

import json
import logging
import os
from collections.abc import Callable
from dataclasses import dataclass, field
from pathlib import Path

from fable.content import create_sample_game_data, load_world_file
from fable.engine import CommandResult, EngineConfig, GameEngine

logger = logging.getLogger(__name__)


@dataclass
class MetaCommand:
    """A special REPL command."""

    name: str
    aliases: list[str]
    description: str
    handler: Callable[[list[str]], str]


@dataclass
class GameREPL:
    """
    Interactive REPL around a GameEngine.

    Output lines emitted by the engine during a command are printed
    first; the result message follows unless it was already printed.
    """

    engine: GameEngine
    input_fn: Callable[[str], str] = input
    print_fn: Callable[[str], None] = print
    running: bool = True
    commands: dict[str, MetaCommand] = field(default_factory=dict)

    _pending: list[str] = field(init=False, default_factory=list)

    def __post_init__(self) -> None:
        self.engine.on_output(self._pending.append)
        self._register_commands()

    def _register_commands(self) -> None:
        """Register all meta-commands."""
        commands = [
            MetaCommand(
                name="save",
                aliases=["s"],
                description="Save the session to a JSON file",
                handler=self._cmd_save,
            ),
            MetaCommand(
                name="restore",
                aliases=["load", "r"],
                description="Restore a session from a JSON file",
                handler=self._cmd_restore,
            ),
            MetaCommand(
                name="commands",
                aliases=["meta"],
                description="Show REPL meta-commands",
                handler=self._cmd_commands,
            ),
        ]
        for cmd in commands:
            self.commands[cmd.name] = cmd
            for alias in cmd.aliases:
                self.commands[alias] = cmd

    def _cmd_save(self, args: list[str]) -> str:
        if not args:
            return "Usage: /save <file>"
        path = Path(args[0])
        path.write_text(json.dumps(self.engine.save_snapshot(), indent=2), encoding="utf-8")
        logger.info("Saved session to %s", path)
        return f"Game saved to {path}."

    def _cmd_restore(self, args: list[str]) -> str:
        if not args:
            return "Usage: /restore <file>"
        path = Path(args[0])
        if not path.exists():
            return f"No save file at {path}."
        try:
            self.engine.load_game_state(json.loads(path.read_text(encoding="utf-8")))
        except (ValueError, TypeError) as e:
            logger.warning("Could not restore session from %s: %s", path, e)
            return f"Could not restore from {path}: {e}"
        return f"Game restored from {path}.\n\n{self.engine.get_current_room().get_description()}"

    def _cmd_commands(self, args: list[str]) -> str:
        lines = ["REPL commands:"]
        seen = set()
        for cmd in self.commands.values():
            if cmd.name not in seen:
                aliases = f" ({', '.join(cmd.aliases)})" if cmd.aliases else ""
                lines.append(f"  /{cmd.name}{aliases} - {cmd.description}")
                seen.add(cmd.name)
        return "\n".join(lines)

    def handle_line(self, line: str) -> str:
        """
        Process one line of input and return the text to show.

        Args:
            line: Raw input line

        Returns:
            Text to print (may be empty)
        """
        if line.startswith("/"):
            parts = line[1:].split()
            cmd = self.commands.get(parts[0].lower()) if parts else None
            if cmd is None:
                return "Unknown REPL command. Type /commands for a list."
            return cmd.handler(parts[1:])

        result = self.engine.process_command(line)
        return self._render(result, line)

    def _render(self, result: CommandResult, line: str) -> str:
        lines = list(self._pending)
        self._pending.clear()
        if result.message and result.message not in lines:
            lines.append(result.message)
        if self.engine.parser.parse(line).verb == "quit" and result.success:
            self.running = False
        return "\n".join(lines)

    def flush(self) -> str:
        """Drain output emitted outside of a command (loading, starting)."""
        text = "\n".join(self._pending)
        self._pending.clear()
        return text

    def run(self) -> None:
        """Run the interactive loop until quit or end of input."""
        intro = self.flush()
        if intro:
            self.print_fn(intro)
            self.print_fn("")

        while self.running:
            try:
                line = self.input_fn("> ").strip()
            except (KeyboardInterrupt, EOFError):
                self.print_fn("")
                break

            if not line:
                continue

            response = self.handle_line(line)
            if response:
                self.print_fn(response)
                self.print_fn("")


def run_game(world: str | None = None, config: EngineConfig | None = None) -> None:
    """
    Load a world, start a new game and run the REPL.

    Args:
        world: Path to a YAML/JSON world file; the sample world if None
        config: Engine configuration; read from the environment if None
    """
    engine = GameEngine(config=config or EngineConfig.from_env())
    repl = GameREPL(engine=engine)

    data = load_world_file(world) if world else create_sample_game_data()
    engine.load_game(data)
    engine.start_new_game()
    repl.run()


def main(argv: list[str] | None = None) -> None:
    import argparse

    parser = argparse.ArgumentParser(description="Fable Text Adventure")
    parser.add_argument("--world", default=None, help="Path to a YAML or JSON world file")
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default=os.getenv("FABLE_LOG_LEVEL", "WARNING").upper(),
        help="Logging level",
    )

    args = parser.parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    run_game(world=args.world)


if __name__ == "__main__":
    main()
