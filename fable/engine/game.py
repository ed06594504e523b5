"""
Game Engine for Fable.

The orchestration layer that owns the world and processes player turns.
Coordinates parsing, verb dispatch and world mutation, and notifies
listeners about output lines and state changes.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from copy import deepcopy
from dataclasses import dataclass, field
from typing import Any

from fable.content.loader import build_items, build_npcs, build_rooms, parse_game_data
from fable.engine.listeners import ListenerRegistry, Subscription
from fable.engine.models import (
    Command,
    CommandResult,
    EngineConfig,
    NoActiveSessionError,
    NoGameLoadedError,
)
from fable.engine.parser import CommandParser
from fable.models import (
    NPC,
    GameData,
    GameMetadata,
    GameState,
    Item,
    Player,
    Room,
    UseStrategyRegistry,
)

logger = logging.getLogger(__name__)

Handler = Callable[[Command], CommandResult]


@dataclass
class _Checkpoint:
    """Copy of everything a command handler may mutate."""

    rooms: dict[str, Room]
    items: dict[str, Item]
    npcs: dict[str, NPC]
    player: Player
    state: GameState


@dataclass
class GameEngine:
    """
    Main game engine for one play session.

    Lifecycle: load_game -> start_new_game (or load_game_state) ->
    process_command, repeatedly. All entities and the session state are
    owned by the engine; accessors hand out copies.
    """

    config: EngineConfig = field(default_factory=EngineConfig)
    parser: CommandParser = field(default_factory=CommandParser)
    use_strategies: UseStrategyRegistry = field(default_factory=UseStrategyRegistry)

    # World (replaced wholesale on load)
    _game_data: GameData | None = field(init=False, default=None)
    _rooms: dict[str, Room] = field(init=False, default_factory=dict)
    _items: dict[str, Item] = field(init=False, default_factory=dict)
    _npcs: dict[str, NPC] = field(init=False, default_factory=dict)

    # Session
    _player: Player | None = field(init=False, default=None)
    _state: GameState | None = field(init=False, default=None)

    # Observers
    _output_listeners: ListenerRegistry[str] = field(init=False, default_factory=ListenerRegistry)
    _state_listeners: ListenerRegistry[GameState] = field(
        init=False, default_factory=ListenerRegistry
    )

    _handlers: dict[str, Handler] = field(init=False, default_factory=dict)

    def __post_init__(self) -> None:
        """Build the verb dispatch table."""
        self._handlers = {
            "go": self._handle_movement,
            "move": self._handle_movement,
            "look": self._handle_look,
            "examine": self._handle_look,
            "take": self._handle_take,
            "get": self._handle_take,
            "drop": self._handle_drop,
            "use": self._handle_use,
            "talk": self._handle_talk,
            "speak": self._handle_talk,
            "inventory": self._handle_inventory,
            "help": self._handle_help,
            "quit": self._handle_quit,
            "": self._handle_empty,
        }

    # =========================================================================
    # Lifecycle
    # =========================================================================

    def load_game(self, data: GameData | Mapping[str, Any]) -> None:
        """
        Load a world definition, replacing any previously loaded world.

        Args:
            data: World definition (GameData or its raw mapping form)

        Raises:
            GameDataValidationError: If the definition is invalid; nothing
                is changed in that case
        """
        game_data = parse_game_data(data)
        self._install_world(game_data)

        if self._player is not None:
            for item_id, item in self._items.items():
                self._player.set_item_weight(item_id, item.weight)

        logger.info(
            "Loaded game %r (%d rooms, %d items, %d NPCs)",
            game_data.metadata.title,
            len(self._rooms),
            len(self._items),
            len(self._npcs),
        )
        self._output(f"Loaded game: {game_data.metadata.title} by {game_data.metadata.author}")

    def start_new_game(self) -> None:
        """
        Start a fresh session in the starting room.

        The world is rebuilt from the loaded definition so a new game
        never inherits changes from an earlier session.

        Raises:
            NoGameLoadedError: If no game has been loaded
        """
        game_data = self._require_game_data()
        self._install_world(game_data)

        start = game_data.metadata.starting_room_id
        self._player = self._new_player(start)
        self._state = GameState(current_room_id=start, visited_rooms={start})
        self._rooms[start].mark_visited()

        logger.info("Started new game %r in room %r", game_data.metadata.title, start)
        self._output(f"Welcome to {game_data.metadata.title}!")
        self._output(game_data.metadata.description)
        self._output("")
        self._output(self._rooms[start].get_description(is_long=True))

        self._notify_state_change()

    def save_game(self) -> GameState:
        """
        Snapshot the current session.

        Returns:
            An independent copy of the session state with the live inventory

        Raises:
            NoActiveSessionError: If no session is active
        """
        state, player = self._require_session()
        snapshot = state.model_copy(deep=True)
        snapshot.current_room_id = player.current_room_id
        snapshot.inventory = player.get_inventory_list()
        return snapshot

    def save_snapshot(self) -> dict[str, Any]:
        """The current session as a JSON-serializable dict."""
        return self.save_game().to_snapshot()

    def load_game_state(self, state: GameState | Mapping[str, Any]) -> None:
        """
        Restore a saved session.

        The world is rebuilt from the loaded definition, then the snapshot
        is applied on top. Restored inventory items are taken out of rooms,
        NPC inventories and containers so every item stays in exactly one
        place; an item the player cannot carry stays where it was defined.

        Args:
            state: A GameState or a snapshot dict from `save_snapshot`

        Raises:
            NoGameLoadedError: If no game has been loaded
            ValueError: If the state names rooms or items the world lacks
        """
        game_data = self._require_game_data()
        restored = (
            state.model_copy(deep=True)
            if isinstance(state, GameState)
            else GameState.from_snapshot(dict(state))
        )

        rooms, items, npcs = self._build_world(game_data)
        if restored.current_room_id not in rooms:
            raise ValueError(f"Saved room '{restored.current_room_id}' does not exist")
        unknown = [item_id for item_id in restored.inventory if item_id not in items]
        if unknown:
            raise ValueError(f"Saved inventory has unknown items: {', '.join(unknown)}")

        self._rooms, self._items, self._npcs = rooms, items, npcs
        self._player = self._new_player(restored.current_room_id)
        self._state = restored

        for item_id in restored.inventory:
            if not self._player.add_item(item_id):
                logger.warning("Could not restore item %r into inventory", item_id)
                continue
            self._detach_item(item_id)
        self._state.inventory = self._player.get_inventory_list()

        for room_id in restored.visited_rooms:
            room = self._rooms.get(room_id)
            if room is not None:
                room.mark_visited()

        logger.info(
            "Restored session at turn %d in room %r",
            restored.turn_count,
            restored.current_room_id,
        )
        self._notify_state_change()

    # =========================================================================
    # Command processing
    # =========================================================================

    def process_command(self, text: str) -> CommandResult:
        """
        Process one line of player input.

        Every accepted command consumes a turn, whether it succeeds or not.
        A handler error is reported as a failed result and the world is
        restored to how it was before the command.

        Args:
            text: Raw player input

        Returns:
            CommandResult describing the outcome
        """
        if self._state is None or self._player is None:
            return CommandResult(success=False, message="No active game")

        command = self.parser.parse(text)
        checkpoint = self._checkpoint()
        turn = self._state.advance_turn()
        logger.debug("Turn %d: %r -> %s", turn, text, command)

        try:
            result = self._execute(command)
        except Exception as e:
            logger.warning("Command %r failed: %s", text, e, exc_info=True)
            self._restore(checkpoint)
            self._state.turn_count = turn
            result = CommandResult(success=False, message=f"Error executing command: {e}")

        self._state.current_room_id = self._player.current_room_id
        self._state.inventory = self._player.get_inventory_list()

        if result.game_state_changed:
            self._notify_state_change()

        return result

    def _execute(self, command: Command) -> CommandResult:
        verb = command.verb.lower()
        handler = self._handlers.get(verb)
        if handler is None:
            return CommandResult(success=False, message=f"I don't understand '{verb}'.")
        return handler(command)

    # --- Handlers ---

    def _handle_movement(self, command: Command) -> CommandResult:
        direction = command.object
        if not direction:
            return CommandResult(success=False, message="Go where?")

        state, player = self._require_session()
        exit = self._current_room().get_exit(direction)

        if exit is None:
            return CommandResult(success=False, message=f"You can't go {direction} from here.")

        if exit.is_locked:
            return CommandResult(
                success=False,
                message=exit.lock_description or f"The way {direction} is blocked.",
            )

        destination = self._rooms.get(exit.room_id)
        if destination is None:
            return CommandResult(success=False, message="That room doesn't exist.")

        first_visit = not destination.visited
        player.move_to_room(destination.id)
        state.visit(destination.id)
        destination.mark_visited()

        description = destination.get_description(is_long=first_visit)
        self._output(f"You go {direction}.")
        self._output(description)

        return CommandResult(success=True, message=description, game_state_changed=True)

    def _handle_look(self, command: Command) -> CommandResult:
        target = command.object
        if not target:
            description = self._current_room().get_description(is_long=True)
            self._output(description)
            return CommandResult(success=True, message=description)

        item = self._find_item_in_room_or_inventory(target)
        if item is not None:
            return CommandResult(success=True, message=item.examine())

        npc = self._find_npc_in_room(target)
        if npc is not None:
            return CommandResult(success=True, message=npc.examine())

        return CommandResult(success=False, message=f"You don't see any {target} here.")

    def _handle_take(self, command: Command) -> CommandResult:
        name = command.object
        if not name:
            return CommandResult(success=False, message="Take what?")

        _, player = self._require_session()
        item = self._find_item_in_room(name)
        if item is None:
            return CommandResult(success=False, message=f"You don't see any {name} here.")

        if not item.can_take():
            return CommandResult(success=False, message=f"You can't take the {item.name}.")

        if not player.can_carry(item.id):
            return CommandResult(success=False, message="You are carrying too much weight.")

        self._current_room().remove_item(item.id)
        player.add_item(item.id)

        return CommandResult(success=True, message=item.on_take(), game_state_changed=True)

    def _handle_drop(self, command: Command) -> CommandResult:
        name = command.object
        if not name:
            return CommandResult(success=False, message="Drop what?")

        _, player = self._require_session()
        item = self._find_item_in_inventory(name)
        if item is None:
            return CommandResult(success=False, message=f"You don't have any {name}.")

        player.remove_item(item.id)
        self._current_room().add_item(item.id)

        return CommandResult(success=True, message=item.on_drop(), game_state_changed=True)

    def _handle_use(self, command: Command) -> CommandResult:
        name = command.object
        if not name:
            return CommandResult(success=False, message="Use what?")

        item = self._find_item_in_inventory(name)
        if item is None:
            return CommandResult(success=False, message=f"You don't have any {name}.")

        target: Item | NPC | None = None
        if command.indirect_object:
            target = self._find_item_in_room_or_inventory(command.indirect_object)
            if target is None:
                target = self._find_npc_in_room(command.indirect_object)
            if target is None:
                return CommandResult(
                    success=False,
                    message=f"You don't see any {command.indirect_object} here.",
                )

        message = item.use(target, self.use_strategies)
        return CommandResult(success=True, message=message, game_state_changed=True)

    def _handle_talk(self, command: Command) -> CommandResult:
        name = command.object or command.indirect_object
        if not name:
            return CommandResult(success=False, message="Talk to whom?")

        npc = self._find_npc_in_room(name)
        if npc is None:
            return CommandResult(success=False, message=f"You don't see any {name} here.")

        return CommandResult(success=True, message=npc.talk())

    def _handle_inventory(self, command: Command) -> CommandResult:
        _, player = self._require_session()
        message = player.get_inventory_description(self._item_name)
        return CommandResult(success=True, message=message)

    def _handle_help(self, command: Command) -> CommandResult:
        commands = self.parser.get_available_commands()
        return CommandResult(success=True, message="Available commands:\n" + "\n".join(commands))

    def _handle_quit(self, command: Command) -> CommandResult:
        return CommandResult(success=True, message="Thanks for playing!")

    def _handle_empty(self, command: Command) -> CommandResult:
        return CommandResult(success=False, message="Please enter a command.")

    # =========================================================================
    # Accessors
    # =========================================================================

    @property
    def is_loaded(self) -> bool:
        return self._game_data is not None

    @property
    def is_active(self) -> bool:
        return self._state is not None and self._player is not None

    @property
    def metadata(self) -> GameMetadata:
        return self._require_game_data().metadata.model_copy()

    def get_current_room(self) -> Room:
        return self._current_room().model_copy(deep=True)

    def get_player(self) -> Player:
        _, player = self._require_session()
        return player.model_copy(deep=True)

    def get_item(self, item_id: str) -> Item | None:
        item = self._items.get(item_id)
        return item.model_copy(deep=True) if item is not None else None

    def get_npc(self, npc_id: str) -> NPC | None:
        npc = self._npcs.get(npc_id)
        return npc.model_copy(deep=True) if npc is not None else None

    def get_room(self, room_id: str) -> Room | None:
        room = self._rooms.get(room_id)
        return room.model_copy(deep=True) if room is not None else None

    def get_game_state(self) -> GameState:
        """A copy of the live session state."""
        return self.save_game()

    # --- Flags and variables ---

    def set_game_flag(self, flag: str, value: bool) -> None:
        if self._state is not None:
            self._state.game_flags[flag] = value

    def get_game_flag(self, flag: str) -> bool:
        if self._state is None:
            return False
        return self._state.game_flags.get(flag, False)

    def set_game_variable(self, name: str, value: Any) -> None:
        if self._state is not None:
            self._state.game_variables[name] = deepcopy(value)

    def get_game_variable(self, name: str) -> Any:
        if self._state is None:
            return None
        return deepcopy(self._state.game_variables.get(name))

    # =========================================================================
    # Observers
    # =========================================================================

    def on_output(self, callback: Callable[[str], None]) -> Subscription:
        """Subscribe to output lines. Keep the handle to unsubscribe."""
        return self._output_listeners.add(callback)

    def on_game_state_change(self, callback: Callable[[GameState], None]) -> Subscription:
        """Subscribe to state changes; listeners receive a state copy."""
        return self._state_listeners.add(callback)

    def remove_output_listener(self, handle: Subscription) -> bool:
        return self._output_listeners.remove(handle)

    def remove_game_state_listener(self, handle: Subscription) -> bool:
        return self._state_listeners.remove(handle)

    def clear_all_listeners(self) -> None:
        self._output_listeners.clear()
        self._state_listeners.clear()

    def _output(self, message: str) -> None:
        if self.config.echo_output_to_log:
            logger.debug("output: %s", message)
        self._output_listeners.emit(message)

    def _notify_state_change(self) -> None:
        if self._state is not None and self._player is not None:
            self._state_listeners.emit(self.save_game())

    # =========================================================================
    # Internals
    # =========================================================================

    def _build_world(
        self, game_data: GameData
    ) -> tuple[dict[str, Room], dict[str, Item], dict[str, NPC]]:
        return build_rooms(game_data), build_items(game_data), build_npcs(game_data)

    def _install_world(self, game_data: GameData) -> None:
        """Replace the world; nothing is assigned unless every entity builds."""
        rooms, items, npcs = self._build_world(game_data)
        self._game_data = game_data
        self._rooms, self._items, self._npcs = rooms, items, npcs

    def _detach_item(self, item_id: str) -> None:
        """Take an item out of every room, NPC inventory and container."""
        for room in self._rooms.values():
            room.remove_item(item_id)
        for npc in self._npcs.values():
            if npc.has_item(item_id):
                npc.inventory.remove(item_id)
        for item in self._items.values():
            item.remove_from_container(item_id)

    def _new_player(self, room_id: str) -> Player:
        player = Player(
            current_room_id=room_id,
            max_inventory_weight=self.config.max_inventory_weight,
            default_item_weight=self.config.default_item_weight,
        )
        for item_id, item in self._items.items():
            player.set_item_weight(item_id, item.weight)
        return player

    def _require_game_data(self) -> GameData:
        if self._game_data is None:
            raise NoGameLoadedError("No game data loaded")
        return self._game_data

    def _require_session(self) -> tuple[GameState, Player]:
        if self._state is None or self._player is None:
            raise NoActiveSessionError("No active game")
        return self._state, self._player

    def _current_room(self) -> Room:
        _, player = self._require_session()
        room = self._rooms.get(player.current_room_id)
        if room is None:
            raise NoActiveSessionError(f"Current room '{player.current_room_id}' not found")
        return room

    def _checkpoint(self) -> _Checkpoint:
        state, player = self._require_session()
        return _Checkpoint(
            rooms=deepcopy(self._rooms),
            items=deepcopy(self._items),
            npcs=deepcopy(self._npcs),
            player=player.model_copy(deep=True),
            state=state.model_copy(deep=True),
        )

    def _restore(self, checkpoint: _Checkpoint) -> None:
        self._rooms = checkpoint.rooms
        self._items = checkpoint.items
        self._npcs = checkpoint.npcs
        self._player = checkpoint.player
        self._state = checkpoint.state

    def _item_name(self, item_id: str) -> str | None:
        item = self._items.get(item_id)
        return item.name if item is not None else None

    # --- Name lookup (case-insensitive substring of the entity name) ---

    def _find_item_in_room(self, name: str) -> Item | None:
        return self._match(name, self._current_room().item_ids, self._items)

    def _find_item_in_inventory(self, name: str) -> Item | None:
        _, player = self._require_session()
        return self._match(name, player.inventory, self._items)

    def _find_item_in_room_or_inventory(self, name: str) -> Item | None:
        return self._find_item_in_room(name) or self._find_item_in_inventory(name)

    def _find_npc_in_room(self, name: str) -> NPC | None:
        return self._match(name, self._current_room().npc_ids, self._npcs)

    @staticmethod
    def _match(name: str, ids: list[str], table: Mapping[str, Any]) -> Any:
        needle = name.lower()
        for entity_id in ids:
            entity = table.get(entity_id)
            if entity is not None and needle in entity.name.lower():
                return entity
        return None
