"""
NPC Model for Fable.

Non-player characters carry items, hold a small dialogue state machine
and react to a closed set of behavior triggers.

Dialogue states:
- idle: `current_dialogue_id` is None
- in-dialogue: `current_dialogue_id` names a node in `dialogues`
"""

from __future__ import annotations

from pydantic import BaseModel, Field, model_validator

from fable.models.effects import GiveItemBehavior, NPCBehavior, SayBehavior
from fable.models.usage import GameEntity


class DialogueNode(BaseModel):
    """One turn of NPC speech with an optional successor."""

    id: str = Field(min_length=1)
    trigger: str = "talk"
    response: str
    next_dialogue_id: str | None = None
    conditions: list[str] = Field(
        default_factory=list,
        description="Gating conditions; parsed but not evaluated yet",
    )


class NPC(BaseModel):
    """A non-player character."""

    id: str = Field(min_length=1)
    name: str = Field(min_length=1)
    description: str = ""
    long_description: str = ""
    is_alive: bool = True
    inventory: list[str] = Field(default_factory=list)

    # Insertion order decides which node opens a conversation
    dialogues: dict[str, DialogueNode] = Field(default_factory=dict)
    current_dialogue_id: str | None = None
    default_response: str = ""

    behaviors: list[NPCBehavior] = Field(default_factory=list)

    @model_validator(mode="after")
    def fill_defaults(self) -> NPC:
        """Fill name-dependent defaults and check the dialogue pointer."""
        if not self.long_description:
            self.long_description = self.description
        if not self.default_response:
            self.default_response = f"{self.name} doesn't respond."
        if self.current_dialogue_id is not None and self.current_dialogue_id not in self.dialogues:
            raise ValueError(
                f"NPC '{self.id}' points at unknown dialogue '{self.current_dialogue_id}'"
            )
        return self

    @property
    def in_dialogue(self) -> bool:
        return self.current_dialogue_id is not None

    # --- Description ---

    def examine(self) -> str:
        if not self.is_alive:
            return f"{self.name} is dead."

        result = self.long_description
        if self.inventory:
            result += f"\n\n{self.name} is carrying: {', '.join(self.inventory)}"
        return result

    def interact(self, action: str, target: GameEntity | None = None) -> str:
        """Dispatch a named action. Dead NPCs never respond."""
        if not self.is_alive:
            return f"{self.name} is dead and cannot respond."

        action = action.lower()
        if action in ("talk", "speak", "ask"):
            return self.talk()
        if action in ("examine", "look"):
            return self.examine()
        if action == "give":
            if target is None:
                return "Give what?"
            return self.give_item(target.id)
        return f"You can't {action} {self.name}."

    # --- Dialogue ---

    def talk(self) -> str:
        """
        Advance the dialogue state machine by one line.

        In-dialogue: speak the current node and follow its successor,
        going idle at a terminal node. Idle: open with the first available
        node and move to its successor, or fall back to the default
        response and stay idle.
        """
        if not self.is_alive:
            return f"{self.name} is dead and cannot speak."

        if self.current_dialogue_id is not None:
            node = self.dialogues.get(self.current_dialogue_id)
            if node is not None:
                self.current_dialogue_id = node.next_dialogue_id
                return self._say(node.response)
            self.current_dialogue_id = None

        available = self.get_available_dialogues()
        if available:
            node = available[0]
            self.current_dialogue_id = node.next_dialogue_id
            return self._say(node.response)

        return self._say(self.default_response)

    def get_available_dialogues(self) -> list[DialogueNode]:
        """Dialogue nodes whose conditions hold. Conditions are not evaluated yet."""
        return list(self.dialogues.values())

    def set_dialogue(self, dialogue_id: str) -> None:
        """Jump to a dialogue node; unknown ids and dead NPCs are ignored."""
        if self.is_alive and dialogue_id in self.dialogues:
            self.current_dialogue_id = dialogue_id

    def add_dialogue(self, dialogue: DialogueNode) -> None:
        self.dialogues[dialogue.id] = dialogue

    def remove_dialogue(self, dialogue_id: str) -> None:
        self.dialogues.pop(dialogue_id, None)
        if self.current_dialogue_id == dialogue_id:
            self.current_dialogue_id = None

    def _say(self, text: str) -> str:
        return f'{self.name} says: "{text}"'

    # --- Inventory ---

    def has_item(self, item_id: str) -> bool:
        return item_id in self.inventory

    def give_item(self, item_id: str) -> str:
        """NPC hands an item over (removing it from its inventory)."""
        if not self.is_alive:
            return f"{self.name} is dead and cannot give you anything."

        if self.has_item(item_id):
            self.inventory.remove(item_id)
            return f"{self.name} gives you the {item_id}."

        return f"{self.name} doesn't have that item."

    def take_item(self, item_id: str) -> str:
        """NPC receives an item."""
        if not self.is_alive:
            return f"{self.name} is dead and cannot take anything."

        if not self.has_item(item_id):
            self.inventory.append(item_id)
            return f"{self.name} takes the {item_id}."

        return f"{self.name} already has that item."

    # --- Life ---

    def kill(self) -> None:
        self.is_alive = False
        self.current_dialogue_id = None

    def revive(self) -> None:
        self.is_alive = True

    # --- Behaviors ---

    def has_behavior(self, trigger: str) -> bool:
        return any(behavior.trigger == trigger for behavior in self.behaviors)

    def trigger_behavior(self, trigger: str) -> str:
        """
        Fire the first behavior registered for a trigger.

        Returns:
            The behavior's text, or "" if nothing is registered or the NPC is dead
        """
        if not self.is_alive:
            return ""

        for behavior in self.behaviors:
            if behavior.trigger != trigger:
                continue
            if isinstance(behavior, SayBehavior):
                return self._say(behavior.text)
            if isinstance(behavior, GiveItemBehavior):
                return self.give_item(behavior.item_id)
        return ""
