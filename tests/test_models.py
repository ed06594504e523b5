"""Tests for the world entity models."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from fable.models import (
    NPC,
    CapacityEffect,
    DamageEffect,
    DialogueNode,
    Exit,
    GiveItemBehavior,
    HealEffect,
    Item,
    ItemType,
    Player,
    Room,
    SayBehavior,
    UnlocksEffect,
    UseStrategyRegistry,
    create_container,
    create_key,
    create_weapon,
    effects_from_properties,
)

# --- Item Tests ---


class TestItem:
    """Tests for Item behavior."""

    def test_defaults(self):
        item = Item(id="rock", name="rock")
        assert item.weight == 1.0
        assert item.type == ItemType.REGULAR
        assert item.can_take()
        assert item.on_take() == "You take the rock."
        assert item.on_drop() == "You drop the rock."

    def test_custom_messages(self):
        item = Item(id="key", name="brass key", on_take_message="You pick up the brass key.")
        assert item.on_take() == "You pick up the brass key."
        assert item.on_drop() == "You drop the brass key."

    def test_contents_require_container(self):
        with pytest.raises(ValidationError):
            Item(id="rock", name="rock", container_items=["pebble"])

    def test_negative_weight_rejected(self):
        with pytest.raises(ValidationError):
            Item(id="rock", name="rock", weight=-1)

    def test_examine_plain(self):
        item = Item(id="rock", name="rock", description="A grey rock.")
        assert item.examine() == "A grey rock."

    def test_examine_container_and_use_hint(self):
        item = Item(
            id="box",
            name="box",
            description="A box.",
            is_container=True,
            container_items=["coin"],
            is_usable=True,
            use_description="It opens.",
        )
        assert item.examine() == "A box.\n\nInside you can see: coin\n\nIt opens."

    def test_use_not_usable(self):
        item = Item(id="rock", name="rock")
        assert item.use() == "You can't use the rock."

    def test_use_without_description(self):
        item = Item(id="lamp", name="lamp", is_usable=True)
        assert item.use() == "You use the lamp."

    def test_use_with_description(self):
        item = Item(id="lamp", name="lamp", is_usable=True, use_description="It glows.")
        assert item.use() == "It glows."

    def test_interact_dispatch(self):
        item = Item(id="rock", name="rock", description="A rock.")
        assert item.interact("LOOK") == "A rock."
        assert item.interact("take") == "You take the rock."
        assert item.interact("eat") == "You can't eat the rock."


class TestContainer:
    """Tests for container bookkeeping."""

    @pytest.fixture
    def chest(self) -> Item:
        return create_container("chest", "chest", "A wooden chest.", capacity=2)

    def test_factory(self, chest: Item):
        assert chest.is_container
        assert chest.type == ItemType.CONTAINER
        assert chest.weight == 2
        assert chest.container_capacity == 2

    def test_add_and_remove(self, chest: Item):
        assert chest.add_to_container("coin")
        assert not chest.add_to_container("coin")
        assert chest.get_container_contents() == ["coin"]
        assert chest.remove_from_container("coin")
        assert not chest.remove_from_container("coin")

    def test_capacity_limit(self, chest: Item):
        assert chest.add_to_container("a")
        assert chest.add_to_container("b")
        assert not chest.add_to_container("c")

    def test_contents_are_a_copy(self, chest: Item):
        chest.add_to_container("coin")
        chest.get_container_contents().append("gem")
        assert chest.get_container_contents() == ["coin"]

    def test_non_container(self):
        rock = Item(id="rock", name="rock")
        assert not rock.add_to_container("coin")
        assert rock.get_container_contents() == []
        assert rock.container_capacity is None


class TestUseStrategies:
    """Tests for type-keyed use-with strategies."""

    @pytest.fixture
    def door(self) -> Item:
        return Item(id="door", name="oak door")

    def test_key_fits_its_target(self, door: Item):
        key = create_key("key", "iron key", "An iron key.", unlocks=["door"])
        assert key.weight == 0.1
        assert key.can_use_with(door)
        assert key.use(door) == "The iron key fits the oak door."

    def test_key_ignores_other_targets(self):
        key = create_key("key", "iron key", "An iron key.", unlocks=["door"])
        gate = Item(id="gate", name="gate")
        assert not key.can_use_with(gate)
        assert key.use(gate) == "The iron key might unlock something."

    def test_weapon_strikes_any_target(self, door: Item):
        sword = create_weapon("sword", "sword", "A sharp sword.", damage=7)
        assert sword.use(door) == "You strike the oak door with the sword for 7 damage."

    def test_regular_item_declines(self, door: Item):
        lamp = Item(id="lamp", name="lamp", is_usable=True)
        assert not lamp.can_use_with(door)
        assert lamp.use(door) == "You use the lamp."

    def test_custom_strategy(self, door: Item):
        class PolishStrategy:
            def can_use_with(self, item, target):
                return True

            def use_with(self, item, target):
                return f"You polish the {target.name}."

        registry = UseStrategyRegistry()
        registry.register(ItemType.TOOL, PolishStrategy())
        cloth = Item(id="cloth", name="cloth", type=ItemType.TOOL, is_usable=True)
        assert cloth.use(door, registry) == "You polish the oak door."
        # other registries are unaffected
        assert cloth.use(door) == "You use the cloth."


class TestEffects:
    """Tests for effect conversion."""

    def test_effects_from_properties(self):
        effects = effects_from_properties(
            {"damage": 3, "capacity": "4", "heal": 2, "unlocks": ["a", "b"], "color": "red"}
        )
        assert effects == [
            DamageEffect(amount=3),
            CapacityEffect(slots=4),
            HealEffect(amount=2),
            UnlocksEffect(target_id="a"),
            UnlocksEffect(target_id="b"),
        ]

    def test_single_unlock_target(self):
        assert effects_from_properties({"unlocks": "door"}) == [UnlocksEffect(target_id="door")]

    def test_discriminated_effects(self):
        item = Item.model_validate(
            {"id": "potion", "name": "potion", "effects": [{"kind": "heal", "amount": 5}]}
        )
        assert item.get_effect(HealEffect) == HealEffect(amount=5)
        assert item.get_effect(DamageEffect) is None

    def test_unknown_effect_kind_rejected(self):
        with pytest.raises(ValidationError):
            Item.model_validate({"id": "x", "name": "x", "effects": [{"kind": "explode"}]})


# --- NPC Tests ---


def make_guard(**kwargs) -> NPC:
    return NPC(
        id="guard",
        name="guard",
        description="A guard.",
        dialogues={
            "greeting": DialogueNode(
                id="greeting", response="Halt!", next_dialogue_id="explain"
            ),
            "explain": DialogueNode(id="explain", response="Be careful."),
        },
        **kwargs,
    )


class TestNPCDialogue:
    """Tests for the dialogue state machine."""

    def test_conversation_walks_the_chain(self):
        guard = make_guard()
        assert guard.talk() == 'guard says: "Halt!"'
        assert guard.current_dialogue_id == "explain"
        assert guard.talk() == 'guard says: "Be careful."'
        assert guard.current_dialogue_id is None

    def test_restarts_after_terminal_node(self):
        guard = make_guard()
        guard.talk()
        guard.talk()
        assert guard.talk() == 'guard says: "Halt!"'

    def test_default_response_without_dialogues(self):
        npc = NPC(id="cat", name="cat")
        assert npc.talk() == 'cat says: "cat doesn\'t respond."'
        assert npc.current_dialogue_id is None

    def test_custom_default_response(self):
        npc = NPC(id="cat", name="cat", default_response="Meow.")
        assert npc.talk() == 'cat says: "Meow."'

    def test_set_dialogue(self):
        guard = make_guard()
        guard.set_dialogue("explain")
        assert guard.talk() == 'guard says: "Be careful."'

    def test_set_unknown_dialogue_ignored(self):
        guard = make_guard()
        guard.set_dialogue("missing")
        assert guard.current_dialogue_id is None

    def test_remove_current_dialogue_clears_pointer(self):
        guard = make_guard()
        guard.talk()
        guard.remove_dialogue("explain")
        assert guard.current_dialogue_id is None

    def test_add_dialogue(self):
        npc = NPC(id="cat", name="cat")
        npc.add_dialogue(DialogueNode(id="purr", response="Purr."))
        assert npc.talk() == 'cat says: "Purr."'

    def test_pointer_must_exist(self):
        with pytest.raises(ValidationError):
            NPC(id="cat", name="cat", current_dialogue_id="missing")

    def test_dead_npc_cannot_speak(self):
        guard = make_guard()
        guard.talk()
        guard.kill()
        assert guard.current_dialogue_id is None
        assert guard.talk() == "guard is dead and cannot speak."
        guard.set_dialogue("greeting")
        assert guard.current_dialogue_id is None


class TestNPC:
    """Tests for NPC description, inventory and behaviors."""

    def test_examine(self):
        npc = NPC(
            id="guard",
            name="guard",
            description="A guard.",
            long_description="A tall guard.",
            inventory=["sword"],
        )
        assert npc.examine() == "A tall guard.\n\nguard is carrying: sword"

    def test_long_description_defaults(self):
        assert NPC(id="cat", name="cat", description="A cat.").examine() == "A cat."

    def test_dead_examine_and_interact(self):
        npc = make_guard(is_alive=False)
        assert npc.examine() == "guard is dead."
        assert npc.interact("talk") == "guard is dead and cannot respond."
        assert npc.give_item("x") == "guard is dead and cannot give you anything."
        assert npc.take_item("x") == "guard is dead and cannot take anything."

    def test_revive(self):
        npc = make_guard(is_alive=False)
        npc.revive()
        assert npc.talk() == 'guard says: "Halt!"'

    def test_interact_ask_is_talk(self):
        assert make_guard().interact("ask") == 'guard says: "Halt!"'

    def test_interact_give(self):
        npc = NPC(id="merchant", name="merchant", inventory=["coin"])
        coin = Item(id="coin", name="coin")
        assert npc.interact("give") == "Give what?"
        assert npc.interact("give", coin) == "merchant gives you the coin."
        assert not npc.has_item("coin")

    def test_give_and_take_items(self):
        npc = NPC(id="merchant", name="merchant")
        assert npc.give_item("coin") == "merchant doesn't have that item."
        assert npc.take_item("coin") == "merchant takes the coin."
        assert npc.take_item("coin") == "merchant already has that item."
        assert npc.inventory == ["coin"]

    def test_behaviors(self):
        npc = NPC(
            id="merchant",
            name="merchant",
            inventory=["map"],
            behaviors=[
                SayBehavior(trigger="greet", text="Welcome!"),
                GiveItemBehavior(trigger="pay", item_id="map"),
            ],
        )
        assert npc.has_behavior("greet")
        assert not npc.has_behavior("dance")
        assert npc.trigger_behavior("greet") == 'merchant says: "Welcome!"'
        assert npc.trigger_behavior("pay") == "merchant gives you the map."
        assert npc.trigger_behavior("dance") == ""

    def test_behaviors_from_raw(self):
        npc = NPC.model_validate(
            {
                "id": "owl",
                "name": "owl",
                "behaviors": [{"kind": "say", "trigger": "night", "text": "Hoo."}],
            }
        )
        assert npc.trigger_behavior("night") == 'owl says: "Hoo."'


# --- Room Tests ---


class TestRoom:
    """Tests for Room descriptions and presence lists."""

    @pytest.fixture
    def room(self) -> Room:
        return Room(
            id="hall",
            name="Hall",
            short_description="A hall.",
            long_description="A long, echoing hall.",
            exits=[Exit(direction="North", room_id="attic")],
        )

    def test_unvisited_uses_long_description(self, room: Room):
        assert room.get_description() == "A long, echoing hall.\n\nExits: North"

    def test_visited_uses_short_description(self, room: Room):
        room.mark_visited()
        assert room.get_description() == "A hall.\n\nExits: North"
        assert room.get_description(is_long=True).startswith("A long, echoing hall.")

    def test_description_lists_items_then_npcs(self, room: Room):
        room.add_item("lamp")
        room.add_npc("cat")
        assert room.examine() == (
            "A long, echoing hall.\n\nYou can see: lamp\n\nPresent: cat\n\nExits: North"
        )

    def test_presence_is_idempotent(self, room: Room):
        room.add_item("lamp")
        room.add_item("lamp")
        assert room.item_ids == ["lamp"]
        room.remove_item("lamp")
        room.remove_item("lamp")
        assert room.item_ids == []
        room.add_npc("cat")
        room.add_npc("cat")
        assert room.npc_ids == ["cat"]
        room.remove_npc("cat")
        assert room.npc_ids == []

    def test_exit_lookup_is_case_insensitive(self, room: Room):
        assert room.get_exit("north").room_id == "attic"
        assert room.has_exit("NORTH")
        assert not room.has_exit("south")

    def test_get_exits_is_a_copy(self, room: Room):
        room.get_exits().clear()
        assert len(room.exits) == 1


# --- Player Tests ---


class TestPlayer:
    """Tests for the weight-limited inventory."""

    @pytest.fixture
    def player(self) -> Player:
        player = Player(current_room_id="start", max_inventory_weight=5)
        player.set_item_weight("anvil", 4)
        player.set_item_weight("feather", 0.5)
        return player

    def test_add_within_limit(self, player: Player):
        assert player.add_item("anvil")
        assert player.has_item("anvil")
        assert player.get_current_weight() == 4

    def test_add_over_limit_rejected(self, player: Player):
        player.set_item_weight("brick", 2)
        player.add_item("anvil")
        assert not player.add_item("brick")
        assert not player.has_item("brick")
        # unknown ids weigh 1, and exactly reaching the limit is allowed
        assert player.add_item("pebble")
        assert player.get_current_weight() == 5

    def test_weight_never_exceeds_limit(self, player: Player):
        for item_id in ["anvil", "feather", "brick", "stone"]:
            player.add_item(item_id)
            assert player.get_current_weight() <= player.max_inventory_weight

    def test_duplicate_rejected(self, player: Player):
        assert player.add_item("feather")
        assert not player.add_item("feather")
        assert player.get_inventory_list() == ["feather"]

    def test_remove(self, player: Player):
        assert not player.remove_item("feather")
        player.add_item("feather")
        assert player.remove_item("feather")
        assert not player.has_item("feather")

    def test_inventory_list_is_a_copy(self, player: Player):
        player.add_item("feather")
        player.get_inventory_list().append("anvil")
        assert player.inventory == ["feather"]

    def test_clear_and_move(self, player: Player):
        player.add_item("feather")
        player.clear_inventory()
        assert player.inventory == []
        player.move_to_room("attic")
        assert player.current_room_id == "attic"

    def test_inventory_description(self, player: Player):
        assert player.get_inventory_description() == "You are not carrying anything."
        player.add_item("anvil")
        player.add_item("feather")
        assert player.get_inventory_description() == "You are carrying: anvil, feather (4.5/5 weight)"
        names = {"anvil": "heavy anvil"}
        assert player.get_inventory_description(names.get) == (
            "You are carrying: heavy anvil (4.5/5 weight)"
        )
