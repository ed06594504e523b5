"""
Command Parser for Fable.

Turns a raw line of player text into a structured Command.

Pipeline:
1. Empty input -> empty verb
2. Lowercase, trim, expand direction abbreviations
3. Bare direction -> go <direction>
4. Special words: inventory, help, quit (in that order)
5. Part-of-speech tagging
6. Verb resolution through the synonym table
7. Token scan for object / preposition / indirect object
8. Compound-noun fallback for the object
9. Adjacent adjective folded into the object
"""

from __future__ import annotations

import logging
import re

from fable.engine.models import Command
from fable.engine.tagger import LexiconTagger, PartOfSpeechTagger, TaggedText

logger = logging.getLogger(__name__)


# Canonical verb -> synonyms
SYNONYMS: dict[str, list[str]] = {
    "go": ["move", "walk", "travel", "head", "run"],
    "take": ["get", "grab", "pick", "collect"],
    "drop": ["put", "place", "leave"],
    "look": ["examine", "inspect", "check", "view", "see"],
    "use": ["utilize", "employ", "apply"],
    "talk": ["speak", "chat", "converse"],
    "open": ["unlock", "unseal"],
    "close": ["shut", "seal", "lock"],
    "help": ["assist", "info", "instructions"],
    "inventory": ["inv", "items", "carrying"],
}

DIRECTION_ABBREVIATIONS: dict[str, str] = {
    "n": "north",
    "s": "south",
    "e": "east",
    "w": "west",
    "ne": "northeast",
    "nw": "northwest",
    "se": "southeast",
    "sw": "southwest",
    "u": "up",
    "d": "down",
}

DIRECTIONS: frozenset[str] = frozenset(DIRECTION_ABBREVIATIONS.values())

PREPOSITIONS: frozenset[str] = frozenset({"with", "to", "on", "in", "at", "from", "using"})
ARTICLES: frozenset[str] = frozenset({"the", "a", "an"})

PUNCTUATION_PATTERN = re.compile(r"[^\w\s'?]")

AVAILABLE_COMMANDS: list[str] = [
    "go [direction] - Move in a direction (north, south, east, west, etc.)",
    "look / examine [object] - Look around or examine something",
    "take / get [object] - Pick up an item",
    "drop [object] - Drop an item from inventory",
    "use [object] - Use an item",
    "talk [npc] - Talk to a character",
    "inventory / i - Show your inventory",
    "help - Show this help message",
    "quit - Exit the game",
]


def normalize_verb(verb: str) -> str:
    """Map a verb to its canonical form; unknown verbs pass through."""
    verb = verb.lower()
    for canonical, synonyms in SYNONYMS.items():
        if verb == canonical or verb in synonyms:
            return canonical
    return verb


def synonym_of(word: str) -> str | None:
    """Canonical verb if `word` is a listed synonym (not a canonical verb itself)."""
    for canonical, synonyms in SYNONYMS.items():
        if word in synonyms:
            return canonical
    return None


def expand_directions(text: str) -> str:
    """Replace standalone direction abbreviations with full words."""
    return " ".join(DIRECTION_ABBREVIATIONS.get(word, word) for word in text.split())


class CommandParser:
    """
    Parses free text into Commands.

    The tagger is pluggable; by default a LexiconTagger is used.
    """

    def __init__(self, tagger: PartOfSpeechTagger | None = None) -> None:
        self.tagger: PartOfSpeechTagger = tagger or LexiconTagger()

    def parse(self, raw_input: str) -> Command:
        """
        Parse a line of player input.

        Args:
            raw_input: Raw text from the player

        Returns:
            Command with a canonical verb ('' for empty input,
            'unknown' when no verb could be found)
        """
        if not raw_input or not raw_input.strip():
            return Command(verb="")

        clean = PUNCTUATION_PATTERN.sub(" ", raw_input).strip().lower()
        if not clean:
            return Command(verb="")
        expanded = expand_directions(clean)

        if expanded in DIRECTIONS:
            return Command(verb="go", object=expanded)

        special = self._special_case(clean)
        if special is not None:
            return special

        tagged = self.tagger.tag(expanded)

        verb = ""
        obj = ""
        if tagged.verbs:
            verb = normalize_verb(tagged.verbs[0])
        elif tagged.nouns and tagged.nouns[0] in DIRECTIONS:
            verb = "go"
            obj = tagged.nouns[0]

        scanned_obj, preposition, indirect = self._scan_tokens(expanded, tagged)
        obj = obj or scanned_obj

        if not obj and len(tagged.nouns) > 1:
            obj = " ".join(tagged.nouns)
        elif not obj and tagged.nouns:
            obj = tagged.nouns[0]

        if obj and tagged.adjectives:
            obj = self._attach_adjective(expanded, obj, tagged.adjectives)

        command = Command(
            verb=verb or "unknown",
            object=obj or None,
            preposition=preposition or None,
            indirect_object=indirect or None,
        )
        logger.debug("Parsed %r -> %s", raw_input, command)
        return command

    def get_available_commands(self) -> list[str]:
        """Command patterns shown by `help`."""
        return list(AVAILABLE_COMMANDS)

    def _special_case(self, clean: str) -> Command | None:
        if "inventory" in clean or clean in ("i", "inv"):
            return Command(verb="inventory")
        if "help" in clean or clean == "?":
            return Command(verb="help")
        if "quit" in clean or clean == "q":
            return Command(verb="quit")
        return None

    def _scan_tokens(self, text: str, tagged: TaggedText) -> tuple[str, str, str]:
        """Walk the tokens after the verb, splitting at the first preposition."""
        obj = ""
        preposition = ""
        indirect = ""
        found_verb = False
        after_verb = False

        for word in text.split():
            if not found_verb:
                if word in tagged.verbs or synonym_of(word) is not None:
                    found_verb = True
                    after_verb = True
                continue

            # "pick up the key": the particle belongs to the verb
            if after_verb and word in tagged.particles:
                after_verb = False
                continue
            after_verb = False

            if not preposition and word in PREPOSITIONS:
                preposition = word
                continue

            if word in ARTICLES:
                continue

            if not preposition and not obj:
                obj = word
            elif preposition and not indirect:
                indirect = word

        return obj, preposition, indirect

    def _attach_adjective(self, text: str, obj: str, adjectives: list[str]) -> str:
        """Prepend an adjective that sits right before the object in the text."""
        words = text.split()
        head = obj.split()[0]
        for adjective in adjectives:
            if adjective in obj.split():
                continue
            for index, word in enumerate(words[:-1]):
                if word == adjective and words[index + 1] == head:
                    return f"{adjective} {obj}"
        return obj
