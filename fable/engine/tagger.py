"""
Part-of-Speech Tagging for Fable.

The command parser needs candidate verbs, nouns and adjectives from the
player's text. Tagging sits behind the `PartOfSpeechTagger` interface so
a heavier NLP backend can be plugged in; `LexiconTagger` is the built-in
rule-based implementation tuned for imperative adventure commands.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Protocol


@dataclass
class TaggedText:
    """Words extracted from a command, in input order."""

    verbs: list[str] = field(default_factory=list)
    nouns: list[str] = field(default_factory=list)
    adjectives: list[str] = field(default_factory=list)
    particles: list[str] = field(default_factory=list)
    """Adverb particles bound to the preceding verb ("pick up")."""


class PartOfSpeechTagger(Protocol):
    """Interface for part-of-speech tagging."""

    def tag(self, text: str) -> TaggedText:
        """Tag lowercase command text."""
        ...


DEFAULT_VERBS: frozenset[str] = frozenset(
    {
        # movement
        "go", "move", "walk", "travel", "head", "run", "enter", "climb",
        # items
        "take", "get", "grab", "pick", "collect", "drop", "put", "place", "leave",
        "use", "utilize", "employ", "apply", "give", "throw", "eat", "drink",
        "read", "wear", "push", "pull",
        # perception
        "look", "examine", "inspect", "check", "view", "see", "search",
        # social
        "talk", "speak", "chat", "converse", "ask", "say", "tell",
        # doors
        "open", "unlock", "unseal", "close", "shut", "seal", "lock",
        # meta
        "help", "assist", "quit", "wait", "attack", "kill",
    }
)

DEFAULT_ADJECTIVES: frozenset[str] = frozenset(
    {
        "big", "small", "large", "little", "tiny", "huge", "tall", "short", "long",
        "old", "new", "ancient", "young",
        "red", "blue", "green", "yellow", "black", "white", "grey", "gray", "brown",
        "golden", "silver", "bronze", "brass", "iron", "steel", "wooden", "stone",
        "glass", "copper", "leather",
        "rusty", "dusty", "shiny", "broken", "heavy", "light", "dark", "bright",
        "strange", "sharp", "dull", "empty", "full", "locked", "open", "closed",
        "stern", "sleeping", "wet", "dry",
    }
)

STOP_WORDS: frozenset[str] = frozenset(
    {
        "the", "a", "an", "some", "this", "that", "these", "those",
        "with", "to", "on", "in", "at", "from", "using", "into", "onto", "of", "for",
        "and", "then", "please",
        "i", "me", "my", "it", "him", "her", "them", "you", "your", "its",
    }
)

ADJECTIVE_SUFFIXES = ("ous", "ful", "less")

# verb -> particle that binds to it
PHRASAL_PARTICLES: dict[str, str] = {"pick": "up", "put": "down"}

TOKEN_PATTERN = re.compile(r"[a-z0-9']+")


class LexiconTagger:
    """
    Rule-based tagger using fixed word lists.

    A word is a verb if it is in the verb lexicon and no noun has been
    seen yet ("key run" keeps "run" as a noun, while "take run" tags both
    as verbs and the parser resolves the first). Adjectives come from the
    adjective lexicon or a small set of suffixes; everything else that is
    not a stop word is a noun.
    """

    def __init__(
        self,
        verbs: frozenset[str] | set[str] = DEFAULT_VERBS,
        adjectives: frozenset[str] | set[str] = DEFAULT_ADJECTIVES,
    ) -> None:
        self.verbs = frozenset(verbs)
        self.adjectives = frozenset(adjectives)

    def tag(self, text: str) -> TaggedText:
        tagged = TaggedText()

        previous = ""
        for word in TOKEN_PATTERN.findall(text.lower()):
            if PHRASAL_PARTICLES.get(previous) == word and previous in tagged.verbs:
                tagged.particles.append(word)
            elif word in self.verbs and not tagged.nouns:
                tagged.verbs.append(word)
            elif word in STOP_WORDS:
                continue
            elif self._is_adjective(word):
                tagged.adjectives.append(word)
            else:
                tagged.nouns.append(word)
            previous = word

        return tagged

    def _is_adjective(self, word: str) -> bool:
        if word in self.adjectives:
            return True
        return len(word) > 5 and word.endswith(ADJECTIVE_SUFFIXES)
