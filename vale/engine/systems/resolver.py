"""
CommandResolver: classifies a tokenized command into a verb category.

Provides:
- Verb synonym groups (configurable, fuzzy-matched on the leading word)
- A fixed priority chain so ambiguous words resolve deterministically
- Bare room-action matching ("climb") and the door-unlock phrase case
- Multi-word argument reconstruction ("rusty key", "unlock door")
- Command metadata for the help listing
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Iterable, List, Optional, Sequence

from .fuzzy import FUZZY_THRESHOLD, fuzzy_match, match_action
from .lexer import DEFAULT_STOP_WORDS, tokenize

logger = logging.getLogger(__name__)


class Verb(Enum):
    HELP = "help"
    LOOK = "look"
    TALK = "talk"
    GO = "go"
    TAKE = "take"
    DROP = "drop"
    COMBINE = "combine"
    USE = "use"
    ROOM_ACTION = "room_action"
    INVENTORY = "inventory"
    EXIT = "exit"
    UNKNOWN = "unknown"


DEFAULT_SYNONYMS: Dict[str, tuple[str, ...]] = {
    "look": ("look", "examine", "inspect"),
    "go": ("go", "move", "walk"),
    "take": ("take", "get", "pickup", "pick", "grab"),
    "drop": ("drop", "leave"),
    "use": ("use", "do", "open"),
    "combine": ("combine", "craft"),
    "inventory": ("inventory", "inv", "i"),
    "talk": ("talk", "speak", "chat"),
    "help": ("help", "?"),
    "exit": ("exit", "quit"),
}

# Verb categories tried, in order, before room actions are considered
LEADING_CHAIN: tuple[Verb, ...] = (
    Verb.HELP,
    Verb.LOOK,
    Verb.TALK,
    Verb.GO,
    Verb.TAKE,
    Verb.DROP,
    Verb.COMBINE,
    Verb.USE,
)

# Tried after room actions and the door-unlock case
TRAILING_CHAIN: tuple[Verb, ...] = (Verb.INVENTORY, Verb.EXIT)

UNLOCK_WORD = "unlock"


@dataclass
class VerbMeta:
    """Help metadata for a verb category."""
    verb: Verb
    usage: str
    description: str


VERB_HELP: tuple[VerbMeta, ...] = (
    VerbMeta(Verb.LOOK, "look [thing]", "Describe the room, an item you carry, or a feature"),
    VerbMeta(Verb.GO, "go <direction>", "Walk through an exit"),
    VerbMeta(Verb.TAKE, "take <item>", "Pick something up"),
    VerbMeta(Verb.DROP, "drop <item>", "Put something down"),
    VerbMeta(Verb.USE, "use <item|action>", "Use a carried item or do something here"),
    VerbMeta(Verb.COMBINE, "combine <item> <item>", "Craft two carried items together"),
    VerbMeta(Verb.TALK, "talk [name]", "Speak with whoever is here"),
    VerbMeta(Verb.INVENTORY, "inventory", "List what you carry"),
    VerbMeta(Verb.HELP, "help", "Show this list"),
    VerbMeta(Verb.EXIT, "exit", "Leave the vale"),
)


@dataclass
class ParserConfig:
    """Configuration axes of the command interpreter."""
    stop_words: frozenset[str] = DEFAULT_STOP_WORDS
    synonyms: Dict[str, tuple[str, ...]] = field(
        default_factory=lambda: dict(DEFAULT_SYNONYMS)
    )
    fuzzy_threshold: int = FUZZY_THRESHOLD

    def synonyms_for(self, verb: Verb) -> tuple[str, ...]:
        return self.synonyms.get(verb.value, ())


@dataclass(frozen=True)
class ResolvedCommand:
    """A verb category plus its re-joined argument."""
    verb: Verb
    argument: str = ""
    words: tuple[str, ...] = ()
    # Set for Verb.ROOM_ACTION: the room action that matched
    action: str | None = None


class CommandResolver:
    """
    Resolves word sequences into ResolvedCommands.

    Resolution order: help, look, talk, go, take, drop, combine, use,
    bare room action, door-unlock phrase, inventory, exit, unknown. The
    first category whose synonyms fuzzy-match the leading word wins, so a
    word close to two groups resolves to the earlier one.
    """

    def __init__(self, config: ParserConfig | None = None) -> None:
        self.config = config or ParserConfig()

    def tokenize(self, raw: str) -> List[str]:
        return tokenize(raw, self.config.stop_words)

    def resolve(self, raw: str, room_actions: Sequence[str] = ()) -> Optional[ResolvedCommand]:
        """
        Resolve a raw line against the current room's action list.

        Returns:
            None when nothing but stop words (or whitespace) was typed
        """
        words = self.tokenize(raw)
        if not words:
            return None
        command = self.resolve_words(words, room_actions)
        logger.debug("Resolved %r -> %s %r", raw, command.verb.value, command.argument)
        return command

    def resolve_words(self, words: Sequence[str], room_actions: Sequence[str] = ()) -> ResolvedCommand:
        leading = words[0]
        argument = " ".join(words[1:])
        threshold = self.config.fuzzy_threshold

        for verb in LEADING_CHAIN:
            if self._matches(leading, verb):
                return ResolvedCommand(verb, argument, tuple(words))

        action = match_action(leading, room_actions, threshold)
        if action is not None:
            return ResolvedCommand(Verb.ROOM_ACTION, argument, tuple(words), action=action)

        action = self._match_door_unlock(words, room_actions)
        if action is not None:
            return ResolvedCommand(Verb.ROOM_ACTION, argument, tuple(words), action=action)

        for verb in TRAILING_CHAIN:
            if self._matches(leading, verb):
                return ResolvedCommand(verb, argument, tuple(words))

        return ResolvedCommand(Verb.UNKNOWN, argument, tuple(words))

    def _matches(self, word: str, verb: Verb) -> bool:
        return fuzzy_match(word, self.config.synonyms_for(verb), self.config.fuzzy_threshold)

    def _match_door_unlock(self, words: Sequence[str], room_actions: Sequence[str]) -> str | None:
        """
        Multi-word room actions such as "unlock door".

        The whole phrase is tried first; a bare "unlock" then picks the
        room's first action that starts with it.
        """
        threshold = self.config.fuzzy_threshold
        phrase = " ".join(words)
        action = match_action(phrase, room_actions, threshold)
        if action is not None:
            return action

        if fuzzy_match(words[0], (UNLOCK_WORD,), threshold):
            for candidate in room_actions:
                if candidate.split(" ", 1)[0] == UNLOCK_WORD:
                    return candidate
        return None

    def get_help(self, room_actions: Iterable[str] = ()) -> str:
        """
        Get help text for commands.

        Args:
            room_actions: Actions available in the current room, listed last

        Returns:
            Formatted help text
        """
        lines = ["=== Available Commands ===", ""]
        for meta in VERB_HELP:
            synonyms = [s for s in self.config.synonyms_for(meta.verb) if s != meta.verb.value]
            aliases_str = f" (also: {', '.join(synonyms)})" if synonyms else ""
            lines.append(f"  {meta.usage}{aliases_str}")
            lines.append(f"    {meta.description}")

        actions = list(room_actions)
        if actions:
            lines.append("")
            lines.append(f"You could also try: {', '.join(actions)}")

        return "\n".join(lines)
