# vale/engine/systems/__init__.py
"""
Game systems - the interpreter and the resolution engine.

Each system handles a specific domain of game logic:
- lexer / fuzzy: tokenization, stop words, edit-distance matching
- CommandResolver: verb categories, priority chain, argument rebuilding
- ActionEngine: movement, inventory, crafting, room actions
- DialogueSystem: numbered-option NPC conversations
- AtmosphereSystem: per-turn flavour and weather for presentation
- GameContext: shared state and event helpers
"""

from .context import Event, GameContext
from .fuzzy import FUZZY_THRESHOLD, edit_distance, fuzzy_match, match_action
from .lexer import DEFAULT_STOP_WORDS, tokenize
from .resolver import (
    DEFAULT_SYNONYMS,
    CommandResolver,
    ParserConfig,
    ResolvedCommand,
    Verb,
)
from .recipes import Recipe, RecipeBook
from .dialogue import DialogueSystem, parse_choice
from .actions import ActionEngine
from .atmosphere import AtmosphereConfig, AtmosphereSystem

__all__ = [
    "Event",
    "GameContext",
    "FUZZY_THRESHOLD",
    "edit_distance",
    "fuzzy_match",
    "match_action",
    "DEFAULT_STOP_WORDS",
    "tokenize",
    "DEFAULT_SYNONYMS",
    "CommandResolver",
    "ParserConfig",
    "ResolvedCommand",
    "Verb",
    "Recipe",
    "RecipeBook",
    "DialogueSystem",
    "parse_choice",
    "ActionEngine",
    "AtmosphereConfig",
    "AtmosphereSystem",
]
