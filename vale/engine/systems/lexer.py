"""
Lexer: turns a raw input line into the content words the resolver sees.

Only ASCII letters are case-folded and punctuation is left attached to
its word, so "go north," yields ["go", "north,"] and the direction fails
to match any exit.
"""

from typing import Iterable, List

DEFAULT_STOP_WORDS: frozenset[str] = frozenset(
    {"the", "a", "an", "at", "to", "with", "on", "in", "into", "from", "off"}
)

_ASCII_LOWER = str.maketrans(
    "ABCDEFGHIJKLMNOPQRSTUVWXYZ", "abcdefghijklmnopqrstuvwxyz"
)


def ascii_lower(text: str) -> str:
    """Lowercase A-Z only; every other character passes through untouched."""
    return text.translate(_ASCII_LOWER)


def tokenize(raw: str, stop_words: Iterable[str] = DEFAULT_STOP_WORDS) -> List[str]:
    """
    Split a line into lowercase words with stop words removed.

    Args:
        raw: The line exactly as typed
        stop_words: Words to discard (compared after lowercasing)

    Returns:
        Ordered list of remaining words; empty if nothing is left
    """
    stops = stop_words if isinstance(stop_words, (set, frozenset)) else set(stop_words)
    return [word for word in ascii_lower(raw).split() if word not in stops]
