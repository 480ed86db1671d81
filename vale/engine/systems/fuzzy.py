"""
Fuzzy matching helpers built on Levenshtein edit distance.

A word "fuzzy matches" a canonical token when it is at most
FUZZY_THRESHOLD single-character edits away: one substitution,
insertion or deletion by default.
"""

from typing import Iterable, Optional, Sequence

FUZZY_THRESHOLD = 1


def edit_distance(a: str, b: str) -> int:
    """
    Classic dynamic-programming Levenshtein distance.

    Fills an (len(a)+1) x (len(b)+1) table with unit costs for
    substitution, insertion and deletion.
    """
    rows = len(a) + 1
    cols = len(b) + 1
    table = [[0] * cols for _ in range(rows)]

    for i in range(rows):
        table[i][0] = i
    for j in range(cols):
        table[0][j] = j

    for i in range(1, rows):
        for j in range(1, cols):
            cost = 0 if a[i - 1] == b[j - 1] else 1
            table[i][j] = min(
                table[i - 1][j] + 1,  # deletion
                table[i][j - 1] + 1,  # insertion
                table[i - 1][j - 1] + cost,  # substitution
            )

    return table[rows - 1][cols - 1]


def fuzzy_match(word: str, options: Iterable[str], threshold: int = FUZZY_THRESHOLD) -> bool:
    """True if word is within threshold edits of at least one option."""
    return any(edit_distance(word, option) <= threshold for option in options)


def match_action(
    word: str,
    actions: Sequence[str],
    threshold: int = FUZZY_THRESHOLD,
) -> Optional[str]:
    """
    Return the first room action within threshold edits of word.

    Returns:
        The matching action name, or None when nothing is close enough
    """
    for action in actions:
        if edit_distance(word, action) <= threshold:
            return action
    return None
