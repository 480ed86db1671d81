"""
Unit tests for tokenization and fuzzy matching.

Tests stop-word removal, ASCII-only case folding, Levenshtein distance
and the single-typo matching helpers.
"""

import pytest

from vale.engine.systems.fuzzy import (
    FUZZY_THRESHOLD,
    edit_distance,
    fuzzy_match,
    match_action,
)
from vale.engine.systems.lexer import DEFAULT_STOP_WORDS, ascii_lower, tokenize

# ============================================================================
# Lexer Tests
# ============================================================================


@pytest.mark.unit
def test_tokenize_lowercases_and_drops_stop_words():
    """Test that stop words vanish and case is folded."""
    assert tokenize("Go to the NORTH") == ["go", "north"]
    assert tokenize("look at the Rusty Key") == ["look", "rusty", "key"]


@pytest.mark.unit
def test_tokenize_collapses_whitespace():
    """Test that runs of spaces and tabs separate words like a single space."""
    assert tokenize("  take \t  stone  ") == ["take", "stone"]


@pytest.mark.unit
def test_tokenize_only_stop_words_is_empty():
    """Test that a line of only stop words yields nothing."""
    assert tokenize("the a an") == []
    assert tokenize("") == []
    assert tokenize("   ") == []


@pytest.mark.unit
def test_tokenize_keeps_punctuation_attached():
    """Test that a trailing comma stays on its word."""
    assert tokenize("go, north") == ["go,", "north"]


@pytest.mark.unit
def test_ascii_lower_leaves_non_ascii_alone():
    """Test that only A-Z are lowercased."""
    assert ascii_lower("ÉCLAIR Stone") == "Éclair stone"


@pytest.mark.unit
def test_tokenize_custom_stop_words():
    """Test that the stop-word set is configurable."""
    assert tokenize("go the north", stop_words=["north"]) == ["go", "the"]


@pytest.mark.unit
def test_default_stop_words():
    """Test the default stop-word set."""
    assert DEFAULT_STOP_WORDS == {
        "the", "a", "an", "at", "to", "with", "on", "in", "into", "from", "off",
    }


# ============================================================================
# Edit Distance Tests
# ============================================================================


@pytest.mark.unit
@pytest.mark.parametrize(
    "a,b,expected",
    [
        ("", "", 0),
        ("north", "north", 0),
        ("nrth", "north", 1),
        ("nrh", "north", 2),
        ("kitten", "sitting", 3),
        ("", "abc", 3),
        ("take", "talk", 2),
        ("do", "go", 1),
    ],
)
def test_edit_distance(a, b, expected):
    """Test Levenshtein distance on known pairs."""
    assert edit_distance(a, b) == expected


@pytest.mark.unit
@pytest.mark.parametrize(
    "a,b",
    [("north", "nrth"), ("combine", "climb"), ("", "x"), ("flaw", "lawn"), ("?", "i")],
)
def test_edit_distance_is_symmetric(a, b):
    """Test that distance does not depend on argument order."""
    assert edit_distance(a, b) == edit_distance(b, a)
    assert edit_distance(a, a) == 0


# ============================================================================
# Fuzzy Match Tests
# ============================================================================


@pytest.mark.unit
def test_fuzzy_match_tolerates_one_typo():
    """Test the single-edit threshold."""
    assert FUZZY_THRESHOLD == 1
    assert fuzzy_match("nrth", {"north"}) is True
    assert fuzzy_match("nrh", {"north"}) is False


@pytest.mark.unit
def test_fuzzy_match_any_option():
    """Test that one close option is enough."""
    assert fuzzy_match("lok", ["examine", "look"]) is True
    assert fuzzy_match("lok", []) is False


@pytest.mark.unit
def test_match_action_returns_first_close_action():
    """Test that the first action within the threshold wins."""
    assert match_action("clmb", ["listen", "climb"]) == "climb"
    assert match_action("sit", ["sat", "sip"]) == "sat"
    assert match_action("fly", ["climb"]) is None


@pytest.mark.unit
def test_match_action_with_wider_threshold():
    """Test that the threshold can be raised."""
    assert match_action("clb", ["climb"]) is None
    assert match_action("clb", ["climb"], threshold=2) == "climb"
