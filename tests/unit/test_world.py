"""
Unit tests for World data structures and the look helpers.

Tests snapshots, quest flags, room text formatting and the overview map.
"""

import pytest

from vale.engine.systems.look_helpers import (
    format_inventory,
    format_item_list,
    format_return,
    format_room,
    render_map,
)
from vale.engine.world import (
    DialogueOption,
    ExitView,
    QuestFlags,
    World,
    WorldNpc,
)

# ============================================================================
# Model Tests
# ============================================================================


@pytest.mark.unit
def test_quest_flags_declared_false():
    """Test that declared flags start lowered and only ever rise."""
    flags = QuestFlags.declare(["a", "b"])

    assert flags.flags == {"a": False, "b": False}
    flags.raise_flag("a")
    flags.raise_flag("a")
    assert flags.is_set("a")
    assert not flags.is_set("b")
    assert not flags.is_set("undeclared")


@pytest.mark.unit
def test_farewell_detection_is_case_insensitive():
    """Test that any prompt containing 'farewell' ends dialogue."""
    assert DialogueOption("Farewell.", "").is_farewell()
    assert DialogueOption("I must bid you FAREWELL", "").is_farewell()
    assert not DialogueOption("Goodbye.", "").is_farewell()


@pytest.mark.unit
def test_room_lock_defaults_to_open(world_with_rooms: World):
    """Test that absent lock entries mean unlocked."""
    center = world_with_rooms.rooms["room_center"]

    assert center.is_locked("east")
    assert not center.is_locked("north")
    assert not center.is_locked("nowhere")


@pytest.mark.unit
def test_snapshot_reflects_current_room(world_with_rooms: World):
    """Test the presentation snapshot of the current room."""
    world_with_rooms.npcs["keeper"] = WorldNpc(id="keeper", name="Keeper", greeting="Hm.")
    world_with_rooms.rooms["room_center"].npc_id = "keeper"

    snap = world_with_rooms.snapshot(first_visit=True)

    assert snap.room_id == "room_center"
    assert snap.first_visit is True
    assert snap.items == ("pebble", "feather", "pebble")
    assert snap.points_of_interest == ("fountain",)
    assert snap.npc == "Keeper"
    assert snap.exits["east"] == ExitView(target="room_east", target_name="East Room", locked=True)
    assert snap.actions == ("sit", "pray")


@pytest.mark.unit
def test_snapshot_is_a_copy(world_with_rooms: World):
    """Test that mutating the world later does not change a snapshot."""
    snap = world_with_rooms.snapshot()
    world_with_rooms.rooms["room_center"].items.clear()

    assert snap.items == ("pebble", "feather", "pebble")


# ============================================================================
# Look Helper Tests
# ============================================================================


@pytest.mark.unit
def test_format_item_list_capitalizes():
    """Test comma-joined capitalized names."""
    assert format_item_list(["stone", "rusty key"]) == "Stone, Rusty key"
    assert format_item_list([]) == ""


@pytest.mark.unit
def test_format_inventory():
    """Test empty and non-empty inventories."""
    assert format_inventory([]) == "Your pack is empty."
    assert format_inventory(["stone"]) == "You are carrying: Stone."


@pytest.mark.unit
def test_format_room_lists_everything(world_with_rooms: World):
    """Test the full room description."""
    text = format_room(world_with_rooms.snapshot())

    assert text.splitlines()[:2] == ["Center Room", "The center of the test world"]
    assert "You see: Pebble, Feather, Pebble." in text
    assert "You notice: fountain." in text
    assert "Exits: north, south, east (locked), west." in text
    assert "You could: sit, pray." in text


@pytest.mark.unit
def test_format_room_omits_empty_sections(mock_world: World):
    """Test that a bare room is only its name and description."""
    assert format_room(mock_world.snapshot()) == "Void\nNothing at all."


@pytest.mark.unit
def test_format_return(world_with_rooms: World):
    """Test the abbreviated re-entry line."""
    assert format_return(world_with_rooms.snapshot()) == "You return to the Center Room."


# ============================================================================
# Map Tests
# ============================================================================


@pytest.mark.unit
def test_render_map_marks_player(world_with_rooms: World):
    """Test that the player's room is starred and linked rooms joined."""
    text = render_map(world_with_rooms)
    lines = text.splitlines()

    assert "[*Center Room*]" in text
    assert "[ North Room ]" in text
    assert "-" in lines[2]  # west - center - east row
    assert lines[1].strip() == "|"
    assert lines[-1] == "* marks where you stand."


@pytest.mark.unit
def test_render_map_blank_without_positions(mock_world: World):
    """Test that a world without grid positions has no map."""
    assert render_map(mock_world) == "The map is blank."


@pytest.mark.unit
def test_render_map_player_off_map(world_with_rooms: World, mock_world: World):
    """Test the note shown when the player's room has no position."""
    world_with_rooms.rooms["room_void"] = mock_world.rooms["room_void"]
    world_with_rooms.player.room_id = "room_void"

    assert render_map(world_with_rooms).endswith("You stand somewhere off the map: Void.")
