"""
Global pytest configuration and shared fixtures.

Provides common test infrastructure for all test suites including:
- The bundled world data and an engine started on it
- A small hand-built world for system tests
- A GameContext with a fixed seed
"""

import random

import pytest

from vale.engine import GameEngine, WorldData, load_world
from vale.engine.systems import DialogueSystem, GameContext
from vale.engine.world import PlayerState, QuestFlags, World, WorldRoom

# ============================================================================
# Helpers
# ============================================================================


def text_of(events) -> str:
    """Join the narration of a list of events."""
    return "\n".join(ev["text"] for ev in events)


# ============================================================================
# Bundled World Fixtures
# ============================================================================


@pytest.fixture
def vale_data() -> WorldData:
    """Load a fresh copy of the bundled world data."""
    return load_world()


@pytest.fixture
def engine(vale_data: WorldData) -> GameEngine:
    """Engine on the bundled world, already narrated into the start room."""
    game = GameEngine.from_data(vale_data, rng=random.Random(7))
    game.start()
    return game


@pytest.fixture
def play(engine: GameEngine):
    """Run commands through the engine and return the last command's narration."""

    def _play(*commands: str) -> str:
        text = ""
        for command in commands:
            text = text_of(engine.handle_command(command))
        return text

    return _play


# ============================================================================
# Hand-built World Fixtures
# ============================================================================


@pytest.fixture
def mock_world() -> World:
    """Create a World with a single empty room."""
    room = WorldRoom(id="room_void", name="Void", description="Nothing at all.")
    return World(rooms={"room_void": room}, player=PlayerState(room_id="room_void"))


@pytest.fixture
def world_with_rooms() -> World:
    """Create World with basic room structure (5 rooms in cross pattern)."""
    center = WorldRoom(
        id="room_center",
        name="Center Room",
        description="The center of the test world",
        items=["pebble", "feather", "pebble"],
        points_of_interest={"fountain": "Water trickles from a stone fish."},
        actions=["sit", "pray"],
        action_results={"sit": "You sit on the rim of the fountain."},
        position=(1, 1),
    )
    rooms = {"room_center": center}

    # Create 4 cardinal direction rooms
    offsets = {"north": (1, 0), "south": (1, 2), "east": (2, 1), "west": (0, 1)}
    opposites = {"north": "south", "south": "north", "east": "west", "west": "east"}

    for direction, position in offsets.items():
        room = WorldRoom(
            id=f"room_{direction}",
            name=f"{direction.capitalize()} Room",
            description=f"A room to the {direction}",
            position=position,
        )
        rooms[room.id] = room

        # Link to center
        center.exits[direction] = room.id
        room.exits[opposites[direction]] = "room_center"

    center.locked["east"] = True

    return World(
        rooms=rooms,
        player=PlayerState(room_id="room_center"),
        quest_flags=QuestFlags.declare(["met_keeper"]),
    )


@pytest.fixture
def ctx(world_with_rooms: World) -> GameContext:
    """GameContext over the cross-pattern world with dialogue wired."""
    context = GameContext(world_with_rooms, rng=random.Random(42))
    context.dialogue = DialogueSystem(context)
    return context
