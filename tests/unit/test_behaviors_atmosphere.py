"""
Unit tests for the behavior registry and the AtmosphereSystem.

Tests registration, parameter merging, and seeded flavour output.
"""

import random

import pytest

from vale.engine.behaviors import (
    ActionBehavior,
    ActionContext,
    ActionResult,
    BehaviorBinding,
    behavior,
    get_all_behaviors,
    get_behavior,
)
from vale.engine.behaviors.base import _BEHAVIOR_REGISTRY
from vale.engine.systems import AtmosphereConfig, AtmosphereSystem
from vale.engine.world import Outcome

# ============================================================================
# Behavior Registry Tests
# ============================================================================


@pytest.mark.unit
def test_builtin_behaviors_registered():
    """Test that importing the package registers the built-ins."""
    names = set(get_all_behaviors())
    assert {"quest_reveal", "unlock_exit", "render_map"} <= names


@pytest.mark.unit
def test_behavior_decorator_registers_metadata():
    """Test that @behavior sets name, description and defaults."""

    @behavior(name="test_ring_bell", description="Rings once", defaults={"flag": "rung"})
    class RingBell(ActionBehavior):
        def on_action(self, ctx: ActionContext) -> ActionResult:
            return ActionResult.done("Dong.")

    try:
        assert get_behavior("test_ring_bell") is RingBell
        assert RingBell.name == "test_ring_bell"
        assert RingBell.description == "Rings once"
        assert RingBell.defaults == {"flag": "rung"}
    finally:
        _BEHAVIOR_REGISTRY.pop("test_ring_bell", None)


@pytest.mark.unit
def test_binding_merges_params_over_defaults():
    """Test that binding params override behavior defaults."""
    binding = BehaviorBinding.create("unlock_exit", {"direction": "up", "key": "rusty key"})
    config = binding.config()

    assert config["direction"] == "up"
    assert config["key"] == "rusty key"
    assert config["already_open"] == "The door is already open."


@pytest.mark.unit
def test_binding_unknown_behavior():
    """Test that unknown names produce no binding."""
    assert BehaviorBinding.create("no_such_behavior") is None


@pytest.mark.unit
def test_base_hooks_do_nothing(world_with_rooms):
    """Test that unimplemented hooks defer to canned narration."""
    ctx = ActionContext(world_with_rooms, world_with_rooms.current_room, "sit", {})
    result = ActionBehavior().on_action(ctx)

    assert result.handled is False
    assert ActionResult.done("x", Outcome.LOCKED).outcome == Outcome.LOCKED


# ============================================================================
# Atmosphere Tests
# ============================================================================


@pytest.fixture
def atmosphere_config() -> AtmosphereConfig:
    return AtmosphereConfig(
        ambient=["wind", "birds"],
        room_ambient={"room_north": ["drip"]},
        weather=["sun", "rain", "fog"],
        ambient_chance=0.5,
        weather_shift_chance=0.3,
        sheltered_rooms=["room_north"],
    )


@pytest.mark.unit
def test_atmosphere_is_deterministic_with_seed(world_with_rooms, atmosphere_config):
    """Test that the same seed yields the same flavour sequence."""
    snap = world_with_rooms.snapshot()
    first = AtmosphereSystem(atmosphere_config, random.Random(99))
    second = AtmosphereSystem(atmosphere_config, random.Random(99))

    assert [first.poll(snap) for _ in range(50)] == [second.poll(snap) for _ in range(50)]


@pytest.mark.unit
def test_atmosphere_lines_come_from_config(world_with_rooms, atmosphere_config):
    """Test that every line is ambient text or a weather line."""
    system = AtmosphereSystem(atmosphere_config, random.Random(1))
    snap = world_with_rooms.snapshot()

    lines = {system.poll(snap) for _ in range(200)}

    assert lines - {None} <= {"wind", "birds", "rain", "fog", "sun"}
    assert None in lines
    assert system.weather in {"sun", "rain", "fog"}


@pytest.mark.unit
def test_atmosphere_sheltered_room(world_with_rooms, atmosphere_config):
    """Test that sheltered rooms hear only their own ambience."""
    world_with_rooms.player.room_id = "room_north"
    system = AtmosphereSystem(atmosphere_config, random.Random(5))
    snap = world_with_rooms.snapshot()

    lines = {system.poll(snap) for _ in range(200)}

    assert lines - {None} == {"drip"}


@pytest.mark.unit
def test_atmosphere_empty_config_is_silent(world_with_rooms):
    """Test that no configured lines means no flavour."""
    system = AtmosphereSystem(AtmosphereConfig(), random.Random(3))

    assert system.weather is None
    assert system.poll(world_with_rooms.snapshot()) is None


@pytest.mark.unit
def test_atmosphere_never_touches_world(world_with_rooms, atmosphere_config):
    """Test that polling leaves the world unchanged."""
    before = world_with_rooms.snapshot()
    system = AtmosphereSystem(atmosphere_config, random.Random(8))
    for _ in range(20):
        system.poll(before)

    assert world_with_rooms.snapshot() == before
