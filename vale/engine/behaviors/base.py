# vale/engine/behaviors/base.py
"""
Base classes and decorators for room-action and item-use behaviors.

A behavior gives a room action (or an item's "use") stateful effects
beyond its canned narration. World data binds behaviors by name to a
(room, action) pair or to an item, with per-binding parameters merged
over the behavior's defaults.

Example behavior:

    from .base import behavior, ActionContext, ActionResult, ActionBehavior

    @behavior(
        name="ring_bell",
        description="Ringing the bell wakes the keeper once",
        defaults={"flag": "keeper_awake"},
    )
    class RingBell(ActionBehavior):
        def on_action(self, ctx: ActionContext) -> ActionResult:
            if ctx.flags.is_set(ctx.config["flag"]):
                return ActionResult.done("The bell is silent now.")
            ctx.flags.raise_flag(ctx.config["flag"])
            return ActionResult.done("The bell tolls.")
"""
from __future__ import annotations

import logging
from abc import ABC
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from ..world import Outcome

if TYPE_CHECKING:
    from ..world import QuestFlags, World, WorldRoom

logger = logging.getLogger(__name__)


# =============================================================================
# Action Context - passed to all behavior hooks
# =============================================================================


@dataclass
class ActionContext:
    """
    Context object passed to behavior hooks.

    Provides access to the room, world state and helpers for the common
    inventory and flag operations.
    """

    world: "World"
    room: "WorldRoom"
    name: str  # action name or item name that fired the hook
    config: dict[str, Any]  # defaults merged with binding params

    @property
    def flags(self) -> "QuestFlags":
        return self.world.quest_flags

    def has_item(self, item: str) -> bool:
        return self.world.player.has_item(item)

    def give_item(self, item: str) -> None:
        self.world.player.inventory.append(item)


# =============================================================================
# Action Result - returned from behavior hooks
# =============================================================================


@dataclass
class ActionResult:
    """
    Result from a behavior hook execution.

    handled=False tells the engine to fall back to the room's canned
    narration for the action.
    """

    handled: bool = False
    message: str | None = None
    outcome: Outcome = Outcome.SUCCESS

    @classmethod
    def nothing(cls) -> "ActionResult":
        """Return a result indicating no action was taken."""
        return cls(handled=False)

    @classmethod
    def done(cls, message: str, outcome: Outcome = Outcome.SUCCESS) -> "ActionResult":
        """Return a result indicating the hook produced the narration."""
        return cls(handled=True, message=message, outcome=outcome)


# =============================================================================
# Behavior Base Class
# =============================================================================


class ActionBehavior(ABC):
    """
    Base class for all behaviors.

    Subclass this and implement the hooks you need; both are optional.
    """

    # Metadata - set by the @behavior decorator
    name: str = "unnamed"
    description: str = ""
    defaults: dict[str, Any] = {}

    def on_action(self, ctx: ActionContext) -> ActionResult:
        """Called when the bound room action is performed."""
        return ActionResult.nothing()

    def on_use(self, ctx: ActionContext) -> ActionResult:
        """Called when the bound item is used from the inventory."""
        return ActionResult.nothing()


# =============================================================================
# Behavior Decorator - for registering behavior classes
# =============================================================================

# Global registry of all loaded behaviors
_BEHAVIOR_REGISTRY: dict[str, type[ActionBehavior]] = {}


def behavior(
    name: str,
    description: str = "",
    defaults: dict[str, Any] | None = None,
):
    """
    Decorator to register a behavior class.

    Usage:
        @behavior(name="unlock_exit", defaults={"direction": "north"})
        class UnlockExit(ActionBehavior):
            def on_action(self, ctx: ActionContext) -> ActionResult:
                ...
    """

    def decorator(cls: type[ActionBehavior]) -> type[ActionBehavior]:
        cls.name = name
        cls.description = description
        cls.defaults = defaults or {}

        if name in _BEHAVIOR_REGISTRY:
            logger.warning("Overwriting behavior '%s'", name)
        _BEHAVIOR_REGISTRY[name] = cls

        return cls

    return decorator


def get_behavior(name: str) -> type[ActionBehavior] | None:
    """Get a registered behavior class by name."""
    return _BEHAVIOR_REGISTRY.get(name)


def get_all_behaviors() -> dict[str, type[ActionBehavior]]:
    """Get all registered behavior classes."""
    return _BEHAVIOR_REGISTRY.copy()


def get_behavior_instance(name: str) -> ActionBehavior | None:
    """Get a new instance of a registered behavior."""
    cls = _BEHAVIOR_REGISTRY.get(name)
    return cls() if cls else None


@dataclass
class BehaviorBinding:
    """A behavior instance bound to one room action or item, with its params."""

    behavior: ActionBehavior
    params: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def create(cls, name: str, params: dict[str, Any] | None = None) -> "BehaviorBinding | None":
        instance = get_behavior_instance(name)
        if instance is None:
            return None
        return cls(behavior=instance, params=params or {})

    def config(self) -> dict[str, Any]:
        merged = dict(self.behavior.defaults)
        merged.update(self.params)
        return merged
