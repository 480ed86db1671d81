# vale/engine/systems/context.py
"""
GameContext - Shared context object for all game systems.

Provides:
- Access to World state (rooms, player, quest flags, visited set)
- The seeded random source used by presentation collaborators
- Event construction helpers

Process-scoped state is created once at world setup and handed to each
system here instead of living in module globals, so tests can build a
fresh context with a fixed seed.
"""

from __future__ import annotations

import random
from typing import TYPE_CHECKING, Any, Dict

from ..world import Outcome

if TYPE_CHECKING:
    from ..world import RoomSnapshot, World


# Type alias for events (narration dicts handed to the presentation layer)
Event = Dict[str, Any]


class GameContext:
    """
    Shared context object passed to all game systems.

    Usage:
        ctx = GameContext(world, rng=random.Random(7))
        ctx.dialogue = DialogueSystem(ctx)  # Register for cross-system access
        actions = ActionEngine(ctx, recipes, overrides)
    """

    def __init__(self, world: "World", rng: random.Random | None = None) -> None:
        self.world = world
        self.rng = rng or random.Random()

        # System reference (set by GameEngine during initialization)
        self.dialogue: Any = None  # DialogueSystem

    # ---------- Event Construction Helpers ----------

    def msg(
        self,
        text: str,
        outcome: Outcome = Outcome.INFO,
        *,
        payload: dict | None = None,
    ) -> Event:
        """Create a narration event."""
        ev: Event = {
            "type": "message",
            "outcome": outcome,
            "text": text,
        }
        if payload:
            ev["payload"] = payload
        return ev

    def fail(self, text: str, outcome: Outcome) -> Event:
        """Create a failure narration; failures never mutate state."""
        return self.msg(text, outcome)

    def room_event(self, text: str, snapshot: "RoomSnapshot") -> Event:
        """Create a room-render event carrying the presentation snapshot."""
        return {
            "type": "room",
            "outcome": Outcome.INFO,
            "text": text,
            "snapshot": snapshot,
        }

    def exit_event(self, text: str) -> Event:
        return {"type": "exit", "outcome": Outcome.INFO, "text": text}
