# vale/engine/systems/atmosphere.py
"""
Atmosphere System

Polled once per turn by the presentation layer to add flavour:
- ambient lines (global, or specific to the player's room)
- weather that occasionally shifts and then persists

Reads the room snapshot only; it never touches world state. All
randomness comes from the RNG handed in at construction, so a fixed seed
reproduces the same sequence of lines.
"""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Dict, List, Optional

if TYPE_CHECKING:
    from ..world import RoomSnapshot

logger = logging.getLogger(__name__)


@dataclass
class AtmosphereConfig:
    ambient: List[str] = field(default_factory=list)
    room_ambient: Dict[str, List[str]] = field(default_factory=dict)
    weather: List[str] = field(default_factory=list)
    ambient_chance: float = 0.25
    weather_shift_chance: float = 0.1
    # Rooms where weather is never mentioned (caves, interiors)
    sheltered_rooms: List[str] = field(default_factory=list)


class AtmosphereSystem:
    def __init__(self, config: AtmosphereConfig, rng: random.Random) -> None:
        self.config = config
        self.rng = rng
        self.weather: str | None = config.weather[0] if config.weather else None

    def poll(self, snapshot: "RoomSnapshot") -> Optional[str]:
        """
        Return at most one flavour line for this turn.

        A weather shift takes precedence over ambient lines.
        """
        config = self.config

        if len(config.weather) > 1 and self.rng.random() < config.weather_shift_chance:
            choices = [w for w in config.weather if w != self.weather]
            self.weather = self.rng.choice(choices)
            logger.debug("Weather shifted to %r", self.weather)
            if snapshot.room_id not in config.sheltered_rooms:
                return self.weather

        lines = config.room_ambient.get(snapshot.room_id) or config.ambient
        if lines and self.rng.random() < config.ambient_chance:
            return self.rng.choice(lines)

        return None
