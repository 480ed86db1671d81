# vale/engine/__init__.py
"""The interactive-fiction engine: world model, interpreter and actions."""
from .engine import GameEngine
from .loader import WorldData, WorldDataError, load_world
from .world import Outcome, RoomSnapshot, World

__all__ = [
    "GameEngine",
    "WorldData",
    "WorldDataError",
    "load_world",
    "Outcome",
    "RoomSnapshot",
    "World",
]
