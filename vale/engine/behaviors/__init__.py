# vale/engine/behaviors/__init__.py
"""
Behaviors package.

Importing this package registers every built-in behavior with the
registry in base.py.
"""
from .base import (
    ActionBehavior,
    ActionContext,
    ActionResult,
    BehaviorBinding,
    behavior,
    get_all_behaviors,
    get_behavior,
    get_behavior_instance,
)
from . import item_uses, room_actions  # noqa: F401

__all__ = [
    "ActionBehavior",
    "ActionContext",
    "ActionResult",
    "BehaviorBinding",
    "behavior",
    "get_all_behaviors",
    "get_behavior",
    "get_behavior_instance",
]
