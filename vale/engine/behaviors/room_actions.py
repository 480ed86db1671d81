# vale/engine/behaviors/room_actions.py
"""Room-action behaviors - stateful overrides for specific rooms' actions."""
from ..world import Outcome
from .base import ActionBehavior, ActionContext, ActionResult, behavior


@behavior(
    name="quest_reveal",
    description="Searching reveals a reward once, if a quest is underway and the light item is carried",
    defaults={
        "active_flag": "torch_quest_active",
        "complete_flag": "torch_quest_complete",
        "requires_item": "torch",
        "reward": "rusty key",
        "success": "Your torch pushes back the dark. Something glints between the stones: a {reward}!",
        "failure": "It is too dark to find anything here.",
        "exhausted": "You search again, but there is nothing more to find.",
    },
)
class QuestReveal(ActionBehavior):
    def on_action(self, ctx: ActionContext) -> ActionResult:
        config = ctx.config
        flags = ctx.flags

        if flags.is_set(config["complete_flag"]):
            return ActionResult.done(config["exhausted"], Outcome.INFO)

        if not flags.is_set(config["active_flag"]) or not ctx.has_item(config["requires_item"]):
            return ActionResult.done(config["failure"], Outcome.INVALID_TARGET)

        flags.raise_flag(config["complete_flag"])
        ctx.give_item(config["reward"])
        return ActionResult.done(config["success"].format(reward=config["reward"]))


@behavior(
    name="unlock_exit",
    description="Unlocks one of the room's exits with a key from the inventory",
    defaults={
        "direction": "north",
        "key": "key",
        "success": "You turn the {key} in the lock. The door creaks open.",
        "missing_key": "The door is locked. You need a {key}.",
        "already_open": "The door is already open.",
    },
)
class UnlockExit(ActionBehavior):
    def on_action(self, ctx: ActionContext) -> ActionResult:
        config = ctx.config
        direction = config["direction"]
        key = config["key"]

        if not ctx.room.is_locked(direction):
            return ActionResult.done(config["already_open"].format(key=key), Outcome.INFO)

        if not ctx.has_item(key):
            return ActionResult.done(config["missing_key"].format(key=key), Outcome.LOCKED)

        ctx.room.locked[direction] = False
        return ActionResult.done(config["success"].format(key=key))
