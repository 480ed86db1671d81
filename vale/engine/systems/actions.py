# vale/engine/systems/actions.py
"""
ActionEngine - applies resolved commands to the world.

Each transition either fully applies its mutation and narrates success,
or narrates a failure and leaves the world untouched. Nothing here
raises for bad player input.

Room actions consult a registry keyed by (room id, action name) for a
stateful behavior before falling back to the room's canned narration.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Dict, List, Sequence

from ..behaviors import ActionContext, BehaviorBinding
from ..world import Outcome
from .look_helpers import format_inventory, format_return, format_room
from .recipes import RecipeBook

if TYPE_CHECKING:
    from ..world import ItemName, RoomId, World, WorldRoom
    from .context import Event, GameContext

logger = logging.getLogger(__name__)

OverrideKey = tuple["RoomId", str]


class ActionEngine:
    """
    State transitions for the single player.

    Uses:
    - RecipeBook for combine
    - Room-action bindings: (room id, action) -> behavior
    - Item-use bindings: item name -> behavior
    """

    def __init__(
        self,
        ctx: "GameContext",
        recipes: RecipeBook | None = None,
        room_overrides: Dict[OverrideKey, BehaviorBinding] | None = None,
        item_behaviors: Dict["ItemName", BehaviorBinding] | None = None,
    ) -> None:
        self.ctx = ctx
        self.recipes = recipes or RecipeBook()
        self.room_overrides = room_overrides or {}
        self.item_behaviors = item_behaviors or {}
        # Room whose latest entry was its first visit
        self.first_visit_room: "RoomId | None" = None

    @property
    def world(self) -> "World":
        return self.ctx.world

    # ---------- Room rendering ----------

    def enter_room(self) -> List["Event"]:
        """
        Narrate arrival in the player's current room.

        The first arrival shows the full description and records the room
        as visited; later arrivals get the short "return" line.
        """
        world = self.world
        room_id = world.player.room_id
        first_visit = room_id not in world.visited
        world.visited.add(room_id)
        self.first_visit_room = room_id if first_visit else None

        snapshot = world.snapshot(first_visit=first_visit)
        text = format_room(snapshot) if first_visit else format_return(snapshot)
        return [self.ctx.room_event(text, snapshot)]

    def describe_room(self) -> List["Event"]:
        snapshot = self.world.snapshot(first_visit=False)
        return [self.ctx.room_event(format_room(snapshot), snapshot)]

    # ---------- Movement ----------

    def move(self, direction: str) -> List["Event"]:
        room = self.world.current_room

        if direction not in room.exits:
            return [self.ctx.fail("You can't go that way.", Outcome.NOT_FOUND)]

        if room.is_locked(direction):
            return [self.ctx.fail("The way is locked.", Outcome.LOCKED)]

        self.world.player.room_id = room.exits[direction]
        logger.debug("Moved %s: %s -> %s", direction, room.id, self.world.player.room_id)
        return self.enter_room()

    # ---------- Inventory transfer ----------

    def take(self, item: str) -> List["Event"]:
        if not item:
            return [self.ctx.fail("Take what?", Outcome.UNRECOGNIZED)]

        room = self.world.current_room
        if item not in room.items:
            return [self.ctx.fail("There is no such item here.", Outcome.NOT_FOUND)]

        # list.remove drops the first matching entry only
        room.items.remove(item)
        self.world.player.inventory.append(item)
        return [self.ctx.msg(f"You take the {item}.", Outcome.SUCCESS)]

    def drop(self, item: str) -> List["Event"]:
        if not item:
            return [self.ctx.fail("Drop what?", Outcome.UNRECOGNIZED)]

        inventory = self.world.player.inventory
        if item not in inventory:
            return [self.ctx.fail("You don't have it.", Outcome.NOT_FOUND)]

        inventory.remove(item)
        self.world.current_room.items.append(item)
        return [self.ctx.msg(f"You drop the {item}.", Outcome.SUCCESS)]

    def inventory(self) -> List["Event"]:
        return [self.ctx.msg(format_inventory(self.world.player.inventory))]

    # ---------- Look ----------

    def look(self, target: str = "") -> List["Event"]:
        """
        Look around, or at a carried item or a point of interest.

        Carried items are checked before the room's points of interest.
        """
        if not target:
            return self.describe_room()

        if self.world.player.has_item(target):
            info = self.world.item_info.get(target)
            if info and info.description:
                return [self.ctx.msg(info.description)]
            return [self.ctx.msg(f"It's an ordinary {target}. Nothing special about it.")]

        room = self.world.current_room
        if target in room.points_of_interest:
            return [self.ctx.msg(room.points_of_interest[target])]

        return [self.ctx.fail("You cannot see that here.", Outcome.NOT_FOUND)]

    # ---------- Talk ----------

    def talk(self, name: str = "") -> List["Event"]:
        room = self.world.current_room
        npc = self.world.get_npc(room)
        if npc is None:
            return [self.ctx.fail("There is no one here to talk to.", Outcome.NOT_FOUND)]

        if name and name.lower() != npc.name.lower():
            return [self.ctx.fail("There is no such person here.", Outcome.NOT_FOUND)]

        return self.ctx.dialogue.start(npc)

    # ---------- Crafting ----------

    def combine(self, argument: str) -> List["Event"]:
        """
        Combine two carried items named in the argument.

        Item names may span several words, so every split point of the
        argument is tried; order does not matter.
        """
        pair = self._find_carried_pair(argument.split())
        if pair is None:
            return [self.ctx.fail("You lack the materials.", Outcome.NOT_FOUND)]

        first, second, result = pair
        if result is None:
            return [self.ctx.fail("The items refuse to join.", Outcome.INVALID_TARGET)]

        inventory = self.world.player.inventory
        inventory.remove(first)
        inventory.remove(second)
        inventory.append(result)
        logger.debug("Crafted %s from %s + %s", result, first, second)
        return [self.ctx.msg(
            f"You combine the {first} and the {second} into a {result}.",
            Outcome.SUCCESS,
        )]

    def _find_carried_pair(self, words: Sequence[str]) -> tuple[str, str, str | None] | None:
        """
        Pick the split of words into two carried item names.

        A split with a recipe wins over one without; returns None when no
        split names two carried items.
        """
        inventory = self.world.player.inventory
        fallback = None
        for index in range(1, len(words)):
            first = " ".join(words[:index])
            second = " ".join(words[index:])
            if first == second:
                carried = inventory.count(first) >= 2
            else:
                carried = first in inventory and second in inventory
            if not carried:
                continue
            result = self.recipes.lookup(first, second)
            if result is not None:
                return first, second, result
            if fallback is None:
                fallback = (first, second, None)
        return fallback

    # ---------- Use ----------

    def use(self, argument: str) -> List["Event"]:
        """
        Use a carried item, or perform a room action by name.

        Names not in the inventory fall through to room-action dispatch,
        which needs the exact action name.
        """
        if not argument:
            return [self.ctx.fail("Use what?", Outcome.UNRECOGNIZED)]

        if self.world.player.has_item(argument):
            return self.use_item(argument)

        return self.room_action(argument)

    def use_item(self, item: str) -> List["Event"]:
        room = self.world.current_room
        binding = self.item_behaviors.get(item)
        if binding is not None:
            result = binding.behavior.on_use(
                ActionContext(self.world, room, item, binding.config())
            )
            if result.handled:
                return [self.ctx.msg(result.message or "", result.outcome)]

        info = self.world.item_info.get(item)
        if info and info.use_text:
            return [self.ctx.msg(info.use_text, Outcome.SUCCESS)]

        return [self.ctx.fail(f"You can't think of a use for the {item}.", Outcome.INVALID_TARGET)]

    def room_action(self, action: str) -> List["Event"]:
        room = self.world.current_room
        if not room.has_action(action):
            return [self.ctx.fail("You can't do that here.", Outcome.INVALID_TARGET)]

        binding = self.room_overrides.get((room.id, action))
        if binding is not None:
            result = binding.behavior.on_action(
                ActionContext(self.world, room, action, binding.config())
            )
            if result.handled:
                logger.debug("Override %s handled %s in %s", binding.behavior.name, action, room.id)
                return [self.ctx.msg(result.message or "", result.outcome)]

        return [self.ctx.msg(self._canned_result(room, action), Outcome.SUCCESS)]

    @staticmethod
    def _canned_result(room: "WorldRoom", action: str) -> str:
        return room.action_results.get(action, f"You {action}.")
