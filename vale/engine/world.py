# vale/engine/world.py
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Set


# Simple type aliases for clarity
RoomId = str
NpcId = str
ItemName = str
ActionName = str
Direction = str  # free-form: "north", "up", "through the arch", ...
FlagName = str


class Outcome(Enum):
    """Result classification attached to every narration event."""
    SUCCESS = "success"
    INFO = "info"
    NOT_FOUND = "not_found"  # item / exit / POI / person absent
    LOCKED = "locked"  # exit or door gated
    INVALID_TARGET = "invalid_target"  # action not valid here, recipe mismatch
    UNRECOGNIZED = "unrecognized"  # no verb category or room-action match


@dataclass
class DialogueOption:
    """One numbered line the player can pick while talking to an NPC."""
    prompt: str
    response: str
    # Quest flag raised when this option is chosen
    sets_flag: FlagName | None = None

    def is_farewell(self) -> bool:
        return "farewell" in self.prompt.lower()


@dataclass
class WorldNpc:
    """Runtime representation of a non-player character."""
    id: NpcId
    name: str
    greeting: str
    options: List[DialogueOption] = field(default_factory=list)


@dataclass
class ItemInfo:
    """Static description data for an item name."""
    name: ItemName
    description: str | None = None
    use_text: str | None = None  # canned narration for "use <item>"


@dataclass
class WorldRoom:
    """Runtime representation of a room in the world."""
    id: RoomId
    name: str
    description: str
    exits: Dict[Direction, RoomId] = field(default_factory=dict)
    # Absence of a direction means unlocked
    locked: Dict[Direction, bool] = field(default_factory=dict)
    # Ordered; duplicate names are distinct stack entries
    items: List[ItemName] = field(default_factory=list)
    points_of_interest: Dict[str, str] = field(default_factory=dict)
    actions: List[ActionName] = field(default_factory=list)
    action_results: Dict[ActionName, str] = field(default_factory=dict)
    npc_id: NpcId | None = None
    # Grid cell for the overview map (column, row)
    position: tuple[int, int] | None = None

    def is_locked(self, direction: Direction) -> bool:
        return self.locked.get(direction, False)

    def has_action(self, action: ActionName) -> bool:
        return action in self.actions


@dataclass
class PlayerState:
    """The single player's mutable state."""
    room_id: RoomId
    # Insertion order is display order
    inventory: List[ItemName] = field(default_factory=list)

    def has_item(self, item: ItemName) -> bool:
        return item in self.inventory


@dataclass
class QuestFlags:
    """
    Process-scoped quest booleans.

    Flags are declared once at world setup (all False) and only ever
    raised by dialogue or room-action triggers.
    """
    flags: Dict[FlagName, bool] = field(default_factory=dict)

    @classmethod
    def declare(cls, names: List[FlagName]) -> "QuestFlags":
        return cls(flags={name: False for name in names})

    def is_set(self, name: FlagName) -> bool:
        return self.flags.get(name, False)

    def raise_flag(self, name: FlagName) -> None:
        self.flags[name] = True


@dataclass(frozen=True)
class ExitView:
    target: RoomId
    target_name: str
    locked: bool


@dataclass(frozen=True)
class RoomSnapshot:
    """
    Read-only view of the current room handed to presentation code.

    Presentation layers decide colour, clearing and map art from this and
    must never reach back into the World to mutate it.
    """
    room_id: RoomId
    name: str
    description: str
    first_visit: bool
    items: tuple[ItemName, ...]
    points_of_interest: tuple[str, ...]
    npc: str | None
    exits: Dict[Direction, ExitView]
    actions: tuple[ActionName, ...]


@dataclass
class World:
    """
    In-memory world state.

    The room dict is the arena that owns every room; exits, the player's
    location and NPC references are ids into it, so the cyclic graph
    needs no back-pointers.
    """
    rooms: Dict[RoomId, WorldRoom]
    player: PlayerState
    npcs: Dict[NpcId, WorldNpc] = field(default_factory=dict)
    item_info: Dict[ItemName, ItemInfo] = field(default_factory=dict)
    quest_flags: QuestFlags = field(default_factory=QuestFlags)
    # Rooms already shown in full; never cleared
    visited: Set[RoomId] = field(default_factory=set)
    title: str = "Whispers of the Forgotten Vale"

    @property
    def current_room(self) -> WorldRoom:
        return self.rooms[self.player.room_id]

    def get_npc(self, room: WorldRoom) -> Optional[WorldNpc]:
        if room.npc_id is None:
            return None
        return self.npcs.get(room.npc_id)

    def snapshot(self, first_visit: bool = False) -> RoomSnapshot:
        """Build the presentation snapshot for the player's current room."""
        room = self.current_room
        npc = self.get_npc(room)
        exits = {
            direction: ExitView(
                target=target,
                target_name=self.rooms[target].name,
                locked=room.is_locked(direction),
            )
            for direction, target in room.exits.items()
        }
        return RoomSnapshot(
            room_id=room.id,
            name=room.name,
            description=room.description,
            first_visit=first_visit,
            items=tuple(room.items),
            points_of_interest=tuple(room.points_of_interest),
            npc=npc.name if npc else None,
            exits=exits,
            actions=tuple(room.actions),
        )
