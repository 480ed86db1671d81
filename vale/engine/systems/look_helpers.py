"""
Look helpers: text formatting for rooms, inventories and the overview map.

Provides reusable formatters for:
- Full room descriptions (first visit and explicit look)
- Abbreviated re-entry narration
- Inventory listings
- The ASCII overview map shown when the map is used
"""

from typing import TYPE_CHECKING, Dict, List, Sequence

if TYPE_CHECKING:
    from ..world import RoomSnapshot, World, WorldRoom


def format_item_list(items: Sequence[str]) -> str:
    """Comma-joined, capitalized item names."""
    return ", ".join(item.capitalize() for item in items)


def format_room(snapshot: "RoomSnapshot") -> str:
    """
    Format the full description of a room.

    Lists items, points of interest, the occupant, exits (locked ones
    marked) and the room's own actions beneath the description.
    """
    lines = [snapshot.name, snapshot.description]

    if snapshot.items:
        lines.append(f"You see: {format_item_list(snapshot.items)}.")

    if snapshot.points_of_interest:
        lines.append(f"You notice: {', '.join(snapshot.points_of_interest)}.")

    if snapshot.npc:
        lines.append(f"{snapshot.npc} is here.")

    if snapshot.exits:
        exits = []
        for direction, view in snapshot.exits.items():
            exits.append(f"{direction} (locked)" if view.locked else direction)
        lines.append(f"Exits: {', '.join(exits)}.")

    if snapshot.actions:
        lines.append(f"You could: {', '.join(snapshot.actions)}.")

    return "\n".join(lines)


def format_return(snapshot: "RoomSnapshot") -> str:
    """Abbreviated narration for re-entering a room already seen."""
    return f"You return to the {snapshot.name}."


def format_inventory(items: Sequence[str]) -> str:
    if not items:
        return "Your pack is empty."
    return f"You are carrying: {format_item_list(items)}."


def _linked(a: "WorldRoom", b: "WorldRoom") -> bool:
    return b.id in a.exits.values() or a.id in b.exits.values()


def render_map(world: "World") -> str:
    """
    Render an ASCII overview of every positioned room.

    Rooms sit on a grid by their (column, row) position; adjacent rooms
    that share an exit are joined with '-' or '|'. The player's room is
    wrapped in asterisks.
    """
    placed: Dict[tuple[int, int], "WorldRoom"] = {
        room.position: room for room in world.rooms.values() if room.position is not None
    }
    if not placed:
        return "The map is blank."

    min_col = min(col for col, _ in placed)
    max_col = max(col for col, _ in placed)
    min_row = min(row for _, row in placed)
    max_row = max(row for _, row in placed)
    width = max(len(room.name) for room in placed.values()) + 4

    def label(room: "WorldRoom") -> str:
        mark = "*" if room.id == world.player.room_id else " "
        return f"[{mark}{room.name}{mark}]".center(width)

    lines: List[str] = []
    for row in range(min_row, max_row + 1):
        cells: List[str] = []
        for col in range(min_col, max_col + 1):
            room = placed.get((col, row))
            cells.append(label(room) if room else " " * width)
            if col < max_col:
                right = placed.get((col + 1, row))
                cells.append("-" if room and right and _linked(room, right) else " ")
        lines.append("".join(cells).rstrip())

        if row < max_row:
            links: List[str] = []
            for col in range(min_col, max_col + 1):
                room = placed.get((col, row))
                below = placed.get((col, row + 1))
                links.append(("|" if room and below and _linked(room, below) else " ").center(width))
                if col < max_col:
                    links.append(" ")
            link_line = "".join(links).rstrip()
            if link_line:
                lines.append(link_line)

    current = world.current_room
    lines.append("")
    if current.position is None:
        lines.append(f"You stand somewhere off the map: {current.name}.")
    else:
        lines.append("* marks where you stand.")

    return "\n".join(lines)
