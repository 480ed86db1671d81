# vale/engine/loader.py
"""
World loader - builds the in-memory World from YAML content.

Layout of a world_data directory:

    manifest.yaml      title, start room, quest flags, welcome/farewell text
    parser.yaml        stop words, verb synonym groups, fuzzy threshold
    recipes.yaml       unordered ingredient pairs -> crafted item
    atmosphere.yaml    ambient lines and weather (presentation only)
    rooms/*.yaml       one room per file
    npcs/*.yaml        one NPC per file
    items/*.yaml       one item per file

Files whose names start with "_" are skipped. Called once at startup;
every cross reference is checked before the first turn.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List

import yaml

from .behaviors import BehaviorBinding
from .systems import (
    DEFAULT_STOP_WORDS,
    DEFAULT_SYNONYMS,
    FUZZY_THRESHOLD,
    AtmosphereConfig,
    ParserConfig,
    Recipe,
    RecipeBook,
)
from .world import (
    DialogueOption,
    ItemInfo,
    ItemName,
    NpcId,
    PlayerState,
    QuestFlags,
    RoomId,
    World,
    WorldNpc,
    WorldRoom,
)

logger = logging.getLogger(__name__)

DEFAULT_WORLD_DATA_DIR = Path(__file__).parent.parent / "world_data"


class WorldDataError(ValueError):
    """Raised when world data is malformed or inconsistent."""

    def __init__(self, problems: List[str]) -> None:
        self.problems = problems
        super().__init__("Invalid world data:\n" + "\n".join(f"  - {p}" for p in problems))


@dataclass
class WorldData:
    """Everything the engine and presentation need, loaded once at startup."""
    world: World
    parser_config: ParserConfig
    recipes: RecipeBook
    room_overrides: Dict[tuple[RoomId, str], BehaviorBinding] = field(default_factory=dict)
    item_behaviors: Dict[ItemName, BehaviorBinding] = field(default_factory=dict)
    atmosphere: AtmosphereConfig = field(default_factory=AtmosphereConfig)
    welcome: str = ""
    farewell: str = "Farewell, wanderer..."


# =============================================================================
# YAML reading
# =============================================================================


def _read_yaml(path: Path) -> Any:
    try:
        with open(path, "r", encoding="utf-8") as f:
            return yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise WorldDataError([f"{path.name}: YAML syntax error: {e}"]) from e


def _read_optional(path: Path) -> Any:
    if not path.exists():
        return {}
    return _read_yaml(path) or {}


def _read_dir(directory: Path) -> List[dict]:
    documents = []
    if not directory.exists():
        return documents
    for yaml_file in sorted(directory.glob("**/*.yaml")):
        # Skip schema files
        if yaml_file.name.startswith("_"):
            continue
        data = _read_yaml(yaml_file)
        if data:
            documents.append(data)
    return documents


def load_world(world_data_dir: Path | str | None = None) -> WorldData:
    """
    Load and validate a world_data directory.

    Args:
        world_data_dir: Directory to read; defaults to the bundled vale/world_data

    Raises:
        WorldDataError: If any file is malformed or any reference dangles
    """
    world_data_dir = Path(world_data_dir) if world_data_dir else DEFAULT_WORLD_DATA_DIR
    if not world_data_dir.is_dir():
        raise WorldDataError([f"world data directory not found: {world_data_dir}"])

    logger.info("Loading world data from %s", world_data_dir)
    data = build_world_data(
        manifest=_read_optional(world_data_dir / "manifest.yaml"),
        rooms=_read_dir(world_data_dir / "rooms"),
        npcs=_read_dir(world_data_dir / "npcs"),
        items=_read_dir(world_data_dir / "items"),
        parser=_read_optional(world_data_dir / "parser.yaml"),
        recipes=_read_optional(world_data_dir / "recipes.yaml"),
        atmosphere=_read_optional(world_data_dir / "atmosphere.yaml"),
    )
    logger.info(
        "Loaded world: %d rooms, %d npcs, %d items, %d recipes",
        len(data.world.rooms),
        len(data.world.npcs),
        len(data.world.item_info),
        len(data.recipes),
    )
    return data


# =============================================================================
# Shape checks
# =============================================================================

_SHAPE_NAMES = {dict: "a mapping", list: "a list", (dict, list): "a mapping or a list"}


def _mappings(documents: Any, kind: str, problems: List[str]) -> List[dict]:
    """Keep the documents that are mappings, reporting the rest."""
    if not isinstance(documents, list):
        problems.append(f"{kind} documents must be a list, got {type(documents).__name__}")
        return []
    kept = []
    for doc in documents:
        if isinstance(doc, dict):
            kept.append(doc)
        else:
            problems.append(f"{kind} document must be a mapping, got {type(doc).__name__}")
    return kept


def _field(doc: dict, key: str, expected: type | tuple, owner: str, problems: List[str]) -> Any:
    """
    Read an optional field that must have a given container shape.

    Returns an empty container of the expected shape when the field is
    absent or has the wrong shape; the latter is reported.
    """
    empty = expected[0]() if isinstance(expected, tuple) else expected()
    value = doc.get(key)
    if value is None:
        return empty
    if not isinstance(value, expected):
        problems.append(f"{owner}: '{key}' must be {_SHAPE_NAMES[expected]}, got {type(value).__name__}")
        return empty
    return value


def _optional_document(document: Any, name: str, problems: List[str]) -> dict:
    if document is None:
        return {}
    if not isinstance(document, dict):
        problems.append(f"{name}: document must be a mapping, got {type(document).__name__}")
        return {}
    return document


# =============================================================================
# Building
# =============================================================================


def build_world_data(
    manifest: dict,
    rooms: List[dict],
    npcs: List[dict] | None = None,
    items: List[dict] | None = None,
    parser: dict | None = None,
    recipes: dict | None = None,
    atmosphere: dict | None = None,
) -> WorldData:
    """
    Build WorldData from already-parsed YAML documents.

    Collects every problem it finds and raises them together.
    """
    problems: List[str] = []

    manifest = _optional_document(manifest, "manifest", problems)
    parser = _optional_document(parser, "parser", problems)
    recipes = _optional_document(recipes, "recipes", problems)
    atmosphere = _optional_document(atmosphere, "atmosphere", problems)

    quest_flags = QuestFlags.declare(list(_field(manifest, "quest_flags", list, "manifest", problems)))

    npc_map = _build_npcs(_mappings(npcs or [], "npc", problems), quest_flags, problems)
    item_info, item_behaviors = _build_items(_mappings(items or [], "item", problems), problems)
    room_map, room_overrides = _build_rooms(_mappings(rooms, "room", problems), npc_map, problems)

    start_room = manifest.get("start_room")
    if not start_room:
        problems.append("manifest: start_room is required")
    elif start_room not in room_map:
        problems.append(f"manifest: start_room '{start_room}' does not exist")

    for (room_id, action), binding in room_overrides.items():
        config = binding.config()
        for key in ("active_flag", "complete_flag"):
            flag = config.get(key)
            if flag and flag not in quest_flags.flags:
                problems.append(f"room '{room_id}': '{action}' uses undeclared quest flag '{flag}'")

    recipe_book = _build_recipes(recipes, problems)
    inventory = _field(manifest, "inventory", list, "manifest", problems)
    parser_config = _build_parser_config(parser, problems)
    atmosphere_config = _build_atmosphere(atmosphere, problems)

    if problems:
        raise WorldDataError(problems)

    world = World(
        rooms=room_map,
        player=PlayerState(room_id=start_room, inventory=list(inventory)),
        npcs=npc_map,
        item_info=item_info,
        quest_flags=quest_flags,
        title=manifest.get("title", "Whispers of the Forgotten Vale"),
    )

    return WorldData(
        world=world,
        parser_config=parser_config,
        recipes=recipe_book,
        room_overrides=room_overrides,
        item_behaviors=item_behaviors,
        atmosphere=atmosphere_config,
        welcome=manifest.get("welcome", f"Welcome to {world.title}.").rstrip(),
        farewell=manifest.get("farewell", "Farewell, wanderer..."),
    )


def _build_npcs(documents: List[dict], quest_flags: QuestFlags, problems: List[str]) -> Dict[NpcId, WorldNpc]:
    npcs: Dict[NpcId, WorldNpc] = {}
    for doc in documents:
        npc_id = doc.get("id")
        if not npc_id:
            problems.append(f"npc without id: {doc.get('name', '?')}")
            continue

        options = []
        for opt in _field(doc, "options", list, f"npc '{npc_id}'", problems):
            if not isinstance(opt, dict):
                problems.append(f"npc '{npc_id}': dialogue option must be a mapping, got {type(opt).__name__}")
                continue
            flag = opt.get("sets_flag")
            if flag and flag not in quest_flags.flags:
                problems.append(f"npc '{npc_id}': option sets undeclared quest flag '{flag}'")
            options.append(DialogueOption(
                prompt=str(opt.get("prompt", "")),
                response=str(opt.get("response", "")),
                sets_flag=flag,
            ))

        if options and not any(option.is_farewell() for option in options):
            problems.append(f"npc '{npc_id}': dialogue has no farewell option")

        npcs[npc_id] = WorldNpc(
            id=npc_id,
            name=doc.get("name", npc_id),
            greeting=doc.get("greeting", "..."),
            options=options,
        )
    return npcs


def _build_items(documents: List[dict], problems: List[str]) -> tuple[Dict[ItemName, ItemInfo], Dict[ItemName, BehaviorBinding]]:
    info: Dict[ItemName, ItemInfo] = {}
    behaviors: Dict[ItemName, BehaviorBinding] = {}
    for doc in documents:
        name = doc.get("name")
        if not name:
            problems.append("item without name")
            continue

        behavior_name = doc.get("use_behavior")
        info[name] = ItemInfo(
            name=name,
            description=doc.get("description"),
            use_text=doc.get("use_text"),
        )
        if behavior_name:
            params = _field(doc, "params", dict, f"item '{name}'", problems)
            binding = BehaviorBinding.create(behavior_name, params)
            if binding is None:
                problems.append(f"item '{name}': unknown behavior '{behavior_name}'")
            else:
                behaviors[name] = binding
    return info, behaviors


def _build_rooms(
    documents: List[dict],
    npcs: Dict[NpcId, WorldNpc],
    problems: List[str],
) -> tuple[Dict[RoomId, WorldRoom], Dict[tuple[RoomId, str], BehaviorBinding]]:
    rooms: Dict[RoomId, WorldRoom] = {}
    overrides: Dict[tuple[RoomId, str], BehaviorBinding] = {}

    for doc in documents:
        room_id = doc.get("id")
        if not room_id:
            problems.append(f"room without id: {doc.get('name', '?')}")
            continue
        if room_id in rooms:
            problems.append(f"room '{room_id}' defined twice")
            continue

        owner = f"room '{room_id}'"
        exits = _field(doc, "exits", dict, owner, problems)
        items = _field(doc, "items", list, owner, problems)
        points_of_interest = _field(doc, "points_of_interest", dict, owner, problems)
        locked = _field(doc, "locked", (dict, list), owner, problems)
        if isinstance(locked, list):
            locked = {direction: True for direction in locked}

        actions: List[str] = []
        action_results: Dict[str, str] = {}
        for entry in _field(doc, "actions", list, owner, problems):
            if isinstance(entry, str):
                actions.append(entry)
                continue
            if not isinstance(entry, dict):
                problems.append(f"{owner}: action must be a name or a mapping, got {type(entry).__name__}")
                continue
            name = entry.get("name")
            if not name:
                problems.append(f"room '{room_id}': action without name")
                continue
            actions.append(name)
            if entry.get("result"):
                action_results[name] = entry["result"]
            behavior_name = entry.get("behavior")
            if behavior_name:
                params = _field(entry, "params", dict, f"{owner} action '{name}'", problems)
                binding = BehaviorBinding.create(behavior_name, params)
                if binding is None:
                    problems.append(f"{owner}: unknown behavior '{behavior_name}'")
                else:
                    overrides[(room_id, name)] = binding

        position = doc.get("position")
        if position is not None and not (isinstance(position, list) and len(position) == 2):
            problems.append(f"{owner}: 'position' must be a [column, row] pair")
            position = None

        rooms[room_id] = WorldRoom(
            id=room_id,
            name=doc.get("name", room_id),
            description=str(doc.get("description", "")).strip(),
            exits=dict(exits),
            locked={direction: bool(flag) for direction, flag in locked.items()},
            items=list(items),
            points_of_interest=dict(points_of_interest),
            actions=actions,
            action_results=action_results,
            npc_id=doc.get("npc"),
            position=tuple(position) if position else None,
        )

    # Cross references
    for room in rooms.values():
        for direction, target in room.exits.items():
            if not isinstance(target, str) or target not in rooms:
                problems.append(f"room '{room.id}': exit '{direction}' leads to unknown room '{target}'")
        for direction in room.locked:
            if direction not in room.exits:
                problems.append(f"room '{room.id}': locked direction '{direction}' is not an exit")
        if room.npc_id and room.npc_id not in npcs:
            problems.append(f"room '{room.id}': unknown npc '{room.npc_id}'")

    for (room_id, action), binding in overrides.items():
        if binding.behavior.name == "unlock_exit":
            direction = binding.config().get("direction")
            if direction not in rooms[room_id].exits:
                problems.append(f"room '{room_id}': '{action}' unlocks missing exit '{direction}'")

    return rooms, overrides


def _build_recipes(document: dict, problems: List[str]) -> RecipeBook:
    book = RecipeBook()
    for entry in _field(document, "recipes", list, "recipes", problems):
        if not isinstance(entry, dict):
            problems.append(f"recipe must be a mapping, got {type(entry).__name__}")
            continue
        ingredients = entry.get("items") or []
        result = entry.get("result")
        if not isinstance(ingredients, list) or len(ingredients) != 2 or not result:
            problems.append(f"recipe needs exactly two items and a result: {entry}")
            continue
        book.add(Recipe(first=ingredients[0], second=ingredients[1], result=result))
    return book


def _build_parser_config(document: dict, problems: List[str]) -> ParserConfig:
    synonyms = dict(DEFAULT_SYNONYMS)
    for verb, words in _field(document, "synonyms", dict, "parser", problems).items():
        if not isinstance(words, list):
            problems.append(f"parser: synonyms for '{verb}' must be a list")
            continue
        synonyms[verb] = tuple(str(word) for word in words)

    stop_words = _field(document, "stop_words", list, "parser", problems) if "stop_words" in document else None
    return ParserConfig(
        stop_words=frozenset(stop_words) if stop_words is not None else DEFAULT_STOP_WORDS,
        synonyms=synonyms,
        fuzzy_threshold=int(document.get("fuzzy_threshold", FUZZY_THRESHOLD)),
    )


def _build_atmosphere(document: dict, problems: List[str]) -> AtmosphereConfig:
    room_lines = _field(document, "rooms", dict, "atmosphere", problems)
    return AtmosphereConfig(
        ambient=list(_field(document, "ambient", list, "atmosphere", problems)),
        room_ambient={room: list(lines) for room, lines in room_lines.items() if isinstance(lines, list)},
        weather=list(_field(document, "weather", list, "atmosphere", problems)),
        ambient_chance=float(document.get("ambient_chance", 0.25)),
        weather_shift_chance=float(document.get("weather_shift_chance", 0.1)),
        sheltered_rooms=list(_field(document, "sheltered_rooms", list, "atmosphere", problems)),
    )


def get_behavior_names(data: WorldData) -> List[str]:
    """Names of every behavior the loaded world binds, for summaries."""
    names = {binding.behavior.name for binding in data.room_overrides.values()}
    names.update(binding.behavior.name for binding in data.item_behaviors.values())
    return sorted(names)
