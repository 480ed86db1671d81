# vale/engine/engine.py
import logging
import random
from typing import TYPE_CHECKING, Callable, Dict, List

from .systems import (
    ActionEngine,
    CommandResolver,
    DialogueSystem,
    Event,
    GameContext,
    ParserConfig,
    RecipeBook,
    ResolvedCommand,
    Verb,
)
from .world import Outcome, RoomSnapshot, World

if TYPE_CHECKING:
    from .loader import WorldData

logger = logging.getLogger(__name__)

CommandHandler = Callable[[ResolvedCommand], List[Event]]

FAREWELL_TEXT = "Farewell, wanderer..."
UNKNOWN_TEXT = "Unknown command. Try 'help'."


class GameEngine:
    """
    Core game engine.

    - Holds a reference to the in-memory World.
    - Resolves one raw line per turn into events for the presentation layer.
    - While a conversation is active, lines go to the DialogueSystem instead.

    Uses modular systems for specific domains:
    - GameContext: Shared state, RNG and event helpers
    - CommandResolver: Words -> verb category + argument
    - ActionEngine: State transitions and narration
    - DialogueSystem: NPC conversations
    """

    def __init__(
        self,
        world: World,
        parser_config: ParserConfig | None = None,
        recipes: RecipeBook | None = None,
        room_overrides: Dict | None = None,
        item_behaviors: Dict | None = None,
        rng: random.Random | None = None,
        farewell: str = FAREWELL_TEXT,
    ) -> None:
        self.world = world
        self.farewell = farewell
        self.running = True

        # Initialize game context and systems
        self.ctx = GameContext(world, rng=rng)
        self.resolver = CommandResolver(parser_config)
        self.dialogue = DialogueSystem(self.ctx)
        self.ctx.dialogue = self.dialogue
        self.actions = ActionEngine(
            self.ctx,
            recipes=recipes,
            room_overrides=room_overrides,
            item_behaviors=item_behaviors,
        )

        self._handlers: Dict[Verb, CommandHandler] = {}
        self._register_command_handlers()

    @classmethod
    def from_data(cls, data: "WorldData", rng: random.Random | None = None) -> "GameEngine":
        """Build an engine from everything the loader produced."""
        return cls(
            data.world,
            parser_config=data.parser_config,
            recipes=data.recipes,
            room_overrides=data.room_overrides,
            item_behaviors=data.item_behaviors,
            rng=rng,
            farewell=data.farewell,
        )

    def _register_command_handlers(self) -> None:
        """
        Map every verb category to its handler.

        Handlers take the ResolvedCommand and return events.
        """
        actions = self.actions
        self._handlers = {
            Verb.HELP: self._help_handler,
            Verb.LOOK: lambda cmd: actions.look(cmd.argument),
            Verb.TALK: lambda cmd: actions.talk(cmd.argument),
            Verb.GO: lambda cmd: actions.move(cmd.argument),
            Verb.TAKE: lambda cmd: actions.take(cmd.argument),
            Verb.DROP: lambda cmd: actions.drop(cmd.argument),
            Verb.COMBINE: lambda cmd: actions.combine(cmd.argument),
            Verb.USE: lambda cmd: actions.use(cmd.argument),
            Verb.ROOM_ACTION: lambda cmd: actions.room_action(cmd.action or ""),
            Verb.INVENTORY: lambda cmd: actions.inventory(),
            Verb.EXIT: self._exit_handler,
            Verb.UNKNOWN: self._unknown_handler,
        }

    # ---------- Turn handling ----------

    def start(self) -> List[Event]:
        """Narrate the starting room; call once before the first turn."""
        return self.actions.enter_room()

    def handle_command(self, command: str) -> List[Event]:
        """
        Resolve one raw input line and return narration events.

        Blank lines (or lines of only stop words) produce no events.
        """
        if not self.running:
            return []

        if self.dialogue.is_active():
            return self.dialogue.handle_input(command)

        room = self.world.current_room
        resolved = self.resolver.resolve(command, room.actions)
        if resolved is None:
            return []

        handler = self._handlers[resolved.verb]
        try:
            return handler(resolved)
        except Exception as e:
            logger.exception("Error handling %r: %s", command, e)
            return [self.ctx.fail("Something went wrong executing that command.", Outcome.INFO)]

    def in_dialogue(self) -> bool:
        return self.dialogue.is_active()

    def snapshot(self) -> RoomSnapshot:
        """
        Snapshot of the current room for presentation.

        first_visit stays True for as long as the player remains in a room
        they entered for the first time.
        """
        room_id = self.world.player.room_id
        return self.world.snapshot(first_visit=room_id == self.actions.first_visit_room)

    # ---------- Handlers ----------

    def _help_handler(self, command: ResolvedCommand) -> List[Event]:
        return [self.ctx.msg(self.resolver.get_help(self.world.current_room.actions))]

    def _exit_handler(self, command: ResolvedCommand) -> List[Event]:
        self.running = False
        logger.info("Session ended by player")
        return [self.ctx.exit_event(self.farewell)]

    def _unknown_handler(self, command: ResolvedCommand) -> List[Event]:
        return [self.ctx.fail(UNKNOWN_TEXT, Outcome.UNRECOGNIZED)]
