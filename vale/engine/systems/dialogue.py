# vale/engine/systems/dialogue.py
"""
DialogueSystem - numbered-option conversations with NPCs.

While a conversation is active every input line is a choice:
- a valid number echoes that option's response (and may raise a quest flag)
- anything else narrates confusion and shows the options again
- only an option whose prompt contains "farewell" ends the conversation
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, List, Optional

from ..world import Outcome

if TYPE_CHECKING:
    from ..world import WorldNpc
    from .context import Event, GameContext

logger = logging.getLogger(__name__)


def parse_choice(raw: str, option_count: int) -> Optional[int]:
    """
    Parse a 1-based menu choice.

    Returns:
        Zero-based option index, or None for non-numeric or out-of-range input
    """
    text = raw.strip()
    if not (text.isascii() and text.isdigit()):
        return None
    number = int(text)
    if 1 <= number <= option_count:
        return number - 1
    return None


def format_options(npc: "WorldNpc") -> str:
    return "\n".join(
        f"  {number}. {option.prompt}" for number, option in enumerate(npc.options, start=1)
    )


@dataclass
class DialogueSession:
    npc: "WorldNpc"
    turns: int = 0


class DialogueSystem:
    """
    Owns the single active conversation, if any.

    Usage:
        events = dialogue.start(npc)
        while dialogue.is_active():
            events = dialogue.handle_input(read_line())
    """

    def __init__(self, ctx: "GameContext") -> None:
        self.ctx = ctx
        self.session: DialogueSession | None = None

    def is_active(self) -> bool:
        return self.session is not None

    def start(self, npc: "WorldNpc") -> List["Event"]:
        """Greet the player once and present the numbered options."""
        events = [self.ctx.msg(f'{npc.name}: "{npc.greeting}"')]
        if not npc.options:
            return events

        self.session = DialogueSession(npc=npc)
        logger.debug("Dialogue started with %s", npc.id)
        events.append(self._options_event(npc))
        return events

    def handle_input(self, raw: str) -> List["Event"]:
        """Resolve one line typed while the conversation is active."""
        if self.session is None:
            return []

        npc = self.session.npc
        index = parse_choice(raw, len(npc.options))
        if index is None:
            return [
                self.ctx.fail(
                    f"{npc.name} looks at you, puzzled. "
                    f"(Choose a number from 1 to {len(npc.options)}.)",
                    Outcome.UNRECOGNIZED,
                ),
                self._options_event(npc),
            ]

        self.session.turns += 1
        option = npc.options[index]
        events = [self.ctx.msg(f'{npc.name}: "{option.response}"', Outcome.SUCCESS)]

        if option.sets_flag:
            self.ctx.world.quest_flags.raise_flag(option.sets_flag)
            logger.info("Quest flag raised by dialogue: %s", option.sets_flag)

        if option.is_farewell():
            logger.debug("Dialogue with %s ended after %d turns", npc.id, self.session.turns)
            self.session = None
            return events

        events.append(self._options_event(npc))
        return events

    def _options_event(self, npc: "WorldNpc") -> "Event":
        return self.ctx.msg(format_options(npc), payload={"dialogue_options": True})
