"""
Console presentation for the line-oriented game loop.

Consumes engine events and room snapshots; decides colour, screen
clearing and flavour placement. Never mutates engine state.
"""

from typing import Iterable

import click

from .engine.systems import Event
from .engine.world import Outcome

OUTCOME_STYLES: dict[Outcome, dict] = {
    Outcome.SUCCESS: {"fg": "green"},
    Outcome.INFO: {},
    Outcome.NOT_FOUND: {"fg": "yellow"},
    Outcome.LOCKED: {"fg": "red"},
    Outcome.INVALID_TARGET: {"fg": "yellow"},
    Outcome.UNRECOGNIZED: {"fg": "magenta"},
}


class ConsolePresenter:
    def __init__(self, clear_screen: bool = False, color: bool | None = None) -> None:
        self.clear_screen = clear_screen
        self.color = color
        self._last_room: str | None = None

    def echo(self, text: str = "", **style) -> None:
        click.echo(click.style(text, **style) if style else text, color=self.color)

    def show_banner(self, text: str) -> None:
        self.echo(text, bold=True)

    def show_flavor(self, text: str) -> None:
        self.echo(text, dim=True, italic=True)

    def render(self, events: Iterable[Event]) -> None:
        for ev in events:
            if ev["type"] == "room":
                self._render_room(ev)
            elif ev["type"] == "exit":
                self.echo(ev["text"], bold=True)
            else:
                self.echo(ev["text"], **OUTCOME_STYLES.get(ev.get("outcome"), {}))

    def _render_room(self, ev: Event) -> None:
        snapshot = ev["snapshot"]
        if self.clear_screen and self._last_room not in (None, snapshot.room_id):
            click.clear()
        self._last_room = snapshot.room_id

        title, _, rest = ev["text"].partition("\n")
        self.echo(title, fg="cyan", bold=True)
        if rest:
            self.echo(rest)
