"""
Vale CLI - Command line interface for Whispers of the Forgotten Vale.

Usage:
    vale play          Play the game in this terminal
    vale check         Validate world data and print a summary
    vale map           Print the overview map of the world
"""

import logging
import random
import sys

import click

from vale import __version__, config
from vale.console import ConsolePresenter
from vale.engine import GameEngine, WorldDataError, load_world
from vale.engine.loader import WorldData, get_behavior_names
from vale.engine.systems import AtmosphereSystem
from vale.engine.systems.look_helpers import render_map

logger = logging.getLogger(__name__)

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR"]


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def _load_or_exit(world: str | None) -> WorldData:
    try:
        return load_world(world)
    except WorldDataError as e:
        click.echo(click.style("⚠️ World data could not be loaded:", fg="red", bold=True), err=True)
        for problem in e.problems:
            click.echo(f"  - {problem}", err=True)
        sys.exit(1)


world_option = click.option(
    "--world",
    "-w",
    default=config.WORLD_DATA_DIR,
    type=click.Path(file_okay=False),
    help="world_data directory (defaults to the bundled vale)",
)


@click.group()
@click.version_option(version=__version__, prog_name="vale")
@click.option(
    "--log-level",
    default=config.LOG_LEVEL,
    type=click.Choice(LOG_LEVELS, case_sensitive=False),
    help="Logging level (logs go to stderr)",
)
def main(log_level: str):
    """Whispers of the Forgotten Vale - a text adventure."""
    _configure_logging(log_level)


@main.command()
@world_option
@click.option("--seed", "-s", default=config.SEED, type=int, help="Seed for atmospheric randomness")
@click.option("--clear/--no-clear", default=config.CLEAR_SCREEN, help="Clear the screen when changing rooms")
@click.option("--atmosphere/--no-atmosphere", default=config.ATMOSPHERE_ENABLED, help="Show ambient flavour text")
def play(world: str | None, seed: int | None, clear: bool, atmosphere: bool):
    """Play the game, one command per line.

    The session ends on 'exit' (or 'quit') or at end of input.
    """
    data = _load_or_exit(world)
    rng = random.Random(seed)
    engine = GameEngine.from_data(data, rng=rng)
    ambience = AtmosphereSystem(data.atmosphere, engine.ctx.rng) if atmosphere else None
    presenter = ConsolePresenter(clear_screen=clear)

    logger.info("Starting session in %s (seed=%s)", data.world.player.room_id, seed)
    presenter.show_banner(data.welcome)
    presenter.render(engine.start())

    stdin = click.get_text_stream("stdin")
    while engine.running:
        click.echo()
        click.echo(config.PROMPT, nl=False)
        line = stdin.readline()
        if not line:
            # End of input
            click.echo()
            break

        events = engine.handle_command(line.rstrip("\r\n"))
        presenter.render(events)

        if ambience and events and engine.running and not engine.in_dialogue():
            flavor = ambience.poll(engine.snapshot())
            if flavor:
                presenter.show_flavor(flavor)


@main.command()
@world_option
def check(world: str | None):
    """Validate world data and print a summary."""
    data = _load_or_exit(world)
    w = data.world

    click.echo(click.style(f"✅ {w.title}", fg="green", bold=True))
    click.echo(f"Rooms:      {len(w.rooms)}")
    click.echo(f"Items:      {len(w.item_info)} described, "
               f"{sum(len(r.items) for r in w.rooms.values())} placed")
    click.echo(f"NPCs:       {len(w.npcs)}")
    click.echo(f"Recipes:    {len(data.recipes)}")
    click.echo(f"Behaviors:  {', '.join(get_behavior_names(data)) or 'none'}")
    click.echo(f"Start room: {w.player.room_id}")


@main.command(name="map")
@world_option
def show_map(world: str | None):
    """Print the overview map with the starting room marked."""
    data = _load_or_exit(world)
    click.echo(render_map(data.world))


if __name__ == "__main__":
    main()
