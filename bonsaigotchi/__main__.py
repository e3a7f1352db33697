"""Entry point for ``python -m bonsaigotchi``.

Loads the default YAML config, restores (or creates) a pet, applies any
purchases and actions given on the command line, then runs the tick loop
headless while logging every event the core publishes.
"""

from __future__ import annotations

import argparse
import functools
import pathlib

import structlog

from bonsaigotchi.errors import ConfigurationError
from bonsaigotchi.logging_config import configure_logging
from bonsaigotchi.simulation.config import SimulationConfig
from bonsaigotchi.simulation.engine import SimulationEngine
from bonsaigotchi.simulation.events import Event, Notification, StatChanged
from bonsaigotchi.simulation.snapshot import load_or_new, new_game, write_snapshot

_DEFAULT_CONFIG = (
    pathlib.Path(__file__).resolve().parent.parent / "config" / "default.yaml"
)

log = structlog.get_logger("bonsaigotchi")


def _log_event(event: Event) -> None:
    if isinstance(event, StatChanged):
        return  # one per stat per tick; too chatty for the console
    if isinstance(event, Notification):
        log.info(event.title, message=event.message, severity=event.severity.value)
        return
    log.info(type(event).__name__, **vars(event))


def main() -> None:
    """Parse CLI args, build the engine, run the simulation."""
    parser = argparse.ArgumentParser(
        prog="bonsaigotchi",
        description="BonsaiGotchi - virtual bonsai life simulation (headless)",
    )
    parser.add_argument(
        "-c",
        "--config",
        type=pathlib.Path,
        default=_DEFAULT_CONFIG,
        help="Path to YAML config file (default: config/default.yaml)",
    )
    parser.add_argument(
        "--ticks",
        type=int,
        default=60,
        help="Number of ticks to simulate (default: 60)",
    )
    parser.add_argument(
        "--snapshot",
        type=pathlib.Path,
        default=None,
        help="Snapshot file to resume from and save to",
    )
    parser.add_argument(
        "-a",
        "--action",
        action="append",
        default=[],
        help="Action to perform before ticking, e.g. water or feed:vegetables "
        "(repeatable)",
    )
    parser.add_argument(
        "-b",
        "--buy",
        action="append",
        default=[],
        help="Item to buy before acting, e.g. vegetables (repeatable)",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        help="Log level (default: INFO)",
    )
    args = parser.parse_args()

    configure_logging(args.log_level)
    config = SimulationConfig.from_yaml(args.config)

    if args.snapshot is not None and args.snapshot.exists():
        pet, environment = load_or_new(args.snapshot, config)
    else:
        pet, environment = new_game(config)

    save_hook = None
    if args.snapshot is not None:
        save_hook = functools.partial(write_snapshot, args.snapshot)

    engine = SimulationEngine(
        config=config,
        game=(pet, environment),
        save_hook=save_hook,
    )
    engine.bus.subscribe(_log_event)

    for item in args.buy:
        try:
            engine.actions.buy(item)
        except ConfigurationError as exc:
            parser.error(str(exc))

    for name in args.action:
        try:
            engine.actions.perform(name)
        except ConfigurationError as exc:
            parser.error(str(exc))

    engine.run(ticks=args.ticks)

    derived = engine.derived
    log.info(
        "simulation finished",
        ticks=engine.tick,
        level=pet.level,
        mood=derived.mood.name,
        health=derived.health.value,
        stage=derived.growth_stage.name,
        state=derived.current_state.value,
    )
    if args.snapshot is not None:
        write_snapshot(args.snapshot, engine.snapshot())


if __name__ == "__main__":
    main()
