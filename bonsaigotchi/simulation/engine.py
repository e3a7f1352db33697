"""SimulationEngine — the main tick loop.

Owns the pet, the environment and the event bus, and advances them in
a fixed order each tick:

1. Advance the environment clock (season, weather, day period)
2. Decay stats, apply condition damage, age the pet
3. Pay the daily reward and evaluate care on day rollover, grant
   passive experience
4. Commit level-ups, step the health monitor
5. Re-derive state and publish change events
6. Hand a snapshot to the auto-save hook when one is due

Everything runs on the caller's thread.  Hosts must serialise ``step``
and action calls onto one loop; neither is safe to call concurrently.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import InitVar, dataclass, field
from typing import Any

import numpy as np
import structlog
from numpy.random import Generator

from bonsaigotchi.care.actions import ActionProcessor
from bonsaigotchi.care.classifier import DerivedState
from bonsaigotchi.pet.bonsai import Bonsai
from bonsaigotchi.pet.decay import apply_condition_damage, apply_decay
from bonsaigotchi.simulation.config import SimulationConfig
from bonsaigotchi.simulation.events import EventBus, SeasonChanged
from bonsaigotchi.simulation.snapshot import new_game, to_snapshot
from bonsaigotchi.simulation.tracker import StateTracker
from bonsaigotchi.world.environment import Environment

log = structlog.get_logger(__name__)

SaveHook = Callable[[dict[str, Any]], None]

_STREAK_MILESTONE_DAYS = 5
_GOOD_DAY_XP = 10
DAILY_REWARD_BILLS = 1


@dataclass
class SimulationEngine:
    """Drives the simulation forward tick by tick.

    Attributes:
        config: Loaded simulation configuration.
        game: Optional (pet, environment) pair to resume, such as the
            result of ``load_or_new``; a new game is built from config
            if omitted.
        pet: The simulated bonsai.
        environment: Clock and weather.
        bus: Event bus every change is published on.
        save_hook: Host callback receiving auto-save snapshots.  Errors
            it raises propagate out of ``step``.
        rng: Master seeded random generator.
        actions: Processor for player actions on ``pet``.
        tracker: Derived-state diffing shared with ``actions``.
        tick: Current tick count.
    """

    config: SimulationConfig
    game: InitVar[tuple[Bonsai, Environment] | None] = None
    pet: Bonsai = field(init=False)
    environment: Environment = field(init=False)
    bus: EventBus = field(default_factory=EventBus)
    save_hook: SaveHook | None = None
    rng: Generator = field(init=False)
    actions: ActionProcessor = field(init=False)
    tracker: StateTracker = field(init=False)
    tick: int = 0

    def __post_init__(self, game: tuple[Bonsai, Environment] | None) -> None:
        """Take over the given game, or start a new one from config."""
        self.rng = np.random.default_rng(self.config.seed)
        if game is None:
            game = new_game(self.config)
        self.pet, self.environment = game
        self.tracker = StateTracker(self.pet, self.bus)
        self.actions = ActionProcessor(
            pet=self.pet,
            environment=self.environment,
            tracker=self.tracker,
            config=self.config,
            rng=self.rng,
        )

    @property
    def derived(self) -> DerivedState:
        """Derived state as of the last tick or action."""
        return self.tracker.derived

    def step(self) -> None:
        """Advance the simulation by one tick."""
        pet, env, cfg = self.pet, self.environment, self.config
        minutes = cfg.minutes_per_step

        # 1. Environment
        day_before = env.day
        env_events = env.advance(minutes, self.rng)
        for event in env_events:
            if isinstance(event, SeasonChanged):
                log.info("season changed", season=event.new.value, day=event.day)
        self.bus.publish_all(env_events)

        # 2. Needs
        apply_decay(pet.stats, env, minutes, cfg.decay_per_hour)
        if not pet.health.is_healthy:
            apply_condition_damage(pet.stats, minutes, cfg.condition_damage_per_hour)
        pet.tick_activity()
        pet.age_minutes += minutes

        # 3. Care evaluation and experience
        mood = self.tracker.derived.mood
        for _ in range(env.day - day_before):
            self._evaluate_daily_care()
        if pet.has_good_care:
            pet.add_experience(
                cfg.passive_xp_per_hour * minutes / 60.0,
                mood,
                minimum=0.0,
            )

        # 4. Levels and health
        pet.commit_level_ups()
        pet.health.update(
            pet.stats,
            onset_dwell=cfg.onset_dwell_ticks,
            recovery_dwell=cfg.recovery_dwell_ticks,
        )

        # 5. Derived state
        self.tracker.refresh()

        self.tick += 1

        # 6. Auto-save
        if (
            self.save_hook is not None
            and cfg.auto_save.enabled
            and self.tick % cfg.autosave_every_ticks == 0
        ):
            log.debug("auto-saving", tick=self.tick)
            self.save_hook(self.snapshot())

    def run(self, ticks: int) -> None:
        """Run the simulation for a fixed number of ticks.

        Args:
            ticks: Number of ticks to advance.
        """
        for _ in range(ticks):
            self.step()

    def snapshot(self) -> dict[str, Any]:
        """Flat, JSON-compatible state of the pet and environment."""
        return to_snapshot(self.pet, self.environment)

    def _evaluate_daily_care(self) -> None:
        """Pay the daily bill, then extend or break the good-care streak."""
        pet = self.pet
        pet.wallet.earn(DAILY_REWARD_BILLS)
        log.debug("daily reward", bills=pet.wallet.bills, day=self.environment.day)
        mood = self.tracker.derived.mood
        if not pet.has_good_care:
            pet.good_care_streak = 0
            return

        pet.good_care_streak += 1
        pet.add_experience(_GOOD_DAY_XP, mood)
        if pet.good_care_streak % _STREAK_MILESTONE_DAYS == 0:
            pet.add_experience(pet.good_care_streak * 2, mood)
