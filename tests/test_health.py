"""Tests for bonsaigotchi.pet.health - the condition state machine."""

from bonsaigotchi.pet.health import HealthMonitor
from bonsaigotchi.pet.states import HealthCondition
from bonsaigotchi.pet.stats import Stats

DWELL = 3


def _tick(monitor: HealthMonitor, stats: Stats, times: int = 1) -> HealthCondition:
    for _ in range(times):
        monitor.update(stats, onset_dwell=DWELL, recovery_dwell=DWELL)
    return monitor.condition


class TestOnset:
    """Conditions commit only after the onset dwell."""

    def test_starts_healthy(self) -> None:
        assert HealthMonitor().is_healthy

    def test_onset_requires_dwell(self) -> None:
        monitor = HealthMonitor()
        dry = Stats(water=10.0)
        assert _tick(monitor, dry, DWELL - 1) is HealthCondition.HEALTHY
        assert _tick(monitor, dry) is HealthCondition.DROUGHT

    def test_interrupted_streak_resets(self) -> None:
        monitor = HealthMonitor()
        _tick(monitor, Stats(water=10.0), DWELL - 1)
        _tick(monitor, Stats(water=60.0))
        assert _tick(monitor, Stats(water=10.0), DWELL - 1) is HealthCondition.HEALTHY

    def test_low_hydration_also_means_drought(self) -> None:
        monitor = HealthMonitor()
        assert _tick(monitor, Stats(hydration=5.0), DWELL) is HealthCondition.DROUGHT

    def test_priority_order(self) -> None:
        monitor = HealthMonitor()
        stats = Stats(water=10.0, hunger=95.0)
        assert _tick(monitor, stats, DWELL) is HealthCondition.DROUGHT

    def test_each_rule(self) -> None:
        cases = {
            HealthCondition.OVERWATERED: Stats(water=99.0),
            HealthCondition.NUTRIENT_DEFICIENCY: Stats(hunger=90.0),
            HealthCondition.PEST_INFESTATION: Stats(cleanliness=10.0),
            HealthCondition.OVERTRAINING: Stats(energy=5.0),
        }
        for condition, stats in cases.items():
            monitor = HealthMonitor()
            assert _tick(monitor, stats, DWELL) is condition

    def test_healthy_stats_never_trigger(self) -> None:
        monitor = HealthMonitor()
        assert _tick(monitor, Stats(), 100) is HealthCondition.HEALTHY
        assert monitor.onset_ticks == {}


class TestRecovery:
    """Conditions clear only after the stricter recovery dwell."""

    def _drought(self) -> HealthMonitor:
        monitor = HealthMonitor()
        _tick(monitor, Stats(water=10.0), DWELL)
        assert monitor.condition is HealthCondition.DROUGHT
        return monitor

    def test_hovering_above_onset_is_not_recovery(self) -> None:
        monitor = self._drought()
        # Above the onset limit of 20 but below the recovery limit of 40
        assert _tick(monitor, Stats(water=30.0), 50) is HealthCondition.DROUGHT

    def test_recovery_requires_dwell(self) -> None:
        monitor = self._drought()
        wet = Stats(water=60.0)
        assert _tick(monitor, wet, DWELL - 1) is HealthCondition.DROUGHT
        assert _tick(monitor, wet) is HealthCondition.HEALTHY

    def test_relapse_resets_recovery(self) -> None:
        monitor = self._drought()
        _tick(monitor, Stats(water=60.0), DWELL - 1)
        _tick(monitor, Stats(water=30.0))
        assert monitor.recovery_ticks == 0
        assert _tick(monitor, Stats(water=60.0), DWELL - 1) is HealthCondition.DROUGHT

    def test_other_rules_ignored_while_ill(self) -> None:
        monitor = self._drought()
        _tick(monitor, Stats(water=10.0, hunger=95.0), 20)
        assert monitor.condition is HealthCondition.DROUGHT


class TestForcedEvents:
    """Random onset and cure events bypass the dwell."""

    def test_force_onset_while_healthy(self) -> None:
        monitor = HealthMonitor()
        assert monitor.force_onset(HealthCondition.OVERTRAINING)
        assert monitor.condition is HealthCondition.OVERTRAINING

    def test_force_onset_does_not_replace_condition(self) -> None:
        monitor = HealthMonitor(condition=HealthCondition.DROUGHT)
        assert not monitor.force_onset(HealthCondition.OVERTRAINING)
        assert monitor.condition is HealthCondition.DROUGHT

    def test_cure(self) -> None:
        monitor = HealthMonitor(condition=HealthCondition.PEST_INFESTATION, recovery_ticks=2)
        assert monitor.cure()
        assert monitor.is_healthy
        assert monitor.recovery_ticks == 0
        assert not monitor.cure()
