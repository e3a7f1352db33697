"""Tests for bonsaigotchi.pet - Stats, Bonsai, Inventory, Wallet."""

import math

import pytest

from bonsaigotchi.errors import ConfigurationError
from bonsaigotchi.pet.bonsai import LEVEL_UP_REWARD, Bonsai, xp_for_next_level
from bonsaigotchi.pet.inventory import VEGETABLES, Inventory, Wallet
from bonsaigotchi.pet.states import BonsaiState, MoodState
from bonsaigotchi.pet.stats import STAT_NAMES, Stats


class TestStats:
    """Tests for the bounded stat block."""

    def test_defaults_in_range(self) -> None:
        stats = Stats()
        for value in stats.as_dict().values():
            assert 0.0 <= value <= 100.0

    def test_assignment_clamps(self) -> None:
        stats = Stats()
        stats.water = 150
        assert stats.water == 100.0
        stats.water = -5
        assert stats.water == 0.0

    def test_constructor_clamps(self) -> None:
        stats = Stats(water=120.0, hunger=-3.0)
        assert stats.water == 100.0
        assert stats.hunger == 0.0

    def test_nan_clamps_to_lower_bound(self) -> None:
        stats = Stats()
        stats.energy = math.nan
        assert stats.energy == 0.0

    def test_adjust_returns_realised_change(self) -> None:
        stats = Stats(water=95.0)
        assert stats.adjust("water", 10.0) == pytest.approx(5.0)
        assert stats.water == 100.0

    def test_set_and_get_by_name(self) -> None:
        stats = Stats()
        stats.set("cleanliness", 42.0)
        assert stats.get("cleanliness") == 42.0

    def test_unknown_stat_is_configuration_error(self) -> None:
        stats = Stats()
        with pytest.raises(ConfigurationError):
            stats.adjust("sunshine", 1.0)
        with pytest.raises(ConfigurationError):
            stats.get("sunshine")

    def test_as_dict_covers_every_stat(self) -> None:
        assert tuple(Stats().as_dict()) == STAT_NAMES
        assert "hydration" in STAT_NAMES
        assert "pruning_quality" in STAT_NAMES


class TestBonsai:
    """Tests for the pet entity."""

    def test_defaults(self, pet: Bonsai) -> None:
        assert pet.level == 1
        assert pet.experience == 0.0
        assert pet.activity == BonsaiState.IDLE
        assert pet.health.is_healthy

    def test_ids_are_unique(self) -> None:
        assert Bonsai().id != Bonsai().id

    def test_xp_threshold_grows_with_level(self) -> None:
        assert xp_for_next_level(1) == 100
        assert xp_for_next_level(2) == 282
        assert xp_for_next_level(4) == 800

    def test_experience_scaled_by_mood(self, pet: Bonsai) -> None:
        assert pet.add_experience(10, MoodState.ECSTATIC) == pytest.approx(13.0)
        assert pet.add_experience(10, MoodState.MISERABLE) == pytest.approx(7.0)

    def test_streak_bonus_is_capped(self, pet: Bonsai) -> None:
        pet.good_care_streak = 4
        assert pet.add_experience(10, MoodState.NEUTRAL) == pytest.approx(12.0)
        pet.good_care_streak = 50
        assert pet.add_experience(10, MoodState.NEUTRAL) == pytest.approx(15.0)

    def test_positive_grant_has_floor(self, pet: Bonsai) -> None:
        assert pet.add_experience(0.1, MoodState.NEUTRAL) == 1.0
        assert pet.add_experience(0.1, MoodState.NEUTRAL, minimum=0.0) == pytest.approx(0.1)
        assert pet.add_experience(0, MoodState.NEUTRAL) == 0.0

    def test_level_up_consumes_threshold(self, pet: Bonsai) -> None:
        bills_before = pet.wallet.bills
        pet.experience = 150.0
        assert pet.commit_level_ups() == 1
        assert pet.level == 2
        assert pet.experience == pytest.approx(50.0)
        assert pet.wallet.bills == bills_before + LEVEL_UP_REWARD

    def test_multiple_levels_at_once(self, pet: Bonsai) -> None:
        pet.experience = 100.0 + 282.0 + 1.0
        assert pet.commit_level_ups() == 2
        assert pet.level == 3

    def test_activity_falls_back_to_idle(self, pet: Bonsai) -> None:
        pet.set_activity(BonsaiState.SLEEPING, 2)
        pet.tick_activity()
        assert pet.activity == BonsaiState.SLEEPING
        pet.tick_activity()
        assert pet.activity == BonsaiState.IDLE

    def test_good_care(self, pet: Bonsai) -> None:
        pet.stats.water = 80
        pet.stats.hunger = 10
        assert pet.has_good_care
        pet.stats.hunger = 40
        assert not pet.has_good_care


class TestInventoryAndWallet:
    """Tests for consumables and currency."""

    def test_starter_items(self) -> None:
        inventory = Inventory()
        assert inventory.count(VEGETABLES) == 5

    def test_use_consumes(self) -> None:
        inventory = Inventory(items={"burger": 1})
        assert inventory.use("burger")
        assert not inventory.use("burger")
        assert inventory.count("burger") == 0

    def test_add_ignores_non_positive(self) -> None:
        inventory = Inventory(items={})
        inventory.add("burger", 0)
        assert inventory.count("burger") == 0
        inventory.add("burger", 2)
        assert inventory.count("burger") == 2

    def test_wallet_never_negative(self) -> None:
        wallet = Wallet(bills=5)
        assert not wallet.spend(6)
        assert wallet.spend(5)
        assert wallet.bills == 0
        wallet.earn(-3)
        assert wallet.bills == 0
