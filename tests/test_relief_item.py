"""
Relief Item Tests
==================
Finite uses, cooldown, empty/refill and interactable hints.
"""

import pytest

from stressmeter.config import settings
from stressmeter.config.profiles import ReliefItemProfile
from stressmeter.core.accumulator import StressAccumulator
from stressmeter.feeders.relief_item import UNLIMITED, ReliefItemFeeder, UseOutcome
from stressmeter.interaction.interactable import Interactable


@pytest.fixture
def stressed():
    acc = StressAccumulator(max_stress=100, danger_threshold=80, starting=0)
    acc.increase(60)
    return acc


def test_single_use_item_empties_and_refills(stressed, clock):
    item = ReliefItemFeeder("energy_drink", stressed, reduction=15, max_uses=1,
                            cooldown_sec=0, clock=clock)
    events = []
    item.used.connect(lambda: events.append("used"))
    item.empty.connect(lambda: events.append("empty"))

    assert item.can_use()
    assert item.use_item() is UseOutcome.USED
    assert stressed.current == 45
    assert item.remaining_uses == 0
    assert events == ["used", "empty"]

    assert not item.can_use()
    assert item.use_item() is UseOutcome.EMPTY
    assert stressed.current == 45
    assert events == ["used", "empty"]

    item.refill()
    assert stressed.current == 45
    assert item.remaining_uses == 1
    assert item.can_use()
    assert item.use_item() is UseOutcome.USED
    assert stressed.current == 30


def test_cooldown_blocks_until_elapsed(stressed, clock):
    item = ReliefItemFeeder("coffee", stressed, reduction=10, max_uses=3,
                            cooldown_sec=5, clock=clock)
    assert item.use_item() is UseOutcome.USED
    assert item.use_item() is UseOutcome.COOLING_DOWN
    assert item.cooldown_remaining() == pytest.approx(5.0)

    clock.advance(4)
    assert not item.can_use()
    clock.advance(1)
    assert item.can_use()
    assert item.use_item() is UseOutcome.USED
    assert item.remaining_uses == 1
    assert stressed.current == 40


def test_unlimited_item_never_empties(stressed, clock):
    item = ReliefItemFeeder("water", stressed, reduction=1, max_uses=UNLIMITED, clock=clock)
    emptied = []
    item.empty.connect(lambda: emptied.append(1))
    for _ in range(50):
        assert item.use_item() is UseOutcome.USED
    assert item.remaining_uses == UNLIMITED
    assert item.unlimited
    assert emptied == []
    assert stressed.current == 10


def test_zero_use_item_is_inert(stressed, clock):
    item = ReliefItemFeeder("broken", stressed, max_uses=0, clock=clock)
    assert item.use_item() is UseOutcome.EMPTY
    assert stressed.current == 60


def test_game_over_blocks_use_and_keeps_uses(clock):
    acc = StressAccumulator()
    acc.increase(100)
    item = ReliefItemFeeder("cigarette", acc, reduction=20, max_uses=2, clock=clock)
    used = []
    item.used.connect(lambda: used.append(1))
    assert item.use_item() is UseOutcome.GAME_OVER
    assert item.remaining_uses == 2
    assert item.last_use_time is None
    assert used == []
    assert acc.current == 100


def test_missing_accumulator(clock):
    item = ReliefItemFeeder("coffee", None, clock=clock)
    assert item.use_item() is UseOutcome.NO_ACCUMULATOR
    assert item.remaining_uses == 1

    acc = StressAccumulator(starting=50)
    item.bind(acc)
    assert item.use_item() is UseOutcome.USED
    assert acc.current == 35


def test_relief_can_leave_danger_zone(clock):
    acc = StressAccumulator(max_stress=100, danger_threshold=80, starting=85)
    exits = []
    acc.zone_exited.connect(lambda: exits.append(1))
    acc.increase(1)
    ReliefItemFeeder("drink", acc, reduction=15, clock=clock).use_item()
    assert acc.current == 71
    assert exits == [1]


def test_interactable_tracks_item_state(stressed, clock):
    interactable = Interactable("coffee", interaction_distance=2.0)
    item = ReliefItemFeeder("coffee", stressed, reduction=10, max_uses=2,
                            clock=clock, interactable=interactable)
    assert interactable.hint == "Use (2 left)"

    assert interactable.interact(distance=1.0)
    assert interactable.hint == "Use (1 left)"
    assert not interactable.interact(distance=5.0)   # out of range

    assert interactable.interact(distance=0.5)
    assert interactable.hint == "Empty"
    assert not interactable.interactable
    assert not interactable.interact(distance=0.5)
    assert stressed.current == 40

    item.refill()
    assert interactable.interactable
    assert interactable.hint == "Use (2 left)"


def test_from_profile(stressed, clock):
    profile = ReliefItemProfile(name="tea", reduction=5, max_uses=4, cooldown_sec=1)
    item = ReliefItemFeeder.from_profile(profile, stressed, clock=clock)
    assert item.name == "tea"
    assert item.to_dict()["remaining_uses"] == 4
    assert item.to_dict()["can_use"] is True


def test_profile_validation():
    with pytest.raises(ValueError):
        ReliefItemProfile(name="bad", reduction=-1)
    with pytest.raises(ValueError):
        ReliefItemProfile(name="bad", cooldown_sec=-2)


def test_last_outcome_tracks_latest_use(acc, clock):
    item = ReliefItemFeeder("coffee", acc, reduction=5, max_uses=1, clock=clock)
    assert item.last_outcome is None
    item.use_item()
    assert item.last_outcome is UseOutcome.USED
    item.use_item()
    assert item.last_outcome is UseOutcome.EMPTY
    assert item.to_dict()["last_outcome"] == "empty"


def test_unlimited_sentinel_comes_from_settings():
    assert UNLIMITED == settings.UNLIMITED_USES
    profile = ReliefItemProfile(name="water", max_uses=settings.UNLIMITED_USES)
    assert ReliefItemFeeder.from_profile(profile).unlimited
