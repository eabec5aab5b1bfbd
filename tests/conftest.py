import pytest

from stressmeter.core.accumulator import StressAccumulator


class Recorder:
    """Collects accumulator notifications in the order they fire."""

    def __init__(self, acc):
        self.log = []
        acc.value_changed.connect(lambda v: self.log.append(("value", v)))
        acc.zone_entered.connect(lambda: self.log.append(("enter",)))
        acc.zone_exited.connect(lambda: self.log.append(("exit",)))
        acc.exhausted.connect(lambda: self.log.append(("exhausted",)))

    def kinds(self):
        return [entry[0] for entry in self.log]

    def count(self, kind):
        return self.kinds().count(kind)

    def clear(self):
        self.log.clear()


class FakeClock:
    def __init__(self, now=100.0):
        self.now = now

    def __call__(self):
        return self.now

    def advance(self, seconds):
        self.now += seconds


@pytest.fixture
def acc():
    return StressAccumulator(max_stress=100.0, danger_threshold=80.0, starting=0.0)


@pytest.fixture
def recorder(acc):
    return Recorder(acc)


@pytest.fixture
def clock():
    return FakeClock()
