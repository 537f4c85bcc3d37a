import pytest

from engine import CubeEngine


class FakeClock:
    def __init__(self, t: float = 0.0):
        self.t = t

    def __call__(self) -> float:
        return self.t


@pytest.fixture
def cube():
    engine = CubeEngine(3)
    yield engine
    engine.dispose()


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def run_until_idle():
    """Tick an engine until its queue has drained"""
    def run(engine, dt: float = 0.05, max_ticks: int = 10000):
        ticks = 0
        while engine.is_animating:
            engine.tick(dt)
            ticks += 1
            assert ticks < max_ticks, "engine never went idle"
        return ticks
    return run
