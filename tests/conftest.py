import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

import pytest


class FakeTicker:
    """Clock that only moves when told to."""

    def __init__(self, start: int = 0):
        self.now = start

    def read(self) -> int:
        return self.now

    def advance(self, nanos: int) -> None:
        self.now += nanos


class ScriptedRandom:
    """Random source returning gaussian samples from a list, then zeros."""

    def __init__(self, samples=()):
        self.samples = list(samples)
        self.calls = 0

    def gauss(self, mu=0.0, sigma=1.0):
        self.calls += 1
        if self.samples:
            return self.samples.pop(0)
        return 0.0


@pytest.fixture
def ticker():
    return FakeTicker()


@pytest.fixture
def scripted_random():
    return ScriptedRandom


@pytest.fixture
def no_gc(monkeypatch):
    """Replace forced collection with a counter."""
    calls = []
    monkeypatch.setattr("gauge.worker.runtime.force_gc", lambda: calls.append("gc"))
    monkeypatch.setattr("gauge.worker.macro.force_gc", lambda: calls.append("gc"))
    return calls
