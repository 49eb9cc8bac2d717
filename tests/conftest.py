from __future__ import annotations

from itertools import cycle
from typing import Iterable

import pytest

from carbon_estimator.settings import settings


class SequenceRandom:
    """Replays a fixed sequence of draws in [0, 1)."""

    def __init__(self, values: Iterable[float]) -> None:
        self._values = cycle(list(values))

    def random(self) -> float:
        return next(self._values)


@pytest.fixture
def fixed_rng():
    return SequenceRandom([0.5])


@pytest.fixture
def no_api_key(monkeypatch):
    monkeypatch.setattr(settings, "gemini_api_key", None)
    monkeypatch.setattr(settings, "fallback_delay_seconds", 0.0)


@pytest.fixture
def make_rng():
    return SequenceRandom
