"""Randomness sources used for failure simulation and gas fee tiers.

Handlers never call the global ``random`` module. They receive a
``RandomSource`` at construction time so tests can script the draws:

- SystemRandomSource for normal operation (OS entropy, safe across threads)
- ScriptedRandomSource for tests and manual runs with predictable outcomes
"""

import random
import threading
from collections.abc import Iterable
from typing import Protocol, runtime_checkable


@runtime_checkable
class RandomSource(Protocol):
    def random(self) -> float:
        """Return a float uniformly drawn from [0, 1)."""
        ...


class SystemRandomSource:
    """Random source backed by ``random.SystemRandom``."""

    def __init__(self) -> None:
        self._generator = random.SystemRandom()

    def random(self) -> float:
        return self._generator.random()


class ScriptedRandomSource:
    """Returns scripted values in order, then keeps repeating the last one."""

    def __init__(self, values: Iterable[float]) -> None:
        self._values = [float(v) for v in values]
        if not self._values:
            raise ValueError("ScriptedRandomSource needs at least one value")
        for value in self._values:
            if not 0.0 <= value < 1.0:
                raise ValueError(f"Scripted value out of range [0, 1): {value}")
        self._position = 0
        self._lock = threading.Lock()
        self.draws = 0

    def random(self) -> float:
        with self._lock:
            value = self._values[min(self._position, len(self._values) - 1)]
            self._position += 1
            self.draws += 1
            return value

    def reset(self) -> None:
        with self._lock:
            self._position = 0
            self.draws = 0
