"""Rolling-window reward statistics.

Both utilities keep only the most recent `window` rewards in FIFO order:
    RewardTracker     -> mean/min/max/count over the window
    RewardNormalizer  -> sigmoid of the z-score against the window

Empty windows return neutral values (0.0 / 0 for the tracker, 0.5 for the
normalizer); callers cannot tell "no data" apart from data that happens to
average out to the neutral value.
"""
from __future__ import annotations

import math
from collections import deque
from dataclasses import asdict, dataclass
from typing import Deque, Dict, List

import numpy as np

from errors import InvalidArgument

DEFAULT_WINDOW = 50


@dataclass(frozen=True)
class Stats:
    mean: float
    min: float
    max: float
    count: int

    def as_dict(self) -> Dict[str, float]:
        return asdict(self)


class RollingWindow:
    """Fixed-capacity FIFO buffer of floats (oldest first)."""

    def __init__(self, capacity: int = DEFAULT_WINDOW):
        if int(capacity) <= 0:
            raise InvalidArgument(f"window capacity must be > 0, got {capacity}")
        self.capacity = int(capacity)
        self._buf: Deque[float] = deque(maxlen=self.capacity)

    def update(self, value: float) -> None:
        # a full deque drops its oldest item on append
        self._buf.append(float(value))

    def values(self) -> List[float]:
        return list(self._buf)

    def as_array(self) -> np.ndarray:
        return np.fromiter(self._buf, dtype=np.float64, count=len(self._buf))

    def __len__(self) -> int:
        return len(self._buf)


class RewardTracker:
    """Recent-window reward statistics."""

    def __init__(self, window: int = DEFAULT_WINDOW):
        self._win = RollingWindow(window)

    @property
    def window(self) -> int:
        return self._win.capacity

    def update(self, reward: float) -> None:
        self._win.update(reward)

    def mean(self) -> float:
        if not len(self._win):
            return 0.0
        return float(self._win.as_array().mean())

    def min(self) -> float:
        if not len(self._win):
            return 0.0
        return float(self._win.as_array().min())

    def max(self) -> float:
        if not len(self._win):
            return 0.0
        return float(self._win.as_array().max())

    def count(self) -> int:
        return len(self._win)

    def values(self) -> List[float]:
        return self._win.values()

    def snapshot(self) -> Stats:
        return Stats(mean=self.mean(), min=self.min(), max=self.max(), count=self.count())


def _sigmoid(z: float) -> float:
    # split on sign so exp() never overflows
    if z >= 0:
        return 1.0 / (1.0 + math.exp(-z))
    e = math.exp(z)
    return e / (1.0 + e)


class RewardNormalizer:
    """Squash rewards into (0, 1) using the rolling mean and population std.

    normalized(r) = 1 / (1 + exp(-(r - mu) / sigma))

    Returns exactly 0.5 when the window is empty or all stored values are
    equal (sigma == 0).
    """

    def __init__(self, window: int = DEFAULT_WINDOW):
        self._win = RollingWindow(window)

    @property
    def window(self) -> int:
        return self._win.capacity

    def update(self, reward: float) -> None:
        self._win.update(reward)

    def values(self) -> List[float]:
        return self._win.values()

    def normalized(self, reward: float) -> float:
        if not len(self._win):
            return 0.5
        arr = self._win.as_array()
        # identical values can still leave a rounding-sized std behind
        if arr.max() == arr.min():
            return 0.5
        mu = float(arr.mean())
        sigma = float(arr.std())  # ddof=0: population std
        if sigma == 0.0:
            return 0.5
        return _sigmoid((float(reward) - mu) / sigma)
