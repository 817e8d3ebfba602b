"""One-dimensional parameter tuning by adaptive hill climbing.

Usage:
    opt = HillClimber1D(x0=0.0, step=0.5, min_step=0.01)
    for _ in range(100):
        x = opt.suggest()
        opt.observe(reward_fn(x))
    best = opt.param()

suggest() and observe() must alternate. An improvement (or tie) is accepted
and the step grows; a regression is discarded, the direction flips and the
step shrinks (never below min_step).
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional

from errors import InvalidArgument


class Optimizer(ABC):
    """Propose a parameter, learn from the reward it produced."""

    @abstractmethod
    def suggest(self) -> float:
        pass

    @abstractmethod
    def observe(self, reward: float) -> None:
        pass

    @abstractmethod
    def param(self) -> float:
        pass

    @abstractmethod
    def reset(self, x0: float) -> None:
        pass


class HillClimber1D(Optimizer):
    def __init__(
        self,
        x0: float,
        step: float = 0.5,
        min_step: float = 0.1,
        grow: float = 1.1,
        shrink: float = 0.5,
    ):
        if not (step > 0.0 and min_step > 0.0):
            raise InvalidArgument("step and min_step must be > 0")
        if not grow > 1.0:
            raise InvalidArgument(f"grow must be > 1.0, got {grow}")
        if not 0.0 < shrink < 1.0:
            raise InvalidArgument(f"shrink must be in (0, 1), got {shrink}")
        self.x = float(x0)
        self.dir = 1.0
        self._step = float(step)
        self.min_step = float(min_step)
        self.grow = float(grow)
        self.shrink = float(shrink)
        self.last_reward: Optional[float] = None
        self.last_suggested: Optional[float] = None

    @property
    def step(self) -> float:
        return self._step

    @property
    def direction(self) -> float:
        return self.dir

    def suggest(self) -> float:
        if self.last_suggested is None:
            s = self.x
        else:
            s = self.x + self.dir * self._step
        self.last_suggested = s
        return s

    def observe(self, reward: float) -> None:
        if self.last_suggested is None:
            raise RuntimeError("observe() called before suggest()")
        reward = float(reward)

        # first observation only sets the baseline
        if self.last_reward is None:
            self.x = self.last_suggested
            self.last_reward = reward
            return

        if reward >= self.last_reward:
            self.x = self.last_suggested
            self._step *= self.grow
            self.last_reward = reward
        else:
            self.dir = -self.dir
            self._step = max(self._step * self.shrink, self.min_step)

    def param(self) -> float:
        return self.x

    def reset(self, x0: float) -> None:
        self.x = float(x0)
        self.dir = 1.0
        self._step = max(self._step, self.min_step)
        self.last_reward = None
        self.last_suggested = None
