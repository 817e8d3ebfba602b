"""Multi-armed bandits over integer arms 0..num_arms-1.

EpsilonGreedy  explores with probability eps, else exploits the best mean.
Ucb1           pulls every arm once, then maximises mean + confidence bonus.

Both keep per-arm pull counts and running means; values[i] is always the mean
of exactly counts[i] rewards. Ties in the argmax go to the lowest index.
`update` indexes the arrays directly, so an out-of-range arm raises
IndexError; the registry validates arms before calling in.
"""
from __future__ import annotations

from typing import List, Optional

import numpy as np

from errors import InvalidArgument

DEFAULT_SEED = 42
DEFAULT_UCB_C = 2.0


class _ArmStats:
    def __init__(self, num_arms: int):
        if int(num_arms) <= 0:
            raise InvalidArgument("must have at least one arm")
        self.num_arms = int(num_arms)
        self._counts = np.zeros(self.num_arms, dtype=np.int64)
        self._values = np.zeros(self.num_arms, dtype=np.float64)

    def update(self, arm: int, reward: float) -> None:
        if not 0 <= arm < self.num_arms:
            raise IndexError(f"arm {arm} out of range for {self.num_arms} arms")
        n = self._counts[arm] + 1
        v = self._values[arm]
        self._values[arm] = v + (float(reward) - v) / n
        self._counts[arm] = n

    def counts(self) -> List[int]:
        return [int(c) for c in self._counts]

    def values(self) -> List[float]:
        return [float(v) for v in self._values]


class EpsilonGreedy(_ArmStats):
    """ε-greedy bandit with its own seeded random source.

    The default seed makes fresh instances replay identical selection
    sequences; pass seed=None to draw from OS entropy instead.
    """

    def __init__(self, num_arms: int, epsilon: float = 0.1, seed: Optional[int] = DEFAULT_SEED):
        super().__init__(num_arms)
        if not 0.0 <= epsilon <= 1.0:
            raise InvalidArgument(f"epsilon must be between 0.0 and 1.0, got {epsilon}")
        self.epsilon = float(epsilon)
        self.seed = seed
        self._rng = np.random.default_rng(seed)

    def select_arm(self) -> int:
        if self._rng.random() < self.epsilon:
            return int(self._rng.integers(self.num_arms))
        # np.argmax returns the first maximum
        return int(np.argmax(self._values))


class Ucb1(_ArmStats):
    """UCB1: score = mean + c * sqrt(2 ln(total) / n). Fully deterministic."""

    def __init__(self, num_arms: int, c: float = DEFAULT_UCB_C):
        super().__init__(num_arms)
        if not c >= 0.0:
            raise InvalidArgument(f"c must be non-negative, got {c}")
        self.c = float(c)

    def select_arm(self) -> int:
        # cold start: lowest-index arm that has never been pulled
        untried = np.flatnonzero(self._counts == 0)
        if untried.size:
            return int(untried[0])

        total = float(self._counts.sum())
        bonus = self.c * np.sqrt(2.0 * np.log(total) / self._counts)
        return int(np.argmax(self._values + bonus))

