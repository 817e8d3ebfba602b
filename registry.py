"""Thread-safe registry of live bandit instances keyed by opaque id.

    reg = StrategyRegistry()
    sid = reg.create("ucb1", param=2.0, num_arms=3)
    arm = reg.select(sid)
    reg.update(sid, arm, reward=1.0)
    reg.stats(sid)   # -> Stats(mean, min, max, count)

Every call takes the same lock, so calls on different ids are serialized too.

stats() means different things per kind:
    epsilon_greedy  recent rewards from the attached RewardTracker window
    ucb1            all-time per-arm means: mean of the arm means, min/max
                    over the arm means, total pull count
"""
from __future__ import annotations

import logging
import math
import threading
import uuid
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Dict, List, Optional, Union

import numpy as np

from bandit import DEFAULT_SEED, EpsilonGreedy, Ucb1
from errors import InvalidArgument, NotFound
from rolling import DEFAULT_WINDOW, RewardTracker, Stats

logger = logging.getLogger(__name__)

_UNSET = object()


class StrategyKind(str, Enum):
    EPSILON_GREEDY = "epsilon_greedy"
    UCB1 = "ucb1"

    @classmethod
    def parse(cls, kind: Union[str, "StrategyKind"]) -> "StrategyKind":
        try:
            return cls(kind)
        except ValueError:
            raise InvalidArgument(f"unsupported strategy: {kind!r}") from None


@dataclass
class EpsilonGreedyEntry:
    bandit: EpsilonGreedy
    tracker: RewardTracker
    kind: StrategyKind = StrategyKind.EPSILON_GREEDY


@dataclass
class Ucb1Entry:
    bandit: Ucb1
    kind: StrategyKind = StrategyKind.UCB1


Entry = Union[EpsilonGreedyEntry, Ucb1Entry]


def _new_id() -> str:
    return str(uuid.uuid4())


class StrategyRegistry:
    def __init__(
        self,
        *,
        tracker_window: int = DEFAULT_WINDOW,
        seed: Optional[int] = DEFAULT_SEED,
        id_factory: Callable[[], str] = _new_id,
    ):
        """
        Args:
            tracker_window: size of the reward window attached to
                epsilon-greedy entries.
            seed: default seed for epsilon-greedy random sources. The fixed
                default makes runs reproducible but gives every instance the
                same random stream; pass None for OS entropy.
            id_factory: produces unique opaque ids.
        """
        if int(tracker_window) <= 0:
            raise InvalidArgument(f"tracker_window must be > 0, got {tracker_window}")
        self.tracker_window = int(tracker_window)
        self.seed = seed
        self._new_id = id_factory
        self._entries: Dict[str, Entry] = {}
        self._lock = threading.Lock()

    # ----------------- construction -----------------
    def _build(self, kind: StrategyKind, param: float, num_arms: int, seed: Optional[int]) -> Entry:
        if num_arms <= 0:
            raise InvalidArgument("invalid number of arms")
        if kind is StrategyKind.EPSILON_GREEDY:
            if not 0.0 <= param <= 1.0:
                raise InvalidArgument(f"invalid epsilon: {param}")
            return EpsilonGreedyEntry(
                bandit=EpsilonGreedy(num_arms, param, seed=seed),
                tracker=RewardTracker(self.tracker_window),
            )
        if kind is StrategyKind.UCB1:
            if not param >= 0.0:
                raise InvalidArgument(f"invalid exploration factor: {param}")
            return Ucb1Entry(bandit=Ucb1(num_arms, param))
        raise InvalidArgument(f"unsupported strategy: {kind!r}")

    def create(self, kind: Union[str, StrategyKind], param: float, num_arms: int, *, seed=_UNSET) -> str:
        """Validate, build and register a new strategy; return its id."""
        try:
            k = StrategyKind.parse(kind)
            if isinstance(num_arms, bool) or not isinstance(num_arms, (int, np.integer)):
                raise InvalidArgument(f"number of arms must be an integer, got {num_arms!r}")
            try:
                p = float(param)
            except (TypeError, ValueError):
                raise InvalidArgument(f"param must be a real number, got {param!r}") from None
            if not math.isfinite(p):
                raise InvalidArgument(f"param must be finite, got {param!r}")
            entry = self._build(k, p, int(num_arms), self.seed if seed is _UNSET else seed)
        except InvalidArgument as exc:
            logger.warning("Rejected create(kind=%r, param=%r, num_arms=%r): %s", kind, param, num_arms, exc)
            raise

        with self._lock:
            sid = self._new_id()
            if sid in self._entries:
                raise RuntimeError(f"id factory returned a duplicate id: {sid}")
            self._entries[sid] = entry
        logger.info("Created %s strategy %s (param=%s, num_arms=%d)", k.value, sid, param, int(num_arms))
        return sid

    # ----------------- lookups (lock must be held) -----------------
    def _get(self, sid: str) -> Entry:
        entry = self._entries.get(sid)
        if entry is None:
            logger.warning("Unknown strategy id: %s", sid)
            raise NotFound(f"unknown id: {sid}")
        return entry

    # ----------------- operations -----------------
    def select(self, sid: str) -> int:
        """Choose an arm. Advances the random source of epsilon-greedy entries."""
        with self._lock:
            entry = self._get(sid)
            if isinstance(entry, EpsilonGreedyEntry):
                return entry.bandit.select_arm()
            if isinstance(entry, Ucb1Entry):
                return entry.bandit.select_arm()
            raise TypeError(f"unexpected registry entry: {entry!r}")

    def update(self, sid: str, arm: int, reward: float) -> None:
        with self._lock:
            entry = self._get(sid)
            n = entry.bandit.num_arms
            if isinstance(arm, bool) or not isinstance(arm, (int, np.integer)) or not 0 <= arm < n:
                logger.warning("Rejected update for %s: arm %r outside [0, %d)", sid, arm, n)
                raise InvalidArgument(f"arm {arm!r} out of range for {n} arms")
            try:
                reward = float(reward)
            except (TypeError, ValueError):
                raise InvalidArgument(f"reward must be a real number, got {reward!r}") from None
            # NaN would win every argmax
            if not math.isfinite(reward):
                logger.warning("Rejected update for %s: non-finite reward %r", sid, reward)
                raise InvalidArgument(f"reward must be finite, got {reward!r}")
            if isinstance(entry, EpsilonGreedyEntry):
                entry.bandit.update(int(arm), reward)
                entry.tracker.update(reward)
            elif isinstance(entry, Ucb1Entry):
                entry.bandit.update(int(arm), reward)
            else:
                raise TypeError(f"unexpected registry entry: {entry!r}")

    def stats(self, sid: str) -> Stats:
        with self._lock:
            entry = self._get(sid)
            if isinstance(entry, EpsilonGreedyEntry):
                return entry.tracker.snapshot()
            if isinstance(entry, Ucb1Entry):
                values = np.asarray(entry.bandit.values(), dtype=np.float64)
                return Stats(
                    mean=float(values.mean()),
                    min=float(values.min()),
                    max=float(values.max()),
                    count=int(sum(entry.bandit.counts())),
                )
            raise TypeError(f"unexpected registry entry: {entry!r}")

    # ----------------- housekeeping -----------------
    def remove(self, sid: str) -> None:
        """Drop an entry; used by whoever tears the owning job down."""
        with self._lock:
            self._get(sid)
            del self._entries[sid]
        logger.info("Removed strategy %s", sid)

    def kind(self, sid: str) -> StrategyKind:
        with self._lock:
            return self._get(sid).kind

    def ids(self) -> List[str]:
        with self._lock:
            return list(self._entries)

    def __contains__(self, sid: object) -> bool:
        with self._lock:
            return sid in self._entries

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
