"""Run a strategy against a synthetic environment and record the trace.

Run examples:
  # ε-greedy on three Bernoulli arms
  python simulate.py --strategy epsilon_greedy --param 0.1 --arms 0.2,0.5,0.8

  # UCB1, rewards squashed through the rolling normalizer first
  python simulate.py --strategy ucb1 --param 2.0 --arms 0.2,0.5,0.8 --normalize

  # Hill climbing on f(x) = -(x - target)^2 + 10 (+ Gaussian noise)
  python simulate.py --strategy hill_climb --x0 0 --target 3 --steps 100

Outputs land in <outdir>/<strategy>/ (trace.csv, summary.txt)
"""
from __future__ import annotations

import argparse
import csv
import logging
from pathlib import Path
from typing import List, Sequence, Tuple

import numpy as np

from optimizer import HillClimber1D
from registry import StrategyKind, StrategyRegistry
from rolling import RewardNormalizer

logger = logging.getLogger(__name__)

STRATEGIES = ["epsilon_greedy", "ucb1", "hill_climb"]
DEFAULT_PARAMS = {"epsilon_greedy": 0.1, "ucb1": 2.0}


def parse_arms(text: str) -> List[float]:
    arms = [float(p) for p in text.split(",") if p.strip()]
    if not arms:
        raise ValueError("need at least one arm mean")
    for p in arms:
        if not 0.0 <= p <= 1.0:
            raise ValueError(f"Bernoulli arm mean must be in [0, 1]: {p}")
    return arms


def quadratic_reward(x: float, target: float) -> float:
    return -(x - target) ** 2 + 10.0


def build_strategy(registry: StrategyRegistry, strategy: str, param: float, num_arms: int) -> str:
    if strategy in (StrategyKind.EPSILON_GREEDY.value, StrategyKind.UCB1.value):
        return registry.create(strategy, param=param, num_arms=num_arms)
    raise ValueError(f"Unknown strategy: {strategy}")


def run_bandit(args: argparse.Namespace) -> Tuple[List[Tuple], dict]:
    means = parse_arms(args.arms)
    best = int(np.argmax(means))
    env = np.random.default_rng(args.seed)

    param = DEFAULT_PARAMS[args.strategy] if args.param is None else args.param
    registry = StrategyRegistry(seed=args.seed)
    sid = build_strategy(registry, args.strategy, param, len(means))
    norm = RewardNormalizer(args.window) if args.normalize else None

    rows = []
    regret = 0.0
    best_pulls = 0
    raw = []
    for t in range(args.steps):
        arm = registry.select(sid)
        reward = float(env.random() < means[arm])
        fed = reward
        if norm is not None:
            fed = norm.normalized(reward)
            norm.update(reward)
        registry.update(sid, arm, fed)

        raw.append(reward)
        regret += means[best] - means[arm]
        best_pulls += arm == best
        rows.append((t, arm, reward, fed, regret))

    stats = registry.stats(sid)
    summary = {
        "Strategy": args.strategy,
        "Param": param,
        "Steps": args.steps,
        "Mean Reward": float(np.mean(raw)) if raw else 0.0,
        "Best Arm Rate": (best_pulls / args.steps) if args.steps else 0.0,
        "Regret": regret,
        "Window Mean": stats.mean,
        "Window Count": stats.count,
    }
    return rows, summary


def run_hill_climb(args: argparse.Namespace) -> Tuple[List[Tuple], dict]:
    env = np.random.default_rng(args.seed)
    opt = HillClimber1D(args.x0, step=args.step, min_step=args.min_step)

    rows = []
    rewards = []
    for t in range(args.steps):
        x = opt.suggest()
        r = quadratic_reward(x, args.target)
        if args.noise > 0:
            r += float(env.normal(0.0, args.noise))
        opt.observe(r)
        rewards.append(r)
        rows.append((t, x, r, opt.param(), opt.step))

    summary = {
        "Strategy": args.strategy,
        "Steps": args.steps,
        "Mean Reward": float(np.mean(rewards)) if rewards else 0.0,
        "Final Param": opt.param(),
        "Target": args.target,
        "Abs Error": abs(opt.param() - args.target),
    }
    return rows, summary


def format_summary(summary: dict) -> str:
    lines = []
    for k, v in summary.items():
        lines.append(f"{k}: {v:.4f}" if isinstance(v, float) else f"{k}: {v}")
    return "\n".join(lines) + "\n"


def write_trace(path: Path, header: Sequence[str], rows: List[Tuple]) -> None:
    with open(path, "w", newline="") as f:
        cw = csv.writer(f)
        cw.writerow(header)
        cw.writerows(rows)


def run(args: argparse.Namespace) -> dict:
    out_dir = Path(args.outdir) / args.strategy
    out_dir.mkdir(parents=True, exist_ok=True)
    logger.info("Simulating %s for %d steps -> %s", args.strategy, args.steps, out_dir)

    if args.strategy == "hill_climb":
        rows, summary = run_hill_climb(args)
        header = ["step", "suggested", "reward", "param", "step_size"]
    else:
        rows, summary = run_bandit(args)
        header = ["step", "arm", "reward", "fed_reward", "cum_regret"]

    write_trace(out_dir / "trace.csv", header, rows)
    text = format_summary(summary)
    with open(out_dir / "summary.txt", "w", encoding="utf-8") as f:
        f.write(text)
    print(text, end="")
    return summary


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="Simulate a bandit or optimizer on synthetic rewards")
    p.add_argument("--strategy", choices=STRATEGIES, default="ucb1")
    p.add_argument("--param", type=float, default=None,
                   help="epsilon (epsilon_greedy, default 0.1) or c (ucb1, default 2.0)")
    p.add_argument("--arms", default="0.2,0.5,0.8", help="Comma-separated Bernoulli arm means")
    p.add_argument("--steps", type=int, default=1000)
    p.add_argument("--seed", type=int, default=42)
    p.add_argument("--normalize", action="store_true", help="Feed rolling-normalized rewards to the bandit")
    p.add_argument("--window", type=int, default=50, help="Normalizer window size")
    p.add_argument("--x0", type=float, default=0.0)
    p.add_argument("--target", type=float, default=3.0)
    p.add_argument("--step", type=float, default=0.5)
    p.add_argument("--min-step", dest="min_step", type=float, default=0.01)
    p.add_argument("--noise", type=float, default=0.0, help="Std of Gaussian reward noise (hill_climb)")
    p.add_argument("--outdir", default="results")
    p.add_argument("--log-level", dest="log_level", default="INFO")
    return p


if __name__ == "__main__":
    parser = build_parser()
    args = parser.parse_args()
    logging.basicConfig(
        level=getattr(logging, args.log_level.upper(), logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    try:
        run(args)
    except ValueError as exc:  # InvalidArgument included
        parser.error(str(exc))
