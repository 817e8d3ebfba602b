# plot_results.py
import sys
from pathlib import Path

import matplotlib

matplotlib.use("Agg")
import matplotlib.pyplot as plt
import pandas as pd

RESULTS_DIR = Path("results")

BANDIT_RUNS = {"epsilon_greedy", "ucb1"}


def load_traces(results_dir: Path) -> dict:
    traces = {}
    if not results_dir.exists():
        print(f"No {results_dir}/ directory found.")
        return traces
    for sub in sorted(results_dir.iterdir()):
        trace = sub / "trace.csv"
        if sub.is_dir() and trace.exists():
            traces[sub.name] = pd.read_csv(trace)
    return traces


def plot_bandits(traces: dict, outfile: Path) -> bool:
    fig, ax = plt.subplots(figsize=(6.8, 4.0))
    drawn = False
    for name, df in traces.items():
        if name not in BANDIT_RUNS or df.empty:
            continue
        # running mean of the raw reward
        running = df["reward"].expanding().mean()
        ax.plot(df["step"], running, label=name)
        drawn = True
    if drawn:
        ax.set_xlabel("Step")
        ax.set_ylabel("Mean reward so far")
        ax.set_title("Bandit reward vs step")
        ax.grid(True, linestyle="--", alpha=0.4)
        ax.legend(title="strategy")
        fig.tight_layout()
        fig.savefig(outfile, dpi=160)
    plt.close(fig)
    return drawn


def plot_hill_climb(df: pd.DataFrame, outfile: Path) -> bool:
    if df.empty:
        return False
    fig, ax = plt.subplots(figsize=(6.8, 4.0))
    ax.plot(df["step"], df["suggested"], linestyle=":", alpha=0.6, label="suggested")
    ax.plot(df["step"], df["param"], marker=".", label="param")
    ax.set_xlabel("Step")
    ax.set_ylabel("x")
    ax.set_title("Hill climber trajectory")
    ax.grid(True, linestyle="--", alpha=0.4)
    ax.legend()
    fig.tight_layout()
    fig.savefig(outfile, dpi=160)
    plt.close(fig)
    return True


def main(results_dir: Path = RESULTS_DIR):
    traces = load_traces(results_dir)
    if not traces:
        print(f"No traces found in {results_dir}/. Run simulate.py first.")
        return []

    plots_dir = results_dir / "plots"
    plots_dir.mkdir(parents=True, exist_ok=True)

    saved = []
    out = plots_dir / "bandit_reward.png"
    if plot_bandits(traces, out):
        saved.append(out)
    if "hill_climb" in traces:
        out = plots_dir / "hill_climb_param.png"
        if plot_hill_climb(traces["hill_climb"], out):
            saved.append(out)

    print(f"Saved {len(saved)} plot(s) to {plots_dir.resolve()}")
    return saved


if __name__ == "__main__":
    main(Path(sys.argv[1]) if len(sys.argv) > 1 else RESULTS_DIR)
