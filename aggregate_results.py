#!/usr/bin/env python3
"""Collect results/<run>/summary.txt files into results/compare.csv."""
import csv
import os
import re
import sys

BASE = "results"
NUM = r"(-?[0-9]+(?:\.[0-9]+)?)"

FIELDS = {
    "Strategy": "strategy",
    "Param": "param",
    "Steps": "steps",
    "Mean Reward": "mean_reward",
    "Best Arm Rate": "best_arm_rate",
    "Regret": "regret",
    "Final Param": "final_param",
    "Abs Error": "abs_error",
}
HDR = ["run"] + list(FIELDS.values())


def parse_summary(path):
    m = {k: None for k in FIELDS.values()}
    try:
        with open(path, "r", encoding="utf-8") as f:
            for line in f:
                if ":" not in line:
                    continue
                key, val = (s.strip() for s in line.split(":", 1))
                col = FIELDS.get(key)
                if col is None:
                    continue
                if col == "strategy":
                    m[col] = val
                    continue
                r = re.search(NUM, val)
                if r:
                    m[col] = int(r.group(1)) if col == "steps" else float(r.group(1))
    except FileNotFoundError:
        pass
    return m


def collect(base=BASE):
    rows = []
    for d in sorted(os.listdir(base)):
        path = os.path.join(base, d, "summary.txt")
        if not os.path.isfile(path):  # skip plots/ and friends
            continue
        s = parse_summary(path)
        if not s.get("strategy"):
            s["strategy"] = d
        rows.append({"run": d, **s})
    return rows


def main(base=BASE):
    if not os.path.isdir(base):
        print(f"No {base}/ directory found.")
        return []

    rows = collect(base)
    print("\t".join(HDR))
    for r in rows:
        print("\t".join("" if r.get(k) is None else str(r[k]) for k in HDR))

    out_csv = os.path.join(base, "compare.csv")
    with open(out_csv, "w", newline="") as f:
        w = csv.DictWriter(f, fieldnames=HDR)
        w.writeheader()
        for r in rows:
            w.writerow(r)
    print(f"Wrote {out_csv}")
    return rows


if __name__ == "__main__":
    main(sys.argv[1] if len(sys.argv) > 1 else BASE)
