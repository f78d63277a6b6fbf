import argparse
import operator
import random
from pathlib import Path

import numpy as np

from benchmark import run_benchmark, visualize_timings

OPERATIONS = {"add": operator.add, "min": min, "max": max}

# Parse settings
parser = argparse.ArgumentParser(
    description="Benchmark SegmentTree queries and updates against a naive fold."
)
parser.add_argument(
    "--sizes",
    type=int,
    nargs="+",
    default=[1_000, 10_000, 100_000],
    metavar="N",
    help="tree lengths to benchmark (default: 1000 10000 100000).",
)
parser.add_argument(
    "--ops",
    type=int,
    default=1_000,
    metavar="K",
    help="updates and queries per size (default: 1000).",
)
parser.add_argument(
    "--operation",
    choices=sorted(OPERATIONS),
    default="add",
    help="the operation to fold with (default: add).",
)
parser.add_argument(
    "--seed", type=int, default=42, metavar="S", help="random seed (default: 42)."
)
parser.add_argument(
    "--exp-name", type=str, default="segtree", metavar="E", help="the experiment name."
)
parser.add_argument("--log-dir", default="logs", help="path to save results")
parser.add_argument(
    "--plot", action="store_true", default=False, help="also save an HTML plot"
)
args = parser.parse_args()

# Reproducibility
np.random.seed(args.seed)
random.seed(args.seed)

# set up logs
TOP_LEVEL_LOG_DIR = Path(args.log_dir)
TOP_LEVEL_LOG_DIR.mkdir(parents=True, exist_ok=True)

RUN_NAME = f"{args.exp_name}_{args.operation}_{args.seed}"

print(f"Benchmarking sizes {args.sizes} with {args.ops} ops each...")
results = run_benchmark(
    args.sizes, ops=args.ops, seed=args.seed, operation=OPERATIONS[args.operation]
)
print(results)

mismatches = int(results["mismatches"].sum())
if mismatches:
    print(f"WARNING: {mismatches} queries disagreed with the naive fold.")

csv_path = TOP_LEVEL_LOG_DIR / f"{RUN_NAME}.csv"
results.to_csv(csv_path)
print(f"Saved results to {csv_path}.")

if args.plot:
    fig = visualize_timings(results, title=f"SegmentTree timings ({args.operation})")
    plot_path = TOP_LEVEL_LOG_DIR / f"{RUN_NAME}.html"
    fig.write_html(plot_path)
    print(f"Saved plot to {plot_path}.")
