import operator
import time
from functools import reduce
from typing import Iterable, Sequence

import numpy as np
import pandas as pd
import plotly.express as px
import plotly.graph_objects as go
from tqdm import tqdm

from segtree import CombineFn, SegmentTree


def naive_fold(
    values: Sequence[object], start: int, end: int, operation: CombineFn
) -> object:
    """Fold `operation` left to right over ``values[start:end]`` in O(N).

    Args:
        values (Sequence[object]): the elements.
        start (int): the index at the start of the range.
        end (int): the index one past the end of the range.
        operation (CombineFn): the associative operation.

    Returns:
        object: the folded value.
    """
    assert 0 <= start < end <= len(values), "Invalid range."
    return reduce(operation, values[start:end])


def run_benchmark(
    sizes: Iterable[int] = (1_000, 10_000, 100_000),
    ops: int = 1_000,
    seed: int = 42,
    operation: CombineFn = operator.add,
) -> pd.DataFrame:
    """Time a SegmentTree against a naive fold over random workloads.

    Each query result is checked against the naive fold, so the returned frame also
    doubles as a correctness report.

    Args:
        sizes (Iterable[int], optional): the tree lengths to benchmark. Defaults to 1K, 10K and 100K.
        ops (int, optional): how many updates and queries to run per size. Defaults to 1000.
        seed (int, optional): the random seed for the workload. Defaults to 42.
        operation (CombineFn, optional): the operation to fold with. Defaults to addition.

    Returns:
        pd.DataFrame: one row per size with the build, update and query timings in seconds,
            and the number of queries that disagreed with the naive fold.
    """
    assert ops > 0, "Invalid ops value."

    rng = np.random.default_rng(seed)
    rows = []
    for size in tqdm(list(sizes), desc="SegmentTree benchmark"):
        assert size > 0, "Invalid size value."
        values = rng.integers(-1_000, 1_000, size=size).tolist()

        tic = time.perf_counter()
        tree = SegmentTree.from_sequence(values, operation)
        build_time = time.perf_counter() - tic

        indices = rng.integers(0, size, size=ops).tolist()
        new_values = rng.integers(-1_000, 1_000, size=ops).tolist()
        tic = time.perf_counter()
        for index, value in zip(indices, new_values):
            tree.set(index, value)
            values[index] = value
        update_time = time.perf_counter() - tic

        bounds = np.sort(rng.integers(0, size + 1, size=(ops, 2)), axis=1)
        bounds[:, 1] = np.maximum(bounds[:, 1], bounds[:, 0] + 1)
        bounds[:, 0] = np.minimum(bounds[:, 0], size - 1)
        bounds[:, 1] = np.minimum(bounds[:, 1], size)
        ranges = bounds.tolist()

        tic = time.perf_counter()
        tree_results = [tree.get(start, end) for start, end in ranges]
        query_time = time.perf_counter() - tic

        tic = time.perf_counter()
        naive_results = [naive_fold(values, start, end, operation) for start, end in ranges]
        naive_time = time.perf_counter() - tic

        mismatches = sum(a != b for a, b in zip(tree_results, naive_results))
        rows.append(
            {
                "size": size,
                "build": build_time,
                "update": update_time,
                "query": query_time,
                "naive_query": naive_time,
                "mismatches": mismatches,
            }
        )

    return pd.DataFrame(rows).set_index("size")


def visualize_timings(
    frame: pd.DataFrame, title: str = "SegmentTree timings"
) -> go.Figure:
    """Plot the query timings of a benchmark run.

    Args:
        frame (pd.DataFrame): the output of `run_benchmark`.
        title (str, optional): the title of the figure.

    Returns:
        go.Figure: a plotly line chart of tree and naive query times.
    """
    long_frame = (
        frame[["query", "naive_query"]]
        .sort_index()
        .reset_index()
        .melt(id_vars="size", var_name="method", value_name="seconds")
    )
    fig = px.line(
        long_frame,
        x="size",
        y="seconds",
        color="method",
        log_x=True,
        log_y=True,
        markers=True,
        title=title,
    )
    return fig
