"""
segtree - Generic associative range queries over a fixed-size sequence.

A SegmentTree folds any contiguous range of its elements under a caller-supplied
associative operation and updates single elements, both in O(log N) time.
"""
from .data_structures import MinSegmentTree, SegmentTree, SumSegmentTree
from .types import CombineFn

__all__ = ["SegmentTree", "SumSegmentTree", "MinSegmentTree", "CombineFn"]
