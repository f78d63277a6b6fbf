import operator
from typing import Generic, List, Optional, Sequence, Tuple

from .types import CombineFn, T


class SegmentTree(Generic[T]):
    """Implementation of a Segment Tree data structure.

    The tree is stored implicitly in a flat list: the root lives at slot 1 and the
    node at slot ``k`` has its children at ``2k`` and ``2k + 1``. A node covering the
    logical range ``[left, right)`` hands ``[left, mid)`` to its left child and
    ``[mid, right)`` to its right child, where ``mid = (left + right) // 2``.
    """

    def __init__(self, size: int, default: T, operation: CombineFn) -> None:
        """Implementation of a Segment Tree data structure.

        Args:
            size (int): the length of the array to represent (at least 1).
            default (T): the value every element starts out with.
            operation (CombineFn): an associative (not necessarily commutative)
                operation to answer range queries for.

        Raises:
            ValueError: if the tree would be empty or `size` is not an integer.
        """
        try:
            size = operator.index(size)
        except TypeError as err:
            raise ValueError(f"SegmentTree size must be an integer, got {size!r}") from err
        if size < 1:
            raise ValueError(f"SegmentTree cannot be empty (size = {size})")
        self.size = size
        self.operation = operation
        self.data: List[T] = [default] * (4 * size)

    @classmethod
    def from_sequence(cls, values: Sequence[T], operation: CombineFn):
        """Build a Segment Tree whose element ``i`` is ``values[i]``.

        Args:
            values (Sequence[T]): the initial elements. Any indexable sequence works,
                numpy arrays included.
            operation (CombineFn): the operation to answer range queries for.

        Raises:
            ValueError: if `values` is empty.

        Returns:
            SegmentTree: the populated tree.
        """
        if len(values) == 0:
            raise ValueError("SegmentTree cannot be built from an empty sequence")
        tree = cls.__new__(cls)
        SegmentTree.__init__(tree, len(values), values[0], operation)
        tree._build(1, 0, tree.size, values)
        return tree

    def _build(self, node: int, left: int, right: int, values: Sequence[T]):
        if left + 1 == right:  # Leaf
            self.data[node] = values[left]
            return

        mid = (left + right) // 2
        self._build(2 * node, left, mid, values)
        self._build(2 * node + 1, mid, right, values)
        self.data[node] = self.operation(self.data[2 * node], self.data[2 * node + 1])

    def __len__(self) -> int:
        """Get the logical length of the tree.

        Returns:
            int: the number of elements, not the size of the backing store.
        """
        return self.size

    def _get(self, start: int, end: int, node: int, left: int, right: int) -> T:
        """Recursively find the result of the operation in a given range.

        Args:
            start (int): the index at the start of the range.
            end (int): the index one past the end of the range.
            node (int): the index of the node the explorative call is at.
            left (int): the index at the start of the range the node is responsible for.
            right (int): the index one past the end of the range the node is responsible for.

        Returns:
            T: the result of the operation at the overlap of the given range and the node's range.
        """
        if start <= left and right <= end:  # Total overlap
            return self.data[node]

        mid = (left + right) // 2
        if end <= mid:  # Partial overlap, but exclusively left
            return self._get(start, end, 2 * node, left, mid)
        elif mid <= start:  # Partial overlap, but exclusively right
            return self._get(start, end, 2 * node + 1, mid, right)
        else:  # Partial overlap, split in both directions
            return self.operation(
                self._get(start, end, 2 * node, left, mid),
                self._get(start, end, 2 * node + 1, mid, right),
            )

    def get(self, start: int = 0, end: Optional[int] = None) -> T:
        """Fold the operation, left to right, over the half-open range ``[start, end)``.

        A single-element range returns that element without calling the operation.

        Args:
            start (int, optional): the index at the start of the range. Defaults to 0.
            end (int, optional): the index one past the end of the range. Defaults to
                the length of the tree.

        Raises:
            TypeError: if a bound is not an integer.
            IndexError: unless ``0 <= start < end <= len(self)``.

        Returns:
            T: the result of the operation over the given range.
        """
        start = operator.index(start)
        end = self.size if end is None else operator.index(end)
        if start < 0 or start >= end:
            raise IndexError(f"invalid range: start = {start}, end = {end}")
        if end > self.size:
            raise IndexError(f"end = {end} > length = {self.size}")
        return self._get(start, end, 1, 0, self.size)

    def _path(self, index: int) -> Tuple[int, List[int]]:
        """Walk from the root down to the leaf holding `index`.

        Returns:
            tuple: (leaf, ancestors)
            leaf (int): the slot of the leaf.
            ancestors (List[int]): the slots of its ancestors, root first.
        """
        node, left, right = 1, 0, self.size
        ancestors = []
        while left + 1 < right:
            ancestors.append(node)
            mid = (left + right) // 2
            if index < mid:
                node, right = 2 * node, mid
            else:
                node, left = 2 * node + 1, mid
        return node, ancestors

    def set(self, index: int, value: T):
        """Replace the element at the given index.

        Only the nodes on the path from the root to the element's leaf are touched.
        Every new value is computed before any is stored, so if the operation raises
        the tree is left as it was.

        Args:
            index (int): the index of the element to set.
            value (T): the new element.

        Raises:
            TypeError: if `index` is not an integer.
            IndexError: unless ``0 <= index < len(self)``.
        """
        index = operator.index(index)
        if not 0 <= index < self.size:
            raise IndexError(f"index = {index} out of range for length {self.size}")

        child, ancestors = self._path(index)
        updates = [(child, value)]
        for node in reversed(ancestors):
            if child & 1:  # Updated child is the right one
                value = self.operation(self.data[2 * node], value)
            else:
                value = self.operation(value, self.data[2 * node + 1])
            updates.append((node, value))
            child = node

        for node, value in updates:
            self.data[node] = value

    def _wrap(self, index) -> int:
        index = operator.index(index)
        if index < 0:  # Argument is relative to the end of the array
            index += self.size
        return index

    def __getitem__(self, key) -> T:
        """Access an element or fold a range.

        ``tree[i]`` is the element at ``i``, while ``tree[i, j]`` and ``tree[i:j]``
        fold the range ``[i, j)``. Negative indices, pair bounds and slice bounds count
        from the end; bounds are not clamped.

        Args:
            key (int, tuple or slice): what to access.

        Returns:
            T: the element or the folded range.
        """
        if isinstance(key, slice):
            if key.step not in (None, 1):
                raise ValueError("SegmentTree slices do not support a step")
            start = 0 if key.start is None else self._wrap(key.start)
            end = self.size if key.stop is None else self._wrap(key.stop)
            return self.get(start, end)
        if isinstance(key, tuple):
            if len(key) != 2:
                raise TypeError(f"expected a (start, end) pair, got {len(key)} indices")
            start, end = key
            return self.get(self._wrap(start), self._wrap(end))

        index = self._wrap(key)
        if not 0 <= index < self.size:
            raise IndexError(f"index = {key} out of range for length {self.size}")
        return self.get(index, index + 1)

    def __setitem__(self, index: int, value: T):
        """Set an element on the given index.

        Args:
            index (int): the index of the element to set, may be negative.
            value (T): the element to set.
        """
        self.set(self._wrap(index), value)

    def _collect(self, node: int, left: int, right: int, end: int, out: List[T]):
        if left >= end:
            return
        if left + 1 == right:
            out.append(self.data[node])
            return
        mid = (left + right) // 2
        self._collect(2 * node, left, mid, end, out)
        self._collect(2 * node + 1, mid, right, end, out)

    def get_values(self, end: Optional[int] = None) -> List[T]:
        """Get the bottom-level leaf values of the segment tree.

        Args:
            end (int, optional): the index one past the last element to include.
                Defaults to the length of the tree.

        Returns:
            List[T]: the saved values, in index order.
        """
        if end is None:
            end = self.size
        if not 0 <= end <= self.size:
            raise IndexError(f"end = {end} out of range for length {self.size}")
        values = []
        self._collect(1, 0, self.size, end, values)
        return values


class SumSegmentTree(SegmentTree):
    """A Segment Tree that allows for efficient sum queries."""

    def __init__(self, size: int, default: float = 0.0):
        """A Segment Tree that allows for efficient sum queries.

        Args:
            size (int): the length of the array.
            default (float, optional): the starting value of every element. Defaults to 0.0.
        """
        super().__init__(size=size, default=default, operation=operator.add)

    @classmethod
    def from_sequence(cls, values: Sequence[float]):
        return super().from_sequence(values, operator.add)

    def sum(self, start=0, end=None) -> float:
        """Return the sum of the elements in the range

        Args:
            start (int, optional): the index of the first element in the sum. Defaults to 0.
            end (int, optional): the index one past the final element in the sum. Defaults to None.

        Returns:
            float: the sum in the given range
        """
        return super().get(start, end)

    def find_prefixsum_index(self, prefixsum: float) -> int:
        """Find the lowest index whose inclusive prefix sum exceeds `prefixsum`.

        If the elements are non-negative weights this samples indices proportionally:
        feed it ``random.random() * tree.sum()``.

        Args:
            prefixsum (float): the mass to locate, in ``[0, tree.sum()]``.

        Raises:
            ValueError: if `prefixsum` lies outside the total mass.

        Returns:
            int: the index holding the given mass (the last index at the upper bound).
        """
        if not 0 <= prefixsum <= self.sum() + 1e-5:
            raise ValueError(f"prefixsum = {prefixsum} outside [0, {self.sum()}]")

        node, left, right = 1, 0, self.size
        while left + 1 < right:  # While non-leaf
            mid = (left + right) // 2
            if self.data[2 * node] > prefixsum:
                node, right = 2 * node, mid
            else:
                prefixsum -= self.data[2 * node]
                node, left = 2 * node + 1, mid
        return left


class MinSegmentTree(SegmentTree):
    """A Segment Tree that allows for efficient min queries."""

    def __init__(self, size: int, default: float = float("inf")):
        """A Segment Tree that allows for efficient min queries.

        Args:
            size (int): the length of the array.
            default (float, optional): the starting value of every element. Defaults to infinity.
        """
        super().__init__(size=size, default=default, operation=min)

    @classmethod
    def from_sequence(cls, values: Sequence[float]):
        return super().from_sequence(values, min)

    def min(self, start=0, end=None) -> float:
        """Return the minimum of all the elements in the range

        Args:
            start (int, optional): the index of the first element to compare to. Defaults to 0.
            end (int, optional): the index one past the final element to compare to. Defaults to None.

        Returns:
            float: the minimum element in the range
        """
        return super().get(start, end)
