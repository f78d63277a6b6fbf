from typing import Callable, TypeVar

#: The element type a tree is generic over.
T = TypeVar("T")

#: An associative binary operation over tree elements.
CombineFn = Callable[[T, T], T]
