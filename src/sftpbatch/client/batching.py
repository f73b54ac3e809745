"""Lazy, order-preserving partitioning of a sequence into fixed-size batches."""

from __future__ import annotations

from itertools import islice
from typing import TYPE_CHECKING, TypeVar

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator

T = TypeVar("T")


def batched(items: Iterable[T], size: int) -> Iterator[list[T]]:
    """Split items into consecutive groups of at most size elements.

    Only one group is held in memory at a time and consumed elements are
    never re-read, so items may be an arbitrarily large iterator.
    Concatenating the yielded groups reproduces items exactly.

    A non-positive size yields nothing at all, not an error.

    Args:
        items: Source iterable.
        size: Maximum group length.

    Yields:
        Lists of length size, the last one possibly shorter. Never empty.
    """
    if size <= 0:
        return

    cursor = iter(items)
    while True:
        group = list(islice(cursor, size))
        if not group:
            return
        yield group
