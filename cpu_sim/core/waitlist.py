"""Comparator-ordered waiting list."""

from __future__ import annotations

from typing import Callable, Generic, Iterator, Optional, TypeVar


T = TypeVar("T")
Comparator = Callable[[T, T], int]


class OrderedWaitlist(Generic[T]):
    """Sequence kept in non-decreasing order under a comparator.

    Insertion is stable: an item lands in front of the first entry it compares
    strictly less than, so entries with equal keys keep arrival order. ``None``
    is the empty result of every lookup and cannot be stored.
    """

    def __init__(self, compare: Comparator) -> None:
        self._compare = compare
        self._items: list[T] = []

    def insert(self, item: T, compare: Optional[Comparator] = None) -> int:
        if item is None:
            raise ValueError("waitlist cannot hold None")
        cmp = compare or self._compare
        for position, existing in enumerate(self._items):
            if cmp(item, existing) < 0:
                self._items.insert(position, item)
                return position
        self._items.append(item)
        return len(self._items) - 1

    def peek(self) -> Optional[T]:
        return self._items[0] if self._items else None

    def poll(self) -> Optional[T]:
        return self._items.pop(0) if self._items else None

    def at(self, index: int) -> Optional[T]:
        if 0 <= index < len(self._items):
            return self._items[index]
        return None

    def remove_all(self, item: T) -> int:
        """Drop every entry that is ``item`` itself; the comparator is not consulted."""
        kept = [existing for existing in self._items if existing is not item]
        removed = len(self._items) - len(kept)
        self._items = kept
        return removed

    def remove_at(self, index: int) -> Optional[T]:
        if 0 <= index < len(self._items):
            return self._items.pop(index)
        return None

    def size(self) -> int:
        return len(self._items)

    def clear(self) -> None:
        self._items.clear()

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[T]:
        return iter(list(self._items))
