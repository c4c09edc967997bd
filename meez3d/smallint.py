"""Compact containers keyed by small non-negative integers."""

from __future__ import annotations

import operator
from typing import Any, Generic, Iterator, List, TypeVar

K = TypeVar("K")
V = TypeVar("V")
T = TypeVar("T")

_MISSING = object()


def _slot(key: Any) -> int:
    index = operator.index(key)
    if index < 0:
        raise ValueError(f"key must be non-negative: {key!r}")
    return index


class SmallIntMap(Generic[K, V]):
    """A map whose keys convert to small integers, stored in a list."""

    def __init__(self) -> None:
        self._values: List[Any] = []

    def insert(self, key: K, value: V) -> None:
        index = _slot(key)
        if index >= len(self._values):
            self._values.extend([_MISSING] * (index + 1 - len(self._values)))
        self._values[index] = value

    def get(self, key: K, default: Any = None) -> Any:
        index = _slot(key)
        if index >= len(self._values):
            return default
        value = self._values[index]
        return default if value is _MISSING else value

    def __contains__(self, key: object) -> bool:
        try:
            index = _slot(key)
        except (TypeError, ValueError):
            return False
        return index < len(self._values) and self._values[index] is not _MISSING

    def __setitem__(self, key: K, value: V) -> None:
        self.insert(key, value)

    def __getitem__(self, key: K) -> V:
        value = self.get(key, _MISSING)
        if value is _MISSING:
            raise KeyError(key)
        return value


class SmallIntSet(Generic[T]):
    """A small set kept as a list; membership is a linear scan."""

    def __init__(self) -> None:
        self._items: List[T] = []

    def insert(self, item: T) -> None:
        self._items.append(item)

    def contains(self, item: T) -> bool:
        return item in self._items

    def __contains__(self, item: object) -> bool:
        return item in self._items

    def clear(self) -> None:
        self._items.clear()

    def __iter__(self) -> Iterator[T]:
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)