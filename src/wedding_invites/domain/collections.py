"""Keyed, positionally ordered item collections."""

import dataclasses
from collections.abc import Iterable, Iterator, Mapping
from typing import Generic, TypeVar

T = TypeVar("T")


class OrderedCollection(Generic[T]):
    """Items addressed by a stable key and rendered in a dense position order.

    Keys are integers unique within one collection and never reused, so a key
    handed out by ``insert`` keeps pointing at the same item across moves and
    removals of other items. Positions are the indices of the internal key
    order and therefore always form a dense zero-based sequence.
    """

    def __init__(self) -> None:
        self._items: dict[int, T] = {}
        self._order: list[int] = []
        self._next_key = 0
        self._revision = 0

    @classmethod
    def from_ordered_list(cls, items: Iterable[T]) -> "OrderedCollection[T]":
        """Hydrate a collection; each item's key is its input index."""
        collection: OrderedCollection[T] = cls()
        for item in items:
            collection.insert(item)
        return collection

    @property
    def revision(self) -> int:
        """Counter bumped by every insert, remove and move."""
        return self._revision

    def insert(self, item: T) -> int:
        """Append an item and return its new key."""
        key = self._next_key
        self._next_key += 1
        self._items[key] = item
        self._order.append(key)
        self._revision += 1
        return key

    def remove(self, key: int) -> None:
        """Delete an item by key; unknown keys are ignored."""
        if key not in self._items:
            return
        del self._items[key]
        self._order.remove(key)
        self._revision += 1

    def update(self, key: int, **patch: object) -> None:
        """Merge field values into an item; unknown keys are ignored."""
        item = self._items.get(key)
        if item is None:
            return
        self._items[key] = _patched(item, patch)

    def move(self, key: int, to_position: int) -> None:
        """Relocate an item, clamping the target position to the list."""
        if key not in self._items:
            return
        target = max(0, min(to_position, len(self._order) - 1))
        self._order.remove(key)
        self._order.insert(target, key)
        self._revision += 1

    def get(self, key: int) -> T | None:
        """Return the item for a key, if present."""
        return self._items.get(key)

    def position_of(self, key: int) -> int | None:
        """Return the current position of a key, if present."""
        if key not in self._items:
            return None
        return self._order.index(key)

    def keys(self) -> list[int]:
        """Return keys in position order."""
        return list(self._order)

    def entries(self) -> list[tuple[int, T]]:
        """Return ``(key, item)`` pairs in position order."""
        return [(key, self._items[key]) for key in self._order]

    def to_ordered_list(self) -> list[T]:
        """Return a snapshot of the items in position order."""
        return [self._items[key] for key in self._order]

    def __len__(self) -> int:
        return len(self._order)

    def __contains__(self, key: object) -> bool:
        return key in self._items

    def __iter__(self) -> Iterator[T]:
        return iter(self.to_ordered_list())


def _patched(item: T, patch: Mapping[str, object]) -> T:
    if dataclasses.is_dataclass(item) and not isinstance(item, type):
        return dataclasses.replace(item, **patch)
    if isinstance(item, Mapping):
        return type(item)({**item, **patch})  # type: ignore[call-arg]
    raise TypeError(f"Cannot patch item of type {type(item).__name__}")
