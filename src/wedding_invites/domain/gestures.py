"""Drag-to-reorder gesture handling for ordered collections."""

from dataclasses import dataclass
from enum import StrEnum

from wedding_invites.domain.collections import OrderedCollection


class GestureState(StrEnum):
    """Reorder gesture lifecycle states."""

    IDLE = "idle"
    DRAGGING = "dragging"


@dataclass(frozen=True)
class ItemBounds:
    """Rendered bounding box of one list row."""

    key: int
    x: float
    y: float
    width: float
    height: float

    @property
    def center(self) -> tuple[float, float]:
        return (self.x + self.width / 2, self.y + self.height / 2)


class ReorderGesture:
    """Turns one pointer or keyboard drag into a single ``move`` instruction.

    While dragging, only the visual offset and the resolved target position
    change; the collection is mutated once, on ``drop``. If the collection
    changed structurally after ``start``, the drop is discarded so a stale key
    is never moved.
    """

    def __init__(self, collection: OrderedCollection) -> None:
        self.collection = collection
        self.state = GestureState.IDLE
        self.active_key: int | None = None
        self.target_position: int | None = None
        self.offset: tuple[float, float] = (0.0, 0.0)
        self._layout: list[ItemBounds] = []
        self._origin: tuple[float, float] = (0.0, 0.0)
        self._start_revision = 0

    def start(
        self,
        key: int,
        layout: list[ItemBounds] | None = None,
        pointer: tuple[float, float] | None = None,
    ) -> None:
        """Begin dragging the item with ``key``."""
        if self.state is GestureState.DRAGGING:
            raise ValueError("A reorder gesture is already in progress")
        if key not in self.collection:
            raise ValueError(f"Unknown item key: {key}")
        self._layout = sorted(layout or [], key=lambda bounds: (bounds.y, bounds.x))
        if pointer is None:
            pointer = self._center_of(key)
        self._origin = pointer
        self.offset = (0.0, 0.0)
        self.active_key = key
        self.target_position = self.collection.position_of(key)
        self._start_revision = self.collection.revision
        self.state = GestureState.DRAGGING

    def pointer_moved(self, x: float, y: float) -> int | None:
        """Track the pointer and return the target position under it."""
        if self.state is not GestureState.DRAGGING:
            return None
        self.offset = (x - self._origin[0], y - self._origin[1])
        self.target_position = self._closest_position(x, y)
        return self.target_position

    def key_step(self, delta: int) -> int | None:
        """Shift the target position by ``delta`` rows (keyboard dragging)."""
        if self.state is not GestureState.DRAGGING:
            return None
        current = self.target_position
        if current is None:
            current = self.collection.position_of(self.active_key) or 0
        last = len(self.collection) - 1
        self.target_position = max(0, min(current + delta, last))
        return self.target_position

    def drop(self) -> bool:
        """Finish the gesture; return whether a move was applied."""
        if self.state is not GestureState.DRAGGING:
            return False
        key = self.active_key
        target = self.target_position
        stale = self.collection.revision != self._start_revision
        self._reset()
        if key is None or target is None or stale:
            return False
        self.collection.move(key, target)
        return True

    def cancel(self) -> None:
        """Abandon the gesture without touching the collection."""
        self._reset()

    def _reset(self) -> None:
        self.state = GestureState.IDLE
        self.active_key = None
        self.target_position = None
        self.offset = (0.0, 0.0)
        self._layout = []

    def _center_of(self, key: int) -> tuple[float, float]:
        for bounds in self._layout:
            if bounds.key == key:
                return bounds.center
        return (0.0, 0.0)

    def _closest_position(self, x: float, y: float) -> int | None:
        rows = [bounds for bounds in self._layout if bounds.key in self.collection]
        if not rows:
            return None
        left = min(bounds.x for bounds in rows)
        top = min(bounds.y for bounds in rows)
        right = max(bounds.x + bounds.width for bounds in rows)
        bottom = max(bounds.y + bounds.height for bounds in rows)
        if not (left <= x <= right and top <= y <= bottom):
            return None
        closest = min(
            rows,
            key=lambda bounds: (bounds.center[0] - x) ** 2
            + (bounds.center[1] - y) ** 2,
        )
        return self.collection.position_of(closest.key)
