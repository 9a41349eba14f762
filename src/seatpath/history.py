from __future__ import annotations

from typing import Generic, TypeVar

T = TypeVar("T")


class History(Generic[T]):
    """
    Undo/redo stacks of whole-state snapshots.

    `record` is called with the state *before* a mutation. `undo`/`redo` take
    the live state, stash it on the opposite stack and hand back the snapshot
    to restore, or None when there is nothing to move to.
    `limit` caps the undo depth (oldest entries dropped); None is unbounded.
    """

    def __init__(self, limit: int | None = None) -> None:
        if limit is not None and limit < 1:
            raise ValueError("limit must be >= 1 or None")
        self.limit = limit
        self._past: list[T] = []
        self._future: list[T] = []

    @property
    def can_undo(self) -> bool:
        return bool(self._past)

    @property
    def can_redo(self) -> bool:
        return bool(self._future)

    @property
    def undo_depth(self) -> int:
        return len(self._past)

    @property
    def redo_depth(self) -> int:
        return len(self._future)

    def record(self, snapshot: T) -> None:
        self._past.append(snapshot)
        self._future.clear()
        if self.limit is not None and len(self._past) > self.limit:
            del self._past[0]

    def undo(self, current: T) -> T | None:
        if not self._past:
            return None
        self._future.append(current)
        return self._past.pop()

    def redo(self, current: T) -> T | None:
        if not self._future:
            return None
        self._past.append(current)
        return self._future.pop()

    def clear(self) -> None:
        self._past.clear()
        self._future.clear()
