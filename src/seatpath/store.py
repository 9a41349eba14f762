"""
Curve-state store.

Owns two parallel segment lists:
- `segments`: canonical storage, each entry in the space its own
  `path_extra.is_relative` says (mixed lists are fine).
- `view_segments`: every entry resolved to absolute coordinates against the
  currently selected seat. Derived only; never edit it from outside.

Every mutation builds fresh, frozen lists and commits them as one `CurveState`.
The state before the mutation is pushed onto the undo history and subscribers
are called with the new state. Invalid input raises before anything changes.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass, replace
from typing import Any

import numpy as np

from ..utils import debug
from .geometry import extend_path
from .history import History
from .seats import (
    DEFAULT_RELATIVE_POINT_INDEX,
    DEFAULT_SEATS,
    DEFAULT_SMOOTH_PLAN,
    RANDOM_STEP_SIZE,
    make_anchor_table,
)
from .segment import (
    CONTROL_POINT_NAMES,
    ControlPoints,
    PathExtra,
    clone_segments,
    default_segment,
    remove_by_value,
)
from .segment_io import format_export, segment_from_dict
from .smoothing import SmoothPlan, smooth_control_points
from .transform import to_absolute_array, to_relative_storage_array
from .types import AnchorTable, PointLike


@dataclass(frozen=True)
class CurveState:
    segments: tuple[ControlPoints, ...]
    view_segments: tuple[ControlPoints, ...]
    relative_point_index: int
    play_animation: bool


Listener = Callable[[CurveState], None]


def _publish(segments: Iterable[ControlPoints]) -> tuple[ControlPoints, ...]:
    return tuple(seg.clone().freeze() for seg in segments)


def _is_index(value: object) -> bool:
    return isinstance(value, (int, np.integer)) and not isinstance(value, bool)


def _coerce_segment(value: ControlPoints | Mapping[str, Any]) -> ControlPoints:
    if isinstance(value, ControlPoints):
        return value.clone()
    if isinstance(value, Mapping):
        return segment_from_dict(value)
    raise ValueError(f"expected a ControlPoints or mapping, got {type(value).__name__}")


class CurveStore:
    def __init__(
        self,
        anchors: PointLike = DEFAULT_SEATS,
        segments: Iterable[ControlPoints | Mapping[str, Any]] | None = None,
        relative_point_index: int = DEFAULT_RELATIVE_POINT_INDEX,
        play_animation: bool = True,
        history_limit: int | None = None,
    ) -> None:
        self._anchors = make_anchor_table(anchors)
        index = self._check_anchor_index(relative_point_index)
        if segments is None:
            segments = [default_segment()]
        canonical = [_coerce_segment(s) for s in segments]
        self._state = CurveState(
            segments=_publish(canonical),
            view_segments=_publish(to_absolute_array(canonical, self._anchors, index)),
            relative_point_index=index,
            play_animation=bool(play_animation),
        )
        self._history: History[CurveState] = History(limit=history_limit)
        self._listeners: list[Listener] = []

    # ---- read access ----

    @property
    def anchors(self) -> AnchorTable:
        return self._anchors

    @property
    def state(self) -> CurveState:
        return self._state

    @property
    def segments(self) -> tuple[ControlPoints, ...]:
        return self._state.segments

    @property
    def view_segments(self) -> tuple[ControlPoints, ...]:
        return self._state.view_segments

    @property
    def relative_point_index(self) -> int:
        return self._state.relative_point_index

    @property
    def play_animation(self) -> bool:
        return self._state.play_animation

    @property
    def can_undo(self) -> bool:
        return self._history.can_undo

    @property
    def can_redo(self) -> bool:
        return self._history.can_redo

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Call `listener(state)` after every commit, undo and redo. Returns an unsubscribe."""

        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    # ---- mutations ----

    def update_segment(self, index: int, points: Mapping[str, Any]) -> None:
        """
        Merge `points` (any of start_point, mid_point_a, mid_point_b, end_point,
        path_extra) into view_segments[index], given in view (absolute)
        coordinates. The whole view list is then converted back to storage space.
        """
        self._check_segment_index(index)
        unknown = set(points) - set(CONTROL_POINT_NAMES) - {"path_extra"}
        if unknown:
            raise ValueError(f"unknown segment fields: {sorted(unknown)}")

        state = self._state
        view = clone_segments(state.view_segments)
        view[index] = view[index].replace(**points)
        canonical = to_relative_storage_array(view, self._anchors, state.relative_point_index)
        self._commit(
            replace(state, segments=_publish(canonical), view_segments=_publish(view)),
            f"update_segment index={index} fields={sorted(points)}",
        )

    def add_segment(self, segment: ControlPoints | Mapping[str, Any]) -> None:
        """Append a segment given in canonical (storage) space."""

        new_segment = _coerce_segment(segment)
        canonical = [*clone_segments(self._state.segments), new_segment]
        self._commit(self._derive(canonical), f"add_segment n={len(canonical)}")

    def add_random_segment(self, is_relative: bool, duration: float) -> None:
        """
        Append a straight segment continuing the last view segment.

        No-op when there is nothing to continue from (empty path or a
        zero-length final handle).
        """
        extra = PathExtra(duration=duration, is_relative=is_relative)
        state = self._state
        absolute = extend_path(
            state.view_segments, RANDOM_STEP_SIZE, extra.is_relative, extra.duration
        )
        if absolute is None:
            debug.log("add_random_segment: no direction to extend along, skipped")
            return
        stored = to_relative_storage_array([absolute], self._anchors, state.relative_point_index)
        canonical = [*clone_segments(state.segments), *stored]
        self._commit(
            self._derive(canonical),
            f"add_random_segment relative={extra.is_relative} duration={extra.duration:g}",
        )

    def remove_segment(self, segment: ControlPoints) -> None:
        """Drop every canonical segment equal to `segment`; no match leaves the list as is."""

        if not isinstance(segment, ControlPoints):
            raise ValueError(f"expected a ControlPoints, got {type(segment).__name__}")
        canonical = remove_by_value(clone_segments(self._state.segments), segment)
        removed = len(self._state.segments) - len(canonical)
        self._commit(self._derive(canonical), f"remove_segment removed={removed}")

    def remove_segments(self) -> None:
        self._commit(
            replace(self._state, segments=(), view_segments=()), "remove_segments"
        )

    def set_relative_point_index(
        self, index: int, plan: SmoothPlan | int = DEFAULT_SMOOTH_PLAN
    ) -> None:
        """Select another seat; the view list is re-derived and smoothed, storage is untouched."""

        index = self._check_anchor_index(index)
        plan = SmoothPlan(plan)
        state = self._state
        view = smooth_control_points(
            to_absolute_array(state.segments, self._anchors, index), plan
        )
        self._commit(
            replace(state, view_segments=_publish(view), relative_point_index=index),
            f"set_relative_point_index index={index} plan={plan.name}",
        )

    def smooth_curve_paths(self, plan: SmoothPlan | int = DEFAULT_SMOOTH_PLAN) -> None:
        """Smooth the view list and write it back into storage space."""

        plan = SmoothPlan(plan)
        state = self._state
        view = smooth_control_points(clone_segments(state.view_segments), plan)
        canonical = to_relative_storage_array(view, self._anchors, state.relative_point_index)
        self._commit(
            replace(state, segments=_publish(canonical), view_segments=_publish(view)),
            f"smooth_curve_paths plan={plan.name}",
        )

    def set_play_animation(self, value: bool) -> None:
        self._commit(
            replace(self._state, play_animation=bool(value)),
            f"set_play_animation {bool(value)}",
        )

    def import_curve_paths(
        self, segments: Iterable[ControlPoints | Mapping[str, Any]]
    ) -> None:
        """Replace the canonical list wholesale."""

        canonical: list[ControlPoints] = []
        for i, item in enumerate(segments):
            try:
                canonical.append(_coerce_segment(item))
            except ValueError as exc:
                raise ValueError(f"segment {i}: {exc}") from exc
        self._commit(self._derive(canonical), f"import_curve_paths n={len(canonical)}")

    def undo(self) -> bool:
        previous = self._history.undo(self._state)
        if previous is None:
            return False
        self._state = previous
        debug.log(f"undo: depth={self._history.undo_depth}")
        self._notify()
        return True

    def redo(self) -> bool:
        following = self._history.redo(self._state)
        if following is None:
            return False
        self._state = following
        debug.log(f"redo: depth={self._history.redo_depth}")
        self._notify()
        return True

    def clear_history(self) -> None:
        self._history.clear()

    def export_curve_paths(self) -> str:
        return format_export(self._state.segments)

    # ---- internals ----

    def _derive(self, canonical: list[ControlPoints]) -> CurveState:
        index = self._state.relative_point_index
        view = to_absolute_array(canonical, self._anchors, index)
        return replace(
            self._state, segments=_publish(canonical), view_segments=_publish(view)
        )

    def _commit(self, new_state: CurveState, action: str) -> None:
        self._history.record(self._state)
        self._state = new_state
        debug.log(action)
        debug.log_segments("view_segments", new_state.view_segments)
        self._notify()

    def _notify(self) -> None:
        for listener in list(self._listeners):
            listener(self._state)

    def _check_anchor_index(self, index: int) -> int:
        n = self._anchors.shape[0]
        if not _is_index(index) or not 0 <= index < n:
            raise IndexError(f"anchor index {index!r} out of range for {n} anchors")
        return int(index)

    def _check_segment_index(self, index: int) -> None:
        n = len(self._state.segments)
        if not _is_index(index) or not 0 <= index < n:
            raise IndexError(f"segment index {index!r} out of range for {n} segments")
