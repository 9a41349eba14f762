from __future__ import annotations

from enum import IntEnum

from .geometry import match_tangent_and_distance
from .segment import ControlPoints


class SmoothPlan(IntEnum):
    """Where tangent smoothing is applied along a path."""

    FULL_PATH = 0
    JOIN_ONLY = 1  # only where the relative flags of two neighbours differ


def _relative_flag(segment: ControlPoints) -> bool | None:
    # None (no extras) is its own kind of segment at a seam.
    if segment.path_extra is None:
        return None
    return segment.path_extra.is_relative


def smooth_control_points(
    segments: list[ControlPoints],
    plan: SmoothPlan | int,
) -> list[ControlPoints]:
    """
    Enforce continuity on an absolute (view) path, in place.

    Every join gets point continuity: segments[i + 1].start_point is set to
    segments[i].end_point. Tangents are matched at every join for FULL_PATH and,
    for JOIN_ONLY, only where the raw relative flags differ (a segment without
    extras differs from both flagged kinds). Returns the same list.
    """
    plan = SmoothPlan(plan)
    for cur, nxt in zip(segments, segments[1:]):
        nxt.start_point = cur.end_point.copy()
        if plan is SmoothPlan.JOIN_ONLY and _relative_flag(cur) == _relative_flag(nxt):
            continue
        match_tangent_and_distance(cur, nxt)
    return segments
