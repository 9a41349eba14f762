"""
Relative <-> absolute conversion of segments against the seat table.

A segment flagged `is_relative` stores its points as offsets from the selected
seat; absolute segments pass through untouched. Each segment is converted by its
own flag, so one path may mix both kinds.
"""

from __future__ import annotations

from collections.abc import Iterable

from ..utils import debug
from .geometry import translate, untranslate
from .segment import ControlPoints, placeholder_segment
from .types import AnchorTable, Point3


def anchor_offset(anchors: AnchorTable, index: int) -> Point3:
    if not 0 <= index < anchors.shape[0]:
        raise IndexError(
            f"anchor index {index} out of range for {anchors.shape[0]} anchors"
        )
    return anchors[index]


def to_absolute(
    segment: ControlPoints, anchors: AnchorTable, index: int
) -> ControlPoints:
    if not segment.is_relative:
        return segment.clone()
    offset = anchor_offset(anchors, index)
    return ControlPoints(
        *(translate(p, offset) for p in segment.points),
        path_extra=segment.path_extra,
    )


def to_relative_storage(
    segment: ControlPoints | None, anchors: AnchorTable, index: int
) -> ControlPoints:
    if segment is None:
        # Recovery value only; callers should not build on it.
        debug.log_once(
            "placeholder_segment",
            "to_relative_storage: no segment given, returning placeholder",
        )
        return placeholder_segment()
    if not segment.is_relative:
        return segment.clone()
    offset = anchor_offset(anchors, index)
    return ControlPoints(
        *(untranslate(p, offset) for p in segment.points),
        path_extra=segment.path_extra,
    )


def to_absolute_array(
    segments: Iterable[ControlPoints], anchors: AnchorTable, index: int
) -> list[ControlPoints]:
    return [to_absolute(seg, anchors, index) for seg in segments]


def to_relative_storage_array(
    segments: Iterable[ControlPoints | None], anchors: AnchorTable, index: int
) -> list[ControlPoints]:
    return [to_relative_storage(seg, anchors, index) for seg in segments]
