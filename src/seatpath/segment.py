"""Segment model: one cubic Bezier piece of a seat path plus its animation extras."""

from __future__ import annotations

import math
from collections.abc import Iterable, Sequence
from dataclasses import dataclass

import numpy as np

from .types import Point3, PointLike, SegmentMatrix

CONTROL_POINT_NAMES: tuple[str, str, str, str] = (
    "start_point",
    "mid_point_a",
    "mid_point_b",
    "end_point",
)


def as_point(value: PointLike, field: str = "point") -> Point3:
    """Return a fresh float64 (3,) copy of `value`, or raise ValueError naming `field`."""

    try:
        arr = np.array(value, dtype=np.float64)
    except (TypeError, ValueError) as exc:
        raise ValueError(f"{field} must be 3 numbers, got {value!r}") from exc
    if arr.shape != (3,):
        raise ValueError(f"{field} must have 3 components, got shape {arr.shape}")
    if not np.isfinite(arr).all():
        raise ValueError(f"{field} contains non-finite coordinates")
    return arr


@dataclass(frozen=True)
class PathExtra:
    duration: float = 2.0
    is_relative: bool = False

    def __post_init__(self) -> None:
        try:
            duration = float(self.duration)
        except (TypeError, ValueError) as exc:
            raise ValueError(f"duration must be a number, got {self.duration!r}") from exc
        if not math.isfinite(duration) or duration <= 0:
            raise ValueError(f"duration must be finite and > 0, got {duration}")
        object.__setattr__(self, "duration", duration)
        object.__setattr__(self, "is_relative", bool(self.is_relative))


@dataclass(eq=False)
class ControlPoints:
    """
    One cubic Bezier segment: start, two handles, end.

    Points are stored as float64 (3,) arrays. The constructor copies and
    validates them, so a ControlPoints never aliases the caller's arrays.
    `path_extra` is immutable and may be shared between clones.
    Equality is exact and structural (no tolerance).
    """

    start_point: Point3
    mid_point_a: Point3
    mid_point_b: Point3
    end_point: Point3
    path_extra: PathExtra | None = None

    def __post_init__(self) -> None:
        for name in CONTROL_POINT_NAMES:
            setattr(self, name, as_point(getattr(self, name), name))
        if self.path_extra is not None and not isinstance(self.path_extra, PathExtra):
            raise ValueError(
                f"path_extra must be a PathExtra or None, got {type(self.path_extra).__name__}"
            )

    @property
    def is_relative(self) -> bool:
        # Missing extras mean absolute coordinates.
        return self.path_extra is not None and self.path_extra.is_relative

    @property
    def points(self) -> tuple[Point3, Point3, Point3, Point3]:
        return (self.start_point, self.mid_point_a, self.mid_point_b, self.end_point)

    def as_matrix(self) -> SegmentMatrix:
        return np.stack(self.points, axis=0)

    def clone(self) -> ControlPoints:
        return ControlPoints(*self.points, path_extra=self.path_extra)

    def replace(self, **overrides: object) -> ControlPoints:
        """Return a copy with some of the four points and/or `path_extra` overridden."""

        unknown = set(overrides) - set(CONTROL_POINT_NAMES) - {"path_extra"}
        if unknown:
            raise ValueError(f"unknown segment fields: {sorted(unknown)}")
        values: dict[str, object] = {name: getattr(self, name) for name in CONTROL_POINT_NAMES}
        values["path_extra"] = self.path_extra
        values.update(overrides)
        return ControlPoints(**values)  # type: ignore[arg-type]

    def freeze(self) -> ControlPoints:
        for p in self.points:
            p.setflags(write=False)
        return self

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ControlPoints):
            return NotImplemented
        return self.path_extra == other.path_extra and all(
            np.array_equal(a, b) for a, b in zip(self.points, other.points)
        )


def clone_segments(segments: Iterable[ControlPoints]) -> list[ControlPoints]:
    return [seg.clone() for seg in segments]


def segments_equal(a: Sequence[ControlPoints], b: Sequence[ControlPoints]) -> bool:
    return len(a) == len(b) and all(x == y for x, y in zip(a, b))


def remove_by_value(
    segments: Iterable[ControlPoints], target: ControlPoints
) -> list[ControlPoints]:
    """New list without every element structurally equal to `target`."""

    return [seg for seg in segments if seg != target]


def default_segment() -> ControlPoints:
    """The segment a fresh editor session starts with."""

    return ControlPoints(
        start_point=[-2.0, -2.0, 1.0],
        mid_point_a=[-1.0, 1.0, 4.0],
        mid_point_b=[1.0, -1.0, -4.0],
        end_point=[2.0, 2.0, -1.0],
    )


def placeholder_segment() -> ControlPoints:
    """Recovery value handed out when a conversion receives no segment at all."""

    return ControlPoints(
        start_point=[1.91, -0.91, 0.0],
        mid_point_a=[0.0, -0.62, 0.0],
        mid_point_b=[0.0, 0.35, 0.0],
        end_point=[0.0, 1.23, 0.0],
        path_extra=PathExtra(duration=2.0, is_relative=False),
    )
