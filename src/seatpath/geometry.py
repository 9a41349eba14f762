from __future__ import annotations

from collections.abc import Sequence

import numpy as np
from beartype import beartype
from jaxtyping import Float, jaxtyped

from .segment import ControlPoints, PathExtra
from .types import PathSamples, Point3

_EPS = 1e-12


@jaxtyped(typechecker=beartype)
def translate(point: Point3, offset: Point3) -> Point3:
    return point + offset


@jaxtyped(typechecker=beartype)
def untranslate(point: Point3, offset: Point3) -> Point3:
    return point - offset


@jaxtyped(typechecker=beartype)
def evaluate_cubic_bezier(
    p0: Point3,
    p1: Point3,
    p2: Point3,
    p3: Point3,
    t: float | int,
) -> Point3:
    """
    Point at parameter t in [0, 1] via the cubic Bernstein blend.
    Returns exactly p0 at t=0 and exactly p3 at t=1.
    """
    if not 0.0 <= t <= 1.0:
        raise ValueError(f"t must be in [0, 1], got {t}")
    s = 1.0 - t
    return (s * s * s) * p0 + (3.0 * s * s * t) * p1 + (3.0 * s * t * t) * p2 + (t * t * t) * p3


@jaxtyped(typechecker=beartype)
def sample_cubic_bezier(
    p0: Point3,
    p1: Point3,
    p2: Point3,
    p3: Point3,
    n: int,
) -> Float[np.ndarray, "n 3"]:
    """n points at evenly spaced parameters, both ends included."""

    if n < 2:
        raise ValueError("n must be >= 2")
    t = np.linspace(0.0, 1.0, n, dtype=np.float64)[:, None]
    s = 1.0 - t
    return (s * s * s) * p0 + (3.0 * s * s * t) * p1 + (3.0 * s * t * t) * p2 + (t * t * t) * p3


@jaxtyped(typechecker=beartype)
def sample_path(
    segments: Sequence[ControlPoints],
    samples_per_segment: int = 16,
) -> PathSamples:
    """Samples along a whole path; the point shared by two segments is emitted once."""

    if not segments:
        return np.zeros((0, 3), dtype=np.float64)
    chunks: list[np.ndarray] = []
    for i, seg in enumerate(segments):
        pts = sample_cubic_bezier(*seg.points, samples_per_segment)
        chunks.append(pts if i == 0 else pts[1:])
    return np.concatenate(chunks, axis=0)


def match_tangent_and_distance(seg_a: ControlPoints, seg_b: ControlPoints) -> None:
    """
    Make the handles around the join of seg_a -> seg_b collinear and equally long.

    seg_a.mid_point_b keeps its direction from seg_a.end_point; seg_b.mid_point_a is
    mirrored across seg_b.start_point. Both handles get the mean of the two old
    lengths. Mutates both segments; a zero-length outgoing handle leaves them as is.
    """
    outgoing = seg_a.mid_point_b - seg_a.end_point
    dist_a = float(np.linalg.norm(outgoing))
    dist_b = float(np.linalg.norm(seg_b.mid_point_a - seg_b.start_point))
    if dist_a <= _EPS:
        return
    avg = 0.5 * (dist_a + dist_b)
    direction = outgoing / dist_a
    seg_a.mid_point_b = seg_a.end_point + direction * avg
    seg_b.mid_point_a = seg_b.start_point - direction * avg


def extend_path(
    segments: Sequence[ControlPoints],
    step_size: float,
    is_relative: bool,
    duration: float,
) -> ControlPoints | None:
    """
    A new straight segment continuing the last one along its final handle.

    The direction is last.end_point - last.mid_point_b; handles and end sit at
    1, 2 and 3 times `step_size` along it. Coordinates are absolute.
    Returns None for an empty path or a zero-length final handle.
    """
    if not segments:
        return None
    last = segments[-1]
    direction = last.end_point - last.mid_point_b
    if float(np.linalg.norm(direction)) <= _EPS:
        return None
    origin = last.end_point
    return ControlPoints(
        start_point=origin,
        mid_point_a=origin + step_size * direction,
        mid_point_b=origin + 2.0 * step_size * direction,
        end_point=origin + 3.0 * step_size * direction,
        path_extra=PathExtra(duration=duration, is_relative=is_relative),
    )
