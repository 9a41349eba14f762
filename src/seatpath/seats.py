"""
Seat table and editor defaults.

The seats are the fixed ring of anchor positions that relative segments are
expressed against. They never change after the store is built.
"""

from __future__ import annotations

import numpy as np

from .smoothing import SmoothPlan
from .types import AnchorTable, PointLike


def make_anchor_table(points: PointLike) -> AnchorTable:
    """Validated read-only float64 (N,3) copy of `points`."""

    try:
        table = np.array(points, dtype=np.float64)
    except (TypeError, ValueError) as exc:
        raise ValueError("anchors must be an (N,3) array of numbers") from exc
    if table.ndim != 2 or table.shape[1] != 3:
        raise ValueError(f"anchors must have shape (N,3), got {table.shape}")
    if table.shape[0] == 0:
        raise ValueError("anchors must contain at least one position")
    if not np.isfinite(table).all():
        raise ValueError("anchors contains non-finite coordinates")
    table.setflags(write=False)
    return table


DEFAULT_SEATS: AnchorTable = make_anchor_table(
    [
        [0.0, 4.9, 0.0],
        [-3.35, 2.1, 0.0],
        [-1.2, 2.1, 0.0],
        [1.2, 2.1, 0.0],
        [3.35, 2.1, 0.0],
        [-3.35, -0.35, 0.0],
        [-1.2, -0.35, 0.0],
        [1.2, -0.35, 0.0],
        [3.35, -0.35, 0.0],
    ]
)

DEFAULT_RELATIVE_POINT_INDEX = 3
DEFAULT_DURATION = 2.0
# Handle spacing for add_random_segment, in units of the last handle vector.
RANDOM_STEP_SIZE = 0.4
DEFAULT_SMOOTH_PLAN = SmoothPlan.JOIN_ONLY
