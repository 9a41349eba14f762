from . import (
    export_svg,
    geometry,
    history,
    seats,
    segment,
    segment_io,
    smoothing,
    store,
    transform,
)
from .segment import ControlPoints, PathExtra
from .smoothing import SmoothPlan
from .store import CurveState, CurveStore

__all__ = [
    "geometry",
    "segment",
    "transform",
    "smoothing",
    "seats",
    "history",
    "store",
    "segment_io",
    "export_svg",
    "ControlPoints",
    "PathExtra",
    "SmoothPlan",
    "CurveState",
    "CurveStore",
]
