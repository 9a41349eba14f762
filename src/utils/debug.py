from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING

import numpy as np

if TYPE_CHECKING:
    from ..seatpath.segment import ControlPoints

_verbose = False
_seen: set[str] = set()


def set_verbose(enabled: bool) -> None:
    global _verbose
    _verbose = enabled


def is_verbose() -> bool:
    return _verbose


def log(message: str) -> None:
    if _verbose:
        print(message)


def log_once(key: str, message: str) -> None:
    if _verbose and key not in _seen:
        _seen.add(key)
        log(message)


def log_segments(name: str, segments: Sequence[ControlPoints]) -> None:
    """Count, relative count and bounding box of a segment list."""

    if not _verbose:
        return
    if not segments:
        log(f"{name}: n=0")
        return
    pts = np.concatenate([seg.as_matrix() for seg in segments], axis=0)
    n_rel = sum(1 for seg in segments if seg.is_relative)
    lo = pts.min(axis=0)
    hi = pts.max(axis=0)
    log(
        f"{name}: n={len(segments)} relative={n_rel} "
        f"min=({lo[0]:.4g},{lo[1]:.4g},{lo[2]:.4g}) "
        f"max=({hi[0]:.4g},{hi[1]:.4g},{hi[2]:.4g})"
    )
