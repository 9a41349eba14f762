from __future__ import annotations

from collections.abc import Sequence

import numpy as np
import svgwrite  # type: ignore[reportMissingTypeStubs]

from .geometry import sample_path
from .segment import ControlPoints
from .types import AnchorTable

PLANES: dict[str, tuple[int, int]] = {"xy": (0, 1), "xz": (0, 2), "yz": (1, 2)}


def _axes(plane: str) -> tuple[int, int]:
    if plane not in PLANES:
        raise ValueError(f"plane must be one of {sorted(PLANES)}, got {plane!r}")
    return PLANES[plane]


def _project(points: np.ndarray, plane: str, flip_y: bool) -> np.ndarray:
    """(K,3) -> (K,2) on `plane`; flip_y makes +up point up in SVG user space."""

    i, j = _axes(plane)
    out = np.stack([points[..., i], points[..., j]], axis=-1)
    if flip_y:
        out[..., 1] *= -1.0
    return out


def segments_to_svg_path_d(
    segments: Sequence[ControlPoints],
    *,
    plane: str = "xy",
    precision: int = 3,
    flip_y: bool = True,
) -> str:
    """SVG path 'd' for absolute segments projected onto `plane`.

    A new subpath ("M") starts wherever a segment does not begin at the
    previous end point.
    """
    if not segments:
        return ""
    fmt = f".{int(precision)}f"

    def f(x: float) -> str:
        s = format(float(x), fmt)
        # flipped zeros and tiny negatives must not print as "-0.000"
        return s[1:] if s.startswith("-") and float(s) == 0.0 else s

    parts: list[str] = []
    prev_end: np.ndarray | None = None
    for seg in segments:
        p0, c1, c2, p3 = _project(seg.as_matrix(), plane, flip_y)
        if prev_end is None or not np.array_equal(seg.start_point, prev_end):
            parts.append(f"M {f(p0[0])},{f(p0[1])}")
        parts.append(
            f"C {f(c1[0])},{f(c1[1])} {f(c2[0])},{f(c2[1])} {f(p3[0])},{f(p3[1])}"
        )
        prev_end = seg.end_point
    return " ".join(parts)


def export_view_svg(
    out_path: str,
    segments: Sequence[ControlPoints],
    anchors: AnchorTable | None = None,
    *,
    plane: str = "xy",
    flip_y: bool = True,
    stroke: str = "#111111",
    stroke_width: float | str = 0.03,
    anchor_radius: float = 0.12,
    anchor_fill: str = "#c0392b",
    viewbox: tuple[float, float, float, float] | None = None,
    canvas_size: tuple[float, float] | tuple[str, str] | None = None,
) -> None:
    """
    Write the view path (absolute coordinates) and the seat markers as SVG.
    The viewBox defaults to the sampled path plus seats with a small margin.
    """
    if viewbox is None:
        pts = [_project(sample_path(segments, 24), plane, flip_y)]
        if anchors is not None:
            pts.append(_project(np.asarray(anchors), plane, flip_y))
        allp = np.concatenate(pts, axis=0)
        if allp.shape[0] == 0:
            viewbox = (-1.0, -1.0, 2.0, 2.0)
        else:
            minx, miny = allp.min(axis=0)
            maxx, maxy = allp.max(axis=0)
            pad = 0.5
            viewbox = (
                float(minx - pad),
                float(miny - pad),
                float((maxx - minx) + 2 * pad),
                float((maxy - miny) + 2 * pad),
            )

    if canvas_size is None:
        dwg = svgwrite.Drawing(out_path, profile="tiny")
    else:
        dwg = svgwrite.Drawing(out_path, profile="tiny", size=canvas_size)
    dwg.attribs["viewBox"] = f"{viewbox[0]} {viewbox[1]} {viewbox[2]} {viewbox[3]}"

    if anchors is not None:
        for x, y in _project(np.asarray(anchors), plane, flip_y):
            dwg.add(dwg.circle(center=(float(x), float(y)), r=anchor_radius, fill=anchor_fill))

    d = segments_to_svg_path_d(segments, plane=plane, flip_y=flip_y)
    if d:
        dwg.add(dwg.path(d=d, stroke=stroke, fill="none", stroke_width=stroke_width))
    dwg.save()
