from __future__ import annotations

import json
from collections.abc import Iterable, Mapping
from pathlib import Path
from typing import Any

import numpy as np

from .segment import ControlPoints, PathExtra, as_point
from .types import Point3

# Python field name -> key used by the editor's exported objects.
FIELD_KEYS: dict[str, str] = {
    "start_point": "startPoint",
    "mid_point_a": "midPointA",
    "mid_point_b": "midPointB",
    "end_point": "endPoint",
}


def segment_from_dict(data: Mapping[str, Any]) -> ControlPoints:
    """Build a segment from the editor's `ControlPoints` object shape."""

    if not isinstance(data, Mapping):
        raise ValueError(f"segment must be a mapping, got {type(data).__name__}")
    points: dict[str, Point3] = {}
    for name, key in FIELD_KEYS.items():
        if key not in data:
            raise ValueError(f"segment is missing '{key}'")
        points[name] = as_point(data[key], key)

    extra_raw = data.get("pathExtra")
    path_extra = None
    if extra_raw is not None:
        if not isinstance(extra_raw, Mapping):
            raise ValueError("pathExtra must be a mapping")
        is_relative = extra_raw.get("isRelative", False)
        if not isinstance(is_relative, bool):
            raise ValueError(f"pathExtra.isRelative must be a boolean, got {is_relative!r}")
        duration = extra_raw.get("duration", 2.0)
        if isinstance(duration, bool) or not isinstance(duration, (int, float)):
            raise ValueError(f"pathExtra.duration must be a number, got {duration!r}")
        path_extra = PathExtra(duration=float(duration), is_relative=is_relative)
    return ControlPoints(**points, path_extra=path_extra)


def segment_to_dict(segment: ControlPoints) -> dict[str, Any]:
    out: dict[str, Any] = {
        key: [float(v) for v in getattr(segment, name)] for name, key in FIELD_KEYS.items()
    }
    if segment.path_extra is not None:
        out["pathExtra"] = {
            "duration": segment.path_extra.duration,
            "isRelative": segment.path_extra.is_relative,
        }
    return out


def load_segments_json(path: str | Path) -> list[ControlPoints]:
    data = json.loads(Path(path).read_text(encoding="utf-8"))
    if not isinstance(data, list):
        raise ValueError(f"{path}: expected a JSON list of segments")
    segments: list[ControlPoints] = []
    for i, item in enumerate(data):
        try:
            segments.append(segment_from_dict(item))
        except ValueError as exc:
            raise ValueError(f"{path}: segment {i}: {exc}") from exc
    return segments


def save_segments_json(path: str | Path, segments: Iterable[ControlPoints]) -> None:
    payload = [segment_to_dict(seg) for seg in segments]
    Path(path).write_text(json.dumps(payload, indent=2), encoding="utf-8")


def _fmt_point(p: np.ndarray) -> str:
    return ",".join(f"{float(v):.6g}" for v in p)


def format_export(segments: Iterable[ControlPoints]) -> str:
    """Clipboard text: one line per segment, segments separated by a blank line.

    Meant for reading, not for re-import.
    """

    lines: list[str] = []
    for seg in segments:
        if seg.path_extra is None:
            rel, dur = "-", "-"
        else:
            rel = "true" if seg.path_extra.is_relative else "false"
            dur = f"{seg.path_extra.duration:.6g}"
        lines.append(
            f"S:({_fmt_point(seg.start_point)}). A:({_fmt_point(seg.mid_point_a)}). "
            f"B:({_fmt_point(seg.mid_point_b)}), E:({_fmt_point(seg.end_point)}), "
            f"R:({rel}), D:({dur})"
        )
    return "\n\n".join(lines)


def parse_point(text: str, field: str) -> Point3:
    """Parse "x, y, z" typed into a form; raise ValueError naming `field` on failure."""

    parts = [p.strip() for p in text.strip().strip("()[]").split(",")]
    if len(parts) != 3:
        raise ValueError(f"{field}: expected 3 comma-separated numbers, got {text!r}")
    values: list[float] = []
    for axis, part in zip("xyz", parts):
        try:
            values.append(float(part))
        except ValueError as exc:
            raise ValueError(f"{field}.{axis}: not a number: {part!r}") from exc
    return as_point(values, field)
