from __future__ import annotations

import argparse
from typing import Protocol, cast

from .seatpath.export_svg import export_view_svg
from .seatpath.seats import DEFAULT_DURATION, DEFAULT_RELATIVE_POINT_INDEX, DEFAULT_SMOOTH_PLAN
from .seatpath.segment_io import load_segments_json, save_segments_json
from .seatpath.smoothing import SmoothPlan
from .seatpath.store import CurveStore
from .utils import debug


class CliArgs(Protocol):
    input: str | None
    output: str | None
    svg: str | None
    anchor: int | None
    plan: int
    smooth: bool
    add_random: int
    relative: bool
    duration: float
    verbose: bool


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        description="Edit a seat path: re-anchor, extend, smooth and export it."
    )
    ap.add_argument(
        "--input",
        default=None,
        help="JSON list of segments (startPoint/midPointA/midPointB/endPoint/pathExtra); "
        "defaults to the single starter segment",
    )
    ap.add_argument("--output", default=None, help="Write the canonical segments as JSON")
    ap.add_argument("--svg", default=None, help="Write the view path and seats as SVG")
    ap.add_argument(
        "--anchor",
        type=int,
        default=None,
        help=f"Seat index to preview against (default: {DEFAULT_RELATIVE_POINT_INDEX})",
    )
    ap.add_argument(
        "--plan",
        type=int,
        choices=[int(p) for p in SmoothPlan],
        default=int(DEFAULT_SMOOTH_PLAN),
        help="Smoothing plan: 0 = whole path, 1 = relative/absolute joins only",
    )
    ap.add_argument("--smooth", action="store_true", help="Smooth the path and store the result")
    ap.add_argument(
        "--add-random",
        dest="add_random",
        type=int,
        default=0,
        help="Number of straight segments to append after the last one",
    )
    ap.add_argument(
        "--relative", action="store_true", help="Appended segments are seat-relative"
    )
    ap.add_argument(
        "--duration",
        type=float,
        default=DEFAULT_DURATION,
        help="Animation seconds for each appended segment",
    )
    ap.add_argument("-v", "--verbose", action="store_true", help="Enable debug logs")
    return ap


def main(argv: list[str] | None = None) -> None:
    args = cast(CliArgs, build_parser().parse_args(argv))
    debug.set_verbose(args.verbose)

    if args.add_random < 0:
        raise ValueError("add-random must be >= 0")
    if args.duration <= 0:
        raise ValueError("duration must be positive")

    if args.input is None:
        store = CurveStore()
    else:
        store = CurveStore(segments=load_segments_json(args.input))
    debug.log(f"loaded segments: n={len(store.segments)}")

    plan = SmoothPlan(args.plan)
    if args.anchor is not None:
        store.set_relative_point_index(args.anchor, plan)

    for _ in range(args.add_random):
        store.add_random_segment(args.relative, args.duration)
    if args.smooth:
        store.smooth_curve_paths(plan)

    print(store.export_curve_paths())

    if args.output:
        save_segments_json(args.output, store.segments)
        debug.log(f"saved segments: {args.output}")
    if args.svg:
        export_view_svg(args.svg, store.view_segments, store.anchors)
        debug.log(f"saved svg: {args.svg}")


if __name__ == "__main__":
    main()
