import numpy as np
import pytest

from src.seatpath.seats import DEFAULT_SEATS, make_anchor_table
from src.seatpath.segment import ControlPoints, PathExtra, default_segment, placeholder_segment
from src.seatpath.transform import (
    to_absolute,
    to_absolute_array,
    to_relative_storage,
    to_relative_storage_array,
)

REL = PathExtra(duration=2.0, is_relative=True)
ABS = PathExtra(duration=2.0, is_relative=False)


def test_absolute_segment_passes_through_for_any_anchor() -> None:
    seg = ControlPoints([-2, -2, 1], [-1, 1, 4], [1, -1, -4], [2, 2, -1], path_extra=ABS)
    for index in range(DEFAULT_SEATS.shape[0]):
        out = to_absolute(seg, DEFAULT_SEATS, index)
        assert out == seg
        assert out is not seg


def test_relative_segment_is_offset_by_anchor() -> None:
    anchors = make_anchor_table([[0.0, 0.0, 0.0], [1.0, 2.0, 3.0]])
    seg = ControlPoints([0, 0, 0], [1, 0, 0], [0, 1, 0], [0, 0, 1], path_extra=REL)
    out = to_absolute(seg, anchors, 1)
    np.testing.assert_allclose(out.as_matrix(), seg.as_matrix() + [1.0, 2.0, 3.0])
    assert out.path_extra is REL


def test_round_trip_relative_within_tolerance() -> None:
    rng = np.random.default_rng(1)
    for index in range(DEFAULT_SEATS.shape[0]):
        pts = rng.normal(size=(4, 3)) * 5.0
        seg = ControlPoints(*pts, path_extra=REL)
        back = to_relative_storage(to_absolute(seg, DEFAULT_SEATS, index), DEFAULT_SEATS, index)
        np.testing.assert_allclose(back.as_matrix(), seg.as_matrix(), atol=1e-12)
        assert back.path_extra == seg.path_extra


def test_round_trip_absolute_is_identity() -> None:
    seg = default_segment()
    back = to_relative_storage(to_absolute(seg, DEFAULT_SEATS, 4), DEFAULT_SEATS, 4)
    assert back == seg


def test_mixed_array_converts_each_by_its_own_flag() -> None:
    anchors = make_anchor_table([[0.0, 0.0, 0.0], [10.0, 0.0, 0.0]])
    rel = ControlPoints([0, 0, 0], [1, 0, 0], [2, 0, 0], [3, 0, 0], path_extra=REL)
    absolute = ControlPoints([3, 0, 0], [4, 0, 0], [5, 0, 0], [6, 0, 0], path_extra=ABS)
    bare = ControlPoints([6, 0, 0], [7, 0, 0], [8, 0, 0], [9, 0, 0])
    out = to_absolute_array([rel, absolute, bare], anchors, 1)
    assert len(out) == 3
    np.testing.assert_allclose(out[0].start_point, [10.0, 0.0, 0.0])
    assert out[1] == absolute
    assert out[2] == bare
    back = to_relative_storage_array(out, anchors, 1)
    assert back[0] == rel


def test_missing_segment_returns_placeholder() -> None:
    out = to_relative_storage(None, DEFAULT_SEATS, 3)
    assert out == placeholder_segment()
    assert not out.is_relative


def test_out_of_range_anchor_raises_for_relative_segments() -> None:
    seg = ControlPoints([0, 0, 0], [1, 0, 0], [0, 1, 0], [0, 0, 1], path_extra=REL)
    with pytest.raises(IndexError):
        to_absolute(seg, DEFAULT_SEATS, 9)
    with pytest.raises(IndexError):
        to_relative_storage(seg, DEFAULT_SEATS, -1)
