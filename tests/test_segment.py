import numpy as np
import pytest

from src.seatpath.segment import (
    ControlPoints,
    PathExtra,
    clone_segments,
    default_segment,
    remove_by_value,
    segments_equal,
)


def test_constructor_copies_and_converts_points() -> None:
    start = np.array([1, 2, 3])
    seg = ControlPoints(start, [0, 0, 0], [1, 1, 1], [2, 2, 2])
    assert seg.start_point.dtype == np.float64
    start[0] = 99
    assert seg.start_point[0] == 1.0
    assert seg.path_extra is None
    assert not seg.is_relative


def test_constructor_rejects_malformed_points() -> None:
    with pytest.raises(ValueError, match="mid_point_a"):
        ControlPoints([0, 0, 0], [0, 0], [0, 0, 0], [0, 0, 0])
    with pytest.raises(ValueError, match="end_point"):
        ControlPoints([0, 0, 0], [0, 0, 0], [0, 0, 0], [0, float("nan"), 0])
    with pytest.raises(ValueError):
        ControlPoints(["a", 0, 0], [0, 0, 0], [0, 0, 0], [0, 0, 0])


def test_path_extra_validates_duration() -> None:
    assert PathExtra(duration=3).duration == 3.0
    with pytest.raises(ValueError):
        PathExtra(duration=0.0)
    with pytest.raises(ValueError):
        PathExtra(duration=-1.0)


def test_equality_is_structural_and_exact() -> None:
    a = default_segment()
    b = default_segment()
    assert a == b
    assert a is not b
    c = a.replace(end_point=[2.0, 2.0, -1.0 + 1e-12])
    assert a != c
    d = a.replace(path_extra=PathExtra(duration=2.0, is_relative=True))
    assert a != d


def test_clone_is_independent() -> None:
    a = default_segment()
    b = a.clone()
    b.start_point[0] = 42.0
    assert a.start_point[0] == -2.0
    extra = PathExtra(duration=1.5, is_relative=True)
    c = a.replace(path_extra=extra).clone()
    assert c.path_extra is extra


def test_replace_rejects_unknown_fields() -> None:
    with pytest.raises(ValueError, match="unknown"):
        default_segment().replace(middle=[0, 0, 0])


def test_freeze_makes_points_read_only() -> None:
    seg = default_segment().freeze()
    with pytest.raises(ValueError):
        seg.end_point[0] = 0.0
    thawed = seg.clone()
    thawed.end_point[0] = 0.0
    assert thawed.end_point[0] == 0.0


def test_as_matrix_order() -> None:
    m = default_segment().as_matrix()
    assert m.shape == (4, 3)
    np.testing.assert_allclose(m[0], [-2, -2, 1])
    np.testing.assert_allclose(m[1], [-1, 1, 4])
    np.testing.assert_allclose(m[2], [1, -1, -4])
    np.testing.assert_allclose(m[3], [2, 2, -1])


def test_remove_by_value_drops_all_equal_entries() -> None:
    a = default_segment()
    b = a.replace(start_point=[0, 0, 0])
    out = remove_by_value([a, b, a.clone()], a)
    assert segments_equal(out, [b])


def test_remove_by_value_without_match_is_value_equal_copy() -> None:
    a = default_segment()
    b = a.replace(start_point=[0, 0, 0])
    items = [a]
    out = remove_by_value(items, b)
    assert out is not items
    assert segments_equal(out, items)


def test_clone_segments() -> None:
    items = [default_segment(), default_segment().replace(end_point=[0, 0, 0])]
    out = clone_segments(items)
    assert segments_equal(out, items)
    assert all(x is not y for x, y in zip(out, items))
