"""Tests for geometry and placement validation helpers."""

from seatplan.geometry import (
    bounding_box,
    blocking_seats,
    collides,
    contains_point,
    grid_rects,
    rects_overlap,
    snap_to_grid,
    within_bounds,
)
from seatplan.models import Rect, Seat, SeatKind


def _seat(seat_id, x, y, **kwargs):
    return Seat(id=seat_id, x=x, y=y, **kwargs)


def test_rects_overlap_true_and_false():
    """Test overlapping and edge-touching rectangles."""
    a = Rect(x=0, y=0, width=2, height=2)
    b = Rect(x=1, y=1, width=2, height=2)
    c = Rect(x=2, y=2, width=2, height=2)

    assert rects_overlap(a, b)
    assert rects_overlap(b, a)
    assert not rects_overlap(a, c)


def test_seat_footprints_overlap():
    """Test the 100x150 footprint case from the seat layout."""
    first = Rect(x=100, y=100, width=100, height=150)

    assert rects_overlap(first, Rect(x=110, y=110, width=100, height=150))
    assert not rects_overlap(first, Rect(x=300, y=100, width=100, height=150))


def test_within_bounds():
    """Test containment in the virtual layout."""
    assert within_bounds(Rect(x=0, y=0, width=100, height=150), 3200, 2400)
    assert within_bounds(Rect(x=3100, y=2250, width=100, height=150), 3200, 2400)
    assert not within_bounds(Rect(x=3150, y=0, width=100, height=150), 3200, 2400)
    assert not within_bounds(Rect(x=-1, y=0, width=100, height=150), 3200, 2400)
    assert not within_bounds(Rect(x=0, y=2300, width=100, height=150), 3200, 2400)


def test_bounding_box():
    """Test bounding box of several rectangles."""
    box = bounding_box(
        [
            Rect(x=100, y=200, width=100, height=150),
            Rect(x=300, y=50, width=100, height=150),
        ]
    )

    assert box == Rect(x=100, y=50, width=300, height=300)
    assert bounding_box([]) is None


def test_snap_to_grid():
    """Test rounding to the nearest grid line."""
    assert snap_to_grid(107, 20) == 100
    assert snap_to_grid(111, 20) == 120
    assert snap_to_grid(40, 20) == 40
    assert snap_to_grid(13.5, 0) == 13.5


def test_collides_ignores_hidden_shapes_and_excluded():
    """Test which seats block a placement."""
    rect = Rect(x=0, y=0, width=100, height=150)
    hidden = _seat("hidden", 0, 0, is_visible=False)
    shape = _seat("shape", 0, 0, kind=SeatKind.SHAPE)
    other = _seat("other", 50, 50)

    assert not collides(rect, [hidden, shape])
    assert collides(rect, [hidden, shape, other])
    assert not collides(rect, [other], exclude_ids=["other"])
    assert blocking_seats([hidden, shape, other]) == [other]


def test_contains_point():
    """Test point containment including edges."""
    rect = Rect(x=100, y=100, width=100, height=150)

    assert contains_point(rect, 150, 200)
    assert contains_point(rect, 100, 100)
    assert not contains_point(rect, 99, 100)


def test_grid_rects_row_major():
    """Test grid cell layout order and spacing."""
    rects = grid_rects(0, 0, rows=2, cols=3, cell_width=100, cell_height=150, gap_x=10, gap_y=10)

    assert len(rects) == 6
    assert (rects[1].x, rects[1].y) == (110, 0)
    assert (rects[3].x, rects[3].y) == (0, 160)
    assert (rects[5].x, rects[5].y) == (220, 160)
