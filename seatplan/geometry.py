"""Geometry and placement validation helpers.

Pure functions over rectangles and seat lists; nothing here mutates state.
"""

from collections.abc import Iterable

from .models import Rect, Seat


def rects_overlap(a: Rect, b: Rect) -> bool:
    """Check if two rectangles overlap.

    Rectangles that only touch along an edge do not overlap.
    """
    return a.x < b.right and b.x < a.right and a.y < b.bottom and b.y < a.bottom


def within_bounds(rect: Rect, width: float, height: float) -> bool:
    """Check if a rectangle lies fully inside ``(0, 0, width, height)``."""
    return rect.x >= 0 and rect.y >= 0 and rect.right <= width and rect.bottom <= height


def bounding_box(rects: Iterable[Rect]) -> Rect | None:
    """Smallest rectangle containing every given rectangle.

    Returns:
        Rect covering all inputs, or None when no rectangles are given
    """
    rects = list(rects)
    if not rects:
        return None

    min_x = min(r.x for r in rects)
    min_y = min(r.y for r in rects)
    max_x = max(r.right for r in rects)
    max_y = max(r.bottom for r in rects)
    return Rect(x=min_x, y=min_y, width=max_x - min_x, height=max_y - min_y)


def snap_to_grid(value: float, grid_size: float) -> float:
    """Round a coordinate to the nearest grid line."""
    if grid_size <= 0:
        return value
    return round(value / grid_size) * grid_size


def blocking_seats(seats: Iterable[Seat], exclude_ids: Iterable[str] = ()) -> list[Seat]:
    """Visible, non-shape seats that take part in collision checks."""
    excluded = set(exclude_ids)
    return [s for s in seats if s.is_visible and not s.is_shape and s.id not in excluded]


def collides(rect: Rect, seats: Iterable[Seat], exclude_ids: Iterable[str] = ()) -> bool:
    """Check if a rectangle overlaps any visible, non-shape seat.

    Args:
        rect: Candidate footprint
        seats: Seats already on the layout
        exclude_ids: Seat ids to ignore (e.g. the seat being moved)
    """
    return any(rects_overlap(rect, s.rect) for s in blocking_seats(seats, exclude_ids))


def contains_point(rect: Rect, x: float, y: float) -> bool:
    """Check if a point lies inside a rectangle (edges included)."""
    return rect.x <= x <= rect.right and rect.y <= y <= rect.bottom


def grid_rects(
    start_x: float,
    start_y: float,
    rows: int,
    cols: int,
    cell_width: float,
    cell_height: float,
    gap_x: float,
    gap_y: float,
) -> list[Rect]:
    """Cell rectangles of a row-major grid."""
    return [
        Rect(
            x=start_x + c * (cell_width + gap_x),
            y=start_y + r * (cell_height + gap_y),
            width=cell_width,
            height=cell_height,
        )
        for r in range(rows)
        for c in range(cols)
    ]
