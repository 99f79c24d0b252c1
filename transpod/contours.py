"""Contour extraction and tangent orientation estimation on binary edge images."""

from __future__ import annotations

import math
from collections.abc import Sequence

import numpy as np

Coordinate = tuple[int, int]

# Neighbour offsets as (dy, dx), in the order used for contour following.
_DIRECTIONS: tuple[tuple[int, int], ...] = (
    (-1, -1),
    (-1, 0),
    (-1, 1),
    (0, 1),
    (1, 1),
    (1, 0),
    (1, -1),
    (0, -1),
)
_NO_STEP_COST = 3
_MAX_ENDS_DISTANCE = 3

DEFAULT_ORIENTATION_WINDOW = 5


def _require_image(image: np.ndarray) -> np.ndarray:
    if not isinstance(image, np.ndarray) or image.ndim != 2:
        raise ValueError("expected a two-dimensional numpy array")
    return image


def _is_set(image: np.ndarray, point: Coordinate) -> bool:
    x, y = point
    height, width = image.shape
    return 0 <= x < width and 0 <= y < height and image[y, x] != 0


def _clear(image: np.ndarray, point: Coordinate) -> None:
    x, y = point
    height, width = image.shape
    if 0 <= x < width and 0 <= y < height:
        image[y, x] = 0


def _step(point: Coordinate, direction: int) -> Coordinate:
    dy, dx = _DIRECTIONS[direction]
    return point[0] + dx, point[1] + dy


def _step_cost(direction: int) -> int:
    dy, dx = _DIRECTIONS[direction]
    return abs(dx) + abs(dy)


def find_first_contour_point(image: np.ndarray) -> Coordinate | None:
    """Return the first set pixel in raster order as (x, y), or None."""
    image = _require_image(image)
    nonzero = np.flatnonzero(image)
    if nonzero.size == 0:
        return None
    y, x = divmod(int(nonzero[0]), image.shape[1])
    return x, y


def _trace(image: np.ndarray, coords: list[Coordinate], direction: int) -> None:
    """Extend coords along the contour, preferring to keep the given direction."""
    while True:
        current = coords[-1]
        _clear(image, current)

        best, best_cost = direction, _NO_STEP_COST
        if _is_set(image, _step(current, best)):
            best_cost = _step_cost(best)

        previous = following = direction
        for _ in range(3):
            previous = (previous + 7) % 8
            following = (following + 1) % 8
            for candidate in (previous, following):
                if _is_set(image, _step(current, candidate)):
                    cost = _step_cost(candidate)
                    if cost < best_cost:
                        best, best_cost = candidate, cost

        if best_cost == _NO_STEP_COST:
            return
        coords.append(_step(current, best))
        direction = best


def follow_contour(
    image: np.ndarray, coords: list[Coordinate], direction: int | None = None
) -> None:
    """Follow a contour from the last point of coords, erasing visited pixels.

    Without a direction the contour is followed both ways from its start;
    coords is extended (and reordered) in place.
    """
    image = _require_image(image)
    if not coords:
        raise ValueError("contour following needs a starting point")
    if direction is not None:
        if not 0 <= direction < len(_DIRECTIONS):
            raise ValueError(f"invalid direction {direction}")
        _trace(image, coords, direction)
        return

    current = coords[-1]
    _clear(image, current)
    for start in range(7):
        neighbour = _step(current, start)
        if _is_set(image, neighbour):
            coords.append(neighbour)
            _trace(image, coords, start)
            coords.reverse()
            _trace(image, coords, (start + 4) % 8)
            break


def find_contour(image: np.ndarray) -> list[Coordinate]:
    """Extract one contour from the image, removing it; empty list if none is left."""
    start = find_first_contour_point(image)
    if start is None:
        return []
    coords = [start]
    follow_contour(image, coords)
    return coords


def get_angle(a: Coordinate, b: Coordinate) -> float:
    """Angle of the segment from a to b, folded into [0, pi]."""
    dx = b[0] - a[0]
    dy = b[1] - a[1]
    angle = math.atan2(dy, dx)
    if angle < 0:
        angle += math.pi
    return angle


def find_contour_orientations(
    coords: Sequence[Coordinate], m: int = DEFAULT_ORIENTATION_WINDOW
) -> list[float]:
    """Tangent orientation of each contour point by median filtered differencing.

    Points whose orientation cannot be estimated are NaN.
    """
    size = len(coords)
    orientations = [math.nan] * size
    if size < 2 * m + 1:
        return orientations

    first, last = coords[0], coords[-1]
    ends_distance = abs(first[0] - last[0]) + abs(first[1] - last[1])
    is_closed = ends_distance <= _MAX_ENDS_DISTANCE

    start = 0 if is_closed else m
    end = size if is_closed else size - m
    window = 2 * m
    for i in range(start, end):
        current = coords[i]
        angles = [get_angle(coords[(i - j) % size], current) for j in range(m, 0, -1)]
        angles.extend(get_angle(current, coords[(i + j) % size]) for j in range(1, m + 1))
        angles.sort()

        max_diff = 0.0
        max_diff_index = -1
        for j, (low, high) in enumerate(zip(angles, angles[1:]), start=1):
            diff = high - low
            if diff > max_diff:
                max_diff = diff
                max_diff_index = j
        if math.pi - (angles[-1] - angles[0]) > max_diff:
            max_diff_index = 0

        def median_angle(index: int) -> float:
            if index < window:
                return angles[index] - math.pi
            return angles[index - window]

        orientation = (
            median_angle(m - 1 + max_diff_index) + median_angle(m + max_diff_index)
        ) / 2
        while orientation < 0:
            orientation += math.pi
        orientations[i] = orientation
    return orientations


def extract_contours(edge_image: np.ndarray) -> list[list[Coordinate]]:
    """All contours of an edge image; the image itself is left untouched."""
    work = np.array(_require_image(np.asarray(edge_image)), copy=True)
    contours = []
    while contour := find_contour(work):
        contours.append(contour)
    return contours


def compute_contours_orientations(
    contours: Sequence[Sequence[Coordinate]],
    shape: tuple[int, int],
    m: int = DEFAULT_ORIENTATION_WINDOW,
) -> np.ndarray:
    """Orientation image of the given shape; pixels off the contours are NaN."""
    result = np.full(shape, np.nan, dtype=np.float32)
    for contour in contours:
        for (x, y), orientation in zip(contour, find_contour_orientations(contour, m)):
            result[y, x] = orientation
    return result


def compute_edge_orientations(
    edge_image: np.ndarray, m: int = DEFAULT_ORIENTATION_WINDOW
) -> np.ndarray:
    """Orientation image computed from the contours of an edge image."""
    edges = _require_image(np.asarray(edge_image))
    return compute_contours_orientations(extract_contours(edges), edges.shape, m)