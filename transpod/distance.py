"""Breadth-first chamfer distance transform with nearest-edge annotation."""

from __future__ import annotations

from collections import deque
from typing import NamedTuple

import numpy as np

# Neighbour offsets as (dx, dy).
_NEIGHBOURS = ((-1, -1), (0, -1), (1, -1), (-1, 0), (1, 0), (-1, 1), (0, 1), (1, 1))
_UNREACHED = -1.0


class DistanceTransform(NamedTuple):
    """Distances to the nearest edge and, per pixel, that edge's (x, y)."""

    distances: np.ndarray
    nearest: np.ndarray


def compute_distance_transform(
    edge_image: np.ndarray, truncate: float = -1.0, a: float = 1.0, b: float = 1.5
) -> DistanceTransform:
    """Distance transform of an edge image.

    Orthogonal steps cost a and the remaining steps cost b. Pixels that no
    edge reaches keep distance -1 and nearest (-1, -1). A positive truncate
    caps the distances.
    """
    edges = np.asarray(edge_image)
    if edges.ndim != 2:
        raise ValueError("expected a two-dimensional edge image")
    height, width = edges.shape

    is_edge = (edges.ravel() != 0).tolist()
    distances = [0.0 if e else _UNREACHED for e in is_edge]
    origins = [i if e else -1 for i, e in enumerate(is_edge)]
    queue = deque(i for i, e in enumerate(is_edge) if e)
    steps = [(dx, dy, a if abs(dx + dy) == 1 else b) for dx, dy in _NEIGHBOURS]

    while queue:
        index = queue.popleft()
        y, x = divmod(index, width)
        base = distances[index]
        origin = origins[index]
        for dx, dy, cost in steps:
            nx, ny = x + dx, y + dy
            if nx < 0 or ny < 0 or nx >= width or ny >= height:
                continue
            neighbour = ny * width + nx
            candidate = base + cost
            current = distances[neighbour]
            if current == _UNREACHED or current > candidate:
                distances[neighbour] = candidate
                origins[neighbour] = origin
                queue.append(neighbour)

    dist = np.asarray(distances, dtype=np.float32).reshape(height, width)
    if truncate > 0:
        dist = np.minimum(dist, np.float32(truncate))

    origin_array = np.asarray(origins, dtype=np.int64)
    nearest = np.full((height * width, 2), -1, dtype=np.int32)
    reached = origin_array >= 0
    nearest[reached, 0] = origin_array[reached] % width
    nearest[reached, 1] = origin_array[reached] // width
    return DistanceTransform(dist, nearest.reshape(height, width, 2))


def fill_non_contour_orientations(
    annotation: np.ndarray, orientations: np.ndarray
) -> np.ndarray:
    """Give every pixel the orientation of its nearest edge pixel.

    Returns a new array; pixels without a nearest edge keep their value.
    """
    nearest = np.asarray(annotation)
    source = np.asarray(orientations, dtype=np.float32)
    if source.ndim != 2 or nearest.shape != source.shape + (2,):
        raise ValueError("annotation and orientation images differ in size")
    xs = nearest[..., 0]
    ys = nearest[..., 1]
    valid = (xs >= 0) & (ys >= 0)
    result = source.copy()
    result[valid] = source[ys[valid], xs[valid]]
    return result