import numpy as np
import pytest

from transpod.distance import compute_distance_transform, fill_non_contour_orientations


def _random_edges(seed=3, shape=(9, 11), count=5):
    rng = np.random.default_rng(seed)
    image = np.zeros(shape, dtype=np.uint8)
    ys = rng.integers(0, shape[0], count)
    xs = rng.integers(0, shape[1], count)
    image[ys, xs] = 255
    return image


def test_single_edge_pixel_costs():
    image = np.zeros((5, 5), dtype=np.uint8)
    image[2, 2] = 1
    dist, nearest = compute_distance_transform(image, -1.0, 1.0, 1.5)
    assert dist[2, 2] == 0.0
    assert dist[2, 3] == pytest.approx(1.0)
    assert dist[1, 2] == pytest.approx(1.0)
    assert dist[3, 3] == pytest.approx(1.5)
    assert dist[0, 0] == pytest.approx(2 * 1.5)
    assert (nearest[..., 0] == 2).all()
    assert (nearest[..., 1] == 2).all()


def test_unit_costs_give_chessboard_distance():
    image = _random_edges()
    dist, _ = compute_distance_transform(image, -1.0, 1.0, 1.0)
    edge_ys, edge_xs = np.nonzero(image)
    for y in range(image.shape[0]):
        for x in range(image.shape[1]):
            best = min(
                max(abs(x - ex), abs(y - ey)) for ex, ey in zip(edge_xs, edge_ys)
            )
            assert dist[y, x] == pytest.approx(best)


def test_truncation_caps_distances():
    image = np.zeros((10, 10), dtype=np.uint8)
    image[0, 0] = 1
    dist, _ = compute_distance_transform(image, 2.0, 1.0, 1.5)
    assert dist.max() == pytest.approx(2.0)
    assert dist[0, 0] == 0.0


def test_no_edges_leaves_everything_unreached():
    dist, nearest = compute_distance_transform(np.zeros((4, 6), dtype=np.uint8))
    assert (dist == -1).all()
    assert (nearest == -1).all()


def test_nearest_points_at_edge_pixels():
    image = _random_edges(seed=11)
    dist, nearest = compute_distance_transform(image)
    xs = nearest[..., 0]
    ys = nearest[..., 1]
    assert (image[ys, xs] != 0).all()
    edge_ys, edge_xs = np.nonzero(image)
    assert (nearest[edge_ys, edge_xs, 0] == edge_xs).all()
    assert (nearest[edge_ys, edge_xs, 1] == edge_ys).all()
    assert (dist[edge_ys, edge_xs] == 0).all()


def test_rejects_non_two_dimensional_input():
    with pytest.raises(ValueError):
        compute_distance_transform(np.zeros((3, 3, 3), dtype=np.uint8))


def test_fill_copies_nearest_edge_orientation():
    image = _random_edges(seed=5)
    _, nearest = compute_distance_transform(image)
    orientations = np.full(image.shape, np.nan, dtype=np.float32)
    edge_ys, edge_xs = np.nonzero(image)
    orientations[edge_ys, edge_xs] = np.linspace(0.1, 3.0, len(edge_ys))
    original = orientations.copy()

    filled = fill_non_contour_orientations(nearest, orientations)
    expected = original[nearest[..., 1], nearest[..., 0]]
    np.testing.assert_array_equal(filled, expected)
    np.testing.assert_array_equal(filled[edge_ys, edge_xs], original[edge_ys, edge_xs])
    np.testing.assert_array_equal(orientations, original)


def test_fill_keeps_unreached_pixels():
    image = np.zeros((3, 4), dtype=np.uint8)
    _, nearest = compute_distance_transform(image)
    orientations = np.arange(12, dtype=np.float32).reshape(3, 4)
    np.testing.assert_array_equal(
        fill_non_contour_orientations(nearest, orientations), orientations
    )


def test_fill_rejects_size_mismatch():
    _, nearest = compute_distance_transform(np.ones((3, 4), dtype=np.uint8))
    with pytest.raises(ValueError):
        fill_non_contour_orientations(nearest, np.zeros((4, 3), dtype=np.float32))