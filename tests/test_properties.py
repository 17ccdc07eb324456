import numpy as np
import pytest

from polysimpl.douglas_peucker import simplify_douglas_peucker, simplify_douglas_peucker_n
from polysimpl.refinement import simplify_perpendicular_distance_repeated
from polysimpl.sweep import (
    simplify_nth_point,
    simplify_opheim,
    simplify_perpendicular_distance,
    simplify_radial_distance,
    simplify_reumann_witkam,
)

# name -> callable(coords, dim)
ALGORITHMS = {
    "nth_point": lambda c, d: simplify_nth_point(c, 4, dim=d),
    "radial_distance": lambda c, d: simplify_radial_distance(c, 0.8, dim=d),
    "perpendicular_distance": lambda c, d: simplify_perpendicular_distance(c, 0.8, dim=d),
    "perpendicular_distance_x5": lambda c, d: simplify_perpendicular_distance_repeated(c, 0.8, 5, dim=d),
    "reumann_witkam": lambda c, d: simplify_reumann_witkam(c, 0.8, dim=d),
    "opheim": lambda c, d: simplify_opheim(c, 0.8, 4.0, dim=d),
    "douglas_peucker": lambda c, d: simplify_douglas_peucker(c, 0.8, dim=d),
    "douglas_peucker_n": lambda c, d: simplify_douglas_peucker_n(c, 25, dim=d),
}


def random_walk(N, dim, seed):
    rng = np.random.default_rng(seed)
    return np.cumsum(rng.standard_normal((N, dim)), axis=0)


def is_subsequence(out_pts, in_pts):
    i = 0
    for p in out_pts:
        while i < in_pts.shape[0] and not np.array_equal(in_pts[i], p):
            i += 1
        if i == in_pts.shape[0]:
            return False
        i += 1
    return True


@pytest.mark.parametrize("name", sorted(ALGORITHMS))
@pytest.mark.parametrize("dim", [1, 2, 3])
def test_endpoints_and_subsequence(name, dim):
    pts = random_walk(150, dim, seed=dim)
    out = ALGORITHMS[name](pts.reshape(-1), dim)

    assert out.shape[0] % dim == 0
    out_pts = out.reshape(-1, dim)
    assert out_pts.shape[0] <= pts.shape[0]
    assert np.array_equal(out_pts[0], pts[0])
    assert np.array_equal(out_pts[-1], pts[-1])
    assert is_subsequence(out_pts, pts)


@pytest.mark.parametrize("name", sorted(ALGORITHMS))
def test_malformed_coordinate_count_is_copied(name):
    coords = random_walk(20, 2, seed=0).reshape(-1)[:-1]
    out = ALGORITHMS[name](coords, 2)
    assert np.array_equal(out, coords)


@pytest.mark.parametrize("name", sorted(ALGORITHMS))
def test_single_point_is_copied(name):
    coords = np.array([1.5, -2.0])
    out = ALGORITHMS[name](coords, 2)
    assert np.array_equal(out, coords)


@pytest.mark.parametrize("name", sorted(ALGORITHMS))
def test_output_is_a_new_buffer(name):
    coords = random_walk(40, 2, seed=9).reshape(-1)
    before = coords.copy()
    out = ALGORITHMS[name](coords, 2)
    out[:] = 0
    assert np.array_equal(coords, before)


def test_zero_dimension_is_copied():
    coords = np.arange(6, dtype=float)
    assert np.array_equal(simplify_douglas_peucker(coords, 1.0, dim=0), coords)
    assert np.array_equal(simplify_nth_point(coords, 2, dim=0), coords)


def test_radial_distance_tolerance_monotone_on_a_line():
    # irregular spacing along a straight line
    rng = np.random.default_rng(4)
    x = np.cumsum(rng.uniform(0.05, 1.0, 300))
    pts = np.stack([x, 0.5 * x], axis=1).reshape(-1)
    counts = [simplify_radial_distance(pts, t).shape[0] for t in (0.2, 0.5, 1.0, 2.0, 5.0)]
    assert counts == sorted(counts, reverse=True)
