import unittest
import numpy as np

from polysimpl.geometry import (
    dot,
    equal,
    interpolate,
    line_distance2,
    make_vector,
    point_distance2,
    ray_distance2,
    segment_distance2,
)


class TestVectorOps(unittest.TestCase):
    def test_make_vector_and_dot(self):
        v = make_vector(np.array([1.0, 2.0, 3.0]), np.array([2.0, 4.0, 6.0]))
        self.assertTrue(np.array_equal(v, np.array([1.0, 2.0, 3.0])))
        self.assertAlmostEqual(float(dot(v, v)), 14.0, places=12)

    def test_interpolate(self):
        p = interpolate(np.array([0.0, 0.0]), np.array([4.0, 2.0]), 0.25)
        self.assertTrue(np.allclose(p, [1.0, 0.5]))

    def test_interpolate_integer_coordinates_truncate(self):
        p = interpolate(np.array([0, 0]), np.array([3, 3]), 0.5)
        self.assertEqual(p.dtype, np.array([0]).dtype)
        self.assertTrue(np.array_equal(p, [1, 1]))

    def test_equal(self):
        self.assertTrue(equal(np.array([1.0, 2.0]), np.array([1.0, 2.0])))
        self.assertFalse(equal(np.array([1.0, 2.0]), np.array([1.0, 2.0 + 1e-12])))


class TestDistances(unittest.TestCase):
    def setUp(self):
        self.a = np.array([0.0, 0.0])
        self.b = np.array([2.0, 0.0])

    def test_point_distance2(self):
        self.assertEqual(float(point_distance2(np.array([0.0, 0.0]), np.array([3.0, 4.0]))), 25.0)

    def test_point_distance2_3d(self):
        d2 = point_distance2(np.array([1.0, 1.0, 1.0]), np.array([2.0, 3.0, 4.0]))
        self.assertEqual(float(d2), 14.0)

    def test_line_distance2_is_unbounded(self):
        self.assertAlmostEqual(float(line_distance2(self.a, self.b, np.array([5.0, 3.0]))), 9.0, places=12)
        self.assertAlmostEqual(float(line_distance2(self.a, self.b, np.array([-4.0, 1.0]))), 1.0, places=12)

    def test_segment_distance2_clamps_both_ends(self):
        # beyond s2
        self.assertAlmostEqual(float(segment_distance2(self.a, self.b, np.array([5.0, 3.0]))), 18.0, places=12)
        # before s1
        self.assertAlmostEqual(float(segment_distance2(self.a, self.b, np.array([-1.0, 1.0]))), 2.0, places=12)
        # interior projection
        self.assertAlmostEqual(float(segment_distance2(self.a, self.b, np.array([1.0, 2.0]))), 4.0, places=12)

    def test_ray_distance2_clamps_near_side_only(self):
        self.assertAlmostEqual(float(ray_distance2(self.a, self.b, np.array([5.0, 3.0]))), 9.0, places=12)
        self.assertAlmostEqual(float(ray_distance2(self.a, self.b, np.array([-1.0, 1.0]))), 2.0, places=12)

    def test_segment_distance2_3d(self):
        s1 = np.array([0.0, 0.0, 0.0])
        s2 = np.array([0.0, 0.0, 10.0])
        self.assertAlmostEqual(float(segment_distance2(s1, s2, np.array([3.0, 4.0, 5.0]))), 25.0, places=12)

    def test_integer_projection_is_truncated(self):
        # projection (0.5, 0.5) is stored as (0, 0)
        d2 = line_distance2(np.array([0, 0]), np.array([3, 3]), np.array([1, 0]))
        self.assertEqual(int(d2), 1)

        d2 = segment_distance2(np.array([0, 0]), np.array([3, 0]), np.array([1, 2]))
        self.assertEqual(int(d2), 4)

    def test_batched_points_match_single_points(self):
        P = np.array([[1.0, 2.0], [5.0, 3.0], [-1.0, 1.0], [0.5, -0.5]])
        batch = segment_distance2(self.a, self.b, P)
        self.assertEqual(batch.shape, (4,))
        for k in range(P.shape[0]):
            self.assertEqual(float(batch[k]), float(segment_distance2(self.a, self.b, P[k])))

        batch = ray_distance2(self.a, self.b, P)
        for k in range(P.shape[0]):
            self.assertEqual(float(batch[k]), float(ray_distance2(self.a, self.b, P[k])))

    def test_degenerate_segment_measures_to_the_point(self):
        p = np.array([3.0, 4.0])
        self.assertEqual(float(segment_distance2(self.a, self.a, p)), 25.0)

    def test_degenerate_line_is_not_finite(self):
        d2 = line_distance2(self.a, self.a, np.array([3.0, 4.0]))
        self.assertFalse(np.isfinite(d2))


if __name__ == "__main__":
    unittest.main()
