import unittest

import numpy as np

from poisson_disk import Sample, find_violations, min_separation, uncovered_points
from poisson_disk.vector import as_array, as_point, dimension, one, sqnorm, zero


class TestValidation(unittest.TestCase):
    @classmethod
    def setUpClass(cls):
        cls.points = np.array([[0.1, 0.1], [0.1, 0.4], [0.9, 0.9]])
        cls.wrapping_points = np.array([[0.05, 0.5], [0.95, 0.5], [0.5, 0.5]])

    def test_min_separation(self):
        self.assertAlmostEqual(min_separation(self.points), 0.3)
        self.assertAlmostEqual(min_separation(self.wrapping_points), 0.45)
        self.assertAlmostEqual(min_separation(self.wrapping_points, periodic=True), 0.1)

    def test_min_separation_of_too_few_points(self):
        self.assertEqual(min_separation([]), np.inf)
        self.assertEqual(min_separation(self.points[:1]), np.inf)

    def test_min_separation_accepts_samples(self):
        samples = [Sample(p, 0.1) for p in self.points]
        self.assertAlmostEqual(min_separation(samples), 0.3)

    def test_find_violations(self):
        self.assertEqual(find_violations(self.points, 0.1), set())
        self.assertEqual(find_violations(self.points, 0.2), {(0, 1)})
        self.assertEqual(find_violations(self.wrapping_points, 0.1), set())
        self.assertEqual(find_violations(self.wrapping_points, 0.1, periodic=True), {(0, 1)})

    def test_uncovered_points(self):
        probes = np.array([[0.1, 0.2], [0.5, 0.5], [0.85, 0.85]])
        np.testing.assert_array_equal([[0.5, 0.5]], uncovered_points(self.points, probes, 0.1))
        self.assertEqual(len(uncovered_points(self.points, probes, 0.3)), 0)

    def test_uncovered_points_periodic(self):
        probes = np.array([[0.99, 0.1]])
        self.assertEqual(len(uncovered_points(self.points, probes, 0.1)), 1)
        self.assertEqual(len(uncovered_points(self.points, probes, 0.1, periodic=True)), 0)


class TestVector(unittest.TestCase):
    def test_constructors(self):
        np.testing.assert_array_equal([0.0, 0.0, 0.0], zero(3))
        np.testing.assert_array_equal([1.0, 1.0], one(2))
        self.assertEqual(dimension(zero(4)), 4)

    def test_sqnorm(self):
        self.assertAlmostEqual(sqnorm(np.array([3.0, 4.0])), 25.0)
        np.testing.assert_allclose([1.0, 2.0], sqnorm(np.array([[1.0, 0.0], [1.0, 1.0]])))

    def test_as_point_copies(self):
        values = np.array([0.1, 0.2])
        point = as_point(values, 2)
        point[0] = 5.0
        self.assertEqual(values[0], 0.1)
        with self.assertRaises(ValueError):
            as_point(values, 3)

    def test_as_array(self):
        samples = [Sample((0.1, 0.2), 0.1), Sample((0.3, 0.4), 0.1)]
        np.testing.assert_array_equal([[0.1, 0.2], [0.3, 0.4]], as_array(samples))
        self.assertEqual(as_array([], dim=3).shape, (0, 3))

    def test_samples_are_immutable_values(self):
        sample = Sample(np.array([0.1, 0.2]), 0.1)
        self.assertEqual(sample, Sample((0.1, 0.2), 0.1))
        self.assertEqual(sample.dim, 2)
        np.testing.assert_array_equal([0.1, 0.2], sample.position)
        with self.assertRaises(AttributeError):
            sample.radius = 0.2
