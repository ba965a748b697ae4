import unittest

import numpy as np
from numpy import testing

from armkin.types import AngleLimit, Axis, ChainConfig, JointSpec, Link, Vector3


class TestVector3(unittest.TestCase):

    def test_arithmetic(self):
        a = Vector3(1.0, 2.0, 3.0)
        b = Vector3(0.5, -1.0, 2.0)
        self.assertEqual(a + b, Vector3(1.5, 1.0, 5.0))
        self.assertEqual(a - b, Vector3(0.5, 3.0, 1.0))
        self.assertEqual(a * 2.0, Vector3(2.0, 4.0, 6.0))
        self.assertEqual(2.0 * a, Vector3(2.0, 4.0, 6.0))

    def test_distance_and_norm(self):
        a = Vector3(3.0, 4.0, 0.0)
        self.assertAlmostEqual(a.norm(), 5.0)
        self.assertAlmostEqual(a.squared_distance(Vector3()), 25.0)
        testing.assert_array_equal(a.as_array(), [3.0, 4.0, 0.0])

    def test_from_iterable(self):
        v = Vector3.from_iterable(np.array([1, 2, 3]))
        self.assertEqual(v, Vector3(1.0, 2.0, 3.0))
        self.assertEqual(tuple(v), (1.0, 2.0, 3.0))


class TestAngleLimit(unittest.TestCase):

    def test_default_is_disabled(self):
        limit = AngleLimit()
        self.assertFalse(limit.enabled)
        self.assertEqual(limit.low, -np.pi)
        self.assertEqual(limit.high, np.pi)
        self.assertEqual(limit.apply(100.0), 100.0)
        self.assertEqual(limit.apply(-100.0), -100.0)

    def test_clamp(self):
        limit = AngleLimit(-1.0, 1.0, True)
        self.assertEqual(limit.apply(0.25), 0.25)
        self.assertEqual(limit.apply(1.0), 1.0)
        self.assertEqual(limit.apply(3.0), 1.0)
        self.assertEqual(limit.apply(-3.0), -1.0)

    def test_inverted_range(self):
        with self.assertRaises(ValueError):
            AngleLimit(1.0, -1.0, True)
        # a disabled limit is never applied, so its range is not checked
        AngleLimit(1.0, -1.0, False)


class TestChainConfig(unittest.TestCase):

    def test_negative_link_length(self):
        with self.assertRaises(ValueError):
            Link(-1.0)

    def test_joint_link_mismatch(self):
        with self.assertRaises(ValueError):
            ChainConfig(joints=(JointSpec(Axis.Z),), links=(), name="broken")
