import io
import unittest

import numpy as np
from numpy import testing

from armkin import api


class TestNullHandle(unittest.TestCase):

    def test_operations_are_safe(self):
        for handle in (0, None, 987654321):
            api.set_angles(handle, [1.0, 2.0, 3.0, 4.0], 4)

            positions = np.full(15, -1.0)
            count = [-1]
            api.get_joint_positions(handle, positions, count)
            testing.assert_array_equal(positions, np.full(15, -1.0))
            self.assertEqual(count, [-1])

            self.assertEqual(api.get_joint_count(handle), 0)

            angles = [7.0, 7.0, 7.0, 7.0]
            self.assertEqual(api.solve_ik(handle, 0.0, 8.5, 0.0, angles, 4), 0)
            self.assertEqual(angles, [7.0, 7.0, 7.0, 7.0])

            stream = io.StringIO()
            api.debug_dump(handle, stream)
            self.assertEqual(stream.getvalue(), "")

            api.destroy(handle)


class TestHandleLifecycle(unittest.TestCase):

    def setUp(self):
        self.handle = api.create(0.0, 0.0, 0.0)

    def tearDown(self):
        api.destroy(self.handle)

    def test_joint_count(self):
        self.assertEqual(api.get_joint_count(self.handle), 4)

    def test_handles_are_independent(self):
        other = api.create(1.0, 0.0, 0.0)
        try:
            self.assertNotEqual(other, self.handle)
            api.set_angles(other, [np.pi / 2], 1)
            positions = np.zeros(15)
            count = np.zeros(1, dtype=int)
            api.get_joint_positions(self.handle, positions, count)
            testing.assert_array_almost_equal(positions[12:], [0.0, 8.5, 0.0])
        finally:
            api.destroy(other)

    def test_destroyed_handle_is_invalid(self):
        handle = api.create(0.0, 0.0, 0.0)
        api.destroy(handle)
        self.assertEqual(api.get_joint_count(handle), 0)
        api.destroy(handle)

    def test_joint_positions(self):
        api.set_angles(self.handle, [0.0, 0.0, 0.0, 0.0], 4)
        positions = np.zeros(15)
        count = np.zeros(1, dtype=int)
        api.get_joint_positions(self.handle, positions, count)
        self.assertEqual(count[0], 15)
        testing.assert_array_almost_equal(
            positions.reshape(5, 3),
            [[0, 0, 0], [0, 2, 0], [0, 5, 0], [0, 7.5, 0], [0, 8.5, 0]])

    def test_joint_positions_short_buffer(self):
        positions = np.full(12, -1.0)
        count = [-1]
        api.get_joint_positions(self.handle, positions, count)
        testing.assert_array_equal(positions, np.full(12, -1.0))
        self.assertEqual(count, [-1])
        # a longer buffer keeps its tail
        positions = [-1.0] * 16
        api.get_joint_positions(self.handle, positions, count)
        self.assertEqual(count, [15])
        self.assertEqual(len(positions), 16)
        self.assertEqual(positions[13], 8.5)
        self.assertEqual(positions[15], -1.0)

    def test_set_angles_count(self):
        api.set_angles(self.handle, [np.pi / 2, 0.3, 0.3, 0.3], 1)
        positions = np.zeros(15)
        api.get_joint_positions(self.handle, positions, [0])
        testing.assert_array_almost_equal(positions[12:], [-8.5, 0.0, 0.0])
        # a count beyond the buffer only applies what is there
        api.set_angles(self.handle, [0.0], 10)
        api.get_joint_positions(self.handle, positions, [0])
        testing.assert_array_almost_equal(positions[12:], [0.0, 8.5, 0.0])

    def test_solve_ik_count_mismatch(self):
        angles = [5.0, 5.0, 5.0]
        self.assertEqual(api.solve_ik(self.handle, 0.0, 8.5, 0.0, angles, 3), 0)
        self.assertEqual(angles, [5.0, 5.0, 5.0])

    def test_solve_ik_success_writes_angles(self):
        angles = [5.0, 5.0, 5.0, 5.0]
        self.assertEqual(api.solve_ik(self.handle, 0.0, 8.5, 0.0, angles, 4), 1)
        testing.assert_array_almost_equal(angles, np.zeros(4))

    def test_solve_ik_failure_leaves_buffer(self):
        angles = [5.0, 5.0, 5.0, 5.0]
        self.assertEqual(api.solve_ik(self.handle, 10.0, 0.0, 0.0, angles, 4), 0)
        self.assertEqual(angles, [5.0, 5.0, 5.0, 5.0])
        # the arm itself still moved
        positions = np.zeros(15)
        api.get_joint_positions(self.handle, positions, [0])
        self.assertGreater(positions[12], 8.4)

    def test_debug_dump(self):
        stream = io.StringIO()
        api.debug_dump(self.handle, stream)
        text = stream.getvalue()
        self.assertIn("=== ARM DEBUG INFO ===", text)
        self.assertIn("Base position: (0, 0, 0)", text)
        self.assertIn("Joint 3: 0 rad (0 deg)", text)
        self.assertIn("Link 2: 2.5", text)
        self.assertIn("Position 4: (0, 8.5, 0)", text)
        self.assertIn("End effector: (0, 8.5, 0)", text)
        self.assertIn("Maximum reach: 8.5", text)
