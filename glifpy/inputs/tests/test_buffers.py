# -*- coding: utf-8 -*-


import numpy as np
from absl.testing import absltest
from absl.testing import parameterized

import glifpy
from glifpy.inputs import RingBuffer


class TestRingBuffer(parameterized.TestCase):
    def test_delays(self):
        buf = RingBuffer(size=2, max_delay=3)
        buf.add_value(1, 5.)
        buf.add_value(2, 1., index=0)
        np.testing.assert_allclose(buf.get_value(), [5., 5.])
        np.testing.assert_allclose(buf.get_value(), [1., 0.])
        np.testing.assert_allclose(buf.get_value(), [0., 0.])

    def test_accumulates(self):
        buf = RingBuffer(size=3)
        buf.add_value(1, 1.)
        buf.add_value(1, np.array([1., 2., 3.]))
        buf.add_value(1, np.array([10., 10.]), index=[2, 2])
        np.testing.assert_allclose(buf.get_value(), [2., 3., 24.])

    def test_wraps_around(self):
        buf = RingBuffer(size=1, max_delay=2)
        for i in range(5):
            buf.add_value(1, float(i))
            np.testing.assert_allclose(buf.get_value(), [float(i)])

    def test_read_clears(self):
        buf = RingBuffer(size=1, max_delay=2)
        buf.add_value(1, 3.)
        buf.get_value()
        buf.get_value()
        np.testing.assert_allclose(buf.get_value(), [0.])

    @parameterized.parameters(0, 4, 10)
    def test_delay_out_of_range(self, delay):
        buf = RingBuffer(size=1, max_delay=3)
        with self.assertRaises(glifpy.errors.InvalidParameterError):
            buf.add_value(delay, 1.)

    @parameterized.parameters(0, 1, 2, 5)
    def test_delay_equal_to_capacity(self, num_read):
        buf = RingBuffer(size=1, max_delay=3)
        for _ in range(num_read):
            buf.get_value()
        buf.add_value(3, 7.)
        buf.add_value(1, 1.)
        np.testing.assert_allclose([buf.get_value()[0] for _ in range(4)], [1., 0., 7., 0.])

    def test_single_slot(self):
        buf = RingBuffer(size=2, max_delay=1)
        for i in range(3):
            buf.add_value(1, float(i), index=1)
            np.testing.assert_allclose(buf.get_value(), [0., float(i)])

    def test_resize_keeps_pending(self):
        buf = RingBuffer(size=1, max_delay=3)
        buf.get_value()
        buf.add_value(1, 1.)
        buf.add_value(2, 2.)
        buf.resize(6)
        self.assertEqual(buf.max_delay, 6)
        buf.add_value(5, 5.)
        np.testing.assert_allclose([buf.get_value()[0] for _ in range(6)], [1., 2., 0., 0., 5., 0.])

    def test_resize_never_shrinks(self):
        buf = RingBuffer(size=1, max_delay=4)
        buf.resize(2)
        self.assertEqual(buf.max_delay, 4)

    def test_clear(self):
        buf = RingBuffer(size=2)
        buf.add_value(1, 1.)
        buf.clear()
        np.testing.assert_allclose(buf.get_value(), [0., 0.])

    @parameterized.parameters((0, 2), (1, 0), (1.5, 2))
    def test_rejected(self, size, max_delay):
        with self.assertRaises(glifpy.errors.InvalidParameterError):
            RingBuffer(size, max_delay)


if __name__ == '__main__':
    absltest.main()
