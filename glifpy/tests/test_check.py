# -*- coding: utf-8 -*-


import numpy as np
from absl.testing import absltest
from absl.testing import parameterized

import glifpy
from glifpy import check

InvalidParameterError = glifpy.errors.InvalidParameterError


class TestCheck(parameterized.TestCase):
    def test_is_float(self):
        self.assertEqual(check.is_float(1, 'a'), 1.)
        self.assertEqual(check.is_float(np.float32(0.5), 'a'), 0.5)
        self.assertIsNone(check.is_float(None, 'a', allow_none=True))

    @parameterized.parameters(True, '1.', None, ([1.],))
    def test_is_float_rejected(self, value):
        with self.assertRaises(InvalidParameterError):
            check.is_float(value, 'a')

    def test_is_float_bounds(self):
        with self.assertRaises(InvalidParameterError):
            check.is_float(-1., 'a', min_bound=0.)
        with self.assertRaises(InvalidParameterError):
            check.is_float(2., 'a', max_bound=1.)

    def test_is_integer(self):
        self.assertEqual(check.is_integer(np.int32(3), 'a'), 3)
        for value in (True, 1.0, '1'):
            with self.assertRaises(InvalidParameterError):
                check.is_integer(value, 'a')

    def test_is_string(self):
        self.assertEqual(check.is_string('a', candidates=('a', 'b')), 'a')
        with self.assertRaises(InvalidParameterError):
            check.is_string('c', candidates=('a', 'b'))

    def test_is_finite_sequence(self):
        self.assertEqual(check.is_finite_sequence(np.array([1, 2.5]), 'k'), (1., 2.5))
        for value in ([1., np.nan], [[1.]], 1., [True]):
            with self.assertRaises(InvalidParameterError):
                check.is_finite_sequence(value, 'k')

    def test_is_dict_data(self):
        self.assertEqual(check.is_dict_data({'a': 1}, key_type=str), {'a': 1})
        with self.assertRaises(InvalidParameterError):
            check.is_dict_data({1: 1}, key_type=str)

    def test_errors_are_builtin_subclasses(self):
        self.assertTrue(issubclass(InvalidParameterError, ValueError))
        self.assertTrue(issubclass(glifpy.errors.ContractViolationError, RuntimeError))
        self.assertTrue(issubclass(glifpy.errors.UnknownRecordableError, KeyError))
        for name in ('InvalidParameterError', 'UnknownReceptorTypeError', 'RunningError', 'MonitorError'):
            self.assertTrue(issubclass(getattr(glifpy.errors, name), glifpy.errors.GlifError))


if __name__ == '__main__':
    absltest.main()
