# -*- coding: utf-8 -*-


import numpy as np
from absl.testing import absltest
from absl.testing import parameterized

import glifpy
from glifpy.neurons.params import GLIFParameters, GLIFState, GLIFVariables, refractory_steps

InvalidParameterError = glifpy.errors.InvalidParameterError


class TestGLIFParameters(parameterized.TestCase):
    def test_defaults(self):
        p = GLIFParameters()
        self.assertEqual(p.glif_model, 1)
        self.assertEqual(p.th_inf, -51.68)
        self.assertEqual(p.V_dynamics_method, 'linear_forward_euler')
        self.assertEqual(p.n_asc, 0)

    @parameterized.parameters(3, 4, 5)
    def test_asc_defaults(self, level):
        p = GLIFParameters(level)
        self.assertEqual(p.n_asc, 2)
        self.assertEqual(p.k, (0.003, 0.1))
        self.assertEqual(p.asc_amps, (-9.18, -198.94))

    def test_get(self):
        d = GLIFParameters(3).get(dict())
        for key in GLIFParameters.keys:
            self.assertIn(key, d)
        self.assertIsInstance(d['k'], list)

    def test_set_returns_copy(self):
        p = GLIFParameters()
        p2 = p.set({'G': 5., 'glif_model': 'lif_r'})
        self.assertEqual(p.G, 9.43)
        self.assertEqual(p.glif_model, 1)
        self.assertEqual(p2.G, 5.)
        self.assertEqual(p2.glif_model, 2)

    def test_set_vectors(self):
        p = GLIFParameters(3).set({'asc_init': [1.], 'k': [0.2], 'asc_amps': np.array([3.]), 'r': [0.5]})
        self.assertEqual(p.n_asc, 1)
        self.assertEqual(p.asc_amps, (3.,))

    @parameterized.named_parameters(
        ('one_vector', 3, {'k': [0.1]}),
        ('no_asc', 3, {'asc_init': [], 'k': [], 'asc_amps': [], 'r': []}),
        ('asc_for_lif', 1, {'asc_init': [0.], 'k': [0.1], 'asc_amps': [1.], 'r': [1.]}),
        ('negative_k', 3, {'k': [-0.1, 0.1]}),
        ('nan', 1, {'G': float('nan')}),
        ('inf_vector', 3, {'r': [1., float('inf')]}),
        ('zero_G', 1, {'G': 0.}),
        ('negative_C_m', 1, {'C_m': -1.}),
        ('negative_t_ref', 1, {'t_ref': -0.1}),
        ('negative_b_spike', 2, {'b_spike': -0.1}),
        ('zero_b_voltage', 5, {'b_voltage': 0.}),
        ('method', 1, {'V_dynamics_method': 'rk4'}),
        ('model', 1, {'glif_model': 'lif_x'}),
        ('string_value', 1, {'E_L': '-70'}),
        ('bool_value', 1, {'E_L': True}),
    )
    def test_set_rejected(self, level, d):
        p = GLIFParameters(level)
        before = p.get(dict())
        with self.assertRaises(InvalidParameterError):
            p.set(d)
        self.assertEqual(p.get(dict()), before)

    def test_zero_b_voltage_below_level_5(self):
        p = GLIFParameters(4).set({'b_voltage': 0.})
        self.assertEqual(p.b_voltage, 0.)

    def test_as_arrays(self):
        arrays = GLIFParameters(4).as_arrays()
        self.assertEqual(arrays['k'].shape, (2,))
        self.assertEqual(arrays['G'], 9.43)


class TestRefractorySteps(parameterized.TestCase):
    @parameterized.parameters(
        (2., 1., 2),
        (1.5, 1., 2),
        (2.4, 1., 2),
        (2.6, 1., 3),
        (0.2, 1., 1),
        (0., 1., 0),
        (3.75, 0.25, 15),
    )
    def test_rounding(self, t_ref, dt, steps):
        self.assertEqual(refractory_steps(t_ref, dt), steps)


class TestGLIFState(parameterized.TestCase):
    def test_init(self):
        p = GLIFParameters(3).set({'asc_init': [1., 2.]})
        s = GLIFState(p, 4)
        np.testing.assert_allclose(s.V_m, np.full(4, p.E_L))
        self.assertEqual(s.ASCurrents.shape, (4, 2))
        np.testing.assert_allclose(s.ASCurrents_sum, np.full(4, 3.))
        np.testing.assert_allclose(s.threshold, np.full(4, p.th_inf))

    def test_set(self):
        p = GLIFParameters(3)
        s = GLIFState(p, 3)
        s2 = s.set({'V_m': [-70., -60., -50.], 'ASCurrents': [1., 2.]}, p)
        np.testing.assert_allclose(s.V_m, np.full(3, p.E_L))
        np.testing.assert_allclose(s2.V_m, [-70., -60., -50.])
        np.testing.assert_allclose(s2.ASCurrents_sum, [3., 3., 3.])

    def test_channel_change_reinitializes(self):
        p = GLIFParameters(3)
        s = GLIFState(p, 2)
        p2 = p.set({'asc_init': [4.], 'k': [0.1], 'asc_amps': [1.], 'r': [1.]})
        s2 = s.set({}, p2)
        self.assertEqual(s2.ASCurrents.shape, (2, 1))
        np.testing.assert_allclose(s2.ASCurrents_sum, [4., 4.])

    @parameterized.named_parameters(
        ('V_m_shape', {'V_m': [1., 2.]}),
        ('V_m_nan', {'V_m': float('nan')}),
        ('asc_shape', {'ASCurrents': [1., 2., 3.]}),
    )
    def test_set_rejected(self, d):
        p = GLIFParameters(3)
        with self.assertRaises(InvalidParameterError):
            GLIFState(p, 3).set(d, p)


class TestGLIFVariables(absltest.TestCase):
    def test_uncalibrated(self):
        var = GLIFVariables(2)
        self.assertFalse(var.calibrated)
        self.assertEqual(var.t_ref_remaining.shape, (2,))


if __name__ == '__main__':
    absltest.main()
