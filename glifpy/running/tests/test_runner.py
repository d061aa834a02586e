# -*- coding: utf-8 -*-


import numpy as np
from absl.testing import absltest
from absl.testing import parameterized

import glifpy
from glifpy.neurons import model_types

SCENARIO = dict(G=5., C_m=100., E_L=-70., th_inf=-50., V_reset=-60., t_ref=2.)


class TestGLIFRunner(parameterized.TestCase):
    @parameterized.named_parameters(
        {'testcase_name': f'{name}', 'glif_model': name}
        for name in model_types.GLIF_MODEL_NAMES
    )
    def test_run_shape(self, glif_model):
        model = glifpy.GLIF(3, glif_model=glif_model)
        runner = glifpy.GLIFRunner(model,
                                   monitors=['V_m', 'threshold', 'spike'],
                                   inputs=300.,
                                   dt=0.1,
                                   progress_bar=False)
        spikes = runner.run(10.)
        self.assertTupleEqual(spikes.shape, (100, 3))
        self.assertTupleEqual(runner.mon['V_m'].shape, (100, 3))
        self.assertTupleEqual(runner.mon['threshold'].shape, (100, 3))
        self.assertTupleEqual(runner.mon['spike'].shape, (100, 3))
        self.assertTupleEqual(runner.mon['ts'].shape, (100,))
        np.testing.assert_array_equal(runner.mon['spike'], spikes)

    def test_scenario(self):
        model = glifpy.GLIF(1, **SCENARIO)
        runner = glifpy.GLIFRunner(model, monitors=['V_m'], inputs=800., dt=1., progress_bar=False)
        spikes = runner.run(5.)
        np.testing.assert_array_equal(spikes[:, 0], [False, False, True, False, False])
        np.testing.assert_allclose(runner.mon.V_m[:, 0], [-62., -54.4, -60., -60., -52.5])
        self.assertEqual(len(runner.spike_events), 1)
        t, index, offset = runner.spike_events[0]
        self.assertEqual((t, index), (3., 0))
        self.assertAlmostEqual(offset, 1. - 4.4 / 7.22, places=9)

    def test_continuation(self):
        model = glifpy.GLIF(2, glif_model='lif_r')
        runner = glifpy.GLIFRunner(model, monitors=['V_m'], inputs=400., dt=0.1, progress_bar=False)
        runner.run(5.)
        first = runner.mon.V_m
        runner.run(5.)
        np.testing.assert_allclose(runner.mon.ts[0], 5.)
        self.assertFalse(np.allclose(runner.mon.V_m[0], first[0]))

        reference = glifpy.GLIF(2, glif_model='lif_r')
        ref_runner = glifpy.GLIFRunner(reference, monitors=['V_m'], inputs=400., dt=0.1, progress_bar=False)
        ref_runner.run(10.)
        np.testing.assert_allclose(runner.mon.V_m, ref_runner.mon.V_m[50:])

        runner.run(5., reset_state=True)
        np.testing.assert_allclose(runner.mon.ts[0], 0.)
        np.testing.assert_allclose(runner.mon.V_m, ref_runner.mon.V_m[:50])

    def test_array_inputs(self):
        model = glifpy.GLIF(2)
        current = glifpy.inputs.section_input(values=[0., 1000.], durations=[5., 5.], dt=0.1)
        runner = glifpy.GLIFRunner(model, monitors=['I'], dt=0.1, progress_bar=False)
        spikes = runner.run(inputs=current)
        self.assertTupleEqual(spikes.shape, (100, 2))
        np.testing.assert_allclose(runner.mon.I[:50], 0.)
        np.testing.assert_allclose(runner.mon.I[50:], 1000.)
        self.assertFalse(spikes[:50].any())
        self.assertTrue(spikes[50:].any())

    def test_per_neuron_inputs(self):
        model = glifpy.GLIF(2)
        current = np.zeros((20, 2))
        current[:, 1] = 1000.
        runner = glifpy.GLIFRunner(model, monitors=['I'], dt=0.1, progress_bar=False)
        runner.run(2., inputs=current)
        np.testing.assert_allclose(runner.mon.I[:, 0], 0.)
        np.testing.assert_allclose(runner.mon.I[:, 1], 1000.)

    def test_callable_inputs(self):
        model = glifpy.GLIF(1)
        runner = glifpy.GLIFRunner(model, monitors=['I'], inputs=lambda t, dt: t * 10., dt=0.5,
                                   progress_bar=False)
        runner.run(2.)
        np.testing.assert_allclose(runner.mon.I[:, 0], [0., 5., 10., 15.])

    def test_function_monitors(self):
        model = glifpy.GLIF(3)
        runner = glifpy.GLIFRunner(model, monitors={'V0': lambda: model.V_m[0]}, dt=0.1, progress_bar=False)
        runner.run(1.)
        self.assertTupleEqual(runner.mon.V0.shape, (10,))

    def test_eval_time(self):
        model = glifpy.GLIF(1)
        runner = glifpy.GLIFRunner(model, dt=0.1)
        running_time, spikes = runner.run(1., eval_time=True)
        self.assertGreaterEqual(running_time, 0.)
        self.assertTupleEqual(spikes.shape, (10, 1))

    @parameterized.named_parameters(
        ('unknown_name', ['V_m', 'g_ex']),
        ('not_callable', {'V': 1.}),
        ('bad_type', 'V_m'),
    )
    def test_bad_monitors(self, monitors):
        with self.assertRaises(glifpy.errors.MonitorError):
            glifpy.GLIFRunner(glifpy.GLIF(1), monitors=monitors)

    def test_running_errors(self):
        runner = glifpy.GLIFRunner(glifpy.GLIF(2), dt=0.1, progress_bar=False)
        with self.assertRaises(glifpy.errors.RunningError):
            runner.run()
        with self.assertRaises(glifpy.errors.RunningError):
            runner.run(1., inputs=np.zeros(20))
        with self.assertRaises(glifpy.errors.RunningError):
            runner.run(inputs=np.zeros((10, 3)))
        with self.assertRaises(glifpy.errors.RunningError):
            glifpy.GLIFRunner(object())

    def test_calibrates_after_set_status(self):
        model = glifpy.GLIF(1, **SCENARIO)
        runner = glifpy.GLIFRunner(model, inputs=800., dt=1., progress_bar=False)
        runner.run(2.)
        model.set_status({'t_ref': 3.})
        runner.run(1.)
        self.assertEqual(model.t_ref_total, 3)


if __name__ == '__main__':
    absltest.main()
