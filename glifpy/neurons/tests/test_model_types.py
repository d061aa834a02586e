# -*- coding: utf-8 -*-


import numpy as np
from absl.testing import absltest
from absl.testing import parameterized

import glifpy
from glifpy.neurons import model_types


class TestParseGlifModel(parameterized.TestCase):
    @parameterized.named_parameters(
        {'testcase_name': f'{alias}', 'alias': alias, 'level': level}
        for level, name in enumerate(model_types.GLIF_MODEL_NAMES, 1)
        for alias in (name, f'glif_{name}', str(level))
    )
    def test_aliases(self, alias, level):
        self.assertEqual(model_types.parse_glif_model(alias), level)

    @parameterized.parameters(1, 2, 3, 4, 5)
    def test_integers(self, level):
        self.assertEqual(model_types.parse_glif_model(level), level)
        self.assertEqual(model_types.parse_glif_model(np.int64(level)), level)

    @parameterized.parameters(0, 6, -1, True, False, 1.0, 'LIF', 'lif ', 'glif_6', 'glif_', '', None)
    def test_rejected(self, value):
        with self.assertRaises(glifpy.errors.InvalidParameterError):
            model_types.parse_glif_model(value)

    def test_names(self):
        self.assertEqual(model_types.glif_model_name(1), 'lif')
        self.assertEqual(model_types.glif_model_name(5), 'lif_r_asc_a')
        self.assertEqual(model_types.glif_model_name('glif_lif_r'), 'lif_r')

    def test_feature_matrix(self):
        self.assertEqual([model_types.has_linear_reset(i) for i in range(1, 6)],
                         [False, True, False, True, True])
        self.assertEqual([model_types.has_spike_threshold(i) for i in range(1, 6)],
                         [False, True, False, True, True])
        self.assertEqual([model_types.has_asc(i) for i in range(1, 6)],
                         [False, False, True, True, True])
        self.assertEqual([model_types.has_voltage_threshold(i) for i in range(1, 6)],
                         [False, False, False, False, True])


if __name__ == '__main__':
    absltest.main()
