# -*- coding: utf-8 -*-


import jax.numpy as jnp
from absl.testing import absltest

import glifpy


class TestShare(absltest.TestCase):
    def setUp(self):
        glifpy.share.clear_shargs()

    def tearDown(self):
        glifpy.share.clear_shargs()

    def test_save_load(self):
        glifpy.share.save(t=1., i=10)
        self.assertEqual(glifpy.share.load('t'), 1.)
        self.assertEqual(glifpy.share['i'], 10)
        self.assertEqual(glifpy.share.get_shargs(), {'t': 1., 'i': 10})

    def test_default(self):
        self.assertEqual(glifpy.share.load('t', 0.), 0.)
        with self.assertRaises(KeyError):
            glifpy.share.load('t')

    def test_dt(self):
        self.assertEqual(glifpy.share.dt, glifpy.math.get_dt())
        glifpy.share.dt = 0.25
        self.assertEqual(glifpy.share.load('dt'), 0.25)
        glifpy.share.clear_shargs('dt')
        self.assertEqual(glifpy.share.dt, glifpy.math.get_dt())


class TestEnvironment(absltest.TestCase):
    def test_default_dt(self):
        dt = glifpy.math.get_dt()
        glifpy.math.set_dt(0.05)
        self.assertEqual(glifpy.math.get_dt(), 0.05)
        glifpy.math.set_dt(dt)
        for value in (0., -1., True, '0.1'):
            with self.assertRaises(glifpy.errors.InvalidParameterError):
                glifpy.math.set_dt(value)

    def test_x64(self):
        self.assertEqual(glifpy.math.float_(), jnp.float64)
        self.assertEqual(glifpy.math.int_(), jnp.int64)


if __name__ == '__main__':
    absltest.main()
