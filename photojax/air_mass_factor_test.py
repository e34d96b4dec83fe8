"""
Tests for pseudo-spherical air mass factors

Date: 2025-02-06
"""

import unittest

import jax
import jax.numpy as jnp
import numpy as np

from photojax.air_mass_factor import (
    ascending_air_mass_factors,
    compute_amf,
    fine_grid_heights,
    fine_grid_radii,
    shadow_height,
    twilight_air_mass_factors,
)
from photojax.parameters import DEFAULT_PARAMETERS
from photojax.vertical import N_LEVELS, reference_profile

N_FINE = 2 * N_LEVELS + 1
TOP = N_FINE - 1


def heights():
    return jnp.asarray(reference_profile().heights)


class Float64TestCase(unittest.TestCase):
    """Runs each test with 64-bit JAX types, restoring the previous setting afterwards"""

    def setUp(self):
        enabled = jax.config.jax_enable_x64
        jax.config.update('jax_enable_x64', True)
        self.addCleanup(jax.config.update, 'jax_enable_x64', enabled)


class TestFineGrid(Float64TestCase):

    def test_midpoints(self):
        fine = fine_grid_heights(jnp.array([0.0, 2.0, 6.0]))
        np.testing.assert_allclose(fine, [0.0, 1.0, 2.0, 4.0, 6.0])

    def test_reference_grid(self):
        fine = fine_grid_heights(heights())
        self.assertEqual(fine.shape, (N_FINE,))
        self.assertTrue(jnp.all(jnp.diff(fine) > 0))
        np.testing.assert_allclose(fine[::2], reference_profile().heights)

    def test_radii(self):
        radii = fine_grid_radii(heights())
        self.assertEqual(float(radii[0]), float(DEFAULT_PARAMETERS.earth_radius))

    def test_shadow_height(self):
        radius = 6375.0e5
        self.assertEqual(float(shadow_height(0.5, radius)), 0.0)
        self.assertEqual(float(shadow_height(0.0, radius)), 0.0)
        self.assertAlmostEqual(float(shadow_height(-0.6, radius)) / radius, 1.25, places=10)
        self.assertTrue(jnp.isinf(shadow_height(-1.0, radius)))


class TestAscending(Float64TestCase):

    def test_top_is_one(self):
        for cos_zenith in (1.0, 0.5, 0.05):
            for start in (0, 40, TOP):
                amf = compute_amf(cos_zenith, heights(), start)
                self.assertEqual(float(amf[TOP]), 1.0)

    def test_overhead_sun(self):
        amf = compute_amf(1.0, heights(), 0)
        np.testing.assert_allclose(amf, np.ones(N_FINE), rtol=1e-12)

    def test_zero_below_receiver(self):
        start = 50
        amf = ascending_air_mass_factors(0.7, fine_grid_heights(heights()), start)
        self.assertTrue(jnp.all(amf[:start] == 0.0))
        self.assertTrue(jnp.all(amf[start:] > 0.0))

    def test_plane_parallel_limit(self):
        # Near the surface the thin layers see close to 1/mu
        amf = compute_amf(0.5, heights(), 0)
        self.assertAlmostEqual(float(amf[0]), 2.0, delta=0.02)
        self.assertLessEqual(float(amf[0]), 2.0)

    def test_decreases_with_height(self):
        amf = compute_amf(0.3, heights(), 0)
        self.assertTrue(jnp.all(jnp.diff(amf) <= 1e-12))
        self.assertTrue(jnp.all(amf >= 1.0 - 1e-12))

    def test_grazing_incidence_finite(self):
        amf = compute_amf(0.0, heights(), 0)
        self.assertTrue(jnp.all(jnp.isfinite(amf)))
        # Horizontal ray through the lowest sub-layer: sqrt(2 R dz) / dz is large
        self.assertGreater(float(amf[0]), 10.0)


class TestTwilight(unittest.TestCase):

    def test_shadow_is_zero(self):
        # Sun well below the horizon at the surface
        amf = compute_amf(-0.5, heights(), 0)
        np.testing.assert_array_equal(amf, np.zeros(N_FINE))

    def test_sunlit_has_no_twilight(self):
        amf = twilight_air_mass_factors(0.3, fine_grid_heights(heights()), 100)
        np.testing.assert_array_equal(amf, np.zeros(N_FINE))

    def test_twilight_below_receiver(self):
        start = 120
        amf = compute_amf(-0.05, heights(), start)
        self.assertTrue(jnp.all(jnp.isfinite(amf)))
        self.assertTrue(jnp.all(amf >= 0.0))
        self.assertEqual(float(amf[TOP]), 1.0)
        # The ray dips below the receiver before it climbs out
        self.assertGreater(float(amf[start - 1]), 0.0)
        # and never reaches the ground
        self.assertEqual(float(amf[0]), 0.0)

    def test_twilight_only_below_receiver(self):
        start = 120
        twilight = twilight_air_mass_factors(-0.05, fine_grid_heights(heights()), start)
        self.assertTrue(jnp.all(twilight[start:] == 0.0))

    def test_repeated_edge(self):
        # Two coincident level edges give zero-thickness sub-layers
        edges = np.array(reference_profile().heights)
        edges[10] = edges[9]
        for cos_zenith in (0.5, 0.0, -0.02):
            for start in (0, 18, 40, 100):
                amf = compute_amf(cos_zenith, jnp.asarray(edges), start)
                self.assertTrue(jnp.all(jnp.isfinite(amf)), (cos_zenith, start))
                self.assertTrue(jnp.all(amf >= 0.0), (cos_zenith, start))

    def test_jit_vmap(self):
        cos_zenith = jnp.linspace(-0.2, 1.0, 7)
        amf = jax.vmap(lambda c: compute_amf(c, heights(), 60))(cos_zenith)
        self.assertEqual(amf.shape, (7, N_FINE))
        self.assertTrue(jnp.all(jnp.isfinite(amf)))

    def test_single_precision_sweep(self):
        # Default 32-bit types across day, grazing and twilight angles
        cos_zenith = jnp.linspace(-0.3, 1.0, 27)
        for start in (0, 40, 100, TOP):
            amf = jax.vmap(lambda c: compute_amf(c, heights(), start))(cos_zenith)
            self.assertTrue(jnp.all(jnp.isfinite(amf)), start)
            self.assertTrue(jnp.all(amf >= 0.0), start)


if __name__ == '__main__':
    unittest.main()
