"""
Tests for temperature interpolation of cross-section tables

Date: 2025-02-03
"""

import unittest

import jax.numpy as jnp
import numpy as np

from photojax.cross_sections import (
    CH2OA_CROSS_SECTIONS,
    CH3OOH_CROSS_SECTIONS,
    NO2_CROSS_SECTIONS,
    O2_CROSS_SECTIONS,
    O3_CROSS_SECTIONS,
    CrossSectionTable,
    interpolate_cross_sections,
)
from photojax.spectral_bins import N_WAVELENGTH_BINS


class TestCrossSectionTable(unittest.TestCase):

    def test_node_values(self):
        # Interpolating exactly at a node returns that node's row
        for table in (O3_CROSS_SECTIONS, NO2_CROSS_SECTIONS, CH2OA_CROSS_SECTIONS):
            for k, t in enumerate(table.temperatures):
                np.testing.assert_allclose(table.spectrum(t), table.cross_sections[k], rtol=1e-6)

    def test_flat_extrapolation(self):
        for table in (O2_CROSS_SECTIONS, O3_CROSS_SECTIONS, NO2_CROSS_SECTIONS):
            cold = table.spectrum(table.temperatures[0] - 50.0)
            hot = table.spectrum(table.temperatures[-1] + 50.0)
            np.testing.assert_allclose(cold, table.cross_sections[0], rtol=1e-6)
            np.testing.assert_allclose(hot, table.cross_sections[-1], rtol=1e-6)

    def test_two_node_interpolation(self):
        t1, t2 = NO2_CROSS_SECTIONS.temperatures
        x1, x2 = NO2_CROSS_SECTIONS.cross_sections
        temperature = 250.0
        expected = x1 + (temperature - t1) / (t2 - t1) * (x2 - x1)
        np.testing.assert_allclose(NO2_CROSS_SECTIONS.spectrum(temperature), expected, rtol=1e-5, atol=1e-30)

    def test_three_node_segments(self):
        # 218/258/298 K: each temperature only sees the segment it falls in
        x = O3_CROSS_SECTIONS.cross_sections
        np.testing.assert_allclose(O3_CROSS_SECTIONS.spectrum(238.0), 0.5 * (x[0] + x[1]), rtol=1e-5)
        np.testing.assert_allclose(O3_CROSS_SECTIONS.spectrum(278.0), 0.5 * (x[1] + x[2]), rtol=1e-5)

    def test_single_bin(self):
        full = NO2_CROSS_SECTIONS.spectrum(250.0)
        self.assertAlmostEqual(float(NO2_CROSS_SECTIONS.interpolate(12, 250.0)) * 1e19,
                               float(full[12]) * 1e19, places=5)

    def test_single_bin_array_temperature(self):
        temperatures = jnp.array([220.0, 298.0])
        sigma = O3_CROSS_SECTIONS.interpolate(12, temperatures)
        self.assertEqual(sigma.shape, (2,))
        np.testing.assert_allclose(sigma, O3_CROSS_SECTIONS.spectrum(temperatures)[:, 12], rtol=1e-6)

    def test_array_temperature(self):
        temperatures = jnp.array([150.0, 250.0, 400.0])
        sigma = O3_CROSS_SECTIONS.spectrum(temperatures)
        self.assertEqual(sigma.shape, (3, N_WAVELENGTH_BINS))
        np.testing.assert_allclose(sigma[0], O3_CROSS_SECTIONS.cross_sections[0], rtol=1e-6)
        np.testing.assert_allclose(sigma[2], O3_CROSS_SECTIONS.cross_sections[-1], rtol=1e-6)

    def test_single_node_is_constant(self):
        self.assertEqual(CH3OOH_CROSS_SECTIONS.n_nodes, 1)
        for temperature in (150.0, 298.0, 350.0):
            np.testing.assert_array_equal(CH3OOH_CROSS_SECTIONS.spectrum(temperature),
                                          jnp.asarray(CH3OOH_CROSS_SECTIONS.cross_sections[0]))

    def test_identical_rows_collapse(self):
        row = np.linspace(1.0, 2.0, N_WAVELENGTH_BINS)
        table = CrossSectionTable.from_nodes([200.0, 300.0], [row, row])
        self.assertEqual(table.n_nodes, 1)
        # O2 has two equal rows out of three and keeps all nodes
        self.assertEqual(O2_CROSS_SECTIONS.n_nodes, 3)

    def test_invalid_tables(self):
        row = np.ones(N_WAVELENGTH_BINS)
        with self.assertRaises(ValueError):
            CrossSectionTable.from_nodes([300.0, 200.0], [row, 2 * row])
        with self.assertRaises(ValueError):
            CrossSectionTable.from_nodes([200.0, 300.0], [row])
        with self.assertRaises(ValueError):
            CrossSectionTable.from_nodes([200.0], [np.ones(5)])

    def test_interpolate_cross_sections_function(self):
        temperatures = jnp.array([200.0, 300.0])
        values = jnp.stack([jnp.zeros(N_WAVELENGTH_BINS), jnp.ones(N_WAVELENGTH_BINS)])
        np.testing.assert_allclose(interpolate_cross_sections(225.0, temperatures, values),
                                   0.25 * np.ones(N_WAVELENGTH_BINS), rtol=1e-6)


if __name__ == '__main__':
    unittest.main()
