"""
Tests for direct-beam transmission

Date: 2025-02-07
"""

import jax
import jax.numpy as jnp
import numpy as np
import pytest

from photojax.direct_beam import (
    attenuated_actinic_flux,
    closest_pressure_index,
    direct_beam_transmission,
    direct_beam_transmission_single_bin,
    slant_optical_depth,
    transmission,
)
from photojax.optical_depth import reference_optical_depth
from photojax.parameters import PhotolysisParameters
from photojax.spectral_bins import N_WAVELENGTH_BINS, REFERENCE_ACTINIC_FLUX
from photojax.vertical import N_LEVELS, reference_profile


class TestPressureIndex:
    """Test the receiver level lookup"""

    levels = jnp.array([1000.0, 500.0, 100.0])

    @pytest.mark.parametrize("pressure,expected", [
        (2000.0, 0), (1000.0, 0), (700.0, 0), (500.0, 1), (120.0, 1), (100.0, 2), (50.0, 2),
    ])
    def test_closest_pressure_index(self, pressure, expected):
        assert int(closest_pressure_index(pressure, self.levels)) == expected


class TestSlantOpticalDepth:
    """Test the sum over fine sub-layers"""

    def test_vertical_path(self):
        # With unit air mass factors every coarse layer contributes its own depth
        tau = reference_optical_depth()
        amf = jnp.ones(2 * N_LEVELS + 1)
        np.testing.assert_allclose(slant_optical_depth(tau, amf), tau.sum(axis=0), rtol=1e-5)

    def test_half_layers(self):
        tau = jnp.array([[2.0], [4.0], [0.0]])
        amf = jnp.array([1.0, 0.0, 0.0, 3.0, 1.0])
        np.testing.assert_allclose(slant_optical_depth(tau, amf), [0.5 * (2.0 * 1.0 + 4.0 * 3.0)])


class TestTransmission:
    """Test transmission through the reference atmosphere"""

    def test_above_model_top(self):
        for cos_zenith in (-0.9, 0.0, 0.5):
            np.testing.assert_array_equal(transmission(0.5, cos_zenith), np.ones(N_WAVELENGTH_BINS))

    def test_bounds(self):
        for pressure in (101325.0, 50000.0, 5000.0, 100.0, 2.0):
            for cos_zenith in (-0.3, -0.05, 0.0, 0.2, 1.0):
                t = transmission(pressure, cos_zenith)
                assert t.shape == (N_WAVELENGTH_BINS,)
                assert jnp.all(t >= 0.0)
                assert jnp.all(t <= 1.0)

    def test_overhead_sun_at_surface(self):
        t = transmission(101325.0, 1.0)
        # O2 Schumann-Runge bands are opaque
        assert t[0] == 0.0
        # Visible light mostly reaches the ground
        assert t[-1] > 0.8

    def test_increases_with_altitude(self):
        pressures = [90000.0, 50000.0, 10000.0, 1000.0, 100.0]
        t = jnp.stack([transmission(p, 0.5, wavelength_bin=12) for p in pressures])
        assert jnp.all(jnp.diff(t) >= 0.0)

    def test_decreases_with_zenith_angle(self):
        t = jnp.stack([transmission(50000.0, c, wavelength_bin=15) for c in (1.0, 0.7, 0.4, 0.1)])
        assert jnp.all(jnp.diff(t) < 0.0)

    def test_earth_shadow(self):
        np.testing.assert_array_equal(transmission(101325.0, -0.5), np.zeros(N_WAVELENGTH_BINS))

    def test_twilight_upper_atmosphere(self):
        # Sun just below the horizon still lights the stratosphere
        t = transmission(100.0, -0.05)
        assert t[-1] > 0.0

    def test_single_bin_matches_vector(self):
        full = transmission(30000.0, 0.6)
        for wavelength_bin in (0, 8, 12, 17):
            np.testing.assert_allclose(transmission(30000.0, 0.6, wavelength_bin=wavelength_bin),
                                       full[wavelength_bin], rtol=1e-4, atol=1e-30)

    def test_single_precision_sweep(self):
        # Default 32-bit types on a dense grid through day, grazing and twilight angles
        pressures = jnp.geomspace(101325.0, 1.0, 25)
        cos_zenith = jnp.linspace(-0.3, 1.0, 27)
        t = jax.vmap(lambda p: jax.vmap(lambda c: transmission(p, c))(cos_zenith))(pressures)
        assert t.shape == (25, 27, N_WAVELENGTH_BINS)
        assert jnp.all(jnp.isfinite(t))
        assert jnp.all(t >= 0.0)
        assert jnp.all(t <= 1.0)

    def test_idempotent(self):
        np.testing.assert_array_equal(transmission(20000.0, 0.3), transmission(20000.0, 0.3))

    def test_threshold(self):
        profile = reference_profile()
        args = (reference_optical_depth(), 0.5, jnp.asarray(profile.heights), 101325.0, jnp.asarray(profile.pressure))
        strict = direct_beam_transmission(*args, PhotolysisParameters.default(optical_depth_threshold=1.0e-3))
        assert jnp.all(strict == 0.0)

    def test_single_bin_function(self):
        profile = reference_profile()
        t = direct_beam_transmission_single_bin(reference_optical_depth(), 0.8, jnp.asarray(profile.heights),
                                                0.5, jnp.asarray(profile.pressure), 3)
        assert t == 1.0

    def test_vmap_over_pressure(self):
        profile = reference_profile()
        pressures = jnp.asarray(profile.pressure)
        t = jax.vmap(lambda p: direct_beam_transmission(reference_optical_depth(), 0.5, jnp.asarray(profile.heights),
                                                        p, pressures))(pressures)
        assert t.shape == (N_LEVELS, N_WAVELENGTH_BINS)
        assert jnp.all(jnp.isfinite(t))


class TestAttenuatedFlux:
    """Test attenuated actinic flux"""

    def test_top_of_atmosphere(self):
        np.testing.assert_allclose(attenuated_actinic_flux(0.5, 0.3), REFERENCE_ACTINIC_FLUX, rtol=1e-6)

    def test_scaled_by_transmission(self):
        flux = attenuated_actinic_flux(80000.0, 0.7)
        np.testing.assert_allclose(flux, REFERENCE_ACTINIC_FLUX * transmission(80000.0, 0.7), rtol=1e-6)
        assert jnp.all(flux <= REFERENCE_ACTINIC_FLUX * (1.0 + 1e-6))

    def test_custom_spectrum(self):
        spectrum = jnp.full(N_WAVELENGTH_BINS, 2.0)
        np.testing.assert_allclose(attenuated_actinic_flux(40000.0, 0.7, spectrum),
                                   2.0 * transmission(40000.0, 0.7), rtol=1e-6)
