"""
Fast-JX wavelength bins

The 18 effective wavelengths cover 177-850 nm. Bin spacings are the
differences between consecutive effective wavelengths and are used as
the trapezoidal weights when integrating over the spectrum.
"""

import numpy as np
import jax.numpy as jnp

N_WAVELENGTH_BINS = 18

# Effective wavelength of each bin (nm)
WAVELENGTHS = np.array(
    [187, 191, 193, 196, 202, 208, 211, 214, 261, 267, 277, 295, 303, 310, 316, 333, 380, 574],
    dtype=np.float64,
)

# Spacing between neighbouring bins (nm) [N_WAVELENGTH_BINS - 1]
BIN_SPACINGS = np.diff(WAVELENGTHS)

# Reference top-of-atmosphere actinic flux (photons/cm²/s) per bin
REFERENCE_ACTINIC_FLUX = np.array([
    1.391e12, 1.627e12, 1.664e12, 9.278e11, 7.842e12, 4.680e12,
    9.918e12, 1.219e13, 6.364e14, 4.049e14, 3.150e14, 5.889e14,
    7.678e14, 5.045e14, 8.902e14, 3.853e15, 1.547e16, 2.131e17,
])

# Rayleigh scattering cross sections (cm²) per bin
RAYLEIGH_CROSS_SECTION = np.array([
    5.073, 4.479, 4.196, 3.906, 3.355, 2.929,
    2.736, 2.581, 1.049, 0.9492, 0.8103, 0.6131,
    0.5422, 0.4923, 0.4514, 0.3643, 0.2087, 0.03848,
]) * 1.0e-25


def wavelengths() -> jnp.ndarray:
    """Effective wavelengths (nm) as a JAX array"""
    return jnp.asarray(WAVELENGTHS)


def bin_spacings() -> jnp.ndarray:
    """Bin spacings (nm) as a JAX array"""
    return jnp.asarray(BIN_SPACINGS)
