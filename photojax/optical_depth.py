"""
Layer optical depths for the direct solar beam

Vertical optical depth of each layer in each wavelength bin from Rayleigh
scattering and O2/O3 absorption. The result does not depend on the solar
angle; slant paths are applied later through air mass factors.

TODO: aerosol and cloud optical depth are not included.

Date: 2025-02-05
"""

import functools

import jax.numpy as jnp

from .cross_sections import O2_CROSS_SECTIONS, O3_CROSS_SECTIONS, CrossSectionTable
from .parameters import DEFAULT_PARAMETERS, PhotolysisParameters
from .spectral_bins import RAYLEIGH_CROSS_SECTION
from .vertical import AtmosphericProfile, reference_profile


def rayleigh_optical_depth(column_density: jnp.ndarray) -> jnp.ndarray:
    """
    Rayleigh scattering optical depth.

    Args:
        column_density: Air column per layer (molecules/cm²) [nlev]

    Returns:
        Optical depth [nlev, n_bins]
    """
    return jnp.asarray(column_density)[:, None] * jnp.asarray(RAYLEIGH_CROSS_SECTION)[None, :]


def absorption_optical_depth(
    temperature: jnp.ndarray,
    column_density: jnp.ndarray,
    o3_vmr: jnp.ndarray,
    o2_mole_fraction: float = DEFAULT_PARAMETERS.o2_mole_fraction,
    o2_cross_sections: CrossSectionTable = O2_CROSS_SECTIONS,
    o3_cross_sections: CrossSectionTable = O3_CROSS_SECTIONS
) -> jnp.ndarray:
    """
    O2 and O3 absorption optical depth.

    Args:
        temperature: Layer temperature (K) [nlev]
        column_density: Air column per layer (molecules/cm²) [nlev]
        o3_vmr: Ozone volume mixing ratio [nlev]
        o2_mole_fraction: O2 volume mixing ratio

    Returns:
        Optical depth [nlev, n_bins]
    """
    column_density = jnp.asarray(column_density)[:, None]
    sigma_o2 = o2_cross_sections.spectrum(temperature)
    sigma_o3 = o3_cross_sections.spectrum(temperature)

    tau_o2 = sigma_o2 * column_density * o2_mole_fraction
    tau_o3 = sigma_o3 * column_density * jnp.asarray(o3_vmr)[:, None]
    return tau_o2 + tau_o3


def build_optical_depth(
    profile: AtmosphericProfile = None,
    parameters: PhotolysisParameters = None
) -> jnp.ndarray:
    """
    Total optical depth per layer, with a zero row above the model top.

    Args:
        profile: Vertical profile; defaults to the reference profile
        parameters: Photolysis parameters

    Returns:
        Optical depth [nlev + 1, n_bins], non-negative, last row zero
    """
    if profile is None:
        profile = reference_profile()
    if parameters is None:
        parameters = DEFAULT_PARAMETERS

    tau = (rayleigh_optical_depth(profile.column_density) +
           absorption_optical_depth(profile.temperature, profile.column_density,
                                    profile.o3_vmr, parameters.o2_mole_fraction))

    # Vacuum above the model top
    return jnp.concatenate([tau, jnp.zeros((1, tau.shape[1]), dtype=tau.dtype)], axis=0)


@functools.lru_cache(maxsize=None)
def reference_optical_depth() -> jnp.ndarray:
    """Optical depth of the reference profile, built once per process."""
    return build_optical_depth()
