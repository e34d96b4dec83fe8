"""
Direct solar beam attenuation

Fractional transmission of the unscattered solar beam down to a given
pressure level. The slant optical depth is the sum over fine sub-layers
of layer optical depth times air mass factor; each coarse layer's optical
depth is split equally between its two fine sub-layers. Transmission
follows the Beer-Lambert law.

Date: 2025-02-07
"""

import jax
import jax.numpy as jnp

from .air_mass_factor import compute_amf
from .optical_depth import reference_optical_depth
from .parameters import DEFAULT_PARAMETERS, PhotolysisParameters
from .spectral_bins import REFERENCE_ACTINIC_FLUX
from .vertical import reference_profile


def closest_pressure_index(pressure, level_pressures: jnp.ndarray) -> jnp.ndarray:
    """
    Level whose bottom edge is the nearest at or below the given pressure.

    Args:
        pressure: Pressure (Pa)
        level_pressures: Bottom-edge pressure of each level (Pa), decreasing

    Returns:
        Level index (0-based). Pressures above the surface level map to
        level 0 and pressures above the model top to the top level.
    """
    level_pressures = jnp.asarray(level_pressures)
    n_below = jnp.sum(level_pressures >= pressure)
    return jnp.clip(n_below - 1, 0, level_pressures.shape[0] - 1)


def slant_optical_depth(optical_depth: jnp.ndarray, amf: jnp.ndarray) -> jnp.ndarray:
    """
    Optical depth along the solar beam.

    Args:
        optical_depth: Layer optical depth [L + 1, ...] (last row above the model top)
        amf: Air mass factors on the fine grid [2L + 1]

    Returns:
        Slant optical depth [...]
    """
    layer = jnp.arange(amf.shape[0]) // 2
    weights = amf.reshape(amf.shape + (1,) * (optical_depth.ndim - 1))
    return 0.5 * jnp.sum(optical_depth[layer] * weights, axis=0)


def _beer_lambert(tau, threshold):
    # exp(-tau) underflows to zero in double precision beyond the threshold
    return jnp.where(tau < threshold, jnp.exp(-jnp.minimum(tau, threshold)), 0.0)


@jax.jit
def direct_beam_transmission(
    optical_depth: jnp.ndarray,
    cos_zenith,
    heights: jnp.ndarray,
    pressure,
    level_pressures: jnp.ndarray,
    parameters: PhotolysisParameters = None
) -> jnp.ndarray:
    """
    Direct-beam transmission in every wavelength bin.

    Args:
        optical_depth: Layer optical depth [L + 1, n_bins]
        cos_zenith: Cosine of solar zenith angle
        heights: Edge heights above the surface (cm) [L + 1]
        pressure: Pressure of the receiver (Pa)
        level_pressures: Bottom-edge pressure of each level (Pa) [L]
        parameters: Photolysis parameters

    Returns:
        Transmission in [0, 1] [n_bins]; exactly 1 above the top-of-atmosphere
        pressure and 0 in the Earth's shadow
    """
    if parameters is None:
        parameters = DEFAULT_PARAMETERS

    fine_index = 2 * closest_pressure_index(pressure, level_pressures)
    amf = compute_amf(cos_zenith, heights, fine_index, parameters)

    tau = slant_optical_depth(optical_depth, amf)
    transmission = jnp.where(amf[fine_index] > 0.0, _beer_lambert(tau, parameters.optical_depth_threshold), 0.0)
    return jnp.where(pressure < parameters.top_of_atmosphere_pressure, jnp.ones_like(transmission), transmission)


@jax.jit
def direct_beam_transmission_single_bin(
    optical_depth: jnp.ndarray,
    cos_zenith,
    heights: jnp.ndarray,
    pressure,
    level_pressures: jnp.ndarray,
    wavelength_bin,
    parameters: PhotolysisParameters = None
) -> jnp.ndarray:
    """
    Direct-beam transmission in one wavelength bin.

    Same as direct_beam_transmission but only the optical depth column of
    `wavelength_bin` (0-based) enters the slant-path sum.
    """
    if parameters is None:
        parameters = DEFAULT_PARAMETERS

    fine_index = 2 * closest_pressure_index(pressure, level_pressures)
    amf = compute_amf(cos_zenith, heights, fine_index, parameters)

    tau = slant_optical_depth(jnp.asarray(optical_depth)[:, wavelength_bin], amf)
    transmission = jnp.where(amf[fine_index] > 0.0, _beer_lambert(tau, parameters.optical_depth_threshold), 0.0)
    return jnp.where(pressure < parameters.top_of_atmosphere_pressure, 1.0, transmission)


def transmission(pressure, cos_zenith, wavelength_bin=None, parameters: PhotolysisParameters = None) -> jnp.ndarray:
    """
    Direct-beam transmission through the reference atmosphere.

    Args:
        pressure: Pressure of the receiver (Pa)
        cos_zenith: Cosine of solar zenith angle
        wavelength_bin: Optional bin index (0-based); all bins when omitted
        parameters: Photolysis parameters

    Returns:
        Transmission, scalar for a single bin or [n_bins]
    """
    profile = reference_profile()
    if wavelength_bin is None:
        return direct_beam_transmission(reference_optical_depth(), cos_zenith, profile.heights,
                                        pressure, profile.pressure, parameters)
    return direct_beam_transmission_single_bin(reference_optical_depth(), cos_zenith, profile.heights,
                                               pressure, profile.pressure, wavelength_bin, parameters)


def attenuated_actinic_flux(pressure, cos_zenith, spectrum=None, parameters: PhotolysisParameters = None) -> jnp.ndarray:
    """
    Actinic flux per bin at a pressure level for a given solar angle.

    The top-of-atmosphere spectrum times the direct-beam transmission. The
    transmission already accounts for the slant path, including twilight,
    so no further solar-angle factor is applied.

    Returns:
        Flux (photons/cm²/s) [n_bins]
    """
    if spectrum is None:
        spectrum = REFERENCE_ACTINIC_FLUX
    return jnp.asarray(spectrum) * transmission(pressure, cos_zenith, parameters=parameters)
