"""
Photolysis rate coefficients (J-values)

A photolysis channel is a cross-section table plus a quantum yield. The
rate is integrated over the Fast-JX wavelength bins with the trapezoidal
rule: per-bin rates

    j_i = F_i σ_i(T) φ / λ_i

are averaged over each pair of neighbouring bins and weighted by the bin
spacing Δλ_i. F is either the reference spectrum scaled by the solar angle
(bulk) or the spectrum attenuated along the slant path to a pressure
level (attenuated).

Date: 2025-02-10
"""

import enum
from typing import NamedTuple

import jax
import jax.numpy as jnp

from .constants import physical_constants
from .cross_sections import (
    CH2OA_CROSS_SECTIONS,
    CH2OB_CROSS_SECTIONS,
    CH3OOH_CROSS_SECTIONS,
    H2O2_CROSS_SECTIONS,
    NO2_CROSS_SECTIONS,
    O3_O1D_CROSS_SECTIONS,
    CrossSectionTable,
)
from .direct_beam import attenuated_actinic_flux
from .parameters import PhotolysisParameters
from .solar import cos_solar_zenith_angle, solar_fluxes
from .spectral_bins import bin_spacings, wavelengths


class Channel(str, enum.Enum):
    """Photolysis channels with tabulated cross sections"""
    O3_O1D = 'O3_O1D'    # O3 -> O2 + O(1D)
    H2O2 = 'H2O2'        # H2O2 -> OH + OH
    CH2OA = 'CH2Oa'      # CH2O -> H + HO2 + CO
    CH2OB = 'CH2Ob'      # CH2O -> CO + H2
    CH3OOH = 'CH3OOH'    # CH3OOH -> OH + HO2 + CH2O
    NO2 = 'NO2'          # NO2 -> NO + O


class PhotolysisChannel(NamedTuple):
    """Cross sections and quantum yield of one photolysis pathway"""
    reaction: str
    cross_sections: CrossSectionTable
    quantum_yield: float = 1.0


PHOTOLYSIS_CHANNELS = {
    # Normalised table, so this J is in table units (see O3_O1D_CROSS_SECTIONS)
    Channel.O3_O1D: PhotolysisChannel('O3 -> O2 + O(1D)', O3_O1D_CROSS_SECTIONS),
    Channel.H2O2: PhotolysisChannel('H2O2 -> OH + OH', H2O2_CROSS_SECTIONS),
    Channel.CH2OA: PhotolysisChannel('CH2O -> H + HO2 + CO', CH2OA_CROSS_SECTIONS),
    Channel.CH2OB: PhotolysisChannel('CH2O -> CO + H2', CH2OB_CROSS_SECTIONS),
    Channel.CH3OOH: PhotolysisChannel('CH3OOH -> OH + HO2 + CH2O', CH3OOH_CROSS_SECTIONS),
    Channel.NO2: PhotolysisChannel('NO2 -> NO + O', NO2_CROSS_SECTIONS),
}


class PhotolysisRates(NamedTuple):
    """J-values (1/s) of all tabulated channels"""
    j_o31d: jnp.ndarray
    j_h2o2: jnp.ndarray
    j_ch2oa: jnp.ndarray
    j_ch2ob: jnp.ndarray
    j_ch3ooh: jnp.ndarray
    j_no2: jnp.ndarray


def get_channel(channel) -> PhotolysisChannel:
    """
    Resolve a channel given as a Channel, its name, or a PhotolysisChannel.

    Raises:
        ValueError: if the name is not a known channel
    """
    if isinstance(channel, PhotolysisChannel):
        return channel
    try:
        return PHOTOLYSIS_CHANNELS[Channel(channel)]
    except ValueError:
        raise ValueError(f"Unknown photolysis channel: {channel!r}. "
                         f"Must be one of: {[c.value for c in Channel]}") from None


def cross_section(channel, wavelength_bin, temperature) -> jnp.ndarray:
    """Cross section (cm²) of a channel in one bin (0-based) at the given temperature"""
    return get_channel(channel).cross_sections.interpolate(wavelength_bin, temperature)


def binned_rates(actinic_flux, channel, temperature) -> jnp.ndarray:
    """
    Per-bin photolysis rates F_i σ_i(T) φ, without integration.

    Args:
        actinic_flux: Flux per bin [..., n_bins]
        channel: Photolysis channel
        temperature: Temperature (K)

    Returns:
        Rates per bin [..., n_bins]
    """
    ch = get_channel(channel)
    return jnp.asarray(actinic_flux) * ch.cross_sections.spectrum(temperature) * ch.quantum_yield


@jax.jit
def integrate_j(fluxes: jnp.ndarray, cross_sections: jnp.ndarray, quantum_yield=1.0) -> jnp.ndarray:
    """
    Trapezoidal integration of the photolysis rate over wavelength bins.

    Args:
        fluxes: Actinic flux per bin [..., n_bins]
        cross_sections: Cross section per bin (cm²) [..., n_bins]
        quantum_yield: Quantum yield

    Returns:
        J-value (1/s) [...]
    """
    j_bins = fluxes * cross_sections * quantum_yield / wavelengths()
    return jnp.sum(0.5 * (j_bins[..., :-1] + j_bins[..., 1:]) * bin_spacings(), axis=-1)


def j_from_fluxes(channel, fluxes, temperature) -> jnp.ndarray:
    """J-value (1/s) of a channel for a given per-bin flux and temperature"""
    ch = get_channel(channel)
    return integrate_j(fluxes, ch.cross_sections.spectrum(temperature), ch.quantum_yield)


def j_value(channel, time, latitude, temperature, longitude=0.0) -> jnp.ndarray:
    """
    Bulk J-value from the reference spectrum scaled by the solar angle.

    Args:
        channel: Photolysis channel
        time: Unix time (s) or jax_datetime Datetime
        latitude: Latitude in degrees
        temperature: Temperature (K)
        longitude: Longitude in degrees east; zero takes the time as local solar time

    Returns:
        J-value (1/s); zero when the sun is below the horizon
    """
    cos_zenith = cos_solar_zenith_angle(time, latitude, longitude)
    return j_from_fluxes(channel, solar_fluxes(cos_zenith), temperature)


def j_value_attenuated(
    channel,
    time,
    latitude,
    temperature,
    pressure,
    longitude=0.0,
    parameters: PhotolysisParameters = None
) -> jnp.ndarray:
    """
    J-value from the direct beam attenuated down to a pressure level.

    Args:
        channel: Photolysis channel
        time: Unix time (s) or jax_datetime Datetime
        latitude: Latitude in degrees
        temperature: Temperature (K)
        pressure: Pressure of the receiver (Pa)
        longitude: Longitude in degrees east
        parameters: Photolysis parameters

    Returns:
        J-value (1/s)
    """
    cos_zenith = cos_solar_zenith_angle(time, latitude, longitude)
    fluxes = attenuated_actinic_flux(pressure, cos_zenith, parameters=parameters)
    return j_from_fluxes(channel, fluxes, temperature)


def photolysis_rates(time, latitude, temperature, longitude=0.0) -> PhotolysisRates:
    """Bulk J-values of every channel at one time and place"""
    cos_zenith = cos_solar_zenith_angle(time, latitude, longitude)
    fluxes = solar_fluxes(cos_zenith)
    return PhotolysisRates(*(j_from_fluxes(channel, fluxes, temperature) for channel in Channel))


@jax.jit
def o1d_oh_fraction(temperature, pressure, h2o_ppb) -> jnp.ndarray:
    """
    Fraction of O(1D) that reacts with water vapour rather than being quenched.

    J(O3 -> 2OH) is J(O3 -> O(1D)) times this fraction.

    Args:
        temperature: Temperature (K)
        pressure: Pressure (Pa)
        h2o_ppb: Water vapour mixing ratio (ppb)

    Returns:
        Dimensionless fraction in [0, 1]
    """
    # Air number density (molecules/cm³)
    air = pressure / (physical_constants.boltzmann * temperature) * 1.0e-6

    k_h2o = 1.63e-10 * jnp.exp(60.0 / temperature) * h2o_ppb * 1.0e-9 * air
    k_n2 = 2.15e-11 * jnp.exp(110.0 / temperature) * physical_constants.n2_mole_fraction * air
    k_o2 = 3.30e-11 * jnp.exp(55.0 / temperature) * physical_constants.o2_mole_fraction * air
    return k_h2o / (k_h2o + k_n2 + k_o2)
