"""
Photolysis rates for atmospheric chemistry in JAX

Solar geometry, temperature-dependent cross sections, direct-beam
attenuation through a pseudo-spherical atmosphere, and integration of
photolysis rate coefficients over the Fast-JX wavelength bins.

Date: 2025-02-12
"""

from .parameters import PhotolysisParameters, DEFAULT_PARAMETERS
from .solar import cos_solar_zenith_angle, solar_declination, solar_fluxes
from .direct_beam import attenuated_actinic_flux, direct_beam_transmission, transmission
from .flux_table import ActinicFluxTable
from .photolysis import (
    Channel,
    PhotolysisChannel,
    PhotolysisRates,
    PHOTOLYSIS_CHANNELS,
    binned_rates,
    cross_section,
    j_value,
    j_value_attenuated,
    o1d_oh_fraction,
    photolysis_rates,
)

__all__ = [
    'PhotolysisParameters', 'DEFAULT_PARAMETERS',
    'cos_solar_zenith_angle', 'solar_declination', 'solar_fluxes',
    'attenuated_actinic_flux', 'direct_beam_transmission', 'transmission',
    'ActinicFluxTable',
    'Channel', 'PhotolysisChannel', 'PhotolysisRates', 'PHOTOLYSIS_CHANNELS',
    'binned_rates', 'cross_section', 'j_value', 'j_value_attenuated',
    'o1d_oh_fraction', 'photolysis_rates',
]
