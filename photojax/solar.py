"""
Solar geometry for photolysis

Cosine of the solar zenith angle from a timestamp and location, and the
scaling of the reference actinic flux by that angle.

The declination uses the simple cosine fit
    DEC = -23.45° cos(360°/365 (DOY + 10))
and latitude enters through its magnitude |LAT|. This is an approximation
for photochemistry, not an ephemeris: in particular the southern
hemisphere sees the northern-hemisphere season.

Local solar time is UTC hour + longitude/15 (east positive). With the
default longitude of zero the input time is taken to be local solar time.

Date: 2025-02-04
"""

import jax
import jax.numpy as jnp

from .date import time_of_day
from .spectral_bins import REFERENCE_ACTINIC_FLUX

MAX_DECLINATION = 23.45  # degrees


@jax.jit
def solar_declination(day_of_year) -> jnp.ndarray:
    """
    Solar declination.

    Args:
        day_of_year: Day of year (1-366)

    Returns:
        Solar declination in radians
    """
    return jnp.deg2rad(-MAX_DECLINATION * jnp.cos(jnp.deg2rad(360.0 / 365.0 * (day_of_year + 10.0))))


@jax.jit
def local_solar_time(hour_utc, longitude=0.0) -> jnp.ndarray:
    """Local solar time (hours, 0-24) from UTC hour and longitude (degrees east)"""
    return jnp.mod(hour_utc + longitude / 15.0, 24.0)


@jax.jit
def hour_angle(local_time) -> jnp.ndarray:
    """
    Solar hour angle.

    Args:
        local_time: Local solar time (hours)

    Returns:
        Hour angle in radians, zero at local noon
    """
    return jnp.deg2rad(15.0 * (local_time - 12.0))


@jax.jit
def cosine_solar_zenith_angle_from_day_hour(day_of_year, hour_utc, latitude, longitude=0.0) -> jnp.ndarray:
    """
    Cosine of the solar zenith angle.

    Args:
        day_of_year: Day of year (1-366)
        hour_utc: Hour of day in UTC (0-24)
        latitude: Latitude in degrees
        longitude: Longitude in degrees east

    Returns:
        Cosine of solar zenith angle in [-1, 1]; negative when the sun is
        below the horizon
    """
    lat_rad = jnp.abs(jnp.deg2rad(latitude))
    decl = solar_declination(day_of_year)
    h_angle = hour_angle(local_solar_time(hour_utc, longitude))

    cos_zenith = (jnp.sin(lat_rad) * jnp.sin(decl) +
                  jnp.cos(lat_rad) * jnp.cos(decl) * jnp.cos(h_angle))
    return jnp.clip(cos_zenith, -1.0, 1.0)


def cos_solar_zenith_angle(time, latitude, longitude=0.0) -> jnp.ndarray:
    """
    Cosine of the solar zenith angle at a given time and place.

    Args:
        time: Unix time (s) or jax_datetime Datetime
        latitude: Latitude in degrees
        longitude: Longitude in degrees east

    Returns:
        Cosine of solar zenith angle in [-1, 1]
    """
    day_of_year, hour_utc = time_of_day(time)
    return cosine_solar_zenith_angle_from_day_hour(day_of_year, hour_utc, latitude, longitude)


def calc_flux(cos_zenith, max_actinic_flux) -> jnp.ndarray:
    """Actinic flux scaled by the solar angle; zero when the sun is down"""
    return jnp.maximum(0.0, max_actinic_flux * cos_zenith)


@jax.jit
def solar_fluxes(cos_zenith, spectrum=None) -> jnp.ndarray:
    """
    Per-bin actinic flux for a given solar angle.

    Args:
        cos_zenith: Cosine of solar zenith angle, scalar or array
        spectrum: Top-of-atmosphere flux per bin (photons/cm²/s); defaults
            to the reference spectrum

    Returns:
        Flux per bin [*cos_zenith.shape, n_bins]
    """
    if spectrum is None:
        spectrum = REFERENCE_ACTINIC_FLUX
    return calc_flux(jnp.asarray(cos_zenith)[..., None], jnp.asarray(spectrum))
