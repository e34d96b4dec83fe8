"""
Calendar helpers for solar geometry.

Times are either Unix timestamps (seconds since 1970-01-01 UTC) or
jax_datetime Datetimes. Both are reduced to whole days since the epoch
and seconds into the day, so that everything below stays traceable.

Concrete Unix times (Python or NumPy numbers) are split on the host in
double precision, so a float time keeps its sub-minute part. A float
time that is already a traced single precision array is only resolved
to about 128 s near the present epoch; pass integer seconds or a
Datetime under jit when that matters.
"""

import numpy as np
import jax.numpy as jnp
import jax_datetime as jdt

_SECONDS_PER_DAY = 86400.0

__all__ = ['split_time', 'civil_from_days', 'day_of_year', 'time_of_day']


def _as_float(x):
    return jnp.asarray(x, dtype=jnp.result_type(float))


def split_time(time):
    """
    Whole days since the epoch and seconds into the current UTC day.

    Args:
        time: Unix time (s) or a jax_datetime Datetime

    Returns:
        Tuple of (days [int32], seconds [float])
    """
    if isinstance(time, jdt.Datetime):
        return jnp.asarray(time.delta.days, dtype=jnp.int32), _as_float(time.delta.seconds)

    if isinstance(time, (int, float, np.ndarray, np.generic)):
        time = np.asarray(time)
        if not np.issubdtype(time.dtype, np.integer):
            time = time.astype(np.float64)
        days, seconds = np.divmod(time, int(_SECONDS_PER_DAY))
        return jnp.asarray(days.astype(np.int32)), _as_float(seconds)

    time = jnp.asarray(time)
    if jnp.issubdtype(time.dtype, jnp.integer):
        # Exact for whole seconds, which single precision is not
        days, seconds = jnp.divmod(time, int(_SECONDS_PER_DAY))
        return days.astype(jnp.int32), _as_float(seconds)

    time = _as_float(time)
    days = jnp.floor(time / _SECONDS_PER_DAY)
    return days.astype(jnp.int32), time - days * _SECONDS_PER_DAY


def civil_from_days(days):
    """
    Proleptic Gregorian (year, month, day) for a count of days since 1970-01-01.

    Uses the era/day-of-era decomposition (400-year cycles starting on
    March 1), which only needs integer arithmetic.
    """
    z = days + 719468
    era = z // 146097
    doe = z - era * 146097                                          # [0, 146096]
    yoe = (doe - doe // 1460 + doe // 36524 - doe // 146096) // 365  # [0, 399]
    doy_march = doe - (365 * yoe + yoe // 4 - yoe // 100)          # [0, 365], March 1 = 0
    mp = (5 * doy_march + 2) // 153
    day = doy_march - (153 * mp + 2) // 5 + 1
    month = jnp.where(mp < 10, mp + 3, mp - 9)
    year = yoe + era * 400 + (month <= 2)
    return year, month, day


def is_leap_year(year):
    return ((year % 4 == 0) & (year % 100 != 0)) | (year % 400 == 0)


def day_of_year(days):
    """
    Day of year (1 = January 1) for a count of days since 1970-01-01.

    Returns:
        Tuple of (year, day_of_year)
    """
    year, month, day = civil_from_days(days)
    # Cumulative days before each month in a non-leap year
    month_start = jnp.array([0, 31, 59, 90, 120, 151, 181, 212, 243, 273, 304, 334])
    doy = month_start[month - 1] + day + jnp.where((month > 2) & is_leap_year(year), 1, 0)
    return year, doy


def time_of_day(time):
    """
    Day of year and fractional UTC hour.

    Args:
        time: Unix time (s) or a jax_datetime Datetime

    Returns:
        Tuple of (day_of_year, hour_utc)
    """
    days, seconds = split_time(time)
    _, doy = day_of_year(days)
    return doy, seconds / 3600.0
