"""
Precomputed direct-beam transmission on a (pressure, solar angle) grid

Evaluating the slant path for every grid cell is much more expensive than
the photolysis integral itself. For repeated calls the transmission of the
reference atmosphere can be tabulated once and looked up with bilinear
interpolation. Queries outside the grid take the value at the nearest
edge.

Date: 2025-02-12
"""

import logging

import jax
import jax.numpy as jnp
import numpy as np
import tree_math

from .direct_beam import direct_beam_transmission
from .optical_depth import reference_optical_depth
from .parameters import DEFAULT_PARAMETERS, PhotolysisParameters
from .spectral_bins import REFERENCE_ACTINIC_FLUX
from .vertical import reference_profile

logger = logging.getLogger(__name__)

# Tabulated pressures stop at the lower stratosphere by default (Pa)
MIN_TABLE_PRESSURE = 10000.0
N_COS_ZENITH = 49


def _bracket(grid, x):
    """Lower grid index and linear weight of x, clamped to the grid ends"""
    x = jnp.clip(x, grid[0], grid[-1])
    i = jnp.clip(jnp.searchsorted(grid, x, side='right') - 1, 0, grid.shape[0] - 2)
    return i, (x - grid[i]) / (grid[i + 1] - grid[i])


@tree_math.struct
class ActinicFluxTable:
    """Direct-beam transmission tabulated over pressure and solar angle"""

    pressures: jnp.ndarray      # Pressure grid (Pa), increasing [n_pressure]
    cos_zenith: jnp.ndarray     # Cosine of solar zenith angle grid, increasing [n_cos]
    transmission: jnp.ndarray   # Transmission [n_pressure, n_cos, n_bins]

    @classmethod
    def build(cls, pressures=None, cos_zenith=None, parameters: PhotolysisParameters = None) -> 'ActinicFluxTable':
        """
        Tabulate the transmission of the reference atmosphere.

        Args:
            pressures: Pressure grid (Pa); defaults to the reference mid-layer
                pressures at or above MIN_TABLE_PRESSURE
            cos_zenith: Solar angle grid; defaults to N_COS_ZENITH points in [-0.2, 1]
            parameters: Photolysis parameters

        Raises:
            ValueError: if a grid has fewer than two points or repeated values
        """
        if parameters is None:
            parameters = DEFAULT_PARAMETERS
        profile = reference_profile()

        if pressures is None:
            pressures = profile.pressure_mid[profile.pressure_mid >= MIN_TABLE_PRESSURE]
        if cos_zenith is None:
            cos_zenith = np.linspace(-0.2, 1.0, N_COS_ZENITH)

        pressures = np.sort(np.asarray(pressures, dtype=np.float64))
        cos_zenith = np.sort(np.asarray(cos_zenith, dtype=np.float64))
        for name, grid in (('pressure', pressures), ('cos_zenith', cos_zenith)):
            if grid.ndim != 1 or grid.size < 2 or np.any(np.diff(grid) <= 0):
                raise ValueError(f"{name} grid must hold at least two distinct values, got {grid.tolist()}")

        optical_depth = reference_optical_depth()
        heights = jnp.asarray(profile.heights)
        levels = jnp.asarray(profile.pressure)

        def column(p):
            return jax.vmap(lambda c: direct_beam_transmission(optical_depth, c, heights, p, levels, parameters))(
                jnp.asarray(cos_zenith))

        logger.info("Tabulating direct-beam transmission on %d pressures x %d solar angles",
                    pressures.size, cos_zenith.size)
        table = jax.vmap(column)(jnp.asarray(pressures))

        return cls(pressures=jnp.asarray(pressures), cos_zenith=jnp.asarray(cos_zenith), transmission=table)

    def interpolate(self, pressure, cos_zenith) -> jnp.ndarray:
        """
        Bilinear lookup of the transmission.

        Args:
            pressure: Pressure (Pa)
            cos_zenith: Cosine of solar zenith angle

        Returns:
            Transmission [n_bins]
        """
        i, wp = _bracket(self.pressures, pressure)
        j, wc = _bracket(self.cos_zenith, cos_zenith)
        t = self.transmission
        lower = (1.0 - wc) * t[i, j] + wc * t[i, j + 1]
        upper = (1.0 - wc) * t[i + 1, j] + wc * t[i + 1, j + 1]
        return (1.0 - wp) * lower + wp * upper

    def actinic_flux(self, pressure, cos_zenith, spectrum=None) -> jnp.ndarray:
        """Attenuated actinic flux per bin (photons/cm²/s) from the table"""
        if spectrum is None:
            spectrum = REFERENCE_ACTINIC_FLUX
        return jnp.asarray(spectrum) * self.interpolate(pressure, cos_zenith)
