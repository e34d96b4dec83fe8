"""
Temperature-dependent absorption cross sections

Each table holds, for every Fast-JX wavelength bin, the cross section at a
small set of temperature nodes. Values between nodes are interpolated
linearly; outside the node range the nearest node value is used (flat
extrapolation), so interpolation is defined for any temperature.

Cross sections and quantum yields are taken from the GEOS-Chem
FJX_spec.dat tables.

Date: 2025-02-03
"""

import logging

import jax.numpy as jnp
import numpy as np
import tree_math

from .spectral_bins import N_WAVELENGTH_BINS

logger = logging.getLogger(__name__)


@tree_math.struct
class CrossSectionTable:
    """Cross sections at temperature nodes for all wavelength bins"""

    temperatures: np.ndarray     # Temperature nodes (K) [n_nodes], strictly increasing
    cross_sections: np.ndarray   # Cross sections (cm²) [n_nodes, n_bins]

    @classmethod
    def from_nodes(cls, temperatures, cross_sections) -> 'CrossSectionTable':
        """Build a table from temperature nodes and per-node cross-section rows.

        Args:
            temperatures: Temperature nodes (K), strictly increasing
            cross_sections: One row of N_WAVELENGTH_BINS values per node

        Returns:
            CrossSectionTable. If all rows are equal the table is collapsed
            to a single node and interpolation returns a constant.
        """
        temperatures = np.atleast_1d(np.asarray(temperatures, dtype=np.float64))
        cross_sections = np.atleast_2d(np.asarray(cross_sections, dtype=np.float64))

        if temperatures.ndim != 1 or temperatures.size == 0:
            raise ValueError(f"Expected a non-empty 1-D list of temperature nodes, got shape {temperatures.shape}")
        if cross_sections.shape != (temperatures.size, N_WAVELENGTH_BINS):
            raise ValueError(f"Expected cross sections of shape {(temperatures.size, N_WAVELENGTH_BINS)}, "
                             f"got {cross_sections.shape}")
        if np.any(np.diff(temperatures) <= 0):
            raise ValueError(f"Temperature nodes must be strictly increasing, got {temperatures.tolist()}")

        if temperatures.size > 1 and np.all(np.isclose(cross_sections, cross_sections[0], rtol=1e-6, atol=0.0)):
            logger.debug("Cross sections identical at all %d nodes; using a constant table", temperatures.size)
            temperatures = temperatures[:1]
            cross_sections = cross_sections[:1]

        return cls(temperatures=temperatures, cross_sections=cross_sections)

    @property
    def n_nodes(self) -> int:
        return self.temperatures.shape[0]

    def interpolate(self, wavelength_bin, temperature) -> jnp.ndarray:
        """
        Cross section in one bin at the given temperature.

        Args:
            wavelength_bin: Bin index (0-based)
            temperature: Temperature (K), scalar or array

        Returns:
            Cross section (cm²) [*temperature.shape]
        """
        return self.spectrum(temperature)[..., wavelength_bin]

    def spectrum(self, temperature) -> jnp.ndarray:
        """Cross sections (cm²) of all bins at the given temperature [*temperature.shape, n_bins]"""
        return interpolate_cross_sections(temperature, self.temperatures, self.cross_sections)


def interpolate_cross_sections(
    temperature: jnp.ndarray,
    temperatures: jnp.ndarray,
    cross_sections: jnp.ndarray
) -> jnp.ndarray:
    """
    Piecewise-linear interpolation over temperature nodes with flat extrapolation.

    Args:
        temperature: Temperature (K)
        temperatures: Temperature nodes (K) [n_nodes]
        cross_sections: Values at the nodes [n_nodes, n_bins]

    Returns:
        Interpolated values [*temperature.shape, n_bins]
    """
    temperature = jnp.asarray(temperature)
    temperatures = jnp.asarray(temperatures)
    cross_sections = jnp.asarray(cross_sections)
    n_nodes = temperatures.shape[0]

    if n_nodes == 1:
        return jnp.broadcast_to(cross_sections[0], temperature.shape + cross_sections.shape[1:])

    t = jnp.clip(temperature, temperatures[0], temperatures[-1])

    # Segment containing t; the last node belongs to the last segment
    segment = jnp.searchsorted(temperatures, t, side='right') - 1
    segment = jnp.clip(segment, 0, n_nodes - 2)

    t_lower = temperatures[segment]
    t_upper = temperatures[segment + 1]
    weight = ((t - t_lower) / (t_upper - t_lower))[..., None]

    return (1.0 - weight) * cross_sections[segment] + weight * cross_sections[segment + 1]


# ---------------------------------------------------------------------------
# Absorbers used for the optical depth profile
# ---------------------------------------------------------------------------

O2_CROSS_SECTIONS = CrossSectionTable.from_nodes(
    [180.0, 260.0, 300.0],
    np.array([
        [1.727, 1.989e-1, 3.004e-2, 9.833e-3, 7.306e-3, 6.827e-3, 6.238e-3, 5.748e-3, 1.153e-4,
         5.03e-4, 4.15e-4, 0.0, 0.0, 0.0, 0.0, 0.0, 0.0, 0.0],
        [1.727, 1.989e-1, 3.004e-2, 9.833e-3, 7.306e-3, 6.827e-3, 6.238e-3, 5.748e-3, 1.153e-4,
         5.03e-4, 4.15e-4, 0.0, 0.0, 0.0, 0.0, 0.0, 0.0, 0.0],
        [2.763, 4.269e-1, 7.478e-2, 2.1e-2, 8.35e-3, 6.827e-3, 6.238e-3, 5.994e-3, 1.153e-4,
         5.03e-4, 4.15e-4, 0.0, 0.0, 0.0, 0.0, 0.0, 0.0, 0.0],
    ]) * 1.0e-21,
)

O3_CROSS_SECTIONS = CrossSectionTable.from_nodes(
    [218.0, 258.0, 298.0],
    np.array([
        [5.988, 4.859, 4.307, 3.654, 3.41, 4.849, 6.534, 9.32, 87.57,
         35.13, 15.08, 7.925, 2.456, 0.8904, 0.3661, 4.539e-2, 6.167e-4, 1.666e-2],
        [5.989, 4.862, 4.314, 3.666, 3.421, 4.845, 6.519, 9.299, 88.26,
         35.66, 15.47, 8.26, 2.617, 0.9739, 0.4139, 5.515e-2, 6.167e-4, 1.666e-2],
        [5.99, 4.866, 4.32, 3.678, 3.432, 4.84, 6.504, 9.278, 88.96,
         36.18, 15.86, 8.595, 2.778, 1.058, 0.4617, 6.493e-2, 6.167e-4, 1.666e-2],
    ]) * 1.0e-19,
)

# ---------------------------------------------------------------------------
# Photolysis channels
# ---------------------------------------------------------------------------

# O3 -> O2 + O(1D). Tabulated in FJX_spec.dat normalised units (yield-weighted),
# scaled by the consuming mechanism.
O3_O1D_CROSS_SECTIONS = CrossSectionTable.from_nodes(
    [200.0, 260.0, 320.0],
    np.array([
        [4.842, 4.922, 5.071, 5.228, 6.040, 6.803, 7.190, 7.549, 9.000,
         8.989, 8.929, 9.000, 8.901, 4.130, 0.8985, 0.6782, 0.000, 0.000],
        [4.843, 4.922, 5.072, 5.229, 6.040, 6.802, 7.189, 7.549, 9.000,
         8.989, 8.929, 9.000, 8.916, 4.656, 1.417, 0.6995, 0.000, 0.000],
        [4.843, 4.922, 5.072, 5.229, 6.040, 6.805, 7.189, 7.550, 9.000,
         8.989, 8.929, 9.000, 8.967, 5.852, 2.919, 7.943, 0.000, 0.000],
    ]) * 0.1,
)

# H2O2 -> OH + OH
H2O2_CROSS_SECTIONS = CrossSectionTable.from_nodes(
    [200.0, 300.0],
    np.array([
        [2.325, 4.629, 5.394, 5.429, 4.447, 3.755, 3.457, 3.197, 0.5346,
         0.4855, 0.3423, 8.407e-2, 5.029e-2, 3.308e-2, 2.221e-2, 8.598e-3, 1.807e-4, 0.0],
        [2.325, 4.629, 5.394, 5.429, 4.447, 3.755, 3.457, 3.197, 0.5465,
         0.4966, 0.3524, 9.354e-2, 5.763e-2, 3.911e-2, 2.718e-2, 1.138e-2, 2.419e-4, 0.0],
    ]) * 1.0e-19,
)

# CH2O -> H + HO2 + CO
CH2OA_CROSS_SECTIONS = CrossSectionTable.from_nodes(
    [223.0, 298.0],
    np.array([
        [0.0, 0.0, 0.0, 0.0, 0.0, 0.0, 0.0, 0.0, 0.3143,
         1.021, 1.269, 2.323, 2.498, 1.133, 2.183, 0.4746, 0.0, 0.0],
        [0.0, 0.0, 0.0, 0.0, 0.0, 0.0, 0.0, 0.0, 0.3147,
         1.018, 1.266, 2.315, 2.497, 1.131, 2.189, 0.4751, 0.0, 0.0],
    ]) * 1.0e-20,
)

# CH2O -> CO + H2
CH2OB_CROSS_SECTIONS = CrossSectionTable.from_nodes(
    [223.0, 298.0],
    np.array([
        [0.0, 0.0, 0.0, 0.0, 0.0, 0.0, 0.0, 0.0, 3.642e-21,
         5.787e-21, 5.316e-21, 8.181e-21, 7.917e-21, 4.011e-21, 1.081e-20, 1.082e-20, 2.088e-22, 0.0],
        [0.0, 0.0, 0.0, 0.0, 0.0, 0.0, 0.0, 0.0, 3.649e-21,
         5.768e-21, 5.305e-21, 8.154e-21, 7.914e-21, 4.002e-21, 1.085e-20, 1.085e-20, 2.081e-22, 0.0],
    ]),
)

# CH3OOH -> OH + HO2 + CH2O (298 K only)
CH3OOH_CROSS_SECTIONS = CrossSectionTable.from_nodes(
    [298.0],
    np.array([
        [0.0, 0.0, 0.0, 0.0, 0.0, 3.120, 2.882, 2.250, 0.2716,
         0.2740, 0.2143, 5.624e-2, 3.520e-2, 2.403e-2, 1.697e-2, 7.230e-3, 6.973e-4, 0.0],
    ]) * 1.0e-19,
)

# NO2 -> NO + O
NO2_CROSS_SECTIONS = CrossSectionTable.from_nodes(
    [200.0, 294.0],
    np.array([
        [0.0, 0.0, 0.0, 0.0, 0.0, 0.0, 0.0, 0.0, 0.1835,
         0.4693, 0.7705, 1.078, 1.470, 1.832, 2.181, 3.138, 4.321, 1.386e-3],
        [0.0, 0.0, 0.0, 0.0, 0.0, 0.0, 0.0, 0.0, 0.2313,
         0.4694, 0.7553, 1.063, 1.477, 1.869, 2.295, 3.448, 4.643, 4.345e-3],
    ]) * 1.0e-19,
)
