"""
Reference vertical profile for direct-beam attenuation.

A 73-level GEOS-Chem hybrid sigma-pressure grid with a climatological
temperature and ozone profile. Pressure at the bottom edge of level k is
    p_k = Ap_k + Bp_k * p_surface
and the top level extends to zero pressure. From these the column number
density of each layer and the geometric height of each edge are derived;
one extra scale-height increment above the top edge marks the edge of
the atmosphere.

Hybrid coefficients: https://wiki.seas.harvard.edu/geos-chem/index.php/GEOS-Chem_vertical_grids
"""

import dataclasses
import functools
import logging

import numpy as np

from ..constants import physical_constants

logger = logging.getLogger(__name__)

N_LEVELS = 73

# Pressure coefficient at the bottom edge of each level (hPa)
AP_HPA = np.array([
    0.0e+0, 4.804826e-2, 6.593752e+0, 1.31348e+1, 1.961311e+1, 2.609201e+1,
    3.257081e+1, 3.898201e+1, 4.533901e+1, 5.169611e+1, 5.805321e+1, 6.436264e+1,
    7.062198e+1, 7.883422e+1, 8.909992e+1, 9.936521e+1, 1.091817e+2, 1.189586e+2,
    1.286959e+2, 1.4291e+2, 1.5626e+2, 1.69609e+2, 1.81619e+2, 1.93097e+2,
    2.03259e+2, 2.1215e+2, 2.18776e+2, 2.23898e+2, 2.24363e+2, 2.16865e+2,
    2.01192e+2, 1.7693e+2, 1.50393e+2, 1.27837e+2, 1.08663e+2, 9.236572e+1,
    7.851231e+1, 6.660341e+1, 5.638791e+1, 4.764391e+1, 4.017541e+1, 3.381001e+1,
    2.836781e+1, 2.373041e+1, 1.97916e+1, 1.64571e+1, 1.36434e+1, 1.12769e+1,
    9.292942e+0, 7.619842e+0, 6.216801e+0, 5.046801e+0, 4.076571e+0, 3.276431e+0,
    2.620211e+0, 2.08497e+0, 1.65079e+0, 1.30051e+0, 1.01944e+0, 7.951341e-1,
    6.167791e-1, 4.758061e-1, 3.650411e-1, 2.785261e-1, 2.11349e-1, 1.59495e-1,
    1.19703e-1, 8.934502e-2, 6.600001e-2, 4.758501e-2, 3.27e-2, 2.0e-2,
    1.0e-2
])

# Sigma coefficient at the bottom edge of each level
BP = np.array([
    1.0e+0, 9.84952e-1, 9.63406e-1, 9.41865e-1, 9.20387e-1, 8.98908e-1,
    8.77429e-1, 8.56018e-1, 8.346609e-1, 8.133039e-1, 7.919469e-1, 7.706375e-1,
    7.493782e-1, 7.21166e-1, 6.858999e-1, 6.506349e-1, 6.158184e-1, 5.810415e-1,
    5.463042e-1, 4.945902e-1, 4.437402e-1, 3.928911e-1, 3.433811e-1, 2.944031e-1,
    2.467411e-1, 2.003501e-1, 1.562241e-1, 1.136021e-1, 6.372006e-2, 2.801004e-2,
    6.960025e-3, 8.175413e-9, 0.0e+0, 0.0e+0, 0.0e+0, 0.0e+0,
    0.0e+0, 0.0e+0, 0.0e+0, 0.0e+0, 0.0e+0, 0.0e+0,
    0.0e+0, 0.0e+0, 0.0e+0, 0.0e+0, 0.0e+0, 0.0e+0,
    0.0e+0, 0.0e+0, 0.0e+0, 0.0e+0, 0.0e+0, 0.0e+0,
    0.0e+0, 0.0e+0, 0.0e+0, 0.0e+0, 0.0e+0, 0.0e+0,
    0.0e+0, 0.0e+0, 0.0e+0, 0.0e+0, 0.0e+0, 0.0e+0,
    0.0e+0, 0.0e+0, 0.0e+0, 0.0e+0, 0.0e+0, 0.0e+0,
    0.0e+0
])

# Mid-layer temperature (K)
REFERENCE_TEMPERATURE = np.array([
    279.57358, 279.2307, 278.61282, 277.94315, 277.26285, 276.6288,
    276.03024, 275.4809, 274.95572, 274.52994, 274.11856, 273.64145,
    272.94287, 271.98056, 270.7896, 269.47098, 268.0806, 266.63275,
    264.8483, 262.46146, 259.6963, 256.6932, 253.46152, 250.04655,
    246.3538, 242.32751, 238.16446, 233.11511, 227.47636, 222.1113,
    217.82246, 215.36874, 212.70734, 210.53001, 208.99005, 207.88849,
    207.85678, 208.95131, 210.57327, 212.48679, 213.93152, 215.19081,
    216.08836, 216.68036, 217.47514, 218.05592, 218.91273, 220.38663,
    221.94107, 223.34564, 224.70229, 227.0882, 229.8271, 233.01927,
    237.65991, 244.24698, 250.52005, 255.36069, 257.55826, 257.14658,
    253.79321, 248.75366, 243.75272, 239.24557, 236.23053, 234.71906,
    233.12137, 230.1704, 225.42912, 220.58194, 216.58136, 214.11511,
    214.11511
])

# Climatological ozone volume mixing ratio per layer
REFERENCE_O3_VMR = np.array([
    2.4083333333333334e-8, 2.4083333333333334e-8, 2.4083333333333334e-8, 2.4083333333333334e-8,
    2.4083333333333334e-8, 2.4083333333333334e-8, 2.4083333333333334e-8, 2.4083333333333334e-8,
    2.4083333333333334e-8, 2.694714792616982e-8, 3.208333333333333e-8, 3.208333333333333e-8,
    3.208333333333333e-8, 3.208333333333333e-8, 3.208333333333333e-8, 3.208333333333333e-8,
    3.208333333333333e-8, 3.208333333333333e-8, 3.2929256655236675e-8, 3.8145833333333325e-8,
    3.814583333333331e-8, 3.8145833333333325e-8, 3.8145833333333325e-8, 4.026311167599733e-8,
    4.054166666666666e-8, 4.054166666666666e-8, 5.27731054778965e-8, 5.833333333333333e-8,
    9.444807468387634e-8, 1.1349999999999999e-7, 2.2215375465114922e-7, 2.6299404653826753e-7,
    4.527916666666666e-7, 5.77810133243817e-7, 8.045208333333327e-7, 1.0783504829409817e-6,
    1.2737708333333337e-6, 1.7760858258928288e-6, 1.9830384032718213e-6, 2.7801875e-6,
    3.349883093975517e-6, 4.119604166666665e-6, 5.294159303229395e-6, 5.7998983151501485e-6,
    6.614291666666666e-6, 6.9208519997751225e-6, 7.153645251355878e-6, 7.525729166666665e-6,
    7.769880889292426e-6, 7.961341263657348e-6, 8.135145833333334e-6, 8.072867167271426e-6,
    7.8570005144215e-6, 7.475554463833118e-6, 6.779916666666666e-6, 5.7924538480135994e-6,
    4.939040088898435e-6, 4.074684459131538e-6, 3.2693046582466818e-6, 2.596933676609601e-6,
    2.093593292096013e-6, 1.708534869320773e-6, 1.3736875e-6, 1.11861859393698e-6,
    9.299980392301065e-7, 6.499246388666835e-7, 4.3583574056664256e-7, 2.892677067228583e-7,
    1.8483833565861627e-7, 1.1247393518449288e-7, 6.580302307267078e-8, 2.9152455008350055e-8,
    7.092392120024747e-9
])


def hybrid_pressures(ap_hpa=AP_HPA, bp=BP, p_surface=physical_constants.p_surface) -> np.ndarray:
    """Pressure (Pa) at the bottom edge of each level"""
    return np.asarray(ap_hpa) * 100.0 + np.asarray(bp) * p_surface


def path_density(pressure, mass_factor=physical_constants.mass_factor) -> np.ndarray:
    """
    Column number density of air in each layer.

    Args:
        pressure: Pressure at the bottom edge of each level (Pa), decreasing
        mass_factor: Molecules/cm² per Pa of pressure difference

    Returns:
        Column density (molecules/cm²) [nlev]; the top layer holds the
        whole column above its bottom edge
    """
    pressure = np.asarray(pressure, dtype=np.float64)
    column = np.empty_like(pressure)
    column[:-1] = mass_factor * (pressure[:-1] - pressure[1:])
    column[-1] = mass_factor * pressure[-1]
    return column


def geometric_heights(
    pressure,
    temperature,
    top_height_increment=physical_constants.top_height_increment,
    constants=physical_constants
) -> np.ndarray:
    """
    Height of each level edge above the surface by hydrostatic integration.

        z[k+1] = z[k] - ln(p[k+1] / p[k]) * H[k],   H[k] = k_B * MASFAC * T[k]

    Args:
        pressure: Pressure at the bottom edge of each level (Pa) [nlev]
        temperature: Mid-layer temperature (K) [nlev]
        top_height_increment: Height added above the top edge (cm)

    Returns:
        Edge heights (cm) [nlev + 1], starting at 0
    """
    pressure = np.asarray(pressure, dtype=np.float64)
    temperature = np.asarray(temperature, dtype=np.float64)

    # 1e6 converts k_B from Pa m³/K to Pa cm³/K
    scale_height = constants.boltzmann * 1.0e6 * constants.mass_factor * temperature[:-1]

    heights = np.zeros(pressure.size + 1)
    heights[1:-1] = np.cumsum(-np.log(pressure[1:] / pressure[:-1]) * scale_height)
    heights[-1] = heights[-2] + top_height_increment
    return heights


@dataclasses.dataclass(frozen=True)
class AtmosphericProfile:
    """Static vertical grid used for optical depths and path geometry.

    Edge arrays have one more entry than layer arrays: the final height is
    the top of the atmosphere.
    """
    pressure: np.ndarray          # Pressure at bottom edge of each level (Pa) [nlev]
    temperature: np.ndarray       # Layer temperature (K) [nlev]
    column_density: np.ndarray    # Air column per layer (molecules/cm²) [nlev]
    heights: np.ndarray           # Edge height above surface (cm) [nlev + 1]
    o3_vmr: np.ndarray            # Ozone volume mixing ratio [nlev]

    @property
    def nlevels(self) -> int:
        return self.pressure.shape[0]

    @property
    def pressure_mid(self) -> np.ndarray:
        """Pressure midway between consecutive edges (Pa) [nlev - 1]"""
        return (self.pressure[:-1] + self.pressure[1:]) / 2

    @classmethod
    def from_levels(
        cls,
        pressure,
        temperature,
        o3_vmr,
        top_height_increment=physical_constants.top_height_increment
    ) -> 'AtmosphericProfile':
        """Build a profile from edge pressures and layer temperature/ozone.

        Raises:
            ValueError: if the arrays disagree in length or pressure does
                not strictly decrease
        """
        pressure = np.asarray(pressure, dtype=np.float64)
        temperature = np.asarray(temperature, dtype=np.float64)
        o3_vmr = np.asarray(o3_vmr, dtype=np.float64)

        nlev = pressure.shape[0]
        if temperature.shape != (nlev,) or o3_vmr.shape != (nlev,):
            raise ValueError(f"Expected {nlev} temperature and ozone values, "
                             f"got {temperature.shape} and {o3_vmr.shape}")
        if np.any(np.diff(pressure) >= 0) or np.any(pressure <= 0):
            raise ValueError("Pressure must be positive and strictly decreasing with level index")

        heights = geometric_heights(pressure, temperature, top_height_increment)
        logger.debug("Built %d-level profile, model top at %.1f km", nlev, heights[-1] * 1e-5)

        return cls(
            pressure=pressure,
            temperature=temperature,
            column_density=path_density(pressure),
            heights=heights,
            o3_vmr=o3_vmr,
        )


@functools.lru_cache(maxsize=None)
def reference_profile() -> AtmosphericProfile:
    """The 73-level reference profile, built once per process."""
    return AtmosphericProfile.from_levels(hybrid_pressures(), REFERENCE_TEMPERATURE, REFERENCE_O3_VMR)
