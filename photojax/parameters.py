"""
Configuration parameters for the photolysis engine

Date: 2025-02-03
"""

import jax.numpy as jnp
import tree_math

from .constants import physical_constants


@tree_math.struct
class PhotolysisParameters:
    """Configuration parameters for direct-beam attenuation and J-values"""

    # Beer-Lambert cutoff: exp(-tau) is treated as zero above this optical depth
    optical_depth_threshold: float

    # Pressure (Pa) at or below which the beam is unattenuated
    top_of_atmosphere_pressure: float

    # Geometry (cm)
    earth_radius: float
    min_layer_separation: float

    # Absorbers
    o2_mole_fraction: float

    @classmethod
    def default(cls, optical_depth_threshold=76.0, top_of_atmosphere_pressure=1.0,
                earth_radius=physical_constants.earth_radius,
                min_layer_separation=1.0,
                o2_mole_fraction=physical_constants.o2_mole_fraction) -> 'PhotolysisParameters':
        """Return default photolysis parameters"""
        return cls(
            optical_depth_threshold=jnp.array(optical_depth_threshold),
            top_of_atmosphere_pressure=jnp.array(top_of_atmosphere_pressure),
            earth_radius=jnp.array(earth_radius),
            min_layer_separation=jnp.array(min_layer_separation),
            o2_mole_fraction=jnp.array(o2_mole_fraction),
        )

    def copy(self, **kwargs) -> 'PhotolysisParameters':
        """Create new parameters with some fields replaced"""
        return self.__class__(**{**self.__dict__, **kwargs})


DEFAULT_PARAMETERS = PhotolysisParameters.default()
