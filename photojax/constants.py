"""
Physical constants for the photolysis engine

Constants are grouped in a NamedTuple with module-level aliases, so that
they can be imported individually or overridden as a whole.

Units follow the Fast-JX conventions: lengths in cm, pressures in Pa,
column densities in molecules/cm².
"""

from typing import NamedTuple


class PhysicalConstants(NamedTuple):
    """Physical constants used by the photolysis engine"""

    # Fundamental constants
    avogadro: float = 6.022140857e23    # Avogadro's number (1/mol)
    boltzmann: float = 1.38064852e-23   # Boltzmann constant (J/K)
    grav: float = 9.80665               # Standard gravity (m/s²)

    # Air composition
    air_molar_mass: float = 28.97       # Molecular weight of dry air (g/mol)
    o2_mole_fraction: float = 0.20948   # O2 volume mixing ratio
    n2_mole_fraction: float = 0.78084   # N2 volume mixing ratio

    # Geometry
    earth_radius: float = 6375.0e5      # Radius of Earth (cm)
    top_height_increment: float = 5.0e5 # Extra scale height above the model top (cm)

    # Reference surface pressure for the hybrid grid (Pa)
    p_surface: float = 101325.0

    @classmethod
    def default(cls) -> 'PhysicalConstants':
        """Return default physical constants"""
        return cls()

    @property
    def mass_factor(self) -> float:
        """Column density per unit pressure difference (molecules/cm²/Pa).

        The factor 10 combines 1000 g/kg with 1e-4 m²/cm².
        """
        return self.avogadro / (self.air_molar_mass * self.grav * 10.0)


# Global instance of physical constants
physical_constants = PhysicalConstants.default()

# Export individual constants for convenience
avogadro = physical_constants.avogadro
boltzmann = physical_constants.boltzmann
grav = physical_constants.grav
air_molar_mass = physical_constants.air_molar_mass
o2_mole_fraction = physical_constants.o2_mole_fraction
n2_mole_fraction = physical_constants.n2_mole_fraction
earth_radius = physical_constants.earth_radius
top_height_increment = physical_constants.top_height_increment
p_surface = physical_constants.p_surface
mass_factor = physical_constants.mass_factor
