"""
Vertical grid for the photolysis engine.

The reference 73-level hybrid sigma-pressure profile and the layer
quantities derived from it.
"""

from .reference_profile import AtmosphericProfile, N_LEVELS, reference_profile

__all__ = ['AtmosphericProfile', 'N_LEVELS', 'reference_profile']
