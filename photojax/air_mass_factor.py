"""
Pseudo-spherical air mass factors for the direct solar beam

The coarse grid of L+1 level-edge heights is refined to 2L+1 points by
inserting the midpoint of every layer (fine index 2j is edge j, 2j+1 is
the midpoint of edges j and j+1). For a receiver at fine index J, the air
mass factor of fine sub-layer i is the slant path length of the solar
ray through that sub-layer divided by its vertical thickness.

The computation runs as two phases:

1. Ascending (always): march from J to the top, carrying the direction
   cosine of the ray, mu, relative to the local vertical:
       mu' = sqrt(1 - (r_i / r_{i+1})² (1 - mu²))
       AMF_i = (r_{i+1} mu' - r_i mu) / (r_{i+1} - r_i)
   The factor at the top point is 1.
2. Twilight (sun below the horizon only): march down from J-1. While the
   ray's tangent point lies below r_i it crosses the sub-layer twice and
   the factor is twice the chord length over the thickness. Once the
   tangent point is at or above r_i the ray turns back up inside the
   sub-layer; that sub-layer is the last one it traverses.

Receivers inside the Earth's shadow get no direct beam and all-zero
factors.

Date: 2025-02-06
"""

import jax
import jax.numpy as jnp

from .parameters import DEFAULT_PARAMETERS, PhotolysisParameters


def fine_grid_heights(heights: jnp.ndarray) -> jnp.ndarray:
    """
    Heights of the fine grid: every edge followed by the midpoint of its layer.

    Args:
        heights: Edge heights above the surface (cm) [L + 1]

    Returns:
        Fine grid heights (cm) [2L + 1]
    """
    edges = jnp.asarray(heights)
    midpoints = 0.5 * (edges[:-1] + edges[1:])
    interleaved = jnp.stack([edges[:-1], midpoints], axis=1).reshape(-1)
    return jnp.concatenate([interleaved, edges[-1:]])


def fine_grid_radii(heights: jnp.ndarray, earth_radius: float = DEFAULT_PARAMETERS.earth_radius) -> jnp.ndarray:
    """Geocentric radii (cm) of the fine grid [2L + 1]"""
    return earth_radius + fine_grid_heights(heights)


def shadow_height(cos_zenith, surface_radius) -> jnp.ndarray:
    """
    Radius below which the Earth blocks the direct beam.

    Zero when the sun is above the horizon (cos_zenith >= 0).
    """
    sin_sq = jnp.maximum(1.0 - cos_zenith ** 2, 0.0)
    # cos_zenith = -1 puts every level in shadow
    shadow = jnp.where(sin_sq > 0.0, surface_radius / jnp.sqrt(jnp.where(sin_sq > 0.0, sin_sq, 1.0)), jnp.inf)
    return jnp.where(cos_zenith < 0.0, shadow, 0.0)


def _sublayers(fine_heights, earth_radius, min_separation):
    """Index, inner and outer radius, thickness and 1 - (r_i/r_{i+1})² of each fine sub-layer"""
    r_lower = earth_radius + fine_heights[:-1]
    r_upper = earth_radius + fine_heights[1:]
    # Thickness from heights keeps precision that differences of radii lose
    thickness = jnp.maximum(fine_heights[1:] - fine_heights[:-1], min_separation)
    one_minus_ratio_sq = thickness * (r_upper + r_lower) / r_upper ** 2
    return jnp.arange(r_lower.shape[0]), r_lower, r_upper, thickness, one_minus_ratio_sq


def ascending_air_mass_factors(
    cos_zenith,
    fine_heights: jnp.ndarray,
    start_index,
    earth_radius: float = DEFAULT_PARAMETERS.earth_radius,
    min_separation: float = DEFAULT_PARAMETERS.min_layer_separation
) -> jnp.ndarray:
    """
    Air mass factors from the receiver up to the top of the atmosphere.

    Args:
        cos_zenith: Cosine of solar zenith angle at the receiver
        fine_heights: Fine grid heights (cm) [n_fine]
        start_index: Fine index of the receiver
        earth_radius: Radius of the Earth (cm)
        min_separation: Lower bound on sub-layer thickness (cm)

    Returns:
        Air mass factors [n_fine]; zero below start_index, 1 at the top
    """
    sublayers = _sublayers(fine_heights, earth_radius, min_separation)

    def step(mu, layer):
        index, r_lower, r_upper, thickness, q = layer
        sin_sq = 1.0 - mu ** 2
        mu_next = jnp.sqrt(jnp.maximum(mu ** 2 + q * sin_sq, 0.0))
        # (r_upper mu_next - r_lower mu) / thickness, with mu_next - mu expanded
        denom = jnp.maximum(mu_next + mu, jnp.finfo(mu.dtype).tiny)
        amf = mu_next + r_lower * (r_upper + r_lower) * sin_sq / (r_upper ** 2 * denom)
        active = index >= start_index
        return jnp.where(active, mu_next, mu), jnp.where(active, amf, 0.0)

    mu0 = jnp.abs(jnp.asarray(cos_zenith, dtype=fine_heights.dtype))
    _, amf = jax.lax.scan(step, mu0, sublayers)
    return jnp.concatenate([amf, jnp.ones(1, dtype=amf.dtype)])


def twilight_air_mass_factors(
    cos_zenith,
    fine_heights: jnp.ndarray,
    start_index,
    earth_radius: float = DEFAULT_PARAMETERS.earth_radius,
    min_separation: float = DEFAULT_PARAMETERS.min_layer_separation
) -> jnp.ndarray:
    """
    Air mass factors below the receiver when the sun is below its horizon.

    Args:
        cos_zenith: Cosine of solar zenith angle at the receiver
        fine_heights: Fine grid heights (cm) [n_fine]
        start_index: Fine index of the receiver
        earth_radius: Radius of the Earth (cm)
        min_separation: Lower bound on sub-layer thickness (cm)

    Returns:
        Air mass factors [n_fine]; zero at and above start_index, and zero
        everywhere when cos_zenith >= 0
    """
    sublayers = _sublayers(fine_heights, earth_radius, min_separation)

    def step(carry, layer):
        mu, done = carry
        index, r_lower, r_upper, thickness, q = layer

        sin_sq = jnp.maximum(1.0 - mu ** 2, 0.0)
        # Tangent-point radius minus the inner radius; the surface always stops the descent
        miss = r_upper * jnp.sqrt(sin_sq) - r_lower
        miss = jnp.where(index == 0, jnp.maximum(miss, 0.0), miss)
        crosses = miss < 0.0

        mu_next = jnp.sqrt(jnp.maximum(1.0 - sin_sq / (1.0 - q), 0.0))
        chord = jnp.abs(r_upper * mu - r_lower * mu_next)
        amf = jnp.where(crosses, 2.0 * chord / thickness, 2.0 * r_upper * mu / thickness)

        active = (index < start_index) & ~done
        mu = jnp.where(active & crosses, mu_next, mu)
        done = done | (active & ~crosses)
        return (mu, done), jnp.where(active, amf, 0.0)

    cos_zenith = jnp.asarray(cos_zenith, dtype=fine_heights.dtype)
    init = (jnp.abs(cos_zenith), cos_zenith >= 0.0)
    _, amf = jax.lax.scan(step, init, sublayers, reverse=True)
    return jnp.concatenate([amf, jnp.zeros(1, dtype=amf.dtype)])


@jax.jit
def compute_amf(
    cos_zenith,
    heights: jnp.ndarray,
    start_index,
    parameters: PhotolysisParameters = None
) -> jnp.ndarray:
    """
    Air mass factors on the fine grid for a receiver at fine index start_index.

    Args:
        cos_zenith: Cosine of solar zenith angle
        heights: Edge heights above the surface (cm) [L + 1]
        start_index: Fine index of the receiver (2k for coarse level k)
        parameters: Photolysis parameters

    Returns:
        Air mass factors [2L + 1]
    """
    if parameters is None:
        parameters = DEFAULT_PARAMETERS

    fine_heights = fine_grid_heights(heights)
    radii = fine_grid_radii(heights, parameters.earth_radius)
    cos_zenith = jnp.asarray(cos_zenith, dtype=fine_heights.dtype)
    args = (cos_zenith, fine_heights, start_index, parameters.earth_radius, parameters.min_layer_separation)

    amf = ascending_air_mass_factors(*args) + twilight_air_mass_factors(*args)

    in_shadow = radii[start_index] < shadow_height(cos_zenith, radii[0])
    return jnp.where(in_shadow, jnp.zeros_like(amf), amf)
