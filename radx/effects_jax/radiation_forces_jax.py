# radx/effects_jax/radiation_forces_jax.py
"""JAX implementation of radiation forces.

This module provides a JIT-compiled version of the radiation force
reduction. Instead of gathering the active particles (which would give the
compiled function a data-dependent shape), every particle is evaluated and
the contributions of skipped particles are masked to zero before the sum.
Inputs are promoted to float64; double precision is switched on when this
module is imported.
"""
import jax
import jax.numpy as jnp
from jax import jit

jax.config.update("jax_enable_x64", True)


@jit
def radiation_contributions_jax(
    x: jax.Array,
    v: jax.Array,
    beta: jax.Array,
    source_index: int,
    mu: float,
    c: float,
) -> jax.Array:
    """Calculates each particle's radiation contribution to the source.

    Args:
        x (jax.Array): Positions of the real particles, shape (n, 3).
        v (jax.Array): Velocities of the real particles, shape (n, 3).
        beta (jax.Array): Radiation efficiency per particle, NaN where
            absent, shape (n,).
        source_index (int): Index of the radiation source.
        mu (float): G times the source mass.
        c (float): Speed of light in simulation units.

    Returns:
        jax.Array: Contributions, shape (n, 3), zero for skipped particles.
    """
    n = x.shape[0]
    active = (~jnp.isnan(beta)) & (jnp.arange(n) != source_index)

    dx = x - x[source_index]
    dv = v - v[source_index]
    dr = jnp.sqrt(jnp.sum(dx * dx, axis=1))
    # Skipped rows (including the source, where dr == 0) get a dummy distance
    # so that the masked-out branch stays finite and gradients remain usable.
    dr = jnp.where(active, dr, 1.0)
    rdot = jnp.sum(dx * dv, axis=1) / dr
    a_rad = jnp.where(active, beta, 0.0) * mu / (dr * dr)

    # Equation (5) of Burns, Lamy & Soter (1979)
    contrib = a_rad[:, None] * ((1.0 - rdot / c)[:, None] * dx / dr[:, None] - dv / c)
    return jnp.where(active[:, None], contrib, 0.0)


@jit
def radiation_acceleration_jax(
    x: jax.Array,
    v: jax.Array,
    m: jax.Array,
    beta: jax.Array,
    source_index: int,
    G: float,
    c: float,
) -> jax.Array:
    """Calculates the total radiation acceleration added to the source.

    Args:
        x (jax.Array): Positions of the real particles, shape (n, 3).
        v (jax.Array): Velocities of the real particles, shape (n, 3).
        m (jax.Array): Masses of the real particles, shape (n,).
        beta (jax.Array): Radiation efficiency per particle, NaN where
            absent, shape (n,).
        source_index (int): Index of the radiation source.
        G (float): The gravitational constant.
        c (float): Speed of light in simulation units.

    Returns:
        jax.Array: The acceleration to add to the source, shape (3,).
    """
    x = jnp.asarray(x, dtype=jnp.float64)
    v = jnp.asarray(v, dtype=jnp.float64)
    beta = jnp.asarray(beta, dtype=jnp.float64)
    mu = G * m[source_index]
    contrib = radiation_contributions_jax(x, v, beta, source_index, mu, c)
    return jnp.sum(contrib, axis=0)
