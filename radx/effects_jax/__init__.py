# radx/effects_jax/__init__.py
"""
radx.effects_jax

JIT-compiled JAX kernels for the radx effects. Imported lazily by the
effects when a Simulation is created with ``backend='jax'``.
"""

from .radiation_forces_jax import (
    radiation_acceleration_jax,
    radiation_contributions_jax,
)

__all__ = ["radiation_acceleration_jax", "radiation_contributions_jax"]
