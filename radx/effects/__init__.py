# radx/effects/__init__.py
"""
radx.effects

Additional physical effects that a Simulation drives during integration,
plus the interfaces they implement. The NumPy kernels live here; the JAX
kernels live in ``radx.effects_jax``.
"""

from .base import ForceContributor, Operator
from .gravity import gravitational_energy, gravity_accelerations
from .radiation_forces import (
    RadiationForces,
    add_radiation_forces,
    combine_contributions,
    radiation_acceleration,
    radiation_contributions,
)

__all__ = [
    "ForceContributor",
    "Operator",
    "gravity_accelerations",
    "gravitational_energy",
    "RadiationForces",
    "add_radiation_forces",
    "radiation_acceleration",
    "radiation_contributions",
    "combine_contributions",
]
