"""
radx.core

The host-side data structures: the Simulation, its Particle views and the
per-particle parameter store.
"""

from .params import ParameterNotFoundError, ParameterStore, ParticleParams
from .particle import Particle
from .simulation import Simulation

__all__ = [
    "Simulation",
    "Particle",
    "ParameterStore",
    "ParticleParams",
    "ParameterNotFoundError",
]
