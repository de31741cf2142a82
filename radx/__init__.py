# radx/__init__.py
"""
radx

Radiation forces (radiation pressure and Poynting-Robertson drag) as a
pluggable effect for N-body simulations.
"""
__version__ = "1.0.0"

# --- Promote the most frequently used objects to the top level ---

# 1. Core objects - the host simulation and its particles
from .core import ParameterNotFoundError, ParameterStore, Particle, Simulation

# 2. Effects - the interfaces and the radiation force effect itself
from .effects import ForceContributor, Operator, RadiationForces, add_radiation_forces

# 3. Helpers and workflows
from .utils import calc_beta, orbital_elements
from .workflows import run_debris_disk

__all__ = [
    # === Core objects ===
    "Simulation",
    "Particle",
    "ParameterStore",
    "ParameterNotFoundError",
    # === Effects ===
    "ForceContributor",
    "Operator",
    "RadiationForces",
    "add_radiation_forces",  # registration call: returns the parameter handle
    # === Helpers & workflows ===
    "calc_beta",
    "orbital_elements",
    "run_debris_disk",
]

# Lower-level kernels (radiation_acceleration, the JAX kernels) and the
# plotting helpers are not promoted; import them from radx.effects,
# radx.effects_jax or radx.visualize.
