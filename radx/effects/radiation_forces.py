# radx/effects/radiation_forces.py
"""NumPy implementation of radiation forces.

This module adds radiation pressure and Poynting-Robertson drag from a
designated source particle (e.g. a star). Each real particle carrying a
``beta`` parameter (the ratio of radiation force to gravitational force for
that grain) contributes

    a_rad * ((1 - rdot/c) * r_hat - dv/c),    a_rad = beta * G * M_source / r^2

following Equation (5) of Burns, Lamy & Soter (1979). The contributions are
accumulated onto the acceleration of the source particle.

The per-particle contributions are independent, so the evaluation is written
as a reduction: contributions are folded into one vector with
``combine_contributions`` and written to the source exactly once. With
``n_jobs != 1`` the particles are split into chunks whose partial sums are
computed by joblib workers and combined with the same operation.
"""
from __future__ import annotations

import os
from dataclasses import dataclass
from functools import reduce
from typing import TYPE_CHECKING, List

import numpy as np
from joblib import Parallel, delayed
from numpy.typing import NDArray

from .. import constants
from .base import ForceContributor

if TYPE_CHECKING:
    from ..core.simulation import Simulation

BETA = "beta"


def radiation_contributions(
    x: NDArray[np.float64],
    v: NDArray[np.float64],
    beta: NDArray[np.float64],
    source_x: NDArray[np.float64],
    source_v: NDArray[np.float64],
    mu: float,
    c: float,
    skip: NDArray[np.bool_],
) -> NDArray[np.float64]:
    """Calculates each particle's radiation contribution to the source.

    Args:
        x (NDArray[np.float64]): Particle positions, shape (n, 3).
        v (NDArray[np.float64]): Particle velocities, shape (n, 3).
        beta (NDArray[np.float64]): Radiation efficiency per particle, shape (n,).
        source_x (NDArray[np.float64]): Position of the source, shape (3,).
        source_v (NDArray[np.float64]): Velocity of the source, shape (3,).
        mu (float): G times the source mass.
        c (float): Speed of light in simulation units.
        skip (NDArray[np.bool_]): Particles to leave out, shape (n,).

    Returns:
        NDArray[np.float64]: Contributions, shape (n, 3). Rows of skipped
            particles are exactly zero.
    """
    out = np.zeros_like(x)
    active = np.flatnonzero(~skip)
    if active.size == 0:
        return out

    dx = x[active] - source_x
    dv = v[active] - source_v
    dr = np.sqrt(np.sum(dx * dx, axis=1))  # distance to source
    rdot = np.sum(dx * dv, axis=1) / dr  # radial velocity
    a_rad = beta[active] * mu / (dr * dr)

    # Equation (5) of Burns, Lamy & Soter (1979)
    out[active] = a_rad[:, None] * (
        (1.0 - rdot / c)[:, None] * dx / dr[:, None] - dv / c
    )
    return out


def combine_contributions(
    total: NDArray[np.float64], partial: NDArray[np.float64]
) -> NDArray[np.float64]:
    """The combine step of the reduction: vector addition.

    Addition is associative and commutative, so partial sums from any
    chunking of the particles may be combined in any order; results agree
    to floating-point rounding.
    """
    return total + partial


def _partial_sum(
    x: NDArray[np.float64],
    v: NDArray[np.float64],
    beta: NDArray[np.float64],
    source_x: NDArray[np.float64],
    source_v: NDArray[np.float64],
    mu: float,
    c: float,
    skip: NDArray[np.bool_],
) -> NDArray[np.float64]:
    contributions = radiation_contributions(x, v, beta, source_x, source_v, mu, c, skip)
    # Within a chunk the fold over rows is a vectorized sum.
    return contributions.sum(axis=0)


def radiation_acceleration(
    x: NDArray[np.float64],
    v: NDArray[np.float64],
    m: NDArray[np.float64],
    beta: NDArray[np.float64],
    source_index: int,
    G: float,
    c: float,
    n_jobs: int = 1,
) -> NDArray[np.float64]:
    """Calculates the total radiation acceleration added to the source.

    Only the arrays of real particles should be passed in. The source is
    excluded from its own sum, as is every particle whose beta is NaN.

    Args:
        x (NDArray[np.float64]): Positions, shape (n, 3).
        v (NDArray[np.float64]): Velocities, shape (n, 3).
        m (NDArray[np.float64]): Masses, shape (n,).
        beta (NDArray[np.float64]): Radiation efficiency per particle, NaN
            where absent, shape (n,).
        source_index (int): Index of the radiation source. Must lie in
            ``[0, n)``; this is not checked here.
        G (float): The gravitational constant.
        c (float): Speed of light in simulation units.
        n_jobs (int): Number of joblib workers. 1 evaluates serially, -1
            uses all available cores, -2 all but one and so on. Defaults to 1.

    Returns:
        NDArray[np.float64]: The acceleration to add to the source, shape (3,).
    """
    n = x.shape[0]
    source_x = x[source_index]
    source_v = v[source_index]
    mu = G * m[source_index]

    skip = np.isnan(beta)
    skip[source_index] = True

    if n_jobs == 0:
        raise ValueError("n_jobs == 0 has no meaning; use 1 for serial evaluation.")
    if n_jobs < 0:
        # joblib convention: -1 is all cores, -2 all but one, ...
        n_jobs = max(1, (os.cpu_count() or 1) + 1 + n_jobs)

    if n_jobs == 1 or n < 2:
        partials: List[NDArray[np.float64]] = [
            _partial_sum(x, v, beta, source_x, source_v, mu, c, skip)
        ]
    else:
        chunks = np.array_split(np.arange(n), min(n_jobs, n))
        partials = Parallel(n_jobs=n_jobs)(
            delayed(_partial_sum)(
                x[idx], v[idx], beta[idx], source_x, source_v, mu, c, skip[idx]
            )
            for idx in chunks
        )

    return reduce(combine_contributions, partials, np.zeros(3))


@dataclass(eq=False)
class RadiationForces(ForceContributor):
    """Radiation pressure and Poynting-Robertson drag from one source.

    Instances are the parameter handle of the effect: ``source_index`` and
    ``c`` may be changed between steps and take effect at the next force
    evaluation. Particles opt in by setting ``params["beta"]``.

    Attributes:
        source_index (int): Index of the radiation source among the real
            particles. Defaults to 0.
        c (float): Speed of light in simulation units. Defaults to
            ``constants.C`` (AU, solar masses, G = 1).
        n_jobs (int): joblib workers for the per-particle reduction.
            Defaults to 1 (serial).
    """

    source_index: int = 0
    c: float = constants.C
    n_jobs: int = 1

    name = "radiation_forces"
    force_type = "vel"

    def __post_init__(self) -> None:
        if not isinstance(self.source_index, (int, np.integer)):
            raise TypeError(
                f"source_index must be an integer, got {type(self.source_index).__name__}."
            )
        if not self.c > 0:
            raise ValueError(f"The speed of light c must be positive, got {self.c}.")
        if not isinstance(self.n_jobs, (int, np.integer)) or self.n_jobs == 0:
            raise ValueError(
                f"n_jobs must be a non-zero integer (1 for serial, negative for "
                f"all but |n_jobs|-1 cores), got {self.n_jobs!r}."
            )

    def validate(self, sim: "Simulation") -> None:
        if not 0 <= self.source_index < sim.N_real:
            raise ValueError(
                f"source_index {self.source_index} does not refer to a real "
                f"particle (N_real={sim.N_real})."
            )

    def apply(self, sim: "Simulation") -> None:
        """Adds the radiation acceleration onto the source particle."""
        n = sim.N_real
        beta = sim.params.gather(sim.hashes[:n], BETA)
        if np.all(np.isnan(beta)):
            return

        if sim.backend == "jax":
            from ..effects_jax.radiation_forces_jax import radiation_acceleration_jax

            total = np.asarray(
                radiation_acceleration_jax(
                    sim.x[:n], sim.v[:n], sim.m[:n], beta,
                    self.source_index, sim.G, self.c,
                )
            )
        else:
            total = radiation_acceleration(
                sim.x[:n], sim.v[:n], sim.m[:n], beta,
                self.source_index, sim.G, self.c, n_jobs=self.n_jobs,
            )

        sim.a[self.source_index] += total


def add_radiation_forces(
    sim: "Simulation",
    source_index: int = 0,
    c: float = constants.C,
    n_jobs: int = 1,
) -> RadiationForces:
    """Creates radiation forces and registers them with a simulation.

    Args:
        sim (Simulation): The host simulation.
        source_index (int): Index of the radiation source. Defaults to 0.
        c (float): Speed of light in the simulation's units.
        n_jobs (int): joblib workers for the per-particle reduction.

    Returns:
        RadiationForces: The registered effect, whose attributes may be
            modified between steps.

    Raises:
        ValueError: If ``source_index`` is not a real particle of ``sim`` or
            ``c`` is not positive.
    """
    return sim.add_force(RadiationForces(source_index=source_index, c=c, n_jobs=n_jobs))
