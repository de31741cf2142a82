# radx/core/simulation.py
"""The Simulation class, the host that radx effects are loaded into.

This module defines a compact N-body host: it owns the particle state
arrays, the per-particle parameter store and the ordered collections of
registered effects, evaluates Newtonian gravity plus every registered
ForceContributor, and advances the system in time either with SciPy's
adaptive ODE solvers or with a fixed-step leapfrog.
"""
from __future__ import annotations

import copy
import warnings
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, List, Literal, Optional

import numpy as np
from numpy.typing import NDArray
from scipy.integrate import solve_ivp

from ..effects.gravity import gravitational_energy, gravity_accelerations
from .params import ParameterStore
from .particle import Particle

if TYPE_CHECKING:
    from ..effects.base import ForceContributor, Operator


@dataclass(eq=False)
class Simulation:
    """A container for particle state, physical constants and effects.

    Real particles occupy indices ``[0, N_real)``; auxiliary variational
    particles, if any, are stored after them. Gravity and all registered
    forces only ever act on real particles.

    Attributes:
        G (float): The gravitational constant in simulation units.
            Defaults to 1.0.
        backend (Literal['numpy', 'jax']): The computational backend used by
            effects that ship more than one kernel. Defaults to 'numpy'.
        integrator (Literal['ivp', 'leapfrog']): 'ivp' integrates with
            ``scipy.integrate.solve_ivp`` (adaptive, suitable for
            velocity-dependent forces); 'leapfrog' uses fixed
            drift-kick-drift steps of length ``dt``. Defaults to 'ivp'.
        dt (float): Timestep of the leapfrog integrator.
        t (float): Current simulation time.
        method (str): The solve_ivp method. Defaults to 'DOP853'.
        rtol (float): Relative tolerance passed to solve_ivp.
        atol (float): Absolute tolerance passed to solve_ivp.
        gravity (bool): Whether to include mutual Newtonian gravity.
        params (ParameterStore): Per-particle parameters keyed by hash.
        forces (List[ForceContributor]): Registered forces, applied in order.
        operators (List[Operator]): Registered post-step operators.
    """

    G: float = 1.0
    backend: Literal["numpy", "jax"] = "numpy"
    integrator: Literal["ivp", "leapfrog"] = "ivp"
    dt: float = 1e-3
    t: float = 0.0
    method: str = "DOP853"
    rtol: float = 1e-10
    atol: float = 1e-12
    gravity: bool = True

    params: ParameterStore = field(default_factory=ParameterStore, repr=False)
    forces: List["ForceContributor"] = field(default_factory=list, repr=False)
    operators: List["Operator"] = field(default_factory=list, repr=False)

    _x: NDArray[np.float64] = field(init=False, repr=False)
    _v: NDArray[np.float64] = field(init=False, repr=False)
    _a: NDArray[np.float64] = field(init=False, repr=False)
    _m: NDArray[np.float64] = field(init=False, repr=False)
    _hashes: NDArray[np.int64] = field(init=False, repr=False)
    _n_var: int = field(init=False, default=0, repr=False)
    _next_hash: int = field(init=False, default=0, repr=False)
    _warned_leapfrog: bool = field(init=False, default=False, repr=False)

    def __post_init__(self) -> None:
        """Allocates empty state arrays and checks the backend is usable."""
        if self.dt <= 0:
            raise ValueError(f"dt must be positive, but received {self.dt}.")
        if self.integrator not in ("ivp", "leapfrog"):
            raise ValueError(
                f"Unsupported integrator: '{self.integrator}'. Please choose "
                "'ivp' or 'leapfrog'."
            )

        if self.backend == "jax":
            try:
                import jax  # noqa: F401
            except ImportError as e:
                raise ImportError(
                    "Could not load the JAX backend. Please ensure JAX is "
                    "installed: `pip install 'jax[cpu]'` or `pip install "
                    "'jax[cuda]'` (for GPU)."
                ) from e
        elif self.backend != "numpy":
            raise ValueError(
                f"Unsupported backend: '{self.backend}'. Please choose "
                "'numpy' or 'jax'."
            )

        self._x = np.empty((0, 3), dtype=np.float64)
        self._v = np.empty((0, 3), dtype=np.float64)
        self._a = np.empty((0, 3), dtype=np.float64)
        self._m = np.empty(0, dtype=np.float64)
        self._hashes = np.empty(0, dtype=np.int64)

    # ------------------------------------------------------------------
    # Particle bookkeeping
    # ------------------------------------------------------------------
    @property
    def N(self) -> int:
        return int(self._m.shape[0])

    @property
    def N_var(self) -> int:
        return self._n_var

    @property
    def N_real(self) -> int:
        return self.N - self._n_var

    @property
    def x(self) -> NDArray[np.float64]:
        return self._x

    @property
    def v(self) -> NDArray[np.float64]:
        return self._v

    @property
    def a(self) -> NDArray[np.float64]:
        return self._a

    @property
    def m(self) -> NDArray[np.float64]:
        return self._m

    @property
    def hashes(self) -> NDArray[np.int64]:
        return self._hashes

    @property
    def particles(self) -> List[Particle]:
        return [Particle(self, i) for i in range(self.N)]

    def add(
        self,
        m: float = 0.0,
        x: float = 0.0,
        y: float = 0.0,
        z: float = 0.0,
        vx: float = 0.0,
        vy: float = 0.0,
        vz: float = 0.0,
        hash: Optional[int] = None,
        variational: bool = False,
    ) -> Particle:
        """Adds a particle and returns a view onto it.

        Real particles are inserted in front of any variational particles so
        that the real range stays contiguous.

        Args:
            m (float): Mass. Test particles may have zero mass.
            x, y, z (float): Position.
            vx, vy, vz (float): Velocity.
            hash (Optional[int]): Identity of the particle. A fresh one is
                generated if None.
            variational (bool): Store the particle as an auxiliary
                variational particle, excluded from all force evaluation.

        Returns:
            Particle: A view onto the new particle.

        Raises:
            ValueError: If the mass is negative or non-finite, or the hash is
                already taken.
        """
        if not np.isfinite(m) or m < 0:
            raise ValueError(f"Particle mass must be a non-negative finite number, got {m}.")

        if hash is None:
            while self._next_hash in self._hashes:
                self._next_hash += 1
            hash = self._next_hash
            self._next_hash += 1
        elif int(hash) in self._hashes:
            raise ValueError(f"A particle with hash {hash} already exists.")

        index = self.N if variational else self.N_real
        self._x = np.insert(self._x, index, [x, y, z], axis=0)
        self._v = np.insert(self._v, index, [vx, vy, vz], axis=0)
        self._a = np.insert(self._a, index, [0.0, 0.0, 0.0], axis=0)
        self._m = np.insert(self._m, index, m)
        self._hashes = np.insert(self._hashes, index, int(hash))
        if variational:
            self._n_var += 1
        return Particle(self, index)

    def remove(self, index: int) -> None:
        """Removes a particle and discards its parameters.

        Indices of later particles shift down by one. Force parameters that
        refer to particles by index (such as a radiation source index) are
        not updated; keeping them valid is the caller's job.
        """
        if not -self.N <= index < self.N:
            raise IndexError(f"Particle index {index} out of range for N={self.N}.")
        index = index % self.N
        self.params.clear(int(self._hashes[index]))
        if index >= self.N_real:
            self._n_var -= 1
        self._x = np.delete(self._x, index, axis=0)
        self._v = np.delete(self._v, index, axis=0)
        self._a = np.delete(self._a, index, axis=0)
        self._m = np.delete(self._m, index)
        self._hashes = np.delete(self._hashes, index)

    def index_of(self, particle_hash: int) -> int:
        matches = np.flatnonzero(self._hashes == int(particle_hash))
        if matches.size == 0:
            raise KeyError(f"No particle with hash {particle_hash}.")
        return int(matches[0])

    # ------------------------------------------------------------------
    # Effects
    # ------------------------------------------------------------------
    def add_force(self, force: "ForceContributor") -> "ForceContributor":
        """Registers a force and returns it as the handle to its parameters."""
        force.validate(self)
        self.forces.append(force)
        return force

    def remove_force(self, force: "ForceContributor") -> None:
        self.forces.remove(force)

    def add_operator(self, operator: "Operator") -> "Operator":
        self.operators.append(operator)
        return operator

    @property
    def velocity_dependent(self) -> bool:
        return any(f.force_type == "vel" for f in self.forces)

    def calculate_accelerations(self) -> None:
        """Recomputes ``a`` from gravity and every registered force."""
        self._a[:] = 0.0
        n_real = self.N_real
        if self.gravity:
            self._a[:n_real] = gravity_accelerations(
                self._x[:n_real], self._m[:n_real], self.G
            )
        for force in self.forces:
            force.apply(self)

    # ------------------------------------------------------------------
    # Time evolution
    # ------------------------------------------------------------------
    def _leapfrog_step(self, dt: float) -> None:
        n = self.N_real
        self._x[:n] += 0.5 * dt * self._v[:n]
        self.t += 0.5 * dt
        self.calculate_accelerations()
        self._v[:n] += dt * self._a[:n]
        self._x[:n] += 0.5 * dt * self._v[:n]
        self.t += 0.5 * dt

    def _apply_operators(self, dt: float) -> None:
        for operator in self.operators:
            operator.apply(self, dt)

    def _warn_if_leapfrog_with_velocity_forces(self) -> None:
        if self.velocity_dependent and not self._warned_leapfrog:
            warnings.warn(
                "Leapfrog evaluates velocity-dependent forces with drifted "
                "velocities and is only first-order accurate for them. Use "
                "integrator='ivp' for accurate results.",
                RuntimeWarning,
            )
            self._warned_leapfrog = True

    def step(self) -> None:
        """Advances the simulation by one leapfrog step of length ``dt``."""
        self._warn_if_leapfrog_with_velocity_forces()
        self._leapfrog_step(self.dt)
        self._apply_operators(self.dt)

    def _dynamics(self, t: float, y: NDArray[np.float64]) -> NDArray[np.float64]:
        """The system of ODEs: dx/dt = v, dv/dt = a(x, v)."""
        self._set_state(y, t)
        self.calculate_accelerations()
        n = self.N_real
        return np.concatenate([self._v[:n].ravel(), self._a[:n].ravel()])

    def _set_state(self, y: NDArray[np.float64], t: float) -> None:
        n = self.N_real
        self._x[:n] = y[: 3 * n].reshape(n, 3)
        self._v[:n] = y[3 * n :].reshape(n, 3)
        self.t = t

    def integrate(self, tmax: float) -> None:
        """Advances the simulation to time ``tmax``.

        With the 'leapfrog' integrator the last step is shortened so that the
        simulation finishes exactly at ``tmax``. Operators run after every
        leapfrog step, or once at the end of an 'ivp' integration.

        Raises:
            RuntimeError: If the ODE solver fails. The simulation is left at
                the state it had before the call.
        """
        t0 = self.t
        if tmax <= t0:
            return

        if self.integrator == "leapfrog":
            self._warn_if_leapfrog_with_velocity_forces()
            while self.t < tmax:
                dt = tmax - self.t
                last = dt <= self.dt * (1.0 + 1e-9)
                if not last:
                    dt = self.dt
                self._leapfrog_step(dt)
                if last:
                    self.t = float(tmax)
                self._apply_operators(dt)
            return

        n = self.N_real
        y0 = np.concatenate([self._x[:n].ravel(), self._v[:n].ravel()])
        try:
            solution = solve_ivp(
                self._dynamics,
                [t0, tmax],
                y0,
                method=self.method,
                rtol=self.rtol,
                atol=self.atol,
            )
        except Exception:
            self._set_state(y0, t0)
            raise
        if not solution.success:
            # _dynamics leaves the last trial state behind; go back to t0.
            self._set_state(y0, t0)
            self.calculate_accelerations()
            raise RuntimeError(
                f"Integration from t={t0} to t={tmax} failed: {solution.message}"
            )
        self._set_state(solution.y[:, -1], float(tmax))
        self.calculate_accelerations()
        self._apply_operators(tmax - t0)

    def energy(self) -> float:
        """Kinetic plus gravitational potential energy of the real particles."""
        n = self.N_real
        kinetic = 0.5 * float(np.sum(self._m[:n] * np.sum(self._v[:n] ** 2, axis=1)))
        return kinetic + gravitational_energy(self._x[:n], self._m[:n], self.G)

    def copy(self) -> Simulation:
        """Returns an independent copy of the particles, parameters and effects."""
        new = copy.copy(self)
        new._x = self._x.copy()
        new._v = self._v.copy()
        new._a = self._a.copy()
        new._m = self._m.copy()
        new._hashes = self._hashes.copy()
        new.params = self.params.copy()
        new.forces = copy.deepcopy(self.forces)
        new.operators = copy.deepcopy(self.operators)
        return new

    def __repr__(self) -> str:
        """Provides a concise string representation of the Simulation."""
        return (
            f"Simulation(N={self.N}, N_var={self.N_var}, t={self.t:.4f}, "
            f"G={self.G}, backend='{self.backend}', integrator='{self.integrator}', "
            f"forces={[f.name for f in self.forces]})"
        )
