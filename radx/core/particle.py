# radx/core/particle.py
"""The Particle view onto a simulation's state arrays.

A Particle does not own any data. It maps attribute access (``p.x``,
``p.vx``, ``p.m``, ...) onto one row of the arrays held by its Simulation, so
edits made through a particle are immediately visible to the force kernels
and vice versa. The row is addressed by index; a view taken before a
``Simulation.remove`` call may point at a different particle afterwards.
"""
from __future__ import annotations

from typing import TYPE_CHECKING

from .params import ParticleParams

if TYPE_CHECKING:
    from .simulation import Simulation


def _component(array_name: str, column: int, doc: str) -> property:
    def getter(self: "Particle") -> float:
        return float(getattr(self._sim, array_name)[self._i, column])

    def setter(self: "Particle", value: float) -> None:
        getattr(self._sim, array_name)[self._i, column] = float(value)

    return property(getter, setter, doc=doc)


class Particle:
    """A single body in a Simulation, exposed as float attributes.

    Attributes:
        x, y, z (float): Position components.
        vx, vy, vz (float): Velocity components.
        ax, ay, az (float): Accumulated acceleration from the last force pass.
        m (float): Mass.
        hash (int): Stable identity, used as the key for per-particle parameters.
        params (ParticleParams): Mutable mapping of this particle's parameters,
            e.g. ``p.params["beta"] = 0.1``.
    """

    __slots__ = ("_sim", "_i")

    def __init__(self, sim: "Simulation", index: int) -> None:
        self._sim = sim
        self._i = int(index)

    x = _component("_x", 0, "x position")
    y = _component("_x", 1, "y position")
    z = _component("_x", 2, "z position")
    vx = _component("_v", 0, "x velocity")
    vy = _component("_v", 1, "y velocity")
    vz = _component("_v", 2, "z velocity")
    ax = _component("_a", 0, "x acceleration")
    ay = _component("_a", 1, "y acceleration")
    az = _component("_a", 2, "z acceleration")

    @property
    def m(self) -> float:
        return float(self._sim._m[self._i])

    @m.setter
    def m(self, value: float) -> None:
        self._sim._m[self._i] = float(value)

    @property
    def index(self) -> int:
        return self._i

    @property
    def hash(self) -> int:
        return int(self._sim._hashes[self._i])

    @property
    def params(self) -> ParticleParams:
        return ParticleParams(self._sim.params, self.hash)

    @property
    def is_variational(self) -> bool:
        return self._i >= self._sim.N_real

    def __repr__(self) -> str:
        return (
            f"Particle(m={self.m}, x={self.x}, y={self.y}, z={self.z}, "
            f"vx={self.vx}, vy={self.vy}, vz={self.vz}, hash={self.hash})"
        )
