# radx/effects/base.py
"""Interfaces for effects that a Simulation drives during integration.

Two kinds of effect exist:
- ForceContributor: adds to the particles' accelerations every time the host
  evaluates forces. Contributions must be additive so that any number of
  contributors can be stacked on top of gravity.
- Operator: modifies the simulation state directly after a timestep.

A Simulation keeps each kind in an ordered list and applies them in
registration order.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Literal

if TYPE_CHECKING:
    from ..core.simulation import Simulation


class ForceContributor(ABC):
    """An additional force evaluated during every force pass of the host.

    Attributes:
        name (str): Human readable identifier of the effect.
        force_type (Literal['pos', 'vel']): 'vel' if the force depends on
            velocities, so the host knows it must be re-evaluated whenever
            velocities change; 'pos' otherwise.
    """

    name: str = "force"
    force_type: Literal["pos", "vel"] = "pos"

    @abstractmethod
    def apply(self, sim: "Simulation") -> None:
        """Adds this effect's accelerations into ``sim.a`` in place."""

    def validate(self, sim: "Simulation") -> None:
        """Checks the effect against the simulation it is registered with.

        Called once by ``Simulation.add_force``. Subclasses raise ValueError
        for parameters that cannot work with the given simulation.
        """


class Operator(ABC):
    """A modification applied to the simulation state after a timestep."""

    name: str = "operator"

    @abstractmethod
    def apply(self, sim: "Simulation", dt: float) -> None:
        """Modifies ``sim`` in place after a step of length ``dt``."""
