# radx/utils/orbits.py
"""Osculating orbital elements relative to a primary particle."""
from __future__ import annotations

from typing import TYPE_CHECKING, Tuple

import numpy as np

if TYPE_CHECKING:
    from ..core.simulation import Simulation


def orbital_elements(sim: "Simulation", index: int, primary: int = 0) -> Tuple[float, float]:
    """Returns the semi-major axis and eccentricity of a two-body orbit.

    The orbit is that of particle ``index`` around particle ``primary``, with
    mu = G (m_primary + m_index). Radiation pressure is not included in mu,
    so a grain with beta > 0 shows a slightly different osculating orbit than
    the one it actually follows.

    Args:
        sim (Simulation): The simulation holding both particles.
        index (int): The orbiting particle.
        primary (int): The central particle. Defaults to 0.

    Returns:
        Tuple[float, float]: ``(a, e)``. Unbound orbits have ``a < 0`` and
            ``e >= 1``.
    """
    if index == primary:
        raise ValueError("A particle cannot orbit itself.")

    mu = sim.G * (sim.m[primary] + sim.m[index])
    r_vec = sim.x[index] - sim.x[primary]
    v_vec = sim.v[index] - sim.v[primary]
    r = float(np.linalg.norm(r_vec))
    v2 = float(np.dot(v_vec, v_vec))

    a = 1.0 / (2.0 / r - v2 / mu)
    e_vec = ((v2 - mu / r) * r_vec - np.dot(r_vec, v_vec) * v_vec) / mu
    return float(a), float(np.linalg.norm(e_vec))


def semi_major_axis(sim: "Simulation", index: int, primary: int = 0) -> float:
    return orbital_elements(sim, index, primary)[0]
