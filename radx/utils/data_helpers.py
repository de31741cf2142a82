# radx/utils/data_helpers.py
"""
Helpers for moving particle state between a Simulation and a pandas table.
"""
import warnings
from typing import Iterable, List, Literal

import numpy as np
import pandas as pd

from ..core.simulation import Simulation

STATE_COLUMNS = ["hash", "m", "x", "y", "z", "vx", "vy", "vz", "variational"]


def to_dataframe(sim: Simulation, params: Iterable[str] = ("beta",)) -> pd.DataFrame:
    """
    Exports one row per particle, real particles first.

    Args:
        sim (Simulation): The simulation to export.
        params (Iterable[str]): Per-particle parameters to add as columns.
            Particles without the parameter get NaN.

    Returns:
        pd.DataFrame: Columns ``hash, m, x, y, z, vx, vy, vz, variational``
            followed by one column per requested parameter.
    """
    df = pd.DataFrame(
        {
            "hash": sim.hashes.copy(),
            "m": sim.m.copy(),
            "x": sim.x[:, 0].copy(),
            "y": sim.x[:, 1].copy(),
            "z": sim.x[:, 2].copy(),
            "vx": sim.v[:, 0].copy(),
            "vy": sim.v[:, 1].copy(),
            "vz": sim.v[:, 2].copy(),
            "variational": np.arange(sim.N) >= sim.N_real,
        }
    )
    for name in params:
        df[name] = sim.params.gather(sim.hashes, name)
    return df


def from_dataframe(
    df: pd.DataFrame,
    G: float = 1.0,
    backend: Literal["numpy", "jax"] = "numpy",
    **sim_kwargs,
) -> Simulation:
    """
    Builds a Simulation from a particle table.

    Missing state columns default to zero (``variational`` to False, ``hash``
    to an automatically generated one). Every column that is not a state
    column is treated as a per-particle parameter; NaN entries are not set.

    Args:
        df (pd.DataFrame): One row per particle.
        G (float): Gravitational constant of the new simulation.
        backend (Literal['numpy', 'jax']): Backend of the new simulation.
        **sim_kwargs: Further keyword arguments for Simulation.

    Returns:
        Simulation: A new simulation containing the particles.
    """
    sim = Simulation(G=G, backend=backend, **sim_kwargs)
    param_columns: List[str] = [c for c in df.columns if c not in STATE_COLUMNS]

    if "m" not in df.columns:
        warnings.warn("No mass column 'm' found; all particles are added as test particles.")

    for _, row in df.iterrows():
        particle_hash = row["hash"] if "hash" in df.columns else None
        p = sim.add(
            m=float(row.get("m", 0.0)),
            x=float(row.get("x", 0.0)),
            y=float(row.get("y", 0.0)),
            z=float(row.get("z", 0.0)),
            vx=float(row.get("vx", 0.0)),
            vy=float(row.get("vy", 0.0)),
            vz=float(row.get("vz", 0.0)),
            hash=None if particle_hash is None or pd.isna(particle_hash) else int(particle_hash),
            variational=bool(row.get("variational", False)),
        )
        for name in param_columns:
            value = row[name]
            if not pd.isna(value):
                p.params[name] = value
    return sim
