# radx/effects/gravity.py
"""Direct-summation Newtonian gravity for the host simulation.

The host adds these accelerations first in every force pass; registered
ForceContributors are then stacked on top.
"""
import numpy as np
from numpy.typing import NDArray


def gravity_accelerations(
    x: NDArray[np.float64], m: NDArray[np.float64], G: float
) -> NDArray[np.float64]:
    """Calculates the pairwise gravitational acceleration on every particle.

    Args:
        x (NDArray[np.float64]): Positions, shape (n, 3).
        m (NDArray[np.float64]): Masses, shape (n,).
        G (float): The gravitational constant in simulation units.

    Returns:
        NDArray[np.float64]: Accelerations, shape (n, 3).
    """
    n = x.shape[0]
    if n < 2 or G == 0.0:
        return np.zeros_like(x)

    # dr[i, j] points from particle i to particle j
    dr = x[None, :, :] - x[:, None, :]
    r2 = np.sum(dr * dr, axis=-1)
    np.fill_diagonal(r2, np.inf)
    inv_r3 = r2 ** -1.5

    return G * np.einsum("ij,ijk->ik", m[None, :] * inv_r3, dr)


def gravitational_energy(
    x: NDArray[np.float64], m: NDArray[np.float64], G: float
) -> float:
    """Returns the total pairwise potential energy -sum G m_i m_j / r_ij."""
    n = x.shape[0]
    if n < 2:
        return 0.0
    iu = np.triu_indices(n, 1)
    dr = x[iu[0]] - x[iu[1]]
    r = np.sqrt(np.sum(dr * dr, axis=-1))
    return float(-G * np.sum(m[iu[0]] * m[iu[1]] / r))
