# radx/utils/physics.py
"""Conversion from physical grain properties to the radiation parameter beta."""
import numpy as np


def calc_beta(
    G: float,
    c: float,
    source_mass: float,
    source_luminosity: float,
    radius: float,
    density: float,
    Q_pr: float = 1.0,
) -> float:
    """Calculates beta, the ratio of radiation force to gravitational force.

    For a spherical grain of radius s and bulk density rho around a source of
    mass M and luminosity L,

        beta = 3 L Q_pr / (16 pi G M c rho s)

    All arguments must be given in the same (simulation) unit system.

    Args:
        G (float): The gravitational constant.
        c (float): The speed of light.
        source_mass (float): Mass of the radiation source.
        source_luminosity (float): Luminosity of the radiation source.
        radius (float): Grain radius.
        density (float): Grain bulk density.
        Q_pr (float): Radiation pressure coefficient (1 for a perfect
            absorber). Defaults to 1.0.

    Returns:
        float: The dimensionless beta value.

    Raises:
        ValueError: If G, c, the source mass, the radius or the density is
            not positive.
    """
    for label, value in (
        ("G", G),
        ("c", c),
        ("source_mass", source_mass),
        ("radius", radius),
        ("density", density),
    ):
        if not value > 0:
            raise ValueError(f"{label} must be positive, but received {value}.")

    return float(
        3.0 * source_luminosity * Q_pr
        / (16.0 * np.pi * G * source_mass * c * density * radius)
    )
