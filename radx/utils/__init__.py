# radx/utils/__init__.py
"""
radx.utils

Helper functions around the core objects: physical conversions, orbital
elements and pandas import/export.
"""

from .data_helpers import from_dataframe, to_dataframe
from .orbits import orbital_elements, semi_major_axis
from .physics import calc_beta

__all__ = [
    "calc_beta",  # grain properties -> beta
    "orbital_elements",
    "semi_major_axis",
    "to_dataframe",
    "from_dataframe",
]
