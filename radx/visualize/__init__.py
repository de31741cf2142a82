"""
radx.visualize

User-facing plotting helpers.
"""

from .orbits import OrbitPlotter

__all__ = ["OrbitPlotter"]
