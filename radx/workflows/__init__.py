# radx/workflows/__init__.py
"""
radx.workflows

End-to-end recipes that set up a simulation, register effects and collect
results in a pandas table.
"""

from .debris_disk import build_debris_disk, run_debris_disk

__all__ = ["build_debris_disk", "run_debris_disk"]
