# radx/visualize/orbits.py
"""
Implements OrbitPlotter, which plots the time series produced by the
debris disk workflow.
"""

from typing import List, Optional, Sequence

import matplotlib.pyplot as plt
import pandas as pd


class OrbitPlotter:
    """
    Plots the semi-major axes and source recoil recorded by ``run_debris_disk``.
    """

    def __init__(self, result: pd.DataFrame, betas: Optional[Sequence[float]] = None):
        if "t" not in result.columns:
            raise ValueError("The result table needs a 't' column.")
        self.result = result
        self.grain_columns: List[str] = [c for c in result.columns if c.startswith("a_")]
        if betas is not None and len(betas) != len(self.grain_columns):
            raise ValueError(
                f"Got {len(betas)} beta labels for {len(self.grain_columns)} grains."
            )
        self.betas = betas

    def plot_semimajor_axes(self, ax: plt.Axes, **kwargs) -> plt.Axes:
        """
        Draws one line per grain: semi-major axis against time.

        Args:
            ax (plt.Axes): The matplotlib axes to draw on.
            **kwargs: Passed on to ``ax.plot``.

        Returns:
            plt.Axes: The same axes, for further decoration.
        """
        for i, column in enumerate(self.grain_columns):
            label = f"beta={self.betas[i]:g}" if self.betas is not None else column
            ax.plot(self.result["t"], self.result[column], label=label, **kwargs)
        ax.set_xlabel("t")
        ax.set_ylabel("semi-major axis")
        ax.legend()
        return ax

    def plot_source_recoil(self, ax: plt.Axes, **kwargs) -> plt.Axes:
        if "source_recoil" not in self.result.columns:
            raise ValueError("The result table has no 'source_recoil' column.")
        ax.plot(self.result["t"], self.result["source_recoil"], **kwargs)
        ax.set_xlabel("t")
        ax.set_ylabel("|a_rad| on source")
        return ax
