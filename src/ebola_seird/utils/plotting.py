"""
===========================================================
plotting.py
Author: Veronica Scerra
Last Updated: 2026-10-18
===========================================================
Visualization functions for SEIRD trajectories.

Plots read only the long-format table from Trajectory.to_long(),
one line-and-point series per compartment.
"""
from __future__ import annotations
import matplotlib.pyplot as plt
import numpy as np
import pandas as pd
import seaborn as sns
from pathlib import Path
from typing import Dict, Iterable, Optional
from matplotlib.axes import Axes
from matplotlib.figure import Figure

from ..trajectory import COMPARTMENTS, TIME, Trajectory


def plot_trajectory(trajectory: Trajectory,
                    exclude: Iterable[str] = (),
                    ax: Optional[Axes] = None,
                    show: bool = False,
                    title: Optional[str] = None) -> Axes:
    """
    Plot compartments of one run against time in days.

    Parameters
    ----------
    trajectory : Trajectory
        Output of simulate()
    exclude : iterable of str
        Compartments left off the chart (e.g. ["susceptible"])
    ax : matplotlib.axes.Axes, optional
        Axes to plot on. If None, creates new figure
    show : bool
        Whether to display the plot immediately
    title : str, optional

    Returns
    -------
    ax : matplotlib.axes.Axes
    """
    if ax is None:
        fig, ax = plt.subplots(figsize=(10, 6))

    long = trajectory.to_long(exclude=exclude)
    order = [name for name in COMPARTMENTS if name in set(long["group"])]
    sns.lineplot(data=long, x=TIME, y="people", hue="group", hue_order=order,
                 marker="o", markersize=4, ax=ax)

    ax.set_xlabel("days", fontsize=12)
    ax.set_ylabel("people", fontsize=12)
    if title:
        ax.set_title(title, fontsize=14)
    ax.legend(title=None, frameon=False)
    sns.despine(ax=ax)
    ax.grid(True, alpha=0.3)

    if show:
        plt.tight_layout()
        plt.show()

    return ax


def plot_beta(beta, t: np.ndarray, ax: Optional[Axes] = None, show: bool = False) -> Axes:
    """Transmission rate β(t) over time"""
    if ax is None:
        fig, ax = plt.subplots(figsize=(8, 4.5))
    ax.plot(t, beta(np.asarray(t, dtype=float)), lw=2)
    ax.set_xlabel("days")
    ax.set_ylabel("β(t)")
    ax.grid(alpha=0.25)
    if show:
        plt.tight_layout()
        plt.show()
    return ax


def plot_comparison(trajectories: Dict[str, Trajectory],
                    compartment: str = "dead",
                    ax: Optional[Axes] = None,
                    show: bool = False) -> Axes:
    """One compartment across several runs (e.g. constant vs. time-decaying β)"""
    if ax is None:
        fig, ax = plt.subplots(figsize=(10, 6))
    frames = []
    for name, traj in trajectories.items():
        frames.append(pd.DataFrame({TIME: traj.time, "people": traj[compartment], "scenario": name}))
    data = pd.concat(frames, ignore_index=True)
    sns.lineplot(data=data, x=TIME, y="people", hue="scenario", ax=ax)
    ax.set_xlabel("days", fontsize=12)
    ax.set_ylabel(compartment, fontsize=12)
    ax.legend(title=None, frameon=False)
    ax.grid(True, alpha=0.3)
    if show:
        plt.tight_layout()
        plt.show()
    return ax


def save_figure(fig: Figure, path) -> Path:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    fig.savefig(path, dpi=300, bbox_inches="tight")
    print(f"Figure saved to {path}")
    return path
