"""
===========================================================
trajectory.py
Author: Veronica Scerra
Last Updated: 2026-10-18
===========================================================

Description:
    Immutable output table of one SEIRD run: one row per
    requested output time, one column per compartment.

    Column names (time, susceptible, exposed, infectious,
    recovered, dead) are what the plotting helpers key on.

Example Usage:
    traj = simulate(params, beta="time-decaying")
    traj.to_frame()                         # wide DataFrame
    traj.to_long(exclude=["susceptible"])   # time, group, people
    traj.summary()
-----------------------------------------------------------
License: MIT
===========================================================
"""
from __future__ import annotations
import numpy as np
import pandas as pd
from dataclasses import dataclass
from typing import Dict, Iterable, Iterator, NamedTuple, Optional

from .errors import InvalidInputError

TIME = "time"
COMPARTMENTS = ("susceptible", "exposed", "infectious", "recovered", "dead")


class TrajectoryRecord(NamedTuple):
    time: float
    susceptible: float
    exposed: float
    infectious: float
    recovered: float
    dead: float


@dataclass(frozen=True, eq=False)
class Trajectory:
    """
    Parameters:
    time : np.ndarray, shape (n,). Output times, strictly increasing
    states : np.ndarray, shape (n, 5). [S, E, I, R, D] at each output time
    variant : str, optional. Which β(t) produced it ("constant", "time-decaying")
    """
    time: np.ndarray
    states: np.ndarray
    variant: Optional[str] = None

    def __post_init__(self):
        time = np.array(self.time, dtype=float)
        states = np.array(self.states, dtype=float)
        if time.ndim != 1:
            raise InvalidInputError("time must be one-dimensional")
        if states.shape != (len(time), len(COMPARTMENTS)):
            raise InvalidInputError(
                f"states must have shape ({len(time)}, {len(COMPARTMENTS)}), got {states.shape}"
            )
        time.flags.writeable = False
        states.flags.writeable = False
        object.__setattr__(self, "time", time)
        object.__setattr__(self, "states", states)

    def __len__(self) -> int:
        return len(self.time)

    def __iter__(self) -> Iterator[TrajectoryRecord]:
        for t, row in zip(self.time, self.states):
            yield TrajectoryRecord(float(t), *(float(v) for v in row))

    def __getitem__(self, name: str) -> np.ndarray:
        if name == TIME:
            return self.time
        try:
            return self.states[:, COMPARTMENTS.index(name)]
        except ValueError:
            raise KeyError(name) from None

    def at(self, t: float) -> TrajectoryRecord:
        """Record at an exact output time"""
        idx = np.flatnonzero(self.time == t)
        if idx.size == 0:
            raise KeyError(f"t={t} is not an output time of this trajectory")
        i = int(idx[0])
        return TrajectoryRecord(float(self.time[i]), *(float(v) for v in self.states[i]))

    def totals(self) -> np.ndarray:
        """S+E+I+R+D at each output time"""
        return self.states.sum(axis=1)

    def conservation_error(self) -> float:
        """Largest relative deviation of the total population from its initial value"""
        totals = self.totals()
        if totals.size == 0 or totals[0] == 0:
            return 0.0
        return float(np.max(np.abs(totals - totals[0])) / abs(totals[0]))

    def to_frame(self) -> pd.DataFrame:
        """Wide table: time plus one column per compartment"""
        df = pd.DataFrame(self.states, columns=list(COMPARTMENTS))
        df.insert(0, TIME, self.time)
        return df

    def to_long(self, exclude: Iterable[str] = ()) -> pd.DataFrame:
        """
        Long format (time, group, people) for multi-series plots.
        Series named in `exclude` are dropped from the output only.
        """
        exclude = [exclude] if isinstance(exclude, str) else list(exclude)
        unknown = [name for name in exclude if name not in COMPARTMENTS]
        if unknown:
            raise KeyError(f"unknown compartment(s): {unknown}")
        df = self.to_frame().drop(columns=exclude)
        return df.melt(id_vars=TIME, var_name="group", value_name="people")

    def summary(self) -> Dict[str, float]:
        t = self.time
        S, I, R, D = self["susceptible"], self["infectious"], self["recovered"], self["dead"]
        N0 = float(self.totals()[0])
        peak_idx = int(np.argmax(I))
        exits = R[-1] - R[0] + D[-1] - D[0]
        return {
            "peak_day": float(t[peak_idx]),
            "peak_infectious": float(I[peak_idx]),
            "peak_prevalence": float(I[peak_idx] / N0),
            "final_dead": float(D[-1]),
            "final_susceptible": float(S[-1]),
            "attack_rate": float((S[0] - S[-1]) / N0),
            "case_fatality": float((D[-1] - D[0]) / exits) if exits > 0 else np.nan,
        }
