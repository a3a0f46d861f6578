"""
===========================================================
seird.py
Author: Veronica Scerra
Last Updated: 2026-10-18
===========================================================

Description:
    Deterministic SEIRD (Susceptible–Exposed–Infectious–Recovered–Dead)
    model of the 2014 Nigeria Ebola outbreak, with mass-action
    transmission, an optional corpse-transmission channel and a
    constant or time-decaying transmission rate.

        dS/dt = -β(t)·S·I - a·S·D
        dE/dt =  β(t)·S·I + a·S·D - σ·E
        dI/dt =  σ·E - γ·I
        dR/dt = (1-f)·γ·I
        dD/dt =  f·γ·I

API:
    seird_rhs(t, y, params, beta) -> derivative vector
    rk4_step(t, y, h, params, beta) -> state after one RK4 step
    simulate(params, y0, t, beta="constant", method="rk4") -> Trajectory
    SEIRDModel(params, beta)
      - simulate(t=None, y0=None) -> Trajectory
      - summary(trajectory) -> dict of peak day, final deaths, ...

Notes:
    - "rk4" splits every output interval into equal steps no longer
      than max_step, so each output time is a step boundary (no
      interpolation). Adaptive methods ("RK45", "DOP853", "RK23")
      go through scipy.integrate.solve_ivp with t_eval.
    - Nothing is clamped: negative compartments are reported with a
      NegativeCompartmentWarning, NaN/Inf raises
      NumericalInstabilityError. "rk4" checks every internal step;
      the adaptive methods are checked at the output times only.
    - Only explicit methods are offered. On stiff inputs (very large
      beta0) the adaptive ones shrink their steps and become slow;
      use "rk4" there, which fails fast with NumericalInstabilityError.
    - params may also be a mapping of named reals, converted with
      EbolaParameters.from_mapping().
    - simulate() keeps no state between calls, so independent runs can
      go to separate worker processes.
-----------------------------------------------------------
License: MIT
===========================================================
"""
from __future__ import annotations
import warnings
import numpy as np
from scipy.integrate import solve_ivp
from typing import Dict, Mapping, Optional, Sequence, Union

from .errors import InvalidInputError, NegativeCompartmentWarning, NumericalInstabilityError
from .parameters import (
    NIGERIA_2014_INITIAL_STATE,
    EbolaParameters,
    default_times,
    validate_initial_state,
)
from .trajectory import COMPARTMENTS, Trajectory
from .transmission import BetaFunction, BetaKind, make_beta

ADAPTIVE_METHODS = ("RK45", "DOP853", "RK23")


def seird_rhs(t: float, y: np.ndarray, params: EbolaParameters, beta: BetaFunction) -> np.ndarray:
    """Right-hand side of the SEIRD equations"""
    S, E, I, R, D = y
    new_exposed = beta(t) * S * I + params.a * S * D
    incubated = params.sigma * E
    removed = params.gamma * I
    dS = -new_exposed
    dE = new_exposed - incubated
    dI = incubated - removed
    dR = (1.0 - params.f) * removed
    dD = params.f * removed
    return np.array([dS, dE, dI, dR, dD])


def rk4_step(t: float, y: np.ndarray, h: float, params: EbolaParameters, beta: BetaFunction) -> np.ndarray:
    """single RK4 step"""
    k1 = seird_rhs(t, y, params, beta)
    k2 = seird_rhs(t + 0.5*h, y + 0.5*h*k1, params, beta)
    k3 = seird_rhs(t + 0.5*h, y + 0.5*h*k2, params, beta)
    k4 = seird_rhs(t + h, y + h*k3, params, beta)
    return y + (h/6.0)*(k1 + 2*k2 + 2*k3 + k4)


def _validate_times(t: Sequence[float]) -> np.ndarray:
    try:
        times = np.array(t, dtype=float)
    except (TypeError, ValueError) as e:
        raise InvalidInputError(f"output times must be real numbers, got {t!r}") from e
    if times.ndim != 1 or times.size == 0:
        raise InvalidInputError("output times must be a non-empty 1-D sequence")
    if not np.all(np.isfinite(times)):
        raise InvalidInputError("output times must be finite")
    if times[0] < 0:
        raise InvalidInputError(f"output times must start at or after t=0, got t={times[0]:g}")
    if np.any(np.diff(times) <= 0):
        raise InvalidInputError(f"output times must be strictly increasing, got {times.tolist()}")
    return times


def _integrate_rk4(times, y0, params, beta_fn, max_step, negative_tolerance):
    """Returns the output rows and the first internal undershoot (t, column, value) or None"""
    out = np.empty((len(times), len(COMPARTMENTS)), dtype=float)
    y = y0.copy()
    t_now = 0.0
    undershoot = None
    for i, t_next in enumerate(times):
        span = t_next - t_now
        if span > 0:
            n_steps = max(1, int(np.ceil(span / max_step)))
            h = span / n_steps
            for j in range(n_steps):
                y_next = rk4_step(t_now + j*h, y, h, params, beta_fn)
                if not np.all(np.isfinite(y_next)):
                    raise NumericalInstabilityError(
                        f"non-finite state {y_next.tolist()} after step from t={t_now + j*h:g}",
                        last_valid_time=t_now + j*h,
                    )
                if undershoot is None and np.any(y_next < -negative_tolerance):
                    col = int(np.argmax(y_next < -negative_tolerance))
                    undershoot = (t_now + (j + 1)*h, col, float(y_next[col]))
                y = y_next
        out[i] = y
        t_now = t_next
    return out, undershoot


def _integrate_adaptive(times, y0, params, beta_fn, method, max_step, rtol, atol) -> np.ndarray:
    if times[-1] == 0:
        return y0[np.newaxis, :].copy()

    last_valid = [0.0]

    def fun(t, y):
        if not np.all(np.isfinite(y)):
            raise NumericalInstabilityError(
                f"non-finite state {y.tolist()} at t={t:g}", last_valid_time=last_valid[0]
            )
        last_valid[0] = max(last_valid[0], t)
        return seird_rhs(t, y, params, beta_fn)

    solution = solve_ivp(
        fun=fun,
        t_span=(0.0, float(times[-1])),
        y0=y0,
        method=method,
        t_eval=times,
        max_step=max_step,
        rtol=rtol,
        atol=atol,
    )
    if not solution.success:
        raise NumericalInstabilityError(f"ODE solver failed: {solution.message}", last_valid_time=last_valid[0])
    out = solution.y.T
    if not np.all(np.isfinite(out)):
        raise NumericalInstabilityError("non-finite state in solver output", last_valid_time=last_valid[0])
    return out


def simulate(
    params: EbolaParameters,
    y0: Sequence[float] = NIGERIA_2014_INITIAL_STATE,
    t: Optional[Sequence[float]] = None,
    beta: Union[BetaKind, BetaFunction] = "constant",
    method: str = "rk4",
    max_step: float = 1.0,
    rtol: float = 1e-6,
    atol: float = 1e-8,
    negative_tolerance: float = 1e-6,
) -> Trajectory:
    """
    Integrate the SEIRD model from t=0 and sample it at the requested times.

    Parameters
    ----------
    params : EbolaParameters or mapping
        Coefficients for this run. A mapping of named reals goes through
        EbolaParameters.from_mapping().
    y0 : sequence of 5 floats
        State [S, E, I, R, D] at t=0. Defaults to the Nigeria 2014 start.
    t : sequence of floats, optional
        Strictly increasing output times >= 0. Defaults to days 0..100.
    beta : "constant" | "time-decaying" | callable variant
        Transmission rate. A kind string is resolved with make_beta().
    method : str
        "rk4" (fixed step, default) or one of RK45, DOP853, RK23.
    max_step : float
        Largest internal step in days.
    rtol, atol : float
        Tolerances for the adaptive methods.
    negative_tolerance : float
        Undershoot below zero tolerated before a NegativeCompartmentWarning.

    Returns
    -------
    Trajectory
        One row per requested time, in the requested order.

    Raises
    ------
    InvalidInputError
        Bad output times, initial state, method or step size.
    ParameterMissingError
        A required coefficient is absent, or "time-decaying" is requested
        without tau or k.
    NumericalInstabilityError
        A state component became NaN/Inf during integration.
    """
    if isinstance(params, Mapping):
        params = EbolaParameters.from_mapping(params)
    times = default_times() if t is None else _validate_times(t)
    y_init = validate_initial_state(y0)
    if not max_step > 0:
        raise InvalidInputError(f"max_step must be positive, got {max_step}")
    if method != "rk4" and method not in ADAPTIVE_METHODS:
        raise InvalidInputError(f"unknown method {method!r}; expected 'rk4' or one of {ADAPTIVE_METHODS}")
    beta_fn = make_beta(beta, params) if isinstance(beta, str) else beta

    if method == "rk4":
        states, undershoot = _integrate_rk4(times, y_init, params, beta_fn, max_step, negative_tolerance)
    else:
        states = _integrate_adaptive(times, y_init, params, beta_fn, method, max_step, rtol, atol)
        below = states < -negative_tolerance
        undershoot = None
        if np.any(below):
            row, col = np.argwhere(below)[0]
            undershoot = (times[row], int(col), float(states[row, col]))

    if undershoot is not None:
        t_neg, col, value = undershoot
        warnings.warn(
            f"{COMPARTMENTS[col]} fell to {value:.3g} at t={t_neg:g}; "
            f"check parameters or reduce max_step",
            NegativeCompartmentWarning,
            stacklevel=2,
        )

    return Trajectory(time=times, states=states, variant=getattr(beta_fn, "kind", None))


class SEIRDModel:
    """
    SEIRD model for Ebola with a fixed transmission variant.

    Parameters:
    params : EbolaParameters. Coefficients for the run
    beta : str or variant, default "constant". β(t) to use
    y0 : sequence of 5 floats, optional. Initial [S, E, I, R, D]
    """

    def __init__(
        self,
        params: EbolaParameters,
        beta: Union[BetaKind, BetaFunction] = "constant",
        y0: Sequence[float] = NIGERIA_2014_INITIAL_STATE,
    ):
        if isinstance(params, Mapping):
            params = EbolaParameters.from_mapping(params)
        self.params = params
        self.beta_fn = make_beta(beta, params) if isinstance(beta, str) else beta
        self.y0 = validate_initial_state(y0)
        self.N = float(self.y0.sum())

    @property
    def R0(self) -> float:
        # β₀·N/γ, the value before any intervention
        return self.params.basic_reproduction_number(self.N)

    def derivatives(self, t: float, y: np.ndarray) -> np.ndarray:
        return seird_rhs(t, y, self.params, self.beta_fn)

    def simulate(self, t: Optional[Sequence[float]] = None, y0: Optional[Sequence[float]] = None, **solver_kw) -> Trajectory:
        return simulate(
            self.params,
            y0=self.y0 if y0 is None else y0,
            t=t,
            beta=self.beta_fn,
            **solver_kw,
        )

    @staticmethod
    def summary(trajectory: Trajectory) -> Dict[str, float]:
        return trajectory.summary()
