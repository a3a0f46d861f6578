"""
===========================================================
transmission.py
Author: Veronica Scerra
Last Updated: 2026-10-18
===========================================================

Description:
    Transmission rate β(t) for the SEIRD model, as a small tagged
    variant chosen once per run:

        constant      : β(t) = β₀
        time-decaying : β(t) = β₀                  for t < τ
                        β₀·exp(-k·(t - τ))         for t >= τ

API:
    - ConstantBeta(beta0), DecayingBeta(beta0, tau, k)
      both callable as beta(t) for scalar or array t
    - make_beta(kind, params) -> variant built from a parameter set

Notes:
    - β(t) is continuous in t; the solver evaluates it at RK4
      half-steps, not only at whole days.
    - For k > 0, β is strictly decreasing after τ.
-----------------------------------------------------------
License: MIT
===========================================================
"""
from __future__ import annotations
import numpy as np
from dataclasses import dataclass
from typing import Literal, Union

from .errors import InvalidInputError, ParameterMissingError
from .parameters import EbolaParameters

BetaKind = Literal["constant", "time-decaying"]
BETA_VARIANTS = ("constant", "time-decaying")


@dataclass(frozen=True)
class ConstantBeta:
    beta0: float
    kind = "constant"

    def __call__(self, t):
        if np.ndim(t) == 0:
            return float(self.beta0)
        return np.full(np.shape(t), self.beta0, dtype=float)


@dataclass(frozen=True)
class DecayingBeta:
    """β₀ until the intervention day tau, then exponential decay at rate k"""
    beta0: float
    tau: float
    k: float
    kind = "time-decaying"

    def __call__(self, t):
        t_arr = np.asarray(t, dtype=float)
        # clip the exponent so the untaken branch of np.where cannot overflow
        decayed = self.beta0 * np.exp(-self.k * np.maximum(t_arr - self.tau, 0.0))
        beta = np.where(t_arr < self.tau, self.beta0, decayed)
        if beta.ndim == 0:
            return float(beta)
        return beta


BetaFunction = Union[ConstantBeta, DecayingBeta]


def make_beta(kind: BetaKind, params: EbolaParameters) -> BetaFunction:
    """
    Select the β(t) variant for a run.

    Raises ParameterMissingError if the time-decaying variant is requested
    without tau or k, and InvalidInputError for an unknown kind.
    """
    if kind == "constant":
        return ConstantBeta(params.beta0)
    elif kind == "time-decaying":
        missing = [name for name in ("tau", "k") if getattr(params, name) is None]
        if missing:
            raise ParameterMissingError(missing)
        return DecayingBeta(params.beta0, params.tau, params.k)
    else:
        raise InvalidInputError(f"unknown beta variant {kind!r}; expected one of {BETA_VARIANTS}")
