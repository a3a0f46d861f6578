"""
===============================================================================
parameters.py
Author: Veronica Scerra
Last Updated: 2026-10-18
===============================================================================
Model Parameters for the 2014 Nigeria Ebola SEIRD model

Epidemiological coefficients, initial conditions and time grid for the
SEIRD model. Default values reproduce the published analysis of the 2014
Ebola outbreak in Nigeria (Lagos importation, July-October 2014).

References:
    - Fasina et al. (2014): Transmission dynamics and control of Ebola virus
      disease outbreak in Nigeria, July to September 2014. Eurosurveillance.
    - Legrand et al. (2007): Understanding the dynamics of Ebola epidemics.
--------------------------------------------------------------------------------
License: MIT
================================================================================
"""
from __future__ import annotations
import math
import numpy as np
from dataclasses import dataclass, asdict, replace as _dc_replace
from typing import Dict, Mapping, NamedTuple, Optional, Sequence

from .errors import InvalidInputError, ParameterMissingError

# short names used in the published analysis -> field names
ALIASES = {"b": "beta0", "beta": "beta0", "s": "sigma", "g": "gamma"}
REQUIRED = ("beta0", "sigma", "gamma", "f")


@dataclass(frozen=True)
class EbolaParameters:
    """
    Parameter set for one SEIRD run. All rates are per day.

    beta0 : float. Baseline transmission rate (per susceptible-infectious pair)
    sigma : float. Incubation rate E->I  [1/sigma = incubation period]
    gamma : float. Exit rate from I      [1/gamma = infectious period]
    f     : float. Case fatality fraction among exits from I, in [0, 1]
    tau   : float, optional. Intervention day (time-decaying beta only)
    k     : float, optional. Decay rate of beta after tau (time-decaying beta only)
    a     : float. Corpse (environmental) transmission coefficient, inactive by default
    """
    # ==================== Transmission =======================================
    beta0: float = 1.22e-6
    # ==================== Natural history ====================================
    sigma: float = 1 / 9.31     # 9.31 day incubation
    gamma: float = 1 / 7.41     # 7.41 day infectious period
    f: float = 0.39             # 39% of cases die
    # ==================== Intervention =======================================
    tau: Optional[float] = 3.0  # control measures begin on day 3
    k: Optional[float] = 0.19
    # ==================== Secondary channel ==================================
    a: float = 0.0

    def __post_init__(self):
        self._validate_parameters()

    def _validate_parameters(self):
        """Check that every coefficient is finite and physically reasonable"""
        for name, value in asdict(self).items():
            if value is None and name in ("tau", "k"):
                continue
            if not isinstance(value, (int, float, np.floating, np.integer)) or isinstance(value, bool):
                raise InvalidInputError(f"parameter {name} must be a real number, got {value!r}")
            if not math.isfinite(value):
                raise InvalidInputError(f"parameter {name} must be finite, got {value}")
        if self.beta0 < 0:
            raise InvalidInputError("transmission rate beta0 must be non-negative")
        if self.sigma < 0:
            raise InvalidInputError("incubation rate sigma must be non-negative")
        if self.gamma < 0:
            raise InvalidInputError("recovery-or-death rate gamma must be non-negative")
        if not 0.0 <= self.f <= 1.0:
            raise InvalidInputError(f"case fatality fraction f must be in [0, 1], got {self.f}")
        if self.a < 0:
            raise InvalidInputError("corpse transmission coefficient a must be non-negative")
        if self.tau is not None and self.tau < 0:
            raise InvalidInputError("intervention day tau must be non-negative")
        if self.k is not None and self.k < 0:
            raise InvalidInputError("transmission decay rate k must be non-negative")

    @classmethod
    def from_mapping(
        cls,
        mapping: Mapping[str, float],
        overrides: Optional[Mapping[str, float]] = None,
    ) -> "EbolaParameters":
        """
        Build a parameter set from a mapping of named reals.

        Accepts field names or the short aliases b, s, g. beta0, sigma,
        gamma and f are required; tau and k may be left out (they are only
        needed by the time-decaying transmission rate); a defaults to 0.

        Raises
        ------
        ParameterMissingError
            If any required coefficient is absent.
        InvalidInputError
            If a key is not a known coefficient or a value is out of range.
        """
        merged: Dict[str, float] = {}
        for source in (mapping, overrides or {}):
            for key, value in source.items():
                name = ALIASES.get(key, key)
                if name not in cls.__dataclass_fields__:
                    raise InvalidInputError(f"unknown parameter: {key!r}")
                merged[name] = value

        missing = [name for name in REQUIRED if merged.get(name) is None]
        if missing:
            raise ParameterMissingError(missing)

        merged.setdefault("tau", None)
        merged.setdefault("k", None)
        merged.setdefault("a", 0.0)
        values = {}
        for name, value in merged.items():
            try:
                values[name] = None if value is None else float(value)
            except (TypeError, ValueError) as e:
                raise InvalidInputError(f"parameter {name} must be a real number, got {value!r}") from e
        return cls(**values)

    def replace(self, **changes) -> "EbolaParameters":
        """Return a new (validated) parameter set with some fields changed"""
        return _dc_replace(self, **changes)

    @property
    def incubation_period(self) -> float:
        return 1.0 / self.sigma if self.sigma > 0 else np.inf

    @property
    def infectious_period(self) -> float:
        return 1.0 / self.gamma if self.gamma > 0 else np.inf

    def basic_reproduction_number(self, N: float) -> float:
        """
        R0 = beta0 * N / gamma for mass-action transmission in a fully
        susceptible population of size N (corpse transmission ignored).
        """
        return self.beta0 * N / self.gamma if self.gamma > 0 else np.inf

    def to_dict(self) -> Dict[str, Optional[float]]:
        """Convert parameters to dictionary for easy inspection."""
        return asdict(self)

    def print_summary(self, N: Optional[float] = None):
        """Print parameter summary for documentation."""
        print("EBOLA SEIRD MODEL PARAMETERS:")
        print("\n--- TRANSMISSION ---")
        print(f"Baseline transmission rate (β₀): {self.beta0:.3e} per day")
        if N is not None:
            print(f"R₀ (N={N:,.0f}): {self.basic_reproduction_number(N):.2f}")
        print(f"Corpse transmission (a): {self.a:.3e} per day")

        print("\n--- NATURAL HISTORY ---")
        print(f"Incubation period (1/σ): {self.incubation_period:.2f} days")
        print(f"Infectious period (1/γ): {self.infectious_period:.2f} days")
        print(f"Case fatality fraction (f): {self.f * 100:.0f}%")

        print("\n--- INTERVENTION ---")
        if self.tau is None or self.k is None:
            print("No intervention configured")
        else:
            print(f"Intervention day (τ): {self.tau:g}")
            print(f"Transmission decay rate (k): {self.k:.3f} per day")


class State(NamedTuple):
    """Five compartment counts (S, E, I, R, D)"""
    S: float
    E: float
    I: float
    R: float
    D: float

    @property
    def total(self) -> float:
        return self.S + self.E + self.I + self.R + self.D

    def as_array(self) -> np.ndarray:
        return np.array(self, dtype=float)


# Lagos, 2014: one imported case into a population of one million
NIGERIA_2014_INITIAL_STATE = State(S=1_000_000.0, E=0.0, I=1.0, R=0.0, D=0.0)


def validate_initial_state(y0: Sequence[float]) -> np.ndarray:
    """
    Check an initial state vector and return it as a new float array.

    Raises InvalidInputError unless y0 holds five finite, non-negative values.
    """
    try:
        y = np.array(y0, dtype=float)
    except (TypeError, ValueError) as e:
        raise InvalidInputError(f"initial state must be five real numbers, got {y0!r}") from e
    if y.shape != (5,):
        raise InvalidInputError(f"initial state must have 5 components (S, E, I, R, D), got shape {y.shape}")
    if not np.all(np.isfinite(y)):
        raise InvalidInputError(f"initial state must be finite, got {y.tolist()}")
    if np.any(y < 0):
        negative = [name for name, v in zip(State._fields, y) if v < 0]
        raise InvalidInputError(f"initial state has negative component(s): {', '.join(negative)}")
    return y


def default_times(t_max: float = 100, step: float = 1) -> np.ndarray:
    """Daily output grid 0..t_max inclusive"""
    if step <= 0:
        raise InvalidInputError("step must be positive")
    if not t_max >= 0:
        raise InvalidInputError(f"t_max must be non-negative, got {t_max}")
    n = int(round(t_max / step))
    return np.linspace(0.0, n * step, n + 1)


# Alternative parameter sets for sensitivity analysis
def nigeria_2014() -> EbolaParameters:
    """Published Nigeria 2014 estimates"""
    return EbolaParameters()


def create_no_intervention_params() -> EbolaParameters:
    """Control measures never reduce transmission (k = 0)"""
    return EbolaParameters(k=0.0)


def create_late_intervention_params(tau: float = 14.0) -> EbolaParameters:
    """Same decay rate, control measures starting on day tau"""
    return EbolaParameters(tau=tau)


def create_corpse_transmission_params(a: float = 1e-7) -> EbolaParameters:
    """Switch on transmission from unsafe burials"""
    return EbolaParameters(a=a)


if __name__ == "__main__":
    params = nigeria_2014()
    params.print_summary(N=NIGERIA_2014_INITIAL_STATE.total)

    print("\nParameter dictionary:")
    import pprint
    pprint.pprint(params.to_dict())
