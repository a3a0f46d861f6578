"""
===========================================================
errors.py
Author: Veronica Scerra
Last Updated: 2026-10-18
===========================================================

Description:
    Exception and warning types raised by the SEIRD model.

    - InvalidInputError: bad times, initial state or coefficients
    - ParameterMissingError: a required coefficient is absent
    - NumericalInstabilityError: state became NaN/Inf mid-integration
    - NegativeCompartmentWarning: a compartment dipped below zero

Notes:
    - InvalidInputError is a ValueError and NumericalInstabilityError a
      RuntimeError, so callers catching the builtins still work.
-----------------------------------------------------------
License: MIT
===========================================================
"""
from __future__ import annotations
from typing import Iterable, Optional


class SEIRDError(Exception):
    """Base class for every error raised by ebola_seird"""


class InvalidInputError(SEIRDError, ValueError):
    """Input rejected before any integration work began"""


class ParameterMissingError(SEIRDError, KeyError):
    """One or more required coefficients are missing from the parameter set"""

    def __init__(self, missing: Iterable[str]):
        self.missing = tuple(missing)
        super().__init__(f"missing required parameter(s): {', '.join(self.missing)}")

    def __str__(self) -> str:
        # KeyError would otherwise repr() the message
        return self.args[0]


class NumericalInstabilityError(SEIRDError, RuntimeError):
    """A state component became non-finite during integration"""

    def __init__(self, message: str, last_valid_time: Optional[float] = None):
        self.last_valid_time = last_valid_time
        if last_valid_time is not None:
            message = f"{message} (last valid time: t={last_valid_time:g})"
        super().__init__(message)


class NegativeCompartmentWarning(RuntimeWarning):
    """A compartment fell below zero by more than the allowed undershoot"""
