#!/usr/bin/env python3
"""
Error and warning types shared by the configuration and simulation layers.
"""

from typing import Iterable, List


class ConfigurationError(ValueError):
    """
    Invalid reference data or simulation parameters.

    Raised before any sampling starts; carries every problem found so the
    caller can show them all at once.
    """

    def __init__(self, errors: Iterable[str]):
        self.errors: List[str] = list(errors)
        super().__init__("Invalid configuration:\n- " + "\n- ".join(self.errors))


class SimulationCancelled(RuntimeError):
    """The caller cancelled a run before the credit grid scan finished."""


class DegenerateInputWarning(UserWarning):
    """The portfolio has no hectares; results are trivially well defined."""
