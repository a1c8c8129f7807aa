"""
Error taxonomy shared by every lcglab module.

An undefined π estimate is not an error; it is reported as data on
CesaroReport.
"""

from typing import List, Optional


class LabError(ValueError):
    """Base class for all lcglab errors."""


class InvalidRequest(LabError):
    """
    A generation request violates one of its invariants.

    Raised at the orchestrator boundary before any sequence is generated.
    """

    def __init__(self, message: str, violations: Optional[List[str]] = None):
        super().__init__(message)
        self.violations = list(violations or [message])


class InvalidModulus(LabError):
    """The modular arithmetic core was handed a modulus it cannot reduce by."""


class IntegrityError(LabError):
    """An exported report does not match its digest."""
