"""
Value types passed between the generators and the analysis stages.

Every type here is frozen: a report is produced once and never updated
in place, so results compare by value.
"""

import math
from dataclasses import dataclass
from typing import Optional, Tuple

# A generated sequence is an immutable, randomly indexable tuple of ints.
Sequence = Tuple[int, ...]


# ============================================================================
# Constants
# ============================================================================

THEORETICAL_PI = math.pi


@dataclass(frozen=True)
class GenerationRequest:
    """
    Parameters of one LCG run.

    Attributes:
        modulus: m, must be >= 1
        multiplier: a, must be >= 0
        increment: c, must be >= 0
        seed: x0, reduced modulo m before use
        length: n, number of elements to produce (>= 2)
    """
    modulus: int
    multiplier: int
    increment: int
    seed: int
    length: int

    @property
    def reduced_seed(self) -> int:
        """Seed reduced into [0, modulus)."""
        return self.seed % self.modulus

    def to_params(self) -> dict:
        """Query-style parameter names used by the LabOne endpoint."""
        return {
            'm': self.modulus,
            'a': self.multiplier,
            'c': self.increment,
            'x0': self.seed,
            'n': self.length,
        }


@dataclass(frozen=True)
class PeriodReport:
    """
    Result of cycle detection over a finite sequence.

    When no cycle is confirmed, period equals the sequence length and both
    indices are None.
    """
    period: int
    cycle_confirmed: bool
    cycle_start: Optional[int] = None
    first_repeat_index: Optional[int] = None

    @classmethod
    def undetermined(cls, length: int) -> 'PeriodReport':
        return cls(period=length, cycle_confirmed=False)


@dataclass(frozen=True)
class CesaroReport:
    """
    Coprimality statistics of consecutive pairs and the derived π estimate.

    pi_estimate is None when no pair was coprime (the estimate is undefined).
    """
    pi_estimate: Optional[float]
    coprime_pair_count: int
    total_pair_count: int

    @property
    def ratio(self) -> float:
        if self.total_pair_count == 0:
            return 0.0
        return self.coprime_pair_count / self.total_pair_count

    @property
    def is_defined(self) -> bool:
        return self.pi_estimate is not None

    @property
    def absolute_error(self) -> Optional[float]:
        """Distance of the estimate from π."""
        if self.pi_estimate is None:
            return None
        return abs(self.pi_estimate - THEORETICAL_PI)
