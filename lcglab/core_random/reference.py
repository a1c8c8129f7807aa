"""
Reference Sequence Generator

Produces a uniform integer sequence that shares nothing with the LCG
recurrence. It is the statistical control the LCG output is judged
against: same length, same range, independent draws.

The source of randomness is pluggable. Anything with a randbelow(n)
method qualifies:
- SystemRandomSource: OS entropy via the secrets module (default)
- SeededRandomSource: random.Random with a fixed seed, for reproducible runs
"""

import random
import secrets
from typing import Optional, Protocol

from .models import Sequence
from .modular import _check_modulus


class RandomSource(Protocol):
    """Anything that can draw a uniform integer from [0, n)."""

    def randbelow(self, n: int) -> int:
        ...


class SystemRandomSource:
    """
    Draws from the operating system CSPRNG.

    Every call reads fresh entropy, so concurrent requests sharing one
    instance never see correlated values.
    """

    def randbelow(self, n: int) -> int:
        return secrets.randbelow(n)

    def __repr__(self) -> str:
        return "SystemRandomSource()"


class SeededRandomSource:
    """
    Reproducible source backed by a private random.Random instance.

    Not safe to share between threads; create one per request.
    """

    def __init__(self, seed: int):
        self._seed = seed
        self._rng = random.Random(seed)

    def randbelow(self, n: int) -> int:
        return self._rng.randrange(n)

    def __repr__(self) -> str:
        return f"SeededRandomSource(seed={self._seed})"


def generate_reference(
    modulus: int,
    length: int,
    source: Optional[RandomSource] = None
) -> Sequence:
    """
    Generate an independent uniform sequence over [0, modulus).

    Args:
        modulus: Exclusive upper bound of every element (must be positive)
        length: Number of elements
        source: Random source (SystemRandomSource if None)

    Returns:
        Tuple of length values drawn independently and uniformly

    Raises:
        InvalidModulus: If modulus <= 0
    """
    _check_modulus(modulus)
    if source is None:
        source = SystemRandomSource()
    return tuple(source.randbelow(modulus) for _ in range(length))
