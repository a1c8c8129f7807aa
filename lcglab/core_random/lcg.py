"""
LCG (Linear Congruential Generator) Sequence Generator

A deterministic pseudo-random integer generator using the recurrence:

    X(n+1) = (a * X(n) + c) mod m

This is for EDUCATIONAL/DEMONSTRATION purposes only - not cryptographically secure!

Components:
- LinearCongruentialGenerator: stateful generator with reset support
- generate(): one-shot sequence for a GenerationRequest

Security Note:
    An LCG leaks its full state with every output. Three consecutive
    outputs are enough to recover a, c and m for small moduli. Its value
    here is as a baseline for studying randomness quality.
"""

from typing import Iterator, List, Optional

from .models import GenerationRequest, Sequence
from .modular import step, _check_modulus


# ============================================================================
# Constants
# ============================================================================

# Park and Miller "minimal standard" parameters
DEFAULT_MODULUS = 2**31 - 1
DEFAULT_MULTIPLIER = 16807
DEFAULT_INCREMENT = 0


class LinearCongruentialGenerator:
    """
    Linear congruential generator.

    The first value produced is the seed itself (reduced modulo m), so a
    generator of length n yields x0, x1, ..., x(n-1).

    Example:
        >>> lcg = LinearCongruentialGenerator(seed=5, multiplier=23, increment=7, modulus=97)
        >>> lcg.generate_values(4)
        [5, 25, 0, 7]
    """

    def __init__(
        self,
        seed: int,
        multiplier: int = DEFAULT_MULTIPLIER,
        increment: int = DEFAULT_INCREMENT,
        modulus: int = DEFAULT_MODULUS,
    ):
        """
        Initialize the generator.

        Args:
            seed: Initial state X0 (reduced modulo modulus)
            multiplier: a
            increment: c
            modulus: m (must be positive)

        Raises:
            InvalidModulus: If modulus <= 0
        """
        _check_modulus(modulus)

        self._modulus = modulus
        self._multiplier = multiplier
        self._increment = increment
        self._initial_seed = seed % modulus
        self._state = self._initial_seed

    @property
    def state(self) -> int:
        """Value the next call to next_value() will return."""
        return self._state

    @property
    def modulus(self) -> int:
        return self._modulus

    def next_value(self) -> int:
        """
        Produce the next element of the sequence.

        Returns:
            Next value in [0, modulus)
        """
        value = self._state
        self._state = step(value, self._multiplier, self._increment, self._modulus)
        return value

    def generate_values(self, count: int) -> List[int]:
        """
        Generate multiple values.

        Args:
            count: Number of values to generate

        Returns:
            List of the next count values
        """
        return [self.next_value() for _ in range(count)]

    def reset(self, new_seed: Optional[int] = None):
        """
        Reset the generator to its initial or a new seed.

        Args:
            new_seed: Optional new seed (uses original if None)
        """
        if new_seed is not None:
            self._initial_seed = new_seed % self._modulus
        self._state = self._initial_seed

    def __iter__(self) -> Iterator[int]:
        while True:
            yield self.next_value()

    @classmethod
    def from_request(cls, request: GenerationRequest) -> 'LinearCongruentialGenerator':
        return cls(
            seed=request.reduced_seed,
            multiplier=request.multiplier,
            increment=request.increment,
            modulus=request.modulus,
        )

    def __repr__(self) -> str:
        return (
            f"LinearCongruentialGenerator(a={self._multiplier}, c={self._increment}, "
            f"m={self._modulus}, seed={self._initial_seed})"
        )


def generate(request: GenerationRequest) -> Sequence:
    """
    Generate the LCG sequence for a request.

    Element 0 is the reduced seed; element i+1 is step(element i).
    Identical requests always produce identical sequences.

    Args:
        request: Generation parameters

    Returns:
        Tuple of request.length values, each in [0, request.modulus)

    Raises:
        InvalidModulus: If request.modulus <= 0
    """
    lcg = LinearCongruentialGenerator.from_request(request)
    return tuple(lcg.generate_values(request.length))
