"""
Modular Arithmetic for Linear Congruential Generators

Implements the arithmetic every generator in this package is built on:
- Modular multiplication (double-and-add algorithm)
- The LCG step (a*x + c) mod m
- Euclidean gcd
- Hull-Dobell full-period test

Note: Every intermediate value is kept below 2*m, so the step is exact for
      any modulus regardless of how large a*x would grow.
"""

from typing import List

from ..errors import InvalidModulus


def _check_modulus(m: int) -> None:
    if m <= 0:
        raise InvalidModulus(f"Modulus must be positive, got {m}")


def mod_mul(a: int, b: int, modulus: int) -> int:
    """
    Modular multiplication using the double-and-add algorithm.

    The additive twin of square-and-multiply: walk the bits of b from LSB
    to MSB, adding the running multiple of a whenever the bit is set and
    doubling it for the next bit.

    Time complexity: O(log b) additions

    Args:
        a: First factor
        b: Second factor
        modulus: The modulus (must be positive)

    Returns:
        (a * b) mod modulus

    Raises:
        InvalidModulus: If modulus <= 0
    """
    _check_modulus(modulus)
    if modulus == 1:
        return 0

    a %= modulus
    b %= modulus
    result = 0

    while b > 0:
        if b & 1:
            result = (result + a) % modulus
        a = (a + a) % modulus
        b >>= 1

    return result


def step(x: int, a: int, c: int, m: int) -> int:
    """
    One LCG transition.

    Args:
        x: Current state
        a: Multiplier
        c: Increment
        m: Modulus

    Returns:
        (a*x + c) mod m, always in [0, m)

    Raises:
        InvalidModulus: If m <= 0
    """
    _check_modulus(m)
    return (mod_mul(a, x, m) + c % m) % m


def gcd(a: int, b: int) -> int:
    """
    Compute the greatest common divisor using Euclidean algorithm.

    gcd(0, 0) is 0, so a pair of zeros is never coprime.

    Args:
        a: First integer
        b: Second integer

    Returns:
        GCD of a and b
    """
    a, b = abs(a), abs(b)
    while b:
        a, b = b, a % b
    return a


def prime_factors(n: int) -> List[int]:
    """
    Distinct prime factors of n by trial division, ascending.

    Args:
        n: Integer >= 1

    Returns:
        List of distinct primes dividing n (empty for n == 1)
    """
    factors = []
    d = 2
    while d * d <= n:
        if n % d == 0:
            factors.append(d)
            while n % d == 0:
                n //= d
        d += 1 if d == 2 else 2
    if n > 1:
        factors.append(n)
    return factors


def has_full_period(m: int, a: int, c: int) -> bool:
    """
    Hull-Dobell theorem: does x -> (a*x + c) mod m cycle through all m values?

    Conditions for a full period:
    1. gcd(c, m) = 1
    2. a - 1 is divisible by every prime factor of m
    3. a - 1 is divisible by 4 if m is divisible by 4

    Args:
        m: Modulus
        a: Multiplier
        c: Increment

    Returns:
        True if every seed yields a cycle of length m

    Raises:
        InvalidModulus: If m <= 0
    """
    _check_modulus(m)
    if m == 1:
        return True

    if gcd(c, m) != 1:
        return False

    for p in prime_factors(m):
        if (a - 1) % p != 0:
            return False

    if m % 4 == 0 and (a - 1) % 4 != 0:
        return False

    return True
