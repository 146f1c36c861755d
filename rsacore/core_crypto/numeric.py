"""
Numeric helpers for the RSA core.

Provides:
- Fixed-width big-endian integer codec (encode_be / decode_be)
- Ceiling division for byte-size computations
- gcd and modular inverse over Python integers
- Miller-Rabin probabilistic primality testing

Arbitrary-precision arithmetic itself is Python's ``int``; modular
exponentiation and inversion go through the built-in ``pow``.
"""

import math
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from .rng import RandomSource


# Number of Miller-Rabin rounds; false-positive rate is at most 4^-rounds
PRIME_TEST_ROUNDS = 40

SMALL_PRIMES = (
    2, 3, 5, 7, 11, 13, 17, 19, 23, 29, 31, 37, 41, 43, 47,
    53, 59, 61, 67, 71, 73, 79, 83, 89, 97,
)


def decode_be(data: bytes) -> int:
    """Convert a big-endian byte string to a non-negative integer."""
    return int.from_bytes(data, byteorder='big')


def encode_be(value: int, size: int) -> bytes:
    """
    Convert an integer to exactly ``size`` big-endian bytes.

    The result is zero-padded on the left.

    Args:
        value: Non-negative integer to encode
        size: Exact output length in bytes

    Returns:
        ``size`` bytes

    Raises:
        ValueError: If value is negative or needs more than ``size`` bytes
    """
    if value < 0:
        raise ValueError("Cannot encode negative integers")
    if value.bit_length() > size * 8:
        raise ValueError(f"Integer too large for {size} bytes")
    return value.to_bytes(size, byteorder='big')


def cdiv(a: int, b: int) -> int:
    """Ceiling division for non-negative a and positive b."""
    return -(-a // b)


def gcd(a: int, b: int) -> int:
    """Greatest common divisor."""
    return math.gcd(a, b)


def mod_inverse(a: int, m: int) -> int:
    """
    Compute the modular multiplicative inverse of a modulo m.

    Args:
        a: The number to invert
        m: The modulus

    Returns:
        x in [0, m) with (a * x) mod m == 1

    Raises:
        ValueError: If the inverse doesn't exist (gcd(a, m) != 1)
    """
    g = math.gcd(a, m)
    if g != 1:
        raise ValueError(f"Modular inverse doesn't exist (gcd = {g})")
    return pow(a, -1, m)


def is_probable_prime(n: int, rounds: int = PRIME_TEST_ROUNDS,
                      rng: Optional["RandomSource"] = None) -> bool:
    """
    Miller-Rabin primality test.

    Algorithm:
    1. Reject small factors by trial division
    2. Write n-1 as 2^r * d with d odd
    3. For each round pick a witness a in [2, n-2]:
       - x = a^d mod n; pass if x is 1 or n-1
       - square x up to r-1 times looking for n-1
       - n is composite if n-1 never shows up

    Args:
        n: Number to test
        rounds: Number of witnesses
        rng: Source of witnesses (process default if omitted)

    Returns:
        True if n is probably prime, False if definitely composite
    """
    if n < 2:
        return False

    for p in SMALL_PRIMES:
        if n == p:
            return True
        if n % p == 0:
            return False

    if rng is None:
        from .rng import default_source
        rng = default_source()

    r, d = 0, n - 1
    while d % 2 == 0:
        r += 1
        d //= 2

    for _ in range(rounds):
        a = rng.random_int(2, n - 1)
        x = pow(a, d, n)

        if x == 1 or x == n - 1:
            continue

        for _ in range(r - 1):
            x = pow(x, 2, n)
            if x == n - 1:
                break
        else:
            return False

    return True
