"""
Random sources for the RSA core.

Every randomized operation (blinding, key generation, encryption padding)
draws from a ``RandomSource``. Three operations are exposed:

- random_int(low, high): uniform integer in [low, high)
- random_prime(bits): probable prime of exactly ``bits`` bits
- random_bytes(n): n random bytes

SecureRandomSource is backed by ``secrets`` and is the process default.
SeededRandomSource is deterministic and exists for tests and reproducible
debug sessions; never use it for real key material.
"""

import logging
import random
import secrets

from .numeric import PRIME_TEST_ROUNDS, is_probable_prime


logger = logging.getLogger(__name__)


class RandomSource:
    """
    Base class for random sources.

    Subclasses implement ``randbits`` and ``random_bytes``; integer ranges
    and prime generation are derived from them.
    """

    def randbits(self, k: int) -> int:
        """Return a non-negative integer with k random bits."""
        raise NotImplementedError

    def random_bytes(self, n: int) -> bytes:
        """Return n random bytes."""
        raise NotImplementedError

    def random_int(self, low: int, high: int) -> int:
        """
        Uniform random integer in the half-open range [low, high).

        Uses rejection sampling over ``randbits`` so the result is unbiased.

        Raises:
            ValueError: If the range is empty
        """
        if high <= low:
            raise ValueError(f"Empty range [{low}, {high})")

        span = high - low
        k = (span - 1).bit_length()
        while True:
            x = self.randbits(k)
            if x < span:
                return low + x

    def random_prime(self, bits: int, rounds: int = PRIME_TEST_ROUNDS) -> int:
        """
        Generate a random probable prime of exactly ``bits`` bits.

        Candidates are odd with the top bit set; each one is checked with
        Miller-Rabin using witnesses from this same source.

        Args:
            bits: Bit length of the prime
            rounds: Number of Miller-Rabin rounds

        Returns:
            A probable prime p with p.bit_length() == bits

        Raises:
            ValueError: If bits < 2
        """
        if bits < 2:
            raise ValueError("Bit length must be at least 2")

        attempts = 0
        while True:
            attempts += 1
            candidate = self.randbits(bits)
            candidate |= (1 << (bits - 1))  # Set MSB
            candidate |= 1  # Make odd

            if is_probable_prime(candidate, rounds, rng=self):
                logger.debug("Found %d-bit prime after %d candidates", bits, attempts)
                return candidate


class SecureRandomSource(RandomSource):
    """Random source backed by the operating system CSPRNG."""

    def randbits(self, k: int) -> int:
        return secrets.randbits(k)

    def random_bytes(self, n: int) -> bytes:
        return secrets.token_bytes(n)

    def random_int(self, low: int, high: int) -> int:
        if high <= low:
            raise ValueError(f"Empty range [{low}, {high})")
        return low + secrets.randbelow(high - low)

    def __repr__(self) -> str:
        return "SecureRandomSource()"


class SeededRandomSource(RandomSource):
    """
    Deterministic random source.

    Example:
        >>> a, b = SeededRandomSource(7), SeededRandomSource(7)
        >>> a.random_bytes(4) == b.random_bytes(4)
        True

    Not thread safe and not cryptographically secure.
    """

    def __init__(self, seed: int):
        self._seed = seed
        self._random = random.Random(seed)

    def randbits(self, k: int) -> int:
        return self._random.getrandbits(k)

    def random_bytes(self, n: int) -> bytes:
        return self._random.randbytes(n)

    def __repr__(self) -> str:
        return f"SeededRandomSource(seed={self._seed})"


_DEFAULT_SOURCE = SecureRandomSource()


def default_source() -> RandomSource:
    """Process-wide secure random source."""
    return _DEFAULT_SOURCE
