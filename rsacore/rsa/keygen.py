"""
Textbook RSA key generation.

NOT for production key material:
- the default exponent is fixed at 65537
- the modulus is not guaranteed to be exactly ``bits`` long
- no key-strength validation is performed

The entry point is deliberately named generate_insecure() so every call
site reads as a debug-only use.
"""

import logging
from typing import Optional

from ..core_crypto.numeric import gcd
from ..core_crypto.rng import RandomSource, default_source
from .keys import PrivateKey


logger = logging.getLogger(__name__)

DEFAULT_PUBLIC_EXPONENT = 0x10001  # 65537
MIN_KEY_BITS = 16


def generate_insecure(bits: int, e: int = DEFAULT_PUBLIC_EXPONENT,
                      rng: Optional[RandomSource] = None) -> PrivateKey:
    """
    Generate an RSA private key for debugging and tests.

    Each attempt draws two fresh primes of bits // 2 bits and keeps them
    only if p != q, gcd(e, p-1) == 1 and gcd(e, q-1) == 1. A failed
    attempt discards both primes. Retries are unbounded; they terminate
    with probability 1 under a sound random source.

    Args:
        bits: Requested modulus size in bits
        e: Public exponent (odd, >= 3)
        rng: Random source (process default if omitted)

    Returns:
        PrivateKey derived with PrivateKey.from_primes()

    Raises:
        ValueError: If bits < 16, e is even or below 3, or e does not
            fit below the modulus
    """
    if bits < MIN_KEY_BITS:
        raise ValueError(f"Key size must be at least {MIN_KEY_BITS} bits")
    if e < 3 or e % 2 == 0:
        raise ValueError("Public exponent must be odd and at least 3")

    prime_bits = bits // 2
    # n >= 2^(2 * prime_bits - 2), so this keeps e < n
    if e.bit_length() > 2 * prime_bits - 2:
        raise ValueError("Public exponent too large for key size")

    rng = rng or default_source()

    attempts = 0
    while True:
        attempts += 1
        p = rng.random_prime(prime_bits)
        q = rng.random_prime(prime_bits)
        if p != q and gcd(e, p - 1) == 1 and gcd(e, q - 1) == 1:
            break

    key = PrivateKey.from_primes(e, p, q)
    logger.debug("Generated %d-bit key (requested %d) in %d attempt(s)",
                 key.bits, bits, attempts)
    return key
