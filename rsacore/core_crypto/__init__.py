# Core Cryptography Module
"""
Building blocks for the RSA core:
- Fixed-width big-endian integer codec - numeric.py
- gcd, modular inverse, Miller-Rabin - numeric.py
- Random sources (secure and seeded) - rng.py
- Exception hierarchy - errors.py
"""

from .errors import RSAError, InvalidMessage, InvalidKey

from .numeric import (
    PRIME_TEST_ROUNDS,
    decode_be,
    encode_be,
    cdiv,
    gcd,
    mod_inverse,
    is_probable_prime,
)

from .rng import (
    RandomSource,
    SecureRandomSource,
    SeededRandomSource,
    default_source,
)

__all__ = [
    'RSAError',
    'InvalidMessage',
    'InvalidKey',
    'PRIME_TEST_ROUNDS',
    'decode_be',
    'encode_be',
    'cdiv',
    'gcd',
    'mod_inverse',
    'is_probable_prime',
    'RandomSource',
    'SecureRandomSource',
    'SeededRandomSource',
    'default_source',
]
