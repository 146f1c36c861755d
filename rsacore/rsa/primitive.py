"""
RSA Core Primitive

Implements the raw RSA operations:
- encrypt_unsafe: m^e mod n
- decrypt_unsafe: CRT decryption (about 4x faster than c^d mod n)
- decrypt_blinded_unsafe: CRT decryption behind a random blinding factor
- encrypt_int / decrypt_int: the above with range checks
- encrypt / decrypt: byte-string wrappers with fixed-width output

The *_unsafe functions perform no validation beyond the numeric domain.
Only the decrypt path takes a Mask; public-key operations never need
blinding.
"""

import logging
from dataclasses import dataclass
from typing import Optional, Union

from ..core_crypto.errors import InvalidMessage
from ..core_crypto.numeric import decode_be, encode_be, gcd, mod_inverse
from ..core_crypto.rng import RandomSource, default_source
from .keys import PrivateKey, PublicKey


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class NoMask:
    """Decrypt without blinding."""


@dataclass(frozen=True)
class Blind:
    """Blind with factors drawn from the process default random source."""


@dataclass(frozen=True)
class BlindWith:
    """Blind with factors drawn from the given random source."""
    rng: RandomSource


Mask = Union[NoMask, Blind, BlindWith]


def encrypt_unsafe(key: PublicKey, m: int) -> int:
    """Compute m^e mod n."""
    return pow(m, key.e, key.n)


def decrypt_unsafe(key: PrivateKey, c: int) -> int:
    """
    CRT decryption.

        m1 = c^dp mod p
        m2 = c^dq mod q
        h  = q_inv * (m1 - m2) mod p
        m  = m2 + h * q

    No side-channel mitigation is applied here; see decrypt_blinded_unsafe().
    """
    m1 = pow(c, key.dp, key.p)
    m2 = pow(c, key.dq, key.q)
    # m1 - m2 may be negative; Python's % returns a value in [0, p)
    h = (key.q_inv * (m1 - m2)) % key.p
    return m2 + h * key.q


def decrypt_blinded_unsafe(key: PrivateKey, c: int,
                           rng: Optional[RandomSource] = None) -> int:
    """
    CRT decryption with ciphertext blinding.

    Picks a random unit r of Z/nZ, decrypts (r^e * c) mod n and multiplies
    the result by r^-1. The operand seen by the CRT exponentiation is thus
    independent of c, which defeats timing attacks correlated with the
    ciphertext or the private exponent.

    Sampling r retries until gcd(r, n) == 1. For a proper RSA modulus a
    non-unit is astronomically unlikely, so the loop terminates with
    probability 1 and is not capped.

    Args:
        key: Private key
        c: Ciphertext integer
        rng: Source of blinding factors (process default if omitted)

    Returns:
        c^d mod n
    """
    rng = rng or default_source()
    n = key.n

    draws = 0
    while True:
        draws += 1
        r = rng.random_int(2, n)
        if gcd(r, n) == 1:
            break
    if draws > 1:
        logger.debug("Blinding factor accepted after %d draws", draws)

    r_inv = mod_inverse(r, n)
    x = decrypt_unsafe(key, (pow(r, key.e, n) * c) % n)
    return (r_inv * x) % n


def _check_range(n: int, value: int) -> None:
    if value >= n:
        raise InvalidMessage("RSA: key too small")
    if value < 1:
        raise InvalidMessage("RSA: non-positive message")


def encrypt_int(key: PublicKey, m: int) -> int:
    """
    Validated RSA encryption.

    Raises:
        InvalidMessage: If m is outside [1, n)
    """
    _check_range(key.n, m)
    return encrypt_unsafe(key, m)


def decrypt_int(key: PrivateKey, c: int, mask: Mask = Blind()) -> int:
    """
    Validated RSA decryption.

    Args:
        key: Private key
        c: Ciphertext integer
        mask: NoMask(), Blind() (default) or BlindWith(rng)

    Raises:
        InvalidMessage: If c is outside [1, n)
        TypeError: If mask is not one of the Mask variants
    """
    _check_range(key.n, c)

    if isinstance(mask, NoMask):
        return decrypt_unsafe(key, c)
    if isinstance(mask, Blind):
        return decrypt_blinded_unsafe(key, c)
    if isinstance(mask, BlindWith):
        return decrypt_blinded_unsafe(key, c, rng=mask.rng)
    raise TypeError(f"Unknown mask: {mask!r}")


def encrypt(key: PublicKey, data: bytes) -> bytes:
    """
    Raw RSA encryption of a byte string.

    The input is read as a big-endian integer. The output is always exactly
    key.byte_size bytes, zero-padded on the left.

    Raises:
        InvalidMessage: If the input integer is outside [1, n)
    """
    return encode_be(encrypt_int(key, decode_be(data)), key.byte_size)


def decrypt(key: PrivateKey, data: bytes, mask: Mask = Blind()) -> bytes:
    """
    Raw RSA decryption of a byte string.

    Output is exactly key.byte_size bytes, zero-padded on the left.

    Raises:
        InvalidMessage: If the input integer is outside [1, n)
    """
    return encode_be(decrypt_int(key, decode_be(data), mask=mask), key.byte_size)
