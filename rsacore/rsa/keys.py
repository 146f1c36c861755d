"""
RSA Key Model

Public and private key records:
- PublicKey: (e, n)
- PrivateKey: full CRT form (e, d, n, p, q, dp, dq, q_inv)

Keys are immutable. They can be built from big-endian byte strings, from
two primes plus a public exponent, or by the key generator. Construction
checks the arithmetic invariants and raises InvalidKey on violation;
primality is only checked by PrivateKey.validate().
"""

import logging
from dataclasses import dataclass, field
from typing import Optional

from ..core_crypto.errors import InvalidKey
from ..core_crypto.numeric import (
    cdiv, decode_be, gcd, is_probable_prime, mod_inverse
)
from ..core_crypto.rng import RandomSource


logger = logging.getLogger(__name__)


def _check_public(e: int, n: int) -> None:
    if n <= 0:
        raise InvalidKey("RSA: modulus must be positive")
    if not 1 < e < n:
        raise InvalidKey("RSA: public exponent must satisfy 1 < e < n")


@dataclass(frozen=True)
class PublicKey:
    """
    RSA public key.

    Example:
        >>> key = PublicKey(e=17, n=3233)
        >>> key.bits, key.byte_size
        (12, 2)
    """
    e: int
    n: int

    def __post_init__(self):
        _check_public(self.e, self.n)

    @classmethod
    def from_bytes(cls, *, e: bytes, n: bytes) -> 'PublicKey':
        """Build a public key from big-endian encoded fields."""
        return cls(e=decode_be(e), n=decode_be(n))

    @property
    def bits(self) -> int:
        """Modulus size in bits."""
        return self.n.bit_length()

    @property
    def byte_size(self) -> int:
        """Modulus size in bytes, ceil(bits / 8)."""
        return cdiv(self.bits, 8)


@dataclass(frozen=True)
class PrivateKey:
    """
    RSA private key in CRT form.

    Secret fields are left out of repr(); use format_private_key() for a
    full dump.

    Example:
        >>> key = PrivateKey.from_primes(e=17, p=61, q=53)
        >>> key.n, key.d
        (3233, 2753)
    """
    e: int
    d: int = field(repr=False)
    n: int
    p: int = field(repr=False)
    q: int = field(repr=False)
    dp: int = field(repr=False)
    dq: int = field(repr=False)
    q_inv: int = field(repr=False)

    def __post_init__(self):
        _check_public(self.e, self.n)

        p, q = self.p, self.q
        if p < 2 or q < 2:
            raise InvalidKey("RSA: primes must be greater than 1")
        if p == q:
            raise InvalidKey("RSA: p and q must be distinct")
        if p * q != self.n:
            raise InvalidKey("RSA: n != p * q")
        if gcd(self.e, p - 1) != 1 or gcd(self.e, q - 1) != 1:
            raise InvalidKey("RSA: e is not coprime to p-1 and q-1")

        # d only has to invert e modulo lcm(p-1, q-1)
        lam = (p - 1) * (q - 1) // gcd(p - 1, q - 1)
        if (self.d * self.e) % lam != 1:
            raise InvalidKey("RSA: d is not the inverse of e")
        if self.dp != self.d % (p - 1) or self.dq != self.d % (q - 1):
            raise InvalidKey("RSA: CRT exponents don't match d")
        if (self.q_inv * q) % p != 1:
            raise InvalidKey("RSA: q_inv is not the inverse of q mod p")

    @classmethod
    def from_bytes(cls, *, e: bytes, d: bytes, n: bytes, p: bytes, q: bytes,
                   dp: bytes, dq: bytes, q_inv: bytes) -> 'PrivateKey':
        """Build a private key from big-endian encoded fields."""
        return cls(
            e=decode_be(e), d=decode_be(d), n=decode_be(n),
            p=decode_be(p), q=decode_be(q),
            dp=decode_be(dp), dq=decode_be(dq), q_inv=decode_be(q_inv),
        )

    @classmethod
    def from_primes(cls, e: int, p: int, q: int) -> 'PrivateKey':
        """
        Derive the full CRT key from a public exponent and two primes.

        Computes:
            n     = p * q
            d     = e^-1 mod (p-1)(q-1)
            dp    = d mod (p-1)
            dq    = d mod (q-1)
            q_inv = q^-1 mod p

        Raises:
            InvalidKey: If p == q or e is not invertible mod (p-1)(q-1)
        """
        if p == q:
            raise InvalidKey("RSA: p and q must be distinct")

        n = p * q
        try:
            d = mod_inverse(e, (p - 1) * (q - 1))
            q_inv = mod_inverse(q, p)
        except ValueError as exc:
            raise InvalidKey(f"RSA: cannot derive key from primes ({exc})") from exc

        return cls(
            e=e, d=d, n=n, p=p, q=q,
            dp=d % (p - 1), dq=d % (q - 1), q_inv=q_inv,
        )

    @classmethod
    def from_prime_bytes(cls, *, e: bytes, p: bytes, q: bytes) -> 'PrivateKey':
        """Same as from_primes(), with big-endian encoded inputs."""
        return cls.from_primes(decode_be(e), decode_be(p), decode_be(q))

    def public_key(self) -> PublicKey:
        """Project the public half (e, n)."""
        return PublicKey(e=self.e, n=self.n)

    @property
    def bits(self) -> int:
        """Modulus size in bits."""
        return self.n.bit_length()

    @property
    def byte_size(self) -> int:
        """Modulus size in bytes, ceil(bits / 8)."""
        return cdiv(self.bits, 8)

    def validate(self, rng: Optional[RandomSource] = None) -> None:
        """
        Check that p and q are (probably) prime.

        The arithmetic invariants are already enforced at construction.

        Raises:
            InvalidKey: If either factor is composite
        """
        for name, value in (("p", self.p), ("q", self.q)):
            if not is_probable_prime(value, rng=rng):
                raise InvalidKey(f"RSA: {name} is not prime")
        logger.debug("Validated %d-bit private key", self.bits)


def format_private_key(key: PrivateKey) -> str:
    """Render every field of a private key, secrets included."""
    return "\n".join([
        "RSA key",
        f"  e : {key.e}",
        f"  d : {key.d}",
        f"  n : {key.n}",
        f"  p : {key.p}",
        f"  q : {key.q}",
        f"  dp: {key.dp}",
        f"  dq: {key.dq}",
        f"  q': {key.q_inv}",
    ])
